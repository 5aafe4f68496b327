"""
chainprobe - blockchain data SDK for sandboxed analysis modules

Components:
- host: Host capability, byte-buffer bridge, in-memory host
- codec: msgpack cursor decoder, U256 / I256
- values: generic and EVM typed values
- chains: per-chain entities and contexts (evm, sui, aptos)
- incident: incident model and JSON encoder
- daemon: report / parameter / http / query / assert

Usage:
    from chainprobe import Daemon, IncidentSeverity
    from chainprobe.chains.evm import EvmCtx

    ctx = EvmCtx(host)
    daemon = Daemon(host)
    for tx in ctx.txs:
        if tx.gas_used > 1_000_000:
            daemon.report_incident(IncidentSeverity.WARNING, "High gas", tx_hash=tx.tx_hash)
"""

from chainprobe.config import DEFAULT_CONFIG, SdkConfig, configure_logging
from chainprobe.context import BlockchainCtx
from chainprobe.daemon import Daemon, DaemonParameter
from chainprobe.errors import (
    AbiSignatureError,
    ChainProbeError,
    DecodeError,
    HostCallError,
    HostMemoryError,
    IncidentEncodeError,
    UnknownValueTagError,
)
from chainprobe.http import HttpMethod, HttpRequest, HttpResponse
from chainprobe.incident import (
    BooleanDataValue,
    Incident,
    IncidentDataStruct,
    IncidentSeverity,
    ListDataValue,
    NullDataValue,
    NumberDataValue,
    StringDataValue,
    StructDataValue,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "SdkConfig",
    "configure_logging",
    "BlockchainCtx",
    "Daemon",
    "DaemonParameter",
    "AbiSignatureError",
    "ChainProbeError",
    "DecodeError",
    "HostCallError",
    "HostMemoryError",
    "IncidentEncodeError",
    "UnknownValueTagError",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "BooleanDataValue",
    "Incident",
    "IncidentDataStruct",
    "IncidentSeverity",
    "ListDataValue",
    "NullDataValue",
    "NumberDataValue",
    "StringDataValue",
    "StructDataValue",
]
