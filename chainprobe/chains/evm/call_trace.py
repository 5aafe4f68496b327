from dataclasses import dataclass
from typing import Any, List

from chainprobe.chains.evm.tx_input import TxInput
from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.entity import Entity


@dataclass(frozen=True)
class CallTrace(Entity):
    """One internal call of an EVM transaction."""
    seq: int
    tx_index: int
    block_index: int
    depth: int
    call_type: str
    from_address: str
    to_address: str
    value: int
    gas_limit: int
    gas_used: int
    input: TxInput

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> "CallTrace":
        return cls(
            seq=decoder.read_uint32(),
            tx_index=decoder.read_uint32(),
            block_index=decoder.read_uint64(),
            depth=decoder.read_uint32(),
            call_type=decoder.read_string(),
            from_address=decoder.read_string(),
            to_address=decoder.read_string(),
            value=decoder.read_uint64(),
            gas_limit=decoder.read_uint64(),
            gas_used=decoder.read_uint64(),
            input=TxInput(decoder.read_uint8_array()),
        )

    def to_row(self) -> List[Any]:
        return [
            self.seq,
            self.tx_index,
            self.block_index,
            self.depth,
            self.call_type,
            self.from_address,
            self.to_address,
            self.value,
            self.gas_limit,
            self.gas_used,
            list(self.input.data),
        ]
