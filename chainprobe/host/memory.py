"""
In-Memory Host

Host implementation that keeps everything in-process.

Collections and values are msgpack-packed into a simulated linear memory
and handed out as packed handles, exactly as an embedding runtime would.
Every host call is counted so callers can verify caching behaviour.

Use cases:
- Unit testing without an embedding runtime
- Replaying recorded collections offline
"""

import json
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import msgpack

from chainprobe.errors import HostCallError, HostMemoryError
from chainprobe.host.base import Host
from chainprobe.host.bridge import pack_handle

EMPTY_ARRAY = msgpack.packb([])


@dataclass
class InMemoryHostConfig:
    """Configuration for the in-memory host."""

    # Bytes reserved at the start of memory so no buffer sits at offset 0
    reserved_prefix: int = 8

    # Raise instead of serving an empty collection for unregistered kinds
    strict_collections: bool = False


@dataclass
class HttpExchange:
    """One recorded HTTP round trip."""
    request: Dict[str, Any]
    response: Dict[str, Any]


class InMemoryHost(Host):
    """
    Host backed by a bytearray.

    Usage:
        host = InMemoryHost()
        host.set_entities(CollectionKind.TRANSACTIONS, txs)
        ctx = EvmCtx(host)
        ctx.txs
        assert host.calls["fetch_collection:transactions"] == 1
    """

    def __init__(self, config: Optional[InMemoryHostConfig] = None):
        self.config = config or InMemoryHostConfig()
        self._logger = logging.getLogger("InMemoryHost")

        self.memory = bytearray(self.config.reserved_prefix)
        self.calls: Counter = Counter()

        self._collections: Dict[str, int] = {}
        self._argument_values: Dict[int, int] = {}
        self._parsed_inputs: Dict[Tuple[str, str], int] = {}

        self.incidents: List[str] = []
        self.parameters: Dict[str, str] = {}
        self.query_results: Dict[str, List[Dict[str, Any]]] = {}
        self.http_handler: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None
        self.http_log: List[HttpExchange] = []
        self.failed_assertions: List[str] = []

    # =========================================================================
    # Memory
    # =========================================================================

    def store(self, data: bytes) -> int:
        """Append data to memory and return its handle."""
        offset = len(self.memory)
        self.memory.extend(data)
        return pack_handle(offset, len(data))

    def read_memory(self, offset: int, length: int) -> bytes:
        self.calls["read_memory"] += 1
        if offset < 0 or length < 0 or offset + length > len(self.memory):
            raise HostMemoryError(
                f"read of {length} bytes at {offset} outside memory of {len(self.memory)} bytes"
            )
        return bytes(self.memory[offset:offset + length])

    # =========================================================================
    # Registration
    # =========================================================================

    def set_collection_bytes(self, kind: str, data: bytes) -> None:
        self._collections[kind] = self.store(data)

    def set_rows(self, kind: str, rows: Iterable[List[Any]]) -> None:
        """Register a collection given as rows of wire-ordered fields."""
        self.set_collection_bytes(kind, msgpack.packb(list(rows), use_bin_type=True))

    def set_entities(self, kind: str, entities: Iterable[Any]) -> None:
        """Register a collection of entity records (anything with to_row())."""
        self.set_rows(kind, [entity.to_row() for entity in entities])

    def set_argument_value(self, seq: int, data: bytes) -> None:
        """Register the encoded value of call-trace argument seq."""
        self._argument_values[seq] = self.store(data)

    def set_parsed_input(self, abi: str, base64_data: str, data: bytes) -> None:
        """Register the decoded-values buffer returned for (abi, input)."""
        self._parsed_inputs[(abi, base64_data)] = self.store(data)

    # =========================================================================
    # Host Interface
    # =========================================================================

    def fetch_collection(self, kind: str) -> int:
        self.calls[f"fetch_collection:{kind}"] += 1
        handle = self._collections.get(kind)
        if handle is None:
            if self.config.strict_collections:
                raise HostCallError(f"collection {kind!r} is not available")
            self._logger.debug(f"Serving empty collection for {kind}")
            handle = self.store(EMPTY_ARRAY)
            self._collections[kind] = handle
        return handle

    def fetch_argument_value(self, seq: int) -> int:
        self.calls[f"fetch_argument_value:{seq}"] += 1
        handle = self._argument_values.get(seq)
        if handle is None:
            raise HostCallError(f"failed to find call trace arg {seq}")
        return handle

    def parse_input(self, abi: str, base64_data: str) -> int:
        self.calls["parse_input"] += 1
        return self._parsed_inputs.get((abi, base64_data), 0)

    def emit_incident(self, text: str) -> None:
        self.calls["emit_incident"] += 1
        self.incidents.append(text)

    def http(self, request_json: str) -> str:
        self.calls["http"] += 1
        request = json.loads(request_json)
        if self.http_handler is None:
            response = {"status": 0, "error": "no http handler configured", "headers": {}}
        else:
            response = self.http_handler(request)
        self.http_log.append(HttpExchange(request=request, response=response))
        return json.dumps(response)

    def parameter(self, key: str) -> str:
        self.calls["parameter"] += 1
        if key not in self.parameters:
            raise HostCallError(f"parameter {key!r} is not set")
        return self.parameters[key]

    def query(self, sql: str) -> str:
        self.calls["query"] += 1
        return json.dumps(self.query_results.get(sql, []))

    def assert_condition(self, ok: bool, message: str) -> None:
        self.calls["assert"] += 1
        if not ok:
            self.failed_assertions.append(message)

    # =========================================================================
    # Inspection
    # =========================================================================

    def fetch_count(self, kind: str) -> int:
        return self.calls[f"fetch_collection:{kind}"]

    def decoded_incidents(self) -> List[Dict[str, Any]]:
        return [json.loads(text) for text in self.incidents]
