"""
Host capability.

Everything the SDK needs from the embedding environment goes through one
injected Host object. Buffers are identified by packed handles (see
bridge.pack_handle); the SDK copies them out with read_memory.
"""

from abc import ABC, abstractmethod

from chainprobe.errors import HostCallError


class CollectionKind:
    """Names of the entity collections a host can serve."""
    BLOCKS = "blocks"
    TRANSACTIONS = "transactions"
    EVENTS = "events"
    CALL_TRACES = "call_traces"
    CALL_TRACE_ARGS = "call_trace_args"
    CALL_TRACE_TYPE_ARGS = "call_trace_type_args"

    ALL = (
        BLOCKS,
        TRANSACTIONS,
        EVENTS,
        CALL_TRACES,
        CALL_TRACE_ARGS,
        CALL_TRACE_TYPE_ARGS,
    )


class Host(ABC):
    """Interface of the embedding host."""

    @abstractmethod
    def fetch_collection(self, kind: str) -> int:
        """Return a packed handle to the msgpack-encoded collection."""

    @abstractmethod
    def fetch_argument_value(self, seq: int) -> int:
        """Return a packed handle to one encoded call-trace argument value."""

    @abstractmethod
    def parse_input(self, abi: str, base64_data: str) -> int:
        """Decode transaction input against abi; 0 when the selector does not match."""

    @abstractmethod
    def read_memory(self, offset: int, length: int) -> bytes:
        """Copy length bytes starting at offset."""

    @abstractmethod
    def emit_incident(self, text: str) -> None:
        """Hand a fully serialized incident to the host."""

    # Collaborators outside the decoding core. Hosts that do not offer them
    # keep these defaults.

    def http(self, request_json: str) -> str:
        raise HostCallError("host does not support http requests")

    def parameter(self, key: str) -> str:
        raise HostCallError("host does not support daemon parameters")

    def query(self, sql: str) -> str:
        raise HostCallError("host does not support queries")

    def assert_condition(self, ok: bool, message: str) -> None:
        raise HostCallError("host does not support assertions")
