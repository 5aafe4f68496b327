"""
Call traces shared by Move-based chains (Sui, Aptos).

A call trace belongs to a transaction (tx_seq) and owns its value
arguments and type arguments (call_trace_seq). Argument values are not
part of the collection: each one is fetched from the host by seq, on
first access.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.context import BlockchainCtx
from chainprobe.entity import Entity
from chainprobe.host.base import CollectionKind
from chainprobe.values.generic import Value


@dataclass(frozen=True)
class CallTrace(Entity):
    seq: int
    tx_seq: int
    depth: int
    call_type: int
    gas_used: int
    transaction_module: Optional[str]
    function: str

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> "CallTrace":
        return cls(
            seq=decoder.read_uint64(),
            tx_seq=decoder.read_uint64(),
            depth=decoder.read_uint32(),
            call_type=decoder.read_uint8(),
            gas_used=decoder.read_uint64(),
            transaction_module=decoder.read_optional(decoder.read_string),
            function=decoder.read_string(),
        )

    def to_row(self) -> List[Any]:
        return [
            self.seq,
            self.tx_seq,
            self.depth,
            self.call_type,
            self.gas_used,
            self.transaction_module,
            self.function,
        ]


@dataclass(frozen=True)
class CallTraceTypeArg(Entity):
    seq: int
    call_trace_seq: int
    arg: str

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> "CallTraceTypeArg":
        return cls(
            seq=decoder.read_uint64(),
            call_trace_seq=decoder.read_uint64(),
            arg=decoder.read_string(),
        )

    def to_row(self) -> List[Any]:
        return [self.seq, self.call_trace_seq, self.arg]


@dataclass(frozen=True)
class CallTraceArg(Entity):
    """Argument reference; the value itself is fetched through the context."""
    seq: int
    call_trace_seq: int

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> "CallTraceArg":
        return cls(
            seq=decoder.read_uint64(),
            call_trace_seq=decoder.read_uint64(),
        )

    def to_row(self) -> List[Any]:
        return [self.seq, self.call_trace_seq]


class MoveCallTraceCtx(BlockchainCtx):
    """Call-trace collections and joins common to Move chains."""

    @property
    def call_traces(self) -> Tuple[CallTrace, ...]:
        return self._collection(CollectionKind.CALL_TRACES, CallTrace)

    @property
    def call_trace_args(self) -> Tuple[CallTraceArg, ...]:
        return self._collection(CollectionKind.CALL_TRACE_ARGS, CallTraceArg)

    @property
    def call_trace_type_args(self) -> Tuple[CallTraceTypeArg, ...]:
        return self._collection(CollectionKind.CALL_TRACE_TYPE_ARGS, CallTraceTypeArg)

    def transaction_call_traces(self, tx: Any) -> Tuple[CallTrace, ...]:
        return self._join(
            "tx.call_traces", tx.seq,
            CollectionKind.CALL_TRACES, CallTrace,
            lambda trace: trace.tx_seq,
        )

    def call_trace_args_of(self, trace: CallTrace) -> Tuple[CallTraceArg, ...]:
        return self._join(
            "call_trace.args", trace.seq,
            CollectionKind.CALL_TRACE_ARGS, CallTraceArg,
            lambda arg: arg.call_trace_seq,
        )

    def call_trace_type_args_of(self, trace: CallTrace) -> Tuple[CallTraceTypeArg, ...]:
        return self._join(
            "call_trace.type_args", trace.seq,
            CollectionKind.CALL_TRACE_TYPE_ARGS, CallTraceTypeArg,
            lambda arg: arg.call_trace_seq,
        )

    def arg_value(self, arg: CallTraceArg) -> Value:
        """Decoded value of a call-trace argument (fetched once per seq)."""
        return self._argument_value(arg.seq)
