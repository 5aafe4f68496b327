"""
Aptos chain data

One block per context with its transactions, events and call traces.

Relationships:
- block -> transactions   (tx.block_hash == block.hash)
- tx -> events            (event.tx_seq == tx.seq)
- tx -> call traces       (trace.tx_seq == tx.seq)
- call trace -> args / type args (call_trace_seq == trace.seq)
"""

from typing import Optional, Tuple

from chainprobe.chains.move import CallTrace, CallTraceArg, CallTraceTypeArg, MoveCallTraceCtx
from chainprobe.host.base import CollectionKind

from .block import Block
from .event import Event
from .transaction import Transaction


class AptosCtx(MoveCallTraceCtx):
    """Context over one Aptos block."""

    @property
    def block(self) -> Optional[Block]:
        return self._first(CollectionKind.BLOCKS, Block)

    @property
    def txs(self) -> Tuple[Transaction, ...]:
        return self._collection(CollectionKind.TRANSACTIONS, Transaction)

    @property
    def events(self) -> Tuple[Event, ...]:
        return self._collection(CollectionKind.EVENTS, Event)

    def block_transactions(self, block: Block) -> Tuple[Transaction, ...]:
        return self._join(
            "block.txs", block.hash,
            CollectionKind.TRANSACTIONS, Transaction,
            lambda tx: tx.block_hash,
        )

    def transaction_events(self, tx: Transaction) -> Tuple[Event, ...]:
        return self._join(
            "tx.events", tx.seq,
            CollectionKind.EVENTS, Event,
            lambda event: event.tx_seq,
        )


__all__ = [
    "AptosCtx",
    "Block",
    "CallTrace",
    "CallTraceArg",
    "CallTraceTypeArg",
    "Event",
    "Transaction",
]
