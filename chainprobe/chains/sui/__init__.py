"""
Sui chain data

One transaction per context, with its events and call traces.
"""

from typing import Optional, Tuple

from chainprobe.chains.move import CallTrace, CallTraceArg, CallTraceTypeArg, MoveCallTraceCtx
from chainprobe.host.base import CollectionKind

from .event import Event
from .transaction import Transaction


class SuiCtx(MoveCallTraceCtx):
    """Context over one Sui transaction."""

    @property
    def tx(self) -> Optional[Transaction]:
        """The transaction of the current context."""
        return self._first(CollectionKind.TRANSACTIONS, Transaction)

    @property
    def events(self) -> Tuple[Event, ...]:
        return self._collection(CollectionKind.EVENTS, Event)

    def transaction_events(self, tx: Transaction) -> Tuple[Event, ...]:
        return self._join(
            "tx.events", tx.seq,
            CollectionKind.EVENTS, Event,
            lambda event: event.tx_seq,
        )


__all__ = [
    "CallTrace",
    "CallTraceArg",
    "CallTraceTypeArg",
    "Event",
    "SuiCtx",
    "Transaction",
]
