"""
EVM chain data

Components:
- Block, Transaction, Event, CallTrace: records decoded from host collections
- TxInput: raw call input, ABI-decoded through the host
- EvmCtx: lazy per-invocation context with joins

Usage:
    ctx = EvmCtx(host)
    for tx in ctx.txs:
        for trace in ctx.transaction_call_traces(tx):
            ...
"""

from typing import List, Optional, Tuple

from chainprobe.context import BlockchainCtx
from chainprobe.host.base import CollectionKind
from chainprobe.values.evm import EvmValue

from .block import Block
from .call_trace import CallTrace
from .event import Event
from .transaction import Transaction
from .tx_input import TxInput, parse_signature


class EvmCtx(BlockchainCtx):
    """Context over one EVM block and its contents."""

    @property
    def block(self) -> Optional[Block]:
        """The block of the current context."""
        return self._first(CollectionKind.BLOCKS, Block)

    @property
    def txs(self) -> Tuple[Transaction, ...]:
        return self._collection(CollectionKind.TRANSACTIONS, Transaction)

    @property
    def events(self) -> Tuple[Event, ...]:
        return self._collection(CollectionKind.EVENTS, Event)

    @property
    def call_traces(self) -> Tuple[CallTrace, ...]:
        return self._collection(CollectionKind.CALL_TRACES, CallTrace)

    # =========================================================================
    # Relationships
    # =========================================================================

    def block_transactions(self, block: Block) -> Tuple[Transaction, ...]:
        return self._join(
            "block.txs", block.block_index,
            CollectionKind.TRANSACTIONS, Transaction,
            lambda tx: tx.block_index,
        )

    def transaction_events(self, tx: Transaction) -> Tuple[Event, ...]:
        return self._join(
            "tx.events", tx.tx_index,
            CollectionKind.EVENTS, Event,
            lambda event: event.tx_index,
        )

    def transaction_call_traces(self, tx: Transaction) -> Tuple[CallTrace, ...]:
        return self._join(
            "tx.call_traces", tx.tx_index,
            CollectionKind.CALL_TRACES, CallTrace,
            lambda trace: trace.tx_index,
        )

    # =========================================================================
    # Input Decoding
    # =========================================================================

    def parse_input(self, tx_input: TxInput, abi: str) -> Optional[List[EvmValue]]:
        """Decode transaction or call-trace input against an ABI signature."""
        return tx_input.parse(abi, self.bridge)


__all__ = [
    "Block",
    "CallTrace",
    "Event",
    "EvmCtx",
    "Transaction",
    "TxInput",
    "parse_signature",
]
