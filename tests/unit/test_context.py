"""Unit tests for BlockchainCtx caching and joins."""

import msgpack
import pytest

from chainprobe.chains.aptos import AptosCtx
from chainprobe.chains.evm import EvmCtx
from chainprobe.errors import DecodeError, HostCallError
from chainprobe.host import CollectionKind
from chainprobe.values import Value


class TestCollectionCache:
    """Collections are fetched once per context."""

    def test_fetched_once(self, evm_host):
        """Repeated access hits the cache."""
        ctx = EvmCtx(evm_host)
        first = ctx.txs
        second = ctx.txs

        assert first is second
        assert len(first) == 2
        assert evm_host.fetch_count(CollectionKind.TRANSACTIONS) == 1

    def test_lazy(self, evm_host):
        """Nothing is fetched until first access."""
        ctx = EvmCtx(evm_host)
        assert not ctx.is_loaded(CollectionKind.EVENTS)
        assert evm_host.fetch_count(CollectionKind.EVENTS) == 0

        ctx.events
        assert ctx.is_loaded(CollectionKind.EVENTS)

    def test_contexts_do_not_share_cache(self, evm_host):
        """Each context fetches for itself."""
        EvmCtx(evm_host).txs
        EvmCtx(evm_host).txs
        assert evm_host.fetch_count(CollectionKind.TRANSACTIONS) == 2

    def test_empty_collection_cached(self, host):
        """An empty collection is cached like any other."""
        ctx = EvmCtx(host)
        assert ctx.events == ()
        assert ctx.events == ()
        assert host.fetch_count(CollectionKind.EVENTS) == 1

    def test_missing_block(self, host):
        """No block in the collection gives None."""
        assert EvmCtx(host).block is None

    def test_decode_failure_propagates(self, host):
        """A malformed collection raises and stays unloaded."""
        host.set_collection_bytes(CollectionKind.TRANSACTIONS, msgpack.packb(["not a row"]))
        ctx = EvmCtx(host)

        with pytest.raises(DecodeError):
            ctx.txs
        assert not ctx.is_loaded(CollectionKind.TRANSACTIONS)


class TestJoins:
    """Parent-to-children relations."""

    def test_join_cached_per_parent(self, evm_host):
        """The same parent returns the same tuple without rescanning."""
        ctx = EvmCtx(evm_host)
        tx = ctx.txs[0]

        first = ctx.transaction_call_traces(tx)
        second = ctx.transaction_call_traces(tx)

        assert first is second
        assert [trace.seq for trace in first] == [0, 1]
        assert ctx.stats()["joins_cached"] == 1

    def test_join_without_children(self, evm_host):
        """A parent with no children yields an empty tuple."""
        ctx = EvmCtx(evm_host)
        assert ctx.transaction_events(ctx.txs[1]) == ()

    def test_join_keys_are_per_relation(self, evm_host):
        """Different relations on the same key are cached separately."""
        ctx = EvmCtx(evm_host)
        tx = ctx.txs[0]

        assert len(ctx.transaction_events(tx)) == 1
        assert len(ctx.transaction_call_traces(tx)) == 2
        assert ctx.stats()["joins_cached"] == 2

    def test_join_loads_child_collection_once(self, evm_host):
        """Joining several parents fetches the child collection once."""
        ctx = EvmCtx(evm_host)
        for tx in ctx.txs:
            ctx.transaction_events(tx)
        assert evm_host.fetch_count(CollectionKind.EVENTS) == 1


class TestArgumentValues:
    """Lazily fetched call-trace argument values."""

    def test_fetched_once_per_seq(self, aptos_host):
        """Argument values are decoded once and cached."""
        ctx = AptosCtx(aptos_host)
        arg = ctx.call_trace_args[0]

        assert ctx.arg_value(arg) == Value.of_u64(42)
        assert ctx.arg_value(arg) is ctx.arg_value(arg)
        assert aptos_host.calls["fetch_argument_value:1"] == 1

    def test_missing_value(self, host):
        """An argument the host does not know about raises."""
        host.set_rows(CollectionKind.CALL_TRACE_ARGS, [[77, 1]])
        ctx = AptosCtx(host)

        with pytest.raises(HostCallError):
            ctx.arg_value(ctx.call_trace_args[0])

    def test_stats(self, aptos_host):
        """stats() reports what the context holds."""
        ctx = AptosCtx(aptos_host)
        ctx.arg_value(ctx.call_trace_args[1])

        stats = ctx.stats()
        assert stats["collections"] == {CollectionKind.CALL_TRACE_ARGS: 2}
        assert stats["argument_values_cached"] == 1
