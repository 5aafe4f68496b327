"""Integration: Aptos and Sui contexts with call-trace arguments."""

from chainprobe import Daemon, IncidentSeverity
from chainprobe.chains.aptos import AptosCtx
from chainprobe.chains.sui import SuiCtx
from chainprobe.host import CollectionKind


class TestAptosPipeline:
    """Block -> transactions -> call traces -> arguments."""

    def test_relations(self, aptos_host):
        ctx = AptosCtx(aptos_host)

        txs = ctx.block_transactions(ctx.block)
        assert len(txs) == 1
        tx = txs[0]
        assert tx.hash == "tx_hash_1"

        traces = ctx.transaction_call_traces(tx)
        assert len(traces) == 1
        trace = traces[0]

        args = ctx.call_trace_args_of(trace)
        type_args = ctx.call_trace_type_args_of(trace)
        assert len(args) == 1
        assert len(type_args) == 1
        assert type_args[0].arg == "0x1::aptos_coin::AptosCoin"
        assert ctx.arg_value(args[0]).as_u64() == 42

        assert len(ctx.transaction_events(tx)) == 1

    def test_second_trace_argument(self, aptos_host):
        """The other trace's argument is a string."""
        ctx = AptosCtx(aptos_host)
        trace = ctx.call_traces[1]

        value = ctx.arg_value(ctx.call_trace_args_of(trace)[0])

        assert value.as_string() == "forty-two"
        assert value.as_u64() is None

    def test_only_touched_arguments_fetched(self, aptos_host):
        """Argument values are fetched lazily, one at a time."""
        ctx = AptosCtx(aptos_host)
        ctx.arg_value(ctx.call_trace_args[0])

        assert aptos_host.calls["fetch_argument_value:1"] == 1
        assert aptos_host.calls["fetch_argument_value:2"] == 0


class TestSuiPipeline:
    """Single transaction with events and call traces."""

    def test_transaction_events(self, sui_host, sui_tx):
        ctx = SuiCtx(sui_host)

        assert ctx.tx == sui_tx
        events = ctx.transaction_events(ctx.tx)
        assert len(events) == 1
        assert events[0].contents == bytes([0, 1, 2, 255])
        assert len(ctx.events) == 2

    def test_detector_over_arguments(self, sui_host):
        """Report every call whose first argument exceeds a threshold."""
        ctx = SuiCtx(sui_host)
        daemon = Daemon(sui_host)

        for trace in ctx.transaction_call_traces(ctx.tx):
            for arg in ctx.call_trace_args_of(trace):
                amount = ctx.arg_value(arg).as_u64()
                if amount is not None and amount > 10:
                    daemon.report_incident(
                        IncidentSeverity.WARNING,
                        f"{trace.transaction_module}::{trace.function} moved {amount}",
                        tx_hash=ctx.tx.digest,
                    )

        incidents = sui_host.decoded_incidents()
        assert len(incidents) == 1
        assert incidents[0]["message"] == "0x1::coin::transfer moved 42"
        assert sui_host.fetch_count(CollectionKind.CALL_TRACE_ARGS) == 1

    def test_empty_context(self, host):
        """No transaction at all."""
        ctx = SuiCtx(host)
        assert ctx.tx is None
        assert ctx.call_traces == ()
