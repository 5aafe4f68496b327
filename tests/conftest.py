"""Shared fixtures: an in-memory host and sample records for each chain."""

import pytest

from chainprobe.chains import aptos, evm, sui
from chainprobe.chains.evm import TxInput
from chainprobe.chains.move import CallTrace, CallTraceArg, CallTraceTypeArg
from chainprobe.host import CollectionKind, InMemoryHost
from chainprobe.values import Value

TX_HASH_1 = "0x8d2b4d6b1f30d1c8f5b1c0a3f1c1f1b6e8a9d4c2b7e3f5a1d0c9b8a7f6e5d4c3"
TX_HASH_2 = "0x1f0e2d3c4b5a69788796a5b4c3d2e1f00f1e2d3c4b5a69788796a5b4c3d2e1f0"
BLOCK_HASH = "0x5e4c3d2b1a09f8e7d6c5b4a3928170605f4e3d2c1b0a99887766554433221100"


@pytest.fixture
def host():
    return InMemoryHost()


# =============================================================================
# EVM
# =============================================================================

@pytest.fixture
def evm_block():
    return evm.Block(
        block_index=17_000_000,
        hash=BLOCK_HASH,
        parent_hash="0x" + "ab" * 32,
        state_root="0x" + "cd" * 32,
        nonce=0,
        status="finalized",
        timestamp=1_681_338_455,
        block_reward=bytes([0x0D, 0xE0, 0xB6, 0xB3]),
        fee_recipient="0x" + "11" * 20,
        total_difficulty=58_750_003_716_598_352,
        size=72_341.0,
        gas_used=29_998_765,
        gas_limit=30_000_000,
    )


@pytest.fixture
def evm_txs():
    return [
        evm.Transaction(
            tx_index=0,
            tx_hash=TX_HASH_1,
            tx_type=2,
            nonce=7,
            status=1,
            block_index=17_000_000,
            from_address="0x" + "aa" * 20,
            to_address="0x" + "bb" * 20,
            value=1_000_000_000_000_000_000,
            fee=420_000_000_000_000,
            gas_price=20_000_000_000,
            gas_limit=100_000,
            gas_used=21_000,
            input=TxInput(bytes.fromhex("a9059cbb") + bytes(64)),
            size=180.0,
        ),
        evm.Transaction(
            tx_index=1,
            tx_hash=TX_HASH_2,
            tx_type=0,
            nonce=0,
            status=1,
            block_index=17_000_000,
            from_address="0x" + "cc" * 20,
            to_address=None,
            value=0,
            fee=1_000_000,
            gas_price=1,
            gas_limit=2_000_000,
            gas_used=1_000_000,
            input=TxInput(b""),
            size=2_048.0,
        ),
    ]


@pytest.fixture
def evm_events():
    return [
        evm.Event(
            index=0,
            tx_index=0,
            tx_hash=TX_HASH_1,
            block_number=17_000_000,
            block_hash=BLOCK_HASH,
            address="0x" + "bb" * 20,
            topic0=bytes.fromhex("ddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"),
            topic1=bytes(32),
            topic2=bytes([0xFF] * 32),
            topic3=b"",
            topic4=b"",
            data=bytes([1, 2, 3, 250]),
        ),
    ]


@pytest.fixture
def evm_call_traces():
    return [
        evm.CallTrace(
            seq=0,
            tx_index=0,
            block_index=17_000_000,
            depth=0,
            call_type="CALL",
            from_address="0x" + "aa" * 20,
            to_address="0x" + "bb" * 20,
            value=0,
            gas_limit=100_000,
            gas_used=21_000,
            input=TxInput(bytes.fromhex("a9059cbb") + bytes(64)),
        ),
        evm.CallTrace(
            seq=1,
            tx_index=0,
            block_index=17_000_000,
            depth=1,
            call_type="STATICCALL",
            from_address="0x" + "bb" * 20,
            to_address="0x" + "dd" * 20,
            value=0,
            gas_limit=50_000,
            gas_used=2_600,
            input=TxInput(bytes([0x70, 0xA0, 0x82, 0x31])),
        ),
    ]


@pytest.fixture
def evm_host(host, evm_block, evm_txs, evm_events, evm_call_traces):
    host.set_entities(CollectionKind.BLOCKS, [evm_block])
    host.set_entities(CollectionKind.TRANSACTIONS, evm_txs)
    host.set_entities(CollectionKind.EVENTS, evm_events)
    host.set_entities(CollectionKind.CALL_TRACES, evm_call_traces)
    return host


# =============================================================================
# Move chains
# =============================================================================

@pytest.fixture
def move_call_traces():
    return [
        CallTrace(
            seq=1,
            tx_seq=1,
            depth=0,
            call_type=0,
            gas_used=42,
            transaction_module="0x1::coin",
            function="transfer",
        ),
        CallTrace(
            seq=2,
            tx_seq=2,
            depth=1,
            call_type=1,
            gas_used=7,
            transaction_module=None,
            function="script",
        ),
    ]


@pytest.fixture
def move_call_trace_args():
    return [
        CallTraceArg(seq=1, call_trace_seq=1),
        CallTraceArg(seq=2, call_trace_seq=2),
    ]


@pytest.fixture
def move_call_trace_type_args():
    return [
        CallTraceTypeArg(seq=1, call_trace_seq=1, arg="0x1::aptos_coin::AptosCoin"),
        CallTraceTypeArg(seq=2, call_trace_seq=2, arg="u64"),
    ]


def _register_move_call_traces(host, traces, args, type_args):
    host.set_entities(CollectionKind.CALL_TRACES, traces)
    host.set_entities(CollectionKind.CALL_TRACE_ARGS, args)
    host.set_entities(CollectionKind.CALL_TRACE_TYPE_ARGS, type_args)
    host.set_argument_value(1, Value.of_u64(42).to_bytes())
    host.set_argument_value(2, Value.of_string("forty-two").to_bytes())


@pytest.fixture
def aptos_block():
    return aptos.Block(hash="block_hash", epoch=99, timestamp_usecs=1_681_338_455_000_000)


@pytest.fixture
def aptos_txs():
    return [
        aptos.Transaction(
            seq=1,
            block_hash="block_hash",
            hash="tx_hash_1",
            event_root_hash="event_root_hash",
            state_change_hash="state_change_hash",
            gas_used=42,
            max_gas_amount=1_000,
            gas_unit_price=100,
            expiration_timestamp_secs=1_681_339_000,
            status=1,
            sender="0x1",
            sequence_number=0,
        ),
        aptos.Transaction(
            seq=2,
            block_hash="other_block_hash",
            hash="tx_hash_2",
            event_root_hash="event_root_hash",
            state_change_hash="state_change_hash",
            gas_used=7,
            max_gas_amount=1_000,
            gas_unit_price=100,
            expiration_timestamp_secs=1_681_339_000,
            status=1,
            sender="0x2",
            sequence_number=3,
        ),
    ]


@pytest.fixture
def aptos_events():
    return [
        aptos.Event(
            tx_seq=1,
            key="0x1::coin::DepositEvent",
            sequence_number=0,
            event_type="0x1::coin::DepositEvent",
            data=b'{"amount":"42"}',
        ),
    ]


@pytest.fixture
def aptos_host(host, aptos_block, aptos_txs, aptos_events,
               move_call_traces, move_call_trace_args, move_call_trace_type_args):
    host.set_entities(CollectionKind.BLOCKS, [aptos_block])
    host.set_entities(CollectionKind.TRANSACTIONS, aptos_txs)
    host.set_entities(CollectionKind.EVENTS, aptos_events)
    _register_move_call_traces(host, move_call_traces, move_call_trace_args, move_call_trace_type_args)
    return host


@pytest.fixture
def sui_tx():
    return sui.Transaction(
        seq=1,
        digest="8Nq3bQzMj6W5f1sJ1iXJ5n2kT8xYvJ3m4o6s7Qw9rTz",
        time=-1,
        gas_used=1_000,
        gas_computation_cost=750,
        gas_storage_cost=250,
        gas_budget=10_000,
        sender="0x" + "5" * 64,
        kind="ProgrammableTransaction",
    )


@pytest.fixture
def sui_events():
    return [
        sui.Event(
            tx_seq=1,
            package_id="0x2",
            transaction_module="pay",
            sender="0x" + "5" * 64,
            event_type="0x2::coin::CoinCreated",
            contents=bytes([0, 1, 2, 255]),
        ),
        sui.Event(
            tx_seq=9,
            package_id="0x2",
            transaction_module="pay",
            sender="0x" + "6" * 64,
            event_type="0x2::coin::CoinCreated",
            contents=b"",
        ),
    ]


@pytest.fixture
def sui_host(host, sui_tx, sui_events,
             move_call_traces, move_call_trace_args, move_call_trace_type_args):
    host.set_entities(CollectionKind.TRANSACTIONS, [sui_tx])
    host.set_entities(CollectionKind.EVENTS, sui_events)
    _register_move_call_traces(host, move_call_traces, move_call_trace_args, move_call_trace_type_args)
    return host
