from dataclasses import dataclass
from typing import Any, List

from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.entity import Entity


@dataclass(frozen=True)
class Transaction(Entity):
    """Aptos user transaction. block_hash links it to its block."""
    seq: int
    block_hash: str
    hash: str
    event_root_hash: str
    state_change_hash: str
    gas_used: int
    max_gas_amount: int
    gas_unit_price: int
    expiration_timestamp_secs: int
    status: int
    sender: str
    sequence_number: int

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> "Transaction":
        return cls(
            seq=decoder.read_uint64(),
            block_hash=decoder.read_string(),
            hash=decoder.read_string(),
            event_root_hash=decoder.read_string(),
            state_change_hash=decoder.read_string(),
            gas_used=decoder.read_uint64(),
            max_gas_amount=decoder.read_uint64(),
            gas_unit_price=decoder.read_uint64(),
            expiration_timestamp_secs=decoder.read_uint64(),
            status=decoder.read_uint64(),
            sender=decoder.read_string(),
            sequence_number=decoder.read_uint64(),
        )

    def to_row(self) -> List[Any]:
        return [
            self.seq,
            self.block_hash,
            self.hash,
            self.event_root_hash,
            self.state_change_hash,
            self.gas_used,
            self.max_gas_amount,
            self.gas_unit_price,
            self.expiration_timestamp_secs,
            self.status,
            self.sender,
            self.sequence_number,
        ]
