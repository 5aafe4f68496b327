from dataclasses import dataclass
from typing import Any, List

from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.entity import Entity


@dataclass(frozen=True)
class Transaction(Entity):
    """Sui transaction. time is signed (milliseconds since epoch)."""
    seq: int
    digest: str
    time: int
    gas_used: int
    gas_computation_cost: int
    gas_storage_cost: int
    gas_budget: int
    sender: str
    kind: str

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> "Transaction":
        return cls(
            seq=decoder.read_uint64(),
            digest=decoder.read_string(),
            time=decoder.read_int64(),
            gas_used=decoder.read_uint64(),
            gas_computation_cost=decoder.read_uint64(),
            gas_storage_cost=decoder.read_uint64(),
            gas_budget=decoder.read_uint64(),
            sender=decoder.read_string(),
            kind=decoder.read_string(),
        )

    def to_row(self) -> List[Any]:
        return [
            self.seq,
            self.digest,
            self.time,
            self.gas_used,
            self.gas_computation_cost,
            self.gas_storage_cost,
            self.gas_budget,
            self.sender,
            self.kind,
        ]
