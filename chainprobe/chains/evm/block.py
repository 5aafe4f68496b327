from dataclasses import dataclass
from typing import Any, List

from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.entity import Entity


@dataclass(frozen=True)
class Block(Entity):
    """EVM block header."""
    block_index: int
    hash: str
    parent_hash: str
    state_root: str
    nonce: int
    status: str
    timestamp: int
    block_reward: bytes
    fee_recipient: str
    total_difficulty: int
    size: float
    gas_used: int
    gas_limit: int

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> "Block":
        return cls(
            block_index=decoder.read_uint64(),
            hash=decoder.read_string(),
            parent_hash=decoder.read_string(),
            state_root=decoder.read_string(),
            nonce=decoder.read_uint64(),
            status=decoder.read_string(),
            timestamp=decoder.read_uint64(),
            block_reward=decoder.read_byte_array(),
            fee_recipient=decoder.read_string(),
            total_difficulty=decoder.read_uint64(),
            size=decoder.read_float64(),
            gas_used=decoder.read_uint64(),
            gas_limit=decoder.read_uint64(),
        )

    def to_row(self) -> List[Any]:
        return [
            self.block_index,
            self.hash,
            self.parent_hash,
            self.state_root,
            self.nonce,
            self.status,
            self.timestamp,
            bytes(self.block_reward),
            self.fee_recipient,
            self.total_difficulty,
            float(self.size),
            self.gas_used,
            self.gas_limit,
        ]
