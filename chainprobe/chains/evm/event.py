from dataclasses import dataclass
from typing import Any, List

from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.entity import Entity


@dataclass(frozen=True)
class Event(Entity):
    """EVM log entry. Topics and data travel as arrays of byte values."""
    index: int
    tx_index: int
    tx_hash: str
    block_number: int
    block_hash: str
    address: str
    topic0: bytes
    topic1: bytes
    topic2: bytes
    topic3: bytes
    topic4: bytes
    data: bytes

    @property
    def topics(self) -> List[bytes]:
        """Non-empty topics in order."""
        return [t for t in (self.topic0, self.topic1, self.topic2, self.topic3, self.topic4) if t]

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> "Event":
        return cls(
            index=decoder.read_uint32(),
            tx_index=decoder.read_uint32(),
            tx_hash=decoder.read_string(),
            block_number=decoder.read_uint64(),
            block_hash=decoder.read_string(),
            address=decoder.read_string(),
            topic0=decoder.read_uint8_array(),
            topic1=decoder.read_uint8_array(),
            topic2=decoder.read_uint8_array(),
            topic3=decoder.read_uint8_array(),
            topic4=decoder.read_uint8_array(),
            data=decoder.read_uint8_array(),
        )

    def to_row(self) -> List[Any]:
        return [
            self.index,
            self.tx_index,
            self.tx_hash,
            self.block_number,
            self.block_hash,
            self.address,
            list(self.topic0),
            list(self.topic1),
            list(self.topic2),
            list(self.topic3),
            list(self.topic4),
            list(self.data),
        ]
