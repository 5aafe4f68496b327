from dataclasses import dataclass
from typing import Any, List

from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.entity import Entity


@dataclass(frozen=True)
class Block(Entity):
    hash: str
    epoch: int
    timestamp_usecs: int

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> "Block":
        return cls(
            hash=decoder.read_string(),
            epoch=decoder.read_uint64(),
            timestamp_usecs=decoder.read_uint64(),
        )

    def to_row(self) -> List[Any]:
        return [self.hash, self.epoch, self.timestamp_usecs]
