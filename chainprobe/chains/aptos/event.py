from dataclasses import dataclass
from typing import Any, List

from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.entity import Entity


@dataclass(frozen=True)
class Event(Entity):
    tx_seq: int
    key: str
    sequence_number: int
    event_type: str
    data: bytes

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> "Event":
        return cls(
            tx_seq=decoder.read_uint64(),
            key=decoder.read_string(),
            sequence_number=decoder.read_uint64(),
            event_type=decoder.read_string(),
            data=decoder.read_byte_array(),
        )

    def to_row(self) -> List[Any]:
        return [self.tx_seq, self.key, self.sequence_number, self.event_type, bytes(self.data)]
