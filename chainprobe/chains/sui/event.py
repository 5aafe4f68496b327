from dataclasses import dataclass
from typing import Any, List

from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.entity import Entity


@dataclass(frozen=True)
class Event(Entity):
    tx_seq: int
    package_id: str
    transaction_module: str
    sender: str
    event_type: str
    contents: bytes

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> "Event":
        return cls(
            tx_seq=decoder.read_uint64(),
            package_id=decoder.read_string(),
            transaction_module=decoder.read_string(),
            sender=decoder.read_string(),
            event_type=decoder.read_string(),
            contents=decoder.read_byte_array(),
        )

    def to_row(self) -> List[Any]:
        return [
            self.tx_seq,
            self.package_id,
            self.transaction_module,
            self.sender,
            self.event_type,
            bytes(self.contents),
        ]
