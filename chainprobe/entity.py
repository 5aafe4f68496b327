"""
Entity deserialization base.

A collection buffer is an array of entities; each entity is itself an
array whose elements are the entity's fields in a fixed order. The inner
array length is read and discarded: the field sequence is implied by the
entity type.
"""

from typing import Any, List

from chainprobe.codec.decoder import MsgPackDecoder


class Entity:
    """Mixin for immutable records decoded from host collections."""

    @classmethod
    def from_decoder(cls, decoder: MsgPackDecoder) -> Any:
        # consume the field count, the field sequence is fixed per type
        decoder.read_array_size()
        return cls.read_fields(decoder)

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> Any:
        raise NotImplementedError

    @classmethod
    def decode_all(cls, data: bytes) -> List[Any]:
        """Decode a whole collection buffer, preserving input order."""
        decoder = MsgPackDecoder(data)
        entities = decoder.read_array(cls.from_decoder)
        decoder.expect_end()
        return entities

    def to_row(self) -> List[Any]:
        """Fields in wire order, ready for msgpack (host side)."""
        raise NotImplementedError
