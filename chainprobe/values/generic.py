"""
Chain-agnostic Value model.

Dynamically typed values produced by Move-based chains (call-trace
arguments). Closed set of variants:

    b    -> bool
    u64  -> unsigned 64-bit integer
    s    -> string
    l    -> list of values
    st   -> struct: type name + ordered fields

Accessors never reinterpret: as_<kind>() returns None for any other kind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import msgpack

from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.errors import DecodeError, UnknownValueTagError
from chainprobe.values.tagged import read_tagged


class ValueKind(Enum):
    """Variant tags as written on the wire."""
    BOOL = "b"
    U64 = "u64"
    STRING = "s"
    LIST = "l"
    STRUCT = "st"


_TAG_TO_KIND = {kind.value: kind for kind in ValueKind}


@dataclass(frozen=True)
class StructValue:
    """Named struct with fields in insertion order."""
    type_name: str
    fields: Dict[str, "Value"]

    def __hash__(self) -> int:
        # dict equality ignores field order, so the hash must too
        return hash((self.type_name, frozenset(self.fields.items())))

    def get(self, name: str) -> Optional["Value"]:
        return self.fields.get(name)

    def has_field(self, name: str) -> bool:
        return name in self.fields


@dataclass(frozen=True)
class Value:
    kind: ValueKind
    payload: Any

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def of_bool(cls, value: bool) -> "Value":
        return cls(ValueKind.BOOL, bool(value))

    @classmethod
    def of_u64(cls, value: int) -> "Value":
        if not 0 <= value <= 0xFFFFFFFFFFFFFFFF:
            raise ValueError(f"{value} does not fit u64")
        return cls(ValueKind.U64, value)

    @classmethod
    def of_string(cls, value: str) -> "Value":
        return cls(ValueKind.STRING, value)

    @classmethod
    def of_list(cls, values) -> "Value":
        return cls(ValueKind.LIST, tuple(values))

    @classmethod
    def of_struct(cls, type_name: str, fields: Dict[str, "Value"]) -> "Value":
        return cls(ValueKind.STRUCT, StructValue(type_name, dict(fields)))

    # =========================================================================
    # Decoding
    # =========================================================================

    @classmethod
    def from_bytes(cls, data: bytes, strict: bool = True) -> "Value":
        """Decode one value occupying the whole buffer."""
        decoder = MsgPackDecoder(data)
        value = cls.from_decoder(decoder, strict)
        decoder.expect_end()
        return value

    @classmethod
    def from_decoder(cls, decoder: MsgPackDecoder, strict: bool = True, depth: int = 0) -> "Value":
        return read_tagged(
            decoder,
            lambda tag, offset: cls._read_payload(decoder, tag, offset, strict, depth),
            strict,
            depth,
        )

    @classmethod
    def _read_payload(cls, decoder: MsgPackDecoder, tag: str, offset: int, strict: bool, depth: int) -> "Value":
        kind = _TAG_TO_KIND.get(tag)

        if kind is ValueKind.BOOL:
            return cls(kind, decoder.read_bool())
        if kind is ValueKind.U64:
            return cls(kind, decoder.read_uint64())
        if kind is ValueKind.STRING:
            return cls(kind, decoder.read_string())
        if kind is ValueKind.LIST:
            size = decoder.read_array_size()
            return cls(kind, tuple(cls.from_decoder(decoder, strict, depth + 1) for _ in range(size)))
        if kind is ValueKind.STRUCT:
            # [type_name, {field: value}]
            header_offset = decoder.position
            if decoder.read_array_size() != 2:
                raise DecodeError("struct value must be [type_name, fields]", header_offset)
            type_name = decoder.read_string()
            fields = {}
            for _ in range(decoder.read_map_size()):
                name = decoder.read_string()
                fields[name] = cls.from_decoder(decoder, strict, depth + 1)
            return cls(kind, StructValue(type_name, fields))

        raise UnknownValueTagError(tag, offset)

    # =========================================================================
    # Encoding (host side)
    # =========================================================================

    def to_wire(self) -> Dict[str, Any]:
        """msgpack-ready representation."""
        if self.kind is ValueKind.LIST:
            return {self.kind.value: [v.to_wire() for v in self.payload]}
        if self.kind is ValueKind.STRUCT:
            fields = {name: v.to_wire() for name, v in self.payload.fields.items()}
            return {self.kind.value: [self.payload.type_name, fields]}
        return {self.kind.value: self.payload}

    def to_bytes(self) -> bytes:
        return msgpack.packb(self.to_wire(), use_bin_type=True)

    # =========================================================================
    # Checked Accessors
    # =========================================================================

    def is_bool(self) -> bool:
        return self.kind is ValueKind.BOOL

    def as_bool(self) -> Optional[bool]:
        return self.payload if self.kind is ValueKind.BOOL else None

    def is_u64(self) -> bool:
        return self.kind is ValueKind.U64

    def as_u64(self) -> Optional[int]:
        return self.payload if self.kind is ValueKind.U64 else None

    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    def as_string(self) -> Optional[str]:
        return self.payload if self.kind is ValueKind.STRING else None

    def is_list(self) -> bool:
        return self.kind is ValueKind.LIST

    def as_list(self) -> Optional[Tuple["Value", ...]]:
        return self.payload if self.kind is ValueKind.LIST else None

    def is_struct(self) -> bool:
        return self.kind is ValueKind.STRUCT

    def as_struct(self) -> Optional[StructValue]:
        return self.payload if self.kind is ValueKind.STRUCT else None
