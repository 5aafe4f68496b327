"""
EVM Value model.

ABI-typed values produced when the host decodes transaction input.
Closed set of variants, tagged on the wire by name:

    Bool, Uint, Int, String, Address, Bytes, FixedBytes,
    Array, FixedArray, Tuple

Uint/Int travel as hex text and decode into U256/I256 (same bits, Int is
read as two's complement). Bytes travel as arrays of small integers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import msgpack

from chainprobe.codec.bigint import I256, U256
from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.errors import DecodeError, UnknownValueTagError
from chainprobe.values.tagged import read_tagged


class EvmValueKind(Enum):
    BOOL = "Bool"
    UINT = "Uint"
    INT = "Int"
    STRING = "String"
    ADDRESS = "Address"
    BYTES = "Bytes"
    FIXED_BYTES = "FixedBytes"
    ARRAY = "Array"
    FIXED_ARRAY = "FixedArray"
    TUPLE = "Tuple"


_TAG_TO_KIND = {kind.value: kind for kind in EvmValueKind}

_SEQUENCE_KINDS = (EvmValueKind.ARRAY, EvmValueKind.FIXED_ARRAY, EvmValueKind.TUPLE)
_BYTES_KINDS = (EvmValueKind.BYTES, EvmValueKind.FIXED_BYTES)


@dataclass(frozen=True)
class EvmValue:
    kind: EvmValueKind
    payload: Any

    # =========================================================================
    # Decoding
    # =========================================================================

    @classmethod
    def decode_many(cls, data: bytes, strict: bool = True) -> List["EvmValue"]:
        """Decode a buffer holding an array of values."""
        decoder = MsgPackDecoder(data)
        values = decoder.read_array(lambda d: cls.from_decoder(d, strict))
        decoder.expect_end()
        return values

    @classmethod
    def from_decoder(cls, decoder: MsgPackDecoder, strict: bool = True, depth: int = 0) -> "EvmValue":
        return read_tagged(
            decoder,
            lambda tag, offset: cls._read_payload(decoder, tag, offset, strict, depth),
            strict,
            depth,
        )

    @classmethod
    def _read_payload(cls, decoder: MsgPackDecoder, tag: str, offset: int, strict: bool, depth: int) -> "EvmValue":
        kind = _TAG_TO_KIND.get(tag)

        if kind is None:
            raise UnknownValueTagError(tag, offset)

        if kind is EvmValueKind.BOOL:
            return cls(kind, decoder.read_bool())
        if kind is EvmValueKind.UINT:
            return cls(kind, cls._read_hex(decoder))
        if kind is EvmValueKind.INT:
            return cls(kind, I256.from_unsigned(cls._read_hex(decoder)))
        if kind in (EvmValueKind.STRING, EvmValueKind.ADDRESS):
            return cls(kind, decoder.read_string())
        if kind in _BYTES_KINDS:
            return cls(kind, decoder.read_uint8_array())

        size = decoder.read_array_size()
        return cls(kind, tuple(cls.from_decoder(decoder, strict, depth + 1) for _ in range(size)))

    @staticmethod
    def _read_hex(decoder: MsgPackDecoder) -> U256:
        offset = decoder.position
        text = decoder.read_string()
        try:
            return U256.from_hex(text)
        except DecodeError as e:
            raise DecodeError(str(e), offset) from e

    # =========================================================================
    # Encoding (host side)
    # =========================================================================

    def to_wire(self) -> Dict[str, Any]:
        tag = self.kind.value
        if self.kind in _SEQUENCE_KINDS:
            return {tag: [v.to_wire() for v in self.payload]}
        if self.kind in _BYTES_KINDS:
            return {tag: list(self.payload)}
        if self.kind is EvmValueKind.UINT:
            return {tag: "0x" + self.payload.to_string(16)}
        if self.kind is EvmValueKind.INT:
            return {tag: "0x" + self.payload.to_unsigned().to_string(16)}
        return {tag: self.payload}

    @staticmethod
    def encode_many(values: List["EvmValue"]) -> bytes:
        return msgpack.packb([v.to_wire() for v in values], use_bin_type=True)

    # =========================================================================
    # Checked Accessors
    # =========================================================================

    def _payload_if(self, kind: EvmValueKind) -> Any:
        return self.payload if self.kind is kind else None

    def is_bool(self) -> bool:
        return self.kind is EvmValueKind.BOOL

    def as_bool(self) -> Optional[bool]:
        return self._payload_if(EvmValueKind.BOOL)

    def is_uint(self) -> bool:
        return self.kind is EvmValueKind.UINT

    def as_uint(self) -> Optional[U256]:
        return self._payload_if(EvmValueKind.UINT)

    def is_int(self) -> bool:
        return self.kind is EvmValueKind.INT

    def as_int(self) -> Optional[I256]:
        return self._payload_if(EvmValueKind.INT)

    def is_string(self) -> bool:
        return self.kind is EvmValueKind.STRING

    def as_string(self) -> Optional[str]:
        return self._payload_if(EvmValueKind.STRING)

    def is_address(self) -> bool:
        return self.kind is EvmValueKind.ADDRESS

    def as_address(self) -> Optional[str]:
        return self._payload_if(EvmValueKind.ADDRESS)

    def is_bytes(self) -> bool:
        return self.kind is EvmValueKind.BYTES

    def as_bytes(self) -> Optional[bytes]:
        return self._payload_if(EvmValueKind.BYTES)

    def is_fixed_bytes(self) -> bool:
        return self.kind is EvmValueKind.FIXED_BYTES

    def as_fixed_bytes(self) -> Optional[bytes]:
        return self._payload_if(EvmValueKind.FIXED_BYTES)

    def is_array(self) -> bool:
        return self.kind is EvmValueKind.ARRAY

    def as_array(self) -> Optional[Tuple["EvmValue", ...]]:
        return self._payload_if(EvmValueKind.ARRAY)

    def is_fixed_array(self) -> bool:
        return self.kind is EvmValueKind.FIXED_ARRAY

    def as_fixed_array(self) -> Optional[Tuple["EvmValue", ...]]:
        return self._payload_if(EvmValueKind.FIXED_ARRAY)

    def is_tuple(self) -> bool:
        return self.kind is EvmValueKind.TUPLE

    def as_tuple(self) -> Optional[Tuple["EvmValue", ...]]:
        return self._payload_if(EvmValueKind.TUPLE)
