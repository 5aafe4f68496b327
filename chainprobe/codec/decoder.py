"""
MessagePack Cursor Decoder

Sequential reader over a msgpack buffer handed over by the host.

The buffer does not describe its own schema: the caller must invoke the
reader matching each field, in the exact order the producer wrote it.
Aggregates are preceded by their element count (array/map headers).

Two byte-sequence encodings are supported:
- read_byte_array(): raw msgpack bin
- read_uint8_array(): array of unsigned integers, one per byte (0..255)
"""

import logging
from typing import Any, Callable, List, Optional, TypeVar

import msgpack

from chainprobe.errors import DecodeError

T = TypeVar("T")

NIL_MARKER = 0xC0

_UINT_LIMITS = {8: 0xFF, 16: 0xFFFF, 32: 0xFFFFFFFF, 64: 0xFFFFFFFFFFFFFFFF}

# msgpack raises ValueError subclasses (FormatError, StackError, ExtraData)
# on malformed input and OutOfData on truncation.
_MSGPACK_ERRORS = (msgpack.OutOfData, ValueError, TypeError)


class MsgPackDecoder:
    """
    Forward-only cursor over one msgpack buffer.

    Usage:
        decoder = MsgPackDecoder(data)
        blocks = decoder.read_array(Block.from_decoder)
        decoder.expect_end()
    """

    def __init__(self, data: bytes):
        self._data = bytes(data)
        self._unpacker = msgpack.Unpacker(
            raw=False,
            strict_map_key=False,
            max_buffer_size=max(len(self._data), 1),
        )
        self._unpacker.feed(self._data)
        self._logger = logging.getLogger("MsgPackDecoder")

    # =========================================================================
    # Cursor
    # =========================================================================

    @property
    def position(self) -> int:
        """Offset of the next unread byte."""
        return self._unpacker.tell()

    @property
    def remaining(self) -> int:
        return len(self._data) - self.position

    def at_end(self) -> bool:
        return self.remaining <= 0

    def expect_end(self) -> None:
        """Fail if bytes are left after the last expected value."""
        if not self.at_end():
            raise DecodeError(f"{self.remaining} trailing bytes", self.position)

    # =========================================================================
    # Structural Headers
    # =========================================================================

    def read_array_size(self) -> int:
        offset = self.position
        try:
            return self._unpacker.read_array_header()
        except _MSGPACK_ERRORS as e:
            raise DecodeError(f"expected array header: {e}", offset) from e

    def read_map_size(self) -> int:
        offset = self.position
        try:
            return self._unpacker.read_map_header()
        except _MSGPACK_ERRORS as e:
            raise DecodeError(f"expected map header: {e}", offset) from e

    def is_next_nil(self) -> bool:
        """Peek whether the next value is nil, without consuming it."""
        offset = self.position
        return offset < len(self._data) and self._data[offset] == NIL_MARKER

    def read_nil(self) -> None:
        offset = self.position
        value = self._next("nil")
        if value is not None:
            raise DecodeError(f"expected nil, got {type(value).__name__}", offset)

    # =========================================================================
    # Scalars
    # =========================================================================

    def read_bool(self) -> bool:
        offset = self.position
        value = self._next("bool")
        if not isinstance(value, bool):
            raise DecodeError(f"expected bool, got {type(value).__name__}", offset)
        return value

    def read_uint(self, bits: int) -> int:
        offset = self.position
        value = self._next_int(f"uint{bits}")
        if value < 0 or value > _UINT_LIMITS[bits]:
            raise DecodeError(f"value {value} does not fit uint{bits}", offset)
        return value

    def read_int(self, bits: int) -> int:
        offset = self.position
        value = self._next_int(f"int{bits}")
        bound = 1 << (bits - 1)
        if value < -bound or value >= bound:
            raise DecodeError(f"value {value} does not fit int{bits}", offset)
        return value

    def read_uint8(self) -> int:
        return self.read_uint(8)

    def read_uint16(self) -> int:
        return self.read_uint(16)

    def read_uint32(self) -> int:
        return self.read_uint(32)

    def read_uint64(self) -> int:
        return self.read_uint(64)

    def read_int8(self) -> int:
        return self.read_int(8)

    def read_int16(self) -> int:
        return self.read_int(16)

    def read_int32(self) -> int:
        return self.read_int(32)

    def read_int64(self) -> int:
        return self.read_int(64)

    def read_float64(self) -> float:
        offset = self.position
        value = self._next("float64")
        if not isinstance(value, float):
            raise DecodeError(f"expected float, got {type(value).__name__}", offset)
        return value

    def read_string(self) -> str:
        offset = self.position
        value = self._next("string")
        if not isinstance(value, str):
            raise DecodeError(f"expected string, got {type(value).__name__}", offset)
        return value

    def read_byte_array(self) -> bytes:
        """Read a raw (bin) byte sequence."""
        offset = self.position
        value = self._next("bin")
        if not isinstance(value, bytes):
            raise DecodeError(f"expected bin, got {type(value).__name__}", offset)
        return value

    def read_uint8_array(self) -> bytes:
        """Read a byte sequence encoded as an array of small unsigned integers."""
        size = self.read_array_size()
        return bytes(self.read_uint8() for _ in range(size))

    # =========================================================================
    # Combinators
    # =========================================================================

    def skip(self) -> None:
        """Consume one complete value, whatever its type."""
        self._next("value")

    def read_optional(self, reader: Callable[[], T]) -> Optional[T]:
        """Consume a nil and return None, or delegate to reader."""
        if self.is_next_nil():
            self.read_nil()
            return None
        return reader()

    def read_array(self, reader: Callable[["MsgPackDecoder"], T]) -> List[T]:
        size = self.read_array_size()
        return [reader(self) for _ in range(size)]

    # =========================================================================
    # Internals
    # =========================================================================

    def _next(self, expected: str) -> Any:
        offset = self.position
        try:
            return self._unpacker.unpack()
        except _MSGPACK_ERRORS as e:
            self._logger.warning(f"Failed to read {expected} at byte {offset}: {e}")
            raise DecodeError(f"expected {expected}: {e}", offset) from e

    def _next_int(self, expected: str) -> int:
        offset = self.position
        value = self._next(expected)
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodeError(f"expected {expected}, got {type(value).__name__}", offset)
        return value
