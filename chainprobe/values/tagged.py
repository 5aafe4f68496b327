"""
Shared framing of tagged values: a one-entry map {tag: payload}.
"""

from typing import Callable, TypeVar

from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.errors import DecodeError

T = TypeVar("T")

# Lists, structs and tuples nested deeper than this are rejected
MAX_VALUE_DEPTH = 64


def read_tagged(
    decoder: MsgPackDecoder,
    read_payload: Callable[[str, int], T],
    strict: bool = True,
    depth: int = 0,
) -> T:
    """
    Read {tag: payload} and decode the payload with read_payload(tag, offset).

    Strict mode requires exactly one entry. Otherwise the first entry wins
    and the rest of the map is skipped.
    """
    offset = decoder.position
    if depth > MAX_VALUE_DEPTH:
        raise DecodeError(f"value nested deeper than {MAX_VALUE_DEPTH} levels", offset)

    size = decoder.read_map_size()
    if size == 0 or (strict and size != 1):
        raise DecodeError(f"tagged value map must have 1 entry, got {size}", offset)

    value = read_payload(decoder.read_string(), offset)

    for _ in range(size - 1):
        decoder.skip()
        decoder.skip()
    return value
