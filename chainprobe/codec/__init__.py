"""
Wire codecs: msgpack cursor decoding and 256-bit integers.
"""

from .bigint import I256, U256, hex_to_u256
from .decoder import MsgPackDecoder

__all__ = [
    "I256",
    "U256",
    "hex_to_u256",
    "MsgPackDecoder",
]
