"""
256-bit integers as four 64-bit limbs.

Values arrive from the host as hex text ("0x..." or bare digits). The
text is cut into 16-digit chunks from the right; each chunk becomes one
limb. Limbs are stored most significant first.

I256 shares the exact bit pattern of U256; only the interpretation
(two's complement) differs.
"""

from dataclasses import dataclass
from typing import Tuple

from chainprobe.errors import DecodeError

LIMB_BITS = 64
LIMB_COUNT = 4
LIMB_HEX_DIGITS = LIMB_BITS // 4
LIMB_MASK = (1 << LIMB_BITS) - 1
U256_MAX = (1 << (LIMB_BITS * LIMB_COUNT)) - 1

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_RADIX_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _limbs_from_hex(text: str) -> Tuple[int, int, int, int]:
    digits = text[2:] if text[:2] in ("0x", "0X") else text
    if not digits or any(c not in _HEX_DIGITS for c in digits):
        raise DecodeError(f"invalid hex integer: {text!r}")

    digits = digits.lstrip("0") or "0"
    if len(digits) > LIMB_HEX_DIGITS * LIMB_COUNT:
        raise DecodeError(f"hex integer exceeds 256 bits: {text!r}")

    limbs = [0] * LIMB_COUNT
    end = len(digits)
    for i in range(LIMB_COUNT):
        start = max(0, end - LIMB_HEX_DIGITS)
        if start == end:
            break
        limbs[LIMB_COUNT - 1 - i] = int(digits[start:end], 16)
        end = start

    return tuple(limbs)


def _limbs_from_int(value: int) -> Tuple[int, int, int, int]:
    return tuple(
        (value >> (LIMB_BITS * (LIMB_COUNT - 1 - i))) & LIMB_MASK
        for i in range(LIMB_COUNT)
    )


def _to_radix(value: int, radix: int) -> str:
    if not 2 <= radix <= 36:
        raise ValueError(f"radix must be in 2..36, got {radix}")
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    value = abs(value)
    out = []
    while value:
        value, rem = divmod(value, radix)
        out.append(_RADIX_DIGITS[rem])
    return sign + "".join(reversed(out))


@dataclass(frozen=True, order=False)
class U256:
    """Unsigned 256-bit integer. limbs[0] is the most significant limb."""
    limbs: Tuple[int, int, int, int]

    def __post_init__(self):
        if len(self.limbs) != LIMB_COUNT or any(
            not 0 <= limb <= LIMB_MASK for limb in self.limbs
        ):
            raise ValueError(f"invalid limbs: {self.limbs!r}")

    @classmethod
    def from_hex(cls, text: str) -> "U256":
        return cls(_limbs_from_hex(text))

    @classmethod
    def from_int(cls, value: int) -> "U256":
        if not 0 <= value <= U256_MAX:
            raise ValueError(f"{value} does not fit in 256 unsigned bits")
        return cls(_limbs_from_int(value))

    def __int__(self) -> int:
        result = 0
        for limb in self.limbs:
            result = (result << LIMB_BITS) | limb
        return result

    __index__ = __int__

    @property
    def low_u64(self) -> int:
        """Least significant limb."""
        return self.limbs[-1]

    def to_string(self, radix: int = 10) -> str:
        return _to_radix(int(self), radix)

    def __str__(self) -> str:
        return self.to_string(10)

    def __eq__(self, other) -> bool:
        if isinstance(other, (U256, I256)):
            return int(self) == int(other)
        if isinstance(other, int) and not isinstance(other, bool):
            return int(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(int(self))

    def __lt__(self, other) -> bool:
        return int(self) < int(other)

    def __le__(self, other) -> bool:
        return int(self) <= int(other)

    def __gt__(self, other) -> bool:
        return int(self) > int(other)

    def __ge__(self, other) -> bool:
        return int(self) >= int(other)


@dataclass(frozen=True, eq=False)
class I256(U256):
    """Signed (two's complement) 256-bit integer over the same limbs."""

    @classmethod
    def from_unsigned(cls, value: U256) -> "I256":
        return cls(value.limbs)

    @classmethod
    def from_int(cls, value: int) -> "I256":
        bound = 1 << 255
        if not -bound <= value < bound:
            raise ValueError(f"{value} does not fit in 256 signed bits")
        return cls(_limbs_from_int(value & U256_MAX))

    def __int__(self) -> int:
        raw = super().__int__()
        return raw - (1 << 256) if raw >> 255 else raw

    __index__ = __int__

    def to_unsigned(self) -> U256:
        return U256(self.limbs)


def hex_to_u256(text: str) -> U256:
    """Parse hex text (with or without 0x) into a U256."""
    return U256.from_hex(text)
