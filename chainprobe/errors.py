"""
Exception types for chainprobe.

Every failure inside the SDK is fatal to the operation that raised it and
propagates to the caller. Nothing is retried.

Not errors:
- A join with no matching children (yields an empty tuple)
- Reading a typed value through the wrong accessor (yields None)
"""

from typing import Optional


class ChainProbeError(Exception):
    """Base class for all SDK errors."""


class DecodeError(ChainProbeError):
    """Buffer content does not match the expected structure."""

    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)


class UnknownValueTagError(DecodeError):
    """Typed value map carries a tag outside the known variants."""

    def __init__(self, tag: str, offset: Optional[int] = None):
        self.tag = tag
        super().__init__(f"unknown value tag: {tag!r}", offset)


class HostMemoryError(ChainProbeError):
    """A handle points outside host-addressable memory."""


class HostCallError(ChainProbeError):
    """The host could not serve a call."""


class IncidentEncodeError(ChainProbeError):
    """Incident data cannot be encoded."""


class AbiSignatureError(ChainProbeError):
    """Interface description is not of the form name(type1,type2)."""
