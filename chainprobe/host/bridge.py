"""
Byte-Buffer Bridge

Turns packed handles returned by the host into owned byte buffers.

A handle is a 64-bit integer: memory offset in the high 32 bits, byte
length in the low 32 bits.
"""

import logging
from typing import Optional, Tuple

from chainprobe.config import DEFAULT_CONFIG, SdkConfig
from chainprobe.errors import HostMemoryError
from chainprobe.host.base import Host

U32_MAX = 0xFFFFFFFF


def pack_handle(offset: int, length: int) -> int:
    """Pack offset and length into one 64-bit handle."""
    if not 0 <= offset <= U32_MAX or not 0 <= length <= U32_MAX:
        raise ValueError(f"offset/length out of u32 range: {offset}, {length}")
    return (offset << 32) | length


def unpack_handle(handle: int) -> Tuple[int, int]:
    """Split a handle into (offset, length)."""
    if not 0 <= handle <= 0xFFFFFFFFFFFFFFFF:
        raise ValueError(f"handle out of u64 range: {handle}")
    return handle >> 32, handle & U32_MAX


class ByteBufferBridge:
    """
    Resolves host handles into bytes.

    Usage:
        bridge = ByteBufferBridge(host)
        data = bridge.fetch_collection(CollectionKind.TRANSACTIONS)
    """

    def __init__(self, host: Host, config: Optional[SdkConfig] = None):
        self._host = host
        self.config = config or DEFAULT_CONFIG
        self._logger = logging.getLogger("ByteBufferBridge")

    def resolve(self, handle: int) -> bytes:
        """Copy the buffer a handle points at."""
        offset, length = unpack_handle(handle)
        if length > self.config.max_buffer_size:
            raise HostMemoryError(
                f"buffer of {length} bytes exceeds limit of {self.config.max_buffer_size}"
            )

        data = bytes(self._host.read_memory(offset, length))
        if len(data) != length:
            raise HostMemoryError(
                f"host returned {len(data)} bytes for a {length}-byte region at {offset}"
            )
        return data

    def fetch_collection(self, kind: str) -> bytes:
        data = self.resolve(self._host.fetch_collection(kind))
        self._logger.debug(f"Fetched {kind}: {len(data)} bytes")
        return data

    def fetch_argument_value(self, seq: int) -> bytes:
        return self.resolve(self._host.fetch_argument_value(seq))

    def parse_input(self, abi: str, base64_data: str) -> Optional[bytes]:
        """Return the decoded-values buffer, or None if the input does not match abi."""
        handle = self._host.parse_input(abi, base64_data)
        if handle == 0:
            return None
        return self.resolve(handle)
