"""
Host Boundary

Components:
- Host: abstract capability injected into contexts
- ByteBufferBridge: resolves packed handles into owned buffers
- InMemoryHost: in-process host for tests and offline replay
"""

from .base import CollectionKind, Host
from .bridge import ByteBufferBridge, pack_handle, unpack_handle
from .memory import HttpExchange, InMemoryHost, InMemoryHostConfig

__all__ = [
    "CollectionKind",
    "Host",
    "ByteBufferBridge",
    "pack_handle",
    "unpack_handle",
    "HttpExchange",
    "InMemoryHost",
    "InMemoryHostConfig",
]
