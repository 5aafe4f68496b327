"""
Typed Value Models

- Value / StructValue: chain-agnostic values (call-trace arguments)
- EvmValue: ABI-typed values (decoded transaction input)
"""

from .evm import EvmValue, EvmValueKind
from .generic import StructValue, Value, ValueKind

__all__ = [
    "EvmValue",
    "EvmValueKind",
    "StructValue",
    "Value",
    "ValueKind",
]
