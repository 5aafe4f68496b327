"""
Raw EVM call input and its ABI decoding.

Decoding is delegated to the host: the input bytes travel as base64 along
with a "name(type1,type2)" signature, and the host answers with either no
match (selector differs) or an encoded array of EvmValue.
"""

import base64
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from chainprobe.errors import AbiSignatureError
from chainprobe.host.bridge import ByteBufferBridge
from chainprobe.values.evm import EvmValue

logger = logging.getLogger(__name__)


def parse_signature(abi: str) -> Tuple[str, str]:
    """
    Split "name(type1,type2)" into ("name", "(type1,type2)").

    Raises AbiSignatureError when the parentheses are missing or inverted,
    or the function name is empty.
    """
    signature = abi.strip()
    open_paren = signature.find("(")
    close_paren = signature.rfind(")")

    if open_paren < 0 or close_paren < 0 or open_paren >= close_paren:
        raise AbiSignatureError(
            f'Invalid ABI signature: "{abi}". The correct format is "name(type1,type2)"'
        )

    name = signature[:open_paren].strip()
    if not name:
        raise AbiSignatureError(f'Invalid ABI signature: "{abi}". Missing function name')

    return name, signature[open_paren:close_paren + 1]


@dataclass(frozen=True)
class TxInput:
    """Input bytes of a transaction or call trace."""
    data: bytes

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def selector(self) -> Optional[bytes]:
        """First four bytes, or None for short inputs."""
        return self.data[:4] if len(self.data) >= 4 else None

    def parse(self, abi: str, bridge: ByteBufferBridge) -> Optional[List[EvmValue]]:
        """
        Decode the input against abi.

        Returns None when the input does not match the signature.
        """
        parse_signature(abi)

        buffer = bridge.parse_input(abi, self.to_base64())
        if buffer is None:
            logger.debug(f"Input does not match {abi}")
            return None

        return EvmValue.decode_many(buffer, bridge.config.strict_value_maps)

    def __len__(self) -> int:
        return len(self.data)
