from dataclasses import dataclass
from typing import Any, List, Optional

from chainprobe.chains.evm.tx_input import TxInput
from chainprobe.codec.decoder import MsgPackDecoder
from chainprobe.entity import Entity


@dataclass(frozen=True)
class Transaction(Entity):
    """
    EVM transaction.

    Wire order: tx_index, tx_hash, type, nonce, status, block_index, from,
    to (nullable), value, fee, gas_price, gas_limit, gas_used, input, size.
    """
    tx_index: int
    tx_hash: str
    tx_type: int
    nonce: int
    status: int
    block_index: int
    from_address: str
    to_address: Optional[str]  # None for contract creation
    value: int
    fee: int
    gas_price: int
    gas_limit: int
    gas_used: int
    input: TxInput
    size: float

    @classmethod
    def read_fields(cls, decoder: MsgPackDecoder) -> "Transaction":
        return cls(
            tx_index=decoder.read_uint32(),
            tx_hash=decoder.read_string(),
            tx_type=decoder.read_uint8(),
            nonce=decoder.read_uint64(),
            status=decoder.read_uint64(),
            block_index=decoder.read_uint64(),
            from_address=decoder.read_string(),
            to_address=decoder.read_optional(decoder.read_string),
            value=decoder.read_uint64(),
            fee=decoder.read_uint64(),
            gas_price=decoder.read_uint64(),
            gas_limit=decoder.read_uint64(),
            gas_used=decoder.read_uint64(),
            input=TxInput(decoder.read_byte_array()),
            size=decoder.read_float64(),
        )

    def to_row(self) -> List[Any]:
        return [
            self.tx_index,
            self.tx_hash,
            self.tx_type,
            self.nonce,
            self.status,
            self.block_index,
            self.from_address,
            self.to_address,
            self.value,
            self.fee,
            self.gas_price,
            self.gas_limit,
            self.gas_used,
            bytes(self.input.data),
            float(self.size),
        ]
