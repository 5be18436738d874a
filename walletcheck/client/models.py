"""Dune API 数据模型"""

from dataclasses import dataclass
from enum import Enum

from walletcheck.amount import parse_hex

SENDER_TRANSACTION_TYPE = "Sender"


class Direction(Enum):
    OUTBOUND = "outbound"
    INBOUND = "inbound"

    @classmethod
    def from_transaction_type(cls, transaction_type: str) -> "Direction":
        if transaction_type == SENDER_TRANSACTION_TYPE:
            return cls.OUTBOUND
        return cls.INBOUND


@dataclass
class Transfer:
    """钱包转账记录"""

    hash: str
    value: str  # 0x 前缀十六进制 (wei)
    direction: Direction
    block_number: int
    block_time: str
    from_address: str = ""
    to_address: str = ""

    @property
    def amount(self) -> int:
        return parse_hex(self.value)


@dataclass
class Interaction:
    """合约调用记录"""

    sender: str
    block_number: int
    success: bool
    tx_hash: str = ""
