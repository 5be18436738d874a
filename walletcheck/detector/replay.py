# walletcheck/detector/replay.py
import logging
from dataclasses import dataclass, field

from walletcheck.amount import Ordering, add, compare, subtract
from walletcheck.client.models import Direction, Transfer

logger = logging.getLogger(__name__)

DEFAULT_BALANCE_WINDOW_BLOCKS = 3


@dataclass
class ReplayResult:
    crossed: bool = False
    balances: list[int] = field(default_factory=list)  # 每笔转账之前的余额
    replayed: int = 0
    crossing_hash: str | None = None


def undo_transfer(balance: int, transfer: Transfer) -> int:
    """还原转账发生前的余额"""
    if transfer.direction == Direction.OUTBOUND:
        return add(balance, transfer.amount)
    return subtract(balance, transfer.amount)


def is_crossing(balance: int, current_balance: int, threshold: int) -> bool:
    past = compare(balance, threshold)
    now = compare(current_balance, threshold)
    return (past == Ordering.GREATER and now != Ordering.GREATER) or (
        past == Ordering.LESS and now != Ordering.LESS
    )


def replay_transfers(
    current_balance: int,
    threshold: int,
    transfers: list[Transfer],
    current_block: int,
    window_blocks: int = DEFAULT_BALANCE_WINDOW_BLOCKS,
) -> ReplayResult:
    """
    从当前余额倒推历史余额, 检测是否穿越阈值

    Transfers are walked newest first by block_time; transfers sharing a
    block_time keep their input order. Only transfers with
    block_number >= current_block - window_blocks are replayed.

    Raises:
        InvalidAmountError: an in-window transfer has an unparseable value
    """
    result = ReplayResult()
    if not transfers:
        return result

    # sorted() is stable with reverse=True as well
    ordered = sorted(transfers, key=lambda t: t.block_time, reverse=True)
    min_block = current_block - window_blocks
    balance = current_balance

    for tx in ordered:
        if tx.block_number < min_block:
            logger.debug(f"Stop at {tx.hash}: block {tx.block_number} < {min_block}")
            break

        balance = undo_transfer(balance, tx)
        result.balances.append(balance)
        result.replayed += 1
        logger.debug(
            f"Undo {tx.direction.value} {tx.hash} value={tx.value} -> balance={balance}"
        )

        if is_crossing(balance, current_balance, threshold):
            result.crossed = True
            result.crossing_hash = tx.hash
            break

    return result


def check_threshold_crossing(
    current_balance: int,
    threshold: int,
    transfers: list[Transfer],
    current_block: int,
    window_blocks: int = DEFAULT_BALANCE_WINDOW_BLOCKS,
) -> bool:
    return replay_transfers(
        current_balance, threshold, transfers, current_block, window_blocks
    ).crossed
