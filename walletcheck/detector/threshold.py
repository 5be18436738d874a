# walletcheck/detector/threshold.py
import asyncio
import logging

from walletcheck.amount import parse_decimal
from walletcheck.client.base import LedgerDataSource
from walletcheck.detector.replay import DEFAULT_BALANCE_WINDOW_BLOCKS, replay_transfers

logger = logging.getLogger(__name__)


class BalanceThresholdDetector:
    """余额阈值穿越检测"""

    def __init__(
        self,
        source: LedgerDataSource,
        window_blocks: int = DEFAULT_BALANCE_WINDOW_BLOCKS,
    ):
        self.source = source
        self.window_blocks = window_blocks

    async def check(self, address: str, threshold: str) -> bool:
        """
        检查钱包余额在最近 window_blocks 个区块内是否穿越阈值

        Args:
            address: 钱包地址
            threshold: 阈值 (wei, 十进制字符串)

        Raises:
            InvalidAmountError: threshold 或窗口内的金额无法解析
            UpstreamError: 数据源请求失败
        """
        threshold_wei = parse_decimal(threshold)

        balance, transfers, current_block = await asyncio.gather(
            self.source.fetch_balance(address),
            self.source.fetch_transfers(address),
            self.source.fetch_current_block(),
        )
        logger.info(
            f"Checking {address}: balance={balance} threshold={threshold_wei} "
            f"block={current_block} transfers={len(transfers)}"
        )

        result = replay_transfers(
            balance, threshold_wei, transfers, current_block, self.window_blocks
        )
        if result.crossed:
            logger.info(f"Threshold crossed for {address} at {result.crossing_hash}")
        else:
            logger.info(f"Threshold not crossed for {address} ({result.replayed} replayed)")
        return result.crossed
