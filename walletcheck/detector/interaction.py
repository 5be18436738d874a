# walletcheck/detector/interaction.py
import asyncio
import logging

from walletcheck.client.base import LedgerDataSource
from walletcheck.detector.window import DEFAULT_INTERACTION_WINDOW_BLOCKS, has_recent_interaction

logger = logging.getLogger(__name__)


class ContractInteractionDetector:
    """合约交互检测"""

    def __init__(
        self,
        source: LedgerDataSource,
        window_blocks: int = DEFAULT_INTERACTION_WINDOW_BLOCKS,
    ):
        self.source = source
        self.window_blocks = window_blocks

    async def check(self, address: str) -> bool:
        interactions, current_block = await asyncio.gather(
            self.source.fetch_contract_interactions(),
            self.source.fetch_current_block(),
        )
        interacted = has_recent_interaction(
            address, current_block, interactions, self.window_blocks
        )
        logger.info(
            f"Interaction check {address}: block={current_block} "
            f"records={len(interactions)} interacted={interacted}"
        )
        return interacted
