# walletcheck/detector/window.py
from walletcheck.client.models import Interaction

DEFAULT_INTERACTION_WINDOW_BLOCKS = 100


def addresses_equal(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


def has_recent_interaction(
    address: str,
    current_block: int,
    interactions: list[Interaction],
    window_blocks: int = DEFAULT_INTERACTION_WINDOW_BLOCKS,
) -> bool:
    min_block = current_block - window_blocks
    return any(
        i.block_number >= min_block and addresses_equal(i.sender, address) and i.success
        for i in interactions
    )
