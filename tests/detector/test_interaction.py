# tests/detector/test_interaction.py
from unittest.mock import AsyncMock, MagicMock

import pytest

from walletcheck.client.models import Interaction
from walletcheck.detector.interaction import ContractInteractionDetector
from walletcheck.errors import DuneAPIError, ErrorKind, UpstreamError

CURRENT_BLOCK = 6_200_000
WALLET = "0xA8F5dCC3035089111a9435FF25546c922a7c713A"


@pytest.fixture
def source():
    source = MagicMock()
    source.fetch_contract_interactions = AsyncMock(return_value=[])
    source.fetch_current_block = AsyncMock(return_value=CURRENT_BLOCK)
    return source


async def test_wallet_interacted(source):
    source.fetch_contract_interactions.return_value = [
        Interaction(sender=WALLET.lower(), block_number=CURRENT_BLOCK - 50, success=True)
    ]
    detector = ContractInteractionDetector(source)

    assert await detector.check(WALLET) is True


async def test_failed_interaction_not_counted(source):
    source.fetch_contract_interactions.return_value = [
        Interaction(sender=WALLET, block_number=CURRENT_BLOCK - 50, success=False)
    ]
    detector = ContractInteractionDetector(source)

    assert await detector.check(WALLET) is False


async def test_custom_window(source):
    source.fetch_contract_interactions.return_value = [
        Interaction(sender=WALLET, block_number=CURRENT_BLOCK - 50, success=True)
    ]
    detector = ContractInteractionDetector(source, window_blocks=10)

    assert await detector.check(WALLET) is False


async def test_upstream_failure_is_not_a_false_result(source):
    source.fetch_contract_interactions.side_effect = DuneAPIError(500, "internal error")
    detector = ContractInteractionDetector(source)

    with pytest.raises(UpstreamError) as exc_info:
        await detector.check(WALLET)
    assert exc_info.value.kind == ErrorKind.UPSTREAM_UNAVAILABLE
