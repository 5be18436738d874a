# tests/detector/test_threshold.py
from unittest.mock import AsyncMock, MagicMock

import pytest

from walletcheck.client.models import Direction, Transfer
from walletcheck.detector.threshold import BalanceThresholdDetector
from walletcheck.errors import ErrorKind, InvalidAmountError, UpstreamError

CURRENT_BLOCK = 6_200_000


@pytest.fixture
def source():
    source = MagicMock()
    source.fetch_balance = AsyncMock(return_value=140)
    source.fetch_transfers = AsyncMock(return_value=[])
    source.fetch_current_block = AsyncMock(return_value=CURRENT_BLOCK)
    return source


def outbound(amount: int, block_number: int = CURRENT_BLOCK) -> Transfer:
    return Transfer(
        hash="0xsend",
        value=hex(amount),
        direction=Direction.OUTBOUND,
        block_number=block_number,
        block_time="2024-07-01 12:00:00",
    )


async def test_threshold_crossed(source):
    source.fetch_transfers.return_value = [outbound(100)]
    detector = BalanceThresholdDetector(source)

    assert await detector.check("0xwallet", "150") is True
    source.fetch_balance.assert_awaited_once_with("0xwallet")
    source.fetch_transfers.assert_awaited_once_with("0xwallet")
    source.fetch_current_block.assert_awaited_once()


async def test_threshold_not_crossed(source):
    source.fetch_transfers.return_value = [outbound(5)]
    detector = BalanceThresholdDetector(source)

    assert await detector.check("0xwallet", "150") is False


async def test_no_transfers(source):
    detector = BalanceThresholdDetector(source)
    assert await detector.check("0xwallet", "150") is False


async def test_window_blocks_is_configurable(source):
    source.fetch_transfers.return_value = [outbound(100, CURRENT_BLOCK - 5)]

    assert await BalanceThresholdDetector(source).check("0xwallet", "150") is False
    assert await BalanceThresholdDetector(source, window_blocks=5).check("0xwallet", "150") is True


async def test_malformed_threshold_fails_before_fetching(source):
    detector = BalanceThresholdDetector(source)

    with pytest.raises(InvalidAmountError) as exc_info:
        await detector.check("0xwallet", "abc")
    assert exc_info.value.kind == ErrorKind.INVALID_AMOUNT
    source.fetch_balance.assert_not_called()


async def test_upstream_failure_propagates(source):
    source.fetch_current_block.side_effect = UpstreamError(
        ErrorKind.UPSTREAM_TIMEOUT, "timed out"
    )
    detector = BalanceThresholdDetector(source)

    with pytest.raises(UpstreamError) as exc_info:
        await detector.check("0xwallet", "150")
    assert exc_info.value.kind == ErrorKind.UPSTREAM_TIMEOUT


async def test_malformed_transfer_value_in_window_fails(source):
    source.fetch_transfers.return_value = [
        Transfer(
            hash="0xbad",
            value="0xnothex",
            direction=Direction.INBOUND,
            block_number=CURRENT_BLOCK,
            block_time="2024-07-01 12:00:00",
        )
    ]
    detector = BalanceThresholdDetector(source)

    with pytest.raises(InvalidAmountError):
        await detector.check("0xwallet", "150")
