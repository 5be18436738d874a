# tests/test_main.py
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from walletcheck.config import Config, DuneConfig, WindowsConfig
from walletcheck.main import WalletCheckService


def make_config() -> Config:
    return Config(
        dune=DuneConfig(api_key="test_key"),
        windows=WindowsConfig(balance_blocks=5, interaction_blocks=50),
    )


def test_service_wires_config_into_detectors():
    service = WalletCheckService(make_config())

    assert service.server.balance_detector.window_blocks == 5
    assert service.server.interaction_detector.window_blocks == 50
    assert service.server.balance_detector.source is service.client
    assert service.server.interaction_detector.source is service.client


async def test_service_init_and_close():
    service = WalletCheckService(make_config())

    await service.init()
    assert service.client._session is not None
    assert service.runner is not None

    await service.close()
    assert service.client._session is None
    assert service.runner is None


async def test_run_releases_resources_when_site_fails_to_start():
    service = WalletCheckService(make_config())

    site = MagicMock()
    site.start = AsyncMock(side_effect=OSError("address already in use"))
    with patch("walletcheck.main.web.TCPSite", return_value=site):
        with pytest.raises(OSError, match="address already in use"):
            await service.run()

    assert service.client._session is None
    assert service.runner is None
