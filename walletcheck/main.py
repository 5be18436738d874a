# walletcheck/main.py
import asyncio
import logging
import signal
import sys
from pathlib import Path

from aiohttp import web

from walletcheck.client.dune import DuneClient
from walletcheck.config import Config, load_config
from walletcheck.detector.interaction import ContractInteractionDetector
from walletcheck.detector.threshold import BalanceThresholdDetector
from walletcheck.server.app import WalletCheckServer

logger = logging.getLogger(__name__)


class WalletCheckService:
    def __init__(self, config: Config):
        self.config = config
        self.client = DuneClient(config.dune)
        self.server = WalletCheckServer(
            BalanceThresholdDetector(self.client, config.windows.balance_blocks),
            ContractInteractionDetector(self.client, config.windows.interaction_blocks),
        )
        self.runner: web.AppRunner | None = None

    async def init(self) -> None:
        await self.client.init()
        self.runner = web.AppRunner(self.server.build_app())
        await self.runner.setup()

    async def close(self) -> None:
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
        await self.client.close()

    async def run(self) -> None:
        try:
            await self.init()

            site = web.TCPSite(self.runner, self.config.server.host, self.config.server.port)
            await site.start()
            logger.info(f"Server running on {self.config.server.host}:{self.config.server.port}")

            # Wait for shutdown signal
            stop_event = asyncio.Event()
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.add_signal_handler(sig, stop_event.set)

            await stop_event.wait()
        finally:
            await self.close()
            logger.info("Server stopped")


async def main() -> None:
    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("config.yaml")
    config = load_config(config_path)

    logging.basicConfig(
        level=config.logging.level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    service = WalletCheckService(config)
    await service.run()


if __name__ == "__main__":
    asyncio.run(main())
