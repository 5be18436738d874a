# walletcheck/server/app.py
import logging
from typing import TypeVar

from aiohttp import web
from pydantic import BaseModel, Field, ValidationError

from walletcheck.detector.interaction import ContractInteractionDetector
from walletcheck.detector.threshold import BalanceThresholdDetector
from walletcheck.errors import ErrorKind, WalletCheckError

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)


class CheckWalletRequest(BaseModel):
    # blank or malformed thresholds are rejected by parse_decimal as INVALID_AMOUNT
    threshold: str
    wallet_address: str = Field(alias="walletAddress", min_length=1)


class CheckTransactionRequest(BaseModel):
    wallet_address: str = Field(alias="walletAddress", min_length=1)


def error_response(error: WalletCheckError) -> web.Response:
    status = 400 if error.kind == ErrorKind.INVALID_REQUEST else 500
    return web.json_response({"error": error.message, "kind": error.kind.value}, status=status)


async def parse_request(request: web.Request, model: type[RequestT]) -> RequestT:
    try:
        payload = await request.json()
    except ValueError as e:
        raise WalletCheckError(ErrorKind.INVALID_REQUEST, f"Invalid JSON body: {e}")
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise WalletCheckError(ErrorKind.INVALID_REQUEST, errors or "Invalid request body")


class WalletCheckServer:
    def __init__(
        self,
        balance_detector: BalanceThresholdDetector,
        interaction_detector: ContractInteractionDetector,
    ):
        self.balance_detector = balance_detector
        self.interaction_detector = interaction_detector

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/check-wallet", self.handle_check_wallet)
        app.router.add_post("/check-transaction", self.handle_check_transaction)
        return app

    async def handle_check_wallet(self, request: web.Request) -> web.Response:
        try:
            req = await parse_request(request, CheckWalletRequest)
            crossed = await self.balance_detector.check(req.wallet_address, req.threshold)
        except WalletCheckError as e:
            logger.error(f"check-wallet failed [{e.kind.value}]: {e.message}")
            return error_response(e)
        return web.json_response({"threshold_crossed": crossed})

    async def handle_check_transaction(self, request: web.Request) -> web.Response:
        try:
            req = await parse_request(request, CheckTransactionRequest)
            interacted = await self.interaction_detector.check(req.wallet_address)
        except WalletCheckError as e:
            logger.error(f"check-transaction failed [{e.kind.value}]: {e.message}")
            return error_response(e)
        return web.json_response({"wallet_interacted": interacted})
