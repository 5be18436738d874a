# walletcheck/errors.py
from enum import Enum


class ErrorKind(Enum):
    INVALID_REQUEST = "invalid_request"
    INVALID_AMOUNT = "invalid_amount"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UPSTREAM_TIMEOUT = "upstream_timeout"
    MALFORMED_UPSTREAM_RESPONSE = "malformed_upstream_response"


class WalletCheckError(Exception):
    """Detection failure carrying an ErrorKind"""

    def __init__(self, kind: ErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(message)


class InvalidAmountError(WalletCheckError):
    def __init__(self, message: str):
        super().__init__(ErrorKind.INVALID_AMOUNT, message)


class UpstreamError(WalletCheckError):
    """数据源请求失败"""


class DuneAPIError(UpstreamError):
    """Dune API 错误"""

    def __init__(self, status: int, message: str):
        self.status = status
        super().__init__(ErrorKind.UPSTREAM_UNAVAILABLE, message)
