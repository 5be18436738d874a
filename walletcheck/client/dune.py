"""Dune API 客户端"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from walletcheck.amount import parse_decimal
from walletcheck.client.models import Direction, Interaction, Transfer
from walletcheck.config import DuneConfig
from walletcheck.errors import DuneAPIError, ErrorKind, UpstreamError

logger = logging.getLogger(__name__)


def _malformed(message: str) -> UpstreamError:
    return UpstreamError(ErrorKind.MALFORMED_UPSTREAM_RESPONSE, message)


def _str_field(row: dict[str, Any], key: str, context: str) -> str:
    value = row.get(key)
    if not isinstance(value, str):
        raise _malformed(f"{context}: '{key}' not found or not a string")
    return value


def _bool_field(row: dict[str, Any], key: str, context: str) -> bool:
    value = row.get(key)
    if not isinstance(value, bool):
        raise _malformed(f"{context}: '{key}' not found or not a bool")
    return value


def _block_field(row: dict[str, Any], key: str, context: str) -> int:
    value = row.get(key)
    # JSON numbers may arrive as floats; bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _malformed(f"{context}: '{key}' not found or not a number")
    if isinstance(value, float):
        if not value.is_integer():
            raise _malformed(f"{context}: '{key}' is not an integer: {value}")
        value = int(value)
    if value < 0:
        raise _malformed(f"{context}: '{key}' is negative: {value}")
    return value


def _query_rows(data: Any, context: str) -> list[Any]:
    """提取 saved query 结果中的 result.rows"""
    result = data.get("result") if isinstance(data, dict) else None
    rows = result.get("rows") if isinstance(result, dict) else None
    if not isinstance(rows, list):
        raise _malformed(f"{context}: 'result.rows' not found in response")
    return rows


@dataclass
class DuneClient:
    """Dune API 客户端"""

    config: DuneConfig = field(repr=False)
    _session: aiohttp.ClientSession | None = field(default=None, repr=False)

    async def init(self) -> None:
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "DuneClient":
        await self.init()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _request(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """发送 GET 请求"""
        if self._session is None:
            raise RuntimeError("Session not initialized. Use 'async with' context.")

        url = f"{self.config.base_url}{endpoint}"
        headers = {"X-Dune-Api-Key": self.config.api_key}
        logger.debug(f"GET {url} params={params}")

        try:
            response = await self._session.get(url, params=params, headers=headers)

            if response.status != 200:
                error_text = await response.text()
                try:
                    error_data = json.loads(error_text)
                except json.JSONDecodeError:
                    raise DuneAPIError(response.status, error_text)
                if isinstance(error_data, dict):
                    raise DuneAPIError(response.status, str(error_data.get("error", error_text)))
                raise DuneAPIError(response.status, error_text)

            return await response.json(content_type=None)
        except asyncio.TimeoutError:
            raise UpstreamError(
                ErrorKind.UPSTREAM_TIMEOUT,
                f"Request to {endpoint} timed out after {self.config.timeout_seconds}s",
            )
        except aiohttp.ClientError as e:
            raise UpstreamError(
                ErrorKind.UPSTREAM_UNAVAILABLE, f"Request to {endpoint} failed: {e}"
            )
        except ValueError as e:
            raise _malformed(f"Invalid JSON from {endpoint}: {e}")

    async def fetch_balance(self, address: str) -> int:
        """获取钱包原生币余额 (wei)"""
        data = await self._request(
            f"/api/beta/balance/{address}",
            {"chain_ids": self.config.chain_id},
        )

        balances = data.get("balances") if isinstance(data, dict) else None
        if not isinstance(balances, list) or not balances:
            raise _malformed("no balances found in response")
        if not isinstance(balances[0], dict):
            raise _malformed("invalid balance format")

        amount = _str_field(balances[0], "amount", "balance")
        return parse_decimal(amount)

    async def fetch_transfers(self, address: str) -> list[Transfer]:
        """获取钱包最近的转账记录"""
        data = await self._request(
            f"/api/beta/transactions/{address}",
            {"chain_ids": self.config.chain_id, "limit": self.config.transfer_limit},
        )

        rows = data.get("transactions") if isinstance(data, dict) else None
        if not isinstance(rows, list):
            raise _malformed("no transactions found in response")

        transfers: list[Transfer] = []
        for row in rows:
            if not isinstance(row, dict):
                raise _malformed(f"transaction: invalid row {row!r}")
            transfers.append(
                Transfer(
                    hash=_str_field(row, "hash", "transaction"),
                    value=_str_field(row, "value", "transaction"),
                    direction=Direction.from_transaction_type(
                        _str_field(row, "transaction_type", "transaction")
                    ),
                    block_number=_block_field(row, "block_number", "transaction"),
                    block_time=_str_field(row, "block_time", "transaction"),
                    from_address=_str_field(row, "from", "transaction"),
                    to_address=_str_field(row, "address", "transaction"),
                )
            )
        return transfers

    async def fetch_current_block(self) -> int:
        """获取最新区块高度"""
        data = await self._request(
            f"/api/v1/query/{self.config.current_block_query_id}/results",
            {"limit": self.config.query_row_limit},
        )

        rows = _query_rows(data, "current block")
        if not rows or not isinstance(rows[0], dict):
            raise _malformed("current block: no rows in response")
        return _block_field(rows[0], "latest_block_number", "current block")

    async def fetch_contract_interactions(self) -> list[Interaction]:
        """获取合约调用记录 (全部地址)"""
        data = await self._request(
            f"/api/v1/query/{self.config.interaction_query_id}/results",
            {"limit": self.config.query_row_limit},
        )

        interactions: list[Interaction] = []
        for row in _query_rows(data, "contract interactions"):
            if not isinstance(row, dict):
                raise _malformed(f"contract interactions: invalid row {row!r}")
            interactions.append(
                Interaction(
                    sender=_str_field(row, "sender", "contract interaction"),
                    block_number=_block_field(row, "block_number", "contract interaction"),
                    success=_bool_field(row, "success", "contract interaction"),
                    tx_hash=_str_field(row, "tx_hash", "contract interaction"),
                )
            )
        logger.debug(f"Fetched {len(interactions)} contract interactions")
        return interactions
