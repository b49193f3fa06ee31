"""数据提供商抽象基类."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx

from satprism.core.exceptions import InternalFailureError, RemoteFetchError
from satprism.core.http_adapter import HttpClient
from satprism.core.models import IndexSnapshot


class TransactionIndexProvider(ABC):
    """交易索引服务抽象: 按扩展公钥返回交易列表和当前参考价格."""

    name: str = "index"

    @abstractmethod
    async def fetch_snapshot(self, key: str) -> IndexSnapshot:
        """获取 ``key`` 的交易快照.

        Raises:
            RemoteFetchError: 服务返回非成功响应
            NotFoundError: 服务没有该公钥的数据
        """

    async def close(self) -> None:
        """Release any held resources."""


class PriceHistoryProvider(ABC):
    """历史价格服务抽象: 按 ``DD-MM-YYYY`` 日期返回法币价格."""

    name: str = "prices"

    @abstractmethod
    async def historical_price(self, date_key: str) -> float:
        """返回该日价格, 无数据时返回 0.0.

        Raises:
            RemoteFetchError: 服务返回非成功响应
        """

    async def close(self) -> None:
        """Release any held resources."""


class HttpProviderMixin:
    """Shared response handling for providers backed by :class:`HttpClient`."""

    name: str
    client: HttpClient

    def _check_response(self, response: httpx.Response, what: str) -> None:
        if response.is_success:
            return
        raise RemoteFetchError(
            f"Error fetching {what} from {self.name}",
            provider_name=self.name,
            status_code=response.status_code,
            body=response.text,
        )

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise InternalFailureError(
                f"{self.name} returned a non-JSON payload",
                details={"provider": self.name, "status_code": response.status_code},
            ) from exc

    async def close(self) -> None:
        await self.client.close()
