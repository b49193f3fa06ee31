"""Blockchair extended-public-key dashboard provider."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from satprism.core.config import HttpSettings, IndexConfig
from satprism.core.exceptions import InternalFailureError, NotFoundError
from satprism.core.http_adapter import HttpClient, create_http_client
from satprism.core.models import IndexSnapshot
from satprism.core.providers.base import HttpProviderMixin, TransactionIndexProvider


class BlockchairIndex(HttpProviderMixin, TransactionIndexProvider):
    """Reads ``/bitcoin/dashboards/xpub/{key}`` with transaction details."""

    name = "blockchair"
    DASHBOARD_PATH = "/bitcoin/dashboards/xpub/{key}"

    def __init__(self, client: HttpClient, transaction_limit: int = 20, api_key: str | None = None) -> None:
        self.client = client
        self.transaction_limit = transaction_limit
        self.api_key = api_key

    @classmethod
    def from_config(
        cls,
        config: IndexConfig,
        http: HttpSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> BlockchairIndex:
        client = create_http_client(config.base_url, http, transport=transport)
        return cls(client, transaction_limit=config.transaction_limit, api_key=config.api_key)

    def dashboard_path(self, key: str) -> str:
        """Dashboard URL path with ``key`` escaped as exactly one path segment."""
        segment = quote(key, safe="")
        if segment in (".", ".."):
            segment = segment.replace(".", "%2E")
        return self.DASHBOARD_PATH.format(key=segment)

    async def fetch_snapshot(self, key: str) -> IndexSnapshot:
        params: dict[str, Any] = {"transaction_details": "true", "limit": self.transaction_limit}
        if self.api_key:
            params["key"] = self.api_key

        response = await self.client.get(self.dashboard_path(key), params=params)
        self._check_response(response, "data")
        payload = self._json(response)

        data = payload.get("data") if isinstance(payload, dict) else None
        # Blockchair answers with an empty list rather than an object when it has nothing.
        if not isinstance(data, dict) or not data.get(key):
            raise NotFoundError(key=key)

        context = payload.get("context") or {}
        try:
            return IndexSnapshot(
                key=key,
                transactions=data[key].get("transactions") or [],
                market_price=context.get("market_price_usd"),
            )
        except (ValidationError, AttributeError) as exc:
            raise InternalFailureError(
                "Malformed response from blockchair",
                details={"provider": self.name, "error": str(exc)},
            ) from exc
