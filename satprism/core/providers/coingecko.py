"""CoinGecko historical price provider."""

from __future__ import annotations

import httpx

from satprism.core.config import HttpSettings, PriceHistoryConfig
from satprism.core.http_adapter import HttpClient, create_http_client
from satprism.core.providers.base import HttpProviderMixin, PriceHistoryProvider

DEMO_API_KEY_HEADER = "x-cg-demo-api-key"


class CoinGeckoPriceHistory(HttpProviderMixin, PriceHistoryProvider):
    """Bitcoin USD price for a calendar day via ``/coins/bitcoin/history``."""

    name = "coingecko"
    HISTORY_PATH = "/coins/bitcoin/history"

    def __init__(self, client: HttpClient) -> None:
        self.client = client

    @classmethod
    def from_config(
        cls,
        config: PriceHistoryConfig,
        http: HttpSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> CoinGeckoPriceHistory:
        headers = {DEMO_API_KEY_HEADER: config.api_key} if config.api_key else None
        return cls(create_http_client(config.base_url, http, headers=headers, transport=transport))

    async def historical_price(self, date_key: str) -> float:
        response = await self.client.get(self.HISTORY_PATH, params={"date": date_key, "localization": "false"})
        self._check_response(response, f"historical price for {date_key}")
        payload = self._json(response)
        if not isinstance(payload, dict):
            return 0.0

        price = ((payload.get("market_data") or {}).get("current_price") or {}).get("usd")
        if not isinstance(price, (int, float)) or isinstance(price, bool):
            return 0.0
        return float(price)
