"""Remote collaborators: transaction index and price history."""

from satprism.core.providers.base import (
    HttpProviderMixin,
    PriceHistoryProvider,
    TransactionIndexProvider,
)
from satprism.core.providers.blockchair import BlockchairIndex
from satprism.core.providers.coingecko import CoinGeckoPriceHistory

__all__ = [
    "TransactionIndexProvider",
    "PriceHistoryProvider",
    "HttpProviderMixin",
    "BlockchairIndex",
    "CoinGeckoPriceHistory",
]
