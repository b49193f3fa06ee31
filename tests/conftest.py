"""Pytest configuration for the satprism test suite."""

from __future__ import annotations

import base58
import pytest
from loguru import logger

from satprism.core.codec import ZPUB_VERSION
from satprism.core.exceptions import RemoteFetchError
from satprism.core.models import IndexSnapshot, RawTransaction
from satprism.core.providers import PriceHistoryProvider, TransactionIndexProvider

# BIP32 test vector 1, master extended public key.
LEGACY_KEY = "xpub661MyMwAqRbcFtXgS5sYJABqqG9YLmC4Q1Rdap9gSE8NqtwybGhePY2gZ29ESFjqJoCu1Rupje8YtGqsefD265TMg7usUDFdp6W1EGMcet8"


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--satprism-run-integration",
        action="store_true",
        default=False,
        help="Run satprism integration tests that call Blockchair and CoinGecko.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the integration marker for satprism tests."""

    config.addinivalue_line(
        "markers",
        "integration: marks satprism tests requiring network access",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--satprism-run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="integration tests require --satprism-run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def _reset_loguru():
    """Drop sinks configured by a test so later tests never write to closed streams."""

    yield
    logger.remove()


class StubIndex(TransactionIndexProvider):
    """In-memory transaction index recording every lookup."""

    name = "stub-index"

    def __init__(self, snapshot: IndexSnapshot | None = None, error: Exception | None = None) -> None:
        self.snapshot = snapshot
        self.error = error
        self.calls: list[str] = []
        self.closed = False

    async def fetch_snapshot(self, key: str) -> IndexSnapshot:
        self.calls.append(key)
        if self.error is not None:
            raise self.error
        assert self.snapshot is not None
        return self.snapshot.model_copy(update={"key": key})

    async def close(self) -> None:
        self.closed = True


class StubPrices(PriceHistoryProvider):
    """In-memory price history; dates in ``failing`` raise a remote failure."""

    name = "stub-prices"

    def __init__(self, prices: dict[str, float] | None = None, failing: set[str] | None = None) -> None:
        self.prices = prices or {}
        self.failing = failing or set()
        self.calls: list[str] = []
        self.closed = False

    async def historical_price(self, date_key: str) -> float:
        self.calls.append(date_key)
        if date_key in self.failing:
            raise RemoteFetchError(
                f"Failed to fetch historical price for {date_key}",
                provider_name=self.name,
                status_code=429,
                body="rate limited",
            )
        return self.prices.get(date_key, 0.0)

    async def close(self) -> None:
        self.closed = True


def make_snapshot(transactions: list[dict], market_price: float = 60000.0) -> IndexSnapshot:
    return IndexSnapshot(
        key=LEGACY_KEY,
        transactions=[RawTransaction(**tx) for tx in transactions],
        market_price=market_price,
    )


@pytest.fixture
def legacy_key() -> str:
    return LEGACY_KEY


@pytest.fixture
def witness_key() -> str:
    """The same key material as ``legacy_key`` carrying the zpub prefix."""

    payload = base58.b58decode_check(LEGACY_KEY)
    return base58.b58encode_check(ZPUB_VERSION + payload[4:]).decode("ascii")


@pytest.fixture
def stub_index():
    def factory(transactions: list[dict] | None = None, market_price: float = 60000.0, error: Exception | None = None):
        snapshot = make_snapshot(transactions or [], market_price) if error is None else None
        return StubIndex(snapshot=snapshot, error=error)

    return factory


@pytest.fixture
def stub_prices():
    def factory(prices: dict[str, float] | None = None, failing: set[str] | None = None):
        return StubPrices(prices=prices, failing=failing)

    return factory
