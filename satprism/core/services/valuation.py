"""Transaction valuation pipeline.

A run takes a normalised extended key, pulls its transaction history from the
index, looks up one historical price per distinct UTC calendar day touched by
that history and values every transaction at both the historical price and the
index's current reference price.

Price lookups for different days run concurrently and are isolated from each
other: a failed lookup only zeroes the quote for its own day. Index failures are
fatal for the run and are reported as a classified :class:`ValuationFailure`.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from typing import Any

import httpx

from satprism.core.codec import KeyCodec
from satprism.core.config import SatPrismConfig
from satprism.core.exceptions import ErrorHandler, MissingInputError, SatPrismError
from satprism.core.logging import get_logger, log_context
from satprism.core.models import (
    IndexSnapshot,
    PriceQuote,
    RawTransaction,
    ValuationOutcome,
    ValuationRecord,
)
from satprism.core.providers import (
    BlockchairIndex,
    CoinGeckoPriceHistory,
    PriceHistoryProvider,
    TransactionIndexProvider,
)
from satprism.core.services.dates import (
    INVALID_DATE,
    format_display_time,
    history_date_key,
    parse_timestamp,
    resolve_timezone,
)


@dataclass(frozen=True)
class _DatedTransaction:
    tx: RawTransaction
    moment: datetime | None
    date_key: str | None
    display_time: str


class ValuationPipeline:
    """Values the transactions of one extended key per run."""

    def __init__(
        self,
        index: TransactionIndexProvider,
        prices: PriceHistoryProvider,
        *,
        logger: Any = None,
        display_tz: tzinfo = UTC,
        placeholder: str = "N/A",
    ) -> None:
        self.index = index
        self.prices = prices
        self.display_tz = display_tz
        self.placeholder = placeholder
        self._logger = logger or get_logger(__name__)
        self._errors = ErrorHandler(self._logger)

    async def run(self, normalized_key: str | None) -> ValuationOutcome:
        """Value ``normalized_key``'s transactions; never raises."""
        try:
            records = await self.evaluate(normalized_key)
        except SatPrismError as error:
            self._errors.log_error(error, {"operation": "valuation", "key": normalized_key}, level="WARNING")
            return ValuationOutcome.failed(error)
        except Exception as error:
            return ValuationOutcome.failed(
                self._errors.handle_exception(error, "valuation", provider=self.index.name, key=normalized_key)
            )
        return ValuationOutcome.success(records)

    async def evaluate(self, normalized_key: str | None) -> list[ValuationRecord]:
        """Raising counterpart of :meth:`run`."""
        if not normalized_key or not normalized_key.strip():
            raise MissingInputError()

        snapshot = await self.index.fetch_snapshot(normalized_key)
        self._logger.debug(
            "Fetched {count} transactions for key",
            count=len(snapshot.transactions),
            provider=self.index.name,
        )

        dated = [self._date_transaction(tx) for tx in snapshot.transactions]
        unique_dates = list(dict.fromkeys(item.date_key for item in dated if item.date_key))
        quotes = await self.fetch_quotes(unique_dates)

        return [self._value(item, quotes, snapshot) for item in dated]

    async def fetch_quotes(self, date_keys: list[str]) -> dict[str, float]:
        """One lookup per date, issued together and joined before returning."""
        if not date_keys:
            return {}
        results = await asyncio.gather(*(self._fetch_quote(date_key) for date_key in date_keys))
        return {quote.date_key: quote.price for quote in results}

    async def _fetch_quote(self, date_key: str) -> PriceQuote:
        try:
            price = await self.prices.historical_price(date_key)
        except Exception as error:
            # a failed lookup only zeroes its own day
            self._logger.warning(
                "Failed to fetch historical price for {date_key}: {error}",
                date_key=date_key,
                error=str(error),
                provider=self.prices.name,
            )
            price = 0.0
        return PriceQuote(date_key=date_key, price=price)

    def _date_transaction(self, tx: RawTransaction) -> _DatedTransaction:
        if tx.time is None:
            return _DatedTransaction(tx, None, None, self.placeholder)
        try:
            moment = parse_timestamp(tx.time)
            display = format_display_time(moment, self.display_tz)
        except (ValueError, OverflowError):
            self._logger.warning("Unparseable timestamp {time!r} on {txid}", time=tx.time, txid=tx.hash)
            return _DatedTransaction(tx, None, None, INVALID_DATE)
        return _DatedTransaction(tx, moment, history_date_key(moment), display)

    @staticmethod
    def _value(item: _DatedTransaction, quotes: dict[str, float], snapshot: IndexSnapshot) -> ValuationRecord:
        historical_price = quotes.get(item.date_key, 0.0) if item.date_key else 0.0
        return ValuationRecord.build(
            txid=item.tx.hash,
            display_time=item.display_time,
            balance_change=item.tx.balance_change,
            historical_price=historical_price,
            current_price=snapshot.market_price,
        )


class ValuationService:
    """Normalises caller keys and runs them through a :class:`ValuationPipeline`.

    Use as an async context manager so the collaborators' HTTP clients are
    closed when the caller is done.
    """

    def __init__(
        self,
        pipeline: ValuationPipeline,
        codec: KeyCodec | None = None,
        logger: Any = None,
    ) -> None:
        self.pipeline = pipeline
        self._logger = logger or get_logger(__name__)
        self.codec = codec or KeyCodec(self._logger)

    @classmethod
    def from_config(
        cls,
        config: SatPrismConfig | None = None,
        *,
        logger: Any = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ValuationService:
        config = config or SatPrismConfig()
        logger = logger or get_logger("satprism.valuation")
        pipeline = ValuationPipeline(
            BlockchairIndex.from_config(config.index, config.http, transport=transport),
            CoinGeckoPriceHistory.from_config(config.prices, config.http, transport=transport),
            logger=logger,
            display_tz=resolve_timezone(config.display.timezone),
            placeholder=config.display.placeholder,
        )
        return cls(pipeline, logger=logger)

    async def __aenter__(self) -> ValuationService:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.pipeline.index.close()
        await self.pipeline.prices.close()

    def normalize(self, raw_key: str) -> str:
        return self.codec.normalize(raw_key.strip())

    async def value(self, raw_key: str | None) -> ValuationOutcome:
        """Normalise ``raw_key`` and value its transactions."""
        with log_context(operation="valuation"):
            normalized = self.normalize(raw_key) if raw_key else raw_key
            return await self.pipeline.run(normalized)
