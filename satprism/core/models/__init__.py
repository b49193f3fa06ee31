"""Data models module."""

from satprism.core.models.transactions import IndexSnapshot, PriceQuote, RawTransaction
from satprism.core.models.valuation import (
    SATOSHI_PER_BTC,
    Direction,
    FailureKind,
    ValuationFailure,
    ValuationOutcome,
    ValuationRecord,
)

__all__ = [
    "RawTransaction",
    "IndexSnapshot",
    "PriceQuote",
    "Direction",
    "ValuationRecord",
    "FailureKind",
    "ValuationFailure",
    "ValuationOutcome",
    "SATOSHI_PER_BTC",
]
