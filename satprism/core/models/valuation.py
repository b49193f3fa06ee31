"""Valuation output models."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from satprism.core.exceptions import SatPrismError

SATOSHI_PER_BTC = 1e8


class Direction(str, Enum):
    """Direction of a transaction relative to the queried key."""

    RECEIVE = "receive"
    SEND = "send"

    @classmethod
    def from_delta(cls, balance_change: int) -> Direction:
        return cls.RECEIVE if balance_change >= 0 else cls.SEND


class ValuationRecord(BaseModel):
    """Historical versus current fiat value of one transaction.

    Serialised with ``by_alias=True`` the record uses the wire names the
    presentation layer expects (``txid``, ``time``, ``amount``, ``usdAmount``,
    ``currentUsd``, ``diffUsd``, ``type``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    txid: str
    display_time: str = Field(serialization_alias="time")
    quantity: float = Field(serialization_alias="amount")
    historical_value: float = Field(serialization_alias="usdAmount")
    current_value: float = Field(serialization_alias="currentUsd")
    diff: float = Field(serialization_alias="diffUsd")
    direction: Direction = Field(serialization_alias="type")

    @model_validator(mode="after")
    def diff_matches_values(self) -> ValuationRecord:
        expected = self.current_value - self.historical_value
        if not math.isclose(self.diff, expected, rel_tol=1e-9, abs_tol=1e-9):
            raise ValueError(f"diff {self.diff} != current_value - historical_value ({expected})")
        return self

    @classmethod
    def build(
        cls,
        txid: str,
        display_time: str,
        balance_change: int,
        historical_price: float,
        current_price: float,
    ) -> ValuationRecord:
        """Value ``balance_change`` satoshi at both prices."""
        quantity = balance_change / SATOSHI_PER_BTC
        historical_value = quantity * historical_price
        current_value = quantity * current_price
        return cls(
            txid=txid,
            display_time=display_time,
            quantity=quantity,
            historical_value=historical_value,
            current_value=current_value,
            diff=current_value - historical_value,
            direction=Direction.from_delta(balance_change),
        )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class FailureKind(str, Enum):
    """Classified failure surfaced to the caller of a valuation run."""

    MISSING_INPUT = "MissingInput"
    REMOTE_FETCH_FAILURE = "RemoteFetchFailure"
    NOT_FOUND = "NotFound"
    INTERNAL_FAILURE = "InternalFailure"


class ValuationFailure(BaseModel):
    """Structured error result of a valuation run."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    code: str
    detail: str
    status_code: int | None = None
    body: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_error(cls, error: SatPrismError) -> ValuationFailure:
        return cls(
            kind=FailureKind(error.kind),
            code=error.error_code,
            detail=error.message,
            status_code=getattr(error, "status_code", None),
            body=getattr(error, "body", None),
            details=dict(error.details),
        )


class ValuationOutcome(BaseModel):
    """Either the ordered valuation records or one classified failure."""

    records: list[ValuationRecord] | None = None
    failure: ValuationFailure | None = None

    @model_validator(mode="after")
    def exactly_one(self) -> ValuationOutcome:
        if (self.records is None) == (self.failure is None):
            raise ValueError("a valuation outcome carries either records or a failure")
        return self

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, records: list[ValuationRecord]) -> ValuationOutcome:
        return cls(records=records)

    @classmethod
    def failed(cls, error: SatPrismError) -> ValuationOutcome:
        return cls(failure=ValuationFailure.from_error(error))
