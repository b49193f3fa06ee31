"""Models for data returned by the external collaborators."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RawTransaction(BaseModel):
    """One on-chain event for the queried key, as reported by the index."""

    model_config = ConfigDict(frozen=True)

    hash: str
    time: str | None = None
    balance_change: int = 0
    block_id: int | None = None
    address: str | None = None

    @field_validator("balance_change", mode="before")
    @classmethod
    def default_missing_delta(cls, value: object) -> object:
        """The index omits or nulls the delta for some rows; treat that as zero."""
        return 0 if value is None else value

    @field_validator("time", mode="before")
    @classmethod
    def blank_time_is_missing(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class IndexSnapshot(BaseModel):
    """Transaction history and reference price for one extended key."""

    key: str
    transactions: list[RawTransaction] = Field(default_factory=list)
    market_price: float

    @model_validator(mode="after")
    def unique_hashes(self) -> IndexSnapshot:
        seen: set[str] = set()
        for tx in self.transactions:
            if tx.hash in seen:
                raise ValueError(f"duplicate transaction hash {tx.hash}")
            seen.add(tx.hash)
        return self


class PriceQuote(BaseModel):
    """Fiat price for a single calendar day (``DD-MM-YYYY``)."""

    model_config = ConfigDict(frozen=True)

    date_key: str
    price: float = 0.0
