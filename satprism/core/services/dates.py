"""Timestamp parsing and the two date renderings used by valuations."""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from satprism.core.exceptions import ConfigurationError

HISTORY_DATE_FORMAT = "%d-%m-%Y"
INVALID_DATE = "Invalid Date"

# English names regardless of LC_TIME.
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def parse_timestamp(raw: str) -> datetime:
    """Parse an index timestamp such as ``2024-12-01 13:55:41``.

    Naive timestamps are taken to be UTC. The result is always aware and in UTC.

    Raises:
        ValueError: ``raw`` is not an ISO 8601 style timestamp, or its UTC
            instant falls outside the years 1 to 9999.
    """
    parsed = datetime.fromisoformat(raw.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except OverflowError as exc:
        raise ValueError(f"timestamp {raw!r} is out of range in UTC") from exc


def history_date_key(moment: datetime) -> str:
    """Truncate to the UTC calendar day and render as ``DD-MM-YYYY``."""
    return moment.astimezone(UTC).strftime(HISTORY_DATE_FORMAT)


def format_display_time(moment: datetime, tz: tzinfo = UTC) -> str:
    """Render e.g. ``1 December 2024 13:55:41`` (24-hour clock) in ``tz``."""
    local = moment.astimezone(tz)
    return f"{local.day} {MONTH_NAMES[local.month - 1]} {local.year} {local:%H:%M:%S}"


def resolve_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown display timezone {name!r}", details={"timezone": name}) from exc
