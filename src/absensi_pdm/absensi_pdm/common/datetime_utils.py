from __future__ import annotations

from datetime import datetime, timezone

from ..core.constants import CHECKIN_PIN_HOUR


def now_local() -> datetime:
    """Current local time (timezone-aware).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().astimezone()


def to_local(value: datetime) -> datetime:
    """Convert to the local timezone; naive values are taken as local wall time."""
    return value.astimezone()


def to_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc)


def local_date_string(value: datetime) -> str:
    """Calendar day of ``value`` in local time as YYYY-MM-DD (never the UTC day)."""
    return to_local(value).strftime("%Y-%m-%d")


def month_prefix(year: int, month_index: int) -> str:
    return f"{int(year):04d}-{int(month_index) + 1:02d}"


def pinned_month_date(year: int, month_index: int) -> datetime:
    """First day of the month at the fixed check-in hour, local time."""
    return datetime(int(year), int(month_index) + 1, 1, CHECKIN_PIN_HOUR, 0, 0).astimezone()


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO timestamp; accepts the trailing ``Z`` written by browsers."""
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    parsed = datetime.fromisoformat(v)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    utc = to_utc(value)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
