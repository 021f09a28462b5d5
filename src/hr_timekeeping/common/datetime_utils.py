from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return parse_iso_date(value)


def now_utc() -> datetime:
    """Current UTC instant truncated to milliseconds.

    Note: ledger keys are stored with millisecond precision, so the clock is too.
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by MySQL) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Format an instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    if value is None:
        return None
    value = ensure_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_iso_instant(value: str) -> datetime:
    text = (value or "").strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        raise ValidationError(f"Invalid timestamp '{value}'")


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def day_bounds(start: date, end: Optional[date] = None) -> tuple[datetime, datetime]:
    """Half-open UTC interval covering ``start``..``end`` (inclusive dates)."""
    end = end or start
    return start_of_day(start), start_of_day(end + timedelta(days=1))


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600
