from __future__ import annotations

from datetime import date, datetime, time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse an ``HH:MM`` time of day (seconds are always zero)."""
    try:
        parsed = datetime.strptime(value.strip(), "%H:%M")
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid time of day: {value!r} (expected HH:MM)")
    return parsed.time().replace(second=0, microsecond=0)


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def now_local(tz_name: str | None = None) -> datetime:
    """Current wall-clock time in the company time zone, as a naive datetime.

    Note: Wrapped so tests can patch/mock easier.
    """
    if not tz_name:
        return datetime.now()
    try:
        tz = ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        raise ValidationError(f"Unknown time zone: {tz_name}")
    return datetime.now(tz).replace(tzinfo=None)


def at_time_of_day(day: date, tod: time) -> datetime:
    return datetime.combine(day, tod.replace(second=0, microsecond=0))


def iso_or_none(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
