from __future__ import annotations

from datetime import date, datetime, time, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM or HH:MM:SS."""
    v = (value or "").strip()
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time of day: {value!r}")


@lru_cache(maxsize=64)
def resolve_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown time zone: {name!r}")


def now_utc() -> datetime:
    """Current aware UTC time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now(timezone.utc)


def to_local(moment: datetime, zone: ZoneInfo) -> datetime:
    # Naive datetimes are taken as already expressed in the actor's zone.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=zone)
    return moment.astimezone(zone)


def local_day(moment: datetime, zone: ZoneInfo) -> date:
    return to_local(moment, zone).date()


def local_time_of_day(moment: datetime, zone: ZoneInfo) -> time:
    return to_local(moment, zone).time()


def to_utc_naive(moment: datetime | None) -> datetime | None:
    """Normalize for MySQL DATETIME columns (stored as UTC)."""
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def from_utc_naive(moment: datetime | None) -> datetime | None:
    if moment is None:
        return None
    return moment.replace(tzinfo=timezone.utc)


def isoformat_or_none(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment else None
