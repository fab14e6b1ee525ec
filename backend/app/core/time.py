"""Time utilities for timezone-aware UTC datetimes and reporting timezones."""

from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class InvalidConfiguration(ValueError):
    """A required timezone-sensitive input is missing or malformed."""


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime for defaults and onupdate hooks."""
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive values read back from the database."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def resolve_timezone(name: str | None) -> tzinfo:
    """Resolve an IANA timezone name, refusing to fall back to a default."""
    if not name or not name.strip():
        raise InvalidConfiguration("Reporting timezone is required")
    # Region directories and overlong names surface as OSError from the tz loader.
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidConfiguration(f"Unknown reporting timezone: {name}") from exc


def is_aware(value: datetime | None) -> bool:
    return value is not None and value.tzinfo is not None and value.utcoffset() is not None
