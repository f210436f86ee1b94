"""Common time utilities."""

from __future__ import annotations

import datetime as dt


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def local_utc_offset_hours(now: dt.datetime | None = None) -> int:
    """Return the system timezone's UTC offset in whole hours.

    Fractional offsets (for example ``+05:30``) are truncated towards zero.
    """
    local = (now or dt.datetime.now()).astimezone()
    offset = local.utcoffset() or dt.timedelta()
    return int(offset.total_seconds() / 3600)


def parse_github_datetime(value: str) -> dt.datetime:
    """Parse a GitHub ISO 8601 timestamp into an aware UTC datetime."""
    text = value.replace("Z", "+00:00")
    parsed = dt.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        msg = f"GitHub datetime missing timezone: {value}"
        raise ValueError(msg)
    return parsed.astimezone(dt.UTC)


def format_github_datetime(value: dt.datetime) -> str:
    """Render an aware datetime as the ``YYYY-MM-DDTHH:MM:SSZ`` GitHub expects."""
    if value.tzinfo is None:
        msg = "datetime must be timezone-aware"
        raise ValueError(msg)
    return value.astimezone(dt.UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
