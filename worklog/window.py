"""Resolve the calendar day whose activity is summarised.

A run targets one local calendar day. GitHub reports timestamps in UTC, so
membership is decided by shifting each timestamp by the configured offset and
comparing the resulting date with the target date, rather than by comparing
raw instants.

Usage
-----
>>> window = resolve_window("2024-03-01", 0)
>>> window.start.isoformat()
'2024-03-01T00:00:00+00:00'
>>> import datetime as dt
>>> window.contains(dt.datetime(2024, 3, 1, 23, 59, 59, tzinfo=dt.UTC))
True

"""

from __future__ import annotations

import dataclasses
import datetime as dt
import re

from worklog.common.time import local_utc_offset_hours
from worklog.errors import InvalidDateError
from worklog.logging import get_logger, log_warning

logger = get_logger(__name__)

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DAY_START = dt.time(0, 0, 0)
_DAY_END = dt.time(23, 59, 59)


@dataclasses.dataclass(frozen=True, slots=True)
class TimeWindow:
    """Inclusive UTC bounds of one local calendar day.

    Attributes
    ----------
    target_date
        Local calendar day being summarised.
    offset_hours
        Hours added to UTC to obtain local time.
    start
        UTC instant of local ``00:00:00`` on ``target_date``.
    end
        UTC instant of local ``23:59:59`` on ``target_date``.

    """

    target_date: dt.date
    offset_hours: int
    start: dt.datetime
    end: dt.datetime

    def __post_init__(self) -> None:
        """Reject inverted windows."""
        if self.start > self.end:
            msg = f"window start {self.start} is after end {self.end}"
            raise ValueError(msg)

    @classmethod
    def for_date(cls, target_date: dt.date, offset_hours: int) -> TimeWindow:
        """Build the window covering ``target_date`` at the given UTC offset."""
        tz = dt.timezone(dt.timedelta(hours=offset_hours))
        start = dt.datetime.combine(target_date, _DAY_START, tzinfo=tz)
        end = dt.datetime.combine(target_date, _DAY_END, tzinfo=tz)
        return cls(
            target_date=target_date,
            offset_hours=offset_hours,
            start=start.astimezone(dt.UTC),
            end=end.astimezone(dt.UTC),
        )

    @property
    def label(self) -> str:
        """Return the target date in ``YYYY-MM-DD`` form."""
        return self.target_date.isoformat()

    def contains(self, timestamp: dt.datetime) -> bool:
        """Return whether a remote UTC timestamp falls on the target day."""
        if timestamp.tzinfo is None:
            msg = "timestamp must be timezone-aware"
            raise ValueError(msg)
        shifted = timestamp.astimezone(dt.UTC) + dt.timedelta(
            hours=self.offset_hours
        )
        return shifted.date() == self.target_date


def parse_target_date(text: str) -> dt.date:
    """Parse a ``YYYY-MM-DD`` argument.

    Raises
    ------
    InvalidDateError
        If the text does not match the pattern or names no real day.

    """
    if not _DATE_PATTERN.match(text):
        raise InvalidDateError.malformed(text)
    try:
        return dt.date.fromisoformat(text)
    except ValueError as exc:
        raise InvalidDateError.not_a_date(text) from exc


def parse_offset_hours(text: str | None, *, default: int) -> int:
    """Parse an integer hour offset, keeping ``default`` for unusable input."""
    if text is None:
        return default
    try:
        return int(text.strip())
    except ValueError:
        log_warning(
            logger,
            "Ignoring non-integer timezone offset %r, using %d",
            text,
            default,
        )
        return default


def resolve_window(
    date_text: str | None = None,
    offset_hours: int | None = None,
    *,
    now: dt.datetime | None = None,
) -> TimeWindow:
    """Resolve the target window from optional CLI-style arguments.

    Parameters
    ----------
    date_text
        Target day as ``YYYY-MM-DD``. ``None`` selects today's local date.
    offset_hours
        Hours east of UTC. ``None`` selects the system timezone offset.
    now
        Clock override used when ``date_text`` or ``offset_hours`` is absent.

    Returns
    -------
    TimeWindow
        Inclusive window for the target day.

    Raises
    ------
    InvalidDateError
        If ``date_text`` is malformed.

    """
    if date_text is None:
        current = now.astimezone() if now is not None else dt.datetime.now()
        target_date = current.date()
    else:
        target_date = parse_target_date(date_text)

    if offset_hours is None:
        offset_hours = local_utc_offset_hours(now)

    return TimeWindow.for_date(target_date, offset_hours)


__all__ = [
    "TimeWindow",
    "parse_offset_hours",
    "parse_target_date",
    "resolve_window",
]
