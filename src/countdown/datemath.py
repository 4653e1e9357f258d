"""
Calendar-day arithmetic for countdowns.

Everything here works on local calendar days. Instants are first reduced to
the day they fall on in the local zone and days are then subtracted as dates,
so daylight-saving transitions and leap days never skew a count.
"""
from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from enum import Enum
from typing import Dict, NamedTuple, Optional, Union

# An instant or a calendar day
Moment = Union[date, datetime]


class StatusKind(str, Enum):
    DAYS_AGO = "days_ago"
    YESTERDAY = "yesterday"
    TODAY = "today"
    TOMORROW = "tomorrow"
    IN_DAYS = "in_days"


class Status(NamedTuple):
    """A countdown status as (kind, magnitude); magnitude is abs(day offset)."""

    kind: StatusKind
    magnitude: int


# Message catalogs map a status kind to a template. Templates may use {n}
# (the magnitude) and {days} (singular or plural noun).
RELATIVE: Dict[StatusKind, str] = {
    StatusKind.DAYS_AGO: "{n} {days} ago",
    StatusKind.YESTERDAY: "yesterday",
    StatusKind.TODAY: "today",
    StatusKind.TOMORROW: "tomorrow",
    StatusKind.IN_DAYS: "in {n} {days}",
}

LABEL: Dict[StatusKind, str] = {
    StatusKind.DAYS_AGO: "{n} {days} ago",
    StatusKind.YESTERDAY: "Yesterday",
    StatusKind.TODAY: "Today",
    StatusKind.TOMORROW: "Tomorrow",
    StatusKind.IN_DAYS: "{n} {days}",
}

DETAIL: Dict[StatusKind, str] = {
    StatusKind.DAYS_AGO: "Completed {n} {days} ago",
    StatusKind.YESTERDAY: "Completed 1 day ago",
    StatusKind.TODAY: "Due today",
    StatusKind.TOMORROW: "1 day left",
    StatusKind.IN_DAYS: "{n} {days} left",
}


def local_day(value: Moment, tz: Optional[tzinfo] = None) -> date:
    """
    Return the calendar day `value` falls on in the local zone.

    Naive datetimes are taken as local wall-clock time. Aware datetimes are
    converted to `tz`, or to the system zone when `tz` is None.
    """
    if not isinstance(value, datetime):
        return value
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(tz).date()


def start_of_day(day: date, tz: Optional[tzinfo] = None) -> datetime:
    """
    Return the aware instant at which `day` starts in the local zone.

    When midnight does not exist (a DST gap at 00:00) the result is the first
    instant of the day that does.
    """
    if tz is None:
        return datetime.combine(day, time.min).astimezone()
    wall = datetime.combine(day, time.min, tzinfo=tz)
    return wall.astimezone(timezone.utc).astimezone(tz)


def as_local_instant(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Attach the local zone to a naive datetime; aware values are converted to it."""
    if value.tzinfo is None:
        if tz is None:
            return value.astimezone()
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def day_offset(reference: Moment, target: Moment, tz: Optional[tzinfo] = None) -> int:
    """Whole calendar days from the day of `reference` to the day of `target`."""
    return (local_day(target, tz) - local_day(reference, tz)).days


def status_for(offset: int) -> Status:
    if offset < -1:
        return Status(StatusKind.DAYS_AGO, -offset)
    if offset == -1:
        return Status(StatusKind.YESTERDAY, 1)
    if offset == 0:
        return Status(StatusKind.TODAY, 0)
    if offset == 1:
        return Status(StatusKind.TOMORROW, 1)
    return Status(StatusKind.IN_DAYS, offset)


def day_noun(magnitude: int, singular: str = "day", plural: str = "days") -> str:
    return singular if abs(magnitude) == 1 else plural


def format_status(status: Status, catalog: Optional[Dict[StatusKind, str]] = None) -> str:
    """Render a status through a message catalog (RELATIVE when omitted)."""
    template = (catalog or RELATIVE)[status.kind]
    return template.format(n=status.magnitude, days=day_noun(status.magnitude))
