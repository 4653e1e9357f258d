"""
Widget timeline scheduling and display prioritization.

build_timeline and prioritize are pure functions of their inputs. Nothing here
touches the repository; widget hosts work from records read out of the shared
store (see repositories.load_shared_records).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .datemath import as_local_instant, local_day, start_of_day
from .models import CountdownRecord
from .repositories import load_shared_records
from .settings import DEFAULT_TIMELINE_MAX_ENTRIES, Settings, get_settings
from .storage import get_store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineEntry:
    """One widget render: the instant it becomes current and the records to show."""

    instant: datetime
    records: Tuple[CountdownRecord, ...]


@dataclass(frozen=True)
class Timeline:
    """
    Snapshots for a widget host.

    next_refresh is when the host should ask for a new timeline; it equals the
    instant of the last entry.
    """

    entries: Tuple[TimelineEntry, ...]
    next_refresh: datetime


class WidgetFamily(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @property
    def capacity(self) -> int:
        """How many countdowns a widget of this size shows."""
        return _CAPACITY[self]


_CAPACITY = {
    WidgetFamily.SMALL: 1,
    WidgetFamily.MEDIUM: 2,
    WidgetFamily.LARGE: 4,
}


# PUBLIC_INTERFACE
def next_midnight(instant: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Return the first local start of day strictly after instant."""
    current = as_local_instant(instant, tz)
    return start_of_day(local_day(current, tz) + timedelta(days=1), tz)


# PUBLIC_INTERFACE
def build_timeline(
    records: Sequence[CountdownRecord],
    now: datetime,
    max_entries: int = DEFAULT_TIMELINE_MAX_ENTRIES,
    tz: Optional[tzinfo] = None,
) -> Timeline:
    """
    Produce widget snapshots starting at now, then one per local midnight.

    Behavior:
    - The first entry is at now; later entries are at each local midnight
      strictly after now, for at most max_entries entries in total.
    - Every entry carries the same records; nothing is refetched.
    - Generation stops early when the next midnight cannot be computed or
      would not be strictly later than the previous entry.
    """
    snapshot = tuple(records)
    first = as_local_instant(now, tz)
    instants: List[datetime] = [first]
    day = local_day(first, tz)

    while len(instants) < max(max_entries, 1):
        try:
            day = day + timedelta(days=1)
            boundary = start_of_day(day, tz)
        except (OverflowError, ValueError):
            logger.debug("Stopping timeline at %s; no further day boundary", instants[-1])
            break
        if boundary <= instants[-1]:
            logger.warning("Non-increasing day boundary %s after %s; truncating timeline", boundary, instants[-1])
            break
        instants.append(boundary)

    entries = tuple(TimelineEntry(instant=i, records=snapshot) for i in instants)
    return Timeline(entries=entries, next_refresh=instants[-1])


# PUBLIC_INTERFACE
def prioritize(
    records: Sequence[CountdownRecord],
    reference: datetime,
    tz: Optional[tzinfo] = None,
) -> List[CountdownRecord]:
    """
    Order records for space-constrained surfaces.

    Upcoming records (today or later) keep their display order and come
    first; past records follow, most recently elapsed first. Truncating the
    result to what fits is left to the caller.
    """
    upcoming: List[CountdownRecord] = []
    past: List[CountdownRecord] = []
    for record in records:
        if record.days_remaining(reference, tz) >= 0:
            upcoming.append(record)
        else:
            past.append(record)
    # reverse=True keeps sort stability, so same-day records stay in display order
    past.sort(key=lambda r: r.date, reverse=True)
    return upcoming + past


# PUBLIC_INTERFACE
def visible_records(
    records: Sequence[CountdownRecord],
    reference: datetime,
    family: WidgetFamily,
    tz: Optional[tzinfo] = None,
) -> List[CountdownRecord]:
    """Prioritized records truncated to what a widget family can show."""
    return prioritize(records, reference, tz)[: family.capacity]


# PUBLIC_INTERFACE
def widget_timeline(
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> Timeline:
    """
    Entry point for widget hosts: read the shared store and build a timeline.

    The widget surface runs apart from the app, so it reads the persisted
    blob instead of talking to a repository.
    """
    settings = settings or get_settings()
    records = load_shared_records(get_store(settings), settings.storage_key)
    return build_timeline(
        records,
        now if now is not None else datetime.now(tz),
        max_entries=settings.timeline_max_entries,
        tz=tz,
    )
