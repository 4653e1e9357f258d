"""
Countdown core package.

Calendar-day arithmetic, the countdown repository that owns the canonical
ordered collection, and the widget timeline scheduler. UI layers call into
these modules; nothing here depends on a UI runtime.
"""

from .codec import CountdownError, DecodeFailure, EncodeFailure, decode_records, encode_records
from .datemath import Status, StatusKind, day_offset, format_status, local_day, start_of_day, status_for
from .models import CountdownRecord, display_sort, sort_key
from .repositories import CountdownRepository, get_repository, load_shared_records
from .selection import default_entity, entities_for, resolve_selection, suggested_entities
from .settings import Settings, get_settings
from .storage import InMemoryStore, JsonFileStore, KeyValueStore, get_store
from .timeline import (
    Timeline,
    TimelineEntry,
    WidgetFamily,
    build_timeline,
    next_midnight,
    prioritize,
    visible_records,
    widget_timeline,
)

__version__ = "0.1.0"

__all__ = [
    "CountdownError",
    "CountdownRecord",
    "CountdownRepository",
    "DecodeFailure",
    "EncodeFailure",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "Settings",
    "Status",
    "StatusKind",
    "Timeline",
    "TimelineEntry",
    "WidgetFamily",
    "build_timeline",
    "day_offset",
    "decode_records",
    "default_entity",
    "display_sort",
    "encode_records",
    "entities_for",
    "format_status",
    "get_repository",
    "get_settings",
    "get_store",
    "load_shared_records",
    "local_day",
    "next_midnight",
    "prioritize",
    "resolve_selection",
    "sort_key",
    "start_of_day",
    "status_for",
    "suggested_entities",
    "visible_records",
    "widget_timeline",
]
