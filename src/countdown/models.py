from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Iterable, List, Optional, Tuple
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .datemath import (
    DETAIL,
    LABEL,
    RELATIVE,
    Status,
    StatusKind,
    day_offset,
    format_status,
    local_day,
    status_for,
)

# Incoming date values: a calendar day, an instant, an ISO8601 string or epoch seconds
DateInput = Any


def _now(tz: Optional[dt.tzinfo]) -> dt.datetime:
    if tz is None:
        return dt.datetime.now().astimezone()
    return dt.datetime.now(tz)


def normalize_day(value: DateInput, tz: Optional[dt.tzinfo] = None) -> dt.date:
    """
    Internal helper to reduce a date-like input to a local calendar day.
    The local zone is tz, or the system zone when tz is None.
    - date: returned as-is.
    - datetime: naive values are local wall time; aware values are converted to the local zone.
    - str: ISO8601 date ('2025-01-31') or datetime ('2025-01-31T13:45:00', offsets allowed).
    - int/float: POSIX epoch seconds.
    """
    if isinstance(value, (dt.date, dt.datetime)):
        return local_day(value, tz)

    if isinstance(value, bool):
        raise ValueError("Invalid type for date; expected date, datetime, ISO8601 string or epoch seconds.")

    if isinstance(value, (int, float)):
        try:
            instant = dt.datetime.fromtimestamp(value, tz=dt.timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError("Epoch timestamp out of range for date.") from e
        return local_day(instant, tz)

    if isinstance(value, str):
        s = value.strip()
        try:
            return dt.date.fromisoformat(s)
        except ValueError:
            pass
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            return local_day(dt.datetime.fromisoformat(s), tz)
        except ValueError as e:
            raise ValueError(
                "Invalid date format. Use ISO8601 date or datetime string (e.g., '2025-01-31' or '2025-01-31T13:45:00')."
            ) from e

    raise ValueError("Invalid type for date; expected date, datetime, ISO8601 string or epoch seconds.")


# PUBLIC_INTERFACE
class CountdownRecord(BaseModel):
    """
    One tracked target date.

    Records are immutable; edits produce a new record with the same id. The
    date is always a calendar day: any time-of-day part of the input is
    dropped after converting it to the local zone, so two records are
    date-equal iff they fall on the same local day. The local zone is the
    system zone unless model_validate is given context={"tz": zone}.

    Derived values (days remaining, status, labels) are computed on every call
    against the given reference instant and are never stored.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "0b0c6f5e-3f4a-4a52-9f57-6c1d1b0f2a11",
                "title": "Product Launch",
                "date": "2025-02-01",
                "notes": "Finalize press kit",
            }
        },
    )

    id: UUID = Field(default_factory=uuid4, description="Unique identifier, fixed for the record's lifetime")
    title: str = Field(..., description="Display title; callers pass already-trimmed text")
    date: dt.date = Field(..., description="Target calendar day in the local calendar")
    notes: str = Field(default="", description="Free-form notes")

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: DateInput, info: ValidationInfo) -> dt.date:
        """
        Normalize date from date/datetime/str/epoch to a local calendar day.
        A "tz" entry in the validation context overrides the system zone.
        """
        context = info.context or {}
        return normalize_day(v, context.get("tz"))

    @field_validator("notes", mode="before")
    @classmethod
    def parse_notes(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    def days_remaining(self, reference: Optional[dt.datetime] = None, tz: Optional[dt.tzinfo] = None) -> int:
        """Whole days from the reference day to the target day; negative once past."""
        return day_offset(reference if reference is not None else _now(tz), self.date, tz)

    def is_past(self, reference: Optional[dt.datetime] = None, tz: Optional[dt.tzinfo] = None) -> bool:
        return self.days_remaining(reference, tz) < 0

    def clamped_days_remaining(self, reference: Optional[dt.datetime] = None, tz: Optional[dt.tzinfo] = None) -> int:
        return max(self.days_remaining(reference, tz), 0)

    def status(self, reference: Optional[dt.datetime] = None, tz: Optional[dt.tzinfo] = None) -> Status:
        return status_for(self.days_remaining(reference, tz))

    def status_label(
        self,
        reference: Optional[dt.datetime] = None,
        tz: Optional[dt.tzinfo] = None,
        catalog: Optional[Dict[StatusKind, str]] = None,
    ) -> str:
        return format_status(self.status(reference, tz), catalog or LABEL)

    def status_detail(
        self,
        reference: Optional[dt.datetime] = None,
        tz: Optional[dt.tzinfo] = None,
        catalog: Optional[Dict[StatusKind, str]] = None,
    ) -> str:
        return format_status(self.status(reference, tz), catalog or DETAIL)

    def relative_description(
        self,
        reference: Optional[dt.datetime] = None,
        tz: Optional[dt.tzinfo] = None,
        catalog: Optional[Dict[StatusKind, str]] = None,
    ) -> str:
        return format_status(self.status(reference, tz), catalog or RELATIVE)

    def primary_label(self, reference: Optional[dt.datetime] = None, tz: Optional[dt.tzinfo] = None) -> str:
        """
        Badge text for widgets: the bare day count while the date is in the
        future, otherwise the short status label ('Today', '2 days ago').
        """
        days = self.days_remaining(reference, tz)
        if days > 0:
            return str(days)
        return format_status(status_for(days), LABEL)

    def with_date(self, value: DateInput, tz: Optional[dt.tzinfo] = None) -> "CountdownRecord":
        """Return a copy with the same id, title and notes on another day."""
        return CountdownRecord.model_validate(
            {"id": self.id, "title": self.title, "date": value, "notes": self.notes},
            context={"tz": tz},
        )


# PUBLIC_INTERFACE
def sort_key(record: CountdownRecord) -> Tuple[dt.date, str, str]:
    """
    Canonical ordering key: date, then case-insensitive title, then id.
    The id component makes the order total.
    """
    return (record.date, record.title.casefold(), str(record.id))


# PUBLIC_INTERFACE
def display_sort(records: Iterable[CountdownRecord]) -> List[CountdownRecord]:
    """Return a new list of records in canonical display order."""
    return sorted(records, key=sort_key)
