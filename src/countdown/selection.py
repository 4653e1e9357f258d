from __future__ import annotations

from typing import Collection, List, Optional, Sequence
from uuid import UUID

from .models import CountdownRecord, display_sort


# PUBLIC_INTERFACE
def resolve_selection(records: Sequence[CountdownRecord], requested_id: Optional[UUID]) -> Optional[CountdownRecord]:
    """
    Resolve the countdown a configured widget should show.

    Behavior:
    - The record with requested_id, when it still exists.
    - Otherwise (nothing requested, or the record was deleted) the first
      record in display order.
    - None when there are no records at all ("none selected").
    """
    ordered = display_sort(records)
    if requested_id is not None:
        for record in ordered:
            if record.id == requested_id:
                return record
    return ordered[0] if ordered else None


# PUBLIC_INTERFACE
def entities_for(records: Sequence[CountdownRecord], ids: Collection[UUID]) -> List[CountdownRecord]:
    """Records whose id is in ids, in display order. Unknown ids are skipped."""
    wanted = set(ids)
    return [r for r in display_sort(records) if r.id in wanted]


# PUBLIC_INTERFACE
def suggested_entities(records: Sequence[CountdownRecord]) -> List[CountdownRecord]:
    """Every record, for a configuration picker."""
    return display_sort(records)


# PUBLIC_INTERFACE
def default_entity(records: Sequence[CountdownRecord]) -> Optional[CountdownRecord]:
    return resolve_selection(records, None)
