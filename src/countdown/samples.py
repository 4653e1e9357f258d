from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional

from .datemath import local_day
from .models import CountdownRecord


# PUBLIC_INTERFACE
def sample_records(now: Optional[datetime] = None) -> List[CountdownRecord]:
    """
    Placeholder countdowns for previews and widget placeholders.

    Dates are relative to the day of now: two upcoming events and one that
    has passed.
    """
    today = local_day(now or datetime.now().astimezone())
    return [
        CountdownRecord(title="Product Launch", date=today + timedelta(days=5), notes="Finalize press kit"),
        CountdownRecord(title="Team Offsite", date=today + timedelta(days=12)),
        CountdownRecord(title="Conference Talk", date=today - timedelta(days=2), notes="Slides archived"),
    ]
