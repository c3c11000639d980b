# quintave/utils/dates.py
from datetime import datetime, timezone
from typing import Optional


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC already.

    Every DateTime column is naive UTC, so client timestamps carrying an offset
    ("...Z", "-05:00") go through here before they reach the database.
    """
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
