# quintave/utils/access.py
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from quintave.core.config import settings
from quintave.utils.dates import as_naive_utc

DAY_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class AccessStatus:
    has_purchased: bool
    trial_active: bool
    trial_days_remaining: int
    trial_ends_at: datetime

    @property
    def has_access(self) -> bool:
        return self.has_purchased or self.trial_active


def compute_access(
    created_at: datetime,
    has_purchased: bool,
    now: datetime,
    trial_days: Optional[int] = None,
) -> AccessStatus:
    """
    Trial runs for `trial_days` from account creation; a purchase grants
    access for good. Days remaining round up, so a trial with 2 hours left
    still reports 1 day.
    """
    trial_days = settings.TRIAL_DAYS if trial_days is None else trial_days
    created_at = as_naive_utc(created_at)
    now = as_naive_utc(now)

    trial_ends_at = created_at + timedelta(days=trial_days)
    trial_active = now < trial_ends_at
    seconds_left = (trial_ends_at - now).total_seconds()
    trial_days_remaining = max(0, math.ceil(seconds_left / DAY_SECONDS))

    return AccessStatus(
        has_purchased=bool(has_purchased),
        trial_active=trial_active,
        trial_days_remaining=trial_days_remaining,
        trial_ends_at=trial_ends_at,
    )
