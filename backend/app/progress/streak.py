from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

MAX_SCAN_DAYS = 365
_ONE_DAY = timedelta(days=1)


def compute_streak(mood_dates: Iterable[date], *, today: date | None = None) -> int:
    """Count consecutive logged days ending today or yesterday.

    A single missing day is bridged when the day before it was logged; two
    missing days in a row end the streak. The backward scan is capped at
    ``MAX_SCAN_DAYS`` steps.
    """

    unique_dates = {_as_date(value) for value in mood_dates}
    if not unique_dates:
        return 0

    today = today or date.today()
    if today not in unique_dates and today - _ONE_DAY not in unique_dates:
        return 0

    streak = 0
    current = max(unique_dates)
    for _ in range(MAX_SCAN_DAYS):
        if current in unique_dates:
            streak += 1
        elif current - _ONE_DAY in unique_dates:
            # grace day: skip the gap without counting it
            current -= _ONE_DAY
            continue
        else:
            break
        current -= _ONE_DAY
    return streak


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


__all__ = ["MAX_SCAN_DAYS", "compute_streak"]
