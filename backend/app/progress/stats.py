from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta, tzinfo

from ..utils.numbers import round_half_up
from .models import InvalidInput, MoodEntry, SessionEntry, StatsSnapshot
from .streak import compute_streak

DEFAULT_WEEKLY_GOAL = 5


def aggregate(
    mood_entries: Sequence[MoodEntry],
    session_entries: Sequence[SessionEntry],
    *,
    weekly_goal: int = DEFAULT_WEEKLY_GOAL,
    now: datetime | None = None,
) -> StatsSnapshot:
    """Build the stats snapshot consumed by achievements, levels and challenges.

    ``now`` defines both "today" for the streak and the local week window;
    naive session timestamps are read in ``now``'s timezone.
    """

    if weekly_goal < 1:
        raise InvalidInput(f"weekly goal must be positive, got {weekly_goal!r}")

    now = now or datetime.now()
    scores = [_checked_score(entry) for entry in mood_entries]
    avg_mood = round_half_up(sum(scores) / len(scores), 1) if scores else 0.0

    week_start = start_of_week(now)
    weekly_progress = sum(
        1
        for entry in session_entries
        if _localize(entry.created_at, now.tzinfo) >= week_start
    )

    return StatsSnapshot(
        mood_streak=compute_streak((entry.date for entry in mood_entries), today=now.date()),
        avg_mood_score=avg_mood,
        total_sessions=len(session_entries),
        weekly_goal=weekly_goal,
        weekly_progress=weekly_progress,
    )


def start_of_week(now: datetime) -> datetime:
    """Most recent Sunday at midnight, in the timezone of ``now``."""

    today: date = now.date()
    sunday = today - timedelta(days=(today.weekday() + 1) % 7)
    return datetime.combine(sunday, time.min, tzinfo=now.tzinfo)


def _checked_score(entry: MoodEntry) -> float:
    score = entry.score
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise InvalidInput(f"mood score must be a number, got {score!r}")
    if not math.isfinite(score):
        raise InvalidInput(f"mood score must be finite, got {score!r}")
    return float(score)


def _localize(value: datetime, tz: tzinfo | None) -> datetime:
    if tz is None:
        if value.tzinfo is None:
            return value
        return value.astimezone().replace(tzinfo=None)
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


__all__ = ["DEFAULT_WEEKLY_GOAL", "aggregate", "start_of_week"]
