from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from .achievements import evaluate, total_points
from .challenges import generate
from .levels import level_for
from .models import MoodEntry, ProgressOverview, SessionEntry
from .report import motivational_message
from .signals import derive_signals
from .stats import DEFAULT_WEEKLY_GOAL, aggregate


def build_overview(
    mood_entries: Sequence[MoodEntry],
    session_entries: Sequence[SessionEntry],
    emotion_codes: Iterable[str] = (),
    *,
    weekly_goal: int = DEFAULT_WEEKLY_GOAL,
    now: datetime | None = None,
) -> ProgressOverview:
    """Run the whole pipeline: records -> snapshot -> achievements, level, challenges."""

    now = now or datetime.now()
    snapshot = aggregate(mood_entries, session_entries, weekly_goal=weekly_goal, now=now)
    signals = derive_signals(mood_entries, session_entries, emotion_codes, today=now.date())
    earned = evaluate(snapshot, signals)
    level = level_for(total_points(earned))
    return ProgressOverview(
        stats=snapshot,
        signals=signals,
        achievements=earned,
        level=level,
        challenges=generate(snapshot),
        motivational_message=motivational_message(snapshot, level),
    )


__all__ = ["build_overview"]
