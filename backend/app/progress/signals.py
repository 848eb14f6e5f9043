"""Derive the history signals used by consistency, milestone and special rules."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from itertools import pairwise

from ..utils.numbers import round_half_up
from .catalog import LONG_ENTRY_WORDS
from .models import ExtendedSignals, MoodEntry, SessionEntry
from .streak import compute_streak

PERFECT_SCORE = 10
EARLY_MORNING_HOUR = 9
LATE_EVENING_HOUR = 21
IMPROVEMENT_WINDOW_DAYS = 30
COMEBACK_BREAK_DAYS = 7
# both improvement windows must be loaded for the comparison to hold
MIN_HISTORY_DAYS = 2 * IMPROVEMENT_WINDOW_DAYS

_SATURDAY = 5


def derive_signals(
    mood_entries: Sequence[MoodEntry],
    session_entries: Sequence[SessionEntry],
    emotion_codes: Iterable[str] = (),
    *,
    today: date | None = None,
) -> ExtendedSignals:
    """Compute every ExtendedSignals field from full, locally-dated history."""

    today = today or date.today()
    mood_dates = {entry.date for entry in mood_entries}
    session_dates = {entry.created_at.date() for entry in session_entries}

    return ExtendedSignals(
        perfect_mood_days=len(
            {entry.date for entry in mood_entries if entry.score >= PERFECT_SCORE}
        ),
        mood_improvement=_mood_improvement(mood_entries, today),
        early_morning_days=len(
            {
                entry.date
                for entry in mood_entries
                if entry.logged_at is not None and entry.logged_at.hour < EARLY_MORNING_HOUR
            }
        ),
        late_evening_days=len(
            {
                entry.date
                for entry in mood_entries
                if entry.logged_at is not None and entry.logged_at.hour >= LATE_EVENING_HOUR
            }
        ),
        weekend_streak=_weekend_streak(mood_dates, today),
        total_active_days=len(mood_dates | session_dates),
        has_comeback=_has_comeback(mood_dates, today),
        unique_emotions=len(
            {code.strip().lower() for code in emotion_codes if code and code.strip()}
        ),
        has_long_entry=any(entry.word_count >= LONG_ENTRY_WORDS for entry in session_entries),
    )


def _mood_improvement(mood_entries: Sequence[MoodEntry], today: date) -> float | None:
    recent_start = today - timedelta(days=IMPROVEMENT_WINDOW_DAYS - 1)
    previous_start = recent_start - timedelta(days=IMPROVEMENT_WINDOW_DAYS)
    recent = [e.score for e in mood_entries if recent_start <= e.date <= today]
    previous = [e.score for e in mood_entries if previous_start <= e.date < recent_start]
    if not recent or not previous:
        return None
    delta = sum(recent) / len(recent) - sum(previous) / len(previous)
    return round_half_up(delta, 1)


def _weekend_streak(mood_dates: set[date], today: date) -> int:
    weekends = {
        value - timedelta(days=value.weekday() - _SATURDAY)
        for value in mood_dates
        if value.weekday() >= _SATURDAY
    }
    if not weekends:
        return 0

    saturday = today - timedelta(days=(today.weekday() - _SATURDAY) % 7)
    if saturday not in weekends and today.weekday() >= _SATURDAY:
        # this weekend is still in progress
        saturday -= timedelta(weeks=1)

    streak = 0
    while saturday in weekends:
        streak += 1
        saturday -= timedelta(weeks=1)
    return streak


def _has_comeback(mood_dates: set[date], today: date) -> bool:
    if compute_streak(mood_dates, today=today) == 0:
        return False
    return any(
        (current - previous).days - 1 >= COMEBACK_BREAK_DAYS
        for previous, current in pairwise(sorted(mood_dates))
    )


__all__ = [
    "COMEBACK_BREAK_DAYS",
    "EARLY_MORNING_HOUR",
    "LATE_EVENING_HOUR",
    "MIN_HISTORY_DAYS",
    "PERFECT_SCORE",
    "derive_signals",
]
