from __future__ import annotations

from collections.abc import Sequence

from .achievements import total_points
from .levels import level_for
from .models import (
    AchievementDefinition,
    LevelInfo,
    MotivationalMessage,
    StatsSnapshot,
    WeeklyReport,
)

STREAK_CELEBRATION_DAYS = 7
POSITIVE_MOOD_SCORE = 8
ACHIEVEMENT_LEVEL = 5
RECENT_ACHIEVEMENTS = 3

_WELCOME = MotivationalMessage(
    title="Welcome to your mindfulness journey! 🌟",
    message=(
        "Start by logging your first mood to begin earning points "
        "and unlocking achievements."
    ),
    kind="welcome",
)


def motivational_message(
    snapshot: StatsSnapshot | None,
    level: LevelInfo | None = None,
) -> MotivationalMessage:
    """Pick the first message that matches the user's current progress."""

    if snapshot is None:
        return _WELCOME

    streak = snapshot.mood_streak
    sessions = snapshot.total_sessions

    if sessions == 0 and streak == 0:
        return _WELCOME
    if sessions > 0 and streak == 0:
        return MotivationalMessage(
            title="Ready for a fresh start? 💪",
            message="Every expert was once a beginner. Start a new streak today!",
            kind="encouragement",
        )
    if streak >= STREAK_CELEBRATION_DAYS:
        return MotivationalMessage(
            title="You're on fire! 🔥",
            message=f"{streak} days strong! Your consistency is paying off.",
            kind="celebration",
        )
    if snapshot.avg_mood_score >= POSITIVE_MOOD_SCORE and sessions > 0:
        return MotivationalMessage(
            title="Happiness radiates from you! ✨",
            message="Your positive energy is inspiring. Keep spreading those good vibes!",
            kind="positive",
        )
    if level is not None and level.level >= ACHIEVEMENT_LEVEL:
        return MotivationalMessage(
            title=f"{level.title} level achieved! 🏆",
            message="You've shown incredible dedication to your mental wellness journey.",
            kind="achievement",
        )
    if sessions > 0:
        return MotivationalMessage(
            title="Keep going! 🌱",
            message="Every small step counts towards your bigger wellness goals.",
            kind="motivation",
        )
    return _WELCOME


def weekly_report(
    snapshot: StatsSnapshot,
    achievements: Sequence[AchievementDefinition],
) -> WeeklyReport:
    points = total_points(achievements)
    level = level_for(points)
    return WeeklyReport(
        weekly_progress=snapshot.weekly_progress,
        weekly_goal=snapshot.weekly_goal,
        # no per-week history, so growth is measured against a one-week streak
        streak_growth=max(0, snapshot.mood_streak - STREAK_CELEBRATION_DAYS),
        points_earned=points,
        level=level,
        new_achievements=list(achievements[-RECENT_ACHIEVEMENTS:]),
        motivational_message=motivational_message(snapshot, level),
    )


__all__ = ["motivational_message", "weekly_report"]
