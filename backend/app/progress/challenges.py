from __future__ import annotations

import logging

from .models import Challenge, ChallengeType, StatsSnapshot

logger = logging.getLogger(__name__)

STREAK_TARGET_DAYS = 7
MOOD_BOOST_SCORE = 8


def generate(snapshot: StatsSnapshot) -> list[Challenge]:
    """Suggest the challenges relevant to the current snapshot.

    Completion is not tracked per day, so ``completed`` stays ``False``.
    """

    if not snapshot.has_activity:
        logger.debug("No activity recorded, skipping challenges")
        return []

    challenges = [
        Challenge(
            id="daily_mood",
            title="Daily Check-in",
            description="Log your mood today",
            icon="📊",
            points=10,
            type=ChallengeType.DAILY,
        )
    ]

    sessions = snapshot.total_sessions
    streak = snapshot.mood_streak

    if sessions > 0 and snapshot.weekly_progress < snapshot.weekly_goal:
        remaining = snapshot.weekly_goal - snapshot.weekly_progress
        challenges.append(
            Challenge(
                id="weekly_goal",
                title="Weekly Goal",
                description=f"Complete {remaining} more sessions this week",
                icon="🎯",
                points=50,
                type=ChallengeType.WEEKLY,
                completed=snapshot.weekly_progress >= snapshot.weekly_goal,
                progress=snapshot.weekly_progress,
                target=snapshot.weekly_goal,
            )
        )

    if streak == 0 and sessions > 0:
        challenges.append(
            Challenge(
                id="start_streak",
                title="Start Your Streak",
                description="Begin a new mood tracking streak",
                icon="🔥",
                points=25,
                type=ChallengeType.STREAK,
            )
        )
    elif 0 < streak < STREAK_TARGET_DAYS:
        challenges.append(
            Challenge(
                id="build_streak",
                title="Build Your Streak",
                description=f"Reach a {streak + 1}-day streak",
                icon="🔥",
                points=15,
                type=ChallengeType.STREAK,
            )
        )

    if 0 < snapshot.avg_mood_score < MOOD_BOOST_SCORE and sessions > 0:
        challenges.append(
            Challenge(
                id="mood_boost",
                title="Mood Boost",
                description=f"Log a mood of {MOOD_BOOST_SCORE} or higher today",
                icon="😊",
                points=20,
                type=ChallengeType.MOOD,
            )
        )

    if sessions == 0:
        challenges.append(
            Challenge(
                id="first_session",
                title="First Session",
                description="Complete your first journal session",
                icon="📝",
                points=25,
                type=ChallengeType.MILESTONE,
            )
        )

    logger.debug("Generated %d challenges", len(challenges))
    return challenges


__all__ = ["generate"]
