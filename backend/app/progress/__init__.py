"""Progress & achievement engine: streaks, stats, badges, levels and challenges.

Every public function here is a pure, synchronous computation over plain
records; fetching the records is the caller's job.
"""

from __future__ import annotations

from .achievements import evaluate, total_points
from .catalog import ACHIEVEMENTS, LEVEL_THRESHOLDS, get_achievement
from .challenges import generate
from .levels import level_for
from .models import (
    AchievementCategory,
    AchievementDefinition,
    AchievementRule,
    Challenge,
    ChallengeType,
    ExtendedSignals,
    InvalidInput,
    LevelInfo,
    LevelThreshold,
    MoodEntry,
    MotivationalMessage,
    ProgressOverview,
    Rarity,
    SessionEntry,
    SessionType,
    StatsSnapshot,
    WeeklyReport,
)
from .overview import build_overview
from .report import motivational_message, weekly_report
from .signals import derive_signals
from .stats import DEFAULT_WEEKLY_GOAL, aggregate, start_of_week
from .streak import compute_streak

__all__ = [
    "ACHIEVEMENTS",
    "DEFAULT_WEEKLY_GOAL",
    "LEVEL_THRESHOLDS",
    "AchievementCategory",
    "AchievementDefinition",
    "AchievementRule",
    "Challenge",
    "ChallengeType",
    "ExtendedSignals",
    "InvalidInput",
    "LevelInfo",
    "LevelThreshold",
    "MoodEntry",
    "MotivationalMessage",
    "ProgressOverview",
    "Rarity",
    "SessionEntry",
    "SessionType",
    "StatsSnapshot",
    "WeeklyReport",
    "aggregate",
    "build_overview",
    "compute_streak",
    "derive_signals",
    "evaluate",
    "generate",
    "get_achievement",
    "level_for",
    "motivational_message",
    "start_of_week",
    "total_points",
    "weekly_report",
]
