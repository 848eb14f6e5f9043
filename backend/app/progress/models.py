from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class InvalidInput(ValueError):
    """Raised when upstream data violates an engine precondition."""


class SessionType(str, Enum):
    JOURNAL = "journal"
    MEDITATION = "meditation"
    BREATHING = "breathing"
    MOOD_CHECK = "mood_check"


class AchievementCategory(str, Enum):
    STREAK = "streak"
    SESSIONS = "sessions"
    MOOD = "mood"
    CONSISTENCY = "consistency"
    MILESTONE = "milestone"
    SPECIAL = "special"


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"


class ChallengeType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    STREAK = "streak"
    MOOD = "mood"
    MILESTONE = "milestone"


@dataclass(frozen=True)
class MoodEntry:
    """A single mood log; ``logged_at`` is only needed for time-of-day signals."""

    date: date
    score: int | float
    logged_at: datetime | None = None


@dataclass(frozen=True)
class SessionEntry:
    created_at: datetime
    type: SessionType = SessionType.JOURNAL
    mood: int | None = None
    word_count: int = 0


@dataclass(frozen=True)
class StatsSnapshot:
    """Derived summary of a user's history, recomputed on every request."""

    mood_streak: int = 0
    avg_mood_score: float = 0.0
    total_sessions: int = 0
    weekly_goal: int = 5
    weekly_progress: int = 0

    @property
    def has_activity(self) -> bool:
        return self.total_sessions > 0 or self.mood_streak > 0 or self.avg_mood_score > 0

    def as_dict(self) -> dict[str, int | float]:
        return {
            "mood_streak": self.mood_streak,
            "avg_mood_score": self.avg_mood_score,
            "total_sessions": self.total_sessions,
            "weekly_goal": self.weekly_goal,
            "weekly_progress": self.weekly_progress,
        }


@dataclass(frozen=True)
class ExtendedSignals:
    """History-derived signals; ``None`` means the caller could not supply it."""

    perfect_mood_days: int | None = None
    mood_improvement: float | None = None
    early_morning_days: int | None = None
    late_evening_days: int | None = None
    weekend_streak: int | None = None
    total_active_days: int | None = None
    has_comeback: bool | None = None
    unique_emotions: int | None = None
    has_long_entry: bool | None = None


@dataclass(frozen=True)
class AchievementRule:
    metric: str
    threshold: int | float | bool = True


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    category: AchievementCategory
    title: str
    description: str
    icon: str
    rule: AchievementRule
    points: int
    rarity: Rarity


@dataclass(frozen=True)
class LevelThreshold:
    level: int
    points: int
    title: str
    icon: str


@dataclass(frozen=True)
class LevelInfo:
    level: int
    title: str
    icon: str
    total_points: int
    points_to_next: int
    progress_percent: int


@dataclass(frozen=True)
class Challenge:
    id: str
    title: str
    description: str
    icon: str
    points: int
    type: ChallengeType
    completed: bool = False
    progress: int | None = None
    target: int | None = None


@dataclass(frozen=True)
class MotivationalMessage:
    title: str
    message: str
    kind: str


@dataclass(frozen=True)
class WeeklyReport:
    weekly_progress: int
    weekly_goal: int
    streak_growth: int
    points_earned: int
    level: LevelInfo
    new_achievements: list[AchievementDefinition]
    motivational_message: MotivationalMessage


@dataclass(frozen=True)
class ProgressOverview:
    stats: StatsSnapshot
    signals: ExtendedSignals
    achievements: list[AchievementDefinition]
    level: LevelInfo
    challenges: list[Challenge]
    motivational_message: MotivationalMessage


__all__ = [
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
]
