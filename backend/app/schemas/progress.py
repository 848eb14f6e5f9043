from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ..progress import AchievementCategory, ChallengeType, Rarity


class StatsModel(BaseModel):
    mood_streak: int
    avg_mood_score: float
    total_sessions: int
    weekly_goal: int
    weekly_progress: int

    model_config = ConfigDict(from_attributes=True)


class SignalsModel(BaseModel):
    perfect_mood_days: int | None = None
    mood_improvement: float | None = None
    early_morning_days: int | None = None
    late_evening_days: int | None = None
    weekend_streak: int | None = None
    total_active_days: int | None = None
    has_comeback: bool | None = None
    unique_emotions: int | None = None
    has_long_entry: bool | None = None

    model_config = ConfigDict(from_attributes=True)


class AchievementModel(BaseModel):
    id: str
    category: AchievementCategory
    title: str
    description: str
    icon: str
    points: int
    rarity: Rarity

    model_config = ConfigDict(from_attributes=True)


class AchievementListResponse(BaseModel):
    items: list[AchievementModel]
    total_points: int
    available: int


class LevelModel(BaseModel):
    level: int
    title: str
    icon: str
    total_points: int
    points_to_next: int
    progress_percent: int

    model_config = ConfigDict(from_attributes=True)


class ChallengeModel(BaseModel):
    id: str
    title: str
    description: str
    icon: str
    points: int
    type: ChallengeType
    completed: bool
    progress: int | None = None
    target: int | None = None

    model_config = ConfigDict(from_attributes=True)


class ChallengeListResponse(BaseModel):
    items: list[ChallengeModel]


class MotivationalMessageModel(BaseModel):
    title: str
    message: str
    kind: str

    model_config = ConfigDict(from_attributes=True)


class ProgressOverviewResponse(BaseModel):
    stats: StatsModel
    signals: SignalsModel
    achievements: list[AchievementModel]
    level: LevelModel
    challenges: list[ChallengeModel]
    motivational_message: MotivationalMessageModel

    model_config = ConfigDict(from_attributes=True)


class WeeklyReportResponse(BaseModel):
    weekly_progress: int
    weekly_goal: int
    streak_growth: int
    points_earned: int
    level: LevelModel
    new_achievements: list[AchievementModel]
    motivational_message: MotivationalMessageModel

    model_config = ConfigDict(from_attributes=True)
