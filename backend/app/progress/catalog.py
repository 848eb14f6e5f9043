"""Static achievement definitions and level thresholds."""

from __future__ import annotations

from .models import (
    AchievementCategory,
    AchievementDefinition,
    AchievementRule,
    LevelThreshold,
    Rarity,
)

# Rule metrics understood by the evaluator.
METRIC_STREAK = "streak"
METRIC_TOTAL_SESSIONS = "total_sessions"
METRIC_AVG_MOOD = "avg_mood"
METRIC_PERFECT_MOOD_DAYS = "perfect_mood_days"
METRIC_MOOD_IMPROVEMENT = "mood_improvement"
METRIC_EARLY_MORNING = "early_morning"
METRIC_LATE_EVENING = "late_evening"
METRIC_WEEKEND_CONSISTENCY = "weekend_consistency"
METRIC_DAYS_ACTIVE = "days_active"
METRIC_COMEBACK = "comeback"
METRIC_UNIQUE_EMOTIONS = "unique_emotions"
METRIC_LONG_ENTRY = "long_entry"

LONG_ENTRY_WORDS = 500

ACHIEVEMENTS: tuple[AchievementDefinition, ...] = (
    # Streak
    AchievementDefinition(
        id="first_streak",
        category=AchievementCategory.STREAK,
        title="Getting Started",
        description="Log your mood for 3 days in a row",
        icon="🌱",
        rule=AchievementRule(METRIC_STREAK, 3),
        points=50,
        rarity=Rarity.COMMON,
    ),
    AchievementDefinition(
        id="week_warrior",
        category=AchievementCategory.STREAK,
        title="Week Warrior",
        description="Maintain a 7-day mood tracking streak",
        icon="🔥",
        rule=AchievementRule(METRIC_STREAK, 7),
        points=100,
        rarity=Rarity.UNCOMMON,
    ),
    AchievementDefinition(
        id="month_master",
        category=AchievementCategory.STREAK,
        title="Month Master",
        description="Keep a 30-day streak alive",
        icon="💎",
        rule=AchievementRule(METRIC_STREAK, 30),
        points=500,
        rarity=Rarity.RARE,
    ),
    AchievementDefinition(
        id="streak_legend",
        category=AchievementCategory.STREAK,
        title="Streak Legend",
        description="Achieve a 100-day streak",
        icon="👑",
        rule=AchievementRule(METRIC_STREAK, 100),
        points=1000,
        rarity=Rarity.LEGENDARY,
    ),
    # Sessions
    AchievementDefinition(
        id="first_session",
        category=AchievementCategory.SESSIONS,
        title="First Steps",
        description="Complete your first journal session",
        icon="📝",
        rule=AchievementRule(METRIC_TOTAL_SESSIONS, 1),
        points=25,
        rarity=Rarity.COMMON,
    ),
    AchievementDefinition(
        id="session_explorer",
        category=AchievementCategory.SESSIONS,
        title="Session Explorer",
        description="Complete 10 journal sessions",
        icon="🗺️",
        rule=AchievementRule(METRIC_TOTAL_SESSIONS, 10),
        points=100,
        rarity=Rarity.COMMON,
    ),
    AchievementDefinition(
        id="journal_master",
        category=AchievementCategory.SESSIONS,
        title="Journal Master",
        description="Complete 50 journal sessions",
        icon="📚",
        rule=AchievementRule(METRIC_TOTAL_SESSIONS, 50),
        points=300,
        rarity=Rarity.UNCOMMON,
    ),
    AchievementDefinition(
        id="writing_guru",
        category=AchievementCategory.SESSIONS,
        title="Writing Guru",
        description="Complete 100 journal sessions",
        icon="✍️",
        rule=AchievementRule(METRIC_TOTAL_SESSIONS, 100),
        points=750,
        rarity=Rarity.RARE,
    ),
    # Mood
    AchievementDefinition(
        id="mood_optimist",
        category=AchievementCategory.MOOD,
        title="Optimist",
        description="Maintain an average mood of 8+ for a week",
        icon="😊",
        rule=AchievementRule(METRIC_AVG_MOOD, 8),
        points=200,
        rarity=Rarity.UNCOMMON,
    ),
    AchievementDefinition(
        id="happiness_master",
        category=AchievementCategory.MOOD,
        title="Happiness Master",
        description="Log mood 10 for 5 days",
        icon="🌟",
        rule=AchievementRule(METRIC_PERFECT_MOOD_DAYS, 5),
        points=300,
        rarity=Rarity.RARE,
    ),
    AchievementDefinition(
        id="mood_improver",
        category=AchievementCategory.MOOD,
        title="Mood Improver",
        description="Improve your average mood by 2 points in a month",
        icon="📈",
        rule=AchievementRule(METRIC_MOOD_IMPROVEMENT, 2),
        points=250,
        rarity=Rarity.UNCOMMON,
    ),
    # Consistency
    AchievementDefinition(
        id="early_bird",
        category=AchievementCategory.CONSISTENCY,
        title="Early Bird",
        description="Log mood before 9 AM for 7 days",
        icon="🌅",
        rule=AchievementRule(METRIC_EARLY_MORNING, 7),
        points=150,
        rarity=Rarity.UNCOMMON,
    ),
    AchievementDefinition(
        id="night_owl",
        category=AchievementCategory.CONSISTENCY,
        title="Night Owl",
        description="Log mood after 9 PM for 7 days",
        icon="🦉",
        rule=AchievementRule(METRIC_LATE_EVENING, 7),
        points=150,
        rarity=Rarity.UNCOMMON,
    ),
    AchievementDefinition(
        id="weekend_warrior",
        category=AchievementCategory.CONSISTENCY,
        title="Weekend Warrior",
        description="Never miss a weekend for a month",
        icon="🎯",
        rule=AchievementRule(METRIC_WEEKEND_CONSISTENCY, 4),
        points=200,
        rarity=Rarity.UNCOMMON,
    ),
    # Milestones
    AchievementDefinition(
        id="first_week",
        category=AchievementCategory.MILESTONE,
        title="First Week",
        description="Complete your first week of tracking",
        icon="🎉",
        rule=AchievementRule(METRIC_DAYS_ACTIVE, 7),
        points=75,
        rarity=Rarity.COMMON,
    ),
    AchievementDefinition(
        id="first_month",
        category=AchievementCategory.MILESTONE,
        title="First Month",
        description="Track for 30 days (not necessarily consecutive)",
        icon="🏆",
        rule=AchievementRule(METRIC_DAYS_ACTIVE, 30),
        points=200,
        rarity=Rarity.UNCOMMON,
    ),
    # Special
    AchievementDefinition(
        id="comeback_kid",
        category=AchievementCategory.SPECIAL,
        title="Comeback Kid",
        description="Return after a 7+ day break and start a new streak",
        icon="💪",
        rule=AchievementRule(METRIC_COMEBACK, True),
        points=100,
        rarity=Rarity.UNCOMMON,
    ),
    AchievementDefinition(
        id="emotion_explorer",
        category=AchievementCategory.SPECIAL,
        title="Emotion Explorer",
        description="Log 10 different emotions",
        icon="🎭",
        rule=AchievementRule(METRIC_UNIQUE_EMOTIONS, 10),
        points=150,
        rarity=Rarity.UNCOMMON,
    ),
    AchievementDefinition(
        id="wordsmith",
        category=AchievementCategory.SPECIAL,
        title="Wordsmith",
        description="Write a journal entry with 500+ words",
        icon="📖",
        rule=AchievementRule(METRIC_LONG_ENTRY, LONG_ENTRY_WORDS),
        points=100,
        rarity=Rarity.UNCOMMON,
    ),
)

LEVEL_THRESHOLDS: tuple[LevelThreshold, ...] = (
    LevelThreshold(1, 0, "Beginner", "🌱"),
    LevelThreshold(2, 100, "Explorer", "🗺️"),
    LevelThreshold(3, 300, "Tracker", "📊"),
    LevelThreshold(4, 600, "Mindful", "🧘"),
    LevelThreshold(5, 1000, "Focused", "🎯"),
    LevelThreshold(6, 1500, "Balanced", "⚖️"),
    LevelThreshold(7, 2200, "Wise", "🦉"),
    LevelThreshold(8, 3000, "Master", "🏆"),
    LevelThreshold(9, 4000, "Guru", "✨"),
    LevelThreshold(10, 5500, "Enlightened", "👑"),
)

ACHIEVEMENTS_BY_ID: dict[str, AchievementDefinition] = {
    achievement.id: achievement for achievement in ACHIEVEMENTS
}


def get_achievement(achievement_id: str) -> AchievementDefinition | None:
    return ACHIEVEMENTS_BY_ID.get(achievement_id)


__all__ = [
    "ACHIEVEMENTS",
    "ACHIEVEMENTS_BY_ID",
    "LEVEL_THRESHOLDS",
    "LONG_ENTRY_WORDS",
    "get_achievement",
]
