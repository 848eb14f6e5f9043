"""Database models for Mindbloom."""

from .models import (
    Base,
    EmotionEntry,
    MoodLog,
    PracticeSession,
    SettingEntry,
    User,
)

__all__ = [
    "Base",
    "EmotionEntry",
    "MoodLog",
    "PracticeSession",
    "SettingEntry",
    "User",
]
