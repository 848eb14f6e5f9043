from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import async_sessionmaker

from ..db.models import (
    EmotionEntry,
    MoodLog,
    PracticeSession,
    User,
)


def count_words(content: str | None) -> int:
    if not content:
        return 0
    return len(content.split())


class StorageService:
    """Persist users and their mood, session and emotion records."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def healthcheck(self) -> None:
        async with self._session_factory() as session:
            await session.execute(text("SELECT 1"))

    # -- users -------------------------------------------------------------
    async def ensure_user(self, external_id: str) -> User:
        async with self._session_factory() as session:
            result = await session.execute(
                select(User).where(User.external_id == external_id)
            )
            user = result.scalar_one_or_none()
            if user is None:
                user = User(external_id=external_id)
                session.add(user)
                await session.commit()
                await session.refresh(user)
            return user

    async def get_weekly_goal(self, user_id: int) -> int | None:
        async with self._session_factory() as session:
            user = await session.get(User, user_id)
            return user.weekly_goal if user else None

    async def set_weekly_goal(self, user_id: int, weekly_goal: int | None) -> int | None:
        async with self._session_factory() as session:
            user = await session.get(User, user_id)
            if user is None:
                return None
            user.weekly_goal = weekly_goal
            await session.commit()
            return user.weekly_goal

    # -- moods -------------------------------------------------------------
    async def add_mood_entry(
        self,
        *,
        user_id: int,
        score: int,
        day: date,
        note: str | None = None,
        source: str = "web",
    ) -> MoodLog:
        async with self._session_factory() as session:
            entry = MoodLog(
                user_id=user_id,
                score=score,
                day=day,
                note=note,
                source=source,
            )
            session.add(entry)
            await session.commit()
            await session.refresh(entry)
            return entry

    async def list_mood_entries(
        self,
        *,
        user_id: int,
        since: date | None = None,
        limit: int = 30,
    ) -> Sequence[MoodLog]:
        query = select(MoodLog).where(MoodLog.user_id == user_id)
        if since is not None:
            query = query.where(MoodLog.day >= since)
        async with self._session_factory() as session:
            result = await session.execute(
                query.order_by(MoodLog.day.desc(), MoodLog.created_at.desc()).limit(limit)
            )
            return list(result.scalars().all())

    # -- sessions ----------------------------------------------------------
    async def add_session(
        self,
        *,
        user_id: int,
        type: str,
        title: str | None = None,
        content: str | None = None,
        mood: int | None = None,
        duration_seconds: int | None = None,
    ) -> PracticeSession:
        async with self._session_factory() as session:
            entry = PracticeSession(
                user_id=user_id,
                type=type,
                title=title,
                content=content,
                mood=mood,
                duration_seconds=duration_seconds,
                word_count=count_words(content),
            )
            session.add(entry)
            await session.commit()
            await session.refresh(entry)
            return entry

    async def list_sessions(
        self,
        *,
        user_id: int,
        limit: int = 10,
    ) -> Sequence[PracticeSession]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(PracticeSession)
                .where(PracticeSession.user_id == user_id)
                .order_by(PracticeSession.created_at.desc())
                .limit(limit)
            )
            return list(result.scalars().all())

    # -- emotions ----------------------------------------------------------
    async def add_emotion_entry(
        self,
        *,
        user_id: int,
        emotion_code: str,
        intensity: int,
        note: str | None,
        source: str,
    ) -> EmotionEntry:
        async with self._session_factory() as session:
            entry = EmotionEntry(
                user_id=user_id,
                emotion_code=emotion_code,
                intensity=intensity,
                note=note,
                source=source,
            )
            session.add(entry)
            await session.commit()
            await session.refresh(entry)
            return entry

    async def list_emotion_entries(
        self,
        *,
        user_id: int,
        limit: int = 20,
    ) -> Sequence[EmotionEntry]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(EmotionEntry)
                .where(EmotionEntry.user_id == user_id)
                .order_by(EmotionEntry.created_at.desc())
                .limit(limit)
            )
            return list(result.scalars().all())

    # -- progress ----------------------------------------------------------
    async def fetch_progress_records(
        self,
        user_id: int,
        *,
        since_day: date,
    ) -> dict[str, Any]:
        """Everything the progress engine reads for one user, oldest first.

        Moods are limited to ``since_day``; sessions are lifetime, since session
        achievements count every session ever logged.
        """

        async with self._session_factory() as session:
            mood_rows = await session.execute(
                select(MoodLog)
                .where(MoodLog.user_id == user_id)
                .where(MoodLog.day >= since_day)
                .order_by(MoodLog.day.asc(), MoodLog.created_at.asc())
            )
            session_rows = await session.execute(
                select(PracticeSession)
                .where(PracticeSession.user_id == user_id)
                .order_by(PracticeSession.created_at.asc())
            )
            emotion_rows = await session.execute(
                select(EmotionEntry.emotion_code)
                .where(EmotionEntry.user_id == user_id)
                .distinct()
            )
            return {
                "moods": list(mood_rows.scalars().all()),
                "sessions": list(session_rows.scalars().all()),
                "emotion_codes": [code for (code,) in emotion_rows.all()],
            }


__all__ = ["StorageService", "count_words"]
