from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from backend.app.db.models import PracticeSession
from backend.app.services.storage import StorageService, count_words


def test_count_words() -> None:
    assert count_words(None) == 0
    assert count_words("") == 0
    assert count_words("  quiet   morning\nwalk ") == 3


@pytest.mark.anyio
async def test_ensure_user_is_idempotent(temp_session_factory) -> None:
    storage = StorageService(temp_session_factory)
    first = await storage.ensure_user("auth0|abc")
    second = await storage.ensure_user("auth0|abc")
    other = await storage.ensure_user("auth0|xyz")

    assert first.id == second.id
    assert other.id != first.id


@pytest.mark.anyio
async def test_weekly_goal_preference(temp_session_factory) -> None:
    storage = StorageService(temp_session_factory)
    user = await storage.ensure_user("goal")

    assert await storage.get_weekly_goal(user.id) is None
    assert await storage.set_weekly_goal(user.id, 3) == 3
    assert await storage.get_weekly_goal(user.id) == 3
    assert await storage.set_weekly_goal(user.id, None) is None
    assert await storage.set_weekly_goal(9999, 4) is None


@pytest.mark.anyio
async def test_mood_session_emotion_crud(temp_session_factory) -> None:
    storage = StorageService(temp_session_factory)
    user = await storage.ensure_user("crud")
    today = date(2026, 10, 14)

    for offset, score in enumerate((6, 7, 8)):
        await storage.add_mood_entry(
            user_id=user.id,
            score=score,
            day=today - timedelta(days=offset),
            source="test",
        )
    saved_session = await storage.add_session(
        user_id=user.id,
        type="journal",
        title="Evening",
        content="grateful for a slow dinner with friends",
        mood=7,
    )
    saved_emotion = await storage.add_emotion_entry(
        user_id=user.id,
        emotion_code="joy",
        intensity=4,
        note="sunny",
        source="test",
    )

    moods = await storage.list_mood_entries(user_id=user.id)
    recent = await storage.list_mood_entries(user_id=user.id, since=today - timedelta(days=1))
    sessions = await storage.list_sessions(user_id=user.id)
    emotions = await storage.list_emotion_entries(user_id=user.id)

    assert [m.score for m in moods] == [6, 7, 8]
    assert len(recent) == 2
    assert saved_session.word_count == 7
    assert sessions[0].id == saved_session.id
    assert saved_emotion.id > 0
    assert emotions[0].emotion_code == "joy"


@pytest.mark.anyio
async def test_fetch_progress_records(temp_session_factory) -> None:
    storage = StorageService(temp_session_factory)
    user = await storage.ensure_user("progress")
    other = await storage.ensure_user("someone-else")
    today = date(2026, 10, 14)

    await storage.add_mood_entry(user_id=user.id, score=5, day=today - timedelta(days=500))
    await storage.add_mood_entry(user_id=user.id, score=8, day=today)
    await storage.add_mood_entry(user_id=user.id, score=6, day=today - timedelta(days=1))
    await storage.add_mood_entry(user_id=other.id, score=1, day=today)

    async with temp_session_factory() as session:
        session.add(
            PracticeSession(
                user_id=user.id,
                type="meditation",
                created_at=datetime(2024, 1, 1, 8, 0),
            )
        )
        await session.commit()
    await storage.add_session(user_id=user.id, type="journal", content="one two")

    for code in ("joy", "joy", "calm"):
        await storage.add_emotion_entry(
            user_id=user.id, emotion_code=code, intensity=3, note=None, source="test"
        )

    records = await storage.fetch_progress_records(
        user.id, since_day=today - timedelta(days=400)
    )

    assert [m.score for m in records["moods"]] == [6, 8]
    assert [s.type for s in records["sessions"]] == ["meditation", "journal"]
    assert sorted(records["emotion_codes"]) == ["calm", "joy"]

    windowed = await storage.fetch_progress_records(user.id, since_day=today)
    assert [m.score for m in windowed["moods"]] == [8]
    # sessions ignore the mood window
    assert [s.type for s in windowed["sessions"]] == ["meditation", "journal"]


@pytest.mark.anyio
async def test_healthcheck(temp_session_factory) -> None:
    storage = StorageService(temp_session_factory)
    await storage.healthcheck()
