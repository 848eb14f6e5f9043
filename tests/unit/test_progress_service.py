from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from backend.app.db.models import PracticeSession
from backend.app.metrics import PROGRESS_COMPUTE_LATENCY
from backend.app.services.progress import ProgressService
from backend.app.services.storage import StorageService

# Wednesday evening UTC, already Thursday in Tokyo
NOW = datetime(2026, 10, 14, 20, 0, tzinfo=UTC)


def _settings(
    timezone: str = "UTC",
    weekly_goal_default: int = 5,
    progress_history_days: int = 400,
) -> SimpleNamespace:
    return SimpleNamespace(
        tzinfo=ZoneInfo(timezone),
        timezone=timezone,
        weekly_goal_default=weekly_goal_default,
        progress_history_days=progress_history_days,
    )


def _histogram_count(operation: str) -> float:
    for family in PROGRESS_COMPUTE_LATENCY.collect():
        for sample in family.samples:
            if sample.name.endswith("_count") and sample.labels.get("operation") == operation:
                return sample.value
    return 0.0


async def _seed(storage: StorageService, factory, user_id: int) -> None:
    today = NOW.date()
    for offset in range(7):
        await storage.add_mood_entry(
            user_id=user_id,
            score=8,
            day=today - timedelta(days=offset),
        )
    async with factory() as session:
        session.add_all(
            [
                PracticeSession(
                    user_id=user_id,
                    type="meditation",
                    created_at=(NOW - timedelta(days=offset)).replace(tzinfo=None),
                )
                for offset in range(10)
            ]
        )
        await session.commit()


@pytest.mark.anyio
async def test_snapshot_uses_stored_history(temp_session_factory) -> None:
    storage = StorageService(temp_session_factory)
    user = await storage.ensure_user("service")
    await _seed(storage, temp_session_factory, user.id)
    service = ProgressService(storage, settings=_settings(), clock=lambda: NOW)

    snapshot = await service.snapshot(user.id)

    assert snapshot.mood_streak == 7
    assert snapshot.avg_mood_score == 8.0
    assert snapshot.total_sessions == 10
    # Sunday 2026-10-11 .. Wednesday 2026-10-14
    assert snapshot.weekly_progress == 4
    assert snapshot.weekly_goal == 5


@pytest.mark.anyio
async def test_weekly_goal_preference_overrides_default(temp_session_factory) -> None:
    storage = StorageService(temp_session_factory)
    user = await storage.ensure_user("goal")
    service = ProgressService(
        storage,
        settings=_settings(weekly_goal_default=4),
        clock=lambda: NOW,
    )

    assert await service.weekly_goal(user.id) == 4
    await storage.set_weekly_goal(user.id, 2)
    assert await service.weekly_goal(user.id) == 2


@pytest.mark.anyio
async def test_overview_records_metrics_and_logs(
    temp_session_factory,
    caplog: pytest.LogCaptureFixture,
) -> None:
    storage = StorageService(temp_session_factory)
    user = await storage.ensure_user("overview")
    await _seed(storage, temp_session_factory, user.id)
    service = ProgressService(storage, settings=_settings(), clock=lambda: NOW)

    before = _histogram_count("overview")
    with caplog.at_level(logging.INFO, logger="backend.app.services.progress"):
        overview = await service.overview(user.id)
    after = _histogram_count("overview")

    ids = [achievement.id for achievement in overview.achievements]
    assert ids[:5] == [
        "first_streak",
        "week_warrior",
        "first_session",
        "session_explorer",
        "mood_optimist",
    ]
    assert "first_week" in ids
    assert overview.level.total_points == sum(a.points for a in overview.achievements)
    assert after == pytest.approx(before + 1.0)
    assert any(record.getMessage() == "progress computed" for record in caplog.records)


@pytest.mark.anyio
async def test_now_follows_configured_timezone(temp_session_factory) -> None:
    storage = StorageService(temp_session_factory)
    service = ProgressService(storage, settings=_settings("Asia/Tokyo"), clock=lambda: NOW)

    local = service.now()
    assert local.tzinfo == ZoneInfo("Asia/Tokyo")
    assert local.date() == NOW.date() + timedelta(days=1)

    naive_clock = ProgressService(
        storage,
        settings=_settings(),
        clock=lambda: NOW.replace(tzinfo=None),
    )
    assert naive_clock.now() == NOW


@pytest.mark.anyio
async def test_streak_is_judged_in_local_days(temp_session_factory) -> None:
    storage = StorageService(temp_session_factory)
    user = await storage.ensure_user("tokyo")
    # yesterday in UTC is two days ago in Tokyo
    await storage.add_mood_entry(user_id=user.id, score=6, day=NOW.date() - timedelta(days=1))
    service = ProgressService(storage, settings=_settings("Asia/Tokyo"), clock=lambda: NOW)

    assert (await service.snapshot(user.id)).mood_streak == 0


@pytest.mark.anyio
async def test_weekly_report(temp_session_factory) -> None:
    storage = StorageService(temp_session_factory)
    user = await storage.ensure_user("report")
    await _seed(storage, temp_session_factory, user.id)
    service = ProgressService(storage, settings=_settings(), clock=lambda: NOW)

    report = await service.weekly_report(user.id)

    assert report.weekly_progress == 4
    assert report.streak_growth == 0
    assert len(report.new_achievements) == 3
    assert report.points_earned == report.level.total_points


@pytest.mark.anyio
async def test_unknown_session_type_is_read_as_journal(
    temp_session_factory,
    caplog: pytest.LogCaptureFixture,
) -> None:
    storage = StorageService(temp_session_factory)
    user = await storage.ensure_user("legacy")
    await storage.add_session(user_id=user.id, type="yoga")
    service = ProgressService(storage, settings=_settings(), clock=lambda: NOW)

    with caplog.at_level(logging.WARNING, logger="backend.app.services.progress"):
        snapshot = await service.snapshot(user.id)

    assert snapshot.total_sessions == 1
    assert "yoga" in caplog.text


@pytest.mark.anyio
async def test_short_history_setting_still_loads_both_improvement_windows(
    temp_session_factory,
) -> None:
    storage = StorageService(temp_session_factory)
    user = await storage.ensure_user("short-window")
    today = NOW.date()
    for offset in range(60):
        await storage.add_mood_entry(
            user_id=user.id,
            score=5 if offset in (30, 31) else 9,
            day=today - timedelta(days=offset),
        )
    short = ProgressService(
        storage,
        settings=_settings(progress_history_days=31),
        clock=lambda: NOW,
    )
    full = ProgressService(storage, settings=_settings(), clock=lambda: NOW)

    short_overview = await short.overview(user.id)
    full_overview = await full.overview(user.id)

    # 9.0 over the last 30 days against (28 * 9 + 2 * 5) / 30 before
    assert short_overview.signals.mood_improvement == 0.3
    assert short_overview.signals == full_overview.signals
    assert "mood_improver" not in [a.id for a in short_overview.achievements]
