from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from ..core.config import Settings
from ..core.logging import log_fields
from ..db.models import MoodLog, PracticeSession
from ..metrics import PROGRESS_COMPUTE_LATENCY
from ..progress import (
    MoodEntry,
    ProgressOverview,
    SessionEntry,
    SessionType,
    StatsSnapshot,
    WeeklyReport,
    aggregate,
    build_overview,
    weekly_report,
)
from ..progress.signals import MIN_HISTORY_DAYS
from .storage import StorageService

logger = logging.getLogger(__name__)


class ProgressService:
    """Load a user's records and run the progress engine over them."""

    def __init__(
        self,
        storage: StorageService,
        *,
        settings: Settings,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._storage = storage
        self._settings = settings
        self._tz = settings.tzinfo
        self._clock = clock or (lambda: datetime.now(UTC))

    def now(self) -> datetime:
        """Current time in the configured timezone."""

        current = self._clock()
        if current.tzinfo is None:
            current = current.replace(tzinfo=UTC)
        return current.astimezone(self._tz)

    async def weekly_goal(self, user_id: int) -> int:
        stored = await self._storage.get_weekly_goal(user_id)
        return stored or self._settings.weekly_goal_default

    async def snapshot(self, user_id: int) -> StatsSnapshot:
        now = self.now()
        moods, sessions, _ = await self._load(user_id, now)
        return aggregate(
            moods,
            sessions,
            weekly_goal=await self.weekly_goal(user_id),
            now=now,
        )

    async def overview(self, user_id: int) -> ProgressOverview:
        now = self.now()
        moods, sessions, emotion_codes = await self._load(user_id, now)
        goal = await self.weekly_goal(user_id)

        started = time.perf_counter()
        result = build_overview(moods, sessions, emotion_codes, weekly_goal=goal, now=now)
        PROGRESS_COMPUTE_LATENCY.labels(operation="overview").observe(
            time.perf_counter() - started
        )

        logger.info(
            "progress computed",
            extra=log_fields(
                user_id=user_id,
                streak=result.stats.mood_streak,
                achievements=len(result.achievements),
                level=result.level.level,
                challenges=len(result.challenges),
            ),
        )
        return result

    async def weekly_report(self, user_id: int) -> WeeklyReport:
        overview = await self.overview(user_id)
        return weekly_report(overview.stats, overview.achievements)

    async def _load(
        self,
        user_id: int,
        now: datetime,
    ) -> tuple[list[MoodEntry], list[SessionEntry], list[str]]:
        history_days = max(self._settings.progress_history_days, MIN_HISTORY_DAYS)
        since_day = now.date() - timedelta(days=history_days)
        records = await self._storage.fetch_progress_records(user_id, since_day=since_day)
        return (
            [self._to_mood_entry(row) for row in records["moods"]],
            [self._to_session_entry(row) for row in records["sessions"]],
            list(records["emotion_codes"]),
        )

    def _local(self, value: datetime | None) -> datetime | None:
        # rows store naive UTC timestamps
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(self._tz)

    def _to_mood_entry(self, row: MoodLog) -> MoodEntry:
        return MoodEntry(date=row.day, score=row.score, logged_at=self._local(row.created_at))

    def _to_session_entry(self, row: PracticeSession) -> SessionEntry:
        try:
            session_type = SessionType(row.type)
        except ValueError:
            logger.warning("Unknown session type %s on session %s", row.type, row.id)
            session_type = SessionType.JOURNAL
        return SessionEntry(
            created_at=self._local(row.created_at),
            type=session_type,
            mood=row.mood,
            word_count=row.word_count or 0,
        )


__all__ = ["ProgressService"]
