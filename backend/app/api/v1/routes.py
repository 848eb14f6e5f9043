from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from ...core.security import resolve_authenticated_user
from ...metrics import RECORDS_CREATED, USER_API_COUNTER
from ...progress import ACHIEVEMENTS, total_points
from ...schemas.emotion import (
    EmotionCreate,
    EmotionCreateResponse,
    EmotionEntryModel,
    EmotionListResponse,
)
from ...schemas.mood import (
    MoodCreate,
    MoodCreateResponse,
    MoodEntryModel,
    MoodListResponse,
)
from ...schemas.preferences import PreferencesResponse, PreferencesUpdate
from ...schemas.progress import (
    AchievementListResponse,
    AchievementModel,
    ChallengeListResponse,
    ChallengeModel,
    LevelModel,
    ProgressOverviewResponse,
    StatsModel,
    WeeklyReportResponse,
)
from ...schemas.session import (
    SessionCreate,
    SessionCreateResponse,
    SessionEntryModel,
    SessionListResponse,
)
from ...services.progress import ProgressService
from ...services.ratelimit import RateLimiter
from ...services.storage import StorageService

router = APIRouter(prefix="/api/v1", tags=["core"])

RATE_LIMIT_WINDOW_SECONDS = 60


def get_storage_service(request: Request) -> StorageService:
    return request.app.state.storage_service


def get_progress_service(request: Request) -> ProgressService:
    return request.app.state.progress_service


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def _enforce_rate_limit(limiter: RateLimiter, key: str, limit: int) -> None:
    if limiter.allow(key, limit=limit, window_seconds=RATE_LIMIT_WINDOW_SECONDS):
        return
    retry_after = limiter.retry_after(key, limit=limit, window_seconds=RATE_LIMIT_WINDOW_SECONDS)
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail="rate limited",
        headers={"Retry-After": str(retry_after)},
    )


# -- moods -------------------------------------------------------------------


@router.post(
    "/moods",
    response_model=MoodCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_mood_entry(
    payload: MoodCreate,
    storage: StorageService = Depends(get_storage_service),
    progress: ProgressService = Depends(get_progress_service),
    user_id: int = Depends(resolve_authenticated_user),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> MoodCreateResponse:
    _enforce_rate_limit(limiter, f"mood:{user_id}", limit=30)
    today = progress.now().date()
    day = payload.day or today
    if day > today:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="mood day cannot be in the future",
        )
    entry = await storage.add_mood_entry(
        user_id=user_id,
        score=payload.score,
        day=day,
        note=payload.note,
        source=payload.source or "api",
    )
    RECORDS_CREATED.labels(kind="mood").inc()
    USER_API_COUNTER.labels(endpoint="moods_post").inc()
    return MoodCreateResponse(id=entry.id, day=entry.day)


@router.get("/moods", response_model=MoodListResponse)
async def list_mood_entries(
    storage: StorageService = Depends(get_storage_service),
    progress: ProgressService = Depends(get_progress_service),
    user_id: int = Depends(resolve_authenticated_user),
    days: int | None = Query(default=None, ge=1, le=366),
    limit: int = Query(default=30, ge=1, le=366),
) -> MoodListResponse:
    since = progress.now().date() - timedelta(days=days - 1) if days else None
    entries = await storage.list_mood_entries(user_id=user_id, since=since, limit=limit)
    items = [MoodEntryModel.model_validate(e, from_attributes=True) for e in entries]
    USER_API_COUNTER.labels(endpoint="moods_get").inc()
    return MoodListResponse(items=items)


# -- sessions ----------------------------------------------------------------


@router.post(
    "/sessions",
    response_model=SessionCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    payload: SessionCreate,
    storage: StorageService = Depends(get_storage_service),
    user_id: int = Depends(resolve_authenticated_user),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> SessionCreateResponse:
    _enforce_rate_limit(limiter, f"session:{user_id}", limit=20)
    entry = await storage.add_session(
        user_id=user_id,
        type=payload.type.value,
        title=payload.title,
        content=payload.content,
        mood=payload.mood,
        duration_seconds=payload.duration_seconds,
    )
    RECORDS_CREATED.labels(kind="session").inc()
    USER_API_COUNTER.labels(endpoint="sessions_post").inc()
    return SessionCreateResponse(id=entry.id, word_count=entry.word_count)


@router.get("/sessions", response_model=SessionListResponse)
async def list_sessions(
    storage: StorageService = Depends(get_storage_service),
    user_id: int = Depends(resolve_authenticated_user),
    limit: int = Query(default=10, ge=1, le=100),
) -> SessionListResponse:
    entries = await storage.list_sessions(user_id=user_id, limit=limit)
    items = [SessionEntryModel.model_validate(e, from_attributes=True) for e in entries]
    USER_API_COUNTER.labels(endpoint="sessions_get").inc()
    return SessionListResponse(items=items)


# -- emotions ----------------------------------------------------------------


@router.post(
    "/emotions",
    response_model=EmotionCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_emotion_entry(
    payload: EmotionCreate,
    storage: StorageService = Depends(get_storage_service),
    user_id: int = Depends(resolve_authenticated_user),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> EmotionCreateResponse:
    _enforce_rate_limit(limiter, f"emotion:{user_id}", limit=40)
    entry = await storage.add_emotion_entry(
        user_id=user_id,
        emotion_code=payload.emotion_code.strip().lower(),
        intensity=payload.intensity,
        note=payload.note,
        source=payload.source or "api",
    )
    RECORDS_CREATED.labels(kind="emotion").inc()
    USER_API_COUNTER.labels(endpoint="emotions_post").inc()
    return EmotionCreateResponse(id=entry.id)


@router.get("/emotions", response_model=EmotionListResponse)
async def list_emotion_entries(
    storage: StorageService = Depends(get_storage_service),
    user_id: int = Depends(resolve_authenticated_user),
    limit: int = Query(default=20, ge=1, le=100),
) -> EmotionListResponse:
    entries = await storage.list_emotion_entries(user_id=user_id, limit=limit)
    items = [EmotionEntryModel.model_validate(e, from_attributes=True) for e in entries]
    USER_API_COUNTER.labels(endpoint="emotions_get").inc()
    return EmotionListResponse(items=items)


# -- preferences -------------------------------------------------------------


@router.get("/preferences", response_model=PreferencesResponse)
async def read_preferences(
    request: Request,
    progress: ProgressService = Depends(get_progress_service),
    user_id: int = Depends(resolve_authenticated_user),
) -> PreferencesResponse:
    return PreferencesResponse(
        weekly_goal=await progress.weekly_goal(user_id),
        timezone=request.app.state.settings.timezone,
    )


@router.put("/preferences", response_model=PreferencesResponse)
async def update_preferences(
    request: Request,
    payload: PreferencesUpdate,
    storage: StorageService = Depends(get_storage_service),
    progress: ProgressService = Depends(get_progress_service),
    user_id: int = Depends(resolve_authenticated_user),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> PreferencesResponse:
    _enforce_rate_limit(limiter, f"preferences:{user_id}", limit=10)
    await storage.set_weekly_goal(user_id, payload.weekly_goal)
    USER_API_COUNTER.labels(endpoint="preferences_put").inc()
    return PreferencesResponse(
        weekly_goal=await progress.weekly_goal(user_id),
        timezone=request.app.state.settings.timezone,
    )


# -- progress ----------------------------------------------------------------


@router.get("/progress", response_model=ProgressOverviewResponse)
async def read_progress(
    progress: ProgressService = Depends(get_progress_service),
    user_id: int = Depends(resolve_authenticated_user),
) -> ProgressOverviewResponse:
    overview = await progress.overview(user_id)
    USER_API_COUNTER.labels(endpoint="progress_get").inc()
    return ProgressOverviewResponse.model_validate(overview, from_attributes=True)


@router.get("/progress/stats", response_model=StatsModel)
async def read_progress_stats(
    progress: ProgressService = Depends(get_progress_service),
    user_id: int = Depends(resolve_authenticated_user),
) -> StatsModel:
    snapshot = await progress.snapshot(user_id)
    USER_API_COUNTER.labels(endpoint="progress_stats").inc()
    return StatsModel.model_validate(snapshot, from_attributes=True)


@router.get("/progress/achievements", response_model=AchievementListResponse)
async def read_achievements(
    progress: ProgressService = Depends(get_progress_service),
    user_id: int = Depends(resolve_authenticated_user),
) -> AchievementListResponse:
    overview = await progress.overview(user_id)
    USER_API_COUNTER.labels(endpoint="progress_achievements").inc()
    return AchievementListResponse(
        items=[
            AchievementModel.model_validate(item, from_attributes=True)
            for item in overview.achievements
        ],
        total_points=total_points(overview.achievements),
        available=len(ACHIEVEMENTS),
    )


@router.get("/progress/level", response_model=LevelModel)
async def read_level(
    progress: ProgressService = Depends(get_progress_service),
    user_id: int = Depends(resolve_authenticated_user),
) -> LevelModel:
    overview = await progress.overview(user_id)
    USER_API_COUNTER.labels(endpoint="progress_level").inc()
    return LevelModel.model_validate(overview.level, from_attributes=True)


@router.get("/progress/challenges", response_model=ChallengeListResponse)
async def read_challenges(
    progress: ProgressService = Depends(get_progress_service),
    user_id: int = Depends(resolve_authenticated_user),
) -> ChallengeListResponse:
    overview = await progress.overview(user_id)
    USER_API_COUNTER.labels(endpoint="progress_challenges").inc()
    return ChallengeListResponse(
        items=[
            ChallengeModel.model_validate(item, from_attributes=True)
            for item in overview.challenges
        ]
    )


@router.get("/progress/weekly-report", response_model=WeeklyReportResponse)
async def read_weekly_report(
    progress: ProgressService = Depends(get_progress_service),
    user_id: int = Depends(resolve_authenticated_user),
) -> WeeklyReportResponse:
    report = await progress.weekly_report(user_id)
    USER_API_COUNTER.labels(endpoint="progress_weekly_report").inc()
    return WeeklyReportResponse.model_validate(report, from_attributes=True)
