from __future__ import annotations

from pydantic import BaseModel, Field


class PreferencesUpdate(BaseModel):
    weekly_goal: int | None = Field(
        default=None,
        ge=1,
        le=50,
        description="Sessions per week; null resets to WEEKLY_GOAL_DEFAULT.",
    )


class PreferencesResponse(BaseModel):
    weekly_goal: int
    timezone: str
