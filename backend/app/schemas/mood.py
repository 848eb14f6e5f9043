from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class MoodCreate(BaseModel):
    score: int = Field(..., ge=1, le=10)
    day: date | None = Field(
        default=None,
        description="Calendar day the mood belongs to; defaults to today in APP_TIMEZONE.",
    )
    note: str | None = Field(default=None, max_length=1000)
    source: str | None = Field(default="web", max_length=20)


class MoodEntryModel(BaseModel):
    id: int
    score: int
    day: date
    note: str | None
    source: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MoodListResponse(BaseModel):
    items: list[MoodEntryModel]


class MoodCreateResponse(BaseModel):
    ok: bool = True
    id: int
    day: date
