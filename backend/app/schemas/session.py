from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..progress import SessionType


class SessionCreate(BaseModel):
    type: SessionType = SessionType.JOURNAL
    title: str | None = Field(default=None, max_length=200)
    content: str | None = Field(default=None, max_length=20000)
    mood: int | None = Field(default=None, ge=1, le=10)
    duration_seconds: int | None = Field(default=None, ge=0, le=24 * 3600)


class SessionEntryModel(BaseModel):
    id: int
    type: SessionType
    title: str | None
    mood: int | None
    duration_seconds: int | None
    word_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SessionListResponse(BaseModel):
    items: list[SessionEntryModel]


class SessionCreateResponse(BaseModel):
    ok: bool = True
    id: int
    word_count: int
