from __future__ import annotations

from collections.abc import AsyncIterator, Generator
from pathlib import Path
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from backend.app.core import config
from backend.db import create_engine, create_session_factory, init_db


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def test_client(monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    monkeypatch.setenv("VERSION", "0.1.0-test")
    monkeypatch.setenv("APP_TIMEZONE", "UTC")
    monkeypatch.delenv("WEEKLY_GOAL_DEFAULT", raising=False)

    db_path = Path("data") / f"test_{uuid4().hex}.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    config.get_settings.cache_clear()

    from backend.app.main import app

    try:
        with TestClient(app) as client:
            client.headers.update({"X-Mindbloom-User": f"user-{uuid4().hex[:8]}"})
            yield client
    finally:
        config.get_settings.cache_clear()
        db_path.unlink(missing_ok=True)


@pytest.fixture()
async def temp_session_factory(tmp_path: Path) -> AsyncIterator:
    db_path = tmp_path / f"unit_{uuid4().hex}.db"
    database_url = f"sqlite+aiosqlite:///{db_path}"
    engine = create_engine(database_url)
    session_factory = create_session_factory(engine)
    await init_db(engine, session_factory, "test", database_url)
    try:
        yield session_factory
    finally:
        await engine.dispose()
