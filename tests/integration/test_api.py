from __future__ import annotations

from datetime import date, timedelta

from fastapi.testclient import TestClient


def _today(client: TestClient) -> date:
    return client.app.state.progress_service.now().date()


def _log_moods(client: TestClient, scores: list[int]) -> None:
    today = _today(client)
    for offset, score in enumerate(scores):
        response = client.post(
            "/api/v1/moods",
            json={"score": score, "day": (today - timedelta(days=offset)).isoformat()},
        )
        assert response.status_code == 201


def test_health_endpoint(test_client: TestClient) -> None:
    response = test_client.get("/healthz")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["version"] == "0.1.0-test"


def test_readyz_reports_database(test_client: TestClient) -> None:
    response = test_client.get("/readyz")
    assert response.status_code == 200
    body = response.json()
    assert body["ready"] is True
    assert body["db"]["ok"] is True


def test_metrics_endpoint(test_client: TestClient) -> None:
    test_client.get("/healthz")
    response = test_client.get("/metrics")
    assert response.status_code == 200
    assert "mindbloom_requests_total" in response.text


def test_auth_required_for_protected_routes(test_client: TestClient) -> None:
    response = test_client.post(
        "/api/v1/moods",
        json={"score": 5},
        headers={"X-Mindbloom-User": ""},
    )
    assert response.status_code == 401
    assert test_client.get("/api/v1/progress", headers={"X-Mindbloom-User": ""}).status_code == 401


def test_mood_crud_flow(test_client: TestClient) -> None:
    create_response = test_client.post("/api/v1/moods", json={"score": 7, "note": "calm"})
    assert create_response.status_code == 201
    created = create_response.json()
    assert created["ok"] is True
    assert created["day"] == _today(test_client).isoformat()

    list_response = test_client.get("/api/v1/moods")
    assert list_response.status_code == 200
    items = list_response.json()["items"]
    assert [item["score"] for item in items] == [7]
    assert items[0]["note"] == "calm"


def test_mood_validation(test_client: TestClient) -> None:
    assert test_client.post("/api/v1/moods", json={"score": 0}).status_code == 422
    assert test_client.post("/api/v1/moods", json={"score": 11}).status_code == 422
    future = (_today(test_client) + timedelta(days=2)).isoformat()
    assert test_client.post("/api/v1/moods", json={"score": 5, "day": future}).status_code == 422


def test_session_crud_flow(test_client: TestClient) -> None:
    create_response = test_client.post(
        "/api/v1/sessions",
        json={"type": "journal", "title": "Morning", "content": "slept well and woke early"},
    )
    assert create_response.status_code == 201
    assert create_response.json()["word_count"] == 5

    meditation = test_client.post(
        "/api/v1/sessions",
        json={"type": "meditation", "duration_seconds": 600},
    )
    assert meditation.status_code == 201

    items = test_client.get("/api/v1/sessions").json()["items"]
    assert {item["type"] for item in items} == {"journal", "meditation"}

    invalid = test_client.post("/api/v1/sessions", json={"type": "yoga"})
    assert invalid.status_code == 422


def test_emotion_crud_flow(test_client: TestClient) -> None:
    create_response = test_client.post(
        "/api/v1/emotions",
        json={"emotion_code": " Joy ", "intensity": 4, "note": "sunny"},
    )
    assert create_response.status_code == 201
    assert isinstance(create_response.json()["id"], int)

    items = test_client.get("/api/v1/emotions").json()["items"]
    assert items[0]["emotion_code"] == "joy"


def test_preferences_round_trip(test_client: TestClient) -> None:
    initial = test_client.get("/api/v1/preferences").json()
    assert initial == {"weekly_goal": 5, "timezone": "UTC"}

    updated = test_client.put("/api/v1/preferences", json={"weekly_goal": 3})
    assert updated.status_code == 200
    assert updated.json()["weekly_goal"] == 3
    assert test_client.get("/api/v1/progress/stats").json()["weekly_goal"] == 3

    reset = test_client.put("/api/v1/preferences", json={"weekly_goal": None})
    assert reset.json()["weekly_goal"] == 5
    assert test_client.put("/api/v1/preferences", json={"weekly_goal": 0}).status_code == 422


def test_progress_for_new_user(test_client: TestClient) -> None:
    response = test_client.get("/api/v1/progress")
    assert response.status_code == 200
    body = response.json()
    assert body["stats"] == {
        "mood_streak": 0,
        "avg_mood_score": 0.0,
        "total_sessions": 0,
        "weekly_goal": 5,
        "weekly_progress": 0,
    }
    assert body["achievements"] == []
    assert body["challenges"] == []
    assert body["level"]["level"] == 1
    assert body["level"]["points_to_next"] == 100
    assert body["motivational_message"]["kind"] == "welcome"


def test_progress_after_activity(test_client: TestClient) -> None:
    _log_moods(test_client, [8, 9, 8])
    for _ in range(2):
        test_client.post("/api/v1/sessions", json={"type": "breathing"})

    stats = test_client.get("/api/v1/progress/stats").json()
    assert stats["mood_streak"] == 3
    assert stats["avg_mood_score"] == 8.3
    assert stats["total_sessions"] == 2

    achievements = test_client.get("/api/v1/progress/achievements").json()
    ids = [item["id"] for item in achievements["items"]]
    assert ids == ["first_streak", "first_session", "mood_optimist"]
    assert achievements["total_points"] == 275
    assert achievements["available"] == 19

    level = test_client.get("/api/v1/progress/level").json()
    assert level["level"] == 2
    assert level["total_points"] == 275
    assert level["points_to_next"] == 25

    challenges = test_client.get("/api/v1/progress/challenges").json()["items"]
    assert [item["id"] for item in challenges] == ["daily_mood", "weekly_goal", "build_streak"]
    assert challenges[2]["description"] == "Reach a 4-day streak"

    overview = test_client.get("/api/v1/progress").json()
    assert overview["level"] == level
    assert overview["signals"]["total_active_days"] == 3


def test_weekly_report_endpoint(test_client: TestClient) -> None:
    _log_moods(test_client, [6, 7])
    test_client.post("/api/v1/sessions", json={"type": "mood_check"})

    report = test_client.get("/api/v1/progress/weekly-report").json()
    assert report["weekly_goal"] == 5
    assert report["streak_growth"] == 0
    assert report["points_earned"] == 25
    assert [item["id"] for item in report["new_achievements"]] == ["first_session"]
    assert report["motivational_message"]["kind"] == "motivation"


def test_users_are_isolated(test_client: TestClient) -> None:
    _log_moods(test_client, [9])
    other = test_client.get("/api/v1/moods", headers={"X-Mindbloom-User": "someone-else"})
    assert other.status_code == 200
    assert other.json()["items"] == []


def test_mood_posts_are_rate_limited(test_client: TestClient) -> None:
    statuses = [
        test_client.post("/api/v1/moods", json={"score": 5}).status_code
        for _ in range(31)
    ]
    assert statuses[:30] == [201] * 30
    assert statuses[30] == 429
    limited = test_client.post("/api/v1/moods", json={"score": 5})
    assert int(limited.headers["Retry-After"]) >= 1
