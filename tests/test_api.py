import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from schedule_bot.api import deps
from schedule_bot.api.v1.api import api_router
from schedule_bot.core.errors import MalformedResponseError, NotFoundError, TransientError
from schedule_bot.schemas.schedule import EntityKind
from schedule_bot.services.schedule_service import ScheduleService


@pytest.fixture
def client(fake_api):
    # Только роутеры, без lifespan с поллингом бота
    app = FastAPI()
    app.include_router(api_router, prefix="/api/v1")
    app.dependency_overrides[deps.get_schedule_api] = lambda: fake_api
    app.dependency_overrides[deps.get_schedule_service] = lambda: ScheduleService(fake_api)
    with TestClient(app) as test_client:
        yield test_client


def test_read_schedule(client, fake_api, group_payload):
    fake_api.schedules[(EntityKind.GROUP, "59774")] = group_payload

    response = client.get(
        "/api/v1/schedule/group/59774",
        params={"date_from": "2025-03-17", "date_to": "2025-03-23"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["kind"] == "group"
    assert body["entity_id"] == "59774"
    assert body["start"] == "2025-03-17"
    assert body["end"] == "2025-03-23"
    [message] = body["messages"]
    assert "📚 Группа: РИЗ-220501" in message
    assert "Физика" in message


def test_read_schedule_single_day_with_name(client, fake_api):
    fake_api.schedules[(EntityKind.TEACHER, "1024")] = {"events": []}

    response = client.get(
        "/api/v1/schedule/teacher/1024",
        params={"date_from": "2025-03-17", "name": "Иванов И.И."},
    )

    assert response.status_code == 200
    assert response.json()["end"] == "2025-03-17"
    assert response.json()["messages"] == ["Расписание не найдено"]
    assert fake_api.schedule_calls[0][2] == fake_api.schedule_calls[0][3]


def test_read_schedule_not_found(client):
    response = client.get("/api/v1/schedule/group/404404", params={"date_from": "2025-03-17"})
    assert response.status_code == 404


@pytest.mark.parametrize("error", [TransientError("503"), MalformedResponseError("not json")])
def test_read_schedule_upstream_error(client, fake_api, error):
    fake_api.schedule_error = error
    response = client.get("/api/v1/schedule/group/59774", params={"date_from": "2025-03-17"})
    assert response.status_code == 502


def test_read_schedule_invalid_range(client, fake_api):
    response = client.get(
        "/api/v1/schedule/group/59774",
        params={"date_from": "2025-03-23", "date_to": "2025-03-17"},
    )
    assert response.status_code == 400
    assert fake_api.schedule_calls == []


def test_read_schedule_unknown_kind(client):
    response = client.get("/api/v1/schedule/student/1", params={"date_from": "2025-03-17"})
    assert response.status_code == 422


def test_search_groups(client, fake_api):
    fake_api.search_results[EntityKind.GROUP] = [{"id": "59774", "title": "РИЗ-220501"}]

    response = client.get("/api/v1/dicts/groups", params={"search": "РИЗ"})

    assert response.status_code == 200
    assert response.json() == [{"id": "59774", "name": "РИЗ-220501"}]
    assert fake_api.search_calls == [(EntityKind.GROUP, "РИЗ")]


def test_search_teachers_not_found_is_empty(client, fake_api):
    fake_api.search_error = NotFoundError("404")
    response = client.get("/api/v1/dicts/teachers", params={"search": "Иванов"})
    assert response.status_code == 200
    assert response.json() == []


def test_search_upstream_error(client, fake_api):
    fake_api.search_error = TransientError("timeout")
    response = client.get("/api/v1/dicts/groups", params={"search": "РИЗ"})
    assert response.status_code == 502


def test_search_query_too_short(client):
    response = client.get("/api/v1/dicts/groups", params={"search": "Р"})
    assert response.status_code == 422
