import os

# Settings() требует токен при импорте, в тестах бот не запускается
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456789:TEST-token-for-pytest")

import json
from datetime import date, time

import pytest

from schedule_bot.core.errors import NotFoundError
from schedule_bot.schemas.schedule import EntityKind, Lesson, ScheduleQuery, SearchResult


def _lesson(**overrides) -> Lesson:
    values = {
        "title": "Математический анализ",
        "date": date(2025, 3, 17),
        "time_begin": time(8, 30),
        "time_end": time(10, 0),
    }
    values.update(overrides)
    return Lesson(**values)


@pytest.fixture
def make_lesson():
    return _lesson


@pytest.fixture
def group_query() -> ScheduleQuery:
    return ScheduleQuery(
        kind=EntityKind.GROUP,
        entity_id="59774",
        display_name="РИЗ-220501",
        start=date(2025, 3, 17),
        end=date(2025, 3, 23),
    )


@pytest.fixture
def teacher_query() -> ScheduleQuery:
    return ScheduleQuery(
        kind=EntityKind.TEACHER,
        entity_id="1024",
        display_name="Иванов Иван Иванович",
        start=date(2025, 3, 17),
        end=date(2025, 3, 23),
    )


class FakeScheduleApi:
    """Подменяет ScheduleApi: отдает заранее заданные ответы и запоминает вызовы."""
    def __init__(self):
        self.schedules = {}
        self.search_results = {EntityKind.GROUP: [], EntityKind.TEACHER: []}
        self.schedule_error = None
        self.search_error = None
        self.schedule_calls = []
        self.search_calls = []

    async def fetch_schedule(self, kind, entity_id, start, end, timeout=None):
        self.schedule_calls.append((kind, entity_id, start, end))
        if self.schedule_error is not None:
            raise self.schedule_error
        if (kind, entity_id) not in self.schedules:
            raise NotFoundError("upstream returned 404")
        payload = self.schedules[(kind, entity_id)]
        return payload if isinstance(payload, bytes) else json.dumps(payload).encode()

    async def search(self, kind, query):
        self.search_calls.append((kind, query))
        if self.search_error is not None:
            raise self.search_error
        return [SearchResult(**item) for item in self.search_results[kind]]

    async def close(self):
        pass


@pytest.fixture
def fake_api() -> FakeScheduleApi:
    return FakeScheduleApi()


@pytest.fixture
def group_payload() -> dict:
    return {
        "group": {"id": 59774, "title": "РИЗ-220501"},
        "events": [
            {
                "title": "Физика",
                "date": "2025-03-17",
                "timeBegin": "10:15:00",
                "timeEnd": "11:45:00",
                "pairNumber": 2,
                "loadType": "Лекция",
                "teacherName": "Петров П.П.",
                "auditoryTitle": "Р-237",
                "auditoryLocation": "Мира, 32",
                "comment": None,
            },
            {
                "title": "Математический анализ",
                "date": "2025-03-17",
                "timeBegin": "08:30:00",
                "timeEnd": "10:00:00",
                "pairNumber": 1,
                "loadType": "Практические занятия",
                "teacherName": "Иванов И.И.",
                "auditoryTitle": "Онлайн",
                "auditoryLocation": "Онлайн",
                "comment": "Teams",
            },
        ],
    }
