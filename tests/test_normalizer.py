from datetime import date, time
import json

import pytest
from pydantic import ValidationError

from schedule_bot.core.errors import MalformedResponseError
from schedule_bot.services.normalizer import normalize


def test_normalize_bytes_payload(group_payload):
    lessons, name = normalize(json.dumps(group_payload).encode())

    assert name == "РИЗ-220501"
    assert len(lessons) == 2
    # Порядок как в ответе API, сортирует форматтер
    physics, analysis = lessons
    assert physics.title == "Физика"
    assert physics.date == date(2025, 3, 17)
    assert physics.time_begin == time(10, 15)
    assert physics.time_end == time(11, 45)
    assert physics.pair_number == "2"
    assert physics.load_type == "Лекция"
    assert physics.teacher_name == "Петров П.П."
    assert physics.room_title == "Р-237"
    assert physics.room_location == "Мира, 32"
    assert physics.comment == ""
    assert physics.group_name == ""
    assert analysis.comment == "Teams"


def test_caller_supplied_name_wins(group_payload):
    _, name = normalize(group_payload, display_name="Группа из запроса")
    assert name == "Группа из запроса"


def test_blank_caller_name_falls_back_to_payload(group_payload):
    _, name = normalize(group_payload, display_name="   ")
    assert name == "РИЗ-220501"


def test_teacher_name_from_payload():
    payload = {"teacher": {"id": 1, "name": "Иванов Иван Иванович"}, "events": []}
    lessons, name = normalize(payload)
    assert lessons == []
    assert name == "Иванов Иван Иванович"


def test_no_name_anywhere():
    lessons, name = normalize({"events": []})
    assert lessons == []
    assert name is None


def test_missing_or_null_events_mean_no_lessons():
    assert normalize(b"{}") == ([], None)
    assert normalize('{"events": null}') == ([], None)


def test_nested_room_and_loose_fields():
    payload = {
        "events": [
            {
                "title": "  Программирование ",
                "date": "2025-03-18T00:00:00",
                "timeBegin": "12:00",
                "timeEnd": "13:30",
                "room": {"title": "101", "location": "Главный корпус"},
                "teacherName": None,
                "pairNumber": None,
                "groupName": "РИЗ-220501",
            }
        ]
    }
    [lesson], _ = normalize(payload)

    assert lesson.title == "Программирование"
    assert lesson.date == date(2025, 3, 18)
    assert lesson.time_begin == time(12, 0)
    assert lesson.room_title == "101"
    assert lesson.room_location == "Главный корпус"
    assert lesson.teacher_name == ""
    assert lesson.pair_number == ""
    assert lesson.group_name == "РИЗ-220501"


def test_plain_string_auditory():
    payload = {"events": [{"date": "2025-03-18", "timeBegin": "12:00", "timeEnd": "13:30", "auditory": "Спортзал"}]}
    [lesson], _ = normalize(payload)
    assert lesson.room_title == "Спортзал"
    assert lesson.room_location == ""
    assert lesson.title == ""


def test_lessons_are_immutable(group_payload):
    lessons, _ = normalize(group_payload)
    with pytest.raises(ValidationError):
        lessons[0].title = "Другое"


@pytest.mark.parametrize("raw", [
    b"not json at all",
    "[1, 2, 3]",
    '"just a string"',
    '{"events": {"title": "x"}}',
    '{"events": ["x"]}',
    '{"events": [{"title": "x", "date": "вчера", "timeBegin": "08:30", "timeEnd": "10:00"}]}',
    '{"events": [{"title": "x", "date": "2025-03-17", "timeBegin": "8 утра", "timeEnd": "10:00"}]}',
    '{"events": [{"title": "x", "timeBegin": "08:30", "timeEnd": "10:00"}]}',
])
def test_malformed_payloads(raw):
    with pytest.raises(MalformedResponseError):
        normalize(raw)
