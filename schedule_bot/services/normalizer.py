# schedule_bot/services/normalizer.py

import json
import logging
from typing import Any, List, Optional, Tuple, Union

from pydantic import ValidationError

from schedule_bot.core.errors import MalformedResponseError
from schedule_bot.schemas.schedule import Lesson

logger = logging.getLogger(__name__)

# Где в ответе API может лежать название группы/преподавателя (первое найденное побеждает)
_NESTED_NAME_KEYS = (("group", "title"), ("group", "name"), ("teacher", "name"), ("teacher", "title"))
_TOP_LEVEL_NAME_KEYS = ("groupName", "teacherName", "title", "name")


def _extract_display_name(payload: dict) -> Optional[str]:
    for container_key, name_key in _NESTED_NAME_KEYS:
        container = payload.get(container_key)
        if isinstance(container, dict):
            value = container.get(name_key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    for key in _TOP_LEVEL_NAME_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def normalize(
    raw: Union[bytes, str, dict], display_name: Optional[str] = None
) -> Tuple[List[Lesson], Optional[str]]:
    """
    Разбирает ответ API расписания в список занятий.

    Порядок занятий сохраняется как в ответе, сортировкой занимается форматтер.
    Название сущности берется из аргумента, а если его нет - из самого ответа.
    Бросает MalformedResponseError, если структура ответа не похожа на расписание.
    """
    payload: Any = raw
    if isinstance(raw, (bytes, str)):
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise MalformedResponseError(f"response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedResponseError(f"expected JSON object, got {type(payload).__name__}")

    events = payload.get("events")
    if events is None:
        events = []
    if not isinstance(events, list):
        raise MalformedResponseError("'events' is not a list")

    lessons = []
    for index, event in enumerate(events):
        if not isinstance(event, dict):
            raise MalformedResponseError(f"event #{index} is not an object")
        try:
            lessons.append(Lesson.model_validate(event))
        except ValidationError as e:
            raise MalformedResponseError(f"event #{index} is invalid: {e.error_count()} error(s)") from e

    name = display_name.strip() if display_name and display_name.strip() else _extract_display_name(payload)
    logger.debug(f"Normalized {len(lessons)} lessons (name={name!r})")
    return lessons, name
