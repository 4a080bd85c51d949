# schedule_bot/schemas/schedule.py
from datetime import date, time
from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class EntityKind(str, Enum):
    GROUP = "group"
    TEACHER = "teacher"


def _coerce_text(value: Any) -> Any:
    """null -> "", числа -> строка, пробелы по краям убираем."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


# Основная схема для одного занятия
class Lesson(BaseModel):
    title: str = ""
    date: date
    time_begin: time = Field(validation_alias=AliasChoices("timeBegin", "time_begin"))
    time_end: time = Field(validation_alias=AliasChoices("timeEnd", "time_end"))
    load_type: str = Field("", validation_alias=AliasChoices("loadType", "load_type"))
    teacher_name: str = Field("", validation_alias=AliasChoices("teacherName", "teacher_name"))
    room_title: str = Field("", validation_alias=AliasChoices("auditoryTitle", "roomTitle", "room_title"))
    room_location: str = Field("", validation_alias=AliasChoices("auditoryLocation", "roomLocation", "room_location"))
    comment: str = ""
    # Заполнено только в расписании преподавателя
    group_name: str = Field("", validation_alias=AliasChoices("groupName", "group_name"))
    pair_number: str = Field("", validation_alias=AliasChoices("pairNumber", "pair_number"))

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def flatten_room(cls, data: Any) -> Any:
        # В части развертываний аудитория приходит вложенным объектом {title, location}
        if not isinstance(data, dict):
            return data
        for key in ("auditory", "room"):
            room = data.get(key)
            if room is None:
                continue
            data = dict(data)
            if isinstance(room, dict):
                data.setdefault("auditoryTitle", room.get("title"))
                data.setdefault("auditoryLocation", room.get("location"))
            else:
                data.setdefault("auditoryTitle", room)
            break
        return data

    @field_validator(
        "title", "load_type", "teacher_name", "room_title", "room_location",
        "comment", "group_name", "pair_number", mode="before",
    )
    @classmethod
    def text_or_empty(cls, value: Any) -> Any:
        return _coerce_text(value)

    @field_validator("date", mode="before")
    @classmethod
    def strip_time_part(cls, value: Any) -> Any:
        # "2025-03-17T00:00:00" -> "2025-03-17"
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value


class ScheduleQuery(BaseModel):
    kind: EntityKind
    entity_id: str
    display_name: Optional[str] = None
    start: date
    end: date


# Элемент результата поиска групп/преподавателей
class SearchResult(BaseModel):
    id: str
    name: str = Field(validation_alias=AliasChoices("title", "name"))

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", "name", mode="before")
    @classmethod
    def as_text(cls, value: Any) -> Any:
        return _coerce_text(value)


# Ответ HTTP API с готовыми сообщениями
class ScheduleMessages(BaseModel):
    kind: EntityKind
    entity_id: str
    start: date
    end: date
    messages: List[str]
