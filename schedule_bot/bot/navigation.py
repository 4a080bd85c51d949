# schedule_bot/bot/navigation.py
"""
Callback-данные кнопок навигации по расписанию.

Каждый шаг меню - отдельный класс CallbackData с собственным префиксом и
фиксированным набором позиционных полей:

    mode:<kind>                                         выбран режим поиска
    ent:<kind>:<id>                                     выбрана группа/преподаватель
    mon:<kind>:<id>:<year>:<month>                      выбран месяц
    day:<kind>:<id>:<year>:<month>:<day>:<single_day>   выбран день или неделя

Названия групп и преподавателей в callback-данные не попадают, они хранятся
в EntityNameRegistry.
"""

from datetime import date
from typing import Annotated, Dict, Type, Union

from aiogram.filters.callback_data import CallbackData
from pydantic import Field

from schedule_bot.core.errors import InvalidTokenError
from schedule_bot.schemas.schedule import EntityKind

EntityId = Annotated[str, Field(min_length=1)]
Year = Annotated[int, Field(ge=1, le=9999)]
Month = Annotated[int, Field(ge=1, le=12)]
Day = Annotated[int, Field(ge=1, le=31)]


class SearchModeSelected(CallbackData, prefix="mode"):
    kind: EntityKind


class EntitySelected(CallbackData, prefix="ent"):
    kind: EntityKind
    entity_id: EntityId


class MonthChosen(CallbackData, prefix="mon"):
    kind: EntityKind
    entity_id: EntityId
    year: Year
    month: Month


class DayChosen(CallbackData, prefix="day"):
    kind: EntityKind
    entity_id: EntityId
    year: Year
    month: Month
    day: Day
    # False - вся неделя (пн-вс), в которую входит день
    single_day: bool = True

    @property
    def target_date(self) -> date:
        return date(self.year, self.month, self.day)


Selection = Union[SearchModeSelected, EntitySelected, MonthChosen, DayChosen]

_SELECTIONS: Dict[str, Type[CallbackData]] = {
    cls.__prefix__: cls for cls in (SearchModeSelected, EntitySelected, MonthChosen, DayChosen)
}


def encode(selection: Selection) -> str:
    """Упаковывает выбор в строку. ValueError, если поле содержит разделитель или строка длиннее 64 байт."""
    return selection.pack()


def fits_all_steps(kind: EntityKind, entity_id: str) -> bool:
    """
    Поместятся ли в лимит callback-данные всех шагов меню для этого id.
    Самая длинная строка - кнопка недели с четырехзначным годом.
    """
    try:
        encode(DayChosen(kind=kind, entity_id=entity_id, year=9999, month=12, day=31, single_day=False))
    except ValueError:
        return False
    return True


def decode(token: str) -> Selection:
    """Восстанавливает выбор по строке. Бросает InvalidTokenError для чужих и битых данных."""
    if not token:
        raise InvalidTokenError("empty callback data")
    prefix = token.split(":", 1)[0]
    selection_cls = _SELECTIONS.get(prefix)
    if selection_cls is None:
        raise InvalidTokenError(f"unknown callback prefix: {prefix!r}")
    try:
        selection = selection_cls.unpack(token)
        if isinstance(selection, DayChosen):
            selection.target_date  # 31 февраля и подобное
    except (TypeError, ValueError) as e:
        raise InvalidTokenError(f"malformed callback data {token!r}: {e}") from e
    entity_id = getattr(selection, "entity_id", None)
    if entity_id is not None and not fits_all_steps(selection.kind, entity_id):
        raise InvalidTokenError(f"entity id too long for navigation: {entity_id!r}")
    return selection
