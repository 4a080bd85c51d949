# schedule_bot/bot/utils.py

import logging
from datetime import date
from typing import List

from aiogram import types
from aiogram.utils.keyboard import InlineKeyboardBuilder

from schedule_bot.bot.navigation import (
    DayChosen,
    EntitySelected,
    MonthChosen,
    SearchModeSelected,
    encode,
    fits_all_steps,
)
from schedule_bot.core.dates import days_in_month, format_month, months_from, week_starts_in_month
from schedule_bot.schemas.schedule import EntityKind, SearchResult

logger = logging.getLogger(__name__)

DAYS_PER_ROW = 7
MONTHS_PER_ROW = 2


def get_search_mode_keyboard() -> types.InlineKeyboardMarkup:
    """Кнопки выбора: искать группу или преподавателя."""
    builder = InlineKeyboardBuilder()
    builder.button(text="📚 Группа", callback_data=SearchModeSelected(kind=EntityKind.GROUP))
    builder.button(text="👨‍🏫 Преподаватель", callback_data=SearchModeSelected(kind=EntityKind.TEACHER))
    builder.adjust(2)
    return builder.as_markup()


def get_search_results_keyboard(kind: EntityKind, results: List[SearchResult]) -> types.InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    for result in results:
        # id с разделителем или слишком длинный: кнопки следующих шагов не собрать
        if not fits_all_steps(kind, result.id):
            logger.warning(f"Skipping search result {result.id!r}: id does not fit callback data")
            continue
        callback_data = encode(EntitySelected(kind=kind, entity_id=result.id))
        builder.row(types.InlineKeyboardButton(text=result.name, callback_data=callback_data))
    return builder.as_markup()


def get_month_keyboard(kind: EntityKind, entity_id: str, start: date, count: int) -> types.InlineKeyboardMarkup:
    """Текущий месяц и count-1 следующих."""
    builder = InlineKeyboardBuilder()
    for year, month in months_from(start, count):
        builder.button(
            text=format_month(year, month),
            callback_data=MonthChosen(kind=kind, entity_id=entity_id, year=year, month=month),
        )
    builder.adjust(MONTHS_PER_ROW)
    return builder.as_markup()


def get_day_keyboard(kind: EntityKind, entity_id: str, year: int, month: int) -> types.InlineKeyboardMarkup:
    """Дни месяца, кнопки "вся неделя" и возврат к выбору месяца."""
    builder = InlineKeyboardBuilder()

    day_buttons = [
        types.InlineKeyboardButton(
            text=str(day),
            callback_data=encode(DayChosen(kind=kind, entity_id=entity_id, year=year, month=month, day=day)),
        )
        for day in range(1, days_in_month(year, month) + 1)
    ]
    for i in range(0, len(day_buttons), DAYS_PER_ROW):
        builder.row(*day_buttons[i:i + DAYS_PER_ROW])

    for week_start in week_starts_in_month(year, month):
        builder.row(types.InlineKeyboardButton(
            text=f"🗓 Неделя с {week_start.strftime('%d.%m')}",
            callback_data=encode(DayChosen(
                kind=kind, entity_id=entity_id, year=year, month=month,
                day=week_start.day, single_day=False,
            )),
        ))

    builder.row(types.InlineKeyboardButton(
        text="◁ К выбору месяца",
        callback_data=encode(EntitySelected(kind=kind, entity_id=entity_id)),
    ))
    return builder.as_markup()
