# schedule_bot/core/dates.py

import calendar
from datetime import date, datetime, time, timedelta
from typing import List, Tuple
from zoneinfo import ZoneInfo

from schedule_bot.core.config import settings

WEEKDAYS = ["Понедельник", "Вторник", "Среда", "Четверг", "Пятница", "Суббота", "Воскресенье"]
MONTHS = [
    "Январь", "Февраль", "Март", "Апрель", "Май", "Июнь",
    "Июль", "Август", "Сентябрь", "Октябрь", "Ноябрь", "Декабрь",
]


def today() -> date:
    """Сегодняшняя дата в часовом поясе университета."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


def format_date(target_date: date) -> str:
    return target_date.strftime('%d.%m.%Y')


def format_time(value: time) -> str:
    return value.strftime('%H:%M')


def format_date_with_russian_weekday(target_date: date) -> str:
    """Форматирует дату и переводит день недели на русский."""
    day_name = WEEKDAYS[target_date.weekday()]
    return target_date.strftime(f'%d.%m.%Y, {day_name}')


def format_month(year: int, month: int) -> str:
    return f"{MONTHS[month - 1]} {year}"


def get_week_dates(target_date: date) -> Tuple[date, date]:
    """Возвращает понедельник и воскресенье для недели, в которую входит target_date."""
    start_of_week = target_date - timedelta(days=target_date.weekday())
    end_of_week = start_of_week + timedelta(days=6)
    return start_of_week, end_of_week


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def months_from(start: date, count: int) -> List[Tuple[int, int]]:
    """(год, месяц) для месяца start и count-1 следующих."""
    result = []
    year, month = start.year, start.month
    for _ in range(count):
        result.append((year, month))
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return result


def week_starts_in_month(year: int, month: int) -> List[date]:
    """Первый день каждой недели месяца (1-е число или понедельник)."""
    first = date(year, month, 1)
    starts = [first]
    current = first + timedelta(days=7 - first.weekday())
    while current.month == month:
        starts.append(current)
        current += timedelta(days=7)
    return starts
