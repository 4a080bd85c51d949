# schedule_bot/services/formatter.py

import html
import logging
from datetime import date
from itertools import groupby
from operator import attrgetter
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from schedule_bot.core.config import settings
from schedule_bot.core.dates import format_date, format_date_with_russian_weekday, format_time
from schedule_bot.core.errors import ScheduleFormattingError
from schedule_bot.schemas.schedule import EntityKind, Lesson, ScheduleQuery

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Расписание не найдено"
FORMATTING_ERROR_MESSAGE = "⚠ Ошибка форматирования расписания: {reason}"

PERIOD_HEADER = "📆 Период: {start} - {end}"
CONTINUATION_HEADER = "📆 Продолжение расписания ({start} - {end})"
ENTITY_HEADERS = {
    EntityKind.GROUP: "📚 Группа: {name}",
    EntityKind.TEACHER: "👨‍🏫 Преподаватель: {name}",
}
PAGE_FOOTER = "\n\n📄 Страница {page} из {total}"
DAY_OFF_LINE = "   🎉 Выходной"
UNTITLED_LESSON = "Без названия"

# Под подвал резервируем место с запасом на трехзначные номера страниц
_FOOTER_RESERVE = len(PAGE_FOOTER.format(page=999, total=999))


class FormatterOptions(BaseModel):
    """Единый набор переключателей вместо отдельных форматтеров для группы и преподавателя."""
    max_length: int = Field(default_factory=lambda: settings.MAX_MESSAGE_LENGTH, gt=0)
    suppress_repeated_teacher: bool = True
    show_group_name: bool = False
    render_day_off: bool = True
    page_numbers: bool = True

    @classmethod
    def for_query(cls, query: ScheduleQuery, **overrides) -> "FormatterOptions":
        values = {"show_group_name": query.kind == EntityKind.TEACHER}
        values.update(overrides)
        return cls(**values)


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def render_room(lesson: Lesson) -> Optional[str]:
    """
    Строка с аудиторией. Если название и адрес совпадают, это онлайн-занятие
    и адрес не выводится.
    """
    title, location = lesson.room_title, lesson.room_location
    if not title or title == location:
        return None
    if location:
        return f"{_escape(location)}, каб. {_escape(title)}"
    return _escape(title)


class ScheduleFormatter:
    def __init__(self, options: Optional[FormatterOptions] = None):
        self.options = options

    def format(self, lessons: Sequence[Lesson], query: ScheduleQuery) -> List[str]:
        """
        Превращает список занятий в последовательность сообщений, каждое не длиннее
        max_length. День никогда не разрезается: слишком длинный день уходит
        отдельным сообщением целиком.

        Любой сбой оборачивается в ScheduleFormattingError, текст для пользователя
        выбирает вызывающая сторона.
        """
        options = self.options or FormatterOptions.for_query(query)
        try:
            return self._format(lessons, query, options)
        except ScheduleFormattingError:
            raise
        except Exception as e:
            raise ScheduleFormattingError(str(e) or type(e).__name__) from e

    def _format(self, lessons: Sequence[Lesson], query: ScheduleQuery, options: FormatterOptions) -> List[str]:
        if not lessons:
            return [NOT_FOUND_MESSAGE]

        # sorted() стабилен: занятия в одно время остаются в порядке API
        ordered = sorted(lessons, key=lambda l: (l.date, l.time_begin))
        blocks = [
            self.render_day(day, list(day_lessons), options)
            for day, day_lessons in groupby(ordered, key=attrgetter("date"))
        ]

        limit = options.max_length
        messages = self._pack(blocks, query, limit)

        if options.page_numbers and len(messages) > 1:
            # Страниц несколько: перекладываем заново, оставляя место под подвал
            limit = max(limit - _FOOTER_RESERVE, 1)
            messages = self._pack(blocks, query, limit)
            total = len(messages)
            messages = [
                message + PAGE_FOOTER.format(page=page, total=total)
                for page, message in enumerate(messages, start=1)
            ]

        for message in messages:
            if len(message) > options.max_length:
                logger.warning(
                    f"Message of {len(message)} chars exceeds message limit {options.max_length} "
                    f"({query.kind.value} {query.entity_id}); a single day did not fit, sent unsplit."
                )
        return messages

    def _pack(self, blocks: List[str], query: ScheduleQuery, limit: int) -> List[str]:
        messages: List[str] = []
        current = self.render_header(query)
        has_blocks = False

        for block in blocks:
            if has_blocks and len(current) + len(block) > limit:
                messages.append(current)
                current = self.render_continuation_header(query)
                has_blocks = False
            current += block
            has_blocks = True

        if has_blocks:
            messages.append(current)
        return messages

    def render_header(self, query: ScheduleQuery) -> str:
        header = PERIOD_HEADER.format(start=format_date(query.start), end=format_date(query.end))
        if query.display_name:
            header += "\n" + ENTITY_HEADERS[query.kind].format(name=_escape(query.display_name))
        return header

    def render_continuation_header(self, query: ScheduleQuery) -> str:
        return CONTINUATION_HEADER.format(start=format_date(query.start), end=format_date(query.end))

    def render_day(self, day: date, lessons: List[Lesson], options: FormatterOptions) -> str:
        lines = ["", "", f"<b>📌 {format_date_with_russian_weekday(day)}</b>"]

        if options.render_day_off:
            # Пустое название - признак выходного, если в этот день нет других занятий
            titled = [lesson for lesson in lessons if lesson.title]
            if not titled:
                lines.append(DAY_OFF_LINE)
                return "\n".join(lines)
            lessons = titled

        # Сравниваем только внутри дня: день может открывать новое сообщение, и там имя нужно заново
        previous_teacher = None
        for lesson in lessons:
            lines.extend(self.render_lesson(lesson, previous_teacher, options))
            previous_teacher = lesson.teacher_name
        return "\n".join(lines)

    def render_lesson(self, lesson: Lesson, previous_teacher: Optional[str], options: FormatterOptions) -> List[str]:
        title = _escape(lesson.title) if lesson.title else UNTITLED_LESSON
        if lesson.pair_number:
            title = f"{_escape(lesson.pair_number)} пара. {title}"

        lines = [
            "",
            f"🕒 <i>{format_time(lesson.time_begin)} - {format_time(lesson.time_end)}</i>",
            f"   <b>{title}</b>",
        ]

        if lesson.teacher_name and not (
            options.suppress_repeated_teacher and lesson.teacher_name == previous_teacher
        ):
            lines.append(f"   👨‍🏫 {_escape(lesson.teacher_name)}")

        room = render_room(lesson)
        if room:
            lines.append(f"   🚪 {room}")
        if lesson.load_type:
            lines.append(f"   🏷 Тип: {_escape(lesson.load_type)}")
        if lesson.comment:
            lines.append(f"   💬 {_escape(lesson.comment)}")
        if options.show_group_name and lesson.group_name:
            lines.append(f"   👥 Группа: {_escape(lesson.group_name)}")
        return lines


def format_schedule(lessons: Sequence[Lesson], query: ScheduleQuery,
                    options: Optional[FormatterOptions] = None) -> List[str]:
    return ScheduleFormatter(options).format(lessons, query)
