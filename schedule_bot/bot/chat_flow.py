# schedule_bot/bot/chat_flow.py
"""
Логика диалога с пользователем без привязки к Telegram.

Хендлеры aiogram передают сюда текст сообщения или callback-данные кнопки и
отправляют полученный BotReply как есть: все сообщения по порядку, клавиатура
прикрепляется к последнему.
"""

import html
import logging
from typing import Callable, List, Optional

from aiogram import types
from pydantic import BaseModel

from schedule_bot.bot.navigation import (
    DayChosen,
    EntitySelected,
    MonthChosen,
    SearchModeSelected,
    decode,
)
from schedule_bot.bot.state import EntityNameRegistry, SearchMode, SearchStateStore
from schedule_bot.bot.utils import (
    get_day_keyboard,
    get_month_keyboard,
    get_search_mode_keyboard,
    get_search_results_keyboard,
)
from schedule_bot.core import dates
from schedule_bot.core.config import settings
from schedule_bot.core.errors import InvalidTokenError, MalformedResponseError, NotFoundError, UpstreamError
from schedule_bot.core.schedule_api import ScheduleApi
from schedule_bot.schemas.schedule import EntityKind, ScheduleQuery
from schedule_bot.services.formatter import ENTITY_HEADERS
from schedule_bot.services.schedule_service import ScheduleService

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "📚 <b>Бот расписания УрФУ</b>\n\n"
    "Выберите, чье расписание показать, или воспользуйтесь командами:\n"
    "/group [номер группы] - поиск группы\n"
    "/teacher [фамилия] - поиск преподавателя\n\n"
    "Пример: /group РИЗ-220501\n\n"
    "Или просто введите номер группы"
)
USAGE_HINT = "Используйте /group или /teacher для поиска, либо просто введите номер группы"
SEARCH_ERROR_MESSAGE = "⚠ Ошибка при поиске. Попробуйте позже."
PROMPTS = {
    EntityKind.GROUP: "Введите номер группы:",
    EntityKind.TEACHER: "Введите фамилию преподавателя:",
}
NOTHING_FOUND = {
    EntityKind.GROUP: "Группы не найдены. Проверьте правильность запроса.",
    EntityKind.TEACHER: "Преподаватели не найдены. Проверьте правильность запроса.",
}
FOUND_HEADERS = {
    EntityKind.GROUP: "🔍 Найденные группы:",
    EntityKind.TEACHER: "🔍 Найденные преподаватели:",
}
COMMAND_KINDS = {
    "group": EntityKind.GROUP,
    "search": EntityKind.GROUP,
    "teacher": EntityKind.TEACHER,
}


class BotReply(BaseModel):
    messages: List[str]
    reply_markup: Optional[types.InlineKeyboardMarkup] = None


def looks_like_group_name(text: str) -> bool:
    """Похоже ли на номер группы: РИЗ-220501 или РИЗ220501."""
    return (
        len(text) >= 5
        and any(ch.isalpha() for ch in text)
        and any(ch.isdigit() for ch in text)
    )


class ChatFlow:
    def __init__(
        self,
        api: ScheduleApi,
        search_state: SearchStateStore,
        names: EntityNameRegistry,
        service: Optional[ScheduleService] = None,
        months_ahead: Optional[int] = None,
        results_limit: Optional[int] = None,
        today: Callable = dates.today,
    ):
        self.api = api
        self.search_state = search_state
        self.names = names
        self.service = service or ScheduleService(api)
        self.months_ahead = months_ahead or settings.MONTHS_AHEAD
        self.results_limit = results_limit or settings.SEARCH_RESULTS_LIMIT
        self.today = today

    # --- Текстовые сообщения ---

    async def handle_text_command(self, chat_id: int, text: str) -> BotReply:
        text = (text or "").strip()

        if text.startswith("/"):
            command, _, args = text[1:].partition(" ")
            command = command.split("@", 1)[0].lower()
            args = args.strip()

            if command in ("start", "help"):
                await self.search_state.clear(chat_id)
                return BotReply(messages=[WELCOME_TEXT], reply_markup=get_search_mode_keyboard())

            kind = COMMAND_KINDS.get(command)
            if kind is None:
                return BotReply(messages=[USAGE_HINT])
            if not args:
                await self.search_state.set(chat_id, SearchMode.for_kind(kind))
                return BotReply(messages=[PROMPTS[kind]])
            await self.search_state.clear(chat_id)
            return await self.search(kind, args)

        mode = await self.search_state.consume(chat_id)
        if not text:
            return BotReply(messages=[USAGE_HINT])
        if mode == SearchMode.AWAITING_GROUP:
            return await self.search(EntityKind.GROUP, text)
        if mode == SearchMode.AWAITING_TEACHER:
            return await self.search(EntityKind.TEACHER, text)
        if looks_like_group_name(text):
            return await self.search(EntityKind.GROUP, text)
        return BotReply(messages=[USAGE_HINT])

    async def search(self, kind: EntityKind, query: str) -> BotReply:
        try:
            results = await self.api.search(kind, query)
        except NotFoundError:
            results = []
        except (UpstreamError, MalformedResponseError) as e:
            logger.error(f"Search error for {kind.value} {query!r}: {e}")
            return BotReply(messages=[SEARCH_ERROR_MESSAGE])

        results = results[:self.results_limit]
        if not results:
            return BotReply(messages=[NOTHING_FOUND[kind]])

        for result in results:
            await self.names.remember(kind, result.id, result.name)
        return BotReply(messages=[FOUND_HEADERS[kind]], reply_markup=get_search_results_keyboard(kind, results))

    # --- Нажатия на кнопки ---

    async def handle_callback(self, chat_id: int, token: str) -> Optional[BotReply]:
        """None - кнопка неизвестна или данные повреждены, callback нужно просто подтвердить."""
        try:
            selection = decode(token)
        except InvalidTokenError as e:
            logger.info(f"Ignoring callback from chat {chat_id}: {e}")
            return None

        if isinstance(selection, SearchModeSelected):
            await self.search_state.set(chat_id, SearchMode.for_kind(selection.kind))
            return BotReply(messages=[PROMPTS[selection.kind]])

        if isinstance(selection, EntitySelected):
            title = await self._entity_title(selection.kind, selection.entity_id)
            return BotReply(
                messages=[f"{title}\nВыберите месяц:"],
                reply_markup=get_month_keyboard(selection.kind, selection.entity_id, self.today(), self.months_ahead),
            )

        if isinstance(selection, MonthChosen):
            title = await self._entity_title(selection.kind, selection.entity_id)
            month = dates.format_month(selection.year, selection.month)
            return BotReply(
                messages=[f"{title}\n{month}: выберите день или неделю"],
                reply_markup=get_day_keyboard(selection.kind, selection.entity_id, selection.year, selection.month),
            )

        return await self._show_schedule(selection)

    async def _show_schedule(self, selection: DayChosen) -> BotReply:
        target = selection.target_date
        if selection.single_day:
            start, end = target, target
        else:
            start, end = dates.get_week_dates(target)

        query = ScheduleQuery(
            kind=selection.kind,
            entity_id=selection.entity_id,
            display_name=await self.names.lookup(selection.kind, selection.entity_id),
            start=start,
            end=end,
        )
        messages = await self.service.render_schedule(query)
        return BotReply(
            messages=messages,
            reply_markup=get_day_keyboard(selection.kind, selection.entity_id, selection.year, selection.month),
        )

    async def _entity_title(self, kind: EntityKind, entity_id: str) -> str:
        name = await self.names.lookup(kind, entity_id)
        return ENTITY_HEADERS[kind].format(name=html.escape(name or entity_id, quote=False))
