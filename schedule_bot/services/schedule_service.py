# schedule_bot/services/schedule_service.py

import logging
from typing import List, Optional

from schedule_bot.core.errors import (
    MalformedResponseError,
    ScheduleFormattingError,
    UpstreamError,
)
from schedule_bot.core.schedule_api import ScheduleApi, api_client
from schedule_bot.schemas.schedule import ScheduleQuery
from schedule_bot.services.formatter import (
    FORMATTING_ERROR_MESSAGE,
    NOT_FOUND_MESSAGE,
    FormatterOptions,
    ScheduleFormatter,
)
from schedule_bot.services.normalizer import normalize

# Настраиваем логгер
logger = logging.getLogger(__name__)

UPSTREAM_ERROR_MESSAGE = "⚠ Не удалось загрузить расписание. Попробуйте позже."


class ScheduleService:
    """Получение расписания из API, нормализация и разбивка на сообщения."""
    def __init__(self, api: Optional[ScheduleApi] = None, options: Optional[FormatterOptions] = None):
        self.api = api or api_client
        self.options = options

    async def build_schedule(self, query: ScheduleQuery) -> List[str]:
        """
        Возвращает готовые сообщения. Ошибки API, разбора и форматирования
        пробрасываются наверх как есть.
        """
        raw = await self.api.fetch_schedule(query.kind, query.entity_id, query.start, query.end)
        lessons, name = normalize(raw, display_name=query.display_name)
        if name != query.display_name:
            query = query.model_copy(update={"display_name": name})

        options = self.options or FormatterOptions.for_query(query)
        messages = ScheduleFormatter(options).format(lessons, query)
        logger.info(
            f"Built {len(messages)} message(s) from {len(lessons)} lessons for "
            f"{query.kind.value} {query.entity_id} ({query.start} - {query.end})"
        )
        return messages

    async def render_schedule(self, query: ScheduleQuery) -> List[str]:
        """То же, что build_schedule, но любая ошибка превращается в текст для пользователя."""
        try:
            return await self.build_schedule(query)
        except MalformedResponseError as e:
            logger.warning(f"Malformed schedule for {query.kind.value} {query.entity_id}: {e}")
            return [NOT_FOUND_MESSAGE]
        except UpstreamError as e:
            logger.warning(f"Schedule API error for {query.kind.value} {query.entity_id}: {e}")
            return [UPSTREAM_ERROR_MESSAGE]
        except ScheduleFormattingError as e:
            logger.error(f"Formatting failed for {query.kind.value} {query.entity_id}: {e}", exc_info=True)
            return [FORMATTING_ERROR_MESSAGE.format(reason=e)]
