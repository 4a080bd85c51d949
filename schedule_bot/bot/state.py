# schedule_bot/bot/state.py

import asyncio
from enum import Enum
from typing import Dict, Optional, Tuple

from schedule_bot.schemas.schedule import EntityKind


class SearchMode(str, Enum):
    NONE = "none"
    AWAITING_GROUP = "awaiting_group"
    AWAITING_TEACHER = "awaiting_teacher"

    @classmethod
    def for_kind(cls, kind: EntityKind) -> "SearchMode":
        return cls.AWAITING_GROUP if kind == EntityKind.GROUP else cls.AWAITING_TEACHER


class SearchStateStore:
    """
    Режим поиска для каждого чата: что ждем в следующем текстовом сообщении.
    Хранится только в памяти процесса, при перезапуске теряется.
    """
    def __init__(self):
        self._modes: Dict[int, SearchMode] = {}
        self._lock = asyncio.Lock()

    async def set(self, chat_id: int, mode: SearchMode) -> None:
        async with self._lock:
            if mode == SearchMode.NONE:
                self._modes.pop(chat_id, None)
            else:
                self._modes[chat_id] = mode

    async def get(self, chat_id: int) -> SearchMode:
        async with self._lock:
            return self._modes.get(chat_id, SearchMode.NONE)

    async def consume(self, chat_id: int) -> SearchMode:
        """Возвращает режим и сразу сбрасывает его."""
        async with self._lock:
            return self._modes.pop(chat_id, SearchMode.NONE)

    async def clear(self, chat_id: int) -> None:
        async with self._lock:
            self._modes.pop(chat_id, None)


class EntityNameRegistry:
    """Названия групп и преподавателей по id, заполняется из результатов поиска."""
    def __init__(self):
        self._names: Dict[Tuple[EntityKind, str], str] = {}
        self._lock = asyncio.Lock()

    async def remember(self, kind: EntityKind, entity_id: str, name: str) -> None:
        async with self._lock:
            self._names[(kind, entity_id)] = name

    async def lookup(self, kind: EntityKind, entity_id: str) -> Optional[str]:
        async with self._lock:
            return self._names.get((kind, entity_id))
