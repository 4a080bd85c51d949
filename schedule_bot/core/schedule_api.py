# schedule_bot/core/schedule_api.py
import logging
from datetime import date
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from schedule_bot.core.config import settings
from schedule_bot.core.errors import MalformedResponseError, NotFoundError, TransientError
from schedule_bot.schemas.schedule import EntityKind, SearchResult

logger = logging.getLogger(__name__)

# Пути относительно SCHEDULE_API_URL
GROUPS_PATH = "groups"
TEACHERS_PATH = "teachers"

_COLLECTIONS = {
    EntityKind.GROUP: GROUPS_PATH,
    EntityKind.TEACHER: TEACHERS_PATH,
}


class ScheduleApi:
    """Асинхронный клиент для API расписания. Повторных попыток не делает."""
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.client = httpx.AsyncClient(
            base_url=base_url or settings.SCHEDULE_API_URL,
            timeout=timeout if timeout is not None else settings.SCHEDULE_API_TIMEOUT,
            headers={"User-Agent": "Mozilla/5.0"},
            transport=transport,
        )

    async def _get(self, path: str, params: Dict[str, Any], timeout: Optional[float] = None) -> httpx.Response:
        kwargs: Dict[str, Any] = {"params": params}
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            response = await self.client.get(path, **kwargs)
        except httpx.RequestError as e:
            logger.warning(f"Schedule API request to {path} failed: {e!r}")
            raise TransientError(f"request to {path} failed: {e}") from e

        if response.status_code >= 500:
            logger.warning(f"Schedule API returned {response.status_code} for {path}")
            raise TransientError(f"upstream returned {response.status_code}")
        if not response.is_success:
            logger.info(f"Schedule API returned {response.status_code} for {path}")
            raise NotFoundError(f"upstream returned {response.status_code}")
        return response

    async def fetch_schedule(self, kind: EntityKind, entity_id: str, start: date, end: date,
                             timeout: Optional[float] = None) -> bytes:
        params = {"date_gte": start.isoformat(), "date_lte": end.isoformat()}
        # id приходит из callback-данных, в путь он попадает только экранированным
        path = f"{_COLLECTIONS[kind]}/{quote(entity_id, safe='')}/schedule"
        response = await self._get(path, params, timeout=timeout)
        return response.content

    async def fetch_group_schedule(self, group_id: str, start: date, end: date,
                                   timeout: Optional[float] = None) -> bytes:
        return await self.fetch_schedule(EntityKind.GROUP, group_id, start, end, timeout=timeout)

    async def fetch_teacher_schedule(self, teacher_id: str, start: date, end: date,
                                     timeout: Optional[float] = None) -> bytes:
        return await self.fetch_schedule(EntityKind.TEACHER, teacher_id, start, end, timeout=timeout)

    async def search(self, kind: EntityKind, query: str) -> List[SearchResult]:
        response = await self._get(_COLLECTIONS[kind], {"search": query})
        try:
            items = response.json()
        except ValueError as e:
            raise MalformedResponseError("search response is not JSON") from e
        if not isinstance(items, list):
            raise MalformedResponseError("search response is not a list")

        results = []
        for item in items:
            if not isinstance(item, dict):
                continue
            item_id = item.get("id")
            name = item.get("title") or item.get("name")
            if item_id in (None, "") or not name:
                continue
            results.append(SearchResult(id=item_id, name=name))
        return results

    async def search_groups(self, query: str) -> List[SearchResult]:
        return await self.search(EntityKind.GROUP, query)

    async def search_teachers(self, query: str) -> List[SearchResult]:
        return await self.search(EntityKind.TEACHER, query)

    async def close(self):
        await self.client.aclose()

api_client = ScheduleApi()
