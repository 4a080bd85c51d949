# schedule_bot/api/v1/endpoints/dictionaries.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from schedule_bot.api import deps
from schedule_bot.core.errors import MalformedResponseError, NotFoundError, TransientError
from schedule_bot.core.schedule_api import ScheduleApi
from schedule_bot.schemas.schedule import EntityKind, SearchResult

router = APIRouter()


async def _search(api: ScheduleApi, kind: EntityKind, search: str) -> List[SearchResult]:
    try:
        return await api.search(kind, search)
    except NotFoundError:
        return []
    except (TransientError, MalformedResponseError) as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Schedule provider error: {e}")


@router.get("/groups", response_model=List[SearchResult])
async def read_groups(
    search: str = Query(..., min_length=2),
    api: ScheduleApi = Depends(deps.get_schedule_api),
):
    """
    Поиск групп по названию.
    """
    return await _search(api, EntityKind.GROUP, search)


@router.get("/teachers", response_model=List[SearchResult])
async def read_teachers(
    search: str = Query(..., min_length=2),
    api: ScheduleApi = Depends(deps.get_schedule_api),
):
    """
    Поиск преподавателей по фамилии.
    """
    return await _search(api, EntityKind.TEACHER, search)
