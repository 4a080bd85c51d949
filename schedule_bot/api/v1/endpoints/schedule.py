# schedule_bot/api/v1/endpoints/schedule.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from schedule_bot.api import deps
from schedule_bot.core.errors import (
    MalformedResponseError,
    NotFoundError,
    ScheduleFormattingError,
    TransientError,
)
from schedule_bot.schemas.schedule import EntityKind, ScheduleMessages, ScheduleQuery
from schedule_bot.services.schedule_service import ScheduleService

router = APIRouter()


@router.get(
    "/{kind}/{entity_id}",
    response_model=ScheduleMessages,
    summary="Schedule of a group or teacher as bot messages"
)
async def read_schedule(
    kind: EntityKind,
    entity_id: str,
    date_from: date,
    date_to: Optional[date] = Query(None, description="По умолчанию равна date_from"),
    name: Optional[str] = Query(None, description="Название для заголовка"),
    service: ScheduleService = Depends(deps.get_schedule_service),
):
    """
    Получить расписание за период в том виде, в котором его отправляет бот:
    список сообщений, каждое не длиннее лимита Telegram.
    """
    date_to = date_to or date_from
    if date_from > date_to:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="date_from must not be later than date_to"
        )

    query = ScheduleQuery(kind=kind, entity_id=entity_id, display_name=name, start=date_from, end=date_to)
    try:
        messages = await service.build_schedule(query)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{kind.value} {entity_id} not found")
    except (TransientError, MalformedResponseError) as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Schedule provider error: {e}")
    except ScheduleFormattingError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Formatting error: {e}")

    return ScheduleMessages(kind=kind, entity_id=entity_id, start=date_from, end=date_to, messages=messages)
