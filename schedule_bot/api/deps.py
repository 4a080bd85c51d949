# schedule_bot/api/deps.py
from schedule_bot.core.schedule_api import ScheduleApi, api_client
from schedule_bot.services.schedule_service import ScheduleService


def get_schedule_api() -> ScheduleApi:
    """Общий клиент API расписания (закрывается в lifespan приложения)."""
    return api_client


def get_schedule_service() -> ScheduleService:
    return ScheduleService(api_client)
