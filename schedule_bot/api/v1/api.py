# schedule_bot/api/v1/api.py
from fastapi import APIRouter
from .endpoints import dictionaries, schedule

api_router = APIRouter()
api_router.include_router(schedule.router, prefix="/schedule", tags=["Schedule"])
api_router.include_router(dictionaries.router, prefix="/dicts", tags=["Dictionaries"])
