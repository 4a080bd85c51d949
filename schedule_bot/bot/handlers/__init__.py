# schedule_bot/bot/handlers/__init__.py
from aiogram import Dispatcher
from . import navigation, search

def setup_handlers(dp: Dispatcher):
    """Подключает все хендлеры к диспетчеру."""
    dp.include_router(navigation.router)

    # Роутер с "catch-all" хендлером текста должен идти последним
    dp.include_router(search.router)
