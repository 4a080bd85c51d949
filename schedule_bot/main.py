# schedule_bot/main.py

import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

# Импортируем роутер, который собирает все API-эндпоинты
from schedule_bot.api.v1.api import api_router

# Импортируем компоненты бота
from schedule_bot.bot.bot import bot, dp, on_shutdown, setup_bot_commands
from schedule_bot.core.logging import setup_logging

# Настраиваем логирование для API процесса
setup_logging()
logger = logging.getLogger("APIProcess")

# --- Глобальная переменная для управления задачей поллинга ---
polling_task: asyncio.Task | None = None

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Запускает поллинг бота вместе с API и корректно останавливает его.
    """
    global polling_task

    # --- ДЕЙСТВИЯ ПРИ СТАРТЕ ---
    logger.info("API process starting up...")

    # Удаляем старый вебхук (на случай, если он был) и устанавливаем команды
    await bot.delete_webhook(drop_pending_updates=True)
    await setup_bot_commands(bot)

    # Запускаем Long Polling для бота в фоновой задаче
    polling_task = asyncio.create_task(
        dp.start_polling(bot, allowed_updates=["message", "callback_query"], handle_signals=False),
        name="PollingTask",
    )
    logger.info("Bot polling has been started as a background task.")

    yield # Приложение готово к работе и принимает запросы

    # --- ДЕЙСТВИЯ ПРИ ОСТАНОВКЕ ---
    logger.info("API process shutting down...")

    if polling_task:
        logger.info("Stopping polling...")
        # Сначала вежливо просим aiogram остановиться
        try:
            await dp.stop_polling()
        except RuntimeError:
            # Поллинг уже завершился сам
            pass
        polling_task.cancel()
        try:
            await polling_task
        except asyncio.CancelledError:
            logger.info("Polling task has been successfully cancelled.")

    await on_shutdown(bot)


# --- Создание FastAPI приложения ---
app = FastAPI(
    title="University Schedule Bot API",
    version="1.0.0",
    description="Schedule lookup by group or teacher with Telegram Bot integration.",
    lifespan=lifespan
)

# --- Подключение API-роутеров ---
app.include_router(api_router, prefix="/api/v1")

# --- Корневой эндпоинт для проверки работы ---
@app.get("/", include_in_schema=False)
def read_root():
    return {"status": "ok", "message": "API server is running. Bot is in polling mode."}
