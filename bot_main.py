# bot_main.py

import asyncio
import logging
import signal

from schedule_bot.bot.bot import bot, dp, on_shutdown, setup_bot_commands
from schedule_bot.core.logging import setup_logging

# Настраиваем логирование
setup_logging()
logger = logging.getLogger("BotProcess")

# --- Глобальные переменные для управления graceful shutdown ---
shutdown_event = asyncio.Event()

def _handle_shutdown_signal(*args):
    """Обработчик сигналов SIGINT/SIGTERM для корректного завершения."""
    logger.info("Shutdown signal received. Stopping tasks...")
    shutdown_event.set()


async def main():
    """Запуск бота в режиме поллинга без HTTP API."""
    logger.info("Bot process starting...")

    await bot.delete_webhook(drop_pending_updates=True)
    await setup_bot_commands(bot)

    polling_task = asyncio.create_task(
        dp.start_polling(bot, allowed_updates=["message", "callback_query"], handle_signals=False),
        name="PollingTask",
    )
    logger.info("Bot polling has been started.")

    # Ожидаем сигнала на завершение
    await shutdown_event.wait()

    logger.info("Shutting down bot process...")
    try:
        await dp.stop_polling()
    except RuntimeError:
        pass
    polling_task.cancel()
    await asyncio.gather(polling_task, return_exceptions=True)

    await on_shutdown(bot)
    logger.info("Bot process shut down gracefully.")



if __name__ == "__main__":
    # Устанавливаем обработчики сигналов для корректного завершения
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    loop.add_signal_handler(signal.SIGINT, _handle_shutdown_signal)
    loop.add_signal_handler(signal.SIGTERM, _handle_shutdown_signal)

    try:
        loop.run_until_complete(main())
    except KeyboardInterrupt:
        logger.info("Bot process stopped by user (KeyboardInterrupt).")
    finally:
        loop.close()
