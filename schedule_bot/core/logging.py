# schedule_bot/core/logging.py
import logging

from schedule_bot.core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging() -> None:
    """Единая настройка логирования для API и процесса бота."""
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)
    # httpx пишет каждый запрос на INFO, это слишком шумно
    logging.getLogger("httpx").setLevel(logging.WARNING)
