# schedule_bot/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Конфигурация модели Pydantic V2
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'  # Игнорируем лишние переменные в .env
    )

    TELEGRAM_BOT_TOKEN: str

    # Внешний API расписания
    SCHEDULE_API_URL: str = "https://urfu.ru/api/v2/schedule/"
    SCHEDULE_API_TIMEOUT: float = 30.0

    # Лимит Telegram 4096, оставляем запас
    MAX_MESSAGE_LENGTH: int = 4000
    MONTHS_AHEAD: int = 4
    SEARCH_RESULTS_LIMIT: int = 10

    TIMEZONE: str = "Asia/Yekaterinburg"
    LOG_LEVEL: str = "INFO"

settings = Settings()
