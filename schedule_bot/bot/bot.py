# schedule_bot/bot/bot.py

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramAPIError
from aiogram.types import BotCommandScopeAllPrivateChats, ErrorEvent
import logging
from schedule_bot.core.config import settings
from schedule_bot.core.schedule_api import api_client
from .chat_flow import ChatFlow
from .commands import get_private_chat_commands
from .handlers import setup_handlers
from .state import EntityNameRegistry, SearchStateStore

logger = logging.getLogger("Bot")

# --- Создание основных объектов ---

# Расписание размечено HTML-тегами
defaults = DefaultBotProperties(parse_mode=ParseMode.HTML)

bot = Bot(token=settings.TELEGRAM_BOT_TOKEN, default=defaults)

# Состояние диалогов живет только в памяти процесса
search_state = SearchStateStore()
entity_names = EntityNameRegistry()
chat_flow = ChatFlow(api_client, search_state, entity_names)

# chat_flow попадает в хендлеры как именованный аргумент
dp = Dispatcher(chat_flow=chat_flow)

# Подключаем все наши хендлеры (из schedule_bot/bot/handlers)
setup_handlers(dp)


@dp.errors()
async def on_error(event: ErrorEvent):
    """Ошибка в одном апдейте не должна останавливать поллинг."""
    if isinstance(event.exception, TelegramAPIError):
        logger.error(f"Telegram API error while handling update {event.update.update_id}: {event.exception}")
    else:
        logger.error(f"Unhandled error for update {event.update.update_id}: {event.exception}", exc_info=event.exception)
    return True


# --- Логика, выполняемая при старте/остановке ---

async def setup_bot_commands(bot: Bot):
    """Устанавливает меню команд для бота."""
    try:
        await bot.set_my_commands(
            commands=get_private_chat_commands(),
            scope=BotCommandScopeAllPrivateChats()
        )
        logger.info("Bot commands have been set successfully.")
    except TelegramAPIError as e:
        logger.error(f"Error setting bot commands: {e}")


async def on_shutdown(bot: Bot):
    """Закрывает HTTP-сессии бота и клиента API."""
    await bot.session.close()
    await api_client.close()
    logger.info("Bot and API client sessions have been closed.")
