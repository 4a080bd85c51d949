# schedule_bot/bot/handlers/navigation.py

import logging

from aiogram import Router, types
from aiogram.enums import ChatAction

from schedule_bot.bot.chat_flow import ChatFlow
from .common import send_reply

logger = logging.getLogger(__name__)

router = Router()


@router.callback_query()
async def handle_navigation(callback: types.CallbackQuery, chat_flow: ChatFlow):
    """Все кнопки меню: режим поиска, выбор группы, месяца и дня."""
    # Подтверждаем сразу, загрузка расписания может занять время
    await callback.answer()
    if callback.message is None or not callback.data:
        return

    chat_id = callback.message.chat.id
    await callback.bot.send_chat_action(chat_id=chat_id, action=ChatAction.TYPING)
    reply = await chat_flow.handle_callback(chat_id, callback.data)
    if reply is None:
        logger.debug(f"Callback {callback.data!r} from chat {chat_id} ignored")
        return
    await send_reply(callback.bot, chat_id, reply)
