# schedule_bot/bot/handlers/search.py

from aiogram import F, Router, types
from aiogram.enums import ChatAction

from schedule_bot.bot.chat_flow import ChatFlow
from .common import send_reply

router = Router()
# Бот работает только в личных сообщениях
router.message.filter(F.chat.type == "private")


@router.message(F.text)
async def handle_text(message: types.Message, chat_flow: ChatFlow):
    """Команды, поисковые запросы и все остальные текстовые сообщения."""
    await message.bot.send_chat_action(chat_id=message.chat.id, action=ChatAction.TYPING)
    reply = await chat_flow.handle_text_command(message.chat.id, message.text)
    await send_reply(message.bot, message.chat.id, reply)


@router.message()
async def handle_unsupported(message: types.Message):
    """Стикеры, фото и прочее, что не является текстом."""
    await message.answer("Я понимаю только текст. 😕\nИспользуй /start, чтобы увидеть список команд.")
