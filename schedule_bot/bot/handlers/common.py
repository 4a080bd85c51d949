# schedule_bot/bot/handlers/common.py
from aiogram import Bot

from schedule_bot.bot.chat_flow import BotReply


async def send_reply(bot: Bot, chat_id: int, reply: BotReply):
    """Отправляет сообщения по порядку, клавиатура - только у последнего."""
    last = len(reply.messages) - 1
    for i, text in enumerate(reply.messages):
        await bot.send_message(
            chat_id=chat_id,
            text=text,
            reply_markup=reply.reply_markup if i == last else None,
        )
