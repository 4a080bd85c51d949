# schedule_bot/bot/commands.py
from aiogram.types import BotCommand

def get_private_chat_commands() -> list[BotCommand]:
    """Возвращает список команд для личных чатов."""
    return [
        BotCommand(command="start", description="🚀 Перезапустить бота"),
        BotCommand(command="group", description="📚 Расписание группы"),
        BotCommand(command="teacher", description="👨‍🏫 Расписание преподавателя"),
        BotCommand(command="help", description="ℹ️ Помощь"),
    ]
