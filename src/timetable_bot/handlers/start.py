from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from timetable_bot.utils.keyboards import schedule_keyboard
from timetable_bot.utils.logger import logger

router = Router(name="start")

COMMANDS_HELP = (
    "Comenzi disponibile:\n"
    "/today - Orarul de azi 📅\n"
    "/tomorrow - Orarul de mâine 📅\n"
    "/week - Orarul săptămânii 🗓️\n"
    "/next_week - Orarul săptămânii viitoare 🗓️\n"
    "/notifications_on - Activează notificările 🔔\n"
    "/notifications_off - Dezactivează notificările 🔕\n"
    "/test - Simulează o notificare"
)


@router.message(CommandStart())
async def cmd_start(message: Message):
    logger.info(f"Chat {message.chat.id} started bot with /start")
    await message.answer(
        "🎉 Bine ai venit la Timetable Bot!\n\n"
        "🔔 Notificările sunt OPRITE implicit\n\n"
        f"{COMMANDS_HELP}",
        reply_markup=schedule_keyboard,
    )


@router.message(Command("help"))
async def cmd_help(message: Message):
    await message.answer(COMMANDS_HELP, reply_markup=schedule_keyboard)
