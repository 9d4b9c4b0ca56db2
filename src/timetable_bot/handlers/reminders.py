from aiogram import Bot, F, Router
from aiogram.exceptions import TelegramAPIError
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from timetable_bot.config import settings
from timetable_bot.core.subscriptions import SubscriptionStore
from timetable_bot.utils.keyboards import DISABLE_NOTIFICATIONS_CB, reminder_disable_kb
from timetable_bot.utils.logger import logger

router = Router(name="reminders")


@router.message(Command("notifications_on"))
async def cmd_notifications_on(message: Message, subscriptions: SubscriptionStore):
    subscriptions.set_enabled(message.chat.id, True)
    logger.info(f"Notifications enabled for chat {message.chat.id}")
    await message.answer(
        "🔔 Notificări PORNITE\n"
        f"Vei primi notificări cu {settings.REMINDER_MINUTES} minute înainte de pereche"
    )


@router.message(Command("notifications_off"))
async def cmd_notifications_off(message: Message, subscriptions: SubscriptionStore):
    subscriptions.set_enabled(message.chat.id, False)
    logger.info(f"Notifications disabled for chat {message.chat.id}")
    await message.answer("🔕 Notificări OPRITE\nNu vei mai primi notificări")


@router.callback_query(F.data == DISABLE_NOTIFICATIONS_CB)
async def cb_disable_notifications(callback: CallbackQuery, subscriptions: SubscriptionStore):
    chat_id = callback.message.chat.id if callback.message else callback.from_user.id
    subscriptions.set_enabled(chat_id, False)
    logger.info(f"Notifications disabled from reminder button for chat {chat_id}")
    await callback.answer("🔕 Notificări OPRITE")


@router.message(Command("test"))
async def cmd_test(message: Message, bot: Bot, subscriptions: SubscriptionStore):
    """Send a simulated reminder so the user can check delivery works."""
    chat_id = message.chat.id
    if not subscriptions.is_enabled(chat_id):
        await message.answer("❌ Notificările sunt oprite. Folosește /notifications_on mai întâi")
        return

    try:
        await bot.send_message(
            chat_id,
            "⏰ <b>TEST NOTIFICATION</b>\nAceasta este o simulare a unei notificări de lecție",
            reply_markup=reminder_disable_kb,
        )
    except TelegramAPIError as exc:
        logger.warning(f"Failed to send test notification to {chat_id}: {exc}")
        await message.answer(
            "❌ Eșec la trimiterea notificării de test. Asigură-te că nu ai blocat botul"
        )
        return
    await message.answer("✅ Verifică notificările! Ar trebui să fi primit un mesaj de test")
