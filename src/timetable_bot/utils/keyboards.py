from aiogram.types import (
    BotCommand,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
)

BTN_TODAY = "Orarul de azi 📅"
BTN_TOMORROW = "Orarul de mâine 📅"
BTN_WEEK = "Săptămâna curentă 🗓️"
BTN_NEXT_WEEK = "Săptămâna viitoare 🗓️"

DISABLE_NOTIFICATIONS_CB = "disable_notifications"

# Keyboard shown under every schedule reply
schedule_keyboard = ReplyKeyboardMarkup(
    keyboard=[
        [KeyboardButton(text=BTN_TODAY), KeyboardButton(text=BTN_TOMORROW)],
        [KeyboardButton(text=BTN_WEEK), KeyboardButton(text=BTN_NEXT_WEEK)],
    ],
    resize_keyboard=True,
    one_time_keyboard=False,
)

# Attached to every reminder
reminder_disable_kb = InlineKeyboardMarkup(
    inline_keyboard=[
        [
            InlineKeyboardButton(
                text="🔕 Dezactivează notificările", callback_data=DISABLE_NOTIFICATIONS_CB
            )
        ]
    ]
)

BOT_COMMANDS = [
    BotCommand(command="today", description="Orarul de azi"),
    BotCommand(command="tomorrow", description="Orarul de mâine"),
    BotCommand(command="week", description="Orarul săptămânii"),
    BotCommand(command="next_week", description="Orarul săptămânii viitoare"),
    BotCommand(command="test", description="Test notificare"),
    BotCommand(command="notifications_on", description="Activează notificările"),
    BotCommand(command="notifications_off", description="Dezactivează notificările"),
    BotCommand(command="help", description="Lista comenzilor"),
]
