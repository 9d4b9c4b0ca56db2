import asyncio
import sys
from datetime import timedelta

from aiogram import Bot, Dispatcher
from aiogram.client.bot import DefaultBotProperties
from aiogram.client.session.aiohttp import AiohttpSession
from aiogram.enums import ParseMode
from aiogram.types import ErrorEvent

from timetable_bot.config import settings
from timetable_bot.core.loader import TimetableError, load_timetable
from timetable_bot.core.subscriptions import SubscriptionStore
from timetable_bot.handlers import reminders_router, schedule_router, start_router
from timetable_bot.middleware import SubscriberMiddleware
from timetable_bot.scheduler.tasks import ReminderTicker, scheduler, setup_scheduler
from timetable_bot.utils.keyboards import BOT_COMMANDS
from timetable_bot.utils.logger import logger


# Global error handler for all unhandled exceptions in handlers
async def global_error_handler(event: ErrorEvent) -> None:
    """
    Catches all unhandled exceptions in message/callback handlers.
    Logs the error and tells the user instead of leaving the command unanswered.
    """
    logger.error(
        f"Unhandled error in update {event.update.update_id}: {event.exception}",
        exc_info=event.exception
    )

    try:
        if event.update.message:
            await event.update.message.answer(
                "❌ A apărut o eroare la procesarea comenzii. Încearcă din nou mai târziu."
            )
        elif event.update.callback_query:
            await event.update.callback_query.answer(
                "❌ A apărut o eroare. Încearcă din nou mai târziu.",
                show_alert=True
            )
    except Exception as notify_error:
        logger.error(f"Failed to notify user about error: {notify_error}")


def build_dispatcher(timetable, subscriptions: SubscriptionStore) -> Dispatcher:
    # Handlers receive `timetable` and `subscriptions` as keyword arguments
    dp = Dispatcher(timetable=timetable, subscriptions=subscriptions)

    dp.message.middleware(SubscriberMiddleware(subscriptions))
    dp.callback_query.middleware(SubscriberMiddleware(subscriptions))
    dp.errors.register(global_error_handler)

    dp.include_router(start_router)
    dp.include_router(schedule_router)
    dp.include_router(reminders_router)
    return dp


async def main() -> None:
    if not settings.BOT_TOKEN:
        logger.critical("BOT_TOKEN is not set")
        sys.exit(1)

    try:
        timetable = load_timetable(settings.TIMETABLE_PATH)
    except TimetableError as exc:
        logger.critical(f"Cannot start with an invalid timetable: {exc}")
        sys.exit(1)
    lesson_count = sum(len(day.lessons) for plan in timetable for day in plan.days)
    logger.info(f"Timetable loaded from {settings.TIMETABLE_PATH}: {lesson_count} lessons")
    logger.info(
        f"Semester start {settings.SEMESTER_START.isoformat()}, time zone {settings.TIMEZONE}, "
        f"reminders {settings.REMINDER_MINUTES} min before"
    )

    subscriptions = SubscriptionStore()

    session = AiohttpSession(timeout=300)
    bot = Bot(
        token=settings.BOT_TOKEN,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
        session=session,
    )
    logger.info(f"Bot initialized: {settings.BOT_TOKEN[:10]}...")

    dp = build_dispatcher(timetable, subscriptions)
    logger.info("Dispatcher configured")

    ticker = ReminderTicker(
        timetable,
        subscriptions,
        settings.SEMESTER_START,
        timedelta(minutes=settings.REMINDER_MINUTES),
    )

    backoff = 1
    try:
        await bot.set_my_commands(BOT_COMMANDS)
        setup_scheduler(bot, ticker)
        logger.info("Timetable bot started")
        # Run polling in a resilient loop: on transient network errors, wait and retry
        while True:
            try:
                await dp.start_polling(bot)
                break
            except Exception as exc:
                logger.error(f"Polling error: {exc!r}. Retrying in {backoff} seconds...", exc_info=True)
                await asyncio.sleep(backoff)
                backoff = min(backoff * 2, 300)
    finally:
        logger.info("Shutting down bot...")
        if scheduler.running:
            scheduler.shutdown(wait=False)
        await session.close()
        logger.info("Session closed")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
