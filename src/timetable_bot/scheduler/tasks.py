import time
from datetime import date, datetime, timedelta

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from timetable_bot.config import settings
from timetable_bot.core.models import Timetable
from timetable_bot.core.reminders import ReminderDelivery, due_reminders, fan_out
from timetable_bot.core.subscriptions import SubscriptionStore
from timetable_bot.utils.helpers import format_reminder, local_now
from timetable_bot.utils.keyboards import reminder_disable_kb
from timetable_bot.utils.logger import logger

scheduler = AsyncIOScheduler(timezone=settings.TIMEZONE)

TICK_INTERVAL = timedelta(minutes=1)

# Monotonic clock used to time a delivery pass
_clock = time.monotonic


class ReminderTicker:
    """Turns one clock minute into the reminder deliveries due in it.

    Each minute is processed at most once, so a duplicated tick cannot send
    the same reminder twice.
    """

    def __init__(
        self,
        timetable: Timetable,
        subscriptions: SubscriptionStore,
        semester_start: date,
        lead: timedelta,
    ):
        self.timetable = timetable
        self.subscriptions = subscriptions
        self.semester_start = semester_start
        self.lead = lead
        self._last_minute: datetime | None = None

    def tick(self, now: datetime) -> list[ReminderDelivery]:
        minute = now.replace(second=0, microsecond=0)
        if self._last_minute is not None and minute <= self._last_minute:
            logger.debug(f"Minute {minute:%Y-%m-%d %H:%M} already processed, skipping")
            return []
        self._last_minute = minute

        due = due_reminders(self.timetable, now, self.semester_start, self.lead)
        if not due:
            return []
        logger.info(
            f"{len(due)} lesson(s) due at {minute:%H:%M}: "
            + ", ".join(f"{item.lesson.name} {item.lesson.time_label}" for item in due)
        )
        return fan_out(due, self.subscriptions.enabled_user_ids())


async def check_and_send_reminders(bot: Bot, ticker: ReminderTicker, now: datetime | None = None) -> int:
    """Send the reminders due this minute; returns how many were delivered."""
    if now is None:
        now = local_now()
    try:
        deliveries = ticker.tick(now)
    except Exception as exc:
        logger.error(f"Critical error in check_and_send_reminders: {exc}", exc_info=True)
        return 0

    minutes_before = int(ticker.lead.total_seconds() // 60)
    reminders_sent = 0
    started = _clock()
    for delivery in deliveries:
        # A failed send is not retried; the next chance is next week's occurrence
        try:
            await bot.send_message(
                delivery.user_id,
                format_reminder(delivery, minutes_before),
                reply_markup=reminder_disable_kb,
            )
            reminders_sent += 1
            logger.info(f"Reminder sent to chat {delivery.user_id} for {delivery.lesson.name}")
        except TelegramAPIError as exc:
            logger.warning(f"Failed to send reminder to chat {delivery.user_id}: {exc}")

    if reminders_sent > 0:
        logger.info(f"Total reminders sent: {reminders_sent}")

    elapsed = _clock() - started
    if elapsed >= TICK_INTERVAL.total_seconds():
        # max_instances=1: the next minute's run was skipped while this one was busy
        logger.warning(
            f"Sending {len(deliveries)} reminder(s) took {elapsed:.1f}s, longer than the "
            f"{TICK_INTERVAL.total_seconds():.0f}s tick; reminders due in the skipped minute are lost"
        )
    return reminders_sent


def setup_scheduler(bot: Bot, ticker: ReminderTicker) -> AsyncIOScheduler:
    try:
        logger.info("Setting up scheduler jobs...")
        scheduler.add_job(
            check_and_send_reminders,
            CronTrigger(second=0, timezone=settings.TIMEZONE),
            args=[bot, ticker],
            id="remind",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        logger.info("Added reminder job (every minute at :00)")

        scheduler.start()
        logger.info("Scheduler started")
    except Exception as exc:
        logger.error(f"Failed to setup scheduler: {exc}", exc_info=True)
        raise
    return scheduler
