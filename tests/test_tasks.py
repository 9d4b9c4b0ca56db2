import asyncio
import logging
from datetime import datetime, timedelta

from aiogram.exceptions import TelegramForbiddenError
from aiogram.methods import SendMessage

from timetable_bot.core.subscriptions import SubscriptionStore
from timetable_bot.scheduler import tasks
from timetable_bot.scheduler.tasks import ReminderTicker, check_and_send_reminders

LEAD = timedelta(minutes=15)


class FakeBot:
    def __init__(self, blocked=()):
        self.blocked = set(blocked)
        self.sent = []

    async def send_message(self, chat_id, text, **kwargs):
        if chat_id in self.blocked:
            raise TelegramForbiddenError(
                method=SendMessage(chat_id=chat_id, text=text),
                message="Forbidden: bot was blocked by the user",
            )
        self.sent.append((chat_id, text))


def _ticker(timetable, semester_start, enabled=(1, 2)):
    store = SubscriptionStore()
    store.get(99)  # known but not subscribed
    for user_id in enabled:
        store.set_enabled(user_id, True)
    return ReminderTicker(timetable, store, semester_start, LEAD)


def test_tick_fans_out_to_enabled_subscribers_only(timetable, semester_start):
    ticker = _ticker(timetable, semester_start)

    deliveries = ticker.tick(datetime(2025, 2, 3, 15, 0))

    assert sorted(d.user_id for d in deliveries) == [1, 2]
    assert {d.lesson.name for d in deliveries} == {"Algoritmi"}


def test_tick_processes_each_minute_once(timetable, semester_start):
    ticker = _ticker(timetable, semester_start)

    assert len(ticker.tick(datetime(2025, 2, 3, 15, 0, 1))) == 2
    assert ticker.tick(datetime(2025, 2, 3, 15, 0, 30)) == []
    assert ticker.tick(datetime(2025, 2, 3, 15, 1)) == []


def test_tick_with_nothing_due(timetable, semester_start):
    ticker = _ticker(timetable, semester_start)
    assert ticker.tick(datetime(2025, 2, 3, 12, 0)) == []


def test_check_and_send_reminders_delivers_messages(timetable, semester_start):
    bot = FakeBot()
    ticker = _ticker(timetable, semester_start)

    sent = asyncio.run(check_and_send_reminders(bot, ticker, now=datetime(2025, 2, 3, 15, 0)))

    assert sent == 2
    assert sorted(chat_id for chat_id, _ in bot.sent) == [1, 2]
    assert all("Algoritmi" in text for _, text in bot.sent)


def test_blocked_recipient_does_not_stop_other_deliveries(timetable, semester_start):
    bot = FakeBot(blocked={1})
    ticker = _ticker(timetable, semester_start)

    sent = asyncio.run(check_and_send_reminders(bot, ticker, now=datetime(2025, 2, 3, 15, 0)))

    assert sent == 1
    assert [chat_id for chat_id, _ in bot.sent] == [2]


def test_failed_delivery_is_not_retried_next_minute(timetable, semester_start):
    bot = FakeBot(blocked={1})
    ticker = _ticker(timetable, semester_start)

    asyncio.run(check_and_send_reminders(bot, ticker, now=datetime(2025, 2, 3, 15, 0)))
    bot.blocked.clear()
    sent = asyncio.run(check_and_send_reminders(bot, ticker, now=datetime(2025, 2, 3, 15, 1)))

    assert sent == 0


def test_slow_delivery_pass_logs_warning(timetable, semester_start, monkeypatch, caplog):
    ticks = iter([100.0, 175.0])
    monkeypatch.setattr(tasks, "_clock", lambda: next(ticks))
    ticker = _ticker(timetable, semester_start)

    with caplog.at_level(logging.WARNING, logger="timetable_bot"):
        asyncio.run(check_and_send_reminders(FakeBot(), ticker, now=datetime(2025, 2, 3, 15, 0)))

    assert any("longer than the 60s tick" in record.getMessage() for record in caplog.records)


def test_fast_delivery_pass_does_not_warn(timetable, semester_start, monkeypatch, caplog):
    ticks = iter([100.0, 101.5])
    monkeypatch.setattr(tasks, "_clock", lambda: next(ticks))
    ticker = _ticker(timetable, semester_start)

    with caplog.at_level(logging.WARNING, logger="timetable_bot"):
        asyncio.run(check_and_send_reminders(FakeBot(), ticker, now=datetime(2025, 2, 3, 15, 0)))

    assert not any("tick" in record.getMessage() for record in caplog.records)
