from datetime import timedelta

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message

from timetable_bot.config import settings
from timetable_bot.core.models import Timetable
from timetable_bot.core.resolver import get_next_week_schedule, get_schedule, get_week_schedule
from timetable_bot.utils.helpers import format_day, format_week, local_now
from timetable_bot.utils.keyboards import (
    BTN_NEXT_WEEK,
    BTN_TODAY,
    BTN_TOMORROW,
    BTN_WEEK,
    schedule_keyboard,
)

router = Router(name="schedule")


def render_day(timetable: Timetable, title: str, offset: int = 0) -> str:
    """Agenda for today + ``offset`` days in the configured time zone."""
    target = local_now().date() + timedelta(days=offset)
    lessons = get_schedule(timetable, target, settings.SEMESTER_START)
    return format_day(title, target, lessons)


def render_week(timetable: Timetable, next_week: bool = False) -> str:
    today = local_now().date()
    if next_week:
        agenda = get_next_week_schedule(timetable, today, settings.SEMESTER_START)
        return format_week("Orarul săptămânii viitoare", agenda)
    agenda = get_week_schedule(timetable, today, settings.SEMESTER_START)
    return format_week("Orarul săptămânii", agenda)


@router.message(Command("today"))
@router.message(F.text == BTN_TODAY)
async def cmd_today(message: Message, timetable: Timetable):
    await message.answer(render_day(timetable, "Orarul de azi"), reply_markup=schedule_keyboard)


@router.message(Command("tomorrow"))
@router.message(F.text == BTN_TOMORROW)
async def cmd_tomorrow(message: Message, timetable: Timetable):
    await message.answer(
        render_day(timetable, "Orarul de mâine", offset=1), reply_markup=schedule_keyboard
    )


@router.message(Command("week"))
@router.message(F.text == BTN_WEEK)
async def cmd_week(message: Message, timetable: Timetable):
    await message.answer(render_week(timetable), reply_markup=schedule_keyboard)


@router.message(Command("next_week"))
@router.message(F.text == BTN_NEXT_WEEK)
async def cmd_next_week(message: Message, timetable: Timetable):
    await message.answer(render_week(timetable, next_week=True), reply_markup=schedule_keyboard)
