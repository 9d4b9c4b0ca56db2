"""Decide which lesson reminders fall due in a given minute.

The scan is evaluated once per minute. A lesson is due when its next
occurrence minus the reminder lead lands in the same calendar minute as
``now``, and only if the week of that occurrence has the parity of the plan
the lesson belongs to. The check is minute-exact, so calling it again in the
same minute returns the same result and a later minute never repeats it.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable

from timetable_bot.core.models import DaySchedule, Lesson, Timetable, WeekType
from timetable_bot.core.parity import week_type_for

REMINDER_LEAD = timedelta(minutes=15)


@dataclass(frozen=True)
class DueReminder:
    lesson: Lesson
    day: DaySchedule
    week_type: WeekType
    starts_at: datetime


@dataclass(frozen=True)
class ReminderDelivery:
    user_id: int
    lesson: Lesson
    day: DaySchedule
    starts_at: datetime


def _truncate(moment: datetime) -> datetime:
    return moment.replace(second=0, microsecond=0)


def next_occurrence(day: int, at: time, now: datetime) -> datetime:
    """Upcoming ``day``/``at`` instant, never before ``now``."""
    days_ahead = (day - now.weekday()) % 7
    target = now.date() + timedelta(days=days_ahead)
    occurrence = datetime.combine(target, at, tzinfo=now.tzinfo)
    if occurrence < now:
        occurrence += timedelta(days=7)
    return occurrence


def due_reminders(
    timetable: Timetable,
    now: datetime,
    semester_start: date,
    lead: timedelta = REMINDER_LEAD,
) -> list[DueReminder]:
    minute = _truncate(now)
    due = []
    for plan in timetable:
        for day in plan.days:
            for lesson in day.lessons:
                starts_at = next_occurrence(day.day, lesson.time, now)
                if _truncate(starts_at - lead) != minute:
                    continue
                # The other plan's lessons do not happen this week
                if week_type_for(starts_at, semester_start) is not plan.week_type:
                    continue
                due.append(DueReminder(lesson, day, plan.week_type, starts_at))
    return due


def fan_out(due: Iterable[DueReminder], user_ids: Iterable[int]) -> list[ReminderDelivery]:
    """One delivery per (due reminder, enabled subscriber) pair."""
    user_ids = list(user_ids)
    return [
        ReminderDelivery(user_id, item.lesson, item.day, item.starts_at)
        for item in due
        for user_id in user_ids
    ]
