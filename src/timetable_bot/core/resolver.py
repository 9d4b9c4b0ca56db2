"""Select which lessons apply to a given day or week."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from timetable_bot.core.models import DaySchedule, Lesson, Timetable, WeekType
from timetable_bot.core.parity import week_type_for
from timetable_bot.utils.logger import logger


@dataclass(frozen=True)
class WeekAgenda:
    week_type: WeekType
    start: date  # Monday of the resolved week
    days: tuple[DaySchedule, ...]


def _as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def get_day_schedule(timetable: Timetable, value: date, semester_start: date) -> DaySchedule | None:
    value = _as_date(value)
    week_type = week_type_for(value, semester_start)
    day = timetable.plan(week_type).day(value.weekday())
    logger.debug(
        f"Resolved {value.isoformat()} -> day {value.weekday()}, {week_type.value} week, "
        f"{'found' if day else 'no entry'}"
    )
    return day


def get_schedule(timetable: Timetable, value: date, semester_start: date) -> list[Lesson]:
    """Lessons for ``value`` in stored order; empty when there are none."""
    day = get_day_schedule(timetable, value, semester_start)
    return list(day.lessons) if day else []


def get_week_schedule(timetable: Timetable, value: date, semester_start: date) -> WeekAgenda:
    value = _as_date(value)
    week_type = week_type_for(value, semester_start)
    return WeekAgenda(
        week_type=week_type,
        start=value - timedelta(days=value.weekday()),
        days=timetable.plan(week_type).days,
    )


def get_next_week_schedule(timetable: Timetable, value: date, semester_start: date) -> WeekAgenda:
    return get_week_schedule(timetable, _as_date(value) + timedelta(days=7), semester_start)
