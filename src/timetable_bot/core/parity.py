"""Odd/even week alternation relative to the semester start.

The semester start week is week 1 and counts as odd. Weeks are counted between
the Mondays of both dates, so every day of a calendar week shares one parity.
This module holds the only parity formula; everything that needs the week
type calls into it.
"""

from datetime import date, datetime, timedelta

from timetable_bot.core.models import WeekType


def _monday(value: date) -> date:
    if isinstance(value, datetime):
        value = value.date()
    return value - timedelta(days=value.weekday())


def weeks_since(value: date, semester_start: date) -> int:
    """Whole weeks between the semester start week and the week of ``value``.

    Negative for dates before the semester starts.
    """
    return (_monday(value) - _monday(semester_start)).days // 7


def is_odd_week(value: date, semester_start: date) -> bool:
    # weeks_since == 0 is week 1
    return weeks_since(value, semester_start) % 2 == 0


def week_type_for(value: date, semester_start: date) -> WeekType:
    return WeekType.ODD if is_odd_week(value, semester_start) else WeekType.EVEN
