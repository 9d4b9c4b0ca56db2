"""Reminder due-set computation, evaluated once per minute."""

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from timetable_bot.core.loader import parse_timetable
from timetable_bot.core.models import WeekType
from timetable_bot.core.reminders import due_reminders, fan_out, next_occurrence

ODD_MONDAY_ONLY = parse_timetable(
    {
        "oddWeek": [
            {"day": 0, "lessons": [{"time": "15:15", "name": "Algoritmi", "professor": "Ion Popescu", "room": "3 - 3"}]}
        ],
        "evenWeek": [],
    }
)


def test_odd_week_lesson_is_due_fifteen_minutes_before(semester_start):
    due = due_reminders(ODD_MONDAY_ONLY, datetime(2025, 2, 3, 15, 0), semester_start)

    assert len(due) == 1
    assert due[0].lesson.name == "Algoritmi"
    assert due[0].day.day == 0
    assert due[0].week_type is WeekType.ODD
    assert due[0].starts_at == datetime(2025, 2, 3, 15, 15)


def test_odd_week_lesson_is_not_due_in_even_week(semester_start):
    assert due_reminders(ODD_MONDAY_ONLY, datetime(2025, 2, 10, 15, 0), semester_start) == []


def test_lesson_is_due_again_two_weeks_later(semester_start):
    assert len(due_reminders(ODD_MONDAY_ONLY, datetime(2025, 2, 17, 15, 0), semester_start)) == 1


def test_due_set_is_idempotent_within_a_minute(semester_start):
    first = due_reminders(ODD_MONDAY_ONLY, datetime(2025, 2, 3, 15, 0, 5), semester_start)
    second = due_reminders(ODD_MONDAY_ONLY, datetime(2025, 2, 3, 15, 0, 55), semester_start)

    assert first == second
    assert len(first) == 1


def test_reminder_is_not_repeated_a_minute_later(semester_start):
    assert due_reminders(ODD_MONDAY_ONLY, datetime(2025, 2, 3, 15, 1), semester_start) == []
    assert due_reminders(ODD_MONDAY_ONLY, datetime(2025, 2, 3, 14, 59), semester_start) == []


def test_next_occurrence_rolls_over_to_next_week():
    now = datetime(2025, 2, 3, 15, 20)
    assert next_occurrence(0, time(15, 15), now) == datetime(2025, 2, 10, 15, 15)


def test_next_occurrence_later_this_week():
    now = datetime(2025, 2, 5, 8, 0)  # Wednesday
    assert next_occurrence(0, time(15, 15), now) == datetime(2025, 2, 10, 15, 15)
    assert next_occurrence(4, time(9, 0), now) == datetime(2025, 2, 7, 9, 0)
    assert next_occurrence(2, time(8, 0), now) == datetime(2025, 2, 5, 8, 0)


def test_next_occurrence_keeps_time_zone():
    tz = ZoneInfo("Europe/Bucharest")
    now = datetime(2025, 2, 3, 15, 0, tzinfo=tz)

    occurrence = next_occurrence(0, time(15, 15), now)

    assert occurrence.tzinfo is tz
    assert occurrence - now == timedelta(minutes=15)


def test_reminder_before_midnight_uses_parity_of_lesson_week(semester_start):
    timetable = parse_timetable(
        {
            "oddWeek": [],
            "evenWeek": [{"day": 0, "lessons": [{"time": "00:05", "name": "Noapte"}]}],
        }
    )

    # Sunday of week 1 (odd), lesson on Monday of week 2 (even)
    due = due_reminders(timetable, datetime(2025, 2, 9, 23, 50), semester_start)

    assert [item.lesson.name for item in due] == ["Noapte"]
    assert due[0].starts_at == datetime(2025, 2, 10, 0, 5)


def test_only_the_active_plan_fires(timetable, semester_start):
    # Both plans have a Monday 15:15 lesson (one literal, one slot 0)
    odd = due_reminders(timetable, datetime(2025, 2, 3, 15, 0), semester_start)
    even = due_reminders(timetable, datetime(2025, 2, 10, 15, 0), semester_start)

    assert [item.lesson.name for item in odd] == ["Algoritmi"]
    assert [item.lesson.name for item in even] == ["Baze de date (laborator)"]


def test_custom_lead(semester_start):
    due = due_reminders(
        ODD_MONDAY_ONLY, datetime(2025, 2, 3, 14, 15), semester_start, lead=timedelta(hours=1)
    )
    assert len(due) == 1


def test_fan_out_cross_joins_due_and_enabled_users(timetable, semester_start):
    due = due_reminders(timetable, datetime(2025, 2, 3, 16, 45), semester_start)

    deliveries = fan_out(due, [10, 20])

    assert [(d.user_id, d.lesson.name) for d in deliveries] == [
        (10, "Baze de date"),
        (20, "Baze de date"),
    ]
    assert deliveries[0].starts_at == datetime(2025, 2, 3, 17, 0)


def test_fan_out_without_subscribers_is_empty(semester_start):
    due = due_reminders(ODD_MONDAY_ONLY, datetime(2025, 2, 3, 15, 0), semester_start)
    assert fan_out(due, []) == []
    assert fan_out([], [1, 2]) == []
