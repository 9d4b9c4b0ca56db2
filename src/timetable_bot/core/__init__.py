"""Pure schedule logic: week parity, day/week resolution, reminders, subscribers."""

from .loader import TimetableError, load_timetable, parse_timetable
from .models import DaySchedule, Lesson, Timetable, WeekPlan, WeekType
from .parity import is_odd_week, week_type_for
from .reminders import DueReminder, ReminderDelivery, due_reminders, fan_out
from .resolver import WeekAgenda, get_next_week_schedule, get_schedule, get_week_schedule
from .subscriptions import Subscriber, SubscriptionStore

__all__ = [
    "DaySchedule",
    "DueReminder",
    "Lesson",
    "ReminderDelivery",
    "Subscriber",
    "SubscriptionStore",
    "Timetable",
    "TimetableError",
    "WeekAgenda",
    "WeekPlan",
    "WeekType",
    "due_reminders",
    "fan_out",
    "get_next_week_schedule",
    "get_schedule",
    "get_week_schedule",
    "is_odd_week",
    "load_timetable",
    "parse_timetable",
    "week_type_for",
]
