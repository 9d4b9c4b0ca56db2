from datetime import date, datetime
from html import escape

from timetable_bot.config import settings
from timetable_bot.core.models import Lesson, WeekType
from timetable_bot.core.reminders import ReminderDelivery
from timetable_bot.core.resolver import WeekAgenda

DAY_NAMES = ["Luni", "Marți", "Miercuri", "Joi", "Vineri", "Sâmbătă", "Duminică"]

WEEK_TYPE_NAMES = {
    WeekType.ODD: "Săptămână impară",
    WeekType.EVEN: "Săptămână pară",
}

# Rooms shown as "Aula"; everything else is a "Sala"
AULA_ROOMS = {"3 - 3", "6 - 2"}

NO_LESSONS = "Nu sunt perechi"


def local_now() -> datetime:
    return datetime.now(settings.TIMEZONE)


def room_prefix(room: str) -> str:
    return "Aula" if room in AULA_ROOMS else "Sala"


def format_lesson(lesson: Lesson) -> str:
    return (
        f"🕒 {lesson.time_label}\n"
        f"📚 {escape(lesson.name)}\n"
        f"👨‍🏫 {escape(lesson.professor or '—')}\n"
        f"🏫 {room_prefix(lesson.room)}: {escape(lesson.room or '—')}"
    )


def format_lessons(lessons: list[Lesson]) -> str:
    if not lessons:
        return NO_LESSONS
    return "\n\n".join(format_lesson(lesson) for lesson in lessons)


def format_day(title: str, day: date, lessons: list[Lesson]) -> str:
    """Render one day's agenda under ``title``, e.g. "Orarul de azi"."""
    return (
        f"📅 <b>{title} ({DAY_NAMES[day.weekday()]}, {day.strftime('%d.%m')})</b>\n\n"
        f"{format_lessons(lessons)}"
    )


def format_week(title: str, agenda: WeekAgenda) -> str:
    parts = [f"📚 <b>{title} ({WEEK_TYPE_NAMES[agenda.week_type]})</b>"]
    if not agenda.days:
        parts.append(NO_LESSONS)
    for day in agenda.days:
        parts.append(f"📘 <b>{DAY_NAMES[day.day]}:</b>\n{format_lessons(list(day.lessons))}")
    return "\n\n".join(parts)


def format_reminder(delivery: ReminderDelivery, minutes_before: int) -> str:
    return (
        f"⏰ <b>Reminder</b>: peste {minutes_before} minute\n"
        f"{format_lesson(delivery.lesson)}"
    )
