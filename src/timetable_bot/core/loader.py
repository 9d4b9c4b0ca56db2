"""Build a :class:`Timetable` from the static JSON timetable file.

Any inconsistency in the data is fatal: the bot must not start with a
timetable that would silently resolve to "no lessons".
"""

import json
from datetime import datetime, time
from pathlib import Path
from typing import Any

from timetable_bot.core.models import TIME_SLOTS, DaySchedule, Lesson, Timetable, WeekPlan, WeekType

# Accepted spellings of each week key, original file format first
WEEK_KEYS = {
    WeekType.ODD: ("oddWeek", "odd"),
    WeekType.EVEN: ("evenWeek", "even"),
}

DAY_ALIASES = {
    "monday": 0, "luni": 0,
    "tuesday": 1, "marti": 1, "marți": 1, "marţi": 1,
    "wednesday": 2, "miercuri": 2,
    "thursday": 3, "joi": 3,
    "friday": 4, "vineri": 4,
    "saturday": 5, "sambata": 5, "sâmbătă": 5,
    "sunday": 6, "duminica": 6, "duminică": 6,
}


class TimetableError(ValueError):
    """Raised when the timetable data is malformed or self-inconsistent."""


def _parse_day(raw: Any, where: str) -> int:
    # bool is an int subclass, reject it explicitly
    if isinstance(raw, int) and not isinstance(raw, bool):
        if 0 <= raw <= 6:
            return raw
        raise TimetableError(f"{where}: day index {raw} is outside 0..6")
    if isinstance(raw, str):
        key = raw.strip().lower()
        if key.isdecimal():
            return _parse_day(int(key), where)
        if key in DAY_ALIASES:
            return DAY_ALIASES[key]
    raise TimetableError(f"{where}: unknown day {raw!r}")


def _parse_time(raw: Any, where: str) -> tuple[time, int | None]:
    slot = None
    if isinstance(raw, int) and not isinstance(raw, bool):
        slot = raw
    elif isinstance(raw, str) and raw.strip().isdecimal():
        slot = int(raw.strip())

    if slot is not None:
        if slot not in TIME_SLOTS:
            raise TimetableError(f"{where}: unknown time slot {raw!r}")
        raw = TIME_SLOTS[slot]

    if not isinstance(raw, str):
        raise TimetableError(f"{where}: lesson time must be 'HH:MM' or a slot index, got {raw!r}")
    try:
        parsed = datetime.strptime(raw.strip(), "%H:%M").time()
    except ValueError:
        raise TimetableError(f"{where}: malformed lesson time {raw!r}") from None
    return parsed, slot


def _parse_lesson(raw: Any, where: str) -> Lesson:
    if not isinstance(raw, dict):
        raise TimetableError(f"{where}: lesson must be an object")
    if "time" not in raw:
        raise TimetableError(f"{where}: lesson has no time")
    at, slot = _parse_time(raw["time"], where)
    name = str(raw.get("name") or "").strip()
    if not name:
        raise TimetableError(f"{where}: lesson has no name")
    return Lesson(
        time=at,
        name=name,
        professor=str(raw.get("professor") or "").strip(),
        room=str(raw.get("room") or "").strip(),
        slot=slot,
    )


def _parse_plan(week_type: WeekType, raw: Any) -> WeekPlan:
    if not isinstance(raw, list):
        raise TimetableError(f"{week_type.value} week: expected a list of days")

    days = []
    seen = set()
    for i, entry in enumerate(raw):
        where = f"{week_type.value} week, entry {i}"
        if not isinstance(entry, dict) or "day" not in entry:
            raise TimetableError(f"{where}: day entry must be an object with a 'day' field")
        ordinal = _parse_day(entry["day"], where)
        if ordinal in seen:
            raise TimetableError(f"{where}: day {ordinal} appears more than once")
        seen.add(ordinal)

        lessons_raw = entry.get("lessons", [])
        if not isinstance(lessons_raw, list):
            raise TimetableError(f"{where}: 'lessons' must be a list")
        lessons = tuple(
            _parse_lesson(lesson, f"{where}, lesson {j}")
            for j, lesson in enumerate(lessons_raw)
        )
        days.append(DaySchedule(day=ordinal, lessons=lessons))

    return WeekPlan(week_type=week_type, days=tuple(days))


def parse_timetable(raw: Any) -> Timetable:
    if not isinstance(raw, dict):
        raise TimetableError("timetable root must be an object")

    plans = {}
    for week_type, keys in WEEK_KEYS.items():
        key = next((k for k in keys if k in raw), None)
        if key is None:
            raise TimetableError(f"timetable has no {' / '.join(keys)} section")
        plans[week_type] = _parse_plan(week_type, raw[key])

    return Timetable(odd=plans[WeekType.ODD], even=plans[WeekType.EVEN])


def load_timetable(path: str | Path) -> Timetable:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        raise TimetableError(f"timetable file not found: {path}") from None
    except UnicodeDecodeError as exc:
        raise TimetableError(f"timetable file {path} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise TimetableError(f"timetable file {path} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise TimetableError(f"cannot read timetable file {path}: {exc}") from exc
    return parse_timetable(raw)
