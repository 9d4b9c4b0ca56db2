"""Timetable structures shared by the resolver and the reminder scan."""

from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import Iterator


class WeekType(str, Enum):
    ODD = "odd"
    EVEN = "even"


# Numeric lesson "time" values are slot indexes into this table
TIME_SLOTS = {
    0: "15:15",
    1: "17:00",
    2: "18:45",
    3: "20:30",
}


@dataclass(frozen=True)
class Lesson:
    time: time
    name: str
    professor: str = ""
    room: str = ""
    slot: int | None = None

    @property
    def time_label(self) -> str:
        return self.time.strftime("%H:%M")


@dataclass(frozen=True)
class DaySchedule:
    day: int  # Monday=0 .. Sunday=6
    lessons: tuple[Lesson, ...] = ()


@dataclass(frozen=True)
class WeekPlan:
    week_type: WeekType
    days: tuple[DaySchedule, ...] = ()

    def day(self, ordinal: int) -> DaySchedule | None:
        for entry in self.days:
            if entry.day == ordinal:
                return entry
        return None


@dataclass(frozen=True)
class Timetable:
    odd: WeekPlan = field(default_factory=lambda: WeekPlan(WeekType.ODD))
    even: WeekPlan = field(default_factory=lambda: WeekPlan(WeekType.EVEN))

    def plan(self, week_type: WeekType) -> WeekPlan:
        return self.odd if week_type is WeekType.ODD else self.even

    def __iter__(self) -> Iterator[WeekPlan]:
        yield self.odd
        yield self.even
