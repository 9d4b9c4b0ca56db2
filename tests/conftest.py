import os
import tempfile
from datetime import date

import pytest

# Keep test runs from writing into the project's logs/ directory
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="timetable-bot-logs-"))

from timetable_bot.core.loader import parse_timetable  # noqa: E402

SEMESTER_START = date(2025, 2, 3)  # a Monday, week 1 (odd)

RAW_TIMETABLE = {
    "oddWeek": [
        {
            "day": 0,
            "lessons": [
                {"time": "15:15", "name": "Algoritmi", "professor": "Ion Popescu", "room": "3 - 3"},
                {"time": 1, "name": "Baze de date", "professor": "Maria Ionescu", "room": "402"},
            ],
        },
        {
            "day": "Miercuri",
            "lessons": [
                {"time": "2", "name": "Rețele", "professor": "Andrei Rusu", "room": "6 - 2"},
            ],
        },
    ],
    "evenWeek": [
        {
            "day": "Monday",
            "lessons": [
                {"time": 0, "name": "Baze de date (laborator)", "professor": "Maria Ionescu", "room": "215"},
            ],
        },
        {"day": 3, "lessons": []},
    ],
}


@pytest.fixture
def semester_start():
    return SEMESTER_START


@pytest.fixture
def timetable():
    return parse_timetable(RAW_TIMETABLE)
