"""
config.py

Bot settings read from the environment (and the project's .env file)
"""

import os
from datetime import date
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent.parent
env_path = PROJECT_ROOT / ".env"
load_dotenv(dotenv_path=env_path)

MINUTES_PER_WEEK = 7 * 24 * 60


class Settings:
    BOT_TOKEN: str = os.getenv("BOT_TOKEN")
    TIMETABLE_PATH: str = os.getenv("TIMETABLE_PATH", "timetable.json")

    def __init__(self):
        start_raw = os.getenv("SEMESTER_START", "2025-02-03").strip()
        try:
            self.SEMESTER_START = date.fromisoformat(start_raw)
        except ValueError:
            raise ValueError(f"SEMESTER_START must be an ISO date (YYYY-MM-DD), got {start_raw!r}") from None

        tz_raw = os.getenv("TIMEZONE", "Europe/Bucharest").strip()
        try:
            self.TIMEZONE = ZoneInfo(tz_raw)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"TIMEZONE must be an IANA zone name, got {tz_raw!r}") from None

        minutes_raw = os.getenv("REMINDER_MINUTES", "15")
        try:
            self.REMINDER_MINUTES = int(minutes_raw)
        except ValueError:
            raise ValueError(f"REMINDER_MINUTES must be an integer, got {minutes_raw!r}") from None
        # A lead of a week or more never lands before an upcoming occurrence
        if not 0 < self.REMINDER_MINUTES < MINUTES_PER_WEEK:
            raise ValueError(f"REMINDER_MINUTES must be between 1 and {MINUTES_PER_WEEK - 1}")


settings = Settings()
