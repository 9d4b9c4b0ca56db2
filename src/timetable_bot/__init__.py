"""Weekly class timetable bot with lesson reminders."""

__version__ = "1.0.0"
