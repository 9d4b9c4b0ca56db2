"""The `timetable_bot` logger.

DEBUG and up goes to LOG_DIR/bot.log (rotated at 10MB, 7 backups),
INFO and up goes to stderr.
"""

import logging
import logging.handlers
import os
from pathlib import Path

# Defaults to <project root>/logs, override with LOG_DIR
LOGS_DIR = Path(os.getenv("LOG_DIR") or Path(__file__).parent.parent.parent.parent / "logs")
LOGS_DIR.mkdir(parents=True, exist_ok=True)

logger = logging.getLogger("timetable_bot")
logger.setLevel(logging.DEBUG)

# Module may be re-imported by tests; start from a clean handler list
logger.handlers.clear()

formatter = logging.Formatter(
    "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

log_file = LOGS_DIR / "bot.log"
file_handler = logging.handlers.RotatingFileHandler(
    log_file,
    maxBytes=10 * 1024 * 1024,  # 10 MB per file
    backupCount=7,
    encoding="utf-8",
)
file_handler.setLevel(logging.DEBUG)
file_handler.setFormatter(formatter)
logger.addHandler(file_handler)

console_handler = logging.StreamHandler()
console_handler.setLevel(logging.INFO)
console_handler.setFormatter(formatter)
logger.addHandler(console_handler)
