import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timekeeping_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

OVERTIME_THRESHOLD_HOURS = 40.0
MAX_SHIFT_HOURS = 16.0
WEEK_START = 0
DAILY_OVERTIME_HOURS = 8.0
TIMEZONE = ""
ROUND_TO_QUARTER_HOUR = False
