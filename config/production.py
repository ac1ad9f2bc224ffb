import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timekeeping_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

OVERTIME_THRESHOLD_HOURS = float(os.getenv("OVERTIME_THRESHOLD_HOURS", "40"))
MAX_SHIFT_HOURS = float(os.getenv("MAX_SHIFT_HOURS", "16"))
WEEK_START = int(os.getenv("WEEK_START", "0"))
DAILY_OVERTIME_HOURS = float(os.getenv("DAILY_OVERTIME_HOURS", "8"))
# IANA name, e.g. America/Los_Angeles; empty keeps naive local time
TIMEZONE = os.getenv("TIMEZONE", "")
ROUND_TO_QUARTER_HOUR = bool(int(os.getenv("ROUND_TO_QUARTER_HOUR", "0")))
