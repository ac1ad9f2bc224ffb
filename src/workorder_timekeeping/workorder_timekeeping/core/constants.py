"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_OVERTIME_THRESHOLD_HOURS = 40.0
DEFAULT_DAILY_OVERTIME_HOURS = 8.0
DEFAULT_MAX_SHIFT_HOURS = 16.0
DEFAULT_WEEK_START = 0  # Monday, as in date.weekday()
DEFAULT_REPAIR_RETRIES = 1

SECONDS_PER_HOUR = 3600.0
QUARTER_HOUR = 0.25
