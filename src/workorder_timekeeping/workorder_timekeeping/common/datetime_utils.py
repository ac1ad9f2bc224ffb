from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Protocol

from ..core.constants import DEFAULT_WEEK_START, QUARTER_HOUR, SECONDS_PER_HOUR


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    def now(self) -> datetime:
        return now_local()


@dataclass
class FixedClock:
    """Clock frozen at one instant (tests, replaying a report)."""

    instant: datetime

    def now(self) -> datetime:
        return self.instant

    def advance(self, delta: timedelta) -> None:
        self.instant = self.instant + delta


@dataclass(frozen=True)
class WeekCalendar:
    """Calendar week boundaries.

    first_weekday follows date.weekday(): 0 = Monday ... 6 = Sunday.
    When tz is set, aware datetimes are converted to it before taking the date so
    every entry of a batch is compared in the same zone.
    """

    first_weekday: int = DEFAULT_WEEK_START
    tz: Optional[tzinfo] = None

    def local_date(self, value: date | datetime) -> date:
        if isinstance(value, datetime):
            if self.tz is not None and value.tzinfo is not None:
                value = value.astimezone(self.tz)
            return value.date()
        return value

    def week_bounds(self, reference: date | datetime) -> tuple[date, date]:
        """Half-open [start, end) range of the week containing reference."""
        day = self.local_date(reference)
        offset = (day.weekday() - self.first_weekday) % 7
        start = day - timedelta(days=offset)
        return start, start + timedelta(days=7)


def end_of_day(value: datetime) -> datetime:
    """Midnight that ends value's day (keeps tzinfo)."""
    next_day = value.date() + timedelta(days=1)
    return datetime.combine(next_day, time.min, tzinfo=value.tzinfo)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def round_to_quarter_hour(hours: float) -> float:
    return round(hours / QUARTER_HOUR) * QUARTER_HOUR


def format_hours(hours: float) -> str:
    """Format decimal hours as H:MM."""
    total_minutes = int(round(max(hours, 0.0) * 60))
    return f"{total_minutes // 60}:{total_minutes % 60:02d}"
