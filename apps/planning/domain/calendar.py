# apps/planning/domain/calendar.py
"""
Working calendar of the crews: 8h-12h / 13h-17h, Monday to Friday,
French public holidays off.

Dates are plain ``datetime.date`` objects (local calendar fields). The
``YYYY-MM-DD`` string form is only used at the edges (holiday table,
data layer), never derived from a UTC timestamp.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple, Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta
from dateutil.rrule import rrule, DAILY, MO, TU, WE, TH, FR

from apps.planning.domain.entities import WorkingDay
from apps.planning.domain.exceptions import InvalidDurationError
from apps.planning.domain.holidays import FRENCH_HOLIDAYS

MORNING_START = 8
MORNING_END = 12
AFTERNOON_START = 13
AFTERNOON_END = 17

HOURS_PER_DAY = (MORNING_END - MORNING_START) + (AFTERNOON_END - AFTERNOON_START)

DateLike = Union[date, str]


def format_local_date(day: date) -> str:
    """YYYY-MM-DD built from the local year/month/day fields."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_local_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # isoparse keeps the calendar fields as written (no timezone shift)
    return isoparse(value.strip()).date()


def parse_hour(value, default: int = MORNING_START) -> float:
    """
    Hour of a phase field: "08:00:00", datetime.time, a number or None.
    Numbers are kept as they are (9.5 stays 9.5); anything missing or
    unparseable falls back to the morning start.
    """
    if value is None or value == '':
        return default
    if isinstance(value, time):
        return value.hour or default
    if isinstance(value, (int, float)):
        return value or default
    try:
        return int(str(value).split(':')[0]) or default
    except ValueError:
        return default


def format_hour(hour: float) -> str:
    """8 -> "08:00", 13.5 -> "13:30"."""
    hours = int(hour)
    minutes = int(round((hour - hours) * 60))
    return f"{hours:02d}:{minutes:02d}"


def hour_to_time_string(hour: float) -> str:
    """Data layer format of an hour field ("08:00:00")."""
    return f"{int(hour):02d}:00:00"


def week_start(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day + relativedelta(weekday=MO(-1))


def iso_week_number(day: date) -> int:
    # Presentation only - week numbers never enter the arithmetic below
    return day.isocalendar()[1]


def _as_hour(value):
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class WorkCalendar:
    def __init__(self, holidays: Optional[Iterable[str]] = None):
        self.holidays = frozenset(FRENCH_HOLIDAYS if holidays is None else holidays)

    def is_holiday(self, day: DateLike) -> bool:
        key = day if isinstance(day, str) else format_local_date(day)
        return key in self.holidays

    def is_working_day(self, day: DateLike) -> bool:
        day = parse_local_date(day)
        # Saturday=5, Sunday=6
        if day.weekday() >= 5:
            return False
        return not self.is_holiday(day)

    def next_working_day(self, day: DateLike) -> date:
        current = parse_local_date(day) + timedelta(days=1)
        while not self.is_working_day(current):
            current += timedelta(days=1)
        return current

    def normalize_start(self, start_date: DateLike, start_hour: float) -> Tuple[date, float]:
        """First working instant at or after (start_date, start_hour)."""
        current_date = parse_local_date(start_date)
        current_hour = start_hour

        # 1. Clamp into the working window
        if current_hour < MORNING_START:
            current_hour = MORNING_START
        if MORNING_END <= current_hour < AFTERNOON_START:
            current_hour = AFTERNOON_START
        if current_hour >= AFTERNOON_END:
            current_date += timedelta(days=1)
            current_hour = MORNING_START

        # 2. On a working day (a roll-over may land on a weekend)
        while not self.is_working_day(current_date):
            current_date += timedelta(days=1)

        return current_date, current_hour

    def compute_end_instant(
        self,
        start_date: DateLike,
        start_hour: float,
        duration_hours: float
    ) -> Tuple[date, float]:
        """
        Consumes ``duration_hours`` of working time from the start instant.
        The lunch break (12h-13h) and non-working days do not count.
        """
        if duration_hours < 0:
            raise InvalidDurationError(f"Duration must not be negative (got {duration_hours})")

        current_date, current_hour = self.normalize_start(start_date, start_hour)

        # Greedy consumption: morning bucket, afternoon bucket, next day
        remaining = duration_hours
        while remaining > 0:
            if MORNING_START <= current_hour < MORNING_END:
                used = min(MORNING_END - current_hour, remaining)
                remaining -= used
                current_hour += used

                if remaining > 0:
                    used = min(AFTERNOON_END - AFTERNOON_START, remaining)
                    remaining -= used
                    current_hour = AFTERNOON_START + used
            elif AFTERNOON_START <= current_hour < AFTERNOON_END:
                used = min(AFTERNOON_END - current_hour, remaining)
                remaining -= used
                current_hour += used

            if remaining > 0:
                current_date = self.next_working_day(current_date)
                current_hour = MORNING_START

        return current_date, _as_hour(current_hour)

    def count_working_days(self, start_date: DateLike, end_date: DateLike) -> int:
        """Working days in [start_date, end_date], both ends included."""
        current = parse_local_date(start_date)
        end = parse_local_date(end_date)
        count = 0
        while current <= end:
            if self.is_working_day(current):
                count += 1
            current += timedelta(days=1)
        return count

    def generate_working_days(self, start: DateLike, count: int) -> List[WorkingDay]:
        """
        Visible range of the planning: ``count`` weekdays from ``start``.
        Holidays stay in the range (flagged), weekends are elided and
        leave a ``weekend_before`` mark on the next weekday.
        """
        if count <= 0:
            return []

        start = parse_local_date(start)
        rule = rrule(
            DAILY,
            dtstart=datetime.combine(start, time.min),
            byweekday=(MO, TU, WE, TH, FR),
            count=count,
        )

        days = []
        previous = start - timedelta(days=1)
        for occurrence in rule:
            day = occurrence.date()
            days.append(WorkingDay(
                date=day,
                is_holiday=self.is_holiday(day),
                weekend_before=(day - previous).days > 1,
            ))
            previous = day
        return days


default_calendar = WorkCalendar()

is_holiday = default_calendar.is_holiday
is_working_day = default_calendar.is_working_day
next_working_day = default_calendar.next_working_day
normalize_start = default_calendar.normalize_start
compute_end_instant = default_calendar.compute_end_instant
count_working_days = default_calendar.count_working_days
generate_working_days = default_calendar.generate_working_days
