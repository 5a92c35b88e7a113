# apps/planning/domain/coordinates.py
"""
Pixel <-> (date, hour) mapping of the planning timeline.

One column of ``column_width`` px per working day, plus a thin separator
before every day that follows a weekend. Inside a column the 4 morning
hours fill the left half and the 4 afternoon hours the right half, so the
lunch break has no width at all.
"""
import math
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

from apps.planning.domain.calendar import (
    MORNING_START, MORNING_END, AFTERNOON_START, AFTERNOON_END, HOURS_PER_DAY,
    DateLike, parse_local_date, format_local_date, parse_hour,
)
from apps.planning.domain.entities import WorkingDay, WorkPhase

VALID_HOURS = (8, 9, 10, 11, 13, 14, 15, 16)

WEEKEND_SEPARATOR_WIDTH = 4
MIN_PHASE_HOURS = 1
MAX_PHASE_HOURS = 40  # 5 working days

# Phase bar insets on a row
BAR_MARGIN_LEFT = 2
BAR_WIDTH_INSET = 4
BAR_MIN_WIDTH = 20


@dataclass(frozen=True)
class PhaseBox:
    left: float
    width: float


def hour_to_fraction(hour: float) -> float:
    if hour <= MORNING_START:
        return 0.0
    if hour >= AFTERNOON_END:
        return 1.0

    # Morning: 8-12 -> 0-0.5
    if hour <= MORNING_END:
        return (hour - MORNING_START) / HOURS_PER_DAY

    # Lunch collapses onto midday
    if hour < AFTERNOON_START:
        return 0.5

    # Afternoon: 13-17 -> 0.5-1
    return 0.5 + (hour - AFTERNOON_START) / HOURS_PER_DAY


def fraction_to_hour(fraction: float) -> float:
    if fraction <= 0:
        return MORNING_START
    if fraction >= 1:
        return AFTERNOON_END
    # Midday belongs to the afternoon (lunch has no width)
    if fraction < 0.5:
        return MORNING_START + fraction * HOURS_PER_DAY
    return AFTERNOON_START + (fraction - 0.5) * HOURS_PER_DAY


def snap_to_valid_hour(hour: float) -> int:
    """Nearest valid working hour; on a tie the smaller hour wins."""
    closest = VALID_HOURS[0]
    min_diff = abs(hour - closest)
    for valid_hour in VALID_HOURS:
        diff = abs(hour - valid_hour)
        if diff < min_diff:
            min_diff = diff
            closest = valid_hour
    return closest


def _day_offsets(working_days: Sequence[WorkingDay], column_width: float,
                 separator_width: float) -> List[float]:
    """Left edge (px) of every day column, separators included."""
    offsets = []
    x = 0.0
    for day in working_days:
        if day.weekend_before:
            x += separator_width
        offsets.append(x)
        x += column_width
    return offsets


def _index_of(day: date, working_days: Sequence[WorkingDay]) -> int:
    for i, working_day in enumerate(working_days):
        if working_day.date == day:
            return i
    return -1


def date_time_to_pixels(
    day: DateLike,
    hour: float,
    column_width: float,
    working_days: Sequence[WorkingDay],
    separator_width: float = WEEKEND_SEPARATOR_WIDTH
) -> float:
    """X offset of an instant; 0 when the day is not in the visible range."""
    index = _index_of(parse_local_date(day), working_days)
    if index == -1:
        return 0

    left = _day_offsets(working_days[:index + 1], column_width, separator_width)[index]
    return left + hour_to_fraction(hour) * column_width


def pixels_to_date_time(
    x: float,
    column_width: float,
    working_days: Sequence[WorkingDay],
    separator_width: float = WEEKEND_SEPARATOR_WIDTH
) -> Optional[Tuple[str, float]]:
    """
    (YYYY-MM-DD, snapped hour) under ``x``, or None for an empty range.
    Left of a column (negative x, weekend separator) resolves to that
    day's morning start; past the last column to the last day at 17h.
    """
    if not working_days:
        return None

    offsets = _day_offsets(working_days, column_width, separator_width)
    for working_day, day_start in zip(working_days, offsets):
        if x < day_start:
            return format_local_date(working_day.date), MORNING_START
        if x < day_start + column_width:
            fraction = round((x - day_start) / column_width, 9)
            return format_local_date(working_day.date), snap_to_valid_hour(fraction_to_hour(fraction))

    return format_local_date(working_days[-1].date), AFTERNOON_END


def hours_to_pixels(hours: float, column_width: float) -> float:
    return (hours / HOURS_PER_DAY) * column_width


def pixels_to_hours(width: float, column_width: float) -> int:
    hours = (width / column_width) * HOURS_PER_DAY
    # Half-up rounding, at least one hour
    return max(MIN_PHASE_HOURS, int(math.floor(hours + 0.5)))


def snap_grid(column_width: float) -> Tuple[float, int]:
    """Drag/resize grid: one step per working hour, no vertical snapping."""
    return column_width / HOURS_PER_DAY, 1


def min_width(column_width: float) -> float:
    return hours_to_pixels(MIN_PHASE_HOURS, column_width)


def max_width(column_width: float) -> float:
    return hours_to_pixels(MAX_PHASE_HOURS, column_width)


def phase_position(
    phase: WorkPhase,
    working_days: Sequence[WorkingDay],
    column_width: float,
    separator_width: float = WEEKEND_SEPARATOR_WIDTH
) -> Optional[PhaseBox]:
    """
    Bar of a phase on a row. A phase running outside the visible range is
    cut at the range edge; None when it is not visible at all.
    """
    if not working_days:
        return None

    phase_start = parse_local_date(phase.start_date)
    phase_end = parse_local_date(phase.end_date)
    first_day = working_days[0].date
    last_day = working_days[-1].date

    if phase_end < first_day or phase_start > last_day:
        return None

    start_index = next(
        (i for i, d in enumerate(working_days) if d.date >= phase_start), len(working_days) - 1
    )
    end_index = max(
        (i for i, d in enumerate(working_days) if d.date <= phase_end), default=0
    )
    if end_index < start_index:
        # Phase lies entirely on elided days
        return None

    # Start or end outside the visible days (range edge, elided weekend): cut at the column edge
    start_cut = working_days[start_index].date != phase_start
    end_cut = working_days[end_index].date != phase_end

    start_fraction = 0.0 if start_cut else hour_to_fraction(parse_hour(phase.start_hour))
    end_fraction = 1.0 if end_cut else hour_to_fraction(parse_hour(phase.end_hour, default=AFTERNOON_END))

    offsets = _day_offsets(working_days, column_width, separator_width)
    left = offsets[start_index] + start_fraction * column_width

    if start_index == end_index:
        width = (end_fraction - start_fraction) * column_width
    else:
        # From the start column's left edge to the end instant, minus the start offset
        width = (offsets[end_index] - offsets[start_index]) + (end_fraction - start_fraction) * column_width

    return PhaseBox(
        left=left + BAR_MARGIN_LEFT,
        width=max(width - BAR_WIDTH_INSET, BAR_MIN_WIDTH),
    )
