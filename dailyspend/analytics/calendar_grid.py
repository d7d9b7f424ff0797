"""
Calendar Grid Generator

A month is always rendered as 6 full Sunday-first weeks (42 cells), so
the grid never needs a variable number of rows whichever weekday the
month starts or ends on. Stateless; recomputed on every navigation.
"""

from datetime import date, timedelta
from typing import Optional

from dailyspend.models.reports import CalendarCell
from dailyspend.utils.dates import format_date, today as today_string


GRID_CELLS = 42
DAYS_PER_WEEK = 7


def generate_month_grid(
    year: int,
    month_index: int,
    today: Optional[str] = None,
) -> list[CalendarCell]:
    """
    Build the 42-cell grid for a month.

    Args:
        year: Four-digit year
        month_index: ZERO-based month (0 = January)
        today: Date string to flag as today; defaults to the current
               date at call time (never cached)

    Returns:
        42 consecutive days starting on the Sunday on or before the 1st
    """
    first_day = date(year, month_index + 1, 1)
    # date.weekday(): Monday=0 .. Sunday=6; shift so Sunday=0
    days_since_sunday = (first_day.weekday() + 1) % DAYS_PER_WEEK
    start = first_day - timedelta(days=days_since_sunday)
    current_day = today or today_string()

    cells = []
    for offset in range(GRID_CELLS):
        day = start + timedelta(days=offset)
        day_string = format_date(day)
        cells.append(CalendarCell(
            date=day,
            date_string=day_string,
            is_current_month=(day.year == year and day.month == month_index + 1),
            is_today=(day_string == current_day),
        ))
    return cells


def month_grid_weeks(cells: list[CalendarCell]) -> list[list[CalendarCell]]:
    """Split a grid into rows of 7 for rendering."""
    return [cells[i:i + DAYS_PER_WEEK] for i in range(0, len(cells), DAYS_PER_WEEK)]
