"""
Calendar date helpers.

All dates cross module boundaries as canonical YYYY-MM-DD strings.
The fixed width is what makes lexicographic range filters correct.
"""

import calendar
from datetime import date, timedelta
from typing import Optional


DATE_FORMAT = "%Y-%m-%d"


def format_date(value: date) -> str:
    """Canonical string form of a date."""
    return value.strftime(DATE_FORMAT)


def parse_date(value: str) -> date:
    """Parse a canonical date string. Raises ValueError if malformed."""
    return date.fromisoformat(value)


def today(now: Optional[date] = None) -> str:
    """Today's date (local time) as a canonical string."""
    return format_date(now or date.today())


def shift_days(value: str, days: int) -> str:
    """Move a date string by a number of days (negative goes back)."""
    return format_date(parse_date(value) + timedelta(days=days))


def previous_day(value: str) -> str:
    return shift_days(value, -1)


def last_day_of_month(year: int, month: int) -> int:
    """Actual length of the month: 28, 29, 30 or 31."""
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[str, str]:
    """
    First and last date of a month (1-based) as canonical strings.

    Uses the real month length rather than a fixed 31.
    """
    start = date(year, month, 1)
    end = date(year, month, last_day_of_month(year, month))
    return format_date(start), format_date(end)


def add_months(year: int, month: int, delta: int) -> tuple[int, int]:
    """Step a (year, 1-based month) pair forwards or backwards."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def format_display_date(value: str) -> str:
    """Long display form, e.g. 'Monday, January 15, 2024'."""
    d = parse_date(value)
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"


def month_label(year: int, month: int) -> str:
    """e.g. 'January 2024'"""
    return f"{calendar.month_name[month]} {year}"
