"""Money and date helpers."""

from dailyspend.utils.dates import (
    add_months,
    format_date,
    format_display_date,
    last_day_of_month,
    month_bounds,
    month_label,
    parse_date,
    previous_day,
    shift_days,
    today,
)
from dailyspend.utils.money import (
    CURRENCIES,
    MAX_AMOUNT,
    format_amount_display,
    normalize_amount,
    parse_amount,
    sum_amounts,
    to_decimal,
)

__all__ = [
    # Dates
    "add_months",
    "format_date",
    "format_display_date",
    "last_day_of_month",
    "month_bounds",
    "month_label",
    "parse_date",
    "previous_day",
    "shift_days",
    "today",
    # Money
    "CURRENCIES",
    "MAX_AMOUNT",
    "format_amount_display",
    "normalize_amount",
    "parse_amount",
    "sum_amounts",
    "to_decimal",
]
