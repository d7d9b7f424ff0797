"""
Report Models

Results produced by the aggregation engine and the calendar grid
generator. Totals are Decimal in Python; at the JSON edge they are
emitted as plain numbers, since rounding is a display concern.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from dailyspend.models.records import Category


class DateTotal(BaseModel):
    """Total spent on a single calendar day."""

    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    total: Decimal = Field(default=Decimal("0"), description="Sum of amounts")

    @field_serializer("total", when_used="json")
    def total_as_number(self, total: Decimal) -> float:
        return float(total)


class CategoryTotal(BaseModel):
    """Total spent in one category on one day."""
    model_config = ConfigDict(populate_by_name=True)

    category_id: str = Field(..., alias="categoryId")
    total: Decimal = Field(default=Decimal("0"))
    category: Optional[Category] = Field(
        default=None,
        description="Category resolved at query time"
    )

    @field_serializer("total", when_used="json")
    def total_as_number(self, total: Decimal) -> float:
        return float(total)


class MonthlySummary(BaseModel):
    """
    Headline statistics for a month.

    `average` is taken over the days that had spending, matching the
    sparse monthly series.
    """
    model_config = ConfigDict(populate_by_name=True)

    year: int
    month: int = Field(..., ge=1, le=12)
    total: Decimal = Decimal("0")
    days_with_spending: int = Field(default=0, ge=0, alias="daysWithSpending")
    highest_day: Optional[DateTotal] = Field(default=None, alias="highestDay")
    average: Decimal = Decimal("0")

    @field_serializer("total", "average", when_used="json")
    def amount_as_number(self, value: Decimal) -> float:
        return float(value)


class CalendarCell(BaseModel):
    """One day in the 42-cell month grid."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date: dt.date
    date_string: str = Field(..., alias="dateString")
    is_current_month: bool = Field(..., alias="isCurrentMonth")
    is_today: bool = Field(..., alias="isToday")
