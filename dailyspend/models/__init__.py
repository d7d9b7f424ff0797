"""
Data Models Package

Pydantic models for records (categories, expenses), aggregation reports
and activity events.
"""

from dailyspend.models.records import (
    Category,
    CategoryCreate,
    Expense,
    ExpenseCreate,
    ExpenseWithCategory,
    new_record_id,
    utc_now,
)
from dailyspend.models.reports import (
    CalendarCell,
    CategoryTotal,
    DateTotal,
    MonthlySummary,
)
from dailyspend.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Records
    "Category",
    "CategoryCreate",
    "Expense",
    "ExpenseCreate",
    "ExpenseWithCategory",
    "new_record_id",
    "utc_now",
    # Reports
    "CalendarCell",
    "CategoryTotal",
    "DateTotal",
    "MonthlySummary",
    # Activity
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
