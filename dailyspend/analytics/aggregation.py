"""
Aggregation Engine

DESIGN DECISION: Aggregates are DERIVED, never stored.
Every call scans the store's current contents, so a total can never
drift from the expenses it was computed from.

Amounts are summed as Decimal over their exact at-rest strings.
Rounding is left to the presentation layer.

Two series shapes are produced on purpose:
- weekly_totals is DENSE: exactly 7 rows, zero-filled
- monthly_totals is SPARSE: only days that have at least one expense

Dates are an unchecked precondition: a malformed date string gives
unspecified results rather than a handled error.
"""

from collections import OrderedDict
from decimal import Decimal

from dailyspend.models.reports import CategoryTotal, DateTotal, MonthlySummary
from dailyspend.services.storage import RecordStoreInterface
from dailyspend.utils.dates import month_bounds, shift_days
from dailyspend.utils.money import sum_amounts, to_decimal


WEEK_LENGTH = 7


class AggregationEngine:
    """
    Computes totals over a point-in-time snapshot of the record store.

    GUARANTEES:
    - No caching: every query is a fresh scan
    - Summation order never changes the value (exact Decimal)
    - The sum of nothing is 0
    """

    def __init__(self, store: RecordStoreInterface):
        self._store = store

    def daily_total(self, date: str) -> Decimal:
        """Sum of amounts over all expenses attributed to `date`."""
        return sum_amounts(e.amount for e in self._store.list_expenses_by_date(date))

    def category_totals(self, date: str) -> list[CategoryTotal]:
        """
        Per-category totals for one day.

        Uncategorized expenses are excluded, not bucketed. One row per
        distinct category_id seen that day, in first-seen order.
        """
        expenses = self._store.list_expenses_by_date(date)

        totals: "OrderedDict[str, Decimal]" = OrderedDict()
        for expense in expenses:
            if not expense.category_id:
                continue
            totals[expense.category_id] = (
                totals.get(expense.category_id, Decimal("0")) + to_decimal(expense.amount)
            )

        resolved = {
            e.category_id: e.category for e in expenses if e.category_id
        }
        return [
            CategoryTotal(
                category_id=category_id,
                total=total,
                category=resolved.get(category_id),
            )
            for category_id, total in totals.items()
        ]

    def monthly_totals(self, year: int, month: int) -> list[DateTotal]:
        """
        Sparse daily series for a month (1-based).

        Restricted to [YYYY-MM-01, YYYY-MM-<last day>]; days without
        expenses do not appear. Sorted ascending by date.
        """
        start, end = month_bounds(year, month)
        by_date: dict[str, Decimal] = {}
        for expense in self._store.list_expenses_by_date_range(start, end):
            by_date[expense.date] = by_date.get(expense.date, Decimal("0")) + to_decimal(expense.amount)

        return [DateTotal(date=d, total=by_date[d]) for d in sorted(by_date)]

    def weekly_totals(self, date: str) -> list[DateTotal]:
        """
        Dense series for the trailing 7 days ending at and including `date`.

        Always exactly 7 rows (date-6 .. date), ascending, with total 0
        for days without expenses.
        """
        days = [shift_days(date, offset) for offset in range(-(WEEK_LENGTH - 1), 1)]

        by_date = {day: Decimal("0") for day in days}
        for expense in self._store.list_expenses_by_date_range(days[0], days[-1]):
            by_date[expense.date] += to_decimal(expense.amount)

        return [DateTotal(date=day, total=by_date[day]) for day in days]

    def monthly_summary(self, year: int, month: int) -> MonthlySummary:
        """
        Month total, highest-spending day and average per spending day.
        """
        series = self.monthly_totals(year, month)
        if not series:
            return MonthlySummary(year=year, month=month)

        total = sum((row.total for row in series), Decimal("0"))
        # First day wins on ties
        highest = max(series, key=lambda row: row.total)
        return MonthlySummary(
            year=year,
            month=month,
            total=total,
            days_with_spending=len(series),
            highest_day=highest,
            average=total / len(series),
        )
