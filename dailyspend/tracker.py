"""
Expense Tracker Facade

This module ties together the record store, the aggregation engine, the
calendar grid and CSV transfer behind one typed object with a method per
operation the UI and HTTP layers need.

DESIGN DECISION: There is no process-wide store. A tracker owns the
store handle it was given, so every test (and every app instance) can
run against its own fresh store.

The facade is also the entry path for expenses: amount text is parsed
and checked here (positive, finite) before the store ever sees it.
"""

from decimal import Decimal
from typing import Optional, Union

import structlog

from dailyspend.analytics import AggregationEngine, generate_month_grid
from dailyspend.audit import ActivityLogger, configure_logging
from dailyspend.config import Settings, StorageSettings, get_settings
from dailyspend.errors import ValidationError
from dailyspend.models.records import (
    Category,
    Expense,
    ExpenseCreate,
    ExpenseWithCategory,
)
from dailyspend.models.reports import (
    CalendarCell,
    CategoryTotal,
    DateTotal,
    MonthlySummary,
)
from dailyspend.services.storage import (
    CollectionRecordStore,
    InMemoryRecordStore,
    JsonFileRecordStore,
    RecordStoreInterface,
)
from dailyspend.services.transfer import export_csv, import_csv
from dailyspend.utils.money import normalize_amount, parse_amount


logger = structlog.get_logger(__name__)


class ExpenseTracker:
    """
    Typed request surface over one record store.

    Reads are answered from the store's current contents; nothing is
    cached between calls.
    """

    def __init__(
        self,
        store: RecordStoreInterface,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._store = store
        self._engine = AggregationEngine(store)
        self._activity = activity_logger or ActivityLogger()

    @property
    def store(self) -> RecordStoreInterface:
        return self._store

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def list_categories(self) -> list[Category]:
        return self._store.list_categories()

    def create_category(self, name: Optional[str], color: Optional[str]) -> Category:
        """
        Create a category.

        Raises:
            ValidationError: If name or color is empty
        """
        try:
            category = self._store.create_category(name, color)
        except ValidationError as e:
            self._activity.log_validation_failed("create_category", e.message, e.field)
            raise
        self._activity.log_category_created(category)
        return category

    def delete_category(self, category_id: str) -> None:
        """Delete a category, detaching its expenses. Unknown ids are a no-op."""
        if self._store.get_category(category_id) is None:
            return
        detached = self._store.delete_category(category_id)
        self._activity.log_category_deleted(category_id, detached)

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    def list_expenses(
        self,
        date: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Union[list[Expense], list[ExpenseWithCategory]]:
        """
        List expenses.

        - date given: exact-date filter, enriched with categories
        - start_date and end_date given: inclusive range, enriched
        - otherwise: every expense, as stored
        """
        if date:
            return self._store.list_expenses_by_date(date)
        if start_date and end_date:
            return self._store.list_expenses_by_date_range(start_date, end_date)
        return self._store.list_expenses()

    def get_expense(self, expense_id: str) -> Optional[Expense]:
        return self._store.get_expense(expense_id)

    def create_expense(
        self,
        name: Optional[str],
        amount: Union[str, int, float, None],
        date: Optional[str],
        details: Optional[str] = None,
        category_id: Optional[str] = None,
    ) -> Expense:
        """
        Record an expense.

        The amount must parse to a positive, finite number; it is stored
        as an exact decimal string.

        Raises:
            ValidationError: If name, amount or date is missing/invalid,
                             or category_id is unknown
        """
        try:
            canonical_amount = normalize_amount(parse_amount(amount))
            expense = self._store.create_expense(ExpenseCreate(
                name=name,
                amount=canonical_amount,
                details=details,
                category_id=category_id,
                date=date,
            ))
        except ValidationError as e:
            self._activity.log_validation_failed("create_expense", e.message, e.field)
            raise
        self._activity.log_expense_created(expense)
        return expense

    def delete_expense(self, expense_id: str) -> None:
        """Delete an expense. Unknown ids are a no-op."""
        if self._store.delete_expense(expense_id):
            self._activity.log_expense_deleted(expense_id)

    # -------------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------------

    def daily_total(self, date: str) -> Decimal:
        return self._engine.daily_total(date)

    def category_totals(self, date: str) -> list[CategoryTotal]:
        return self._engine.category_totals(date)

    def monthly_totals(self, year: int, month: int) -> list[DateTotal]:
        """Sparse daily series; month is 1-based."""
        return self._engine.monthly_totals(year, month)

    def weekly_totals(self, date: str) -> list[DateTotal]:
        """Dense 7-day series ending at date."""
        return self._engine.weekly_totals(date)

    def monthly_summary(self, year: int, month: int) -> MonthlySummary:
        return self._engine.monthly_summary(year, month)

    def month_grid(
        self,
        year: int,
        month_index: int,
        today: Optional[str] = None,
    ) -> list[CalendarCell]:
        """42-cell calendar grid; month_index is zero-based."""
        return generate_month_grid(year, month_index, today=today)

    # -------------------------------------------------------------------------
    # CSV transfer
    # -------------------------------------------------------------------------

    def export_csv(self) -> str:
        categories = self._store.list_categories()
        expenses = self._store.list_expenses()
        text = export_csv(categories, expenses)
        self._activity.log_data_exported(len(categories), len(expenses))
        return text

    def import_csv(self, text: str) -> tuple[int, int]:
        """
        Replace both collections with the contents of an exported CSV.

        Returns:
            (categories_imported, expenses_imported)

        Raises:
            TransferError: If the file holds no usable rows, a row is
                           invalid, or an expense links to an unknown category
        """
        categories, expenses = import_csv(text)
        self._store.replace_all(categories, expenses)
        self._activity.log_data_imported(len(categories), len(expenses))
        return len(categories), len(expenses)


def build_store(settings: Optional[StorageSettings] = None) -> RecordStoreInterface:
    """Create the record store selected by configuration."""
    settings = settings or get_settings().storage
    if settings.backend == "memory":
        return InMemoryRecordStore()
    return JsonFileRecordStore(settings=settings)


def create_app_components(
    settings: Optional[Settings] = None,
    store: Optional[RecordStoreInterface] = None,
) -> tuple[ExpenseTracker, RecordStoreInterface]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (defaults to get_settings())
        store: Pre-built store; when None one is built from settings

    Returns:
        (tracker, store)
    """
    settings = settings or get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    configure_logging(app_settings.log_level, app_settings.json_logs)

    if store is None:
        store = build_store(storage_settings)
    if storage_settings.seed_default_categories and isinstance(store, CollectionRecordStore):
        seeded = store.seed_default_categories()
        if seeded:
            logger.info("default_categories_seeded", count=len(seeded))

    tracker = ExpenseTracker(store, ActivityLogger())
    logger.info(
        "tracker_ready",
        backend=type(store).__name__,
        environment=app_settings.app_environment,
    )
    return tracker, store
