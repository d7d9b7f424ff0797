"""
Shared Record Store Logic

Both backends keep two flat collections and differ only in where those
collections live. All store semantics (validation, enrichment, range
filtering and detach-on-delete) are implemented once here on top of four
load/save hooks, so the backends cannot drift apart.
"""

from abc import abstractmethod
from typing import Iterable, Optional, Union

import structlog
from pydantic import ValidationError as PydanticValidationError

from dailyspend.errors import ValidationError
from dailyspend.models.records import (
    Category,
    Expense,
    ExpenseCreate,
    ExpenseWithCategory,
)
from dailyspend.services.storage.interface import RecordStoreInterface


logger = structlog.get_logger(__name__)


DEFAULT_CATEGORIES: list[tuple[str, str]] = [
    ("Food & Dining", "#EF4444"),
    ("Transportation", "#3B82F6"),
    ("Shopping", "#10B981"),
    ("Entertainment", "#F59E0B"),
    ("Bills & Utilities", "#8B5CF6"),
    ("Healthcare", "#EC4899"),
]


def _first_error_message(error: PydanticValidationError) -> str:
    errors = error.errors()
    if not errors:
        return str(error)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else first.get("msg", "")


def _require(value: Optional[str], field: str, label: str) -> str:
    """Return the stripped value or raise ValidationError if it is empty."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{label} is required", field=field)
    return text


class CollectionRecordStore(RecordStoreInterface):
    """
    Record store over two whole-collection load/save hooks.

    Subclasses only decide where the lists live.
    """

    # -------------------------------------------------------------------------
    # Backend hooks
    # -------------------------------------------------------------------------

    @abstractmethod
    def _load_categories(self) -> list[Category]:
        pass

    @abstractmethod
    def _save_categories(self, categories: list[Category]) -> None:
        pass

    @abstractmethod
    def _load_expenses(self) -> list[Expense]:
        pass

    @abstractmethod
    def _save_expenses(self, expenses: list[Expense]) -> None:
        pass

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def list_categories(self) -> list[Category]:
        return list(self._load_categories())

    def get_category(self, category_id: str) -> Optional[Category]:
        for category in self._load_categories():
            if category.id == category_id:
                return category
        return None

    def create_category(self, name: Optional[str], color: Optional[str]) -> Category:
        name = _require(name, "name", "Category name")
        color = _require(color, "color", "Category color")

        try:
            category = Category(name=name, color=color)
        except PydanticValidationError as e:
            raise ValidationError(_first_error_message(e))

        categories = self._load_categories()
        categories.append(category)
        self._save_categories(categories)

        logger.debug("category_stored", category_id=category.id)
        return category

    def delete_category(self, category_id: str) -> int:
        categories = self._load_categories()
        remaining = [c for c in categories if c.id != category_id]
        if len(remaining) == len(categories):
            return 0

        self._save_categories(remaining)

        # Detach, never cascade: the expenses themselves survive.
        detached = 0
        expenses = []
        for expense in self._load_expenses():
            if expense.category_id == category_id:
                expense = expense.model_copy(update={"category_id": None})
                detached += 1
            expenses.append(expense)
        if detached:
            self._save_expenses(expenses)

        logger.debug(
            "category_removed",
            category_id=category_id,
            detached_expenses=detached,
        )
        return detached

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    def list_expenses(self) -> list[Expense]:
        return list(self._load_expenses())

    def get_expense(self, expense_id: str) -> Optional[Expense]:
        for expense in self._load_expenses():
            if expense.id == expense_id:
                return expense
        return None

    def list_expenses_by_date(self, date: str) -> list[ExpenseWithCategory]:
        matches = [e for e in self._load_expenses() if e.date == date]
        matches.sort(key=lambda e: e.created_at)
        return self._with_categories(matches)

    def list_expenses_by_date_range(
        self,
        start_date: str,
        end_date: str,
    ) -> list[ExpenseWithCategory]:
        matches = [
            e for e in self._load_expenses()
            if start_date <= e.date <= end_date
        ]
        matches.sort(key=lambda e: (e.date, e.created_at))
        return self._with_categories(matches)

    def create_expense(self, data: ExpenseCreate) -> Expense:
        name = _require(data.name, "name", "Expense name")
        amount = _require(data.amount, "amount", "Amount")
        date = _require(data.date, "date", "Date")

        category_id = (data.category_id or "").strip() or None
        if category_id is not None and self.get_category(category_id) is None:
            raise ValidationError(
                f"Category does not exist: {category_id}",
                field="category_id",
            )

        try:
            expense = Expense(
                name=name,
                amount=amount,
                details=data.details,
                category_id=category_id,
                date=date,
            )
        except PydanticValidationError as e:
            field = None
            errors = e.errors()
            if errors and errors[0].get("loc"):
                field = str(errors[0]["loc"][0])
            raise ValidationError(_first_error_message(e), field=field)

        expenses = self._load_expenses()
        expenses.append(expense)
        self._save_expenses(expenses)

        logger.debug("expense_stored", expense_id=expense.id, date=expense.date)
        return expense

    def delete_expense(self, expense_id: str) -> bool:
        expenses = self._load_expenses()
        remaining = [e for e in expenses if e.id != expense_id]
        if len(remaining) == len(expenses):
            return False
        self._save_expenses(remaining)
        return True

    # -------------------------------------------------------------------------
    # Bulk
    # -------------------------------------------------------------------------

    def replace_all(
        self,
        categories: list[Category],
        expenses: list[Expense],
    ) -> None:
        self._check_unique(categories, "category")
        self._check_unique(expenses, "expense")
        self._save_categories(list(categories))
        self._save_expenses(list(expenses))
        logger.info(
            "collections_replaced",
            categories=len(categories),
            expenses=len(expenses),
        )

    def seed_default_categories(self) -> list[Category]:
        """
        Create the default categories if the store has none.

        Returns the categories created (empty if any already existed).
        """
        if self._load_categories():
            return []
        return [self.create_category(name, color) for name, color in DEFAULT_CATEGORIES]

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _with_categories(self, expenses: Iterable[Expense]) -> list[ExpenseWithCategory]:
        """Attach the currently existing category (or None) to each expense."""
        by_id = {c.id: c for c in self._load_categories()}
        return [
            ExpenseWithCategory(
                **expense.model_dump(),
                category=by_id.get(expense.category_id) if expense.category_id else None,
            )
            for expense in expenses
        ]

    @staticmethod
    def _check_unique(records: Iterable[Union[Category, Expense]], kind: str) -> None:
        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                raise ValidationError(f"Duplicate {kind} id: {record.id}", field="id")
            seen.add(record.id)
