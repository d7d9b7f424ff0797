"""
Abstract Record Store Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Run against an in-memory store (server mode, tests)
2. Persist to local JSON collections without changing callers
3. Keep aggregation and presentation decoupled from storage

The store is the sole source of truth for categories and expenses.
Every mutation is visible to the very next read; there is no write
buffering and no caching of derived values.
"""

from abc import ABC, abstractmethod
from typing import Optional

from dailyspend.errors import StorageError, ValidationError
from dailyspend.models.records import (
    Category,
    Expense,
    ExpenseCreate,
    ExpenseWithCategory,
)


class RecordStoreInterface(ABC):
    """
    Abstract interface for the category and expense collections.

    Any storage implementation must implement these methods.
    """

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """
        List all categories.

        Returns:
            Categories in a stable order (insertion order)
        """
        pass

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[Category]:
        """
        Retrieve a category by its ID.

        Returns:
            The category if found, None otherwise
        """
        pass

    @abstractmethod
    def create_category(self, name: Optional[str], color: Optional[str]) -> Category:
        """
        Create a category.

        Args:
            name: Display name (required, non-empty)
            color: Hex color code (required, non-empty)

        Returns:
            The created category with generated id and created_at

        Raises:
            ValidationError: If name or color is empty
        """
        pass

    @abstractmethod
    def delete_category(self, category_id: str) -> int:
        """
        Delete a category and detach every expense referencing it.

        Expenses are never deleted here; their category reference is
        cleared instead. Unknown ids are a no-op.

        Returns:
            Number of expenses that were detached
        """
        pass

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_expenses(self) -> list[Expense]:
        """List all expenses."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: str) -> Optional[Expense]:
        """
        Retrieve an expense by its ID.

        Returns:
            The expense if found, None otherwise
        """
        pass

    @abstractmethod
    def list_expenses_by_date(self, date: str) -> list[ExpenseWithCategory]:
        """
        List expenses attributed to exactly one date.

        Args:
            date: Canonical YYYY-MM-DD string

        Returns:
            Matching expenses, each with its resolved category,
            ordered by created_at
        """
        pass

    @abstractmethod
    def list_expenses_by_date_range(
        self,
        start_date: str,
        end_date: str,
    ) -> list[ExpenseWithCategory]:
        """
        List expenses with start_date <= date <= end_date.

        Comparison is on the canonical date strings.

        Returns:
            Matching expenses with resolved categories, ordered by
            (date, created_at)
        """
        pass

    @abstractmethod
    def create_expense(self, data: ExpenseCreate) -> Expense:
        """
        Create an expense.

        Args:
            data: name, amount and date are required; details and
                  category_id default to None

        Returns:
            The created expense

        Raises:
            ValidationError: If a required field is empty or missing,
                             or category_id does not reference an
                             existing category
        """
        pass

    @abstractmethod
    def delete_expense(self, expense_id: str) -> bool:
        """
        Delete an expense by ID. Unknown ids are a no-op.

        Returns:
            True if an expense was removed
        """
        pass

    # -------------------------------------------------------------------------
    # Bulk
    # -------------------------------------------------------------------------

    @abstractmethod
    def replace_all(
        self,
        categories: list[Category],
        expenses: list[Expense],
    ) -> None:
        """
        Replace both collections wholesale (used by CSV import).

        Raises:
            ValidationError: If ids are duplicated within a collection
        """
        pass


__all__ = [
    "RecordStoreInterface",
    "StorageError",
    "ValidationError",
]
