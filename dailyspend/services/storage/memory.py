"""
In-Memory Record Store

Keeps both collections in process. This is the "server" store: records
live as long as the process does. Each instance is independent, so tests
construct a fresh one per case.
"""

from typing import Optional

from dailyspend.models.records import Category, Expense
from dailyspend.services.storage.collection import CollectionRecordStore


class InMemoryRecordStore(CollectionRecordStore):
    """Record store backed by two plain lists."""

    def __init__(
        self,
        categories: Optional[list[Category]] = None,
        expenses: Optional[list[Expense]] = None,
    ):
        self._categories: list[Category] = list(categories or [])
        self._expenses: list[Expense] = list(expenses or [])

    def _load_categories(self) -> list[Category]:
        return list(self._categories)

    def _save_categories(self, categories: list[Category]) -> None:
        self._categories = list(categories)

    def _load_expenses(self) -> list[Expense]:
        return list(self._expenses)

    def _save_expenses(self, expenses: list[Expense]) -> None:
        self._expenses = list(expenses)
