"""
CSV Export / Import

Both collections travel in one CSV file (openable in Excel). Each row
carries a `type` column; category rows fill the category columns,
expense rows fill the expense columns, and the rest are left blank:

    type,id,name,color,createdAt,expense_name,amount,details,
    categoryId,categoryName,date,expense_createdAt

Import reads the same layout back and replaces both collections.
"""

import csv
import io
from datetime import date
from typing import Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from dailyspend.errors import TransferError
from dailyspend.models.records import Category, Expense


CSV_HEADER = [
    "type",
    "id",
    "name",
    "color",
    "createdAt",
    "expense_name",
    "amount",
    "details",
    "categoryId",
    "categoryName",
    "date",
    "expense_createdAt",
]


def export_filename(on: Optional[date] = None) -> str:
    """Download name for an export, e.g. daily-spends-export-2024-01-15.csv"""
    return f"daily-spends-export-{(on or date.today()).isoformat()}.csv"


def export_csv(
    categories: Iterable[Category],
    expenses: Iterable[Expense],
) -> str:
    """Serialize both collections to CSV text, categories first."""
    categories = list(categories)
    by_id = {c.id: c for c in categories}

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for category in categories:
        writer.writerow([
            "category",
            category.id,
            category.name,
            category.color,
            category.created_at.isoformat(),
            "", "", "", "", "", "", "",
        ])

    for expense in expenses:
        category = by_id.get(expense.category_id) if expense.category_id else None
        writer.writerow([
            "expense",
            expense.id,
            "", "", "",
            expense.name,
            expense.amount,
            expense.details or "",
            expense.category_id or "",
            category.name if category else "",
            expense.date,
            expense.created_at.isoformat(),
        ])

    return buffer.getvalue()


def import_csv(text: str) -> tuple[list[Category], list[Expense]]:
    """
    Parse an exported CSV back into records.

    Rows with an unknown `type` are skipped. A blank createdAt gets a
    fresh timestamp.

    Raises:
        TransferError: If the header is missing, a row is invalid, an
                       expense links to a category not in the file, or
                       the file holds no category or expense rows
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    if not reader.fieldnames or "type" not in reader.fieldnames:
        raise TransferError("Unsupported file: missing 'type' column")

    categories: list[Category] = []
    expenses: list[Expense] = []
    expense_rows: list[int] = []

    # Data rows start at 2; row 1 is the header
    for row_number, row in enumerate(reader, start=2):
        kind = (row.get("type") or "").strip()
        try:
            if kind == "category":
                categories.append(Category(**_present({
                    "id": row.get("id"),
                    "name": row.get("name"),
                    "color": row.get("color"),
                    "created_at": row.get("createdAt"),
                })))
            elif kind == "expense":
                expenses.append(Expense(**_present({
                    "id": row.get("id"),
                    "name": row.get("expense_name"),
                    "amount": row.get("amount"),
                    "details": row.get("details"),
                    "category_id": row.get("categoryId"),
                    "date": row.get("date"),
                    "created_at": row.get("expense_createdAt"),
                })))
                expense_rows.append(row_number)
        except PydanticValidationError as e:
            raise TransferError(f"Invalid {kind} in row {row_number}: {e.errors()[0]['msg']}")

    if not categories and not expenses:
        raise TransferError("No rows found in CSV")

    # Category rows may follow expense rows, so links are checked last
    known = {c.id for c in categories}
    for row_number, expense in zip(expense_rows, expenses):
        if expense.category_id and expense.category_id not in known:
            raise TransferError(
                f"Invalid expense in row {row_number}: "
                f"unknown category {expense.category_id}"
            )

    return categories, expenses


def _present(fields: dict[str, Optional[str]]) -> dict[str, str]:
    """Drop blank cells so model defaults apply."""
    return {k: v for k, v in fields.items() if v is not None and v.strip()}
