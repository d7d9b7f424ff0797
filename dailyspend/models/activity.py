"""
Activity Models for Daily Spends

Every mutation of the record store is described by an ActivityEvent and
written to the structured log. Events are not persisted.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from dailyspend.models.records import Category, Expense, utc_now


class ActivityEventType(str, Enum):
    """Types of events we log."""
    # Categories
    CATEGORY_CREATED = "category_created"
    CATEGORY_DELETED = "category_deleted"

    # Expenses
    EXPENSE_CREATED = "expense_created"
    EXPENSE_DELETED = "expense_deleted"

    # Bulk transfer
    DATA_EXPORTED = "data_exported"
    DATA_IMPORTED = "data_imported"

    # Rejected input
    VALIDATION_FAILED = "validation_failed"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single activity event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )
    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'category', 'expense')"
    )
    entity_id: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    def to_log_dict(self) -> dict[str, Any]:
        """Flatten to a dict suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
        }


class ActivityEventBuilder:
    """Factory helpers so call sites don't assemble events by hand."""

    @staticmethod
    def category_created(category: Category) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.CATEGORY_CREATED,
            entity_type="category",
            entity_id=category.id,
            description=f"Category '{category.name}' created",
            details={"name": category.name, "color": category.color},
        )

    @staticmethod
    def category_deleted(category_id: str, detached_expenses: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.CATEGORY_DELETED,
            entity_type="category",
            entity_id=category_id,
            description="Category deleted",
            details={"detached_expenses": detached_expenses},
        )

    @staticmethod
    def expense_created(expense: Expense) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_CREATED,
            entity_type="expense",
            entity_id=expense.id,
            description=f"Expense '{expense.name}' recorded",
            details={
                "amount": expense.amount,
                "date": expense.date,
                "category_id": expense.category_id,
            },
        )

    @staticmethod
    def expense_deleted(expense_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense deleted",
        )

    @staticmethod
    def data_exported(categories: int, expenses: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.DATA_EXPORTED,
            description="Data exported to CSV",
            details={"categories": categories, "expenses": expenses},
        )

    @staticmethod
    def data_imported(categories: int, expenses: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.DATA_IMPORTED,
            severity=ActivitySeverity.WARNING,
            description="Data imported from CSV, existing records replaced",
            details={"categories": categories, "expenses": expenses},
        )

    @staticmethod
    def validation_failed(
        operation: str,
        message: str,
        field: Optional[str] = None,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.VALIDATION_FAILED,
            severity=ActivitySeverity.WARNING,
            description=f"Rejected {operation}: {message}"[:500],
            details={"operation": operation, "field": field},
        )
