"""
Activity Logger

DESIGN DECISION: Every mutation of the record store is logged as a
structured event. This provides:
1. Traceability of what was added, deleted or imported
2. Debugging capability
3. Visibility into rejected input

The activity logger writes to the structured local log only; events are
not persisted.
"""

import logging
import sys
from typing import Optional

import structlog

from dailyspend.models.activity import ActivityEvent, ActivityEventBuilder
from dailyspend.models.records import Category, Expense


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of the standard library logger.

    Call once at startup (the factory and the Streamlit app do).
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class ActivityLogger:
    """Central activity logging service."""

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self._logger = logger or structlog.get_logger("dailyspend.activity")

    def log(self, event: ActivityEvent) -> None:
        """Log an activity event at the level matching its severity."""
        log_dict = event.to_log_dict()
        severity = event.severity.value

        if severity == "error":
            self._logger.error("activity_event", **log_dict)
        elif severity == "warning":
            self._logger.warning("activity_event", **log_dict)
        elif severity == "debug":
            self._logger.debug("activity_event", **log_dict)
        else:
            self._logger.info("activity_event", **log_dict)

    def log_category_created(self, category: Category) -> None:
        self.log(ActivityEventBuilder.category_created(category))

    def log_category_deleted(self, category_id: str, detached_expenses: int) -> None:
        self.log(ActivityEventBuilder.category_deleted(category_id, detached_expenses))

    def log_expense_created(self, expense: Expense) -> None:
        self.log(ActivityEventBuilder.expense_created(expense))

    def log_expense_deleted(self, expense_id: str) -> None:
        self.log(ActivityEventBuilder.expense_deleted(expense_id))

    def log_data_exported(self, categories: int, expenses: int) -> None:
        self.log(ActivityEventBuilder.data_exported(categories, expenses))

    def log_data_imported(self, categories: int, expenses: int) -> None:
        self.log(ActivityEventBuilder.data_imported(categories, expenses))

    def log_validation_failed(
        self,
        operation: str,
        message: str,
        field: Optional[str] = None,
    ) -> None:
        self.log(ActivityEventBuilder.validation_failed(operation, message, field))
