"""Activity logging package."""

from dailyspend.audit.logger import ActivityLogger, configure_logging

__all__ = ["ActivityLogger", "configure_logging"]
