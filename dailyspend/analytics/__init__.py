"""Aggregation and calendar package."""

from dailyspend.analytics.aggregation import AggregationEngine
from dailyspend.analytics.calendar_grid import (
    GRID_CELLS,
    generate_month_grid,
    month_grid_weeks,
)

__all__ = [
    "AggregationEngine",
    "GRID_CELLS",
    "generate_month_grid",
    "month_grid_weeks",
]
