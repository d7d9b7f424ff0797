"""
Daily Spends - Source Package

A personal daily-expense tracker: record expenses, tag them with
user-defined categories, and view totals by day, week and month.

DESIGN PRINCIPLES:
1. Amounts are exact decimal strings at rest
2. Aggregates are always derived, never stored
3. Deleting a category detaches its expenses, never deletes them
4. Storage layer is swappable (in-memory or local JSON files)
"""

__version__ = "1.0.0"
__author__ = "Daily Spends Team"
