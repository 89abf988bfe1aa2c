"""Summary query package."""

from expense_tracker.queries.summary import (
    build_summary,
    date_window,
    filter_expenses,
    start_of_month,
    start_of_week,
    total_spending,
    totals_by_category,
)

__all__ = [
    "build_summary",
    "date_window",
    "filter_expenses",
    "start_of_month",
    "start_of_week",
    "total_spending",
    "totals_by_category",
]
