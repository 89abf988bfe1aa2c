"""
Summary Queries

Deterministic filtering and aggregation over the in-memory expense list.

Everything here is a pure function of (expenses, filter mode, today):
no storage access, no clock reads. The caller passes `today` in, which
keeps week and month windows reproducible in tests.

Windows are inclusive on both ends and always end on today:
- week: from the most recent Sunday on or before today
- month: from the first day of the current month
- all: no window, the list is returned unchanged
"""

from datetime import date, timedelta
from typing import Iterable, Optional

from expense_tracker.models.expense import Expense, ExpenseSummary, FilterMode


def start_of_week(today: date) -> date:
    """Most recent Sunday on or before `today`."""
    # isoweekday: Monday=1 .. Sunday=7, so Sunday maps to 0 days back
    return today - timedelta(days=today.isoweekday() % 7)


def start_of_month(today: date) -> date:
    return today.replace(day=1)


def date_window(
    mode: FilterMode,
    today: date,
) -> tuple[Optional[date], Optional[date]]:
    """
    Inclusive (start, end) bounds for a filter mode.

    Returns (None, None) for FilterMode.ALL.
    """
    if mode == FilterMode.WEEK:
        return start_of_week(today), today
    if mode == FilterMode.MONTH:
        return start_of_month(today), today
    return None, None


def filter_expenses(
    expenses: list[Expense],
    mode: FilterMode,
    today: date,
) -> list[Expense]:
    """Expenses whose date falls inside the window of `mode`, order kept."""
    start, end = date_window(mode, today)
    if start is None:
        return list(expenses)

    return [e for e in expenses if start <= e.date <= end]


def total_spending(expenses: Iterable[Expense]) -> float:
    """Sum of amounts; 0 for no expenses."""
    return sum((e.amount for e in expenses), 0.0)


def totals_by_category(expenses: Iterable[Expense]) -> dict[str, float]:
    """
    Amount per category in order of first appearance.

    Categories without expenses are absent, never present with 0.
    """
    totals: dict[str, float] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount
    return totals


def build_summary(
    expenses: list[Expense],
    mode: FilterMode,
    today: date,
) -> ExpenseSummary:
    """Bundle the filtered list and its aggregates for the screen."""
    start, end = date_window(mode, today)
    filtered = filter_expenses(expenses, mode, today)

    return ExpenseSummary(
        filter_mode=mode,
        window_start=start,
        window_end=end,
        expenses=filtered,
        total=total_spending(filtered),
        by_category=totals_by_category(filtered),
    )
