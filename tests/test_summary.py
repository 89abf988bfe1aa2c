"""Tests for date windows, filtering and aggregation."""

from datetime import date, timedelta

import pytest

from expense_tracker.models.expense import Expense, FilterMode
from expense_tracker.queries import (
    build_summary,
    date_window,
    filter_expenses,
    start_of_month,
    start_of_week,
    total_spending,
    totals_by_category,
)


def make_expense(expense_id, amount, category, day):
    return Expense(id=expense_id, amount=amount, category=category, date=day)


class TestWindows:

    @pytest.mark.parametrize(
        "today, expected",
        [
            (date(2024, 12, 15), date(2024, 12, 15)),  # Sunday
            (date(2024, 12, 16), date(2024, 12, 15)),  # Monday
            (date(2024, 12, 18), date(2024, 12, 15)),  # Wednesday
            (date(2024, 12, 21), date(2024, 12, 15)),  # Saturday
            (date(2025, 1, 2), date(2024, 12, 29)),    # across a year
        ],
    )
    def test_start_of_week_is_sunday(self, today, expected):
        assert start_of_week(today) == expected

    def test_start_of_month(self):
        assert start_of_month(date(2024, 12, 18)) == date(2024, 12, 1)
        assert start_of_month(date(2024, 12, 1)) == date(2024, 12, 1)

    def test_all_has_no_window(self, today):
        assert date_window(FilterMode.ALL, today) == (None, None)

    def test_windows_end_today(self, today):
        assert date_window(FilterMode.WEEK, today) == (date(2024, 12, 15), today)
        assert date_window(FilterMode.MONTH, today) == (date(2024, 12, 1), today)


class TestFilterExpenses:

    def test_week_filter(self, today):
        week_start = start_of_week(today)
        expenses = [
            make_expense(3, 1, "Food", today),
            make_expense(2, 1, "Food", today - timedelta(days=1)),
            make_expense(1, 1, "Food", week_start - timedelta(days=1)),
        ]

        week = filter_expenses(expenses, FilterMode.WEEK, today)
        assert [e.id for e in week] == [3, 2]

        everything = filter_expenses(expenses, FilterMode.ALL, today)
        assert [e.id for e in everything] == [3, 2, 1]

    def test_week_bounds_are_inclusive(self, today):
        expenses = [
            make_expense(2, 1, "Food", start_of_week(today)),
            make_expense(1, 1, "Food", today),
        ]
        assert len(filter_expenses(expenses, FilterMode.WEEK, today)) == 2

    def test_month_filter(self, today):
        expenses = [
            make_expense(4, 1, "Food", today + timedelta(days=1)),
            make_expense(3, 1, "Food", today),
            make_expense(2, 1, "Food", date(2024, 12, 1)),
            make_expense(1, 1, "Food", date(2024, 11, 30)),
        ]
        month = filter_expenses(expenses, FilterMode.MONTH, today)
        assert [e.id for e in month] == [3, 2]

    def test_today_always_matches(self):
        # On the first of the month and on a Sunday the windows are one day long
        for today in (date(2024, 12, 1), date(2024, 12, 15)):
            expenses = [make_expense(1, 1, "Food", today)]
            assert filter_expenses(expenses, FilterMode.WEEK, today) == expenses
            assert filter_expenses(expenses, FilterMode.MONTH, today) == expenses

    def test_all_returns_copy(self, today):
        expenses = [make_expense(1, 1, "Food", today)]
        result = filter_expenses(expenses, FilterMode.ALL, today)
        assert result == expenses
        assert result is not expenses


class TestAggregation:

    def test_totals(self, today):
        expenses = [
            make_expense(3, 10, "Food", today),
            make_expense(2, 5, "Food", today),
            make_expense(1, 20, "Books", today),
        ]
        assert total_spending(expenses) == 35
        assert totals_by_category(expenses) == {"Food": 15, "Books": 20}

    def test_category_order_is_first_appearance(self, today):
        expenses = [
            make_expense(3, 1, "Books", today),
            make_expense(2, 1, "Food", today),
            make_expense(1, 1, "Books", today),
        ]
        assert list(totals_by_category(expenses)) == ["Books", "Food"]

    def test_empty(self):
        assert total_spending([]) == 0
        assert totals_by_category([]) == {}


class TestBuildSummary:

    def test_summary_only_counts_window(self, today):
        expenses = [
            make_expense(3, 10, "Food", today),
            make_expense(2, 5, "Food", date(2024, 12, 2)),
            make_expense(1, 20, "Books", date(2024, 11, 2)),
        ]
        summary = build_summary(expenses, FilterMode.WEEK, today)

        assert summary.filter_label == "This Week"
        assert summary.window_start == date(2024, 12, 15)
        assert summary.window_end == today
        assert [e.id for e in summary.expenses] == [3]
        assert summary.total == 10
        assert summary.by_category == {"Food": 10}
        assert "Books" not in summary.by_category
