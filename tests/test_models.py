"""
Tests for Expense Tracker models

Test strategy:
1. Unit tests for models, validation and summary queries
2. Integration tests against a temporary SQLite database
3. A fixed clock wherever dates matter
"""

from datetime import date

import pytest

from expense_tracker.models.expense import (
    Expense,
    ExpenseForm,
    ExpenseSummary,
    FilterMode,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestExpenseModels:
    """Tests for expense-related Pydantic models."""

    def test_expense_creation(self):
        """Test Expense model creation."""
        expense = Expense(
            id=1,
            amount=12.5,
            category="Food",
            note="lunch",
            date=date(2024, 12, 18),
        )
        assert expense.amount == 12.5
        assert expense.category == "Food"
        assert expense.date_iso == "2024-12-18"

    def test_expense_parses_iso_date(self):
        expense = Expense(id=1, amount=1, category="Food", date="2024-12-01")
        assert expense.date == date(2024, 12, 1)

    def test_expense_strips_whitespace(self):
        """Test that whitespace is stripped from category and note."""
        expense = Expense(
            id=1, amount=3, category="  Books  ", note="  used  ", date=date(2024, 1, 1)
        )
        assert expense.category == "Books"
        assert expense.note == "used"

    def test_expense_blank_note_is_absent(self):
        expense = Expense(id=1, amount=3, category="Books", note="   ", date=date(2024, 1, 1))
        assert expense.note is None

    def test_expense_rejects_non_positive_amount(self):
        """Test that zero and negative amounts are rejected."""
        with pytest.raises(ValueError):
            Expense(id=1, amount=0, category="Food", date=date(2024, 1, 1))
        with pytest.raises(ValueError):
            Expense(id=1, amount=-5, category="Food", date=date(2024, 1, 1))

    def test_expense_rejects_blank_category(self):
        with pytest.raises(ValueError):
            Expense(id=1, amount=5, category="   ", date=date(2024, 1, 1))


class TestExpenseForm:
    """Tests for the raw form model."""

    def test_empty_form_is_not_editing(self):
        form = ExpenseForm()
        assert form.is_editing is False
        assert form.submit_label == "Add Expense"

    def test_form_from_expense(self):
        expense = Expense(id=3, amount=12.5, category="Food", note=None, date=date(2024, 1, 1))
        form = ExpenseForm.from_expense(expense)
        assert form.amount == "12.5"
        assert form.category == "Food"
        assert form.note == ""
        assert form.editing_id == 3
        assert form.submit_label == "Save Changes"


class TestFilterMode:
    """Tests for the filter mode enum."""

    def test_values(self):
        assert FilterMode("all") is FilterMode.ALL
        assert FilterMode("week") is FilterMode.WEEK
        assert FilterMode("month") is FilterMode.MONTH

    def test_labels(self):
        assert FilterMode.ALL.label == "All"
        assert FilterMode.WEEK.label == "This Week"
        assert FilterMode.MONTH.label == "This Month"

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValueError):
            FilterMode("year")


class TestSummaryAndValidationModels:

    def test_empty_summary(self):
        summary = ExpenseSummary(filter_mode=FilterMode.MONTH)
        assert summary.is_empty is True
        assert summary.count == 0
        assert summary.total == 0
        assert summary.filter_label == "This Month"

    def test_validation_result_error_count(self):
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(field="amount", issue_type="missing", message="x"),
                ValidationIssue(field="category", issue_type="missing", message="y"),
            ],
        )
        assert result.error_count == 2


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_CREATED,
            description="Test expense created",
        )
        assert event.event_type == AuditEventType.EXPENSE_CREATED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.expense_created(
            expense_id=7,
            amount=12.5,
            category="Food",
            expense_date="2024-12-18",
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "expense_created"
        assert log_dict["expense_id"] == 7
        assert log_dict["details"]["category"] == "Food"
        assert log_dict["is_user_action"] is True

    def test_audit_event_builder_store_error(self):
        event = AuditEventBuilder.store_error(
            operation="load",
            error_message="disk I/O error",
        )
        assert event.event_type == AuditEventType.STORE_ERROR
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk I/O error"
        assert event.details["operation"] == "load"

    def test_audit_event_builder_delete_not_found(self):
        event = AuditEventBuilder.expense_deleted(expense_id=9, found=False)
        assert event.details["found"] is False
        assert "already absent" in event.description


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
