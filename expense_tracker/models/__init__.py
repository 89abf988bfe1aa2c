"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.expense import (
    CancelEdit,
    Command,
    Delete,
    Expense,
    ExpenseForm,
    ExpenseSummary,
    FilterMode,
    SetFilter,
    StartEdit,
    Submit,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "Expense",
    "ExpenseForm",
    "ExpenseSummary",
    "FilterMode",
    "ValidationIssue",
    "ValidationResult",
    # Commands
    "CancelEdit",
    "Command",
    "Delete",
    "SetFilter",
    "StartEdit",
    "Submit",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
