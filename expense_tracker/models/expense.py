"""
Core Data Models for Expense Tracker

These models define the schemas for all data flowing between the store,
the view model and the screen. They are designed to:
1. Enforce the record invariants at runtime (positive amount, non-empty category)
2. Keep the raw form input separate from validated records
3. Give the presentation layer one typed summary payload

Dates are plain calendar dates; the store keeps them as ISO "YYYY-MM-DD" text.
"""

import datetime
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class FilterMode(str, Enum):
    """
    Time window used for the summary views.

    The filter never touches stored data, only what is derived from it.
    """
    ALL = "all"
    WEEK = "week"
    MONTH = "month"

    @property
    def label(self) -> str:
        """Display label shown next to the total."""
        return _FILTER_LABELS[self]


_FILTER_LABELS = {
    FilterMode.ALL: "All",
    FilterMode.WEEK: "This Week",
    FilterMode.MONTH: "This Month",
}

# Longest category and note the store accepts
MAX_CATEGORY_LENGTH = 100
MAX_NOTE_LENGTH = 500


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    One persisted expense entry.

    `id` and `date` are assigned when the record is created and never
    change afterwards. Only amount, category and note are editable.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: int = Field(
        ...,
        ge=1,
        description="Store-assigned identifier, never reused"
    )
    amount: float = Field(
        ...,
        gt=0,
        description="Amount spent"
    )
    category: str = Field(
        ...,
        min_length=1,
        max_length=MAX_CATEGORY_LENGTH,
        description="Free-text category, e.g. Food or Books"
    )
    note: Optional[str] = Field(
        default=None,
        max_length=MAX_NOTE_LENGTH,
        description="Optional free-text note"
    )
    date: datetime.date = Field(
        ...,
        description="Local calendar date the expense was recorded"
    )

    @field_validator('note')
    @classmethod
    def blank_note_is_absent(cls, v: Optional[str]) -> Optional[str]:
        """A note that is empty after trimming is stored as absent."""
        return v or None

    @property
    def date_iso(self) -> str:
        return self.date.isoformat()


# =============================================================================
# FORM MODEL
# =============================================================================

class ExpenseForm(BaseModel):
    """
    Raw input of the add/edit form.

    Values are kept exactly as typed; parsing happens on submit.
    When `editing_id` is set the form saves over that record instead
    of creating a new one.
    """

    amount: str = ""
    category: str = ""
    note: str = ""
    editing_id: Optional[int] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def submit_label(self) -> str:
        return "Save Changes" if self.is_editing else "Add Expense"

    @classmethod
    def from_expense(cls, expense: Expense) -> "ExpenseForm":
        """Prefill the form with an existing record for editing."""
        return cls(
            amount=str(expense.amount),
            category=expense.category,
            note=expense.note or "",
            editing_id=expense.id,
        )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a submitted form.

    When valid, `amount`, `category` and `note` hold the parsed and
    normalized values ready to be written to the store.
    """

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    amount: Optional[float] = None
    category: Optional[str] = None
    note: Optional[str] = None

    @property
    def error_count(self) -> int:
        return len(self.issues)


# =============================================================================
# COMMANDS
# =============================================================================

class Submit(BaseModel):
    """Save the form: create when `expense_id` is None, update otherwise."""
    kind: Literal["submit"] = "submit"
    amount: str
    category: str
    note: str = ""
    expense_id: Optional[int] = None


class Delete(BaseModel):
    kind: Literal["delete"] = "delete"
    expense_id: int


class SetFilter(BaseModel):
    kind: Literal["set_filter"] = "set_filter"
    mode: FilterMode


class StartEdit(BaseModel):
    kind: Literal["start_edit"] = "start_edit"
    expense_id: int


class CancelEdit(BaseModel):
    kind: Literal["cancel_edit"] = "cancel_edit"


Command = Union[Submit, Delete, SetFilter, StartEdit, CancelEdit]


# =============================================================================
# SUMMARY MODEL
# =============================================================================

class ExpenseSummary(BaseModel):
    """
    Everything the screen needs to render the summary box and the list.

    `window_start`/`window_end` are None for the `all` filter.
    """

    filter_mode: FilterMode
    window_start: Optional[datetime.date] = None
    window_end: Optional[datetime.date] = None

    expenses: list[Expense] = Field(default_factory=list)
    total: float = Field(default=0.0, ge=0)
    by_category: dict[str, float] = Field(default_factory=dict)

    @property
    def filter_label(self) -> str:
        return self.filter_mode.label

    @property
    def count(self) -> int:
        return len(self.expenses)

    @property
    def is_empty(self) -> bool:
        return not self.expenses
