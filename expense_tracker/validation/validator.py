"""
Expense Form Validation

Turns the raw strings typed into the form into values that can be
written to the store.

RULES:
- Amount is read like a typed number: the longest numeric prefix counts,
  so "12.50" and "12.5 dollars" both give 12.5. Anything that does not
  start with a number, or is not finite, or is not above zero is rejected.
- Category is trimmed, must not be empty and must fit the store.
- Note is trimmed; an empty note becomes absent; a long note is rejected.

Validation NEVER writes anything. A rejected form leaves the store untouched.
"""

import math
import re
from typing import Optional

from expense_tracker.models.expense import (
    MAX_CATEGORY_LENGTH,
    MAX_NOTE_LENGTH,
    ValidationIssue,
    ValidationResult,
)


_NUMBER_PREFIX = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)


def parse_amount(raw: str) -> Optional[float]:
    """
    Parse the leading number of `raw`.

    Returns None when no number can be read or the value is not finite.
    The sign is kept, positivity is checked by the validator.
    """
    if raw is None:
        return None

    match = _NUMBER_PREFIX.match(raw.lstrip())
    if not match:
        return None

    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def normalize_note(raw: Optional[str]) -> Optional[str]:
    """Trim a note; empty notes become None."""
    if raw is None:
        return None
    return raw.strip() or None


class ExpenseValidator:
    """
    Validates a submitted expense form.

    Collects every issue instead of stopping at the first one so the
    rejected submit can be logged with its full reason.
    """

    def validate(
        self,
        amount: str,
        category: str,
        note: Optional[str] = None,
    ) -> ValidationResult:
        """
        Validate raw form input.

        Args:
            amount: Amount as typed
            category: Category as typed
            note: Optional note as typed

        Returns:
            ValidationResult holding the normalized values when valid
        """
        issues = []

        parsed_amount = parse_amount(amount)
        if parsed_amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"Amount {amount!r} is not a number",
            ))
        elif parsed_amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
            ))

        trimmed_category = (category or "").strip()
        if not trimmed_category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required",
            ))
        elif len(trimmed_category) > MAX_CATEGORY_LENGTH:
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message=f"Category is longer than {MAX_CATEGORY_LENGTH} characters",
            ))

        normalized_note = normalize_note(note)
        if normalized_note and len(normalized_note) > MAX_NOTE_LENGTH:
            issues.append(ValidationIssue(
                field="note",
                issue_type="invalid_value",
                message=f"Note is longer than {MAX_NOTE_LENGTH} characters",
            ))

        if issues:
            return ValidationResult(is_valid=False, issues=issues)

        return ValidationResult(
            is_valid=True,
            amount=parsed_amount,
            category=trimmed_category,
            note=normalized_note,
        )
