"""
Audit Models for Expense Tracker

Every mutation of the expense table, every rejected submit and every
store failure is recorded as an audit event. This provides:
1. Traceability of what changed and when
2. Debugging information when the store misbehaves
3. A record of silently rejected form submits

Audit events are append-only. We never modify them once built.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Persistence
    EXPENSE_CREATED = "expense_created"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSES_LOADED = "expenses_loaded"

    # Form handling
    SUBMIT_REJECTED = "submit_rejected"
    EDIT_STARTED = "edit_started"
    EDIT_CANCELLED = "edit_cancelled"

    # View state
    FILTER_CHANGED = "filter_changed"

    # System events
    STORE_ERROR = "store_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


MAX_DESCRIPTION_LENGTH = 500


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which expense is this about?
    expense_id: Optional[int] = Field(
        default=None,
        description="ID of the expense this event relates to"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by the events of one user command"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    @field_validator("description", mode="before")
    @classmethod
    def shorten_description(cls, v: Any) -> Any:
        """Cut a description longer than the field allows."""
        if isinstance(v, str) and len(v) > MAX_DESCRIPTION_LENGTH:
            return v[:MAX_DESCRIPTION_LENGTH - 3] + "..."
        return v

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "expense_id": self.expense_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_created(expense_id, amount, category)
        event = AuditEventBuilder.store_error("load", "disk I/O error")
    """

    @staticmethod
    def expense_created(
        expense_id: int,
        amount: float,
        category: str,
        expense_date: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_CREATED,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense created: {amount:.2f} in {category}",
            details={
                "amount": amount,
                "category": category,
                "date": expense_date,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_updated(
        expense_id: int,
        amount: float,
        category: str,
        found: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=(
                f"Expense {expense_id} updated"
                if found else f"Expense {expense_id} not found, nothing updated"
            ),
            details={
                "amount": amount,
                "category": category,
                "found": found,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(
        expense_id: int,
        found: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=(
                f"Expense {expense_id} deleted"
                if found else f"Expense {expense_id} already absent"
            ),
            details={"found": found},
            is_user_action=True,
        )

    @staticmethod
    def expenses_loaded(
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LOADED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Loaded {count} expenses",
            details={"count": count},
        )

    @staticmethod
    def submit_rejected(
        issues: list[dict],
        expense_id: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBMIT_REJECTED,
            severity=AuditSeverity.WARNING,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Submit rejected with {len(issues)} issue(s)",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def edit_started(expense_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_STARTED,
            severity=AuditSeverity.DEBUG,
            expense_id=expense_id,
            description=f"Editing expense {expense_id}",
            is_user_action=True,
        )

    @staticmethod
    def edit_cancelled(expense_id: Optional[int]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_CANCELLED,
            severity=AuditSeverity.DEBUG,
            expense_id=expense_id,
            description="Edit cancelled",
            is_user_action=True,
        )

    @staticmethod
    def filter_changed(previous: str, current: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILTER_CHANGED,
            severity=AuditSeverity.DEBUG,
            description=f"Filter changed from {previous} to {current}",
            details={"previous": previous, "current": current},
            is_user_action=True,
        )

    @staticmethod
    def store_error(
        operation: str,
        error_message: str,
        expense_id: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_ERROR,
            severity=AuditSeverity.ERROR,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Store call failed during {operation}",
            details={"operation": operation},
            error_message=error_message,
        )
