"""
Audit Logger

Every significant action on the expense screen is logged:
1. Every create, update and delete, with the id it touched
2. Every rejected submit, with the validation issues
3. Every store failure, with the operation that failed

The audit logger:
- Writes structured JSON lines through structlog
- Keeps the most recent events in memory for the screen's activity panel
- Supports correlation IDs to tie the events of one command together
"""

import logging
from collections import deque
from typing import Optional
from uuid import UUID, uuid4

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

DEFAULT_HISTORY_SIZE = 200


def configure_logging(level: str = "INFO") -> None:
    """
    Route structlog output to stderr at the given level.

    structlog renders the JSON line; the stdlib handler only prints it.
    """
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))
    logging.getLogger().setLevel(getattr(logging, level.upper()))


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. A bounded in-memory history (for the screen)
    """

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE):
        self._logger = structlog.get_logger("expense_tracker.audit")
        self._history: deque[AuditEvent] = deque(maxlen=history_size)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at its own severity."""
        self._history.append(event)
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def recent_events(self, limit: int = 20) -> list[AuditEvent]:
        """Most recent events, newest first."""
        if limit <= 0:
            return []
        return list(self._history)[::-1][:limit]

    def clear(self) -> None:
        self._history.clear()

    def log_expense_created(
        self,
        expense_id: int,
        amount: float,
        category: str,
        expense_date: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a newly inserted expense."""
        self.log(AuditEventBuilder.expense_created(
            expense_id=expense_id,
            amount=amount,
            category=category,
            expense_date=expense_date,
            correlation_id=correlation_id,
        ))

    def log_expense_updated(
        self,
        expense_id: int,
        amount: float,
        category: str,
        found: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an update, including updates that matched nothing."""
        self.log(AuditEventBuilder.expense_updated(
            expense_id=expense_id,
            amount=amount,
            category=category,
            found=found,
            correlation_id=correlation_id,
        ))

    def log_expense_deleted(
        self,
        expense_id: int,
        found: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.expense_deleted(
            expense_id=expense_id,
            found=found,
            correlation_id=correlation_id,
        ))

    def log_expenses_loaded(
        self,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.expenses_loaded(
            count=count,
            correlation_id=correlation_id,
        ))

    def log_submit_rejected(
        self,
        issues: list[dict],
        expense_id: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a submit that failed validation."""
        self.log(AuditEventBuilder.submit_rejected(
            issues=issues,
            expense_id=expense_id,
            correlation_id=correlation_id,
        ))

    def log_edit_started(self, expense_id: int) -> None:
        self.log(AuditEventBuilder.edit_started(expense_id))

    def log_edit_cancelled(self, expense_id: Optional[int]) -> None:
        self.log(AuditEventBuilder.edit_cancelled(expense_id))

    def log_filter_changed(self, previous: str, current: str) -> None:
        self.log(AuditEventBuilder.filter_changed(previous, current))

    def log_store_error(
        self,
        operation: str,
        error_message: str,
        expense_id: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a failed store call."""
        self.log(AuditEventBuilder.store_error(
            operation=operation,
            error_message=error_message,
            expense_id=expense_id,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user command (e.g., a submit).
    Pass it through all subsequent operations.
    """
    return uuid4()
