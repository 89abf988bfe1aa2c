"""
Main Orchestrator for Expense Tracker

This module ties the store, the validator, the summary queries and the
audit logger together into the view model behind the expense screen.

The view model enforces the screen's rules:
- The store is the only source of truth; the in-memory list is a copy
- Every mutation is written first, then the whole list is reloaded
  (write-then-reload, never an optimistic update)
- A rejected form never reaches the store
- Store failures are logged, remembered in `last_error` and re-raised

Screens talk to it through explicit commands (`Submit`, `Delete`,
`SetFilter`, `StartEdit`, `CancelEdit`) so it stays independent of any
UI toolkit.
"""

from datetime import date
from typing import Any, Awaitable, Callable, Optional, TypeVar
from uuid import UUID

from expense_tracker.audit import AuditLogger, configure_logging, create_correlation_id
from expense_tracker.config import get_settings
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
)
from expense_tracker.queries import (
    build_summary,
    filter_expenses,
    total_spending,
    totals_by_category,
)
from expense_tracker.services.storage import (
    ExpenseStorageInterface,
    SQLiteExpenseStorage,
    StorageError,
)
from expense_tracker.validation import ExpenseValidator

T = TypeVar("T")


class ExpenseViewModel:
    """
    In-memory reflection of the expense table plus the screen's view state.

    State:
        expenses: every stored expense, newest id first, as of the last reload
        filter_mode: selected time window for the derived views
        form: raw form input and the id being edited, if any
        last_error: message of the last failed store call, None after success

    Mutating commands (accepted submit, delete) always conclude with a
    full reload from the store.
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[ExpenseValidator] = None,
        today: Optional[Callable[[], date]] = None,
        filter_mode: FilterMode = FilterMode.ALL,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._validator = validator or ExpenseValidator()
        self._today = today or date.today

        self._expenses: list[Expense] = []
        self.filter_mode = FilterMode(filter_mode)
        self.form = ExpenseForm()
        self.last_error: Optional[str] = None

    @property
    def expenses(self) -> list[Expense]:
        return list(self._expenses)

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    @property
    def filter_label(self) -> str:
        return self.filter_mode.label

    def today(self) -> date:
        """Current local calendar date, read at call time."""
        return self._today()

    async def _store_call(
        self,
        operation: str,
        call: Callable[[], Awaitable[T]],
        expense_id: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> T:
        """Await a store call; failures are audited, remembered and re-raised."""
        try:
            return await call()
        except StorageError as e:
            self.last_error = str(e)
            self._audit_logger.log_store_error(
                operation=operation,
                error_message=str(e),
                expense_id=expense_id,
                correlation_id=correlation_id,
            )
            raise

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def start(self) -> None:
        """Create the table if needed and perform the first load."""
        await self._store_call("create_table", self._storage.create_table)
        await self.load()

    async def load(self, correlation_id: Optional[UUID] = None) -> list[Expense]:
        """
        Replace the in-memory list with the store's current rows.

        Returns the freshly loaded list, newest id first.
        """
        rows = await self._store_call(
            "load",
            self._storage.list_expenses,
            correlation_id=correlation_id,
        )
        self._expenses = list(rows)
        self.last_error = None
        self._audit_logger.log_expenses_loaded(
            count=len(self._expenses),
            correlation_id=correlation_id,
        )
        return self.expenses

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    async def submit(
        self,
        amount: str,
        category: str,
        note: str = "",
        expense_id: Optional[int] = None,
    ) -> bool:
        """
        Validate the raw input and create or update an expense.

        Without `expense_id` a new expense dated today is inserted; with it,
        amount, category and note of that expense are updated while its id
        and date stay as they are.

        Returns:
            True if the input was accepted and written, False if rejected.
            A rejected submit makes no store call at all.
        """
        correlation_id = create_correlation_id()
        result = self._validator.validate(amount, category, note)

        if not result.is_valid:
            self._audit_logger.log_submit_rejected(
                issues=[issue.model_dump() for issue in result.issues],
                expense_id=expense_id,
                correlation_id=correlation_id,
            )
            return False

        if expense_id is None:
            expense_date = self.today()
            new_id = await self._store_call(
                "insert",
                lambda: self._storage.insert_expense(
                    amount=result.amount,
                    category=result.category,
                    note=result.note,
                    expense_date=expense_date,
                ),
                correlation_id=correlation_id,
            )
            self._audit_logger.log_expense_created(
                expense_id=new_id,
                amount=result.amount,
                category=result.category,
                expense_date=expense_date.isoformat(),
                correlation_id=correlation_id,
            )
        else:
            found = await self._store_call(
                "update",
                lambda: self._storage.update_expense(
                    expense_id=expense_id,
                    amount=result.amount,
                    category=result.category,
                    note=result.note,
                ),
                expense_id=expense_id,
                correlation_id=correlation_id,
            )
            self._audit_logger.log_expense_updated(
                expense_id=expense_id,
                amount=result.amount,
                category=result.category,
                found=found,
                correlation_id=correlation_id,
            )

        self.form = ExpenseForm()
        await self.load(correlation_id)
        return True

    async def submit_form(self) -> bool:
        """Submit the current form, updating when an edit is in progress."""
        return await self.submit(
            amount=self.form.amount,
            category=self.form.category,
            note=self.form.note,
            expense_id=self.form.editing_id,
        )

    async def delete(self, expense_id: int) -> None:
        """
        Delete an expense and reload.

        Deleting an id that does not exist is not an error.
        """
        correlation_id = create_correlation_id()
        found = await self._store_call(
            "delete",
            lambda: self._storage.delete_expense(expense_id),
            expense_id=expense_id,
            correlation_id=correlation_id,
        )
        self._audit_logger.log_expense_deleted(
            expense_id=expense_id,
            found=found,
            correlation_id=correlation_id,
        )

        if self.form.editing_id == expense_id:
            self.form = ExpenseForm()

        await self.load(correlation_id)

    # =========================================================================
    # VIEW STATE
    # =========================================================================

    def set_filter(self, mode: FilterMode) -> None:
        mode = FilterMode(mode)
        if mode != self.filter_mode:
            self._audit_logger.log_filter_changed(self.filter_mode.value, mode.value)
        self.filter_mode = mode

    def update_form(self, **fields: Any) -> ExpenseForm:
        """Set raw form fields as they are typed."""
        self.form = self.form.model_copy(update=fields)
        return self.form

    def start_edit(self, expense_id: int) -> bool:
        """
        Load an expense from the in-memory list into the form.

        Returns False, leaving the form alone, if the id is not loaded.
        """
        for expense in self._expenses:
            if expense.id == expense_id:
                self.form = ExpenseForm.from_expense(expense)
                self._audit_logger.log_edit_started(expense_id)
                return True
        return False

    def cancel_edit(self) -> None:
        """Clear the form and leave edit mode."""
        if self.form.is_editing:
            self._audit_logger.log_edit_cancelled(self.form.editing_id)
        self.form = ExpenseForm()

    # =========================================================================
    # DERIVED VIEWS
    # =========================================================================

    def filtered_expenses(self) -> list[Expense]:
        return filter_expenses(self._expenses, self.filter_mode, self.today())

    def get_total_spending(self) -> float:
        return total_spending(self.filtered_expenses())

    def get_totals_by_category(self) -> dict[str, float]:
        return totals_by_category(self.filtered_expenses())

    def summary(self) -> ExpenseSummary:
        return build_summary(self._expenses, self.filter_mode, self.today())

    # =========================================================================
    # COMMAND DISPATCH
    # =========================================================================

    async def dispatch(self, command: Command) -> Optional[bool]:
        """
        Run a screen command.

        Returns the outcome for `Submit` and `StartEdit`, None otherwise.
        """
        if isinstance(command, Submit):
            return await self.submit(
                amount=command.amount,
                category=command.category,
                note=command.note,
                expense_id=command.expense_id,
            )
        elif isinstance(command, Delete):
            await self.delete(command.expense_id)
        elif isinstance(command, SetFilter):
            self.set_filter(command.mode)
        elif isinstance(command, StartEdit):
            return self.start_edit(command.expense_id)
        elif isinstance(command, CancelEdit):
            self.cancel_edit()
        else:
            raise TypeError(f"Unknown command: {command!r}")
        return None


def create_storage(database_path: Optional[str] = None) -> ExpenseStorageInterface:
    """
    Create the store. One store may back any number of view models.

    Args:
        database_path: Override for the configured SQLite path.
    """
    configure_logging(get_settings().app.log_level)
    return SQLiteExpenseStorage(path=database_path)


def create_view_model(storage: ExpenseStorageInterface) -> ExpenseViewModel:
    """Create a view model with its own form, filter and audit history."""
    return ExpenseViewModel(
        storage=storage,
        audit_logger=AuditLogger(),
        filter_mode=FilterMode(get_settings().app.default_filter),
    )


def create_app_components(
    database_path: Optional[str] = None,
) -> tuple[ExpenseViewModel, ExpenseStorageInterface]:
    """
    Factory function to create the application components.

    Args:
        database_path: Override for the configured SQLite path.

    Returns:
        (view_model, storage). Call `await view_model.start()` before use.
    """
    storage = create_storage(database_path)
    return create_view_model(storage), storage
