"""Shared fixtures: a throwaway SQLite store and a view model with a fixed clock."""

from datetime import date

import pytest
import pytest_asyncio

from expense_tracker.audit import AuditLogger
from expense_tracker.orchestrator import ExpenseViewModel
from expense_tracker.services.storage import SQLiteExpenseStorage


# A Wednesday: the week starts on Sunday 2024-12-15, the month on 2024-12-01
TODAY = date(2024, 12, 18)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest_asyncio.fixture
async def storage(tmp_path):
    store = SQLiteExpenseStorage(path=str(tmp_path / "expenses.db"), connect_attempts=1)
    await store.create_table()
    yield store
    await store.close()


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest_asyncio.fixture
async def view_model(storage, audit_logger):
    vm = ExpenseViewModel(
        storage=storage,
        audit_logger=audit_logger,
        today=lambda: TODAY,
    )
    await vm.start()
    return vm
