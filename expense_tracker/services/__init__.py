"""Services package."""

from expense_tracker.services.storage import (
    ExpenseStorageInterface,
    SQLiteExpenseStorage,
    StorageConnectionError,
    StorageError,
)

__all__ = [
    "ExpenseStorageInterface",
    "SQLiteExpenseStorage",
    "StorageConnectionError",
    "StorageError",
]
