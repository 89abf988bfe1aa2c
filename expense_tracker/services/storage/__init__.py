"""
Storage Services Package

Provides the abstract storage interface and its SQLite implementation.
"""

from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    StorageConnectionError,
    StorageError,
)
from expense_tracker.services.storage.sqlite import SQLiteExpenseStorage

__all__ = [
    # Interfaces
    "ExpenseStorageInterface",
    # Exceptions
    "StorageConnectionError",
    "StorageError",
    # SQLite implementation
    "SQLiteExpenseStorage",
]
