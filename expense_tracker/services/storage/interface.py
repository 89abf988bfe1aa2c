"""
Abstract Storage Interface

We define an abstract interface for expense storage so that:
1. The view model receives its store explicitly instead of a global handle
2. SQLite can be swapped for another backend without touching screen logic
3. Tests can run against a throwaway database

The interface is intentionally small - just the operations the screen needs.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from expense_tracker.models.expense import Expense


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense storage operations.

    Any storage implementation must implement these methods.
    Update and delete against a missing id are no-ops, not errors.
    """

    @abstractmethod
    async def create_table(self) -> None:
        """
        Create the expenses table if it does not exist yet.

        Safe to call on every start.

        Raises:
            StorageError: If the schema cannot be created
        """
        pass

    @abstractmethod
    async def list_expenses(self) -> list[Expense]:
        """
        Return every stored expense, newest id first.

        Raises:
            StorageError: If the table cannot be read
        """
        pass

    @abstractmethod
    async def get_expense(self, expense_id: int) -> Optional[Expense]:
        """
        Retrieve an expense by its ID.

        Returns:
            The expense if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert_expense(
        self,
        amount: float,
        category: str,
        note: Optional[str],
        expense_date: date,
    ) -> int:
        """
        Insert a new expense.

        Args:
            amount: Positive amount
            category: Trimmed, non-empty category
            note: Trimmed note or None
            expense_date: Date the expense is recorded under

        Returns:
            The new, never reused, expense id

        Raises:
            StorageError: If the insert fails
        """
        pass

    @abstractmethod
    async def update_expense(
        self,
        expense_id: int,
        amount: float,
        category: str,
        note: Optional[str],
    ) -> bool:
        """
        Update amount, category and note of an existing expense.

        The id and the date of the record are never changed.

        Returns:
            True if a record was updated, False if the id does not exist

        Raises:
            StorageError: If the update fails
        """
        pass

    @abstractmethod
    async def delete_expense(self, expense_id: int) -> bool:
        """
        Delete an expense by ID.

        Returns:
            True if a record was deleted, False if it was already absent

        Raises:
            StorageError: If the delete fails
        """
        pass

    async def close(self) -> None:
        """Release any held resources. Optional for implementations."""
        return None


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageConnectionError(StorageError):
    """Could not open the storage backend."""
    pass
