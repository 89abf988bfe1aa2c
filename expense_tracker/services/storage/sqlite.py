"""
SQLite Storage Implementation

SQLite is used as the on-device store because:
1. It ships with Python, no server to run
2. AUTOINCREMENT guarantees ids are never reused
3. A single file is easy to back up or delete

TRADEOFFS:
- One connection per storage object, shared by every screen session;
  a lock serializes its use across threads
- Only opening the database is retried, reads and writes are not

The implementation follows the abstract interface, so the view model
never depends on SQLite directly.
"""

import sqlite3
import threading
from datetime import date
from typing import Optional

from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from expense_tracker.config import get_settings
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    StorageConnectionError,
    StorageError,
)


TABLE_NAME = "expenses"

# Column order used by every SELECT
EXPENSE_COLUMNS = [
    "id",
    "amount",
    "category",
    "note",
    "date",
]

CREATE_TABLE_SQL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    amount REAL NOT NULL,
    category TEXT NOT NULL,
    note TEXT,
    date TEXT NOT NULL
);
"""

SELECT_SQL = f"SELECT {', '.join(EXPENSE_COLUMNS)} FROM {TABLE_NAME}"


class SQLiteExpenseStorage(ExpenseStorageInterface):
    """
    SQLite implementation of expense storage.

    Expenses are stored one per row; dates are ISO "YYYY-MM-DD" text.
    The connection is opened lazily on first use and kept until `close()`,
    which keeps ':memory:' databases alive for the object's lifetime.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        timeout: Optional[float] = None,
        connect_attempts: Optional[int] = None,
    ):
        settings = get_settings().storage
        self._path = path or settings.path
        self._timeout = timeout if timeout is not None else settings.timeout_seconds
        self._connect_attempts = connect_attempts or settings.connect_attempts
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    @property
    def path(self) -> str:
        return self._path

    def _open(self) -> sqlite3.Connection:
        """Open the database, retrying while it is locked or busy."""

        @retry(
            retry=retry_if_exception_type(sqlite3.OperationalError),
            stop=stop_after_attempt(self._connect_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            reraise=True,
        )
        def _connect() -> sqlite3.Connection:
            connection = sqlite3.connect(
                self._path,
                timeout=self._timeout,
                check_same_thread=False,
            )
            connection.row_factory = sqlite3.Row
            # Touch the file so a bad path fails here rather than on first query
            connection.execute("SELECT 1")
            return connection

        try:
            return _connect()
        except sqlite3.Error as e:
            raise StorageConnectionError(
                f"Failed to open expense database at {self._path}: {e}"
            ) from e

    def connect(self) -> sqlite3.Connection:
        """Return the open connection, opening it on first use."""
        with self._lock:
            if self._connection is None:
                self._connection = self._open()
            return self._connection

    def _row_to_expense(self, row: sqlite3.Row) -> Expense:
        """Convert a table row to an Expense."""
        try:
            return Expense(
                id=row["id"],
                amount=row["amount"],
                category=row["category"],
                note=row["note"],
                date=date.fromisoformat(row["date"]),
            )
        except (ValidationError, ValueError, TypeError) as e:
            raise StorageError(
                f"Expense {row['id']} could not be read: {e}"
            ) from e

    async def create_table(self) -> None:
        """Create the expenses table if missing."""
        with self._lock:
            try:
                connection = self.connect()
                with connection:
                    connection.execute(CREATE_TABLE_SQL)
            except StorageError:
                raise
            except sqlite3.Error as e:
                raise StorageError(f"Failed to create expenses table: {e}") from e

    async def list_expenses(self) -> list[Expense]:
        """Return all expenses, newest id first."""
        with self._lock:
            try:
                rows = self.connect().execute(
                    f"{SELECT_SQL} ORDER BY id DESC"
                ).fetchall()
            except StorageError:
                raise
            except sqlite3.Error as e:
                raise StorageError(f"Failed to list expenses: {e}") from e

        return [self._row_to_expense(row) for row in rows]

    async def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Retrieve an expense by its ID."""
        with self._lock:
            try:
                row = self.connect().execute(
                    f"{SELECT_SQL} WHERE id = ?",
                    (expense_id,),
                ).fetchone()
            except StorageError:
                raise
            except sqlite3.Error as e:
                raise StorageError(f"Failed to get expense {expense_id}: {e}") from e

        return self._row_to_expense(row) if row else None

    async def insert_expense(
        self,
        amount: float,
        category: str,
        note: Optional[str],
        expense_date: date,
    ) -> int:
        """Insert a new expense and return its id."""
        with self._lock:
            try:
                connection = self.connect()
                with connection:
                    cursor = connection.execute(
                        f"INSERT INTO {TABLE_NAME} (amount, category, note, date) "
                        "VALUES (?, ?, ?, ?)",
                        (amount, category, note, expense_date.isoformat()),
                    )
                return cursor.lastrowid
            except StorageError:
                raise
            except sqlite3.Error as e:
                raise StorageError(f"Failed to insert expense: {e}") from e

    async def update_expense(
        self,
        expense_id: int,
        amount: float,
        category: str,
        note: Optional[str],
    ) -> bool:
        """Update an existing expense; id and date are left alone."""
        with self._lock:
            try:
                connection = self.connect()
                with connection:
                    cursor = connection.execute(
                        f"UPDATE {TABLE_NAME} SET amount = ?, category = ?, note = ? "
                        "WHERE id = ?",
                        (amount, category, note, expense_id),
                    )
                return cursor.rowcount > 0
            except StorageError:
                raise
            except sqlite3.Error as e:
                raise StorageError(f"Failed to update expense {expense_id}: {e}") from e

    async def delete_expense(self, expense_id: int) -> bool:
        """Delete an expense by ID."""
        with self._lock:
            try:
                connection = self.connect()
                with connection:
                    cursor = connection.execute(
                        f"DELETE FROM {TABLE_NAME} WHERE id = ?",
                        (expense_id,),
                    )
                return cursor.rowcount > 0
            except StorageError:
                raise
            except sqlite3.Error as e:
                raise StorageError(f"Failed to delete expense {expense_id}: {e}") from e

    async def close(self) -> None:
        """Close the connection if it is open."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
