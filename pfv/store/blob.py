"""Key-value blob stores used to persist the ledger.

The transaction store only needs ``get``/``set`` on text values, so any
backend satisfying the BlobStore protocol can hold the ledger.
"""

import sqlite3
from pathlib import Path
from typing import Protocol

from pfv.store.schema import get_db_path, init_database


class BlobStoreError(Exception):
    """Raised when a blob store cannot be read or written."""


class BlobStore(Protocol):
    """Synchronous key-value store of text blobs."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryBlobStore:
    """Dict-backed blob store. State is lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes += 1


class SqliteBlobStore:
    """Blob store backed by the ``blobs`` table of a SQLite database."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path if db_path is not None else get_db_path()
        self._initialized = False

    def _connect(self) -> sqlite3.Connection:
        """Create a database connection, creating the schema on first use.

        Raises:
            sqlite3.Error: If the database cannot be opened or initialized.
        """
        if not self._initialized:
            init_database(self.db_path)
            self._initialized = True
        return sqlite3.connect(self.db_path)

    def get(self, key: str) -> str | None:
        """Read a blob.

        Args:
            key: Blob key.

        Returns:
            Stored text, or None if the key has never been written.

        Raises:
            BlobStoreError: If the database operation fails.
        """
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM blobs WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            raise BlobStoreError(f"Could not read '{key}' from {self.db_path}: {e}") from e

        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Overwrite a blob.

        Args:
            key: Blob key.
            value: Text to store.

        Raises:
            BlobStoreError: If the database operation fails.
        """
        try:
            conn = self._connect()
        except (sqlite3.Error, OSError) as e:
            raise BlobStoreError(f"Could not open {self.db_path}: {e}") from e

        try:
            conn.execute(
                """
                INSERT INTO blobs (key, value, updated_at) VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise BlobStoreError(f"Could not write '{key}' to {self.db_path}: {e}") from e
        finally:
            conn.close()
