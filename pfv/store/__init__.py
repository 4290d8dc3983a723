"""Store layer - provides persistence for the application.

This module re-exports the public store API for easy importing.
"""

from pfv.store.blob import BlobStore, BlobStoreError, MemoryBlobStore, SqliteBlobStore
from pfv.store.schema import database_exists, get_db_path, init_database
from pfv.store.transaction_store import DEFAULT_KEY, TransactionStore

__all__ = [
    # Blob stores
    "BlobStore",
    "BlobStoreError",
    "MemoryBlobStore",
    "SqliteBlobStore",
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Ledger
    "DEFAULT_KEY",
    "TransactionStore",
]
