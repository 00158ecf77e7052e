"""Document store package.

Provides:
- SQLite connection management and schema (local backend)
- DocumentStore interface and StoredDocument record
- Firestore-backed store (hosted backend, imported on demand)
"""

from studyhub.db.database import get_db, init_db
from studyhub.db.store import (
    DocumentStore,
    SqliteDocumentStore,
    StoredDocument,
    StoreError,
)

__all__ = [
    "get_db",
    "init_db",
    "DocumentStore",
    "SqliteDocumentStore",
    "StoredDocument",
    "StoreError",
]
