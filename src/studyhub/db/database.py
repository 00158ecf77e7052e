"""SQLite database connection and schema management.

Backs the local document store: every collection shares one table of
JSON documents keyed by (collection, doc_id).
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import structlog

logger = structlog.get_logger(__name__)

# Default database location
DEFAULT_DB_PATH = Path("db/studyhub.db")


def init_db(db_path: Path | None = None) -> Path:
    """Initialize database with schema.

    Creates the database file and the documents table if they don't exist.

    Args:
        db_path: Path to database file. Defaults to db/studyhub.db

    Returns:
        Path of the initialized database
    """
    path = db_path or DEFAULT_DB_PATH

    with get_db(path) as conn:
        _create_schema(conn)

    logger.info("database.initialized", path=str(path))
    return path


@contextmanager
def get_db(db_path: Path | None = None) -> Generator[sqlite3.Connection, None, None]:
    """Get database connection as context manager.

    Yields:
        SQLite connection with row factory set to sqlite3.Row

    Example:
        with get_db(path) as conn:
            rows = conn.execute("SELECT * FROM documents").fetchall()
    """
    path = db_path or DEFAULT_DB_PATH

    # Ensure directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _create_schema(conn: sqlite3.Connection) -> None:
    """Create database schema.

    Uses IF NOT EXISTS for idempotency. seq preserves insertion order,
    which is the order list_documents returns.
    """
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS documents (
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            collection TEXT NOT NULL,
            doc_id TEXT NOT NULL,
            fields TEXT NOT NULL DEFAULT '{}',
            UNIQUE (collection, doc_id)
        );

        CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents(collection);
        """
    )
