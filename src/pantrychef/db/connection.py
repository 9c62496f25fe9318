"""Database connection management using raw sqlite3."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from pantrychef.db.schema import get_schema_sql

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """Manages SQLite database connections.

    Services receive an instance explicitly; nothing in the package keeps a
    process-wide handle.
    """

    def __init__(self, db_path: Path):
        """Initialize database connection manager.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = Path(db_path)
        self._ensure_directory()

    def _ensure_directory(self) -> None:
        """Create parent directories if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database connections.

        Commits when the block exits cleanly and rolls back otherwise.

        Example:
            with db.get_connection() as conn:
                rows = conn.execute("SELECT * FROM pantry_items").fetchall()
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            logger.debug("Rolled back transaction on %s", self.db_path)
            raise
        finally:
            conn.close()

    def initialize_schema(self) -> None:
        """Create all tables if they don't exist."""
        with self.get_connection() as conn:
            conn.executescript(get_schema_sql())
        logger.debug("Schema ready at %s", self.db_path)

    def table_exists(self, table_name: str) -> bool:
        """Check if a table exists in the database."""
        query = """
            SELECT name FROM sqlite_master
            WHERE type='table' AND name=?
        """
        with self.get_connection() as conn:
            cursor = conn.execute(query, (table_name,))
            return cursor.fetchone() is not None

    def get_table_count(self, table_name: str) -> int:
        """Get the number of rows in a table (0 if it does not exist)."""
        # table_name is checked against sqlite_master before interpolation
        if not self.table_exists(table_name):
            return 0
        with self.get_connection() as conn:
            cursor = conn.execute(f"SELECT COUNT(*) FROM {table_name}")
            result = cursor.fetchone()
            return result[0] if result else 0
