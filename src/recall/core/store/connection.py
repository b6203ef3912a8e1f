"""
Database connection management for the recall command store.

The connection module follows SQLite best practices:
- WAL mode so concurrent shell sessions can read while one writes
- Foreign key enforcement
- Row factory for dict-like access
- Context managers for safe transaction handling

Usage:
    from recall.core.store.connection import get_connection, init_db

    db_path = Path("~/.local/share/recall/commands.db").expanduser()
    init_db(db_path).close()

    with get_connection(db_path) as conn:
        cursor = conn.execute("SELECT * FROM commands WHERE project_path = ?", (path,))
        for row in cursor:
            print(row["id"], row["command"])
"""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from recall.core.store.schema import create_schema, needs_migration

# Seconds a connection waits on a locked database before giving up
BUSY_TIMEOUT_SECONDS = 5.0


def dict_factory(cursor: sqlite3.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    """
    Row factory that returns rows as dictionaries.

    Example:
        >>> conn = sqlite3.connect(":memory:")
        >>> conn.row_factory = dict_factory
        >>> conn.execute("CREATE TABLE test (id INTEGER, name TEXT)")
        >>> conn.execute("INSERT INTO test VALUES (1, 'Alice')")
        >>> row = conn.execute("SELECT * FROM test").fetchone()
        >>> assert row["name"] == "Alice"
    """
    fields = [column[0] for column in cursor.description]
    return dict(zip(fields, row))


def configure_connection(conn: sqlite3.Connection) -> None:
    """
    Configure a SQLite connection.

    Settings applied:
    - WAL mode: readers don't block the writer
    - Foreign keys: cascade history rows with their command
    - dict_factory: dict-like row access

    Args:
        conn: SQLite connection to configure
    """
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    conn.row_factory = dict_factory


def connect(db_path: Path | str) -> sqlite3.Connection:
    """Open and configure a connection to ``db_path``."""
    conn = sqlite3.connect(str(db_path), timeout=BUSY_TIMEOUT_SECONDS)
    configure_connection(conn)
    return conn


def init_db(db_path: Path | str) -> sqlite3.Connection:
    """
    Initialize the command store database.

    Creates the database file if it doesn't exist, applies the schema,
    and returns a configured connection.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        Configured SQLite connection
    """
    db_path = Path(db_path)

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = connect(db_path)

    if needs_migration(conn):
        create_schema(conn)

    return conn


@contextmanager
def get_connection(db_path: Path | str) -> Iterator[sqlite3.Connection]:
    """
    Get a database connection as a context manager.

    The connection is closed when the context exits. If an exception
    escapes the block, the open transaction is rolled back.

    Args:
        db_path: Path to the SQLite database file

    Yields:
        Configured SQLite connection
    """
    db_path = Path(db_path)

    if not db_path.exists():
        init_db(db_path).close()

    conn = connect(db_path)

    try:
        yield conn
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
