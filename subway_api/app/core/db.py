"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a request‑scoped connection for FastAPI routes
(``get_db``), a commit/rollback block (``transaction``) and applying
migrations on application start (``init_db``).  Applied migration
versions are stored in the ``migrations`` table and new migrations are
executed in order.

Every request works on its own connection.  Services wrap their writes
in ``transaction`` so the commit or rollback happens before control
goes back to the event loop: no write lock is held while another
request runs, and a failed create or update never leaves a partial
record behind.  The ``UNIQUE`` constraints declared here are the single
arbiter for concurrent requests using the same name.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS stations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS lines (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            color TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    (
        2,
        """
        -- A line is made of sections joining two stations.  Stations of a
        -- line are derived by walking the sections from up to down.
        CREATE TABLE IF NOT EXISTS sections (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            line_id INTEGER NOT NULL,
            up_station_id INTEGER NOT NULL,
            down_station_id INTEGER NOT NULL,
            distance INTEGER NOT NULL,
            FOREIGN KEY(line_id) REFERENCES lines(id) ON DELETE CASCADE,
            FOREIGN KEY(up_station_id) REFERENCES stations(id),
            FOREIGN KEY(down_station_id) REFERENCES stations(id)
        );

        CREATE INDEX IF NOT EXISTS idx_sections_line_id ON sections(line_id);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  ``check_same_thread`` is disabled because FastAPI may open the
    connection in a worker thread and use it from the event loop; a
    connection is still never shared between requests.
    """
    conn = sqlite3.connect(get_database_path(), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    # Foreign keys are off by default in SQLite and must be enabled per
    # connection, otherwise ON DELETE CASCADE and REFERENCES are ignored.
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Commit the block on success, roll it back when it raises."""
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def get_db() -> Iterator[sqlite3.Connection]:
    """FastAPI dependency yielding a connection scoped to one request."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


def is_unique_violation(exc: sqlite3.IntegrityError) -> bool:
    """Return True when ``exc`` was raised by a UNIQUE constraint."""
    return "UNIQUE constraint failed" in str(exc)


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entry of
    ``MIGRATIONS``.  To add a migration, append it with an incremented
    version number.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied migration %s", version)
                current_version = version
