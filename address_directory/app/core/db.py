"""
SQLite database integration and simple migration system.

This module provides functions for resolving the database location
(``get_database_path``), opening connections (``get_connection``),
running a unit of work inside one transaction (``get_cursor``) and
applying migrations on application start (``init_db``).

Every connection registers a ``fold`` SQL function that applies
Python's ``str.casefold``.  SQLite's own ``lower()`` and ``LIKE`` only
fold ASCII letters, so case-insensitive searches go through ``fold``
instead.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

# Project root: the directory that contains the ``address_directory`` package.
BASE_DIR = Path(__file__).resolve().parents[3]

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS user_addresses (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name VARCHAR(100) NOT NULL,
            phone VARCHAR(20),
            email VARCHAR(100),
            street VARCHAR(255),
            city VARCHAR(100),
            state VARCHAR(100),
            zip_code VARCHAR(20),
            country VARCHAR(100),
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP
        );
        """,
    ),
    # Migration 2: indexes for the exact-match lookups
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS ix_user_addresses_city ON user_addresses (city);
        CREATE INDEX IF NOT EXISTS ix_user_addresses_email ON user_addresses (email);
        """,
    ),
]


def _fold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths and the special ``:memory:`` name are returned as
    is.  Relative paths are resolved against the project root.
    """
    if database_url == ":memory:" or os.path.isabs(database_url):
        return database_url
    return str((BASE_DIR / database_url).resolve())


def get_connection(database_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by
    name.  No type detection is enabled; timestamps come back as the
    ISO strings they were stored as.
    """
    conn = sqlite3.connect(database_path)
    conn.row_factory = sqlite3.Row
    conn.create_function("fold", 1, _fold, deterministic=True)
    return conn


@contextmanager
def get_cursor(database_path: str) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor; commit on success and always close the connection.

    An exception inside the block leaves the transaction uncommitted,
    so a failed unit of work never writes partially.
    """
    conn = get_connection(database_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(database_path: str) -> int:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies any newer entries of
    ``MIGRATIONS``.  Returns the resulting schema version.
    """
    with get_cursor(database_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) AS version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
        return current_version
