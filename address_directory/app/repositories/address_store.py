"""
SQLite-backed store for address records.

``AddressStore`` owns every SQL statement touching the
``user_addresses`` table.  Each public method is one unit of work: it
opens a connection, runs inside a single transaction and closes the
connection again.

Timestamps are assigned here, as part of the write, rather than by a
trigger or column default: ``insert`` sets ``created_at`` and
``updated_at`` to the same instant, ``update`` refreshes
``updated_at`` only.

Lookups by id return ``None`` when nothing matches.  Turning absence
into an error is the service's decision, not the store's.

All searches fold case with the ``fold`` SQL function registered in
``core.db``.  Substring searches use ``instr`` so characters such as
``%`` and ``_`` in user input are matched literally.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional

from address_directory.app.core.db import get_cursor
from address_directory.app.core.exceptions import StoreUnavailableError
from address_directory.app.models import MUTABLE_FIELDS, AddressRecord

logger = logging.getLogger(__name__)

# Columns compared by the keyword search.  ``zip_code`` is not searched.
KEYWORD_COLUMNS = ("name", "phone", "email", "street", "city", "state", "country")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AddressStore:
    """Persistence operations for ``AddressRecord``."""

    def __init__(self, database_path: str, clock: Callable[[], datetime] = utc_now):
        self.database_path = database_path
        self.clock = clock

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        try:
            with get_cursor(self.database_path) as cursor:
                yield cursor
        except sqlite3.Error as exc:
            logger.error("Address store failure on %s: %s", self.database_path, exc)
            raise StoreUnavailableError(str(exc)) from exc

    def _select(self, where: str = "", params: tuple = ()) -> List[AddressRecord]:
        query = "SELECT * FROM user_addresses"
        if where:
            query += f" WHERE {where}"
        query += " ORDER BY id ASC"
        with self._cursor() as cursor:
            rows = cursor.execute(query, params).fetchall()
        return [AddressRecord.from_row(row) for row in rows]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def insert(self, record: AddressRecord) -> AddressRecord:
        """Persist a new record and return it with id and timestamps.

        Any id or timestamps already set on ``record`` are ignored.
        """
        now = self.clock().isoformat()
        columns = ", ".join(MUTABLE_FIELDS)
        placeholders = ", ".join("?" for _ in MUTABLE_FIELDS)
        values = tuple(getattr(record, field) for field in MUTABLE_FIELDS)
        with self._cursor() as cursor:
            cursor.execute(
                f"INSERT INTO user_addresses ({columns}, created_at, updated_at) "
                f"VALUES ({placeholders}, ?, ?)",
                values + (now, now),
            )
            record_id = cursor.lastrowid
            row = cursor.execute(
                "SELECT * FROM user_addresses WHERE id = ?", (record_id,)
            ).fetchone()
        logger.debug("Inserted address record %s", record_id)
        return AddressRecord.from_row(row)

    def update(self, record: AddressRecord) -> AddressRecord:
        """Overwrite the mutable columns of an existing record.

        The caller must have confirmed that ``record.id`` exists.
        ``created_at`` is never written; ``updated_at`` is refreshed
        and never set earlier than ``created_at``.
        """
        now = self.clock()
        if record.created_at is not None and now < record.created_at:
            now = record.created_at
        assignments = ", ".join(f"{field} = ?" for field in MUTABLE_FIELDS)
        values = tuple(getattr(record, field) for field in MUTABLE_FIELDS)
        with self._cursor() as cursor:
            cursor.execute(
                f"UPDATE user_addresses SET {assignments}, updated_at = ? WHERE id = ?",
                values + (now.isoformat(), record.id),
            )
            row = cursor.execute(
                "SELECT * FROM user_addresses WHERE id = ?", (record.id,)
            ).fetchone()
        logger.debug("Updated address record %s", record.id)
        return AddressRecord.from_row(row)

    def delete_by_id(self, record_id: int) -> None:
        with self._cursor() as cursor:
            cursor.execute("DELETE FROM user_addresses WHERE id = ?", (record_id,))
        logger.debug("Deleted address record %s", record_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def find_by_id(self, record_id: int) -> Optional[AddressRecord]:
        with self._cursor() as cursor:
            row = cursor.execute(
                "SELECT * FROM user_addresses WHERE id = ?", (record_id,)
            ).fetchone()
        return AddressRecord.from_row(row) if row else None

    def exists_by_id(self, record_id: int) -> bool:
        with self._cursor() as cursor:
            row = cursor.execute(
                "SELECT 1 FROM user_addresses WHERE id = ?", (record_id,)
            ).fetchone()
        return row is not None

    def find_all(self) -> List[AddressRecord]:
        return self._select()

    def search_by_keyword(self, keyword: str) -> List[AddressRecord]:
        """Records where any text column contains ``keyword``, ignoring case."""
        where = " OR ".join(f"instr(fold({column}), ?) > 0" for column in KEYWORD_COLUMNS)
        needle = keyword.casefold()
        return self._select(where, (needle,) * len(KEYWORD_COLUMNS))

    def find_by_name_containing(self, name: str) -> List[AddressRecord]:
        return self._select("instr(fold(name), ?) > 0", (name.casefold(),))

    def find_by_city_exact(self, city: str) -> List[AddressRecord]:
        return self._select("fold(city) = ?", (city.casefold(),))

    def find_by_email_exact(self, email: str) -> List[AddressRecord]:
        return self._select("fold(email) = ?", (email.casefold(),))

    def ping(self) -> None:
        """Run a trivial query; raises ``StoreUnavailableError`` on failure."""
        with self._cursor() as cursor:
            cursor.execute("SELECT 1").fetchone()
