"""
Stored representation of an address record.

``AddressRecord`` mirrors one row of the ``user_addresses`` table.
It carries no validation; records reach the store only through
``AddressService``, which validates the wire DTO first.
"""

import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

# Mutable columns, in table order.  ``id`` and the timestamps are
# managed by the store.
MUTABLE_FIELDS = ("name", "phone", "email", "street", "city", "state", "zip_code", "country")


@dataclass
class AddressRecord:
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "AddressRecord":
        """Build a record from a ``user_addresses`` row."""
        return cls(
            id=row["id"],
            name=row["name"],
            phone=row["phone"],
            email=row["email"],
            street=row["street"],
            city=row["city"],
            state=row["state"],
            zip_code=row["zip_code"],
            country=row["country"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value)
