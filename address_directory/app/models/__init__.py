"""
Persistence-side data structures.

These dataclasses describe rows as the store reads and writes them.
They are kept apart from the pydantic schemas so the wire format can
change without touching storage.
"""

from .address_record import MUTABLE_FIELDS, AddressRecord  # noqa: F401
