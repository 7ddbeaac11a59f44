"""
Domain exceptions raised by the service and store layers.

The API layer registers a handler per class (see ``app.main``), so
services never construct HTTP responses themselves.
"""

from typing import Any, Dict, List


class AddressDirectoryError(Exception):
    """Base class for all errors raised by the address directory."""


class RecordValidationError(AddressDirectoryError):
    """Input failed validation; nothing was written.

    ``errors`` is a list of ``{"field": ..., "message": ...}`` dicts,
    one per offending field.
    """

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        super().__init__("Validation failed")


class NotFoundError(AddressDirectoryError):
    """No record exists for the requested id."""

    def __init__(self, entity_name: str, entity_id: Any):
        self.entity_name = entity_name
        self.entity_id = entity_id
        super().__init__(f"{entity_name} not found with id: {entity_id}")


class StoreUnavailableError(AddressDirectoryError):
    """The backing database could not be reached or failed mid-operation."""
