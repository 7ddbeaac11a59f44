"""
Service layer for address records.

``AddressService`` is the only caller of ``AddressStore``.  It decides
what "not found" means and what an empty search returns, and it
converts between the wire DTO and the stored dataclass through
``AddressMapper``.  It has no HTTP knowledge: failures are raised as
the domain exceptions from ``core.exceptions`` and translated to
status codes by handlers registered in ``app.main``.

Each method performs its store calls synchronously.  Updates are
read-then-write without locking, so two concurrent updates of the
same record resolve as last writer wins.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from address_directory.app.core.exceptions import NotFoundError, RecordValidationError
from address_directory.app.repositories.address_store import AddressStore
from address_directory.app.schemas.address import AddressRecordDTO, field_errors
from address_directory.app.services.address_mapper import AddressMapper

logger = logging.getLogger(__name__)

ENTITY_NAME = "AddressRecord"

AddressInput = Union[AddressRecordDTO, Mapping[str, Any]]


class AddressService:
    """Create, read, update, delete and search address records."""

    def __init__(self, store: AddressStore, mapper: Optional[AddressMapper] = None):
        self.store = store
        self.mapper = mapper or AddressMapper()

    @staticmethod
    def _validated(data: AddressInput) -> AddressRecordDTO:
        """Return ``data`` as a validated DTO.

        DTO instances built by the API layer are already validated.
        Mappings coming from other callers are validated here, before
        anything reaches the store.
        """
        if isinstance(data, AddressRecordDTO):
            return data
        try:
            return AddressRecordDTO.model_validate(data)
        except ValidationError as exc:
            raise RecordValidationError(field_errors(exc.errors())) from exc

    def _to_wire_list(self, records) -> List[AddressRecordDTO]:
        return [self.mapper.to_wire(record) for record in records]

    def create(self, data: AddressInput) -> AddressRecordDTO:
        dto = self._validated(data)
        entity = self.mapper.to_entity(dto)
        entity.id = None
        saved = self.store.insert(entity)
        logger.info("Created address record %s", saved.id)
        return self.mapper.to_wire(saved)

    def get_by_id(self, record_id: int) -> AddressRecordDTO:
        entity = self.store.find_by_id(record_id)
        if entity is None:
            raise NotFoundError(ENTITY_NAME, record_id)
        return self.mapper.to_wire(entity)

    def get_all(self) -> List[AddressRecordDTO]:
        return self._to_wire_list(self.store.find_all())

    def update(self, record_id: int, data: AddressInput) -> AddressRecordDTO:
        """Overwrite every mutable field of record ``record_id``.

        ``id`` and ``created_at`` keep their stored values whatever the
        input carries.
        """
        dto = self._validated(data)
        existing = self.store.find_by_id(record_id)
        if existing is None:
            raise NotFoundError(ENTITY_NAME, record_id)
        self.mapper.apply_update(dto, existing)
        updated = self.store.update(existing)
        logger.info("Updated address record %s", record_id)
        return self.mapper.to_wire(updated)

    def delete(self, record_id: int) -> None:
        if not self.store.exists_by_id(record_id):
            raise NotFoundError(ENTITY_NAME, record_id)
        self.store.delete_by_id(record_id)
        logger.info("Deleted address record %s", record_id)

    def search(self, keyword: Optional[str]) -> List[AddressRecordDTO]:
        """Keyword search; a missing or blank keyword returns every record."""
        if keyword is None or not keyword.strip():
            return self.get_all()
        return self._to_wire_list(self.store.search_by_keyword(keyword.strip()))

    def find_by_name(self, name: str) -> List[AddressRecordDTO]:
        return self._to_wire_list(self.store.find_by_name_containing(name))

    def find_by_city(self, city: str) -> List[AddressRecordDTO]:
        return self._to_wire_list(self.store.find_by_city_exact(city))

    def find_by_email(self, email: str) -> List[AddressRecordDTO]:
        return self._to_wire_list(self.store.find_by_email_exact(email))

    def check_health(self) -> None:
        self.store.ping()
