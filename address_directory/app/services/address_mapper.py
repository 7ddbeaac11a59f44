"""Conversion between ``AddressRecordDTO`` and ``AddressRecord``."""

from typing import Optional

from address_directory.app.models import MUTABLE_FIELDS, AddressRecord
from address_directory.app.schemas.address import AddressRecordDTO


class AddressMapper:
    """Stateless field copier.  ``None`` in gives ``None`` out."""

    def to_wire(self, entity: Optional[AddressRecord]) -> Optional[AddressRecordDTO]:
        if entity is None:
            return None
        return AddressRecordDTO(
            id=entity.id,
            name=entity.name,
            phone=entity.phone,
            email=entity.email,
            street=entity.street,
            city=entity.city,
            state=entity.state,
            zip_code=entity.zip_code,
            country=entity.country,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def to_entity(self, dto: Optional[AddressRecordDTO]) -> Optional[AddressRecord]:
        """Copy every field except the timestamps, which the store assigns."""
        if dto is None:
            return None
        return AddressRecord(id=dto.id, **{field: getattr(dto, field) for field in MUTABLE_FIELDS})

    def apply_update(self, dto: Optional[AddressRecordDTO], entity: Optional[AddressRecord]) -> None:
        """Overwrite the mutable fields of ``entity`` from ``dto`` in place."""
        if dto is None or entity is None:
            return
        for field in MUTABLE_FIELDS:
            setattr(entity, field, getattr(dto, field))
