from unittest.mock import MagicMock

import pytest

from address_directory.app.core.exceptions import NotFoundError, RecordValidationError
from address_directory.app.repositories.address_store import AddressStore
from address_directory.app.schemas.address import AddressRecordDTO
from address_directory.app.services.address_service import AddressService


def _create(service, **fields):
    fields.setdefault("name", "John Doe")
    return service.create(AddressRecordDTO(**fields))


class TestCreate:
    def test_assigns_id_and_timestamps(self, service):
        created = _create(service, email="john@example.com")

        assert created.id is not None
        assert created.created_at == created.updated_at

    def test_ignores_client_id_and_timestamps(self, service):
        first = _create(service)
        created = service.create({"id": first.id, "name": "Copycat", "createdAt": "1999-01-01T00:00:00Z"})

        assert created.id != first.id
        assert created.created_at.year == 2026

    def test_accepts_mapping_with_wire_names(self, service):
        created = service.create({"name": "Jane", "zipCode": "60606"})

        assert created.zip_code == "60606"

    def test_rejects_invalid_mapping_before_touching_store(self):
        store = MagicMock(spec=AddressStore)
        service = AddressService(store)

        with pytest.raises(RecordValidationError) as excinfo:
            service.create({"name": "  ", "email": "not-an-email"})

        fields = {error["field"] for error in excinfo.value.errors}
        assert fields == {"name", "email"}
        store.insert.assert_not_called()


class TestRead:
    def test_get_by_id(self, service):
        created = _create(service, city="Boston")

        assert service.get_by_id(created.id) == created

    def test_get_by_id_missing(self, service):
        with pytest.raises(NotFoundError) as excinfo:
            service.get_by_id(999)

        assert excinfo.value.entity_name == "AddressRecord"
        assert excinfo.value.entity_id == 999
        assert "999" in str(excinfo.value)

    def test_get_all(self, service):
        names = ["John Doe", "Jane Doe"]
        for name in names:
            _create(service, name=name)

        assert [dto.name for dto in service.get_all()] == names

    def test_get_all_empty(self, service):
        assert service.get_all() == []


class TestUpdate:
    def test_overwrites_fields_and_keeps_identity(self, service):
        created = _create(service, email="john@example.com", city="Boston")

        updated = service.update(
            created.id,
            AddressRecordDTO(id=12345, name="John Updated", city="Denver", createdAt="1999-01-01T00:00:00Z"),
        )

        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at
        assert updated.name == "John Updated"
        assert updated.city == "Denver"
        assert updated.email is None

    def test_missing_id_leaves_store_untouched(self):
        store = MagicMock(spec=AddressStore)
        store.find_by_id.return_value = None
        service = AddressService(store)

        with pytest.raises(NotFoundError):
            service.update(999, AddressRecordDTO(name="Anyone"))

        store.update.assert_not_called()
        store.insert.assert_not_called()

    def test_invalid_input_is_rejected_before_lookup(self):
        store = MagicMock(spec=AddressStore)
        service = AddressService(store)

        with pytest.raises(RecordValidationError):
            service.update(1, {"name": "x" * 101})

        store.find_by_id.assert_not_called()


class TestDelete:
    def test_delete_then_get_fails(self, service):
        created = _create(service)

        service.delete(created.id)

        with pytest.raises(NotFoundError):
            service.get_by_id(created.id)

    def test_delete_missing(self):
        store = MagicMock(spec=AddressStore)
        store.exists_by_id.return_value = False
        service = AddressService(store)

        with pytest.raises(NotFoundError):
            service.delete(999)

        store.delete_by_id.assert_not_called()


class TestSearch:
    @pytest.mark.parametrize("keyword", [None, "", "   "])
    def test_blank_keyword_returns_everything(self, service, keyword):
        _create(service, name="Alice Johnson")
        _create(service, name="Bob Smith")

        assert service.search(keyword) == service.get_all()

    def test_keyword_is_trimmed(self, service):
        created = _create(service, name="Alice Johnson", city="Chicago")
        _create(service, name="Bob Smith", city="Boston")

        assert service.search("  chicago ") == [created]

    def test_keyword_is_case_insensitive(self, service):
        created = _create(service, name="Alice Johnson")

        assert service.search("alice") == [created]
        assert service.search("JOHNSON") == [created]

    def test_find_by_name(self, service):
        created = _create(service, name="Alice Johnson")
        _create(service, name="Bob Smith")

        assert service.find_by_name("alice") == [created]

    def test_find_by_name_empty_string_matches_all(self, service):
        _create(service, name="Alice Johnson")
        _create(service, name="Bob Smith")

        assert len(service.find_by_name("")) == 2

    def test_find_by_city_is_exact(self, service):
        created = _create(service, city="San Francisco")

        assert service.find_by_city("San") == []
        assert service.find_by_city("SAN FRANCISCO") == [created]

    def test_find_by_email(self, service):
        created = _create(service, email="jane@test.com")

        assert service.find_by_email("JANE@TEST.COM") == [created]
