"""Shared fixtures: a fresh SQLite file per test and a controllable clock."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from address_directory.app.core.config import Settings
from address_directory.app.core.db import init_db
from address_directory.app.main import create_app
from address_directory.app.repositories.address_store import AddressStore
from address_directory.app.services.address_mapper import AddressMapper
from address_directory.app.services.address_service import AddressService


class StepClock:
    """Returns a new instant, one second later, on every call."""

    def __init__(self, start=datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self):
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def database_path(tmp_path):
    path = str(tmp_path / "addresses.db")
    init_db(path)
    return path


@pytest.fixture
def store(database_path, clock):
    return AddressStore(database_path, clock=clock)


@pytest.fixture
def service(store):
    return AddressService(store, AddressMapper())


@pytest.fixture
def client(tmp_path, clock):
    settings = Settings(database_url=str(tmp_path / "api.db"), log_level="WARNING")
    app = create_app(settings, clock=clock)
    with TestClient(app) as test_client:
        yield test_client
