from datetime import datetime
from types import SimpleNamespace

import mongomock
import pytest

from hr_platform.application.services.domain_manager import DomainManager
from hr_platform.di.container import DIContainer
from hr_platform.domain.models import Employee
from hr_platform.infrastructure.db.mongo_connection import MongoClientManager
from hr_platform.infrastructure.db.mongo_entity_store import MongoEntityStore


@pytest.fixture
def mongo_manager():
    """Client manager backed by an in-memory mongomock client."""
    manager = MongoClientManager(database_name="hr_platform_test", client=mongomock.MongoClient())
    yield manager
    manager.close()


@pytest.fixture
def employee_store(mongo_manager):
    return MongoEntityStore(Employee, "employees", mongo_manager)


@pytest.fixture
def container(mongo_manager):
    return DIContainer(client_manager=mongo_manager)


@pytest.fixture
def report_settings():
    return SimpleNamespace(default_hourly_rate=120.0, planned_hours_per_day=8.0, top_consultants_limit=5)


@pytest.fixture
def manager(container, report_settings):
    return DomainManager(container.stores(), settings=report_settings)


@pytest.fixture
def make_employee():
    counter = {"n": 0}

    def _make(last_name="Doe", is_active=True, **overrides):
        counter["n"] += 1
        values = dict(
            personnel_number=f"P{counter['n']:04d}",
            first_name="Jane",
            last_name=last_name,
            email=f"jane.{counter['n']}@example.com",
            department="Consulting",
            position="Consultant",
            hire_date=datetime(2020, 1, 1),
            is_active=is_active,
        )
        values.update(overrides)
        return Employee(**values)

    return _make


class SnapshotSession:
    """
    Transactional session for the mongomock database.

    ``abort_transaction`` puts back the documents that existed when the
    transaction started, which is what the server does for writes made in
    the session.
    """

    def __init__(self, database):
        self._database = database
        self._snapshot = {}
        self.in_transaction = False
        self.committed = False
        self.aborted = False

    def __bool__(self):
        # mongomock rejects any truthy session argument
        return False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def start_transaction(self):
        self._snapshot = {
            name: list(self._database[name].find()) for name in self._database.list_collection_names()
        }
        self.in_transaction = True

    def commit_transaction(self):
        self.in_transaction = False
        self.committed = True

    def abort_transaction(self):
        for name in self._database.list_collection_names():
            collection = self._database[name]
            collection.delete_many({})
            if self._snapshot.get(name):
                collection.insert_many(self._snapshot[name])
        self.in_transaction = False
        self.aborted = True


@pytest.fixture
def transaction_session(mongo_manager, monkeypatch):
    """Every ``start_session`` on the test client hands out this session."""
    session = SnapshotSession(mongo_manager.get_database())
    monkeypatch.setattr(mongo_manager.client, "start_session", lambda: session)
    return session
