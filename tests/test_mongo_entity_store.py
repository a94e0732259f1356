from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import mongomock
import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from hr_platform.core.exceptions import InvalidArgumentError, InvalidIdError, StorageError
from hr_platform.domain.models import Employee, ExpenseItem, ExpenseReport, WorkTimeEntry
from hr_platform.domain.repositories.filters import Filter, Sort
from hr_platform.infrastructure.db.mongo_connection import MongoClientManager
from hr_platform.infrastructure.db.mongo_entity_store import MongoEntityStore


def _work_entry(employee_id, day, hours):
    start = datetime(2024, 3, day, 9, 0)
    return WorkTimeEntry(
        employee_id=employee_id,
        date=datetime(2024, 3, day),
        start_time=start,
        end_time=start + timedelta(hours=hours),
    )


class TestConstruction:
    def test_empty_collection_name_is_rejected(self, mongo_manager):
        with pytest.raises(InvalidArgumentError):
            MongoEntityStore(Employee, "  ", mongo_manager)

    def test_empty_database_name_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            MongoClientManager(database_name="", client=mongomock.MongoClient())


class TestCrud:
    def test_insert_assigns_id_and_round_trips(self, employee_store, make_employee):
        employee = make_employee()

        entity_id = employee_store.insert(employee)

        assert entity_id
        assert employee.id == entity_id
        assert employee_store.get_by_id(entity_id) == employee

    def test_insert_keeps_supplied_id(self, employee_store, make_employee):
        supplied = str(ObjectId())
        employee = make_employee(id=supplied)

        assert employee_store.insert(employee) == supplied
        assert employee_store.get_by_id(supplied).personnel_number == employee.personnel_number

    def test_duplicate_id_raises_storage_error(self, employee_store, make_employee):
        first = make_employee()
        employee_store.insert(first)

        with pytest.raises(StorageError):
            employee_store.insert(make_employee(id=first.id))
        assert employee_store.count() == 1

    def test_insert_many(self, employee_store, make_employee):
        employees = [make_employee() for _ in range(3)]

        ids = employee_store.insert_many(employees)

        assert len(set(ids)) == 3
        assert [e.id for e in employees] == ids
        assert employee_store.count() == 3

    def test_insert_many_empty_is_noop(self, employee_store):
        assert employee_store.insert_many([]) == []

    def test_insert_many_fails_as_a_unit(self, employee_store, make_employee):
        existing = make_employee()
        employee_store.insert(existing)
        batch = [make_employee(id=existing.id), make_employee()]

        with pytest.raises(StorageError):
            employee_store.insert_many(batch)
        # generated ids are rolled back on the entities
        assert batch[1].id == ""

    def test_get_by_id_missing_returns_none(self, employee_store):
        assert employee_store.get_by_id(str(ObjectId())) is None

    def test_get_by_id_malformed_raises(self, employee_store):
        with pytest.raises(InvalidIdError):
            employee_store.get_by_id("12345")

    def test_get_all(self, employee_store, make_employee):
        employee_store.insert_many([make_employee(), make_employee()])
        assert len(employee_store.get_all()) == 2

    def test_update_missing_returns_false_and_creates_nothing(self, employee_store, make_employee):
        missing_id = str(ObjectId())

        assert employee_store.update(missing_id, make_employee()) is False
        assert employee_store.count() == 0

    def test_update_unchanged_returns_false(self, employee_store, make_employee):
        employee = make_employee()
        employee_store.insert(employee)

        assert employee_store.update(employee.id, employee) is False

    def test_update_changed_returns_true_and_replaces(self, employee_store, make_employee):
        employee = make_employee()
        employee_store.insert(employee)
        employee.position = "Manager"

        assert employee_store.update(employee.id, employee) is True
        assert employee_store.get_by_id(employee.id) == employee

    def test_update_rejects_id_of_another_document(self, employee_store, make_employee):
        first, second = make_employee(), make_employee()
        employee_store.insert_many([first, second])
        second.position = "Manager"

        with pytest.raises(InvalidArgumentError):
            employee_store.update(first.id, second)
        assert employee_store.get_by_id(first.id).position == "Consultant"

    def test_delete(self, employee_store, make_employee):
        employee = make_employee()
        employee_store.insert(employee)

        assert employee_store.delete(employee.id) is True
        assert employee_store.delete(employee.id) is False
        assert employee_store.get_by_id(employee.id) is None


class TestCodec:
    def test_derived_values_are_not_stored(self, mongo_manager):
        store = MongoEntityStore(WorkTimeEntry, "work_time_entries", mongo_manager)
        entry = _work_entry("e1", 4, 7.5)
        store.insert(entry)

        doc = mongo_manager.get_collection("work_time_entries").find_one()

        assert doc["_id"] == ObjectId(entry.id)
        assert "id" not in doc
        assert "hours" not in doc
        assert store.get_by_id(entry.id).hours == 7.5

    def test_nested_items_round_trip(self, mongo_manager):
        store = MongoEntityStore(ExpenseReport, "expense_reports", mongo_manager)
        report = ExpenseReport(
            employee_id="e1",
            date=datetime(2024, 3, 1),
            items=[
                ExpenseItem(expense_type="Travel", amount=42.5, project_id="p1"),
                ExpenseItem(expense_type="Meals", amount=12.0),
            ],
        )
        store.insert(report)

        loaded = store.get_by_id(report.id)

        assert loaded == report
        assert loaded.total == 54.5
        assert "total" not in mongo_manager.get_collection("expense_reports").find_one()

    def test_sub_millisecond_datetimes_round_trip(self, mongo_manager):
        store = MongoEntityStore(WorkTimeEntry, "work_time_entries", mongo_manager)
        start = datetime(2024, 4, 1, 8, 0, 0, 123456)
        entry = WorkTimeEntry(
            employee_id="e1",
            date=datetime(2024, 4, 1),
            start_time=start,
            end_time=start + timedelta(hours=8, microseconds=999),
        )

        store.insert(entry)

        assert entry.start_time == datetime(2024, 4, 1, 8, 0, 0, 123000)
        assert store.get_by_id(entry.id) == entry

    def test_timezone_aware_datetimes_are_stored_as_utc(self, mongo_manager):
        store = MongoEntityStore(ExpenseReport, "expense_reports", mongo_manager)
        berlin = timezone(timedelta(hours=2))
        report = ExpenseReport(
            employee_id="e1",
            date=datetime(2024, 4, 1, 10, 30, tzinfo=berlin),
            items=[ExpenseItem(expense_type="Meals", amount=9.0, date=datetime(2024, 4, 1, 12, 0, 0, 500, tzinfo=timezone.utc))],
        )

        store.insert(report)

        assert report.date == datetime(2024, 4, 1, 8, 30)
        assert report.items[0].date == datetime(2024, 4, 1, 12, 0)
        assert store.get_by_id(report.id) == report

    def test_update_normalizes_datetimes(self, employee_store, make_employee):
        employee = make_employee()
        employee_store.insert(employee)
        employee.hire_date = datetime(2021, 3, 1, 9, 15, 0, 654321, tzinfo=timezone.utc)

        employee_store.update(employee.id, employee)

        assert employee_store.get_by_id(employee.id) == employee


class TestQueries:
    def test_find_with_equality_and_range(self, mongo_manager):
        store = MongoEntityStore(WorkTimeEntry, "work_time_entries", mongo_manager)
        entries = [
            _work_entry("e1", 10, 1),
            _work_entry("e2", 5, 2),
            _work_entry("e1", 1, 3),
            _work_entry("e1", 5, 4),
            _work_entry("e1", 20, 5),
            _work_entry("e2", 10, 6),
        ]
        store.insert_many(entries)

        found = store.find(
            Filter.eq("employee_id", "e1")
            & Filter.gte("date", datetime(2024, 3, 5))
            & Filter.lte("date", datetime(2024, 3, 10))
        )

        assert sorted(e.hours for e in found) == [1, 4]

    def test_search_is_case_insensitive(self, employee_store, make_employee):
        employee_store.insert_many([
            make_employee(last_name="Schneider"),
            make_employee(last_name="SCHNEIDERMANN"),
            make_employee(last_name="Weber"),
        ])

        found = employee_store.search("last_name", "schneider")

        assert sorted(e.last_name for e in found) == ["SCHNEIDERMANN", "Schneider"]

    def test_count_with_and_without_filter(self, employee_store, make_employee):
        employee_store.insert_many([make_employee(), make_employee(is_active=False), make_employee()])

        assert employee_store.count() == 3
        assert employee_store.count(Filter.eq("is_active", False)) == 1

    def test_pages_reconstruct_sorted_result(self, employee_store, make_employee):
        employees = [make_employee(last_name=name) for name in ["Fox", "Adams", "Cole", "Baker", "Evans", "Diaz", "Gray"]]
        employee_store.insert_many(employees)
        active = Filter.eq("is_active", True)
        by_name = Sort.ascending("last_name")

        pages = []
        skip = 0
        while True:
            page = employee_store.get_paged(active, skip=skip, take=3, sort=by_name)
            if not page:
                break
            pages.append(page)
            skip += 3

        assert [len(p) for p in pages] == [3, 3, 1]
        assert [e.last_name for p in pages for e in p] == sorted(e.last_name for e in employees)
        assert employee_store.get_paged(active, skip=2, take=2, sort=by_name) == sorted(
            employee_store.find(active), key=lambda e: e.last_name
        )[2:4]

    def test_paging_arguments(self, employee_store, make_employee):
        employee_store.insert(make_employee())

        assert employee_store.get_paged(None, skip=0, take=0) == []
        with pytest.raises(InvalidArgumentError):
            employee_store.get_paged(None, skip=-1, take=5)
        with pytest.raises(InvalidArgumentError):
            employee_store.get_paged(None, skip=0, take=-5)


class TestAdministration:
    def test_create_index_is_idempotent(self, employee_store):
        first = employee_store.create_index("last_name")
        second = employee_store.create_index("last_name")

        assert first == second == "last_name_1"
        assert "last_name_1" in employee_store.list_indexes()

    def test_descending_index(self, employee_store):
        assert employee_store.create_index("hire_date", ascending=False) == "hire_date_-1"

    def test_list_and_drop_collections(self, employee_store, make_employee):
        employee_store.insert(make_employee())
        assert "employees" in employee_store.list_collections()

        employee_store.drop_collection("employees")

        assert "employees" not in employee_store.list_collections()
        with pytest.raises(InvalidArgumentError):
            employee_store.drop_collection("")


def _mocked_store():
    client_manager = MagicMock()
    session = client_manager.client.start_session.return_value
    session.in_transaction = True
    store = MongoEntityStore(Employee, "employees", client_manager)
    return store, client_manager, session


class TestTransactions:
    def test_commit_on_success(self, make_employee):
        store, client_manager, session = _mocked_store()
        employee = make_employee()

        result = store.execute_in_transaction(lambda s: store.insert(employee, session=s))

        assert result == employee.id
        session.start_transaction.assert_called_once_with()
        session.commit_transaction.assert_called_once_with()
        session.abort_transaction.assert_not_called()
        collection = client_manager.get_collection.return_value
        assert collection.insert_one.call_args.kwargs["session"] is session

    def test_abort_and_reraise_on_failure(self, make_employee):
        store, _, session = _mocked_store()

        def action(s):
            store.insert(make_employee(), session=s)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            store.execute_in_transaction(action)
        session.abort_transaction.assert_called_once_with()
        session.commit_transaction.assert_not_called()

    def test_driver_errors_become_storage_errors(self):
        store, _, session = _mocked_store()
        session.commit_transaction.side_effect = OperationFailure("write conflict")

        with pytest.raises(StorageError):
            store.execute_in_transaction(lambda s: None)
        session.abort_transaction.assert_called_once_with()

    def test_writes_without_session_are_outside_the_transaction(self, make_employee):
        store, client_manager, _ = _mocked_store()

        store.execute_in_transaction(lambda s: store.insert(make_employee()))

        collection = client_manager.get_collection.return_value
        assert "session" not in collection.insert_one.call_args.kwargs


class TestPing:
    def test_ping_success(self):
        store, client_manager, _ = _mocked_store()
        client_manager.get_database.return_value.command.return_value = {"ok": 1}

        assert store.ping() is True
        client_manager.get_database.return_value.command.assert_called_once_with("ping")

    def test_ping_swallows_errors(self):
        store, client_manager, _ = _mocked_store()
        client_manager.get_database.return_value.command.side_effect = ServerSelectionTimeoutError("down")

        assert store.ping() is False


class TestTransactionRollback:
    def test_failed_action_leaves_no_writes(self, employee_store, make_employee, transaction_session):
        kept = make_employee()
        employee_store.insert(kept)

        def action(session):
            employee_store.insert(make_employee(), session=session)
            employee_store.insert(make_employee(), session=session)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            employee_store.execute_in_transaction(action)

        assert transaction_session.aborted
        assert [e.id for e in employee_store.get_all()] == [kept.id]

    def test_committed_writes_are_kept(self, employee_store, make_employee, transaction_session):
        employee_store.execute_in_transaction(lambda s: employee_store.insert(make_employee(), session=s))

        assert transaction_session.committed
        assert employee_store.count() == 1
