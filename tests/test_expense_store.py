"""Tests for the observable, persisted expense store."""

import itertools
import json
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from expense_tracker.models.expense import MAX_EXPENSE_VALUE, Expense, PaymentMethod
from expense_tracker.services.storage import InMemoryStorage
from expense_tracker.stores import DEFAULT_EXPENSES_KEY, ExpenseStore
from expense_tracker.validation import InvalidExpenseError

from conftest import FailingStorage, make_draft


@pytest.fixture
def store(storage):
    return ExpenseStore(storage)


class TestAdd:

    def test_add_assigns_fresh_id_and_keeps_fields(self, store):
        draft = make_draft(day="2025-01-06", method="credit", value="35.90",
                           category="lazer", subcategory="bar", description="Happy hour")
        expense = store.add(draft)

        assert len(store.list()) == 1
        assert expense.id
        assert expense.to_draft() == draft
        assert store.list()[0] == expense

    def test_ids_are_unique(self, store):
        ids = {store.add(make_draft()).id for _ in range(20)}
        assert len(ids) == 20

    def test_colliding_id_factory_is_retried(self, storage):
        ids = itertools.chain(["dup", "dup", "dup"], (f"id-{n}" for n in itertools.count()))
        store = ExpenseStore(storage, id_factory=lambda: next(ids))
        first = store.add(make_draft())
        second = store.add(make_draft())
        assert first.id == "dup"
        assert second.id == "id-0"

    def test_add_accepts_mapping(self, store):
        expense = store.add({
            "value": 120,
            "paymentMethod": "debit",
            "date": "2025-02-10",
            "category": "moradia",
            "subcategory": "luz",
        })
        assert expense.value == Decimal("120")
        assert expense.payment_method == PaymentMethod.DEBIT

    def test_mapping_id_is_ignored(self, store):
        expense = store.add({
            "id": "chosen-by-caller",
            "value": 1, "paymentMethod": "debit", "date": "2025-02-10",
            "category": "moradia", "subcategory": "luz",
        })
        assert expense.id != "chosen-by-caller"

    def test_invalid_input_is_rejected_without_side_effects(self, store, storage):
        notified = []
        store.subscribe(notified.append)

        with pytest.raises(InvalidExpenseError) as exc_info:
            store.add({
                "value": 10, "paymentMethod": "debit", "date": "31/01/2025",
                "category": "mercado", "subcategory": "comida",
            })

        assert exc_info.value.issues[0].field == "date"
        assert store.list() == ()
        assert notified == []
        assert storage.read(DEFAULT_EXPENSES_KEY) is None

    def test_add_persists_full_collection(self, store, storage):
        store.add(make_draft(value="1.00"))
        store.add(make_draft(value="2.00"))
        document = json.loads(storage.read(DEFAULT_EXPENSES_KEY))
        assert [item["value"] for item in document] == [1.0, 2.0]
        assert set(document[0]) == {"id", "value", "paymentMethod", "date", "category", "subcategory"}


class TestUpdate:

    def test_update_replaces_record_and_keeps_id(self, store):
        original = store.add(make_draft(value="10.00"))
        other = store.add(make_draft(value="20.00"))
        new_data = make_draft(day="2025-03-03", method="credit", value="15.00",
                              category="saude", subcategory="remedios")

        store.update(original.id, new_data)

        assert len(store.list()) == 2
        updated = store.get(original.id)
        assert updated == Expense.from_draft(new_data, original.id)
        assert store.get(other.id) == other

    def test_update_preserves_position(self, store):
        first = store.add(make_draft(value="1.00"))
        store.add(make_draft(value="2.00"))
        store.update(first.id, make_draft(value="3.00"))
        assert store.list()[0].id == first.id

    def test_update_unknown_id_is_noop(self, store):
        expense = store.add(make_draft())
        store.update("missing", make_draft(value="99.00"))
        assert store.list() == (expense,)

    def test_update_rejects_invalid_data(self, store):
        expense = store.add(make_draft())
        with pytest.raises(InvalidExpenseError):
            store.update(expense.id, {"value": -1})
        assert store.get(expense.id) == expense


class TestDelete:

    def test_delete_removes_record(self, store):
        keep = store.add(make_draft())
        gone = store.add(make_draft())
        store.delete(gone.id)
        assert store.list() == (keep,)
        assert store.get(gone.id) is None

    def test_repeated_delete_is_idempotent(self, store):
        expense = store.add(make_draft())
        store.delete(expense.id)
        store.delete(expense.id)
        store.delete("never-existed")
        assert store.list() == ()


class TestPersistence:

    def test_round_trip(self, storage):
        store = ExpenseStore(storage)
        store.add(make_draft(day="2025-01-05", method="credit", value="12.50"))
        store.add(make_draft(day="2025-01-06", value="0.10", description="café"))

        reloaded = ExpenseStore(storage)
        assert reloaded.list() == store.list()

    def test_round_trip_at_largest_value(self, storage):
        store = ExpenseStore(storage)
        store.add(make_draft(value=str(MAX_EXPENSE_VALUE)))
        store.add(make_draft(value="1234567890123.45"))

        reloaded = ExpenseStore(storage)
        assert reloaded.list() == store.list()
        assert reloaded.list()[0].value == MAX_EXPENSE_VALUE

    def test_loads_existing_document(self):
        storage = InMemoryStorage({
            DEFAULT_EXPENSES_KEY: json.dumps([{
                "id": "legacy-1",
                "value": 50,
                "paymentMethod": "credit",
                "date": "2025-01-20",
                "category": "transporte",
                "subcategory": "gasolina",
            }]),
        })
        store = ExpenseStore(storage)
        assert [expense.id for expense in store.list()] == ["legacy-1"]

    def test_custom_storage_key(self, storage):
        store = ExpenseStore(storage, storage_key="other-expenses")
        store.add(make_draft())
        assert storage.read("other-expenses") is not None
        assert storage.read(DEFAULT_EXPENSES_KEY) is None

    def test_corrupt_document_starts_empty(self):
        storage = InMemoryStorage({DEFAULT_EXPENSES_KEY: "{not json"})
        assert ExpenseStore(storage).list() == ()

    def test_invalid_records_start_empty(self):
        storage = InMemoryStorage({DEFAULT_EXPENSES_KEY: json.dumps([{"id": "x"}])})
        assert ExpenseStore(storage).list() == ()

    def test_read_failure_starts_empty(self):
        store = ExpenseStore(FailingStorage(fail_reads=True, fail_writes=False))
        assert store.list() == ()

    def test_write_failure_keeps_in_memory_state(self):
        storage = FailingStorage(fail_writes=True)
        store = ExpenseStore(storage)

        expense = store.add(make_draft())

        assert storage.write_attempts == 1
        assert store.list() == (expense,)

    def test_write_failure_is_logged(self):
        with capture_logs() as logs:
            store = ExpenseStore(FailingStorage(fail_writes=True))
            store.add(make_draft())

        failures = [
            entry for entry in logs
            if entry.get("event_type") == "storage_write_failed"
        ]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "error"

    def test_reload_reads_storage_again(self, storage):
        store = ExpenseStore(storage)
        other = ExpenseStore(storage)
        expense = other.add(make_draft())

        assert store.list() == ()
        assert store.reload() == (expense,)

    def test_reload_after_failed_write_restores_persisted_state(self):
        storage = FailingStorage(fail_writes=False)
        store = ExpenseStore(storage)
        kept = store.add(make_draft(day="2025-01-01"))

        storage.fail_writes = True
        store.add(make_draft(day="2025-01-02"))
        assert len(store) == 2

        assert store.reload() == (kept,)
        assert store.list() == (kept,)


class TestSubscriptions:

    def test_every_subscriber_gets_same_snapshot_in_order(self, store):
        calls = []
        store.subscribe(lambda snapshot: calls.append(("first", snapshot)))
        store.subscribe(lambda snapshot: calls.append(("second", snapshot)))

        expense = store.add(make_draft())

        assert [name for name, _ in calls] == ["first", "second"]
        assert calls[0][1] is calls[1][1]
        assert calls[0][1] == (expense,)

    def test_one_notification_per_mutation(self, store):
        snapshots = []
        store.subscribe(snapshots.append)

        expense = store.add(make_draft())
        store.update(expense.id, make_draft(value="5.00"))
        store.delete(expense.id)

        assert len(snapshots) == 3
        assert snapshots[-1] == ()

    def test_unsubscribe_stops_notifications(self, store):
        snapshots = []
        unsubscribe = store.subscribe(snapshots.append)
        store.add(make_draft())
        unsubscribe()
        unsubscribe()
        store.add(make_draft())
        assert len(snapshots) == 1

    def test_same_listener_registered_twice(self, store):
        snapshots = []
        first = store.subscribe(snapshots.append)
        store.subscribe(snapshots.append)
        first()
        store.add(make_draft())
        assert len(snapshots) == 1

    def test_listener_may_unsubscribe_during_notification(self, store):
        calls = []

        def once(snapshot):
            calls.append("once")
            dispose()

        dispose = store.subscribe(once)
        store.subscribe(lambda snapshot: calls.append("always"))

        store.add(make_draft())
        store.add(make_draft())

        assert calls == ["once", "always", "always"]

    def test_snapshot_is_not_affected_by_later_mutations(self, store):
        snapshots = []
        store.subscribe(snapshots.append)
        store.add(make_draft())
        store.add(make_draft())
        assert len(snapshots[0]) == 1
        assert len(snapshots[1]) == 2

    def test_subscriber_error_propagates_after_persisting(self, store, storage):
        def broken(snapshot):
            raise RuntimeError("view crashed")

        store.subscribe(broken)
        with pytest.raises(RuntimeError):
            store.add(make_draft())

        assert len(ExpenseStore(storage).list()) == 1

    def test_stores_are_independent(self):
        a = ExpenseStore(InMemoryStorage())
        b = ExpenseStore(InMemoryStorage())
        a.add(make_draft())
        assert len(a) == 1
        assert len(b) == 0


class TestFilterByPeriod:

    def test_store_filter_uses_billing_rule(self, store):
        boundary = store.add(make_draft(day="2025-01-05", method="credit"))
        rolled = store.add(make_draft(day="2025-01-06", method="credit"))
        debit = store.add(make_draft(day="2025-01-06", method="debit"))

        assert store.filter_by_period(2025, 1, 5) == (boundary, debit)
        assert store.filter_by_period(2025, 2, 5) == (rolled,)

    def test_filter_sees_latest_state(self, store):
        expense = store.add(make_draft(day="2025-01-06", method="credit"))
        assert store.filter_by_period(2025, 2, 5) == (expense,)
        store.update(expense.id, make_draft(day="2025-01-06", method="debit"))
        assert store.filter_by_period(2025, 2, 5) == ()
        assert len(store.filter_by_period(2025, 1, 5)) == 1
