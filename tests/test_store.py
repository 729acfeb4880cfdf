import json
from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.models import NewTransaction
from expense_tracker.store import (
    InMemoryRecordStore,
    JsonRecordStore,
    RecordStore,
    RecordStoreError,
)
from expense_tracker.windows import month_window


def test_stores_satisfy_protocol(tmp_path):
    assert isinstance(InMemoryRecordStore(), RecordStore)
    assert isinstance(JsonRecordStore(tmp_path / "x.json"), RecordStore)


def test_fetch_scopes_by_user_and_orders_newest_first(sample_rows):
    store = InMemoryRecordStore(sample_rows)
    rows = store.fetch_transactions("u1")
    assert [r.id for r in rows] == [5, 3, 1, 4, 2]
    assert all(r.model_extra["user_id"] == "u1" for r in rows)


def test_fetch_with_date_range(sample_rows):
    store = InMemoryRecordStore(sample_rows)
    rows = store.fetch_transactions("u1", month_window(date(2024, 2, 10)))
    assert [r.id for r in rows] == [4]


def test_insert_and_delete(sample_rows):
    store = InMemoryRecordStore(sample_rows)
    created = store.insert_transaction(
        "u1",
        NewTransaction(amount="4.20", category="grocery", transaction_date=date(2024, 3, 3)),
    )
    assert created.id == 7
    assert created.amount == Decimal("4.20")
    assert created.transaction_date == "2024-03-03"
    assert store.delete_transaction("7") is False
    assert store.delete_transaction(7) is True
    assert store.delete_transaction(7) is False


def test_delete_matches_id_type_exactly():
    store = InMemoryRecordStore(
        [
            {"id": 1, "user_id": "u1", "amount": 5},
            {"id": "1", "user_id": "u1", "amount": 6},
        ]
    )
    assert store.delete_transaction(1) is True
    assert [r["id"] for r in store.rows] == ["1"]
    assert store.delete_transaction(True) is False


def _unwritable_path(tmp_path):
    # A regular file where the data directory should be makes every write fail.
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    return blocker / "tx.json"


def test_failed_insert_leaves_store_unchanged(tmp_path, sample_rows):
    path = tmp_path / "tx.json"
    path.write_text(json.dumps(sample_rows), encoding="utf-8")
    store = JsonRecordStore(path)
    before = store.rows
    store.path = _unwritable_path(tmp_path)

    with pytest.raises(RecordStoreError, match="failed to write"):
        store.insert_transaction("u1", NewTransaction(amount=1, category="food"))
    assert store.rows == before
    assert [r.id for r in store.fetch_transactions("u1")] == [5, 3, 1, 4, 2]

    store.path = path
    created = store.insert_transaction("u1", NewTransaction(amount=1, category="food"))
    assert created.id == 7


def test_failed_delete_leaves_store_unchanged(tmp_path, sample_rows):
    path = tmp_path / "tx.json"
    path.write_text(json.dumps(sample_rows), encoding="utf-8")
    store = JsonRecordStore(path)
    before = store.rows
    store.path = _unwritable_path(tmp_path)

    with pytest.raises(RecordStoreError):
        store.delete_transaction(1)
    assert store.rows == before
    assert json.loads(path.read_text(encoding="utf-8")) == sample_rows


def test_json_store_round_trips_through_file(tmp_path, sample_rows):
    path = tmp_path / "data" / "tx.json"
    store = JsonRecordStore(path)
    assert store.fetch_transactions("u1") == []

    store.insert_transaction(
        "u1", NewTransaction(amount="12.5", category="food", transaction_date=date(2024, 3, 1))
    )
    store.insert_transaction(
        "u1", NewTransaction(amount=3, category="bills", transaction_date=date(2024, 3, 2))
    )
    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert [r["amount"] for r in on_disk] == ["12.5", 3]

    reloaded = JsonRecordStore(path)
    assert [r.id for r in reloaded.fetch_transactions("u1")] == [2, 1]
    assert reloaded.delete_transaction(1)
    assert [r["id"] for r in json.loads(path.read_text(encoding="utf-8"))] == [2]


@pytest.mark.parametrize("content", ["{not json", '{"id": 1}', "[1, 2]"])
def test_json_store_rejects_bad_files(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(RecordStoreError):
        JsonRecordStore(path)
