from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.models import NormalizedTransaction, RawTransaction
from expense_tracker.normalizers import (
    display_date,
    ensure_collection,
    normalize_transaction,
    parse_transaction_date,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-03-01", date(2024, 3, 1)),
        ("2024-03-01T10:20:00", date(2024, 3, 1)),
        (" 2024-03-01 08:00:00", date(2024, 3, 1)),
        (date(2024, 3, 1), date(2024, 3, 1)),
        (None, None),
        ("", None),
        ("yesterday", None),
        ("2024-02-30", None),
        (20240301, None),
    ],
)
def test_parse_transaction_date(raw, expected):
    assert parse_transaction_date(raw) == expected


def test_display_date_unknown():
    assert display_date(None) == "Unknown date"
    assert display_date(date(2024, 3, 1)) == "2024-03-01"


def test_normalize_mapping_row():
    tx = normalize_transaction(
        {"id": 7, "amount": "bad", "category": "  ", "transaction_date": None, "note": None}
    )
    assert tx == NormalizedTransaction(
        id=7,
        amount=Decimal("0"),
        category_key="uncategorized",
        category_label="Uncategorized",
        date=None,
        note=None,
    )


def test_normalize_raw_model_and_passthrough():
    raw = RawTransaction(id="a", amount="12.5", category="Grocery", transaction_date="2024-01-05")
    tx = normalize_transaction(raw)
    assert tx.amount == Decimal("12.5")
    assert tx.category_key == "grocery"
    assert tx.category_label == "Grocery"
    assert tx.date == date(2024, 1, 5)
    assert normalize_transaction(tx) is tx


def test_normalize_rejects_non_records():
    with pytest.raises(TypeError):
        normalize_transaction(42)


@pytest.mark.parametrize("bad", ["food", b"rows", {"amount": 1}, 3, None])
def test_ensure_collection_rejects_wrong_call_shape(bad):
    with pytest.raises(TypeError):
        ensure_collection(bad)


def test_ensure_collection_materializes_generators():
    rows = ensure_collection({"amount": i} for i in range(3))
    assert len(rows) == 3
