"""Raw record → :class:`NormalizedTransaction` conversion.

Normalization never fails on data: bad amounts become zero, blank categories
become ``"uncategorized"`` and unreadable dates become ``None``. Only a wrong
call shape (an element that is not a record at all) raises ``TypeError``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from .amounts import normalize_amount
from .categories import resolve_category
from .models import NormalizedTransaction, RawTransaction, TransactionInput

UNKNOWN_DATE_LABEL = "Unknown date"


def parse_transaction_date(raw: Any) -> date | None:
    """Parse a ``YYYY-MM-DD`` value (time suffix tolerated) or return ``None``."""

    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return None
    s = raw.strip()
    if not s:
        return None
    # Accept 'YYYY-MM-DD', 'YYYY-MM-DDTHH:MM:SS' and 'YYYY-MM-DD HH:MM:SS'.
    first = s.split()[0].split("T", 1)[0]
    try:
        return date.fromisoformat(first)
    except ValueError:
        return None


def display_date(value: date | None) -> str:
    return value.isoformat() if value is not None else UNKNOWN_DATE_LABEL


def _fields(tx: TransactionInput) -> Mapping[str, Any]:
    if isinstance(tx, RawTransaction):
        return tx.model_dump()
    if isinstance(tx, Mapping):
        return tx
    raise TypeError(
        f"transaction must be a mapping or RawTransaction, got {type(tx).__name__}"
    )


def normalize_transaction(tx: TransactionInput) -> NormalizedTransaction:
    """Coerce one record into the canonical shape.

    ``NormalizedTransaction`` instances pass through unchanged.
    """

    if isinstance(tx, NormalizedTransaction):
        return tx
    row = _fields(tx)
    category = resolve_category(row.get("category"))
    note = row.get("note")
    return NormalizedTransaction(
        id=row.get("id"),
        amount=normalize_amount(row.get("amount")),
        category_key=category.key,
        category_label=category.label,
        date=parse_transaction_date(row.get("transaction_date")),
        note=None if note is None else str(note),
    )


def ensure_collection(transactions: Any) -> list[Any]:
    """Materialize ``transactions`` after rejecting non-collection inputs.

    Strings, bytes, single mappings/records and non-iterables are programmer
    errors and raise ``TypeError``.
    """

    if isinstance(transactions, (str, bytes, Mapping, RawTransaction, NormalizedTransaction)):
        raise TypeError(
            f"transactions must be a collection of records, got {type(transactions).__name__}"
        )
    if not isinstance(transactions, Iterable):
        raise TypeError(
            f"transactions must be iterable, got {type(transactions).__name__}"
        )
    return list(transactions)


def normalize_transactions(transactions: Iterable[TransactionInput]) -> list[NormalizedTransaction]:
    return [normalize_transaction(tx) for tx in ensure_collection(transactions)]


__all__ = [
    "UNKNOWN_DATE_LABEL",
    "parse_transaction_date",
    "display_date",
    "normalize_transaction",
    "normalize_transactions",
    "ensure_collection",
]
