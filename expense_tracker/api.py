"""View-level operations composing a record store with the engine.

Each function takes its store and user scope explicitly; nothing reads
ambient session state. Store failures are logged and re-raised unchanged so
the caller can show them to the user.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from pydantic import ValidationError

from .aggregate import AggregationResult, ZeroAmountPolicy, aggregate
from .categories import PIE_CHART_FALLBACK_COLOR
from .filtering import FilterSortCriteria, distinct_categories, filter_and_sort
from .logging_setup import get_logger
from .models import NewTransaction, NormalizedTransaction, RawTransaction
from .store import RecordStore, RecordStoreError
from .windows import DateWindow, month_window, window_label

_logger = get_logger("expense_tracker.api")


@dataclass(frozen=True, slots=True)
class MonthSummary:
    reference_date: date
    window: DateWindow
    label: str
    result: AggregationResult


@dataclass(frozen=True, slots=True)
class TransactionListView:
    items: list[NormalizedTransaction]
    category_options: list[str]
    criteria: FilterSortCriteria


def _fetch(
    store: RecordStore, user_id: str, date_range: DateWindow | None = None
) -> list[RawTransaction]:
    if not user_id:
        raise ValueError("user_id is required")
    try:
        rows = list(store.fetch_transactions(user_id, date_range))
    except RecordStoreError:
        _logger.error("fetch failed for user %s (range=%s)", user_id, date_range)
        raise
    _logger.debug("fetched %d transactions for user %s", len(rows), user_id)
    return rows


def load_spending_totals(store: RecordStore, *, user_id: str) -> AggregationResult:
    """All-time totals by category for the summary screen.

    Transactions whose amount normalizes to zero (including malformed
    amounts) are left out of both sums and counts.
    """

    return aggregate(_fetch(store, user_id), zero_amounts=ZeroAmountPolicy.SKIP)


def load_month_summary(
    store: RecordStore,
    *,
    user_id: str,
    reference_date: date,
    zero_amounts: ZeroAmountPolicy = ZeroAmountPolicy.INCLUDE,
) -> MonthSummary:
    """Per-category breakdown for the month containing ``reference_date``."""

    window = month_window(reference_date)
    rows = _fetch(store, user_id, window)
    result = aggregate(
        rows,
        window=window,
        zero_amounts=zero_amounts,
        fallback_color=PIE_CHART_FALLBACK_COLOR,
    )
    return MonthSummary(
        reference_date=reference_date,
        window=window,
        label=window_label(reference_date),
        result=result,
    )


def load_transaction_list(
    store: RecordStore,
    *,
    user_id: str,
    criteria: FilterSortCriteria | None = None,
) -> TransactionListView:
    """Filtered, ordered transactions plus the category options to filter by."""

    criteria = criteria or FilterSortCriteria()
    rows = _fetch(store, user_id)
    return TransactionListView(
        items=filter_and_sort(rows, criteria),
        category_options=distinct_categories(rows),
        criteria=criteria,
    )


def _validation_message(err: ValidationError) -> str:
    first = err.errors()[0]
    cause = first.get("ctx", {}).get("error")
    return str(cause) if cause is not None else first["msg"]


def add_transaction(
    store: RecordStore,
    *,
    user_id: str,
    amount: Any,
    category: Any,
    transaction_date: date | None = None,
    note: str | None = None,
) -> RawTransaction:
    """Validate user input and insert it.

    Raises ``ValueError`` with a user-facing message for invalid input
    (``"Amount must be a number"``, ``"Please select a category"``).
    """

    if not user_id:
        raise ValueError("user_id is required")
    payload: dict[str, Any] = {"amount": amount, "category": category, "note": note}
    if transaction_date is not None:
        payload["transaction_date"] = transaction_date
    try:
        record = NewTransaction.model_validate(payload)
    except ValidationError as e:
        raise ValueError(_validation_message(e)) from e

    try:
        created = store.insert_transaction(user_id, record)
    except RecordStoreError:
        _logger.error("insert failed for user %s", user_id)
        raise
    _logger.info(
        "added transaction %s for user %s (%s %s)",
        created.id,
        user_id,
        record.category,
        record.amount,
    )
    return created


def remove_transaction(store: RecordStore, transaction_id: str | int) -> bool:
    """Delete one transaction; returns ``False`` when no row matched."""

    try:
        removed = store.delete_transaction(transaction_id)
    except RecordStoreError:
        _logger.error("delete failed for transaction %s", transaction_id)
        raise
    if removed:
        _logger.info("deleted transaction %s", transaction_id)
    else:
        _logger.warning("transaction %s not found; nothing deleted", transaction_id)
    return removed


__all__ = [
    "MonthSummary",
    "TransactionListView",
    "load_spending_totals",
    "load_month_summary",
    "load_transaction_list",
    "add_transaction",
    "remove_transaction",
]
