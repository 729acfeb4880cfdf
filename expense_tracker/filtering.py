"""Category filtering and ordering for the transaction list view."""

from __future__ import annotations

import locale
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

from .categories import category_key
from .logging_setup import get_logger
from .models import NormalizedTransaction, TransactionInput
from .normalizers import normalize_transactions

_logger = get_logger("expense_tracker.filtering")


class SortOption(StrEnum):
    DATE_DESC = "date-desc"
    AMOUNT_DESC = "amount-desc"
    AMOUNT_ASC = "amount-asc"


SORT_OPTION_LABELS: dict[SortOption, str] = {
    SortOption.DATE_DESC: "Date ↓",
    SortOption.AMOUNT_DESC: "Amount ↓",
    SortOption.AMOUNT_ASC: "Amount ↑",
}


@dataclass(frozen=True, slots=True)
class FilterSortCriteria:
    """Selected category keys (empty means all) and the sort order.

    Category keys are canonicalized on construction, so ``"Food "`` and
    ``"food"`` select the same transactions.
    """

    selected_categories: frozenset[str] = field(default_factory=frozenset)
    sort_option: SortOption = SortOption.DATE_DESC

    def __post_init__(self) -> None:
        selected = self.selected_categories
        if isinstance(selected, str) or not isinstance(selected, Iterable):
            raise TypeError("selected_categories must be a collection of category keys")
        object.__setattr__(
            self, "selected_categories", frozenset(category_key(c) for c in selected)
        )
        object.__setattr__(self, "sort_option", SortOption(self.sort_option))

    def toggle(self, category: str) -> FilterSortCriteria:
        """Return criteria with ``category`` added, or removed when already selected."""

        key = category_key(category)
        if key in self.selected_categories:
            selected = self.selected_categories - {key}
        else:
            selected = self.selected_categories | {key}
        return FilterSortCriteria(selected, self.sort_option)

    def with_sort(self, sort_option: SortOption | str) -> FilterSortCriteria:
        return FilterSortCriteria(self.selected_categories, SortOption(sort_option))

    @classmethod
    def cleared(cls) -> FilterSortCriteria:
        return cls()


def _date_key(tx: NormalizedTransaction) -> date:
    # Unknown dates sort before every real date.
    return tx.date if tx.date is not None else date.min


def filter_and_sort(
    transactions: Iterable[TransactionInput],
    criteria: FilterSortCriteria | None = None,
) -> list[NormalizedTransaction]:
    """Return a new, filtered and ordered list of transactions.

    Sorting is stable for every option: equal keys keep their input order.
    ``date-desc`` puts transactions without a usable date last. The input is
    never mutated.
    """

    if criteria is None:
        criteria = FilterSortCriteria()
    elif not isinstance(criteria, FilterSortCriteria):
        raise TypeError(f"criteria must be FilterSortCriteria, got {type(criteria).__name__}")

    items = normalize_transactions(transactions)
    selected = criteria.selected_categories
    if selected:
        items = [tx for tx in items if tx.category_key in selected]

    match criteria.sort_option:
        case SortOption.AMOUNT_DESC:
            items.sort(key=lambda tx: tx.amount, reverse=True)
        case SortOption.AMOUNT_ASC:
            items.sort(key=lambda tx: tx.amount)
        case SortOption.DATE_DESC:
            items.sort(key=_date_key, reverse=True)

    _logger.debug(
        "filter_and_sort kept %d transactions (categories=%s, sort=%s)",
        len(items),
        sorted(selected) or "all",
        criteria.sort_option.value,
    )
    return items


def distinct_categories(transactions: Iterable[TransactionInput]) -> list[str]:
    """Unique category keys, alphabetized for the filter chooser."""

    keys = {tx.category_key for tx in normalize_transactions(transactions)}
    return sorted(keys, key=lambda k: (locale.strxfrm(k), k))


__all__ = [
    "SortOption",
    "SORT_OPTION_LABELS",
    "FilterSortCriteria",
    "filter_and_sort",
    "distinct_categories",
]
