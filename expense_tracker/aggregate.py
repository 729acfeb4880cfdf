"""Per-category totals for summary and pie-chart views.

:func:`aggregate` folds a transaction collection into one
:class:`CategoryTotal` per category key, in first-seen order, plus a grand
total. Grouping is a single pass over a key-indexed ``dict``; dict insertion
order provides the first-seen ordering.

Zero amounts
------------
Views disagree on what to do with transactions whose amount normalizes to
zero (including malformed amounts), so the choice is explicit:

- ``ZeroAmountPolicy.INCLUDE``: counted, contributing zero to the sum. Used
  by the monthly pie chart and category breakdowns.
- ``ZeroAmountPolicy.SKIP``: dropped entirely, neither counted nor summed.
  Used by the all-time "total spent" summary.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum

from .amounts import ZERO, money_context
from .categories import PIE_CHART_FALLBACK_COLOR, resolve_category
from .logging_setup import get_logger
from .models import TransactionInput
from .normalizers import normalize_transactions
from .windows import DateWindow

_logger = get_logger("expense_tracker.aggregate")

_HUNDRED = Decimal(100)


class ZeroAmountPolicy(StrEnum):
    INCLUDE = "include"
    SKIP = "skip"


def percent_of_total(amount: Decimal, grand_total: Decimal) -> int:
    """Whole-number share of ``grand_total``, rounded half up.

    Returns 0 when ``grand_total`` is not positive.
    """

    if grand_total <= ZERO:
        return 0
    with money_context():
        share = amount / grand_total * _HUNDRED
        return int(share.quantize(Decimal(1), rounding=ROUND_HALF_UP))


@dataclass(frozen=True, slots=True)
class CategoryTotal:
    category_key: str
    label: str
    sum: Decimal
    count: int
    display_color: str
    display_icon: str

    def percent_of(self, grand_total: Decimal) -> int:
        return percent_of_total(self.sum, grand_total)


@dataclass(frozen=True, slots=True)
class AggregationResult:
    """Category totals in first-seen order and their grand total."""

    totals: tuple[CategoryTotal, ...] = ()
    grand_total: Decimal = field(default=ZERO)

    def __iter__(self) -> Iterator[CategoryTotal]:
        return iter(self.totals)

    def __len__(self) -> int:
        return len(self.totals)

    @property
    def transaction_count(self) -> int:
        return sum(t.count for t in self.totals)

    def get(self, category_key: str) -> CategoryTotal | None:
        for t in self.totals:
            if t.category_key == category_key:
                return t
        return None

    def sorted_by_sum(self, *, descending: bool = True) -> list[CategoryTotal]:
        """Totals ordered by ``sum`` for display; ties keep first-seen order."""

        return sorted(self.totals, key=lambda t: t.sum, reverse=descending)

    def percentages(self) -> list[tuple[str, int]]:
        """``(category_key, percent)`` pairs for pie labels, in result order."""

        return [(t.category_key, t.percent_of(self.grand_total)) for t in self.totals]


@dataclass(slots=True)
class _Bucket:
    label: str
    color: str
    icon: str
    sum: Decimal = ZERO
    count: int = 0


def aggregate(
    transactions: Iterable[TransactionInput],
    *,
    window: DateWindow | None = None,
    zero_amounts: ZeroAmountPolicy = ZeroAmountPolicy.INCLUDE,
    fallback_color: str = PIE_CHART_FALLBACK_COLOR,
) -> AggregationResult:
    """Group ``transactions`` by category key and total them.

    Parameters
    ----------
    transactions:
        Raw rows (mappings or :class:`~expense_tracker.models.RawTransaction`)
        or already normalized transactions.
    window:
        When given, only transactions dated inside the window are folded;
        transactions with an unknown date are left out.
    zero_amounts:
        Policy for amounts that normalize to zero (see module docs).
    fallback_color:
        Color for categories without a predefined style.

    Raises ``TypeError`` when ``transactions`` is not a collection of records.
    """

    policy = ZeroAmountPolicy(zero_amounts)
    buckets: dict[str, _Bucket] = {}
    skipped = 0

    for tx in normalize_transactions(transactions):
        if window is not None and not window.contains(tx.date):
            skipped += 1
            continue
        if policy is ZeroAmountPolicy.SKIP and tx.amount == ZERO:
            skipped += 1
            continue
        bucket = buckets.get(tx.category_key)
        if bucket is None:
            resolved = resolve_category(tx.category_label, fallback_color=fallback_color)
            bucket = _Bucket(label=tx.category_label, color=resolved.color, icon=resolved.icon)
            buckets[tx.category_key] = bucket
        with money_context():
            bucket.sum += tx.amount
        bucket.count += 1

    totals = tuple(
        CategoryTotal(
            category_key=key,
            label=b.label,
            sum=b.sum,
            count=b.count,
            display_color=b.color,
            display_icon=b.icon,
        )
        for key, b in buckets.items()
    )
    with money_context():
        grand_total = sum((t.sum for t in totals), ZERO)

    _logger.debug(
        "aggregated %d categories (grand_total=%s, skipped=%d, policy=%s)",
        len(totals),
        grand_total,
        skipped,
        policy.value,
    )
    return AggregationResult(totals=totals, grand_total=grand_total)


__all__ = [
    "ZeroAmountPolicy",
    "CategoryTotal",
    "AggregationResult",
    "aggregate",
    "percent_of_total",
]
