"""Public interface for the ``expense_tracker`` package.

Re-exports the transaction aggregation and filtering engine, the record-store
interface and the view-level operations. No runtime logic lives here.
"""

from .aggregate import (
    AggregationResult,
    CategoryTotal,
    ZeroAmountPolicy,
    aggregate,
    percent_of_total,
)
from .amounts import format_amount, normalize_amount, parse_amount_input
from .api import (
    MonthSummary,
    TransactionListView,
    add_transaction,
    load_month_summary,
    load_spending_totals,
    load_transaction_list,
    remove_transaction,
)
from .categories import (
    LIST_FALLBACK_COLOR,
    PIE_CHART_FALLBACK_COLOR,
    Category,
    ResolvedCategory,
    resolve_category,
)
from .filtering import (
    SORT_OPTION_LABELS,
    FilterSortCriteria,
    SortOption,
    distinct_categories,
    filter_and_sort,
)
from .models import NewTransaction, NormalizedTransaction, RawTransaction
from .normalizers import normalize_transaction
from .store import InMemoryRecordStore, JsonRecordStore, RecordStore, RecordStoreError
from .windows import DateWindow, month_window, shift_month, window_label

__all__ = [
    # Engine
    "normalize_amount",
    "parse_amount_input",
    "format_amount",
    "resolve_category",
    "month_window",
    "shift_month",
    "window_label",
    "normalize_transaction",
    "aggregate",
    "percent_of_total",
    "filter_and_sort",
    "distinct_categories",
    # Views
    "load_spending_totals",
    "load_month_summary",
    "load_transaction_list",
    "add_transaction",
    "remove_transaction",
    # Models / types
    "RawTransaction",
    "NormalizedTransaction",
    "NewTransaction",
    "Category",
    "ResolvedCategory",
    "PIE_CHART_FALLBACK_COLOR",
    "LIST_FALLBACK_COLOR",
    "DateWindow",
    "CategoryTotal",
    "AggregationResult",
    "ZeroAmountPolicy",
    "SortOption",
    "SORT_OPTION_LABELS",
    "FilterSortCriteria",
    "MonthSummary",
    "TransactionListView",
    # Store
    "RecordStore",
    "RecordStoreError",
    "InMemoryRecordStore",
    "JsonRecordStore",
]
