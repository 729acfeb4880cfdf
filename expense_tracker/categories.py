"""Category resolution and display metadata.

Raw category labels arrive as free text (possibly empty, padded or in mixed
case). :func:`resolve_category` turns one into a canonical lowercase key, a
display label and the icon/color pair used by the views.

Display styling is keyed by the closed :class:`Category` enum. Keys outside
the enum resolve to ``Category.UNKNOWN``, whose color is supplied by the
caller because the pie chart and the transaction list use different neutral
tones (``PIE_CHART_FALLBACK_COLOR`` and ``LIST_FALLBACK_COLOR``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

UNCATEGORIZED_KEY = "uncategorized"
UNCATEGORIZED_LABEL = "Uncategorized"

FALLBACK_ICON = "❓"
# Neutral tones for categories without a style; the two views never shared one.
PIE_CHART_FALLBACK_COLOR = "#999"
LIST_FALLBACK_COLOR = "#4a90e2"


class Category(StrEnum):
    FOOD = "food"
    TRANSPORT = "transport"
    GROCERY = "grocery"
    BILLS = "bills"
    ENTERTAINMENT = "entertainment"
    UNKNOWN = "unknown"

    @classmethod
    def from_key(cls, key: str) -> Category:
        """Return the styled category for ``key`` or ``UNKNOWN``."""

        try:
            return cls(key)
        except ValueError:
            return cls.UNKNOWN

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True, slots=True)
class CategoryStyle:
    icon: str
    color: str


def style_for(category: Category, *, fallback_color: str = LIST_FALLBACK_COLOR) -> CategoryStyle:
    """Exhaustive icon/color mapping for :class:`Category`."""

    match category:
        case Category.FOOD:
            return CategoryStyle("🍴", "#4CAF50")
        case Category.TRANSPORT:
            return CategoryStyle("🚌", "#2196F3")
        case Category.GROCERY:
            return CategoryStyle("🛒", "#FF9800")
        case Category.BILLS:
            return CategoryStyle("🏠", "#E91E63")
        case Category.ENTERTAINMENT:
            return CategoryStyle("🍿", "#9C27B0")
        case Category.UNKNOWN:
            return CategoryStyle(FALLBACK_ICON, fallback_color)
    raise TypeError(f"not a Category: {category!r}")


# Categories offered when entering a new transaction, in picker order.
PICKER_CATEGORIES: tuple[Category, ...] = (
    Category.FOOD,
    Category.TRANSPORT,
    Category.GROCERY,
    Category.BILLS,
    Category.ENTERTAINMENT,
)


@dataclass(frozen=True, slots=True)
class ResolvedCategory:
    key: str
    label: str
    icon: str
    color: str
    kind: Category


def _clean_label(raw: Any) -> str:
    if raw is None:
        return ""
    return (raw if isinstance(raw, str) else str(raw)).strip()


def category_key(raw: Any) -> str:
    """Canonical grouping/filtering key for a raw label."""

    label = _clean_label(raw)
    return label.lower() if label else UNCATEGORIZED_KEY


def resolve_category(raw: Any, *, fallback_color: str = LIST_FALLBACK_COLOR) -> ResolvedCategory:
    """Map a raw category label to its key, label and display metadata.

    Empty (after trimming) or missing labels become ``"Uncategorized"`` with
    the ``"uncategorized"`` key. Otherwise the key is the lowercased trimmed
    label and the label keeps its original casing. Never raises.
    """

    label = _clean_label(raw)
    if not label:
        key, label = UNCATEGORIZED_KEY, UNCATEGORIZED_LABEL
    else:
        key = label.lower()
    kind = Category.from_key(key)
    style = style_for(kind, fallback_color=fallback_color)
    return ResolvedCategory(key=key, label=label, icon=style.icon, color=style.color, kind=kind)


__all__ = [
    "UNCATEGORIZED_KEY",
    "UNCATEGORIZED_LABEL",
    "FALLBACK_ICON",
    "PIE_CHART_FALLBACK_COLOR",
    "LIST_FALLBACK_COLOR",
    "Category",
    "CategoryStyle",
    "style_for",
    "PICKER_CATEGORIES",
    "ResolvedCategory",
    "category_key",
    "resolve_category",
]
