"""Transaction record shapes for ``expense_tracker``.

Three shapes flow through the package:

- :class:`RawTransaction`: a row as returned by the record store. Values are
  kept as received (amounts may be strings, categories may be empty) and any
  extra columns such as ``user_id`` are preserved.
- :class:`NormalizedTransaction`: the engine's canonical in-memory record
  with a finite ``Decimal`` amount, a non-empty category key and a parsed
  date (``None`` when unknown).
- :class:`NewTransaction`: a validated payload for inserting a record.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .amounts import parse_amount_input


class RawTransaction(BaseModel):
    """A transaction row as received from the record store."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str | int | None = None
    amount: Any = None
    category: Any = None
    transaction_date: Any = None
    note: Any = None


@dataclass(frozen=True, slots=True)
class NormalizedTransaction:
    """A transaction after amount/category/date coercion.

    ``amount`` is always finite. ``category_key`` is never empty and falls
    back to ``"uncategorized"``. ``date`` is ``None`` when the source date was
    missing or unparseable.
    """

    id: str | int | None
    amount: Decimal
    category_key: str
    category_label: str
    date: date | None
    note: str | None = None


# Anything the engine accepts as one transaction.
TransactionInput: TypeAlias = RawTransaction | NormalizedTransaction | Mapping[str, Any]

TransactionsInput: TypeAlias = Iterable["TransactionInput"]


class NewTransaction(BaseModel):
    """User-entered transaction, validated before it reaches the store.

    Validation messages are the ones shown to the user:
    ``"Amount must be a number"`` and ``"Please select a category"``.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    amount: Decimal
    category: str
    transaction_date: date = Field(default_factory=date.today)
    note: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_is_number(cls, v: Any) -> Decimal:
        return parse_amount_input(v)

    @field_validator("category", mode="before")
    @classmethod
    def _category_selected(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Please select a category")
        return v

    @field_validator("note", mode="before")
    @classmethod
    def _note_default(cls, v: Any) -> Any:
        return "" if v is None else v

    def to_record(self, *, user_id: str) -> dict[str, Any]:
        """Row payload for the record store (dates as ``YYYY-MM-DD``)."""

        return {
            "user_id": user_id,
            "amount": self.amount,
            "category": self.category,
            "transaction_date": self.transaction_date.isoformat(),
            "note": self.note,
        }


__all__ = [
    "RawTransaction",
    "NormalizedTransaction",
    "TransactionInput",
    "TransactionsInput",
    "NewTransaction",
]
