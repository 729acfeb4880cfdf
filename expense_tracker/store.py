"""Record-store interface and local implementations.

The engine itself never talks to a store. :mod:`expense_tracker.api` fetches
a snapshot through a :class:`RecordStore` and hands it to the engine. Two
implementations live here:

- :class:`InMemoryRecordStore`: a list-backed store for tests and demos.
- :class:`JsonRecordStore`: the same store persisted to a JSON array file,
  used by the CLI.

Store failures surface as :class:`RecordStoreError`.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from .logging_setup import get_logger
from .models import NewTransaction, RawTransaction
from .normalizers import parse_transaction_date
from .windows import DateWindow

_logger = get_logger("expense_tracker.store")


class RecordStoreError(RuntimeError):
    """A fetch, insert or delete against the record store failed."""


@runtime_checkable
class RecordStore(Protocol):
    def fetch_transactions(
        self, user_id: str, date_range: DateWindow | None = None
    ) -> Sequence[RawTransaction]: ...

    def insert_transaction(self, user_id: str, record: NewTransaction) -> RawTransaction: ...

    def delete_transaction(self, transaction_id: str | int) -> bool: ...


def _same_id(stored: Any, wanted: Any) -> bool:
    # 1 and "1" are different records; True is not an id.
    if isinstance(stored, bool) or isinstance(wanted, bool):
        return False
    return type(stored) is type(wanted) and stored == wanted


def _sort_date(row: Mapping[str, Any]) -> date:
    parsed = parse_transaction_date(row.get("transaction_date"))
    return parsed if parsed is not None else date.min


class InMemoryRecordStore:
    """List-backed :class:`RecordStore`.

    Rows are plain dicts carrying a ``user_id`` column. Fetches return rows
    ordered by ``transaction_date`` descending (stable for equal dates), which
    is the order the list view expects from the store.
    """

    def __init__(self, rows: Iterable[Mapping[str, Any]] = ()) -> None:
        self._rows: list[dict[str, Any]] = [dict(r) for r in rows]
        self._next_id = self._initial_next_id()

    def _initial_next_id(self) -> int:
        ids = [r.get("id") for r in self._rows]
        numeric = [i for i in ids if isinstance(i, int) and not isinstance(i, bool)]
        return max(numeric, default=0) + 1

    @property
    def rows(self) -> list[dict[str, Any]]:
        return [dict(r) for r in self._rows]

    def fetch_transactions(
        self, user_id: str, date_range: DateWindow | None = None
    ) -> list[RawTransaction]:
        selected = [r for r in self._rows if str(r.get("user_id")) == str(user_id)]
        if date_range is not None:
            selected = [
                r
                for r in selected
                if date_range.contains(parse_transaction_date(r.get("transaction_date")))
            ]
        selected.sort(key=_sort_date, reverse=True)
        try:
            return [RawTransaction.model_validate(r) for r in selected]
        except ValidationError as e:
            raise RecordStoreError(f"store returned a malformed row: {e}") from e

    def insert_transaction(self, user_id: str, record: NewTransaction) -> RawTransaction:
        row: dict[str, Any] = {"id": self._next_id, **record.to_record(user_id=user_id)}
        # State changes only after the new rows are committed.
        self._commit([*self._rows, row])
        self._next_id += 1
        return RawTransaction.model_validate(row)

    def delete_transaction(self, transaction_id: str | int) -> bool:
        """Delete rows whose ``id`` equals ``transaction_id`` (type included)."""

        remaining = [r for r in self._rows if not _same_id(r.get("id"), transaction_id)]
        if len(remaining) == len(self._rows):
            return False
        self._commit(remaining)
        return True

    def _commit(self, rows: list[dict[str, Any]]) -> None:
        """Replace the stored rows; subclasses persist ``rows`` first."""

        self._rows = rows


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        # Keep integral amounts as ints and everything else as exact strings.
        return int(obj) if obj == obj.to_integral_value() else str(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class JsonRecordStore(InMemoryRecordStore):
    """:class:`InMemoryRecordStore` loaded from and written back to a JSON file.

    A missing file is treated as an empty store. The file must hold a JSON
    array of objects.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> list[Mapping[str, Any]]:
        if not self.path.exists():
            _logger.info("record file %s does not exist; starting empty", self.path)
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise RecordStoreError(f"failed to read {self.path}: {e}") from e
        if not isinstance(data, list) or not all(isinstance(r, Mapping) for r in data):
            raise RecordStoreError(f"{self.path} must contain a JSON array of objects")
        return data

    def _commit(self, rows: list[dict[str, Any]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(
                json.dumps(rows, ensure_ascii=False, indent=2, default=_json_default),
                encoding="utf-8",
            )
            tmp.replace(self.path)
        except OSError as e:
            raise RecordStoreError(f"failed to write {self.path}: {e}") from e
        super()._commit(rows)


__all__ = [
    "RecordStoreError",
    "RecordStore",
    "InMemoryRecordStore",
    "JsonRecordStore",
]
