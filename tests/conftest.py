"""Pytest configuration for test isolation.

The CLI reads its record file, user scope, currency and log level from
``EXPENSE_TRACKER_*`` environment variables (optionally loaded from a
``.env`` in the working directory). A developer's own environment must not
leak into tests, so every test starts from a clean set of those variables, a
temporary working directory and an unconfigured package logger.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from expense_tracker.logging_setup import reset_logging

_ENV_VARS = (
    "EXPENSE_TRACKER_DATA_PATH",
    "EXPENSE_TRACKER_USER_ID",
    "EXPENSE_TRACKER_CURRENCY",
    "EXPENSE_TRACKER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("EXPENSE_TRACKER_DATA_PATH", os.fspath(tmp_path / "transactions.json"))
    yield
    reset_logging()


@pytest.fixture
def sample_rows() -> list[dict]:
    """Rows as the record store returns them, newest first, for two users."""

    return [
        {"id": 1, "user_id": "u1", "amount": 50, "category": "food",
         "transaction_date": "2024-03-01", "note": "lunch"},
        {"id": 2, "user_id": "u1", "amount": "bad", "category": "",
         "transaction_date": None, "note": None},
        {"id": 3, "user_id": "u1", "amount": 20, "category": "FOOD",
         "transaction_date": "2024-03-02", "note": None},
        {"id": 4, "user_id": "u1", "amount": "12.5", "category": " Transport ",
         "transaction_date": "2024-02-28", "note": "bus"},
        {"id": 5, "user_id": "u1", "amount": 0, "category": "bills",
         "transaction_date": "2024-03-15", "note": None},
        {"id": 6, "user_id": "u2", "amount": 99, "category": "food",
         "transaction_date": "2024-03-05", "note": None},
    ]
