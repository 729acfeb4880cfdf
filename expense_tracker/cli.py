# ruff: noqa: I001
"""Typer console interface for ``expense_tracker``.

Commands read records from a JSON file (``--data`` or
``EXPENSE_TRACKER_DATA_PATH``) scoped to one user (``--user`` or
``EXPENSE_TRACKER_USER_ID``). A local ``.env`` is loaded with
``python-dotenv`` before logging is configured, without overriding variables
that are already set.
"""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .aggregate import AggregationResult
from .amounts import format_amount
from .api import (
    add_transaction,
    load_month_summary,
    load_spending_totals,
    load_transaction_list,
    remove_transaction,
)
from .filtering import FilterSortCriteria, SortOption
from .logging_setup import configure_logging
from .normalizers import display_date
from .store import JsonRecordStore, RecordStoreError
from .windows import shift_month

_DEFAULT_DATA_PATH = "transactions.json"


# Module-level option objects (no calls in parameter defaults).
DATA_OPTION: OptionInfo = typer.Option(
    "--data",
    help="JSON record file (falls back to EXPENSE_TRACKER_DATA_PATH).",
    dir_okay=False,
)
USER_OPTION: OptionInfo = typer.Option(
    "--user",
    help="User id to scope records to (falls back to EXPENSE_TRACKER_USER_ID).",
)


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _open_store(data: Path | None) -> JsonRecordStore:
    path = data or Path(os.getenv("EXPENSE_TRACKER_DATA_PATH") or _DEFAULT_DATA_PATH)
    try:
        return JsonRecordStore(path)
    except RecordStoreError as e:
        raise _fail(str(e)) from e


def _resolve_user(user: str | None) -> str:
    resolved = user or os.getenv("EXPENSE_TRACKER_USER_ID")
    if not resolved:
        raise _fail("no user given; pass --user or set EXPENSE_TRACKER_USER_ID.")
    return resolved


def _stored_id(store: JsonRecordStore, text: str) -> str | int:
    """Map a command-line id onto the id as stored (string ids win over ints)."""

    ids = [r.get("id") for r in store.rows]
    if text in ids:
        return text
    try:
        number = int(text)
    except ValueError:
        return text
    return number if any(type(i) is int and i == number for i in ids) else text


def _currency() -> str:
    return os.getenv("EXPENSE_TRACKER_CURRENCY") or "€"


def _parse_month(value: str | None) -> date:
    if not value:
        return date.today()
    try:
        year, month = value.split("-", 1)
        return date(int(year), int(month), 1)
    except ValueError as e:
        raise _fail(f"invalid --month {value!r}; expected YYYY-MM.") from e


def _echo_totals(result: AggregationResult, *, with_percent: bool) -> None:
    symbol = _currency()
    for t in result:
        line = f"{t.display_icon} {t.label}\t{format_amount(t.sum, symbol=symbol)}\t{t.count}"
        if with_percent:
            line += f"\t{t.percent_of(result.grand_total)}%"
        typer.echo(line)
    typer.echo(f"Total spent: {format_amount(result.grand_total, symbol=symbol)}")


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Summaries and filtered lists over personal expense records.",
)


@app.callback()
def _root() -> None:
    """Load ``.env`` from the working directory and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


@app.command("totals")
def totals_cmd(
    data: Annotated[Path | None, DATA_OPTION] = None,
    user: Annotated[str | None, USER_OPTION] = None,
) -> None:
    """All-time spending by category (zero amounts are left out)."""

    store = _open_store(data)
    try:
        result = load_spending_totals(store, user_id=_resolve_user(user))
    except RecordStoreError as e:
        raise _fail(str(e)) from e
    _echo_totals(result, with_percent=False)


@app.command("month")
def month_cmd(
    data: Annotated[Path | None, DATA_OPTION] = None,
    user: Annotated[str | None, USER_OPTION] = None,
    month: Annotated[str | None, typer.Option(help="Month as YYYY-MM (default: current).")] = None,
    shift: Annotated[int, typer.Option(help="Months to move from --month (e.g. -1).")] = 0,
) -> None:
    """Category breakdown with percentages for one calendar month."""

    store = _open_store(data)
    reference = shift_month(_parse_month(month), shift)
    try:
        summary = load_month_summary(store, user_id=_resolve_user(user), reference_date=reference)
    except RecordStoreError as e:
        raise _fail(str(e)) from e
    typer.echo(summary.label)
    if not summary.result.totals:
        typer.echo("No transactions this month.")
        return
    _echo_totals(summary.result, with_percent=True)


@app.command("list")
def list_cmd(
    data: Annotated[Path | None, DATA_OPTION] = None,
    user: Annotated[str | None, USER_OPTION] = None,
    category: Annotated[
        list[str] | None, typer.Option("--category", "-c", help="Category key to keep (repeatable).")
    ] = None,
    sort: Annotated[SortOption, typer.Option(help="Sort order.")] = SortOption.DATE_DESC,
) -> None:
    """Transactions filtered by category and sorted."""

    store = _open_store(data)
    criteria = FilterSortCriteria(frozenset(category or ()), sort)
    try:
        view = load_transaction_list(store, user_id=_resolve_user(user), criteria=criteria)
    except RecordStoreError as e:
        raise _fail(str(e)) from e
    if not view.items:
        typer.echo("No transactions yet.")
        return
    symbol = _currency()
    for tx in view.items:
        line = (
            f"{tx.id}\t{display_date(tx.date)}\t{tx.category_label}\t"
            f"{format_amount(tx.amount, symbol=symbol)}"
        )
        if tx.note:
            line += f"\t{tx.note}"
        typer.echo(line)


@app.command("categories")
def categories_cmd(
    data: Annotated[Path | None, DATA_OPTION] = None,
    user: Annotated[str | None, USER_OPTION] = None,
) -> None:
    """Category keys available for filtering."""

    store = _open_store(data)
    try:
        view = load_transaction_list(store, user_id=_resolve_user(user))
    except RecordStoreError as e:
        raise _fail(str(e)) from e
    if not view.category_options:
        typer.echo("No categories yet.")
        return
    for key in view.category_options:
        typer.echo(key)


@app.command("add")
def add_cmd(
    amount: Annotated[str, typer.Option(help="Amount, e.g. 12.50.")],
    category: Annotated[str, typer.Option(help="Category, e.g. food.")],
    data: Annotated[Path | None, DATA_OPTION] = None,
    user: Annotated[str | None, USER_OPTION] = None,
    on: Annotated[str | None, typer.Option("--date", help="YYYY-MM-DD (default: today).")] = None,
    note: Annotated[str, typer.Option(help="Optional note.")] = "",
) -> None:
    """Record a new transaction."""

    store = _open_store(data)
    tx_date: date | None = None
    if on:
        try:
            tx_date = date.fromisoformat(on)
        except ValueError as e:
            raise _fail(f"invalid --date {on!r}; expected YYYY-MM-DD.") from e
    try:
        created = add_transaction(
            store,
            user_id=_resolve_user(user),
            amount=amount,
            category=category,
            transaction_date=tx_date,
            note=note,
        )
    except (ValueError, RecordStoreError) as e:
        raise _fail(str(e)) from e
    typer.echo(f"Transaction added! (id {created.id})")


@app.command("delete")
def delete_cmd(
    transaction_id: Annotated[str, typer.Argument(help="Id of the transaction to delete.")],
    data: Annotated[Path | None, DATA_OPTION] = None,
) -> None:
    """Delete a transaction by id."""

    store = _open_store(data)
    try:
        removed = remove_transaction(store, _stored_id(store, transaction_id))
    except RecordStoreError as e:
        raise _fail(str(e)) from e
    if not removed:
        raise _fail(f"transaction {transaction_id} not found.")
    typer.echo(f"Deleted transaction {transaction_id}.")


if __name__ == "__main__":  # pragma: no cover
    app()
