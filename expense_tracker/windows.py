"""Calendar-month windows used for store queries and view labels."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Inclusive ``[start, end]`` date range."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError("window start must be on or before end")

    def contains(self, value: date | None) -> bool:
        return value is not None and self.start <= value <= self.end

    def as_query(self) -> dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


def _as_date(value: date) -> date:
    # datetime is a date subclass; compare as plain dates.
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"expected a date, got {type(value).__name__}")


def month_window(reference_date: date) -> DateWindow:
    """Return the first and last day of the month containing ``reference_date``."""

    ref = _as_date(reference_date)
    last_day = calendar.monthrange(ref.year, ref.month)[1]
    return DateWindow(ref.replace(day=1), ref.replace(day=last_day))


def shift_month(reference_date: date, delta: int) -> date:
    """Move ``reference_date`` by ``delta`` whole months.

    The day of month is kept and clamped to the target month's length, so
    ``2024-01-31`` shifted by one lands on ``2024-02-29``.
    """

    if isinstance(delta, bool) or not isinstance(delta, int):
        raise TypeError("delta must be an int")
    ref = _as_date(reference_date)
    month_index = ref.year * 12 + ref.month - 1 + delta
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(ref.day, last_day))


def window_label(reference_date: date) -> str:
    """``"MMMM YYYY"`` label, e.g. ``"February 2024"``."""

    ref = _as_date(reference_date)
    return f"{_MONTH_NAMES[ref.month - 1]} {ref.year}"


__all__ = ["DateWindow", "month_window", "shift_month", "window_label"]
