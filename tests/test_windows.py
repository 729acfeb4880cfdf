from datetime import date, datetime

import pytest

from expense_tracker.windows import DateWindow, month_window, shift_month, window_label


def test_month_window_leap_february():
    w = month_window(date(2024, 2, 15))
    assert w.as_query() == {"start": "2024-02-01", "end": "2024-02-29"}


def test_month_window_non_leap_and_december():
    assert month_window(date(2023, 2, 1)).end == date(2023, 2, 28)
    w = month_window(datetime(2024, 12, 31, 23, 59))
    assert (w.start, w.end) == (date(2024, 12, 1), date(2024, 12, 31))


def test_window_contains_is_inclusive_and_rejects_unknown():
    w = month_window(date(2024, 3, 10))
    assert w.contains(date(2024, 3, 1))
    assert w.contains(date(2024, 3, 31))
    assert not w.contains(date(2024, 4, 1))
    assert not w.contains(None)


def test_window_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        DateWindow(date(2024, 3, 2), date(2024, 3, 1))


@pytest.mark.parametrize(
    ("ref", "delta", "expected"),
    [
        (date(2024, 3, 15), 1, date(2024, 4, 15)),
        (date(2024, 1, 15), -1, date(2023, 12, 15)),
        (date(2024, 1, 31), 1, date(2024, 2, 29)),
        (date(2024, 5, 10), -17, date(2022, 12, 10)),
        (date(2024, 5, 10), 0, date(2024, 5, 10)),
    ],
)
def test_shift_month(ref, delta, expected):
    assert shift_month(ref, delta) == expected


def test_window_label():
    assert window_label(date(2024, 2, 15)) == "February 2024"
