"""Amount coercion helpers.

``normalize_amount`` is total: whatever the record store hands back, it
returns a finite :class:`~decimal.Decimal`, using zero for anything that is
not a usable number. ``parse_amount_input`` is the strict counterpart used
when a user types a new amount.

Usable amounts are bounded: the magnitude stays below ``10**MAX_AMOUNT_DIGITS``
and there are at most ``MAX_FRACTION_DIGITS`` decimal places. Anything
outside that range counts as malformed. Sums and formatting run under
:func:`money_context`, whose precision holds any realistic total of bounded
amounts exactly.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

ZERO = Decimal("0")
_CENTS = Decimal("0.01")

MAX_AMOUNT_DIGITS = 15
MAX_FRACTION_DIGITS = 8
_MIN_UNIT = Decimal(1).scaleb(-MAX_FRACTION_DIGITS)

# Headroom over MAX_AMOUNT_DIGITS + MAX_FRACTION_DIGITS for summing many rows.
MONEY_PRECISION = 64


def money_context():
    """``decimal.localcontext`` used for folding and rendering amounts."""

    return localcontext(prec=MONEY_PRECISION)


def _in_range(d: Decimal) -> bool:
    if not d.is_finite():
        return False
    if d.is_zero():
        return True
    if d.adjusted() >= MAX_AMOUNT_DIGITS:
        return False
    return d == d.quantize(_MIN_UNIT)


def _to_decimal(raw: Any) -> Decimal | None:
    # bool is an int subclass; a flag is never an amount.
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        d = raw
    elif isinstance(raw, int):
        d = Decimal(raw)
    elif isinstance(raw, float):
        # str() keeps the shortest repr, so 0.1 stays 0.1 rather than its binary expansion
        d = Decimal(str(raw))
    elif isinstance(raw, str):
        s = raw.strip()
        # Decimal() accepts PEP 515 digit grouping; entered amounts never use it.
        if not s or "_" in s:
            return None
        try:
            d = Decimal(s)
        except InvalidOperation:
            return None
    else:
        return None
    return d if _in_range(d) else None


def normalize_amount(raw: Any) -> Decimal:
    """Return ``raw`` as a finite ``Decimal``, or ``Decimal("0")`` when unusable.

    Accepts numbers and numeric strings within the supported range. Empty or
    non-numeric strings, ``None``, NaN, infinities, booleans, out-of-range
    values and any other object normalize to zero, meaning "no monetary
    contribution". Never raises.
    """

    d = _to_decimal(raw)
    return ZERO if d is None else d


def parse_amount_input(text: Any) -> Decimal:
    """Strictly parse a user-entered amount.

    Raises ``ValueError("Amount must be a number")`` when ``text`` does not
    hold a finite number within the supported range.
    """

    d = _to_decimal(text)
    if d is None:
        raise ValueError("Amount must be a number")
    return d


def format_amount(value: Decimal, *, symbol: str = "€") -> str:
    """Render ``value`` with two decimals, prefixed by ``symbol``."""

    with money_context():
        q = value.quantize(_CENTS, rounding=ROUND_HALF_UP)
        return f"{symbol}{q:.2f}"


__all__ = [
    "ZERO",
    "MAX_AMOUNT_DIGITS",
    "MAX_FRACTION_DIGITS",
    "MONEY_PRECISION",
    "money_context",
    "normalize_amount",
    "parse_amount_input",
    "format_amount",
]
