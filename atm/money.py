# -*- coding: utf-8 -*-
"""
Money Handling Utilities.

Purpose:
- Enforces that all monetary values are handled with `Decimal`, not float,
  so balances behave like integer cents and never drift.
- Parses user-typed amounts into a recoverable result instead of raising,
  so the menu loop can report the problem and carry on.
- Formats amounts for display (always 2dp) and for history records and the
  saved file (compact form, e.g. 200.0).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Optional

import atm.config as cfg
from .errors import AmountOverLimit, InvalidAmount

CENTS = Decimal("0.01")


def as_money(value) -> Decimal:
    """
    Normalize any input to Decimal with 2 fractional digits.

    Floats go through str() first so 0.1 stays 0.10 and not
    0.1000000000000000055511151231257827.
    """
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_EVEN)


def validate_amount_positive_in_limits(amount) -> Decimal:
    """
    Validate that the amount is within allowed limits and return normalized Decimal.

    Rules:
    - Must be >= MIN_TRANSACTION (0.01); anything that rounds to 0.00 fails.
    - Must be <= MAX_TRANSACTION; raises AmountOverLimit otherwise.
    """
    amt = as_money(amount)
    if amt < as_money(cfg.MIN_TRANSACTION):
        raise InvalidAmount(f"Amount must be >= {cfg.MIN_TRANSACTION}")
    if amt > as_money(cfg.MAX_TRANSACTION):
        raise AmountOverLimit(f"Amount must be <= {cfg.MAX_TRANSACTION}")
    return amt


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one line of user input."""
    ok: bool
    value: Optional[object] = None
    error: str = ""


# Plain ASCII decimal with optional sign and an exponent of up to 4 digits.
_AMOUNT_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d{1,4})?", re.ASCII)


def parse_amount(text: str) -> ParseResult:
    """
    Parse a typed amount such as "200", "99.5" or "1e3".

    Anything else, and values too large for the Decimal context, give
    ok=False. Sign and size are not checked here: those are policy
    questions for the account.
    """
    raw = (text or "").strip()
    if not raw:
        return ParseResult(False, error="empty input")
    if not _AMOUNT_RE.fullmatch(raw):
        return ParseResult(False, error=f"not a number: {raw!r}")
    try:
        return ParseResult(True, value=as_money(Decimal(raw)))
    except InvalidOperation:
        return ParseResult(False, error=f"out of range: {raw!r}")


def fmt_money(x) -> str:
    """Display form: currency prefix and exactly two decimals, e.g. 'Rs. 4800.00'."""
    return f"{cfg.CURRENCY_PREFIX}{as_money(x):.2f}"


def compact_amount(x) -> str:
    """
    Record form used in history entries and on the balance line of the
    saved file: trailing zeros trimmed, one fractional digit kept.

    200.00 -> '200.0', 200.50 -> '200.5', 200.25 -> '200.25'
    """
    whole, frac = f"{as_money(x):.2f}".split(".")
    return f"{whole}.{frac.rstrip('0') or '0'}"
