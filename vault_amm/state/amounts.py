"""
Base-unit amounts.

Every token quantity is a non-negative Python int (arbitrary precision) in
the token's smallest indivisible unit. Floats are never accepted.
"""

from __future__ import annotations

import re
from typing import Any

from ..errors import InvalidAmountError


Amount = int  # Non-negative integer (arbitrary precision), base units

BPS_DENOM = 10_000

_DECIMAL_RE = re.compile(r"[0-9]+")


def require_int(name: str, value: Any) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_amount(name: str, value: Any) -> Amount:
    """Check that `value` is a non-negative int and return it."""
    require_int(name, value)
    if value < 0:
        raise InvalidAmountError(f"{name} must be non-negative: {value}")
    return value


def parse_amount(value: Any, *, name: str = "amount") -> Amount:
    """
    Parse an amount from an int or a base-10 string.

    On-chain u64/u128 values usually arrive as decimal strings over JSON, so
    both forms are accepted. Negative numerals, floats, and anything else are
    rejected with `InvalidAmountError`.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"{name} must be an integer amount, got bool")
    if isinstance(value, int):
        if value < 0:
            raise InvalidAmountError(f"{name} must be non-negative: {value}")
        return value
    if isinstance(value, str):
        s = value.strip()
        if s.startswith("-"):
            raise InvalidAmountError(f"{name} must be non-negative: {value!r}")
        if not _DECIMAL_RE.fullmatch(s):
            raise InvalidAmountError(f"{name} must be a base-10 integer string: {value!r}")
        return int(s, 10)
    raise InvalidAmountError(f"{name} must be an int or decimal string, got {type(value).__name__}")
