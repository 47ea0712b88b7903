"""Exception types for the vault trading math engine.

Degenerate-but-legitimate inputs (empty pool, zero-size trade) never raise;
they return 0. These exceptions cover caller mistakes only.
"""

from __future__ import annotations


class VaultMathError(ValueError):
    """Base class for invalid-input errors raised by the engine."""


class InvalidAmountError(VaultMathError):
    """Raised when an amount or bps value is negative or cannot be parsed."""


class FeeScheduleError(VaultMathError):
    """Raised when a fee configuration is inconsistent (e.g. shares above 100%)."""


class AuthoritativeSourceError(RuntimeError):
    """Raised when an authoritative quote response is malformed."""
