"""
Vault AMM kernel (v1 semantics).

Integer-only mirror of the on-chain vault trading contract:
- Fee is charged on the *gross* input amount using floor rounding:
    fee = floor(gross_in * fee_bps / 10_000)
- Pricing uses `net_in = gross_in - fee` against a constant-product curve:
    amount_out = floor(reserve_out * net_in / (reserve_in + net_in))
- Spot prices are fixed-point ratios: floor(numerator * scale / denominator).

Degenerate inputs (zero input, empty reserve, zero denominator) yield 0
instead of raising; they describe real pool states, not caller mistakes.
"""

from __future__ import annotations

from dataclasses import dataclass


BPS_DENOM = 10_000
PRICE_SCALE = 1_000_000_000


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_non_negative(name: str, value: int) -> None:
    _require_int(name, value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


@dataclass(frozen=True)
class SwapQuoteResult:
    amount_out: int
    fee_amount: int
    net_in: int
    gross_in: int
    applied_fee_bps: int


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """
    `floor(a * b / denominator)` for non-negative operands.

    Returns 0 when `denominator == 0`.
    """
    for name, v in (("a", a), ("b", b), ("denominator", denominator)):
        _require_non_negative(name, v)
    if denominator == 0:
        return 0
    return (a * b) // denominator


def clamp_fee_bps(fee_bps: int) -> int:
    """Cap a fee rate at 100% so `net_in` can never go negative."""
    _require_non_negative("fee_bps", fee_bps)
    return min(fee_bps, BPS_DENOM)


def compute_fee_amount(*, gross_in: int, fee_bps: int) -> int:
    """
    Compute `fee = floor(gross_in * fee_bps / 10_000)`.

    A `fee_bps` above 10_000 is treated as 10_000 (the whole input).
    """
    _require_non_negative("gross_in", gross_in)
    return mul_div_floor(gross_in, clamp_fee_bps(fee_bps), BPS_DENOM)


def scaled_ratio(*, numerator: int, denominator: int, scale: int = PRICE_SCALE) -> int:
    """Compute `floor(numerator * scale / denominator)`, or 0 when the denominator is 0."""
    return mul_div_floor(numerator, scale, denominator)


def swap_exact_in(
    *,
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
    fee_bps: int,
) -> SwapQuoteResult:
    """
    Exact-in quote against the constant-product curve.

    Never mutates anything; the caller re-reads reserves after a real trade.
    The output is strictly below `reserve_out` whenever `reserve_out > 0`
    (with `reserve_in > 0`, `net_in / (reserve_in + net_in) < 1`).
    """
    for name, v in (
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
        ("amount_in", amount_in),
        ("fee_bps", fee_bps),
    ):
        _require_non_negative(name, v)

    applied_fee_bps = clamp_fee_bps(fee_bps)
    if amount_in == 0:
        return SwapQuoteResult(
            amount_out=0, fee_amount=0, net_in=0, gross_in=0, applied_fee_bps=applied_fee_bps
        )

    fee_amount = compute_fee_amount(gross_in=amount_in, fee_bps=applied_fee_bps)
    net_in = amount_in - fee_amount
    if net_in < 0:
        raise AssertionError("fee exceeds gross input")

    if reserve_in == 0 or reserve_out == 0:
        # Uninitialized side: quote nothing rather than hand out the whole reserve.
        amount_out = 0
    else:
        amount_out = mul_div_floor(reserve_out, net_in, reserve_in + net_in)
    if reserve_out > 0 and amount_out >= reserve_out:
        raise AssertionError("quote would drain reserve_out")

    return SwapQuoteResult(
        amount_out=amount_out,
        fee_amount=fee_amount,
        net_in=net_in,
        gross_in=amount_in,
        applied_fee_bps=applied_fee_bps,
    )
