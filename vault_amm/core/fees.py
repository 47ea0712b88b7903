"""
Fee engine (deterministic, integer-only).

Effective fee for a trade, in basis points:

1. start from `base_fee_bps`;
2. sells only: when the sell is larger than `dump_threshold_bps` of the
   circulating supply, add `floor(excess_bps * dump_slope_bps / 10_000)` and
   cap the result at `max_dump_fee_bps` (anti-dump);
3. while `now_ms < surge_fee_expiry_ms`, a higher `surge_fee_bps` replaces
   the result (surge). Surge only ever raises the fee.

`now_ms` is always supplied by the caller; nothing here reads a clock.

Fee splitting floors the prize-pool share and hands the remainder to the
treasury, so no value is lost to rounding.
"""

from __future__ import annotations

from ..errors import FeeScheduleError
from ..kernels.python.vault_amm_v1 import BPS_DENOM, compute_fee_amount as _kernel_compute_fee_amount
from ..kernels.python.vault_amm_v1 import mul_div_floor
from ..state.amounts import Amount, require_amount
from ..state.fee_schedule import FeeSchedule
from .types import FeeSplit, TradeDirection, TradingFee


def compute_fee_amount(amount: Amount, fee_bps: int) -> Amount:
    """`floor(amount * fee_bps / 10_000)`, with rates above 100% capped at 100%."""
    require_amount("amount", amount)
    require_amount("fee_bps", fee_bps)
    return _kernel_compute_fee_amount(gross_in=amount, fee_bps=fee_bps)


def sell_share_bps(sell_amount: Amount, circulating_supply: Amount) -> int:
    """
    Size of a sell as a fraction of circulating supply, in bps (floor).

    Returns 0 for an empty supply.
    """
    require_amount("sell_amount", sell_amount)
    require_amount("circulating_supply", circulating_supply)
    return mul_div_floor(sell_amount, BPS_DENOM, circulating_supply)


def anti_dump_fee_bps(schedule: FeeSchedule, share_bps: int) -> int:
    """Base fee escalated for a sell of `share_bps` of supply, capped at `max_dump_fee_bps`."""
    require_amount("share_bps", share_bps)
    if share_bps <= schedule.dump_threshold_bps:
        return schedule.base_fee_bps

    excess = share_bps - schedule.dump_threshold_bps
    anti_dump_extra = (excess * schedule.dump_slope_bps) // BPS_DENOM
    return min(schedule.base_fee_bps + anti_dump_extra, schedule.max_dump_fee_bps)


def is_surge_active(schedule: FeeSchedule, now_ms: int) -> bool:
    """True while the surge window is open (expiry strictly in the future)."""
    require_amount("now_ms", now_ms)
    return schedule.surge_fee_expiry_ms > now_ms


def effective_fee_bps(
    schedule: FeeSchedule,
    direction: TradeDirection,
    input_amount: Amount,
    circulating_supply: Amount,
    now_ms: int,
) -> int:
    """
    Effective fee rate (bps) for one trade.

    A zero-size sell, or a sell against an empty supply, skips the anti-dump
    term and falls through to the base fee (then surge).
    """
    if not isinstance(direction, TradeDirection):
        raise TypeError("direction must be a TradeDirection")
    require_amount("input_amount", input_amount)
    require_amount("circulating_supply", circulating_supply)

    effective = schedule.base_fee_bps

    if direction is TradeDirection.SELL and input_amount > 0 and circulating_supply > 0:
        effective = anti_dump_fee_bps(schedule, sell_share_bps(input_amount, circulating_supply))

    if is_surge_active(schedule, now_ms) and schedule.surge_fee_bps > effective:
        effective = schedule.surge_fee_bps

    return effective


def trading_fee(
    schedule: FeeSchedule,
    direction: TradeDirection,
    input_amount: Amount,
    circulating_supply: Amount,
    now_ms: int,
) -> TradingFee:
    """Fee preview: effective rate, fee amount, and the resulting total cost."""
    fee_bps = effective_fee_bps(schedule, direction, input_amount, circulating_supply, now_ms)
    fee_amount = compute_fee_amount(input_amount, fee_bps)
    if direction is TradeDirection.BUY:
        total_cost = input_amount + fee_amount
    else:
        total_cost = input_amount - fee_amount
    return TradingFee(fee_amount=fee_amount, effective_fee_bps=fee_bps, total_cost=total_cost)


def split_fee(fee_amount: Amount, prize_pool_share_bps: int) -> FeeSplit:
    """
    Split `fee_amount` between the prize pool and the treasury.

        prize_pool = floor(fee_amount * prize_pool_share_bps / 10_000)
        treasury   = fee_amount - prize_pool

    The treasury absorbs the rounding dust by construction.
    """
    require_amount("fee_amount", fee_amount)
    require_amount("prize_pool_share_bps", prize_pool_share_bps)
    if prize_pool_share_bps > BPS_DENOM:
        raise FeeScheduleError(
            f"prize_pool_share_bps must be in [0, {BPS_DENOM}]: {prize_pool_share_bps}"
        )

    prize_pool = (fee_amount * prize_pool_share_bps) // BPS_DENOM
    treasury = fee_amount - prize_pool
    if treasury < 0:
        raise AssertionError("fee split over-distributed")
    return FeeSplit(prize_pool_share=prize_pool, treasury_share=treasury)


def split_fee_for_schedule(fee_amount: Amount, schedule: FeeSchedule) -> FeeSplit:
    return split_fee(fee_amount, schedule.prize_pool_share_bps)
