"""
Constant-product quote engine.

Both directions deduct the fee from the *input* before the swap:
    net_in   = amount_in - floor(amount_in * fee_bps / 10_000)
    buy:  base_out  = floor(base_reserve  * net_in / (quote_reserve + net_in))
    sell: quote_out = floor(quote_reserve * net_in / (base_reserve  + net_in))

A zero input, an empty pool, or an empty reserve quotes 0. No state is
mutated; after a real trade executes elsewhere the caller re-reads reserves.
"""

from __future__ import annotations

from ..kernels.python.vault_amm_v1 import swap_exact_in as _kernel_swap_exact_in
from ..state.amounts import Amount, require_amount
from ..state.fee_schedule import FeeSchedule
from ..state.reserves import ReserveState
from .fees import effective_fee_bps
from .types import Quote, TradeDirection, TradeRequest


def _swap(reserve_in: Amount, reserve_out: Amount, amount_in: Amount, fee_bps: int, supply: Amount):
    require_amount("amount_in", amount_in)
    require_amount("fee_bps", fee_bps)
    if supply == 0:
        amount_in = 0
    return _kernel_swap_exact_in(
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        amount_in=amount_in,
        fee_bps=fee_bps,
    )


def quote_buy(reserves: ReserveState, usdc_in: Amount, fee_bps: int) -> Amount:
    """Base units received for spending `usdc_in` quote units."""
    res = _swap(
        reserves.quote_asset_reserve,
        reserves.base_asset_reserve,
        usdc_in,
        fee_bps,
        reserves.circulating_supply,
    )
    return res.amount_out


def quote_sell(reserves: ReserveState, base_in: Amount, fee_bps: int) -> Amount:
    """Quote units received for selling `base_in` base units."""
    res = _swap(
        reserves.base_asset_reserve,
        reserves.quote_asset_reserve,
        base_in,
        fee_bps,
        reserves.circulating_supply,
    )
    return res.amount_out


def quote_trade(
    reserves: ReserveState,
    schedule: FeeSchedule,
    request: TradeRequest,
    now_ms: int,
) -> Quote:
    """
    Full quote for one trade: effective fee from the fee engine, then the curve.

    `fee_amount` is the fee charged on the input, in input-asset units.
    """
    fee_bps = effective_fee_bps(
        schedule,
        request.direction,
        request.input_amount,
        reserves.circulating_supply,
        now_ms,
    )
    if request.direction is TradeDirection.BUY:
        reserve_in, reserve_out = reserves.quote_asset_reserve, reserves.base_asset_reserve
    else:
        reserve_in, reserve_out = reserves.base_asset_reserve, reserves.quote_asset_reserve

    res = _swap(reserve_in, reserve_out, request.input_amount, fee_bps, reserves.circulating_supply)
    return Quote(output_amount=res.amount_out, fee_amount=res.fee_amount, effective_fee_bps=fee_bps)
