"""
Reserve pricer.

Spot prices are fixed-point integers: quote-asset value per one base unit,
multiplied by `scale` (1e9 by default) so sub-unit precision survives integer
division. Rounding is truncating (floor) everywhere; callers must not assume
round-to-nearest.
"""

from __future__ import annotations

from ..kernels.python.vault_amm_v1 import PRICE_SCALE, mul_div_floor, scaled_ratio
from ..state.amounts import Amount, require_amount
from ..state.reserves import ReserveState


DEFAULT_PRICE_SCALE = PRICE_SCALE


def price(reserves: ReserveState, scale: int = DEFAULT_PRICE_SCALE) -> Amount:
    """
    Vault price per circulating base unit:
        floor(quote_asset_reserve * scale / circulating_supply)

    Returns 0 for an empty pool (`circulating_supply == 0`).
    """
    require_amount("scale", scale)
    return scaled_ratio(
        numerator=reserves.quote_asset_reserve,
        denominator=reserves.circulating_supply,
        scale=scale,
    )


def reserve_ratio_price(reserves: ReserveState, scale: int = DEFAULT_PRICE_SCALE) -> Amount:
    """
    Pool-ratio price: floor(quote_asset_reserve * scale / base_asset_reserve).

    Returns 0 when the base reserve is empty.
    """
    require_amount("scale", scale)
    return scaled_ratio(
        numerator=reserves.quote_asset_reserve,
        denominator=reserves.base_asset_reserve,
        scale=scale,
    )


def position_value(balance: Amount, unit_price: Amount, scale: int = DEFAULT_PRICE_SCALE) -> Amount:
    """Market value in quote units of `balance` base units at a scaled `unit_price`."""
    require_amount("balance", balance)
    require_amount("unit_price", unit_price)
    require_amount("scale", scale)
    return mul_div_floor(balance, unit_price, scale)
