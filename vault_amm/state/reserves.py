"""
Vault reserve snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass

from .amounts import Amount, require_amount


@dataclass(frozen=True)
class ReserveState:
    """
    Immutable snapshot of one trading vault at a point in time.

    A new snapshot is built per query; nothing ever mutates one in place.
    `circulating_supply == 0` is a valid (empty / fully redeemed) pool.
    """

    base_asset_reserve: Amount
    quote_asset_reserve: Amount
    circulating_supply: Amount

    def __post_init__(self) -> None:
        for name in ("base_asset_reserve", "quote_asset_reserve", "circulating_supply"):
            require_amount(name, getattr(self, name))

    @property
    def is_empty(self) -> bool:
        return self.circulating_supply == 0


EMPTY_RESERVES = ReserveState(base_asset_reserve=0, quote_asset_reserve=0, circulating_supply=0)
