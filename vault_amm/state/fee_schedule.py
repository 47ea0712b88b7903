"""
Per-vault fee configuration.

Units/conventions:
- `*_bps` values are basis points (1/10_000).
- `surge_fee_expiry_ms` is a unix timestamp in milliseconds.

A schedule is validated once, at construction, so the per-call fee math never
has to re-check it.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from ..errors import FeeScheduleError
from .amounts import BPS_DENOM, require_amount


@dataclass(frozen=True)
class FeeSchedule:
    """Fee parameters of one vault, sourced from its on-chain configuration."""

    base_fee_bps: int = 500
    dump_threshold_bps: int = 200
    dump_slope_bps: int = 20_000
    max_dump_fee_bps: int = 2_500
    surge_fee_bps: int = 0
    surge_fee_expiry_ms: int = 0
    prize_pool_share_bps: int = 8_000

    def __post_init__(self) -> None:
        for f in fields(self):
            require_amount(f.name, getattr(self, f.name))
        # Fee rates above 100% are tolerated; the quote path clamps them.
        if self.prize_pool_share_bps > BPS_DENOM:
            raise FeeScheduleError(
                f"prize_pool_share_bps must be in [0, {BPS_DENOM}]: {self.prize_pool_share_bps}"
            )

    @property
    def treasury_share_bps(self) -> int:
        """Treasury share of each fee: whatever the prize pool does not take."""
        return BPS_DENOM - self.prize_pool_share_bps


DEFAULT_FEE_SCHEDULE = FeeSchedule()
