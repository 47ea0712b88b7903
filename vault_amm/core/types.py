"""Transient request/result types for the fee and quote engines.

All types are frozen dataclasses (immutable) and live for a single call.

Units/conventions:
- amounts are base units (non-negative ints).
- `*_bps` rates are basis points (1/10_000).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique

from ..state.amounts import Amount, require_amount


@unique
class TradeDirection(Enum):
    """Buy spends the quote asset for base; sell spends base for the quote asset."""
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class TradeRequest:
    direction: TradeDirection
    input_amount: Amount

    def __post_init__(self) -> None:
        if not isinstance(self.direction, TradeDirection):
            raise TypeError("direction must be a TradeDirection")
        require_amount("input_amount", self.input_amount)


@dataclass(frozen=True)
class Quote:
    output_amount: Amount
    fee_amount: Amount
    effective_fee_bps: int


@dataclass(frozen=True)
class FeeSplit:
    """Distribution of one collected fee. The two shares always sum to the fee."""

    prize_pool_share: Amount
    treasury_share: Amount

    @property
    def total(self) -> Amount:
        return self.prize_pool_share + self.treasury_share


@dataclass(frozen=True)
class TradingFee:
    """Fee preview for a trade of `input_amount`.

    `total_cost` is what the trader pays for a buy (input + fee) or receives
    into the curve for a sell (input - fee).
    """

    fee_amount: Amount
    effective_fee_bps: int
    total_cost: Amount
