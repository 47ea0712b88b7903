"""
Core vault trading math: reserve pricer, fee engine, quote engine
"""

from .fees import (
    anti_dump_fee_bps,
    compute_fee_amount,
    effective_fee_bps,
    is_surge_active,
    sell_share_bps,
    split_fee,
    split_fee_for_schedule,
    trading_fee,
)
from .pricing import DEFAULT_PRICE_SCALE, position_value, price, reserve_ratio_price
from .quotes import quote_buy, quote_sell, quote_trade
from .types import FeeSplit, Quote, TradeDirection, TradeRequest, TradingFee

__all__ = [
    "anti_dump_fee_bps",
    "compute_fee_amount",
    "effective_fee_bps",
    "is_surge_active",
    "sell_share_bps",
    "split_fee",
    "split_fee_for_schedule",
    "trading_fee",
    "DEFAULT_PRICE_SCALE",
    "position_value",
    "price",
    "reserve_ratio_price",
    "quote_buy",
    "quote_sell",
    "quote_trade",
    "FeeSplit",
    "Quote",
    "TradeDirection",
    "TradeRequest",
    "TradingFee",
]
