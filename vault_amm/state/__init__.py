"""
State types for the vault trading math engine
"""

from .amounts import BPS_DENOM, Amount, parse_amount
from .fee_schedule import DEFAULT_FEE_SCHEDULE, FeeSchedule
from .reserves import EMPTY_RESERVES, ReserveState

__all__ = [
    "BPS_DENOM",
    "Amount",
    "parse_amount",
    "DEFAULT_FEE_SCHEDULE",
    "FeeSchedule",
    "EMPTY_RESERVES",
    "ReserveState",
]
