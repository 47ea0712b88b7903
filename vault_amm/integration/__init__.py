"""
Integration layer: state-reader mapping, config loading, authoritative checks
"""

from .authoritative import (
    AuthoritativeSource,
    DevInspectSource,
    QuoteMode,
    QuoteService,
    Reconciliation,
    ResolvedValue,
    decode_return_value,
    reconcile,
)
from .config import load_fee_schedule, load_fee_schedules
from .vault_fields import fee_schedule_from_fields, fee_schedule_to_fields, reserves_from_fields

__all__ = [
    "AuthoritativeSource",
    "DevInspectSource",
    "QuoteMode",
    "QuoteService",
    "Reconciliation",
    "ResolvedValue",
    "decode_return_value",
    "reconcile",
    "load_fee_schedule",
    "load_fee_schedules",
    "fee_schedule_from_fields",
    "fee_schedule_to_fields",
    "reserves_from_fields",
]
