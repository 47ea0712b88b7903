"""
State-reader adapter: on-chain vault object fields -> engine types.

A vault object's `content.fields` arrive as a JSON mapping in which u64
values are usually decimal strings. This module only maps and validates
field values; fetching the object is the caller's concern.
"""

from __future__ import annotations

from dataclasses import fields as dc_fields
from typing import Any, Mapping, Optional

from ..state.amounts import parse_amount
from ..state.fee_schedule import DEFAULT_FEE_SCHEDULE, FeeSchedule
from ..state.reserves import ReserveState


# Engine field -> on-chain field name.
FEE_FIELD_MAPPING: dict[str, str] = {
    "base_fee_bps": "base_fee_bps",
    "dump_threshold_bps": "dump_threshold_bps",
    "dump_slope_bps": "dump_slope_bps",
    "max_dump_fee_bps": "max_dump_fee_bps",
    "surge_fee_bps": "surge_fee_bps",
    "surge_fee_expiry_ms": "surge_fee_expiry",
    "prize_pool_share_bps": "prize_pool_bps",
}

BASE_RESERVE_FIELD = "basset_reserve"
QUOTE_RESERVE_FIELD = "usdc_reserve"
# Anti-dump fees are charged against circulating supply; `trading_supply` is
# read only when a vault does not carry it.
SUPPLY_FIELDS = ("circulating_supply", "trading_supply")


def _unwrap_fields(obj: Mapping[str, Any]) -> Mapping[str, Any]:
    """Accept either bare `fields` or a `{"content": {"fields": ...}}` object response."""
    content = obj.get("content")
    if isinstance(content, Mapping):
        if content.get("dataType", "moveObject") != "moveObject":
            raise ValueError(f"not a move object: dataType={content.get('dataType')!r}")
        inner = content.get("fields")
        if not isinstance(inner, Mapping):
            raise TypeError("content.fields must be a mapping")
        return inner
    return obj


def _field_amount(fields: Mapping[str, Any], key: str, default: int) -> int:
    raw = fields.get(key)
    if raw is None or raw == "":
        return default
    return parse_amount(raw, name=key)


def reserves_from_fields(obj: Mapping[str, Any]) -> ReserveState:
    """Build a `ReserveState` from vault object fields; missing reserves read as 0."""
    if not isinstance(obj, Mapping):
        raise TypeError("vault fields must be a mapping")
    fields = _unwrap_fields(obj)

    supply: Optional[int] = None
    for key in SUPPLY_FIELDS:
        if fields.get(key) not in (None, ""):
            supply = parse_amount(fields[key], name=key)
            break

    return ReserveState(
        base_asset_reserve=_field_amount(fields, BASE_RESERVE_FIELD, 0),
        quote_asset_reserve=_field_amount(fields, QUOTE_RESERVE_FIELD, 0),
        circulating_supply=0 if supply is None else supply,
    )


def fee_schedule_from_fields(
    obj: Mapping[str, Any],
    *,
    defaults: FeeSchedule = DEFAULT_FEE_SCHEDULE,
) -> FeeSchedule:
    """
    Build a validated `FeeSchedule` from vault object fields.

    Fields the vault does not carry fall back to `defaults`. Both the on-chain
    names (`surge_fee_expiry`, `prize_pool_bps`, ...) and the engine names are
    accepted; on-chain names win when both are present.
    """
    if not isinstance(obj, Mapping):
        raise TypeError("vault fields must be a mapping")
    fields = _unwrap_fields(obj)

    values: dict[str, int] = {}
    for f in dc_fields(FeeSchedule):
        default = getattr(defaults, f.name)
        chain_name = FEE_FIELD_MAPPING[f.name]
        key = chain_name if fields.get(chain_name) not in (None, "") else f.name
        values[f.name] = _field_amount(fields, key, default)
    return FeeSchedule(**values)


def fee_schedule_to_fields(schedule: FeeSchedule) -> dict[str, str]:
    """Inverse of `fee_schedule_from_fields`, using on-chain names and string u64s."""
    return {FEE_FIELD_MAPPING[f.name]: str(getattr(schedule, f.name)) for f in dc_fields(schedule)}
