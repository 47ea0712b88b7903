from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from vault_amm.core.fees import effective_fee_bps
from vault_amm.core.types import TradeDirection
from vault_amm.kernels.python.vault_amm_v1 import (
    BPS_DENOM,
    clamp_fee_bps,
    compute_fee_amount,
    mul_div_floor,
    scaled_ratio,
    swap_exact_in,
)
from vault_amm.state import DEFAULT_FEE_SCHEDULE


VECTORS_PATH = Path(__file__).resolve().parents[1] / "fixtures" / "vault_quote_vectors.yaml"


def _vectors() -> dict[str, Any]:
    return yaml.safe_load(VECTORS_PATH.read_text(encoding="utf-8"))


@pytest.mark.parametrize("vec", _vectors()["swaps"], ids=lambda v: v["name"])
def test_swap_vectors(vec: dict[str, Any]) -> None:
    res = swap_exact_in(
        reserve_in=vec["reserve_in"],
        reserve_out=vec["reserve_out"],
        amount_in=vec["amount_in"],
        fee_bps=vec["fee_bps"],
    )
    assert res.fee_amount == vec["expected_fee"]
    assert res.amount_out == vec["expected_out"]
    assert res.net_in + res.fee_amount == res.gross_in == vec["amount_in"]


@pytest.mark.parametrize("vec", _vectors()["sell_fees"], ids=lambda v: v["name"])
def test_sell_fee_vectors(vec: dict[str, Any]) -> None:
    got = effective_fee_bps(DEFAULT_FEE_SCHEDULE, TradeDirection.SELL, vec["amount"], vec["supply"], now_ms=0)
    assert got == vec["expected_fee_bps"]


def test_mul_div_floor_truncates_and_maps_zero_denominator_to_zero() -> None:
    assert mul_div_floor(7, 3, 2) == 10
    assert mul_div_floor(1, 1, 3) == 0
    assert mul_div_floor(5, 5, 0) == 0


def test_fee_amount_uses_floor_rounding() -> None:
    assert compute_fee_amount(gross_in=199, fee_bps=50) == 0
    assert compute_fee_amount(gross_in=200, fee_bps=50) == 1
    assert compute_fee_amount(gross_in=10_001, fee_bps=30) == 30


def test_fee_rates_above_one_hundred_percent_are_clamped() -> None:
    assert clamp_fee_bps(25_000) == BPS_DENOM
    assert compute_fee_amount(gross_in=1_000, fee_bps=25_000) == 1_000
    res = swap_exact_in(reserve_in=1_000, reserve_out=1_000, amount_in=1_000, fee_bps=25_000)
    assert res.amount_out == 0
    assert res.applied_fee_bps == BPS_DENOM


def test_swap_against_empty_side_quotes_zero() -> None:
    assert swap_exact_in(reserve_in=0, reserve_out=1_000, amount_in=10, fee_bps=0).amount_out == 0
    assert swap_exact_in(reserve_in=1_000, reserve_out=0, amount_in=10, fee_bps=0).amount_out == 0
    assert swap_exact_in(reserve_in=0, reserve_out=0, amount_in=10, fee_bps=0).amount_out == 0


def test_zero_input_is_a_noop_quote() -> None:
    res = swap_exact_in(reserve_in=1_000, reserve_out=1_000, amount_in=0, fee_bps=500)
    assert (res.amount_out, res.fee_amount, res.net_in) == (0, 0, 0)


def test_huge_input_never_drains_reserve() -> None:
    res = swap_exact_in(reserve_in=10, reserve_out=10, amount_in=10**40, fee_bps=0)
    assert res.amount_out == 9


def test_kernel_rejects_negative_and_non_int_inputs() -> None:
    with pytest.raises(ValueError, match="amount_in"):
        swap_exact_in(reserve_in=1, reserve_out=1, amount_in=-1, fee_bps=0)
    with pytest.raises(TypeError):
        swap_exact_in(reserve_in=1, reserve_out=1, amount_in=1, fee_bps=True)
    with pytest.raises(ValueError):
        scaled_ratio(numerator=1, denominator=1, scale=-1)
