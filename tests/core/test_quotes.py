from __future__ import annotations

import pytest

from vault_amm.core import Quote, TradeDirection, TradeRequest, quote_buy, quote_sell, quote_trade
from vault_amm.errors import InvalidAmountError
from vault_amm.state import DEFAULT_FEE_SCHEDULE, FeeSchedule, ReserveState


REFERENCE = ReserveState(
    base_asset_reserve=1_000_000_000,
    quote_asset_reserve=100_000_000,
    circulating_supply=1_000_000_000,
)


def test_quote_buy_reference_pool() -> None:
    # fee = 50_000, net = 950_000, out = floor(1e9 * 950_000 / 100_950_000)
    assert quote_buy(REFERENCE, 1_000_000, 500) == 9_410_599


def test_quote_sell_reference_pool() -> None:
    assert quote_sell(REFERENCE, 1_000_000, 500) == 94_909


def test_zero_input_quotes_zero() -> None:
    assert quote_buy(REFERENCE, 0, 500) == 0
    assert quote_sell(REFERENCE, 0, 500) == 0


def test_empty_pool_quotes_zero() -> None:
    empty_supply = ReserveState(base_asset_reserve=1_000, quote_asset_reserve=1_000, circulating_supply=0)
    assert quote_buy(empty_supply, 1_000, 0) == 0
    assert quote_sell(empty_supply, 1_000, 0) == 0

    no_quote = ReserveState(base_asset_reserve=1_000, quote_asset_reserve=0, circulating_supply=1_000)
    assert quote_buy(no_quote, 1_000, 0) == 0
    assert quote_sell(no_quote, 1_000, 0) == 0


def test_full_and_excessive_fee_quote_zero_without_crashing() -> None:
    assert quote_buy(REFERENCE, 1_000_000, 10_000) == 0
    assert quote_sell(REFERENCE, 1_000_000, 25_000) == 0


def test_single_trade_never_drains_the_pool() -> None:
    assert quote_buy(REFERENCE, 10**30, 0) < REFERENCE.base_asset_reserve
    assert quote_sell(REFERENCE, 10**30, 0) < REFERENCE.quote_asset_reserve


def test_quotes_reject_negative_amounts() -> None:
    with pytest.raises(InvalidAmountError):
        quote_buy(REFERENCE, -1, 500)
    with pytest.raises(InvalidAmountError):
        quote_sell(REFERENCE, 1, -500)


def test_quote_trade_sell_applies_anti_dump_fee() -> None:
    reserves = ReserveState(base_asset_reserve=1_000_000, quote_asset_reserve=1_000_000, circulating_supply=1_000_000)
    q = quote_trade(reserves, DEFAULT_FEE_SCHEDULE, TradeRequest(TradeDirection.SELL, 50_000), now_ms=0)
    # fee 1100 bps -> 5_500 fee, net 44_500, out floor(1e6 * 44_500 / 1_044_500)
    assert q == Quote(output_amount=42_604, fee_amount=5_500, effective_fee_bps=1_100)


def test_quote_trade_buy_matches_quote_buy() -> None:
    q = quote_trade(REFERENCE, DEFAULT_FEE_SCHEDULE, TradeRequest(TradeDirection.BUY, 1_000_000), now_ms=0)
    assert q.effective_fee_bps == 500
    assert q.fee_amount == 50_000
    assert q.output_amount == quote_buy(REFERENCE, 1_000_000, 500)


def test_quote_trade_uses_surge_fee_while_active() -> None:
    s = FeeSchedule(surge_fee_bps=1_000, surge_fee_expiry_ms=5_000)
    active = quote_trade(REFERENCE, s, TradeRequest(TradeDirection.BUY, 1_000_000), now_ms=4_999)
    lapsed = quote_trade(REFERENCE, s, TradeRequest(TradeDirection.BUY, 1_000_000), now_ms=5_000)
    assert active.effective_fee_bps == 1_000
    assert lapsed.effective_fee_bps == 500
    assert active.output_amount < lapsed.output_amount


def test_trade_request_validates_its_fields() -> None:
    with pytest.raises(InvalidAmountError):
        TradeRequest(TradeDirection.BUY, -1)
    with pytest.raises(TypeError):
        TradeRequest("buy", 1)  # type: ignore[arg-type]
