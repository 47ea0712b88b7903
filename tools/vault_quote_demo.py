#!/usr/bin/env python3
"""Offline vault quote: price, effective fee, output amount and fee split for one trade."""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import yaml

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from vault_amm.core import TradeDirection, TradeRequest, price, quote_trade, split_fee_for_schedule
from vault_amm.integration.config import load_fee_schedule
from vault_amm.state import DEFAULT_FEE_SCHEDULE, ReserveState, parse_amount


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("direction", choices=[d.value for d in TradeDirection])
    ap.add_argument("amount", help="input amount in base units")
    ap.add_argument("--base-reserve", required=True)
    ap.add_argument("--quote-reserve", required=True)
    ap.add_argument("--supply", required=True, help="circulating supply in base units")
    ap.add_argument("--fees", type=Path, default=None, help="fee schedule (.yaml/.yml/.json)")
    ap.add_argument("--now-ms", type=int, default=None, help="evaluation time (default: wall clock)")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    now_ms = args.now_ms if args.now_ms is not None else int(time.time() * 1000)

    try:
        reserves = ReserveState(
            base_asset_reserve=parse_amount(args.base_reserve, name="base_reserve"),
            quote_asset_reserve=parse_amount(args.quote_reserve, name="quote_reserve"),
            circulating_supply=parse_amount(args.supply, name="supply"),
        )
        schedule = load_fee_schedule(args.fees) if args.fees is not None else DEFAULT_FEE_SCHEDULE
        request = TradeRequest(
            direction=TradeDirection(args.direction),
            input_amount=parse_amount(args.amount, name="amount"),
        )
        q = quote_trade(reserves, schedule, request, now_ms)
    except (ValueError, TypeError, OSError, yaml.YAMLError) as exc:
        print(f"[vault-quote] FAIL: {exc}")
        return 1

    split = split_fee_for_schedule(q.fee_amount, schedule)
    print(f"[vault-quote] price={price(reserves)} (scaled 1e9)")
    print(f"[vault-quote] {request.direction.value} in={request.input_amount} fee_bps={q.effective_fee_bps}")
    print(f"[vault-quote] out={q.output_amount} fee={q.fee_amount}")
    print(f"[vault-quote] fee split: prize_pool={split.prize_pool_share} treasury={split.treasury_share}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
