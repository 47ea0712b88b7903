"""
Local vs. authoritative quoting.

The local engine (`vault_amm.core`) is the only implementation of the math.
The on-chain contract stays the source of truth: in AUTHORITATIVE mode a
`QuoteService` still computes the local estimate, asks an
`AuthoritativeSource` (a read-only contract simulation, or the confirmed
result of a real trade) for the same number, and reports any divergence.
A persistent divergence is a formula bug in the local engine.

The transport is injected: `DevInspectSource` builds the move-call target and
arguments, hands them with the simulation sender to a caller-supplied
`inspect` callable, and decodes the first return value. No networking happens in this package.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence

from ..core.fees import effective_fee_bps
from ..core.pricing import DEFAULT_PRICE_SCALE, price as local_price
from ..core.quotes import quote_buy as local_quote_buy
from ..core.quotes import quote_sell as local_quote_sell
from ..core.types import TradeDirection
from ..errors import AuthoritativeSourceError
from ..state.amounts import Amount, require_amount
from ..state.fee_schedule import FeeSchedule
from ..state.reserves import ReserveState


logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x" + "00" * 32
CLOCK_OBJECT_ID = "0x" + "00" * 31 + "06"

# (target, args, sender) -> devInspect response
InspectFn = Callable[[str, Sequence[Mapping[str, Any]], str], Mapping[str, Any]]


@unique
class QuoteMode(Enum):
    LOCAL = "local"
    AUTHORITATIVE = "authoritative"


class AuthoritativeSource(Protocol):
    """Source of truth for prices and quotes. `None` means "unavailable right now"."""

    def get_price(self, vault_id: str) -> Optional[int]: ...

    def quote_buy(self, vault_id: str, usdc_in: int) -> Optional[int]: ...

    def quote_sell(self, vault_id: str, base_in: int) -> Optional[int]: ...


def decode_return_value(raw: bytes | bytearray | Sequence[int]) -> int:
    """Decode a little-endian unsigned integer return value (BCS u64/u128)."""
    if isinstance(raw, (bytes, bytearray)):
        data = bytes(raw)
    else:
        if not isinstance(raw, Sequence) or isinstance(raw, str):
            raise AuthoritativeSourceError("return value must be a byte sequence")
        for b in raw:
            if not isinstance(b, int) or isinstance(b, bool) or not (0 <= b <= 255):
                raise AuthoritativeSourceError(f"invalid byte in return value: {b!r}")
        data = bytes(raw)
    if not data:
        raise AuthoritativeSourceError("empty return value")
    return int.from_bytes(data, byteorder="little", signed=False)


def _first_return_value(result: Mapping[str, Any]) -> Optional[int]:
    if not isinstance(result, Mapping):
        raise AuthoritativeSourceError("inspect result must be a mapping")
    error = result.get("error")
    if error:
        raise AuthoritativeSourceError(f"simulation failed: {error}")
    results = result.get("results")
    if not results:
        return None
    return_values = results[0].get("returnValues") if isinstance(results[0], Mapping) else None
    if not return_values:
        return None
    # Each return value is a (bytes, type_tag) pair.
    first = return_values[0]
    if not isinstance(first, Sequence) or not first:
        raise AuthoritativeSourceError("malformed returnValues entry")
    return decode_return_value(first[0])


@dataclass(frozen=True)
class DevInspectSource:
    """Contract-simulation source for the vault trading module."""

    package_id: str
    inspect: InspectFn
    module: str = "trading"
    sender: str = ZERO_ADDRESS

    def _target(self, function: str) -> str:
        return f"{self.package_id}::{self.module}::{function}"

    def _call(self, function: str, args: Sequence[Mapping[str, Any]]) -> Optional[int]:
        target = self._target(function)
        logger.debug("simulating %s", target)
        return _first_return_value(self.inspect(target, args, self.sender))

    def get_price(self, vault_id: str) -> Optional[int]:
        return self._call("get_price", [{"kind": "object", "value": vault_id}])

    def quote_buy(self, vault_id: str, usdc_in: int) -> Optional[int]:
        require_amount("usdc_in", usdc_in)
        if usdc_in == 0:
            return 0
        return self._call(
            "quote_buy",
            [
                {"kind": "object", "value": vault_id},
                {"kind": "pure", "value": str(usdc_in)},
                {"kind": "object", "value": CLOCK_OBJECT_ID},
            ],
        )

    def quote_sell(self, vault_id: str, base_in: int) -> Optional[int]:
        require_amount("base_in", base_in)
        if base_in == 0:
            return 0
        return self._call(
            "quote_sell",
            [
                {"kind": "object", "value": vault_id},
                {"kind": "pure", "value": str(base_in)},
                {"kind": "object", "value": CLOCK_OBJECT_ID},
            ],
        )


@dataclass(frozen=True)
class Reconciliation:
    """Local estimate vs. authoritative value for one operation."""

    operation: str
    local: Amount
    authoritative: Amount

    @property
    def matched(self) -> bool:
        return self.local == self.authoritative

    @property
    def divergence(self) -> int:
        """Signed difference `authoritative - local`."""
        return self.authoritative - self.local


def reconcile(operation: str, local: Amount, authoritative: Amount, *, vault_id: str = "") -> Reconciliation:
    """Compare a local estimate with the authoritative value and log any divergence."""
    require_amount("local", local)
    require_amount("authoritative", authoritative)
    rec = Reconciliation(operation=operation, local=local, authoritative=authoritative)
    if rec.matched:
        logger.debug("%s %s: local estimate matches authoritative (%d)", operation, vault_id, local)
    else:
        logger.warning(
            "%s %s: local estimate %d diverges from authoritative %d (delta %+d)",
            operation,
            vault_id,
            local,
            authoritative,
            rec.divergence,
        )
    return rec


@dataclass(frozen=True)
class ResolvedValue:
    """A price or quote together with where it came from."""

    value: Amount
    origin: QuoteMode
    local: Amount
    reconciliation: Optional[Reconciliation] = None


class QuoteService:
    """
    Single entry point with two modes over the same local engine.

    LOCAL: return the local estimate.
    AUTHORITATIVE: return the source's value when it has one (reconciled
    against the local estimate), else fall back to the local estimate.
    """

    def __init__(self, mode: QuoteMode = QuoteMode.LOCAL, source: Optional[AuthoritativeSource] = None) -> None:
        if not isinstance(mode, QuoteMode):
            raise TypeError("mode must be a QuoteMode")
        if mode is QuoteMode.AUTHORITATIVE and source is None:
            raise ValueError("AUTHORITATIVE mode requires an authoritative source")
        self.mode = mode
        self.source = source

    def _resolve(
        self,
        operation: str,
        vault_id: str,
        local: Amount,
        fetch: Callable[[AuthoritativeSource], Optional[int]],
    ) -> ResolvedValue:
        if self.mode is QuoteMode.LOCAL or self.source is None:
            return ResolvedValue(value=local, origin=QuoteMode.LOCAL, local=local)

        try:
            remote = fetch(self.source)
        except AuthoritativeSourceError as exc:
            logger.warning("%s %s: authoritative source failed (%s); using local estimate", operation, vault_id, exc)
            return ResolvedValue(value=local, origin=QuoteMode.LOCAL, local=local)

        if remote is None:
            logger.info("%s %s: no authoritative value; using local estimate", operation, vault_id)
            return ResolvedValue(value=local, origin=QuoteMode.LOCAL, local=local)

        rec = reconcile(operation, local, remote, vault_id=vault_id)
        return ResolvedValue(value=remote, origin=QuoteMode.AUTHORITATIVE, local=local, reconciliation=rec)

    def price(self, vault_id: str, reserves: ReserveState, scale: int = DEFAULT_PRICE_SCALE) -> ResolvedValue:
        local = local_price(reserves, scale)
        if scale != DEFAULT_PRICE_SCALE:
            # The contract only reports prices at the default scale.
            return ResolvedValue(value=local, origin=QuoteMode.LOCAL, local=local)
        return self._resolve("get_price", vault_id, local, lambda src: src.get_price(vault_id))

    def quote_buy(
        self,
        vault_id: str,
        reserves: ReserveState,
        schedule: FeeSchedule,
        usdc_in: Amount,
        now_ms: int,
    ) -> ResolvedValue:
        fee_bps = effective_fee_bps(schedule, TradeDirection.BUY, usdc_in, reserves.circulating_supply, now_ms)
        local = local_quote_buy(reserves, usdc_in, fee_bps)
        return self._resolve("quote_buy", vault_id, local, lambda src: src.quote_buy(vault_id, usdc_in))

    def quote_sell(
        self,
        vault_id: str,
        reserves: ReserveState,
        schedule: FeeSchedule,
        base_in: Amount,
        now_ms: int,
    ) -> ResolvedValue:
        fee_bps = effective_fee_bps(schedule, TradeDirection.SELL, base_in, reserves.circulating_supply, now_ms)
        local = local_quote_sell(reserves, base_in, fee_bps)
        return self._resolve("quote_sell", vault_id, local, lambda src: src.quote_sell(vault_id, base_in))
