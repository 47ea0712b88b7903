"""
Fee schedule configuration files.

Schedules are validated once here, at load time, so per-call fee math never
re-checks them. Two document shapes are accepted (YAML or JSON):

    # single schedule
    base_fee_bps: 500
    prize_pool_bps: 8000

    # several vaults
    defaults:
      base_fee_bps: 500
    vaults:
      "0xabc...":
        surge_fee_bps: 1500
        surge_fee_expiry: 1767225600000

Field names follow `vault_fields.fee_schedule_from_fields`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..errors import FeeScheduleError
from ..state.fee_schedule import DEFAULT_FEE_SCHEDULE, FeeSchedule
from .vault_fields import fee_schedule_from_fields


_JSON_SUFFIXES = {".json"}
_YAML_SUFFIXES = {".yaml", ".yml"}


def _load_document(path: Path) -> Mapping[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in _JSON_SUFFIXES:
        obj = json.loads(text)
    elif suffix in _YAML_SUFFIXES:
        obj = yaml.safe_load(text)
    else:
        raise ValueError(f"unsupported config format: {path.name} (expected .yaml, .yml or .json)")
    if obj is None:
        obj = {}
    if not isinstance(obj, Mapping):
        raise TypeError("fee config document must be a mapping")
    return obj


def _schedule(obj: Any, *, defaults: FeeSchedule, where: str) -> FeeSchedule:
    if obj is None:
        return defaults
    if not isinstance(obj, Mapping):
        raise TypeError(f"{where} must be a mapping")
    try:
        return fee_schedule_from_fields(obj, defaults=defaults)
    except FeeScheduleError as exc:
        raise FeeScheduleError(f"{where}: {exc}") from exc


def load_fee_schedule(path: str | Path, *, defaults: FeeSchedule = DEFAULT_FEE_SCHEDULE) -> FeeSchedule:
    """Load a single fee schedule document."""
    p = Path(path)
    doc = _load_document(p)
    return _schedule(doc, defaults=defaults, where=p.name)


def load_fee_schedules(
    path: str | Path,
    *,
    defaults: FeeSchedule = DEFAULT_FEE_SCHEDULE,
) -> dict[str, FeeSchedule]:
    """
    Load a multi-vault document into `{vault_id: FeeSchedule}`.

    Each vault's fields override the document's `defaults` section, which in
    turn overrides `defaults`.
    """
    p = Path(path)
    doc = _load_document(p)

    base = _schedule(doc.get("defaults"), defaults=defaults, where=f"{p.name}:defaults")
    vaults = doc.get("vaults")
    if vaults is None:
        vaults = {}
    if not isinstance(vaults, Mapping):
        raise TypeError("vaults must be a mapping of vault_id -> schedule")

    out: dict[str, FeeSchedule] = {}
    for vault_id in sorted(vaults):
        if not isinstance(vault_id, str) or not vault_id:
            raise ValueError(f"vault ids must be non-empty strings: {vault_id!r}")
        out[vault_id] = _schedule(vaults[vault_id], defaults=base, where=f"{p.name}:{vault_id}")
    return out
