from __future__ import annotations

import json
from pathlib import Path

import pytest

from vault_amm.errors import FeeScheduleError
from vault_amm.integration.config import load_fee_schedule, load_fee_schedules
from vault_amm.state import DEFAULT_FEE_SCHEDULE


def test_load_single_schedule_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "fees.yaml"
    path.write_text("base_fee_bps: 250\nsurge_fee_bps: 900\nsurge_fee_expiry: 1000\n", encoding="utf-8")
    s = load_fee_schedule(path)
    assert s.base_fee_bps == 250
    assert s.surge_fee_bps == 900
    assert s.surge_fee_expiry_ms == 1000
    assert s.dump_slope_bps == DEFAULT_FEE_SCHEDULE.dump_slope_bps


def test_load_single_schedule_from_json(tmp_path: Path) -> None:
    path = tmp_path / "fees.json"
    path.write_text(json.dumps({"max_dump_fee_bps": "3000"}), encoding="utf-8")
    assert load_fee_schedule(path).max_dump_fee_bps == 3_000


def test_empty_yaml_document_yields_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_fee_schedule(path) == DEFAULT_FEE_SCHEDULE


def test_multi_vault_document_layers_defaults(tmp_path: Path) -> None:
    path = tmp_path / "vaults.yaml"
    path.write_text(
        "\n".join(
            [
                "defaults:",
                "  base_fee_bps: 400",
                "vaults:",
                '  "0xbb":',
                "    surge_fee_bps: 1500",
                '  "0xaa": {}',
            ]
        ),
        encoding="utf-8",
    )
    schedules = load_fee_schedules(path)
    assert list(schedules) == ["0xaa", "0xbb"]
    assert schedules["0xaa"].base_fee_bps == 400
    assert schedules["0xbb"].base_fee_bps == 400
    assert schedules["0xbb"].surge_fee_bps == 1_500


def test_vault_override_of_prize_pool_share_alone_loads(tmp_path: Path) -> None:
    path = tmp_path / "vaults.yaml"
    path.write_text('vaults:\n  "0xaa":\n    prize_pool_bps: 9000\n', encoding="utf-8")
    s = load_fee_schedules(path)["0xaa"]
    assert s.prize_pool_share_bps == 9_000
    assert s.treasury_share_bps == 1_000


def test_invalid_schedule_is_rejected_at_load_time(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("prize_pool_bps: 12000\n", encoding="utf-8")
    with pytest.raises(FeeScheduleError, match="bad.yaml"):
        load_fee_schedule(path)


def test_non_mapping_document_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_fee_schedule(path)


def test_unknown_suffix_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "fees.toml"
    path.write_text("base_fee_bps = 1\n", encoding="utf-8")
    with pytest.raises(ValueError, match="unsupported config format"):
        load_fee_schedule(path)
