# tests/test_api.py
import json

import pytest

from hunllef_core import (
    ConfigurationError,
    build_fight,
    load_presets,
    resolve_options,
    run_fight_simulation,
    run_fish_sweep,
)
from hunllef_core.data import DEFAULT_OPTIONS, parse_preset


def test_default_fight():
    fight = build_fight()
    assert fight.setup1.weapon == "bow"
    assert fight.setup2.weapon == "staff"
    assert fight.setup1.max_hit == 41
    assert fight.setup2.max_hit == 39
    assert fight.hunllef.max_hit == 13
    assert fight.player.hp == 99
    assert fight.player.fish == 12
    assert fight.config.eat_at_hp == 50
    assert fight.config.tick_eat is False
    assert fight.config.max_ticks == 6000


def test_options_override_defaults():
    fight = build_fight({"armour": 3, "fish": 4, "lost_ticks": 2, "max_ticks": None, "tick_eat": True})
    assert fight.hunllef.max_hit == 8
    assert fight.player.fish == 4
    assert fight.player.attack_cd == 2
    assert fight.config.max_ticks is None
    assert fight.config.tick_eat is True


def test_unknown_option_rejected():
    with pytest.raises(ValueError, match="Unknown option"):
        resolve_options({"fishes": 3})


def test_invalid_gear_rejected_before_simulating():
    with pytest.raises(ConfigurationError):
        run_fight_simulation({"armour": 4, "trials": 10})
    with pytest.raises(ConfigurationError):
        build_fight({"weapon_tier": 0})


def test_run_fight_simulation():
    result = run_fight_simulation({"trials": 40, "seed": 3})
    summary = result.summary
    assert summary.trials == 40
    assert len(summary.fish_eaten) == 40
    assert len(summary.times) == summary.successes
    assert result.fight.setup1.weapon == "bow"


def test_run_fight_simulation_with_workers():
    result = run_fight_simulation({"trials": 30, "seed": 3, "workers": 2})
    assert result.summary.trials == 30
    assert len(result.summary.fish_eaten) == 30


def test_run_fish_sweep():
    points = run_fish_sweep({"trials": 10, "seed": 1, "fish": 2})
    assert [point.fish for point in points] == [0, 1, 2]


# ==========================================
# Presets
# ==========================================


def test_load_presets_keeps_valid_entries(tmp_path):
    path = tmp_path / "presets.json"
    path.write_text(
        json.dumps(
            {
                "tier 3": {"armour": 3, "fish": "8", "setup1": "HALBERD", "bogus": 1},
                "broken": {"tick_eat": "yes"},
                "not a mapping": [1, 2],
            }
        ),
        encoding="utf-8",
    )
    presets = load_presets(path)
    assert presets == {"tier 3": {"armour": 3, "fish": 8, "setup1": "halberd"}}


def test_load_presets_missing_or_malformed(tmp_path):
    assert load_presets(None) == {}
    assert load_presets(tmp_path / "missing.json") == {}
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    assert load_presets(bad) == {}
    listed = tmp_path / "list.json"
    listed.write_text("[1, 2]", encoding="utf-8")
    assert load_presets(listed) == {}


def test_parse_preset_types():
    parsed = parse_preset({"tick_eat": True, "seed": None, "max_ticks": 0, "trials": True})
    assert parsed == {"tick_eat": True, "seed": None, "max_ticks": 0}
    assert set(parsed) <= set(DEFAULT_OPTIONS)


def test_bundled_dashboard_presets_load():
    from pathlib import Path

    path = Path(__file__).resolve().parents[1] / "streamlit_UI" / "presets.json"
    presets = load_presets(path)
    assert presets
    for options in presets.values():
        build_fight(options)
