# tests/test_cli.py
import json

import pytest

from hunllef_core.cli import main, options_from_args, parse_args


def test_defaults():
    args = parse_args([])
    assert args.trials == 100_000
    assert args.fish == 12
    assert args.armour == 1
    assert args.setup1 == "bow"
    assert args.setup2_prayer == "augury"
    assert args.eat_at_hp == 50
    assert args.tick_eat is False
    assert args.max_ticks == 6000
    assert args.histogram is False


def test_flags_map_to_options():
    args = parse_args(
        ["-t", "50", "-f", "3", "-a", "2", "--setup2", "halberd", "--setup2-prayer", "piety",
         "--tick-eat", "--lost-ticks", "2", "--max-ticks", "0", "--seed", "9"]
    )
    options = options_from_args(args)
    assert options["trials"] == 50
    assert options["fish"] == 3
    assert options["armour"] == 2
    assert options["setup2"] == "halberd"
    assert options["setup2_prayer"] == "piety"
    assert options["tick_eat"] is True
    assert options["lost_ticks"] == 2
    assert options["max_ticks"] is None
    assert options["seed"] == 9


def test_unknown_weapon_choice_exits():
    with pytest.raises(SystemExit):
        parse_args(["--setup1", "crossbow"])


def test_negative_trials_exit():
    with pytest.raises(SystemExit):
        parse_args(["--trials", "-5"])


def test_main_prints_summary(capsys):
    assert main(["--trials", "20", "--seed", "1", "--histogram"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("success rate: ")
    assert "avg fish eaten: " in out
    assert "Histograms" in out


def test_main_fish_sweep(capsys):
    assert main(["--trials", "5", "--seed", "1", "--fish", "2", "--fish-sweep"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "food sweep - 5 trials per allotment"
    assert len(lines) == 4


def test_invalid_armour_tier_exits_with_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--trials", "5", "--armour", "7"])
    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert err.count("armour tier") == 1
    assert "hunllef-sim: error:" in err


def test_preset_supplies_defaults(tmp_path):
    path = tmp_path / "presets.json"
    path.write_text(json.dumps({"t3": {"armour": 3, "fish": 6}}), encoding="utf-8")
    args = parse_args(["--preset", "t3", "--preset-file", str(path)])
    assert args.armour == 3
    assert args.fish == 6

    args = parse_args(["--preset", "t3", "--preset-file", str(path), "--fish", "9"])
    assert args.fish == 9


def test_tick_eat_from_preset_can_be_switched_off(tmp_path):
    path = tmp_path / "presets.json"
    path.write_text(json.dumps({"tick": {"tick_eat": True}}), encoding="utf-8")
    assert parse_args(["--preset", "tick", "--preset-file", str(path)]).tick_eat is True
    args = parse_args(["--preset", "tick", "--preset-file", str(path), "--no-tick-eat"])
    assert args.tick_eat is False
    assert options_from_args(args)["tick_eat"] is False


def test_missing_preset_exits(tmp_path):
    with pytest.raises(SystemExit):
        parse_args(["--preset", "nope", "--preset-file", str(tmp_path / "none.json")])
