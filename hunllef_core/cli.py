"""Command line front-end: simulate the Corrupted Hunllef fight."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Optional

from .api import run_fight_simulation, run_fish_sweep
from .data import DEFAULT_OPTIONS, PRAYERS, PRESETS_FILENAME, WEAPONS, load_presets
from .report import format_summary, format_sweep
from .stats import ConfigurationError


def _build_preset_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(add_help=False)
    ap.add_argument("--preset", default=None, help="name of a preset to use as defaults")
    ap.add_argument(
        "--preset-file",
        type=Path,
        default=Path.cwd() / PRESETS_FILENAME,
        help="JSON file holding named presets",
    )
    return ap


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="hunllef-sim",
        description="Simulates the Corrupted Hunllef fight",
        parents=[_build_preset_parser()],
    )
    ap.add_argument("-t", "--trials", type=int, help="number of simulations")
    ap.add_argument("--seed", type=int, help="random seed")
    ap.add_argument("--workers", type=int, help="worker processes (1 runs in-process)")
    ap.add_argument("-f", "--fish", type=int, help="number of fish to eat (heal 20 hp)")
    ap.add_argument("-a", "--armour", type=int, help="tier of armour (1-3)")
    ap.add_argument("--weapon-tier", dest="weapon_tier", type=int, help="tier of both weapons (1-3)")

    ap.add_argument("--setup1", choices=WEAPONS, help="1st setup weapon")
    ap.add_argument("--setup2", choices=WEAPONS, help="2nd setup weapon")
    ap.add_argument("--setup1-prayer", dest="setup1_prayer", choices=PRAYERS, help="1st setup prayer")
    ap.add_argument("--setup2-prayer", dest="setup2_prayer", choices=PRAYERS, help="2nd setup prayer")

    ap.add_argument("--attack", type=int, help="attack level")
    ap.add_argument("--strength", type=int, help="strength level")
    ap.add_argument("--defence", type=int, help="defence level")
    ap.add_argument("--ranged", type=int, help="ranged level")
    ap.add_argument("--magic", type=int, help="magic level")
    ap.add_argument("--prayer", type=int, help="prayer level (redemption heals a quarter)")
    ap.add_argument("--hp", type=int, help="hitpoints level")

    ap.add_argument("-e", "--eat-at-hp", dest="eat_at_hp", type=int, help="hp threshold to eat fish")
    ap.add_argument(
        "--tick-eat",
        dest="tick_eat",
        action=argparse.BooleanOptionalAction,
        help="simulate tick eating when hp is below the Hunllef max hit",
    )
    ap.add_argument("--lost-ticks", dest="lost_ticks", type=int, help="account for ticks lost by the player")
    ap.add_argument(
        "--max-ticks",
        dest="max_ticks",
        type=int,
        help="max time for a successful run in ticks (0 disables the limit)",
    )
    ap.add_argument("--redemption", type=int, help="number of redemption heals to attempt")

    ap.add_argument("--histogram", action="store_true", help="print quantiles of times and fish eaten")
    ap.add_argument(
        "--fish-sweep",
        dest="fish_sweep",
        action="store_true",
        help="report the success rate for every fish count up to --fish",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    ap.set_defaults(**DEFAULT_OPTIONS)
    return ap


def options_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Collect the simulation options from parsed arguments."""

    options = {name: getattr(args, name) for name in DEFAULT_OPTIONS}
    if options["max_ticks"] is not None and options["max_ticks"] <= 0:
        options["max_ticks"] = None
    return options


def _parse(argv: Optional[Sequence[str]]) -> tuple[argparse.ArgumentParser, argparse.Namespace]:
    preset_args, _ = _build_preset_parser().parse_known_args(argv)
    ap = build_argparser()
    if preset_args.preset:
        presets = load_presets(preset_args.preset_file)
        if preset_args.preset not in presets:
            ap.error(f"preset '{preset_args.preset}' not found in {preset_args.preset_file}")
        ap.set_defaults(**presets[preset_args.preset])
    args = ap.parse_args(argv)

    if args.trials < 0:
        ap.error("--trials must be >= 0")
    if args.workers < 1:
        ap.error("--workers must be >= 1")
    if args.fish < 0:
        ap.error("--fish must be >= 0")
    return ap, args


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse ``argv``, using the selected preset (if any) as defaults."""

    _, args = _parse(argv)
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap, args = _parse(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    options = options_from_args(args)

    try:
        if args.fish_sweep:
            points = run_fish_sweep(options)
            print(format_sweep(points, trials=options["trials"]))
        else:
            result = run_fight_simulation(options)
            print(format_summary(result.summary, histogram=args.histogram))
    except ConfigurationError as exc:
        ap.error(str(exc))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
