"""High-level entry points used by the CLI, the dashboard and callers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from .combat import Hunllef, Player
from .data import DEFAULT_OPTIONS, LEVEL_NAMES
from .models import FightConfig, FishSweepPoint, Levels, Setup, SimulationSummary
from .simulation import fish_sweep, simulate_many, simulate_many_parallel
from .stats import build_setup


def resolve_options(options: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    """Merge caller options over the defaults, rejecting unknown keys.

    Raises
    ------
    ValueError
        If an option name is not recognised.
    """

    merged = dict(DEFAULT_OPTIONS)
    if options:
        unknown = sorted(set(options) - set(DEFAULT_OPTIONS))
        if unknown:
            raise ValueError(f"Unknown option(s): {', '.join(unknown)}")
        merged.update(options)
    return merged


def levels_from_options(options: Mapping[str, Any]) -> Levels:
    return Levels(**{name: int(options[name]) for name in LEVEL_NAMES})


@dataclass
class Fight:
    """Prototype combatants and policy built from one set of options."""

    levels: Levels
    setup1: Setup
    setup2: Setup
    player: Player
    hunllef: Hunllef
    config: FightConfig


def build_fight(options: Optional[Mapping[str, Any]] = None) -> Fight:
    """Derive both loadouts, the prototype player and boss, and the fight policy.

    Gear and prayer selections are validated here, before any trial runs.
    """

    opts = resolve_options(options)
    levels = levels_from_options(opts)
    armour = int(opts["armour"])
    weapon_tier = int(opts["weapon_tier"])

    setup1 = build_setup(opts["setup1"], weapon_tier, opts["setup1_prayer"], levels, armour)
    setup2 = build_setup(opts["setup2"], weapon_tier, opts["setup2_prayer"], levels, armour)
    player = Player.from_levels(
        setup1,
        setup2,
        levels,
        fish=int(opts["fish"]),
        redemption=int(opts["redemption"]),
        lost_ticks=int(opts["lost_ticks"]),
    )
    hunllef = Hunllef.for_armour_tier(armour)
    max_ticks = opts["max_ticks"]
    config = FightConfig(
        eat_at_hp=int(opts["eat_at_hp"]),
        tick_eat=bool(opts["tick_eat"]),
        max_ticks=None if max_ticks is None else int(max_ticks),
    )
    return Fight(
        levels=levels,
        setup1=setup1,
        setup2=setup2,
        player=player,
        hunllef=hunllef,
        config=config,
    )


@dataclass
class FightSimulationResult:
    """Bundle containing the built fight and its Monte Carlo summary."""

    fight: Fight
    summary: SimulationSummary


def run_fight_simulation(options: Optional[Mapping[str, Any]] = None) -> FightSimulationResult:
    """Build the fight from ``options`` and simulate it.

    Parameters
    ----------
    options:
        Partial option mapping; missing keys fall back to ``DEFAULT_OPTIONS``.
        ``workers`` above 1 spreads the trials over worker processes.

    Returns
    -------
    FightSimulationResult
        The fight prototypes together with the aggregated results.
    """

    opts = resolve_options(options)
    fight = build_fight(opts)
    trials = int(opts["trials"])
    seed = opts["seed"]
    workers = int(opts["workers"])

    if workers > 1:
        summary = simulate_many_parallel(
            fight.player,
            fight.hunllef,
            fight.config,
            trials=trials,
            seed=seed,
            workers=workers,
        )
    else:
        summary = simulate_many(fight.player, fight.hunllef, fight.config, trials=trials, seed=seed)
    return FightSimulationResult(fight=fight, summary=summary)


def run_fish_sweep(options: Optional[Mapping[str, Any]] = None) -> list[FishSweepPoint]:
    """Return success tallies for every food allotment up to ``options['fish']``."""

    opts = resolve_options(options)
    fight = build_fight(opts)
    return fish_sweep(
        fight.player,
        fight.hunllef,
        fight.config,
        trials=int(opts["trials"]),
        seed=opts["seed"],
    )
