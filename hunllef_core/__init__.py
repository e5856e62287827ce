"""
Monte Carlo simulator for the Corrupted Hunllef fight.

Front-ends import from the package root; the submodules hold the stat
derivation, the two attackers, the trial runner and the reporting helpers.
"""

from __future__ import annotations

from .api import (
    Fight,
    FightSimulationResult,
    build_fight,
    levels_from_options,
    resolve_options,
    run_fight_simulation,
    run_fish_sweep,
)
from .combat import Hunllef, Player, contested_roll
from .data import (
    ARMOUR_TIERS,
    DEFAULT_OPTIONS,
    LEVEL_NAMES,
    PRAYER_LABELS,
    PRAYERS,
    PRESETS_FILENAME,
    WEAPON_LABELS,
    WEAPON_TIERS,
    WEAPONS,
    load_presets,
)
from .models import (
    FightConfig,
    FishSweepPoint,
    Levels,
    Setup,
    SimulationSummary,
    TrialOutcome,
)
from .report import (
    REPORT_QUANTILES,
    format_summary,
    format_sweep,
    histogram_frame,
    quantile_table,
    sweep_frame,
    ticks_to_clock,
)
from .simulation import fish_sweep, simulate_many, simulate_many_parallel, simulate_once
from .stats import ConfigurationError, build_setup, effective_level

__all__ = [
    "ARMOUR_TIERS",
    "ConfigurationError",
    "DEFAULT_OPTIONS",
    "Fight",
    "FightConfig",
    "FightSimulationResult",
    "FishSweepPoint",
    "Hunllef",
    "LEVEL_NAMES",
    "Levels",
    "PRAYERS",
    "PRAYER_LABELS",
    "PRESETS_FILENAME",
    "Player",
    "REPORT_QUANTILES",
    "Setup",
    "SimulationSummary",
    "TrialOutcome",
    "WEAPONS",
    "WEAPON_LABELS",
    "WEAPON_TIERS",
    "build_fight",
    "build_setup",
    "contested_roll",
    "effective_level",
    "fish_sweep",
    "format_summary",
    "format_sweep",
    "histogram_frame",
    "levels_from_options",
    "load_presets",
    "quantile_table",
    "resolve_options",
    "run_fight_simulation",
    "run_fish_sweep",
    "simulate_many",
    "simulate_many_parallel",
    "simulate_once",
    "sweep_frame",
    "ticks_to_clock",
]
