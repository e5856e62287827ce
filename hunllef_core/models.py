"""Dataclasses shared across the stat, combat and simulation modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Levels:
    """Player skill levels used to derive combat stats."""

    attack: int = 99
    strength: int = 99
    defence: int = 99
    ranged: int = 99
    magic: int = 99
    prayer: int = 99
    hp: int = 99


@dataclass(frozen=True)
class Setup:
    """Combat numbers for one prepared loadout (weapon plus prayer)."""

    weapon: str
    attack_delay: int
    max_hit: int
    acc_roll: int
    rdr: int
    mdr: int


@dataclass(frozen=True)
class FightConfig:
    """Healing policy and time budget applied to every trial."""

    eat_at_hp: int = 50
    tick_eat: bool = False
    max_ticks: Optional[int] = None


@dataclass(frozen=True)
class TrialOutcome:
    """Result of a single simulated fight."""

    ticks: int
    success: bool
    fish_eaten: int


@dataclass
class SimulationSummary:
    """Aggregated Monte Carlo results for one configuration."""

    trials: int
    successes: int
    times: list[int] = field(default_factory=list)
    fish_eaten: list[int] = field(default_factory=list)
    seed: Optional[int] = None
    compute_seconds: float = 0.0

    @property
    def success_rate(self) -> float:
        return self.successes / self.trials if self.trials > 0 else 0.0

    @property
    def mean_time(self) -> float:
        """Average ticks of the successful trials (NaN without successes)."""

        return sum(self.times) / len(self.times) if self.times else float("nan")

    @property
    def mean_fish_eaten(self) -> float:
        return sum(self.fish_eaten) / len(self.fish_eaten) if self.fish_eaten else float("nan")


@dataclass
class FishSweepPoint:
    """Success tally for a single food allotment."""

    fish: int
    successes: int
    trials: int

    @property
    def success_rate(self) -> float:
        return self.successes / self.trials if self.trials > 0 else 0.0
