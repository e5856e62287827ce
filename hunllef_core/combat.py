"""Tick-driven attackers: the Hunllef, the player and their shared hit roll."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Optional

from .data import (
    FISH_DELAY_TICKS,
    FISH_HEAL,
    HUNLLEF_ACC_ROLL,
    HUNLLEF_ATTACK_DELAY,
    HUNLLEF_ATTACKS_PER_STYLE,
    HUNLLEF_DEFENSIVE_ROLL,
    HUNLLEF_HP,
    HUNLLEF_MAX_HIT_BY_ARMOUR,
    PLAYER_ATTACKS_PER_SETUP,
    TORNADO_COOLDOWN_RANGE,
    TORNADO_FIRST_COOLDOWN,
)
from .models import Levels, Setup
from .stats import ConfigurationError

STYLE_RANGED = "ranged"
STYLE_MAGIC = "magic"


def contested_roll(
    acc_roll: int,
    defensive_roll: int,
    max_hit: int,
    rng: random.Random,
) -> int:
    """Resolve one attack and return the damage dealt.

    The attacker hits when its draw from ``[0, acc_roll]`` strictly exceeds the
    defender's draw from ``[0, defensive_roll]``; a hit deals a uniform draw
    from ``[0, max_hit]``. All bounds are inclusive.
    """

    if acc_roll < 0 or defensive_roll < 0 or max_hit < 0:
        raise ValueError("rolls and max hit must be >= 0")
    if rng.randint(0, acc_roll) > rng.randint(0, defensive_roll):
        return rng.randint(0, max_hit)
    return 0


@dataclass
class Hunllef:
    """Boss state for one fight.

    Alternates between ranged and magic every four attacks. Some attacks are
    replaced by a tornado, which deals no damage here but still counts toward
    the style rotation.
    """

    max_hit: int
    hp: int = HUNLLEF_HP
    attack_delay: int = HUNLLEF_ATTACK_DELAY
    acc_roll: int = HUNLLEF_ACC_ROLL
    defensive_roll: int = HUNLLEF_DEFENSIVE_ROLL
    tornado_cd: int = TORNADO_FIRST_COOLDOWN
    attack_cd: int = 0
    style: str = STYLE_RANGED
    attacks_left: int = HUNLLEF_ATTACKS_PER_STYLE

    @classmethod
    def for_armour_tier(cls, armour_tier: int) -> "Hunllef":
        """Return a fresh boss whose max hit matches the player's armour tier."""

        try:
            max_hit = HUNLLEF_MAX_HIT_BY_ARMOUR[armour_tier]
        except KeyError as exc:
            raise ConfigurationError(
                f"armour tier must be one of {sorted(HUNLLEF_MAX_HIT_BY_ARMOUR)}, "
                f"got {armour_tier!r}"
            ) from exc
        return cls(max_hit=max_hit)

    def spawn(self) -> "Hunllef":
        """Return an independent copy to mutate during a single trial."""

        return replace(self)

    def switch_style(self) -> None:
        self.style = STYLE_MAGIC if self.style == STYLE_RANGED else STYLE_RANGED

    def attack(self, rng: random.Random, player_rdr: int, player_mdr: int) -> Optional[int]:
        """Advance one tick and return the damage dealt, or None without an attack."""

        if self.attack_cd > 0:
            self.attack_cd -= 1
            return None

        if self.attacks_left == 0:
            self.switch_style()
            self.attacks_left = HUNLLEF_ATTACKS_PER_STYLE
        self.attacks_left -= 1
        self.attack_cd = self.attack_delay - 1

        # Approximation: the real tornado trigger is not known.
        if self.tornado_cd == 0:
            self.tornado_cd = rng.randint(*TORNADO_COOLDOWN_RANGE)
            return None
        self.tornado_cd -= 1

        pdr = player_rdr if self.style == STYLE_RANGED else player_mdr
        return contested_roll(self.acc_roll, pdr, self.max_hit, rng)


@dataclass
class Player:
    """Player state for one fight, swapping between two loadouts."""

    setup1: Setup
    setup2: Setup
    hp: int
    fish: int
    max_hp: int = 0
    prayer: int = 0
    redemption: int = 0
    attack_cd: int = 0
    attacks_left: int = PLAYER_ATTACKS_PER_SETUP
    current: Optional[Setup] = None

    def __post_init__(self) -> None:
        if self.max_hp <= 0:
            self.max_hp = self.hp
        if self.current is None:
            self.current = self.setup1

    @classmethod
    def from_levels(
        cls,
        setup1: Setup,
        setup2: Setup,
        levels: Levels,
        fish: int,
        redemption: int = 0,
        lost_ticks: int = 0,
    ) -> "Player":
        """Build the prototype player; ``lost_ticks`` delays the first attack."""

        return cls(
            setup1=setup1,
            setup2=setup2,
            hp=levels.hp,
            fish=fish,
            max_hp=levels.hp,
            prayer=levels.prayer,
            redemption=redemption,
            attack_cd=lost_ticks,
        )

    def spawn(self, rng: random.Random) -> "Player":
        """Return a fresh copy for one trial with a randomly chosen starting setup."""

        start = self.setup1 if rng.random() < 0.5 else self.setup2
        return replace(self, current=start)

    def switch_setup(self) -> None:
        self.current = self.setup2 if self.current is self.setup1 else self.setup1

    def attack(self, rng: random.Random, hunllef_defensive_roll: int) -> Optional[int]:
        """Advance one tick and return the damage dealt, or None without an attack."""

        if self.attack_cd > 0:
            self.attack_cd -= 1
            return None

        if self.attacks_left == 0:
            self.switch_setup()
            self.attacks_left = PLAYER_ATTACKS_PER_SETUP
        setup = self.current
        # the first tick of the delay is the attack itself
        self.attack_cd = setup.attack_delay - 1
        self.attacks_left -= 1
        return contested_roll(setup.acc_roll, hunllef_defensive_roll, setup.max_hit, rng)

    def eat_fish(self) -> bool:
        if self.fish <= 0:
            return False
        self.fish -= 1
        self.hp += FISH_HEAL
        self.attack_cd += FISH_DELAY_TICKS
        return True

    def redemption_heal(self) -> bool:
        """Heal a quarter of the prayer level, once per remaining charge."""

        if self.redemption <= 0:
            return False
        self.redemption -= 1
        self.hp += self.prayer // 4
        return True

    @property
    def redemption_threshold(self) -> int:
        """Hitpoints below which redemption triggers (under 10% of max)."""

        return (self.max_hp - 1) // 10 + 1
