"""Derivation of combat stats from levels, gear tiers and prayers."""

from __future__ import annotations

from .data import (
    ARMOUR_BONUSES,
    BASE_LEVEL_OFFSET,
    EQUIPMENT_OFFSET,
    PLAYER_ATTACK_DELAY,
    PRAYER_BONUSES,
    STANCE_BONUS,
    WEAPON_BONUSES,
    WEAPONS,
)
from .models import Levels, Setup


class ConfigurationError(ValueError):
    """Raised when a gear, tier or prayer selection is not supported."""


def effective_level(level: int, prayer_bonus: int, stance_bonus: int) -> int:
    """Return the boosted level used in accuracy, damage and defence rolls.

    The prayer percentage is floored before the flat offsets are added.
    """

    return level * (100 + prayer_bonus) // 100 + BASE_LEVEL_OFFSET + stance_bonus


def armour_bonuses(armour_tier: int) -> tuple[int, int]:
    """Return the (accuracy, defence) bonuses of the given armour tier.

    Raises
    ------
    ConfigurationError
        If the armour tier is not one of the supported tiers.
    """

    try:
        return ARMOUR_BONUSES[armour_tier]
    except KeyError as exc:
        raise ConfigurationError(
            f"armour tier must be one of {sorted(ARMOUR_BONUSES)}, got {armour_tier!r}"
        ) from exc


def weapon_bonuses(weapon: str, weapon_tier: int) -> tuple[int, int]:
    """Return the (accuracy, strength) bonuses for a weapon at a tier."""

    if weapon not in WEAPONS:
        raise ConfigurationError(f"Unknown weapon '{weapon}'")
    try:
        return WEAPON_BONUSES[(weapon, weapon_tier)]
    except KeyError as exc:
        raise ConfigurationError(
            f"weapon tier must be 1, 2, or 3, got {weapon_tier!r}"
        ) from exc


def prayer_bonuses(prayer: str) -> tuple[int, int, int, int]:
    """Return the (accuracy, strength, defence, magic defence) prayer boosts."""

    try:
        return PRAYER_BONUSES[prayer]
    except KeyError as exc:
        raise ConfigurationError(f"Unknown prayer '{prayer}'") from exc


def build_setup(
    weapon: str,
    weapon_tier: int,
    prayer: str,
    levels: Levels,
    armour_tier: int,
) -> Setup:
    """Compute the combat numbers for one weapon/prayer loadout.

    Parameters
    ----------
    weapon:
        One of ``WEAPONS``.
    weapon_tier:
        Weapon tier, 1 to 3.
    prayer:
        One of ``PRAYERS``; supplies the percentage boosts.
    levels:
        Player skill levels.
    armour_tier:
        Armour tier, 1 to 3.

    Returns
    -------
    Setup
        Attack delay, max hit, accuracy roll and both defensive rolls.

    Raises
    ------
    ConfigurationError
        If the weapon, prayer or either tier is unsupported.
    """

    armour_acc, armour_def = armour_bonuses(armour_tier)
    weapon_acc, eq_str = weapon_bonuses(weapon, weapon_tier)
    prayer_acc, prayer_str, prayer_def, prayer_def_magic = prayer_bonuses(prayer)
    eq_acc = armour_acc + weapon_acc

    if weapon == "bow":
        acc_lvl, dam_lvl = levels.ranged, levels.ranged
    elif weapon == "staff":
        acc_lvl, dam_lvl = levels.magic, levels.magic
    else:
        acc_lvl, dam_lvl = levels.attack, levels.strength

    stance = STANCE_BONUS if weapon == "staff" else 0
    eff_acc_lvl = effective_level(acc_lvl, prayer_acc, stance)
    acc_roll = eff_acc_lvl * (eq_acc + EQUIPMENT_OFFSET)

    if weapon == "staff":
        max_hit = eq_str
    else:
        stance = STANCE_BONUS if weapon == "halberd" else 0
        eff_str_lvl = effective_level(dam_lvl, prayer_str, stance)
        max_hit = (eff_str_lvl * (eq_str + EQUIPMENT_OFFSET) + 320) // 640

    eff_def_lvl = effective_level(levels.defence, prayer_def, 0)
    rdr = eff_def_lvl * (armour_def + EQUIPMENT_OFFSET)

    stance = STANCE_BONUS if weapon == "staff" else 0
    eff_magic_lvl = effective_level(levels.magic, prayer_def_magic, stance)
    # each share is floored separately
    eff_magic_def_lvl = eff_def_lvl * 3 // 10 + eff_magic_lvl * 7 // 10
    mdr = eff_magic_def_lvl * (armour_def + EQUIPMENT_OFFSET)

    return Setup(
        weapon=weapon,
        attack_delay=PLAYER_ATTACK_DELAY,
        max_hit=max_hit,
        acc_roll=acc_roll,
        rdr=rdr,
        mdr=mdr,
    )
