"""Domain constants, preset helpers, and shared type aliases."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

WEAPONS: Final[list[str]] = ["bow", "staff", "halberd"]

PRAYERS: Final[list[str]] = ["rigour", "augury", "piety", "eagle_eye", "mystic_might"]

WEAPON_LABELS: Final[dict[str, str]] = {
    "bow": "Corrupted bow",
    "staff": "Corrupted staff",
    "halberd": "Corrupted halberd",
}

PRAYER_LABELS: Final[dict[str, str]] = {
    "rigour": "Rigour",
    "augury": "Augury",
    "piety": "Piety",
    "eagle_eye": "Eagle Eye",
    "mystic_might": "Mystic Might",
}

# (accuracy %, strength %, defence %, magic defence %)
PRAYER_BONUSES: Final[dict[str, tuple[int, int, int, int]]] = {
    "rigour": (20, 23, 25, 0),
    "augury": (25, 0, 25, 25),
    "piety": (20, 23, 25, 0),
    "eagle_eye": (15, 15, 15, 0),
    "mystic_might": (15, 0, 15, 15),
}

# (accuracy bonus, defence bonus) per armour tier
ARMOUR_BONUSES: Final[dict[int, tuple[int, int]]] = {
    1: (16, 166),
    2: (28, 224),
    3: (40, 284),
}

# (accuracy bonus, strength bonus); for the staff the second value is the max hit
WEAPON_BONUSES: Final[dict[tuple[str, int], tuple[int, int]]] = {
    ("bow", 3): (172, 138),
    ("staff", 3): (184, 39),
    ("halberd", 3): (166, 138),
    ("bow", 2): (118, 88),
    ("staff", 2): (128, 31),
    ("halberd", 2): (114, 88),
    ("bow", 1): (72, 42),
    ("staff", 1): (84, 23),
    ("halberd", 1): (68, 42),
}

WEAPON_TIERS: Final[tuple[int, ...]] = (1, 2, 3)
ARMOUR_TIERS: Final[tuple[int, ...]] = tuple(sorted(ARMOUR_BONUSES))

EQUIPMENT_OFFSET: Final[int] = 64
BASE_LEVEL_OFFSET: Final[int] = 8
STANCE_BONUS: Final[int] = 3
PLAYER_ATTACK_DELAY: Final[int] = 4
PLAYER_ATTACKS_PER_SETUP: Final[int] = 6

# ---- Hunllef ---------------------------------------------------------------

HUNLLEF_HP: Final[int] = 1000
HUNLLEF_ATTACK_DELAY: Final[int] = 5
HUNLLEF_ACC_ROLL: Final[int] = (240 + 9) * (90 + EQUIPMENT_OFFSET)
HUNLLEF_DEFENSIVE_ROLL: Final[int] = (240 + 9) * (20 + EQUIPMENT_OFFSET)
HUNLLEF_MAX_HIT_BY_ARMOUR: Final[dict[int, int]] = {1: 13, 2: 10, 3: 8}
HUNLLEF_ATTACKS_PER_STYLE: Final[int] = 4
TORNADO_FIRST_COOLDOWN: Final[int] = 12
TORNADO_COOLDOWN_RANGE: Final[tuple[int, int]] = (10, 14)

# ---- Healing ---------------------------------------------------------------

FISH_HEAL: Final[int] = 20
FISH_DELAY_TICKS: Final[int] = 3

SECONDS_PER_TICK: Final[float] = 0.6

# ---- Defaults used by the CLI and the dashboard ----------------------------

DEFAULT_OPTIONS: Final[dict[str, Any]] = {
    "trials": 100_000,
    "seed": None,
    "workers": 1,
    "fish": 12,
    "armour": 1,
    "weapon_tier": 3,
    "setup1": "bow",
    "setup2": "staff",
    "setup1_prayer": "rigour",
    "setup2_prayer": "augury",
    "attack": 99,
    "strength": 99,
    "defence": 99,
    "ranged": 99,
    "magic": 99,
    "prayer": 99,
    "hp": 99,
    "eat_at_hp": 50,
    "tick_eat": False,
    "lost_ticks": 0,
    "max_ticks": 6000,
    "redemption": 0,
}

LEVEL_NAMES: Final[tuple[str, ...]] = (
    "attack",
    "strength",
    "defence",
    "ranged",
    "magic",
    "prayer",
    "hp",
)

# ---- User-maintained presets -----------------------------------------------

PRESETS_FILENAME: Final[str] = "presets.json"


def _coerce_option(name: str, value: object) -> Any:
    """Coerce a JSON value to the type of the matching default option."""

    default = DEFAULT_OPTIONS[name]
    if name == "seed":
        return None if value is None else int(value)
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise TypeError(f"{name} must be a boolean")
        return value
    if isinstance(default, int):
        if isinstance(value, bool):
            raise TypeError(f"{name} must be an integer")
        return int(value)
    if isinstance(default, str):
        if not isinstance(value, str):
            raise TypeError(f"{name} must be a string")
        return value.lower()
    return value


def parse_preset(raw: Mapping[object, object]) -> dict[str, Any]:
    """Keep the recognised options of a single preset entry, coerced to their types."""

    parsed: dict[str, Any] = {}
    for key, value in raw.items():
        if not isinstance(key, str) or key not in DEFAULT_OPTIONS:
            continue
        try:
            parsed[key] = _coerce_option(key, value)
        except (TypeError, ValueError):
            continue
    return parsed


def load_presets(preset_path: str | Path | None) -> dict[str, dict[str, Any]]:
    """Load named option presets from the given JSON file."""

    if not preset_path:
        return {}

    path = Path(preset_path)
    try:
        raw_data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, json.JSONDecodeError):
        return {}

    if not isinstance(raw_data, Mapping):
        return {}

    presets: dict[str, dict[str, Any]] = {}
    for name, options in raw_data.items():
        if not isinstance(name, str) or not isinstance(options, Mapping):
            continue
        parsed = parse_preset(options)
        if parsed:
            presets[name] = parsed
    return presets
