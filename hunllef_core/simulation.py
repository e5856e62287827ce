"""Monte Carlo fight runner and aggregators."""

from __future__ import annotations

import logging
import random
from concurrent.futures import Future, ProcessPoolExecutor
from dataclasses import replace
from time import perf_counter
from typing import Optional

import numpy as np

from .combat import Hunllef, Player
from .models import FightConfig, FishSweepPoint, SimulationSummary, TrialOutcome

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 10_000


def simulate_once(
    player: Player,
    hunllef: Hunllef,
    config: FightConfig,
    rng: random.Random,
) -> TrialOutcome:
    """Simulate a single fight from fresh copies of the prototypes.

    Parameters
    ----------
    player:
        Prototype player; never mutated.
    hunllef:
        Prototype boss; never mutated.
    config:
        Healing policy and optional tick budget.
    rng:
        Random source for every roll in this trial.
    """

    if player.hp <= 0 or hunllef.hp <= 0:
        return TrialOutcome(ticks=0, success=False, fish_eaten=0)

    player = player.spawn(rng)
    hunllef = hunllef.spawn()
    starting_fish = player.fish
    eat_at_hp = 0 if config.tick_eat else config.eat_at_hp
    ticks = 0
    timed_out = False

    while hunllef.hp > 0 and player.hp > 0:
        damage = player.attack(rng, hunllef.defensive_roll)
        if damage is not None:
            hunllef.hp = max(0, hunllef.hp - damage)

        setup = player.current
        damage = hunllef.attack(rng, setup.rdr, setup.mdr)
        if damage is not None:
            starting_hp = player.hp
            player.hp = max(0, player.hp - damage)
            if 0 < player.hp < player.redemption_threshold and starting_hp > hunllef.max_hit:
                player.redemption_heal()
            # eats even when the hit took hp to 0
            if config.tick_eat and damage < hunllef.max_hit and player.hp <= hunllef.max_hit:
                player.eat_fish()

        if player.hp < eat_at_hp:
            player.eat_fish()

        ticks += 1
        if config.max_ticks is not None and ticks > config.max_ticks:
            timed_out = True
            break

    success = not timed_out and player.hp > 0 and hunllef.hp == 0
    if timed_out:
        logger.debug("Trial exceeded %d ticks", config.max_ticks)
    return TrialOutcome(
        ticks=ticks,
        success=success,
        fish_eaten=starting_fish - player.fish,
    )


def _run_trials(
    player: Player,
    hunllef: Hunllef,
    config: FightConfig,
    trials: int,
    seed: Optional[int],
) -> tuple[int, list[int], list[int]]:
    """Run trials on one random stream and return (successes, times, fish eaten)."""

    rng = random.Random(seed)
    successes = 0
    times: list[int] = []
    fish_eaten: list[int] = []
    for _ in range(trials):
        outcome = simulate_once(player, hunllef, config, rng)
        fish_eaten.append(outcome.fish_eaten)
        if outcome.success:
            successes += 1
            times.append(outcome.ticks)
    return successes, times, fish_eaten


def simulate_many(
    player: Player,
    hunllef: Hunllef,
    config: FightConfig,
    trials: int = 10_000,
    seed: Optional[int] = None,
) -> SimulationSummary:
    """Run Monte Carlo fights and collect success count, times and food usage."""

    if trials < 0:
        raise ValueError("trials must be >= 0")

    logger.info("Simulating %d trials (seed=%s)", trials, seed)
    start = perf_counter()
    successes, times, fish_eaten = _run_trials(player, hunllef, config, trials, seed)
    elapsed = perf_counter() - start
    logger.info("%d/%d trials succeeded in %.2fs", successes, trials, elapsed)

    return SimulationSummary(
        trials=trials,
        successes=successes,
        times=times,
        fish_eaten=fish_eaten,
        seed=seed,
        compute_seconds=elapsed,
    )


def chunk_seeds(seed: Optional[int], chunks: int) -> list[int]:
    """Return one independent integer seed per chunk, derived from ``seed``."""

    sequence = np.random.SeedSequence(seed)
    return [int(child.generate_state(1)[0]) for child in sequence.spawn(chunks)]


def simulate_many_parallel(
    player: Player,
    hunllef: Hunllef,
    config: FightConfig,
    trials: int = 10_000,
    seed: Optional[int] = None,
    workers: int = 2,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> SimulationSummary:
    """Run trials across worker processes, each chunk on its own seeded stream.

    Chunks are merged in submission order, so a fixed ``seed`` and
    ``chunk_size`` reproduce the same summary for any worker count.
    """

    if trials < 0:
        raise ValueError("trials must be >= 0")
    if workers < 1:
        raise ValueError("workers must be >= 1")
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")

    sizes = [min(chunk_size, trials - offset) for offset in range(0, trials, chunk_size)]
    seeds = chunk_seeds(seed, len(sizes))
    logger.info(
        "Simulating %d trials in %d chunks on %d workers (seed=%s)",
        trials,
        len(sizes),
        workers,
        seed,
    )

    start = perf_counter()
    successes = 0
    times: list[int] = []
    fish_eaten: list[int] = []
    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures: list[Future] = [
            executor.submit(_run_trials, player, hunllef, config, size, chunk_seed)
            for size, chunk_seed in zip(sizes, seeds)
        ]
        for future in futures:
            chunk_successes, chunk_times, chunk_fish = future.result()
            successes += chunk_successes
            times.extend(chunk_times)
            fish_eaten.extend(chunk_fish)
    elapsed = perf_counter() - start
    logger.info("%d/%d trials succeeded in %.2fs", successes, trials, elapsed)

    return SimulationSummary(
        trials=trials,
        successes=successes,
        times=times,
        fish_eaten=fish_eaten,
        seed=seed,
        compute_seconds=elapsed,
    )


def fish_sweep(
    player: Player,
    hunllef: Hunllef,
    config: FightConfig,
    trials: int = 10_000,
    seed: Optional[int] = None,
) -> list[FishSweepPoint]:
    """Return the success tally for every food allotment from 0 to ``player.fish``."""

    points: list[FishSweepPoint] = []
    for fish in range(player.fish + 1):
        summary = simulate_many(replace(player, fish=fish), hunllef, config, trials, seed)
        points.append(
            FishSweepPoint(fish=fish, successes=summary.successes, trials=summary.trials)
        )
    return points
