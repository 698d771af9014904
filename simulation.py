"""
Monte Carlo simulation of full games and win-rate estimation.
"""

import logging
import math
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np

from config import DEFAULT_CHUNK_SIZE, ROLL_BLOCK_SIZE, ROLL_FACES
from models import GameState, Outcome, RollFace, TrialTally, WinRateEstimate
from game_logic import apply_roll, check_outcome, new_game

logger = logging.getLogger(__name__)

ChunkTask = Tuple[int, int, np.random.SeedSequence]


class SimulationError(ValueError):
    """Raised when an estimate is requested that cannot be computed."""


def draw_roll(rng: np.random.Generator) -> RollFace:
    """One uniform draw over the six die faces."""
    return RollFace(int(rng.integers(ROLL_FACES)))


def roll_stream(rng: np.random.Generator, block_size: int = ROLL_BLOCK_SIZE) -> Iterator[int]:
    """Endless uniform die faces (as ints), drawn from `rng` a block at a time."""
    while True:
        yield from rng.integers(ROLL_FACES, size=block_size).tolist()


def play_out(game: GameState, rolls: Iterator[int]) -> Outcome:
    """Apply rolls from `rolls` to `game` in place until it ends."""
    outcome = check_outcome(game)
    while outcome is None:
        outcome = apply_roll(game, next(rolls))
    return outcome


def run_trial(
    initial_guard_position: int,
    rng: np.random.Generator,
    *,
    state: Optional[GameState] = None,
) -> Outcome:
    """
    Play one game to completion and return its outcome.

    A fresh game is started at `initial_guard_position`. If a starting
    `state` is given, a copy of it is played out instead and its own
    guard position overrides `initial_guard_position`.
    """
    game = state.clone() if state is not None else new_game(initial_guard_position)
    return play_out(game, iter(lambda: draw_roll(rng), None))


def simulate_chunk(task: ChunkTask) -> TrialTally:
    """Worker entry point: run `count` trials from their own seeded generator."""
    guard_position, count, seed = task
    rolls = roll_stream(np.random.default_rng(seed))

    won = 0
    for _ in range(count):
        if play_out(new_game(guard_position), rolls) is Outcome.WON:
            won += 1
    return TrialTally(won=won, lost=count - won)


def split_trials(trial_count: int, chunks: int) -> List[int]:
    """Near-equal chunk sizes summing to `trial_count`; no empty chunks."""
    chunks = max(1, min(chunks, trial_count))
    base, extra = divmod(trial_count, chunks)
    sizes = [base + (1 if i < extra else 0) for i in range(chunks)]
    return [size for size in sizes if size > 0]


def win_rate_percent(tally: TrialTally) -> float:
    if tally.trials == 0:
        raise SimulationError("win rate is undefined for zero trials")
    return 100.0 * tally.won / tally.trials


def estimate_win_rate(
    initial_guard_position: int,
    trial_count: int,
    workers: Optional[int] = None,
    seed: Optional[int] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    progress: Optional[Callable[[int], None]] = None,
) -> WinRateEstimate:
    """
    Monte Carlo: estimate the win rate for games starting at `initial_guard_position`.

    Trials are split into chunks, each chunk gets its own child of one
    SeedSequence, and chunks run on a process pool. Chunk tallies are summed,
    so the result does not depend on the order in which workers finish.

    Args:
        initial_guard_position: starting bird distance
        trial_count: number of games to play, must be positive
        workers: pool size; defaults to the CPU count. 1 runs inline.
        seed: root seed; None draws fresh OS entropy
        chunk_size: trials per worker task
        progress: called with the trial count of every finished chunk

    Returns:
        WinRateEstimate with won, lost and win rate in percent
    """
    if trial_count <= 0:
        raise SimulationError(f"trial_count must be positive, got {trial_count}")
    if chunk_size <= 0:
        raise SimulationError(f"chunk_size must be positive, got {chunk_size}")
    # Validates the starting position before any work is scheduled
    new_game(initial_guard_position)

    sizes = split_trials(trial_count, math.ceil(trial_count / chunk_size))
    child_seeds = np.random.SeedSequence(seed).spawn(len(sizes))
    tasks = [(initial_guard_position, size, s) for size, s in zip(sizes, child_seeds)]

    available_cpus = os.cpu_count() or 1
    if workers is None:
        workers = available_cpus
    workers = max(1, min(workers, available_cpus, len(tasks)))

    logger.info(
        "Estimating start pos %d: %d trials in %d chunks on %d worker(s)",
        initial_guard_position, trial_count, len(tasks), workers,
    )

    total = TrialTally()
    if workers == 1:
        for task in tasks:
            total += simulate_chunk(task)
            if progress is not None:
                progress(task[1])
    else:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(simulate_chunk, task): task[1] for task in tasks}
            for future in as_completed(futures):
                total += future.result()
                if progress is not None:
                    progress(futures[future])

    logger.debug("Start pos %d finished: won %d, lost %d", initial_guard_position, total.won, total.lost)

    return WinRateEstimate(
        guard_position=initial_guard_position,
        won=total.won,
        lost=total.lost,
        win_rate_percent=win_rate_percent(total),
    )
