"""
Game analytics: exact win probabilities, confidence intervals and difficulty comparison.
"""

import math
from fractions import Fraction
from functools import lru_cache
from typing import Callable, Dict, Optional, Tuple

import pandas as pd
from scipy import stats

from config import CONFIDENCE_LEVEL, DIFFICULTIES, INITIAL_PILE_SIZE, PILE_NAMES, ROLL_FACES
from models import WinRateEstimate
from game_logic import new_game
from simulation import estimate_win_rate


@lru_cache(maxsize=None)
def _win_probability(guard: int, piles: Tuple[int, ...]) -> Fraction:
    """
    Exact P(win) from a state, by recursion over every die face.

    `piles` is kept sorted descending: colour faces are symmetric, so only the
    multiset of pile sizes matters, and the basket always hits piles[0].
    A colour face on an empty orchard leaves the state unchanged; those
    self-loops are folded in by dividing by the probability of moving.
    """
    if guard == 0:
        return Fraction(0)
    if sum(piles) == 0:
        return Fraction(1)

    p_face = Fraction(1, ROLL_FACES)
    total = p_face * _win_probability(guard - 1, piles)  # bird

    # Basket: fullest orchard
    total += p_face * _win_probability(guard, _take(piles, 0))

    stuck = 0
    for i, size in enumerate(piles):
        if size == 0:
            stuck += 1
        else:
            total += p_face * _win_probability(guard, _take(piles, i))

    return total / (1 - stuck * p_face)


def _take(piles: Tuple[int, ...], i: int) -> Tuple[int, ...]:
    lst = list(piles)
    lst[i] -= 1
    return tuple(sorted(lst, reverse=True))


def exact_win_probability(
    initial_guard_position: int,
    piles: Optional[Tuple[int, ...]] = None,
) -> Fraction:
    """
    Exact win probability under the fullest-orchard basket policy.

    Starts from full orchards unless `piles` is given. Used to check the
    Monte Carlo estimates.
    """
    state = new_game(initial_guard_position)
    if piles is None:
        piles = tuple(state.resource_piles)
    if len(piles) != len(PILE_NAMES) or any(not 0 <= p <= INITIAL_PILE_SIZE for p in piles):
        raise ValueError(f"piles must be {len(PILE_NAMES)} values in [0, {INITIAL_PILE_SIZE}], got {piles}")
    return _win_probability(initial_guard_position, tuple(sorted(piles, reverse=True)))


def win_rate_confidence_interval(
    estimate: WinRateEstimate,
    confidence: float = CONFIDENCE_LEVEL,
) -> Tuple[float, float]:
    """Normal-approximation interval for the win rate, in percent, clamped to [0, 100]."""
    if not 0.0 < confidence < 1.0:
        raise ValueError(f"confidence must be in (0, 1), got {confidence}")

    z = float(stats.norm.ppf(0.5 + confidence / 2))
    p = estimate.win_rate_percent / 100.0
    half_width = z * math.sqrt(p * (1 - p) / estimate.trials) * 100.0
    low = max(0.0, estimate.win_rate_percent - half_width)
    high = min(100.0, estimate.win_rate_percent + half_width)
    return low, high


def compare_difficulties(
    trial_count: int,
    workers: Optional[int] = None,
    seed: Optional[int] = None,
    progress: Optional[Callable[[str, int], None]] = None,
) -> Dict[str, WinRateEstimate]:
    """
    Run the estimator once per difficulty preset.

    `progress`, if given, is called with (label, trials_done) as chunks finish.
    Presets get distinct seeds derived from `seed`.
    """
    results: Dict[str, WinRateEstimate] = {}
    for offset, (label, start_pos) in enumerate(DIFFICULTIES.items()):
        chunk_progress = None
        if progress is not None:
            chunk_progress = lambda done, label=label: progress(label, done)
        results[label] = estimate_win_rate(
            start_pos,
            trial_count,
            workers=workers,
            seed=None if seed is None else seed + offset,
            progress=chunk_progress,
        )
    return results


def summarize_estimates(
    estimates: Dict[str, WinRateEstimate],
    confidence: float = CONFIDENCE_LEVEL,
    include_exact: bool = True,
) -> pd.DataFrame:
    """One row per difficulty: counts, win rate, interval and (optionally) the exact value."""
    rows = []
    for label, est in estimates.items():
        low, high = win_rate_confidence_interval(est, confidence)
        row = {
            "Difficulty": label,
            "Start pos": est.guard_position,
            "Won": est.won,
            "Lost": est.lost,
            "Win rate (%)": est.win_rate_percent,
            "CI low (%)": low,
            "CI high (%)": high,
        }
        if include_exact:
            row["Exact (%)"] = float(exact_win_probability(est.guard_position)) * 100.0
        rows.append(row)
    return pd.DataFrame(rows)
