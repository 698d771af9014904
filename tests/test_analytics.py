from __future__ import annotations

import math
from fractions import Fraction

import pytest

from analytics import (
    compare_difficulties,
    exact_win_probability,
    summarize_estimates,
    win_rate_confidence_interval,
)
from config import DIFFICULTIES
from models import WinRateEstimate
from simulation import estimate_win_rate


def test_exact_probability_edge_states() -> None:
    assert exact_win_probability(0) == 0
    assert exact_win_probability(3, (0, 0, 0, 0)) == 1
    # One apple left: any face but the bird wins, the bird loses at guard 1.
    # Colour faces on empty piles repeat the roll.
    assert exact_win_probability(1, (1, 0, 0, 0)) == Fraction(2, 3)


def test_exact_probability_ignores_pile_order() -> None:
    assert exact_win_probability(3, (2, 0, 1, 4)) == exact_win_probability(3, (4, 2, 1, 0))


def test_exact_probability_rejects_bad_piles() -> None:
    with pytest.raises(ValueError):
        exact_win_probability(3, (5, 0, 0, 0))
    with pytest.raises(ValueError):
        exact_win_probability(3, (1, 1, 1))


def test_exact_probability_rises_with_start_position() -> None:
    probs = [exact_win_probability(start) for start in (4, 5, 6)]

    assert all(0 < p < 1 for p in probs)
    assert probs[0] < probs[1] < probs[2]


@pytest.mark.parametrize("start", sorted(DIFFICULTIES.values()))
def test_estimate_agrees_with_exact(start: int) -> None:
    trials = 20_000
    result = estimate_win_rate(start, trials, workers=1, seed=2024 + start)

    p = float(exact_win_probability(start))
    std_err = math.sqrt(p * (1 - p) / trials) * 100.0
    assert abs(result.win_rate_percent - p * 100.0) < 4 * std_err


def test_confidence_interval_brackets_estimate() -> None:
    est = WinRateEstimate(guard_position=5, won=600, lost=400, win_rate_percent=60.0)

    low, high = win_rate_confidence_interval(est, 0.95)

    assert low < 60.0 < high
    assert high - 60.0 == pytest.approx(1.96 * math.sqrt(0.24 / 1000) * 100.0, rel=1e-3)


def test_confidence_interval_is_clamped() -> None:
    est = WinRateEstimate(guard_position=0, won=0, lost=50, win_rate_percent=0.0)

    assert win_rate_confidence_interval(est) == (0.0, 0.0)


def test_confidence_interval_rejects_bad_level() -> None:
    est = WinRateEstimate(guard_position=5, won=1, lost=1, win_rate_percent=50.0)

    with pytest.raises(ValueError):
        win_rate_confidence_interval(est, 1.5)


def test_compare_difficulties_runs_every_preset() -> None:
    calls = []

    results = compare_difficulties(
        500, workers=1, seed=8, progress=lambda label, done: calls.append((label, done))
    )

    assert list(results) == list(DIFFICULTIES)
    for label, est in results.items():
        assert est.guard_position == DIFFICULTIES[label]
        assert est.trials == 500
    assert sorted({label for label, _ in calls}) == sorted(DIFFICULTIES)
    assert sum(done for _, done in calls) == 500 * len(DIFFICULTIES)


def test_summarize_estimates_builds_one_row_per_difficulty() -> None:
    estimates = {
        "easy": WinRateEstimate(guard_position=6, won=80, lost=20, win_rate_percent=80.0),
        "hard": WinRateEstimate(guard_position=4, won=50, lost=50, win_rate_percent=50.0),
    }

    df = summarize_estimates(estimates)

    assert list(df["Difficulty"]) == ["easy", "hard"]
    assert list(df["Start pos"]) == [6, 4]
    assert (df["CI low (%)"] <= df["Win rate (%)"]).all()
    assert (df["Win rate (%)"] <= df["CI high (%)"]).all()
    assert "Exact (%)" in df.columns
    assert df["Exact (%)"].between(0, 100).all()


def test_summarize_estimates_can_skip_exact() -> None:
    estimates = {"normal": WinRateEstimate(guard_position=5, won=3, lost=1, win_rate_percent=75.0)}

    df = summarize_estimates(estimates, include_exact=False)

    assert "Exact (%)" not in df.columns


def test_confidence_interval_widens_with_level() -> None:
    est = WinRateEstimate(guard_position=5, won=600, lost=400, win_rate_percent=60.0)

    low95, high95 = win_rate_confidence_interval(est, 0.95)
    low99, high99 = win_rate_confidence_interval(est, 0.99)

    assert low99 < low95 and high95 < high99
    assert high99 - 60.0 == pytest.approx(2.5758 * math.sqrt(0.24 / 1000) * 100.0, rel=1e-3)
