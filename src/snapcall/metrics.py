"""
Project: SnapCall
Author: Xingnan Zhu
File Name: metrics.py
Description:
    Core per-play and per-group metrics for play effectiveness.

    Success (by down):
      1st  ≥ 50% of distance
      2nd  ≥ 70% of distance
      3rd / 4th  ≥ 100% (full conversion)
      touchdown  always a success

    Composite Score = (
        0.55 × adjusted success rate +
        0.20 × z-score of average yards +
        0.15 × (explosive rate − 0.5 × turnover rate) +
        0.10 × touchdown rate
    )
    Turnovers are charged at half weight inside the explosiveness term,
    not as their own linear term.  The weights are fixed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

# Required share of the distance per down, in tenths.
SUCCESS_TENTHS_BY_DOWN: dict[int, int] = {1: 5, 2: 7, 3: 10, 4: 10}

DEFAULT_EXPLOSIVE_RUN_YDS = 10
DEFAULT_EXPLOSIVE_PASS_YDS = 15

SUCCESS_WEIGHT = 0.55
YARDS_WEIGHT = 0.20
EXPLOSIVE_WEIGHT = 0.15
TURNOVER_DISCOUNT = 0.5
TOUCHDOWN_WEIGHT = 0.10


def is_success(down: int, distance: float, yards_gained: float, is_touchdown: bool) -> bool:
    """Did the play gain the down-dependent share of the distance (or score)?"""
    if is_touchdown:
        return True
    tenths = SUCCESS_TENTHS_BY_DOWN.get(down)
    if tenths is None:
        return False
    return yards_gained * 10 >= distance * tenths


def is_run(play_family: str) -> bool:
    return "run" in play_family.lower()


def is_explosive(
    play_family: str,
    yards_gained: float,
    run_threshold: float = DEFAULT_EXPLOSIVE_RUN_YDS,
    pass_threshold: float = DEFAULT_EXPLOSIVE_PASS_YDS,
) -> bool:
    """Explosive iff yards gained reaches the run or pass threshold.

    Any family containing "run" (case-insensitive) uses the run threshold.
    """
    threshold = run_threshold if is_run(play_family) else pass_threshold
    return yards_gained >= threshold


@dataclass(frozen=True)
class BasicStats:
    mean: float
    variance: float  # population
    standard_deviation: float


def basic_stats(values: Sequence[float]) -> BasicStats:
    """Mean, population variance and standard deviation (all 0 when empty)."""
    if len(values) == 0:
        return BasicStats(0.0, 0.0, 0.0)
    arr = np.asarray(values, dtype=float)
    variance = float(np.var(arr))
    return BasicStats(float(np.mean(arr)), variance, float(np.sqrt(variance)))


def z_score(value: float, population: Sequence[float]) -> float:
    """Standard score of ``value`` against ``population`` (population std).

    Returns 0.0 for an empty population or one with zero spread.
    """
    stats = basic_stats(population)
    if stats.standard_deviation == 0:
        return 0.0
    return (value - stats.mean) / stats.standard_deviation


def smooth_success_rate(
    raw_rate: float,
    n: int,
    prior_rate: float = 0.5,
    prior_weight: float = 5,
) -> float:
    """Empirical-Bayes shrinkage of an observed rate toward the prior.

    n → 0 gives the prior, n → ∞ gives the raw rate.  With no samples and
    no prior weight there is nothing to weigh, so the prior is returned.
    """
    denominator = n + prior_weight
    if denominator == 0:
        return prior_rate
    return (raw_rate * n + prior_rate * prior_weight) / denominator


def composite_score(
    adjusted_success_rate: float,
    z_score_yards: float,
    explosive_rate: float,
    turnover_rate: float,
    td_rate: float,
) -> float:
    """Fixed-weight ranking score (see module docstring)."""
    return (
        SUCCESS_WEIGHT * adjusted_success_rate
        + YARDS_WEIGHT * z_score_yards
        + EXPLOSIVE_WEIGHT * (explosive_rate - TURNOVER_DISCOUNT * turnover_rate)
        + TOUCHDOWN_WEIGHT * td_rate
    )
