from enum import Enum
from typing import Optional

import numpy as np

from .config import CFG
from .genome import Genome, check_lengths


class CrossoverType(Enum):
    UNIFORM = "uniform"
    SINGLE_POINT = "single_point"
    MULTI_POINT = "multi_point"


def mutate(genome: Genome, rng: np.random.Generator, rate: Optional[float] = None,
           amount: Optional[float] = None, cfg: Optional[CFG] = None) -> Genome:
    """Fixed-rate mutation: each weight gets +U(-1, 1) * amount with probability rate.

    rate and amount default to MUT_RATE and MUT_AMOUNT.
    """
    cfg = cfg or CFG()
    rate = cfg.MUT_RATE if rate is None else rate
    amount = cfg.MUT_AMOUNT if amount is None else amount
    child = genome.copy()
    mask = rng.random(len(child)) < rate
    child.weights[mask] += rng.uniform(-1.0, 1.0, size=int(mask.sum())) * amount
    return child


def genetic_distance(a: Genome, b: Genome) -> float:
    check_lengths(a, b)
    return float(np.linalg.norm(a.weights - b.weights))


def single_point(p1: np.ndarray, p2: np.ndarray, point: int) -> np.ndarray:
    return np.concatenate([p1[:point], p2[point:]])


def multi_point(p1: np.ndarray, p2: np.ndarray, points) -> np.ndarray:
    # switch source at every point; parent2 first
    child = p1.copy()
    use_second = True
    for point in sorted(points):
        child[point:] = p2[point:] if use_second else p1[point:]
        use_second = not use_second
    return child


def crossover(a: Genome, b: Genome, rng: np.random.Generator,
              kind: CrossoverType = CrossoverType.MULTI_POINT) -> Genome:
    """Combine two parents; the child keeps the default mutation rate."""
    check_lengths(a, b)
    n = len(a)

    if kind is CrossoverType.UNIFORM:
        pick_first = rng.random(n) < 0.5
        weights = np.where(pick_first, a.weights, b.weights)
    elif kind is CrossoverType.SINGLE_POINT:
        weights = single_point(a.weights, b.weights, int(rng.integers(0, n)))
    else:
        n_points = int(rng.integers(2, 5))
        points = rng.integers(0, n, size=n_points)
        weights = multi_point(a.weights, b.weights, points)

    return Genome(weights)
