from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .config import CFG
from .utils import clamp


class GenomeMismatchError(ValueError):
    """Two genomes of different lengths were combined or compared."""


@dataclass(eq=False)
class Genome:
    weights: np.ndarray
    mutation_rate: float = 0.05

    def __post_init__(self):
        self.weights = np.asarray(self.weights, dtype=float)

    def __len__(self) -> int:
        return int(self.weights.size)

    @classmethod
    def random(cls, size: int, rng: np.random.Generator, mutation_rate: float = 0.05) -> "Genome":
        return cls(rng.uniform(-1.0, 1.0, size=size), mutation_rate)

    def copy(self) -> "Genome":
        return Genome(self.weights.copy(), self.mutation_rate)

    def to_dict(self) -> dict:
        return {"weights": [float(w) for w in self.weights], "mutation_rate": float(self.mutation_rate)}

    @classmethod
    def from_dict(cls, d: dict) -> "Genome":
        weights: Sequence[float] = d["weights"]
        if not isinstance(weights, list):
            raise TypeError("genome weights must be a list")
        return cls(np.array([float(w) for w in weights]), float(d["mutation_rate"]))


def check_lengths(a: Genome, b: Genome) -> None:
    if len(a) != len(b):
        raise GenomeMismatchError(f"genome length mismatch: {len(a)} != {len(b)}")


def mutate_adaptive(genome: Genome, rng: np.random.Generator, cfg: Optional[CFG] = None) -> Genome:
    """Self-adaptive mutation.

    With probability RATE_MUT_CHANCE the mutation rate is first perturbed by
    up to +-RATE_MUT_SCALE of itself and clamped to [MUT_RATE_MIN, MUT_RATE_MAX].
    The resulting rate is then used as the per-weight probability of adding
    N(0, WEIGHT_MUT_STD) noise. Returns a new genome.
    """
    cfg = cfg or CFG()
    child = genome.copy()

    if rng.random() < cfg.RATE_MUT_CHANCE:
        change = rng.uniform(-1.0, 1.0) * cfg.RATE_MUT_SCALE * genome.mutation_rate
        child.mutation_rate = clamp(genome.mutation_rate + change, cfg.MUT_RATE_MIN, cfg.MUT_RATE_MAX)

    mask = rng.random(len(child)) < child.mutation_rate
    child.weights[mask] += rng.normal(0.0, cfg.WEIGHT_MUT_STD, size=int(mask.sum()))
    return child
