import numpy as np
import pytest

from evosim.config import CFG
from evosim.genome import Genome, GenomeMismatchError, mutate_adaptive
from evosim.operators import (
    CrossoverType,
    crossover,
    genetic_distance,
    multi_point,
    mutate,
    single_point,
)


def test_single_point_example():
    p1, p2 = np.ones(5), np.zeros(5)
    assert list(single_point(p1, p2, 2)) == [1, 1, 0, 0, 0]


def test_multi_point_alternates_sources():
    p1, p2 = np.ones(6), np.zeros(6)
    assert list(multi_point(p1, p2, [4, 1])) == [1, 0, 0, 0, 1, 1]
    assert list(multi_point(p1, p2, [1, 3, 5])) == [1, 0, 0, 1, 1, 0]


@pytest.mark.parametrize("kind", list(CrossoverType))
def test_crossover_genes_come_from_a_parent(kind, rng):
    a = Genome(np.full(40, 1.0))
    b = Genome(np.full(40, -1.0))
    child = crossover(a, b, rng, kind)
    assert len(child) == 40
    assert set(np.unique(child.weights)) <= {1.0, -1.0}


def test_single_point_crossover_is_prefix_then_suffix(rng):
    a = Genome(np.arange(10, dtype=float))
    b = Genome(-np.arange(10, dtype=float) - 1)
    w = crossover(a, b, rng, CrossoverType.SINGLE_POINT).weights
    from_a = w >= 0
    # once the child switches to parent2 it never switches back
    assert not np.any(np.diff(from_a.astype(int)) > 0)


def test_mismatched_lengths_fail(rng):
    a, b = Genome(np.zeros(3)), Genome(np.zeros(4))
    with pytest.raises(GenomeMismatchError):
        crossover(a, b, rng, CrossoverType.UNIFORM)
    with pytest.raises(GenomeMismatchError):
        genetic_distance(a, b)


def test_genetic_distance_is_euclidean():
    assert genetic_distance(Genome([0.0, 0.0]), Genome([3.0, 4.0])) == pytest.approx(5.0)


def test_operator_mutate_rate_and_amount(rng):
    g = Genome(np.zeros(200))
    assert np.array_equal(mutate(g, rng, rate=0.0).weights, g.weights)
    m = mutate(g, rng, rate=1.0, amount=0.1)
    assert np.all(m.weights != 0)
    assert np.all(np.abs(m.weights) <= 0.1)
    # the original is untouched
    assert np.all(g.weights == 0)


def test_adaptive_mutation_rate_stays_bounded(rng):
    cfg = CFG(RATE_MUT_CHANCE=1.0)
    g = Genome(np.zeros(20), mutation_rate=0.29)
    for _ in range(2000):
        g = mutate_adaptive(g, rng, cfg)
        assert cfg.MUT_RATE_MIN <= g.mutation_rate <= cfg.MUT_RATE_MAX


def test_adaptive_mutation_uses_rate_as_probability(rng):
    cfg = CFG(RATE_MUT_CHANCE=0.0)
    g = Genome(np.zeros(50), mutation_rate=0.0)
    assert np.all(mutate_adaptive(g, rng, cfg).weights == 0)
    g.mutation_rate = 1.0
    assert np.all(mutate_adaptive(g, rng, cfg).weights != 0)


def test_genome_dict_round_trip():
    g = Genome([0.5, -0.25], mutation_rate=0.07)
    back = Genome.from_dict(g.to_dict())
    assert list(back.weights) == [0.5, -0.25]
    assert back.mutation_rate == 0.07


def test_operator_mutate_defaults_come_from_config(rng):
    cfg = CFG(MUT_RATE=1.0, MUT_AMOUNT=0.01)
    m = mutate(Genome(np.zeros(100)), rng, cfg=cfg)
    assert np.all(m.weights != 0)
    assert np.all(np.abs(m.weights) <= 0.01)
    assert np.all(mutate(Genome(np.zeros(100)), rng, cfg=CFG(MUT_RATE=0.0)).weights == 0)
