from types import SimpleNamespace

import numpy as np
import pytest

from evosim.config import CFG
from evosim.sim import Simulation


@pytest.fixture
def cfg():
    return CFG()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def ctx(cfg, rng):
    """Minimal stand-in for the simulation an agent reads from."""
    return SimpleNamespace(cfg=cfg, rng=rng, generation=1)


@pytest.fixture
def small_sim():
    return Simulation(CFG(N0=30, N_FOOD=40, SEED=3))
