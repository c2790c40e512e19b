import numpy as np
import pytest

from evosim.genome import Genome
from evosim.species import SpeciesManager, color_to_hex, hex_to_color


@pytest.fixture
def manager(rng):
    return SpeciesManager(rng, threshold=4.0)


def test_close_genomes_share_a_species(manager):
    a = manager.assign_species(Genome(np.zeros(10)), 1)
    b = manager.assign_species(Genome(np.full(10, 0.5)), 2)
    assert a is b
    assert a.id == 1
    assert a.members == [1, 2]
    assert a.name == "Species-1"


def test_distant_genome_founds_new_species(manager):
    manager.assign_species(Genome(np.zeros(10)), 1)
    sp = manager.assign_species(Genome(np.full(10, 2.0)), 2)
    assert sp.id == 2
    assert len(manager.species) == 2
    assert manager.get(2) is sp


def test_first_matching_species_wins(manager):
    manager.assign_species(Genome(np.zeros(4)), 1)
    manager.assign_species(Genome(np.full(4, 3.0)), 2)
    # distance 3.0 to both representatives; creation order decides
    sp = manager.assign_species(Genome(np.full(4, 1.5)), 3)
    assert sp.id == 1


def test_representative_is_not_shared_with_founder(manager):
    g = Genome(np.zeros(3))
    sp = manager.assign_species(g, 1)
    g.weights[:] = 9.0
    assert np.all(sp.representative.weights == 0)


def test_advance_generation_clears_members(manager):
    sp = manager.assign_species(Genome(np.zeros(3)), 1)
    manager.advance_generation()
    assert sp.members == []
    assert manager.active_species() == []
    assert manager.current_generation == 2
    assert manager.species == [sp]


def test_add_member_is_idempotent(manager):
    sp = manager.assign_species(Genome(np.zeros(3)), 1)
    sp.add_member(1)
    assert sp.members == [1]


def test_update_fitness_tracks_improvement(manager):
    sp = manager.assign_species(Genome(np.zeros(3)), 1)
    sp.update_fitness(10.0, 3)
    sp.update_fitness(5.0, 4)
    assert sp.best_fitness == 10.0
    assert sp.last_improved_generation == 3


def test_create_species_keeps_ids_unique(manager):
    manager.create_species(7, Genome(np.zeros(3)), 2)
    sp = manager.assign_species(Genome(np.full(3, 50.0)), 1)
    assert sp.id == 8


def test_clear_all(manager):
    manager.assign_species(Genome(np.zeros(3)), 1)
    manager.clear_all()
    assert manager.species == []
    assert manager.assign_species(Genome(np.zeros(3)), 2).id == 1


def test_color_hex_round_trip(rng):
    assert color_to_hex((255, 0, 16)) == "#ff0010"
    assert hex_to_color("#ff0010") == (255, 0, 16)
