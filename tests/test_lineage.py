import pytest

from evosim.config import CFG
from evosim.lineage import LineageRecord, LineageTracker
from evosim.sim import Simulation


def test_ids_are_sequential():
    tracker = LineageTracker()
    assert [tracker.register_birth([]) for _ in range(3)] == [1, 2, 3]
    assert len(tracker) == 3


def test_birth_records_generation_and_tick():
    tracker = LineageTracker()
    tracker.advance_generation()
    tracker.update_tick(42)
    rid = tracker.register_birth([], species_id=3)
    rec = tracker.get(rid)
    assert rec.generation == 2
    assert rec.birth_tick == 42
    assert rec.species_id == 3
    assert tracker.generation_records(2) == [rec]


def test_set_species_only_fills_missing():
    tracker = LineageTracker()
    rid = tracker.register_birth([])
    tracker.set_species(rid, 4)
    tracker.set_species(rid, 9)
    assert tracker.get(rid).species_id == 4


def test_death_tick_set_once_and_fitness_kept():
    tracker = LineageTracker()
    rid = tracker.register_birth([])
    tracker.update_tick(10)
    tracker.update_fitness(rid, 30.0)
    tracker.register_death(rid, 12.0)
    tracker.update_tick(20)
    tracker.register_death(rid, 40.0)
    rec = tracker.get(rid)
    assert rec.death_tick == 10
    assert rec.max_fitness == 40.0


def test_ancestors_are_deduplicated():
    tracker = LineageTracker()
    root = tracker.register_birth([])
    left = tracker.register_birth([root])
    right = tracker.register_birth([root])
    child = tracker.register_birth([left, right])
    ids = [r.id for r in tracker.get_ancestors(child)]
    assert ids == [left, right, root]
    assert tracker.get_ancestors(root) == []
    assert tracker.get_ancestors(99) == []


def test_record_rejects_parent_not_older():
    with pytest.raises(ValueError):
        LineageRecord.from_dict({"id": 2, "parent_ids": [2], "generation": 1,
                                 "species_id": None, "birth_tick": 0, "max_fitness": 0})


def test_add_record_direct_advances_next_id():
    tracker = LineageTracker()
    tracker.add_record_direct(LineageRecord(id=10, parent_ids=[], generation=1, species_id=1, birth_tick=0))
    assert tracker.register_birth([10]) == 11


def test_record_dict_round_trip():
    rec = LineageRecord(id=5, parent_ids=[1, 3], generation=2, species_id=None,
                        birth_tick=7, death_tick=9, max_fitness=12.5)
    assert LineageRecord.from_dict(rec.to_dict()) == rec


def test_clear_all_resets_ids():
    tracker = LineageTracker()
    tracker.register_birth([])
    tracker.clear_all()
    assert len(tracker) == 0
    assert tracker.register_birth([]) == 1


def test_ancestors_are_older_in_a_real_run():
    sim = Simulation(CFG(N0=16, N_FOOD=20, GEN_TICKS=20, SEED=21))
    sim.run(6)
    lineage = sim.lineage
    assert len(lineage) > 16
    for rec in lineage.records():
        ancestors = lineage.get_ancestors(rec.id)
        assert all(a.id < rec.id for a in ancestors)
        assert len({a.id for a in ancestors}) == len(ancestors)
    assert any(lineage.get_ancestors(r.id) for r in lineage.records())
