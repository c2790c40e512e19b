import json

import pytest

from evosim.agent import Agent, DeathCause
from evosim.analytics import GenerationStats, GenerationTally
from evosim.config import CFG
from evosim.entities import Food, FoodType, Obstacle
from evosim.sim import Simulation
from evosim.utils import Vec2


@pytest.fixture
def agent(ctx):
    return Agent(ctx, Vec2(100.0, 100.0), id=1)


def test_agent_counts_food_by_type(agent):
    agent.check_food([Food(Vec2(100.0, 100.0)), Food(Vec2(101.0, 100.0), FoodType.POISON)])
    assert agent.food_eaten[FoodType.BASIC] == 1
    assert agent.food_eaten[FoodType.POISON] == 1
    assert agent.food_eaten[FoodType.SUPER] == 0


def test_agent_counts_collisions(agent):
    agent.check_obstacles([Obstacle(Vec2(110.0, 100.0), 20.0)])
    assert agent.collisions == 1


def test_starvation_death(agent):
    agent.energy = 0.05
    agent.update([], [])
    assert agent.death_cause is DeathCause.STARVATION


def test_collision_death(agent):
    agent.energy = 3.0
    agent.check_obstacles([Obstacle(Vec2(110.0, 100.0), 20.0)])
    assert agent.energy < 0
    agent.update([], [])
    assert agent.dead
    assert agent.death_cause is DeathCause.COLLISION


def test_tally_absorbs_and_resets_counters(agent):
    tally = GenerationTally()
    agent.food_eaten[FoodType.SUPER] = 2
    agent.collisions = 3
    tally.absorb(agent)
    assert tally.food_consumed["super"] == 2
    assert tally.obstacle_collisions == 3
    assert tally.death_causes == {}
    assert agent.collisions == 0
    assert agent.food_eaten[FoodType.SUPER] == 0

    agent.dead, agent.death_cause, agent.age = True, DeathCause.STARVATION, 40
    tally.absorb(agent)
    assert tally.death_causes["starvation"] == 1
    assert tally.death_ages == [40]


def test_generation_row_counts_deaths_and_occupancy():
    sim = Simulation(CFG(N0=10, SEED=4))
    sim.agents[0].energy = 0.01
    sim.tick()
    stats = sim.record_generation()

    assert stats.death_causes == {"starvation": 1, "collision": 0, "other": 0}
    assert stats.avg_lifespan == 1.0
    assert stats.agent_count == 9
    assert sum(stats.zone_distribution.values()) == 9
    assert sum(stats.species_distribution.values()) == 9
    assert set(stats.food_consumed) == {"basic", "super", "poison"}
    assert stats.min_fitness <= stats.avg_fitness <= stats.max_fitness
    assert stats.min_mutation_rate <= stats.avg_mutation_rate <= stats.max_mutation_rate


def test_counters_restart_each_generation():
    sim = Simulation(CFG(N0=10, SEED=4))
    sim.agents[0].energy = 0.01
    sim.tick()
    sim.new_generation()
    sim.new_generation()
    assert sim.history[0].death_causes["starvation"] == 1
    assert sim.history[1].death_causes["starvation"] == 0
    assert sim.history[1].obstacle_collisions == 0
    assert sum(sim.history[1].food_consumed.values()) == 0


def test_stats_survive_json():
    stats = GenerationStats(3, 10, 2, 5.0, 9.0, 0.05, species_distribution={4: 7, 9: 3},
                            death_causes={"starvation": 1, "collision": 2, "other": 0})
    back = GenerationStats.from_dict(json.loads(json.dumps(stats.to_dict())))
    assert back == stats
    assert back.species_distribution == {4: 7, 9: 3}
