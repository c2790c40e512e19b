import math
from typing import List, Optional

import numpy as np

from .agent import Agent
from .analytics import GenerationStats, GenerationTally, summarize
from .clock import TimeController
from .config import CFG
from .entities import Food, FoodType, Obstacle
from .lineage import LineageTracker
from .species import SpeciesManager
from .utils import log, random_vector
from .world import EnvironmentCycle, Zone, default_zones, zone_at



def batch_window(tick: int, n: int, batch: int) -> List[int]:
    """
    Indices that get a full update on `tick` when only `batch` of `n` agents can.

    The window starts at (tick * batch) mod n and wraps past the end of the
    roster, so consecutive ticks sweep the roster without gaps and every index
    is covered at least once in any ceil(n / batch) consecutive ticks.
    """
    if n <= 0:
        return []
    start = (tick * batch) % n
    return [(start + k) % n for k in range(min(batch, n))]


class Simulation:
    def __init__(self, cfg: Optional[CFG] = None, rng: Optional[np.random.Generator] = None):
        self.cfg = cfg or CFG()
        self.rng = rng if rng is not None else np.random.default_rng(self.cfg.SEED)
        self.clock = TimeController(self.cfg.TICK_RATE, self.cfg.SIM_SPEED, self.cfg.MAX_TICKS_PER_FRAME)
        self.clock.on_tick(self.tick)

        self.generation = 1
        self.tick_count = 0
        self.agents: List[Agent] = []
        self.foods: List[Food] = []
        self.obstacles: List[Obstacle] = []
        self.zones: List[Zone] = []
        self.environment = EnvironmentCycle(self.cfg)
        self.species_manager = SpeciesManager(self.rng, self.cfg.SPECIES_THRESHOLD)
        self.lineage = LineageTracker()
        self.history: List[GenerationStats] = []
        self.tally = GenerationTally()

        self.reset()

    # ----- scheduling -----

    def start(self):
        log(f"gen {self.generation}", "RUN", tick=self.tick_count)
        self.clock.start()

    def pause(self):
        log(f"gen {self.generation}", "PAUSE", tick=self.tick_count)
        self.clock.pause()

    def on_render(self, callback):
        self.clock.on_render(callback)

    def frame(self, now: Optional[float] = None) -> int:
        return self.clock.frame(now)

    def run(self, generations: int):
        """Tick synchronously until `generations` generation transitions have happened."""
        target = self.generation + generations
        while self.generation < target:
            self.tick()

    # ----- initialization -----

    def reset(self):
        for a in self.agents:
            a.dispose()
        cfg = self.cfg
        self.agents = []
        self.foods = []
        self.generation = 1
        self.tick_count = 0
        self.environment = EnvironmentCycle(cfg)
        self.species_manager = SpeciesManager(self.rng, cfg.SPECIES_THRESHOLD)
        self.lineage = LineageTracker()
        self.history = []
        self.tally = GenerationTally()

        self.zones = default_zones(cfg)
        self.obstacles = self._random_obstacles()
        self._seed_population()
        self.spawn_food(cfg.N_FOOD)
        log("gen 1", "RESET", agents=len(self.agents), food=len(self.foods), obstacles=len(self.obstacles))

    def _random_obstacles(self) -> List[Obstacle]:
        cfg = self.cfg
        lo, hi = cfg.OBSTACLE_SIZE
        count = int(math.sqrt(cfg.W * cfg.H) / 30)
        return [Obstacle(random_vector(self.rng, cfg.W, cfg.H), float(self.rng.uniform(lo, hi)))
                for _ in range(count)]

    def _seed_population(self):
        for _ in range(self.cfg.N0):
            agent = Agent(self, random_vector(self.rng, self.cfg.W, self.cfg.H))
            self._register_birth(agent)
            self.agents.append(agent)

    def _register_birth(self, agent: Agent):
        agent.id = self.lineage.register_birth(agent.parent_ids)
        agent.species = self.species_manager.assign_species(agent.genome, agent.id)
        self.lineage.set_species(agent.id, agent.species.id)
        if self.cfg.VERBOSE:
            log(f"tick {self.tick_count}", "BIRTH", id=agent.id, parents=agent.parent_ids, species=agent.species.id)

    def spawn_food(self, count: int):
        cfg = self.cfg
        for _ in range(count):
            roll = self.rng.random()
            if roll < cfg.SUPER_FOOD_P:
                kind = FoodType.SUPER
            elif roll < cfg.SUPER_FOOD_P + cfg.POISON_FOOD_P:
                kind = FoodType.POISON
            else:
                kind = FoodType.BASIC
            self.foods.append(Food(self._food_position(), kind))

    def _food_position(self):
        """Rejection-sample a spot, weighting each zone by its food-spawn multiplier."""
        cfg = self.cfg
        top = max([1.0] + [z.food_spawn_multiplier for z in self.zones])
        pos = random_vector(self.rng, cfg.W, cfg.H)
        for _ in range(cfg.FOOD_PLACEMENT_TRIES):
            zone = zone_at(self.zones, pos)
            weight = zone.food_spawn_multiplier if zone is not None else 1.0
            if self.rng.random() < weight / top:
                break
            pos = random_vector(self.rng, cfg.W, cfg.H)
        return pos

    # ----- per-tick mechanics -----

    def tick(self):
        cfg = self.cfg
        self.tick_count += 1
        self.lineage.update_tick(self.tick_count)
        self.environment.update()
        movement = self.environment.movement_multiplier()

        n = len(self.agents)
        if n <= cfg.FULL_UPDATE_LIMIT:
            full = set(range(n))
        else:
            full = set(batch_window(self.tick_count, n, cfg.BATCH_SIZE))

        for i, agent in enumerate(self.agents):
            if i in full:
                self.apply_environment_effects(agent)
                agent.update(self.foods, self.obstacles, movement)
            else:
                agent.update_physics(movement)

        for food in self.foods:
            food.update()
        consumed = sum(1 for f in self.foods if f.is_consumed)
        if consumed:
            self.foods = [f for f in self.foods if not f.is_consumed]
            self.spawn_food(consumed)

        for agent in self.agents:
            self.lineage.update_fitness(agent.id, agent.fitness)
            if agent.species is not None:
                agent.species.update_fitness(agent.fitness, self.generation)

        self._remove_dead()

        if not self.agents or self.tick_count >= cfg.GEN_TICKS:
            self.new_generation()

    def apply_environment_effects(self, agent: Agent):
        zone = zone_at(self.zones, agent.position)
        agent.metabolism_multiplier = zone.metabolism_multiplier if zone is not None else 1.0

    def _remove_dead(self):
        alive = []
        for agent in self.agents:
            if not agent.dead:
                alive.append(agent)
                continue
            self.lineage.register_death(agent.id, agent.fitness)
            self.tally.absorb(agent)
            if self.cfg.VERBOSE:
                log(f"tick {self.tick_count}", "DEATH", id=agent.id, age=agent.age,
                cause=agent.death_cause.value if agent.death_cause else "other", fitness=agent.fitness)
            agent.dispose()
        self.agents = alive

    # ----- generations -----

    def new_generation(self):
        self.record_generation()
        ended = self.history[-1]

        self.generation += 1
        self.tick_count = 0
        self.lineage.update_tick(0)
        self.species_manager.advance_generation()
        self.lineage.advance_generation()

        if not self.agents:
            log(f"gen {ended.generation}", "EXTINCT", reseed=self.cfg.N0)
            self._seed_population()
        else:
            self._breed_from_survivors()

        self.foods = []
        self.spawn_food(self.cfg.N_FOOD)
        log(f"gen {self.generation}", "START", agents=len(self.agents),
            species=len(self.species_manager.active_species()),
            prev_max_fitness=ended.max_fitness, deaths=sum(ended.death_causes.values()))

    def select_survivors(self) -> List[Agent]:
        ranked = sorted(self.agents, key=lambda a: a.fitness, reverse=True)
        return ranked[:math.ceil(len(ranked) * self.cfg.SURVIVOR_FRAC)]

    def _breed_from_survivors(self):
        cfg, rng = self.cfg, self.rng
        survivors = self.select_survivors()
        kept = set(id(a) for a in survivors)
        for agent in self.agents:
            if id(agent) not in kept:
                agent.dispose()

        for agent in survivors:
            if agent.species is not None:
                agent.species.add_member(agent.id)

        roster = list(survivors)
        while len(roster) < cfg.N0:
            pi = int(rng.integers(len(survivors)))
            parent = survivors[pi]
            partner = None
            if len(survivors) > 1 and rng.random() < cfg.SEXUAL_PROB:
                # uniform over the other survivors
                pj = int(rng.integers(len(survivors) - 1))
                partner = survivors[pj + 1 if pj >= pi else pj]
            child = parent.reproduce(partner)
            self._register_birth(child)
            roster.append(child)
        self.agents = roster

    def record_generation(self) -> GenerationStats:
        """Close the running tally into a history row; the live roster's counters are folded in too."""
        for agent in self.agents:
            self.tally.absorb(agent)
        stats = summarize(self.generation, self.agents, len(self.species_manager.active_species()),
                          self.zones, self.tally)
        self.history.append(stats)
        self.tally = GenerationTally()
        return stats

    # ----- accessors used by persistence and the monitor -----

    def set_agents(self, agents: List[Agent]):
        self.agents = list(agents)

    def clear_agents(self):
        for a in self.agents:
            a.dispose()
        self.agents = []

    def set_food(self, foods: List[Food]):
        self.foods = list(foods)

    def clear_food(self):
        self.foods = []

    def set_obstacles(self, obstacles: List[Obstacle]):
        self.obstacles = list(obstacles)

    def clear_obstacles(self):
        self.obstacles = []

    def set_zones(self, zones: List[Zone]):
        self.zones = list(zones)

    def clear_zones(self):
        self.zones = []
