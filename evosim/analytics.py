"""
Per-generation analytics.

Agents count the food they eat and the obstacles they hit. The simulation
folds those counters, plus each death's cause and age, into a
`GenerationTally`, and closes the tally into one `GenerationStats` row when
the generation ends.
"""
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict, List

import numpy as np

from .entities import FoodType
from .world import ZoneType, zone_at

DEATH_CAUSES = ("starvation", "collision", "other")
OUTSIDE = "outside"


@dataclass
class GenerationStats:
    generation: int
    agent_count: int
    species_count: int
    avg_fitness: float
    max_fitness: float
    avg_mutation_rate: float
    min_fitness: float = 0.0
    min_mutation_rate: float = 0.0
    max_mutation_rate: float = 0.0
    avg_lifespan: float = 0.0           # mean age at death, 0 when nobody died
    obstacle_collisions: int = 0
    species_distribution: Dict[int, int] = field(default_factory=dict)
    food_consumed: Dict[str, int] = field(default_factory=dict)
    death_causes: Dict[str, int] = field(default_factory=dict)
    zone_distribution: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "GenerationStats":
        d = dict(d)
        # json turns the int species keys into strings
        d["species_distribution"] = {int(k): int(v) for k, v in d.get("species_distribution", {}).items()}
        return cls(**d)


@dataclass
class GenerationTally:
    food_consumed: Counter = field(default_factory=Counter)
    obstacle_collisions: int = 0
    death_causes: Counter = field(default_factory=Counter)
    death_ages: List[int] = field(default_factory=list)

    def absorb(self, agent):
        """Move an agent's counters into the tally; a dead agent also adds its cause and age."""
        for kind, n in agent.food_eaten.items():
            self.food_consumed[kind.value] += n
        self.obstacle_collisions += agent.collisions
        if agent.dead:
            cause = agent.death_cause.value if agent.death_cause is not None else "other"
            self.death_causes[cause] += 1
            self.death_ages.append(agent.age)
        agent.reset_counters()


def summarize(generation: int, agents, species_count: int, zones, tally: GenerationTally) -> GenerationStats:
    fitness = np.array([a.fitness for a in agents], dtype=float)
    rates = np.array([a.genome.mutation_rate for a in agents], dtype=float)

    species = Counter(a.species_id for a in agents if a.species is not None)
    occupancy = dict.fromkeys([z.value for z in ZoneType] + [OUTSIDE], 0)
    for a in agents:
        zone = zone_at(zones, a.position)
        occupancy[zone.type.value if zone is not None else OUTSIDE] += 1

    return GenerationStats(
        generation=generation,
        agent_count=len(agents),
        species_count=species_count,
        avg_fitness=float(fitness.mean()) if fitness.size else 0.0,
        max_fitness=float(fitness.max()) if fitness.size else 0.0,
        avg_mutation_rate=float(rates.mean()) if rates.size else 0.0,
        min_fitness=float(fitness.min()) if fitness.size else 0.0,
        min_mutation_rate=float(rates.min()) if rates.size else 0.0,
        max_mutation_rate=float(rates.max()) if rates.size else 0.0,
        avg_lifespan=float(np.mean(tally.death_ages)) if tally.death_ages else 0.0,
        obstacle_collisions=tally.obstacle_collisions,
        species_distribution=dict(species),
        food_consumed={t.value: tally.food_consumed[t.value] for t in FoodType},
        death_causes={c: tally.death_causes[c] for c in DEATH_CAUSES},
        zone_distribution=occupancy,
    )
