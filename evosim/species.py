import colorsys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from .genome import Genome
from .operators import genetic_distance


def random_color(rng: np.random.Generator) -> Tuple[int, int, int]:
    hue = float(rng.uniform(0.0, 1.0))
    r, g, b = colorsys.hls_to_rgb(hue, 0.6, 0.7)
    return int(r * 255), int(g * 255), int(b * 255)


def color_to_hex(color: Tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


def hex_to_color(s: str) -> Tuple[int, int, int]:
    s = s.lstrip("#")
    return int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16)


@dataclass(eq=False)
class Species:
    id: int
    representative: Genome
    creation_generation: int
    color: Tuple[int, int, int] = (128, 128, 128)
    name: str = ""
    members: List[int] = field(default_factory=list)
    best_fitness: float = 0.0
    last_improved_generation: int = 0

    def __post_init__(self):
        # the representative is owned by the species and never recomputed
        self.representative = self.representative.copy()
        if not self.name:
            self.name = f"Species-{self.id}"
        if not self.last_improved_generation:
            self.last_improved_generation = self.creation_generation

    def add_member(self, agent_id: int):
        if agent_id not in self.members:
            self.members.append(agent_id)

    def update_fitness(self, fitness: float, generation: int):
        if fitness > self.best_fitness:
            self.best_fitness = fitness
            self.last_improved_generation = generation


class SpeciesManager:
    def __init__(self, rng: np.random.Generator, threshold: float = 4.0):
        self.rng = rng
        self.threshold = threshold
        self.species: List[Species] = []
        self._by_id: Dict[int, Species] = {}
        self.next_species_id = 1
        self.current_generation = 1

    def assign_species(self, genome: Genome, agent_id: int) -> Species:
        """First species (in creation order) whose representative is within threshold, else a new one."""
        for sp in self.species:
            if genetic_distance(genome, sp.representative) < self.threshold:
                sp.add_member(agent_id)
                return sp

        sp = Species(
            id=self.next_species_id,
            representative=genome,
            creation_generation=self.current_generation,
            color=random_color(self.rng),
            members=[agent_id],
        )
        self.next_species_id += 1
        self._add(sp)
        return sp

    def advance_generation(self):
        self.current_generation += 1
        for sp in self.species:
            sp.members = []

    def active_species(self) -> List[Species]:
        return [sp for sp in self.species if sp.members]

    def get(self, species_id) -> Optional[Species]:
        return self._by_id.get(species_id)

    def clear_all(self):
        self.species = []
        self._by_id = {}
        self.next_species_id = 1

    def create_species(self, species_id: int, representative: Genome, creation_generation: int,
                       color: Optional[Tuple[int, int, int]] = None) -> Species:
        """Add a species with a known id (used when restoring a snapshot)."""
        sp = Species(
            id=species_id,
            representative=representative,
            creation_generation=creation_generation,
            color=color if color is not None else random_color(self.rng),
        )
        self._add(sp)
        self.next_species_id = max(self.next_species_id, species_id + 1)
        return sp

    def _add(self, sp: Species):
        self.species.append(sp)
        self._by_id[sp.id] = sp
