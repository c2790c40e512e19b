from collections import deque
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence


@dataclass
class LineageRecord:
    id: int
    parent_ids: List[int]
    generation: int
    species_id: Optional[int]
    birth_tick: int
    death_tick: Optional[int] = None
    max_fitness: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "LineageRecord":
        rid = int(d["id"])
        parents = [int(p) for p in d["parent_ids"]]
        if any(p >= rid for p in parents):
            raise ValueError(f"lineage record {rid} has a parent id >= its own")
        death = d.get("death_tick")
        species = d.get("species_id")
        return cls(
            id=rid,
            parent_ids=parents,
            generation=int(d["generation"]),
            species_id=None if species is None else int(species),
            birth_tick=int(d["birth_tick"]),
            death_tick=None if death is None else int(death),
            max_fitness=float(d["max_fitness"]),
        )


class LineageTracker:
    """Append-only ancestry ledger keyed by monotonically increasing ids."""

    def __init__(self):
        self._records: Dict[int, LineageRecord] = {}
        self.next_id = 1
        self.current_generation = 1
        self.current_tick = 0

    def register_birth(self, parent_ids: Sequence[int], species_id: Optional[int] = None) -> int:
        rid = self.next_id
        self.next_id += 1
        self._records[rid] = LineageRecord(
            id=rid,
            parent_ids=list(parent_ids),
            generation=self.current_generation,
            species_id=species_id,
            birth_tick=self.current_tick,
        )
        return rid

    def set_species(self, agent_id: int, species_id: int):
        """Fill in the species of a record born before it was classified."""
        rec = self._records.get(agent_id)
        if rec is not None and rec.species_id is None:
            rec.species_id = species_id

    def register_death(self, agent_id: int, final_fitness: float):
        rec = self._records.get(agent_id)
        if rec is None:
            return
        if rec.death_tick is None:
            rec.death_tick = self.current_tick
        rec.max_fitness = max(rec.max_fitness, final_fitness)

    def update_fitness(self, agent_id: int, fitness: float):
        rec = self._records.get(agent_id)
        if rec is not None and fitness > rec.max_fitness:
            rec.max_fitness = fitness

    def advance_generation(self):
        self.current_generation += 1

    def update_tick(self, tick: int):
        self.current_tick = tick

    def get(self, agent_id: int) -> Optional[LineageRecord]:
        return self._records.get(agent_id)

    def records(self) -> List[LineageRecord]:
        return list(self._records.values())

    def generation_records(self, generation: int) -> List[LineageRecord]:
        return [r for r in self._records.values() if r.generation == generation]

    def get_ancestors(self, agent_id: int) -> List[LineageRecord]:
        """Breadth-first walk up the parent links; each ancestor listed once."""
        rec = self._records.get(agent_id)
        if rec is None:
            return []
        out: List[LineageRecord] = []
        seen = set()
        queue = deque(rec.parent_ids)
        while queue:
            pid = queue.popleft()
            if pid in seen:
                continue
            seen.add(pid)
            parent = self._records.get(pid)
            if parent is not None:
                out.append(parent)
                queue.extend(parent.parent_ids)
        return out

    def clear_all(self):
        self._records = {}
        self.next_id = 1

    def add_record_direct(self, record: LineageRecord):
        self._records[record.id] = record
        self.next_id = max(self.next_id, record.id + 1)

    def __len__(self):
        return len(self._records)
