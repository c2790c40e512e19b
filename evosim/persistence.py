"""
Snapshot export / import.

A snapshot is a plain JSON-compatible dict. `restore()` builds every object
from the snapshot first and only swaps them into the simulation once the
whole snapshot parsed, so a malformed snapshot leaves the simulation as it
was and raises `SnapshotError`.
"""
import csv
import json
import time
from typing import List

import numpy as np

from .agent import Agent
from .analytics import DEATH_CAUSES, OUTSIDE, GenerationStats
from .entities import Food, FoodType, Obstacle
from .genome import Genome
from .lineage import LineageRecord, LineageTracker
from .sim import Simulation
from .species import SpeciesManager, color_to_hex, hex_to_color
from .utils import Vec2, log
from .world import TimeOfDay, Zone, ZoneType

SNAPSHOT_VERSION = 1


class SnapshotError(Exception):
    """The snapshot could not be read or is malformed."""


def snapshot(sim: Simulation) -> dict:
    return {
        "version": SNAPSHOT_VERSION,
        "timestamp": time.time(),
        "generation": sim.generation,
        "tick_count": sim.tick_count,
        "agents": [
            {
                "id": a.id,
                "position": a.position.to_dict(),
                "velocity": a.velocity.to_dict(),
                "energy": float(a.energy),
                "fitness": float(a.fitness),
                "age": a.age,
                "parent_ids": list(a.parent_ids),
                "species_id": a.species_id,
                "metabolism_multiplier": float(a.metabolism_multiplier),
                "genome": a.genome.to_dict(),
            }
            for a in sim.agents
        ],
        "species": [
            {
                "id": sp.id,
                "name": sp.name,
                "color": color_to_hex(sp.color),
                "creation_generation": sp.creation_generation,
                "last_improved_generation": sp.last_improved_generation,
                "best_fitness": float(sp.best_fitness),
                "members": list(sp.members),
                "representative": sp.representative.to_dict(),
            }
            for sp in sim.species_manager.species
        ],
        "environment": {
            "time_of_day": sim.environment.time_of_day().name,
            "total_ticks": sim.environment.total_ticks,
            "zones": [
                {"position": z.position.to_dict(), "radius": float(z.radius), "type": z.type.value}
                for z in sim.zones
            ],
            "obstacles": [
                {"position": o.position.to_dict(), "size": float(o.size)}
                for o in sim.obstacles
            ],
            "food": [
                {
                    "position": f.position.to_dict(),
                    "type": f.type.value,
                    "energy": f.energy,
                    "size": f.size,
                    "is_consumed": f.is_consumed,
                }
                for f in sim.foods
            ],
        },
        "lineage": [r.to_dict() for r in sim.lineage.records()],
        "history": [h.to_dict() for h in sim.history],
    }


def _parse_species(sim: Simulation, items, generation: int) -> SpeciesManager:
    # scratch rng: parsing must not advance the live one
    manager = SpeciesManager(np.random.default_rng(sim.cfg.SEED), sim.cfg.SPECIES_THRESHOLD)
    manager.current_generation = generation
    for d in items:
        color = hex_to_color(d["color"]) if d.get("color") else None
        sp = manager.create_species(int(d["id"]), Genome.from_dict(d["representative"]),
                                    int(d["creation_generation"]), color)
        sp.name = str(d.get("name") or sp.name)
        sp.last_improved_generation = int(d.get("last_improved_generation", sp.creation_generation))
        sp.best_fitness = float(d.get("best_fitness", 0.0))
        sp.members = [int(m) for m in d.get("members", [])]
    return manager


def _parse_agents(sim: Simulation, items, species: SpeciesManager) -> List[Agent]:
    expected = sim.cfg.genome_length
    agents = []
    for d in items:
        genome = Genome.from_dict(d["genome"])
        if len(genome) != expected:
            raise ValueError(f"agent {d['id']} genome has {len(genome)} weights, expected {expected}")
        agent = Agent(sim, Vec2.from_dict(d["position"]), genome, int(d["id"]))
        agent.energy = float(d["energy"])
        agent.fitness = float(d["fitness"])
        agent.age = int(d["age"])
        agent.parent_ids = [int(p) for p in d.get("parent_ids", [])]
        agent.metabolism_multiplier = float(d.get("metabolism_multiplier", 1.0))
        if d.get("velocity") is not None:
            agent.velocity = Vec2.from_dict(d["velocity"])
        # unknown species ids leave the agent unlinked
        sid = d.get("species_id")
        agent.species = species.get(int(sid)) if sid is not None else None
        if agent.species is not None:
            agent.species.add_member(agent.id)
        agents.append(agent)
    ids = [a.id for a in agents]
    if len(set(ids)) != len(ids):
        raise ValueError("duplicate agent ids")
    return agents


def restore(sim: Simulation, data: dict):
    try:
        generation = int(data["generation"])
        tick_count = int(data["tick_count"])
        species = _parse_species(sim, data["species"], generation)
        agents = _parse_agents(sim, data["agents"], species)

        env = data.get("environment") or {}
        zones = [Zone(Vec2.from_dict(z["position"]), float(z["radius"]), ZoneType(z["type"]))
                 for z in env.get("zones", [])]
        obstacles = [Obstacle(Vec2.from_dict(o["position"]), float(o["size"]))
                     for o in env.get("obstacles", [])]
        foods = None
        if env.get("food") is not None:
            foods = []
            for f in env["food"]:
                food = Food(Vec2.from_dict(f["position"]), FoodType(f["type"]))
                food.is_consumed = bool(f.get("is_consumed", False))
                foods.append(food)
        time_of_day = TimeOfDay[env["time_of_day"]] if env.get("time_of_day") else None
        total_ticks = env.get("total_ticks")
        if total_ticks is not None:
            total_ticks = int(total_ticks)

        lineage = LineageTracker()
        for r in data.get("lineage", []):
            lineage.add_record_direct(LineageRecord.from_dict(r))
        # births continue above every restored id, even ones missing from the lineage
        lineage.next_id = max([lineage.next_id] + [a.id + 1 for a in agents])
        lineage.current_generation = generation
        lineage.update_tick(tick_count)

        history = [GenerationStats.from_dict(h) for h in data.get("history", [])]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise SnapshotError(f"malformed snapshot: {exc}") from exc

    # nothing below can fail on bad input
    sim.clear_agents()
    sim.generation = generation
    sim.tick_count = tick_count
    species.rng = sim.rng
    sim.species_manager = species
    sim.lineage = lineage
    sim.set_agents(agents)
    sim.set_zones(zones)
    sim.set_obstacles(obstacles)
    if foods is not None:
        sim.set_food(foods)
    else:
        sim.clear_food()
        sim.spawn_food(sim.cfg.N_FOOD)
    if total_ticks is not None:
        sim.environment.total_ticks = total_ticks
    elif time_of_day is not None:
        sim.environment.set_time_of_day(time_of_day)
    sim.history = history


def save(sim: Simulation, path: str):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot(sim), f)
    log(f"gen {sim.generation}", "SAVE", path=path, agents=len(sim.agents))


def load(sim: Simulation, path: str):
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        raise SnapshotError(f"cannot read snapshot {path}: {exc}") from exc
    restore(sim, data)
    log(f"gen {sim.generation}", "LOAD", path=path, agents=len(sim.agents))


CSV_SCALARS = ["generation", "agent_count", "species_count", "avg_fitness", "min_fitness", "max_fitness",
               "avg_mutation_rate", "min_mutation_rate", "max_mutation_rate", "avg_lifespan",
               "obstacle_collisions"]


def _csv_row(stats: GenerationStats) -> list:
    row = [getattr(stats, name) for name in CSV_SCALARS]
    row += [stats.food_consumed.get(t.value, 0) for t in FoodType]
    row += [stats.death_causes.get(c, 0) for c in DEATH_CAUSES]
    row += [stats.zone_distribution.get(z.value, 0) for z in ZoneType]
    row.append(stats.zone_distribution.get(OUTSIDE, 0))
    return row


def export_history(sim: Simulation, path: str):
    """Write the generation history as CSV when `path` ends in .csv, JSON otherwise.

    CSV rows flatten the fixed-key counters into food_*, deaths_* and zone_*
    columns; the per-species sizes only go to JSON.
    """
    if path.lower().endswith(".csv"):
        header = (CSV_SCALARS + [f"food_{t.value}" for t in FoodType] + [f"deaths_{c}" for c in DEATH_CAUSES]
                  + [f"zone_{z.value}" for z in ZoneType] + [f"zone_{OUTSIDE}"])
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(_csv_row(h) for h in sim.history)
    else:
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"exported": time.time(), "generations": [h.to_dict() for h in sim.history]}, f, indent=2)
    log(f"gen {sim.generation}", "EXPORT", path=path, generations=len(sim.history))
