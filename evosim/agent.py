from enum import Enum
from typing import List, Optional, Sequence

from .brain import Brain
from .entities import FOOD_CODE, Food, FoodType, Obstacle
from .genome import Genome, mutate_adaptive
from .operators import CrossoverType, crossover
from .utils import Vec2, log, random_vector, wrap_coord


class DeathCause(Enum):
    STARVATION = "starvation"
    COLLISION = "collision"


class Agent:
    """
    A mobile agent steered by a small feed-forward network.

    `ctx` is the owning simulation (or anything exposing `cfg`, `rng` and
    `generation`); the agent only reads from it.
    """

    def __init__(self, ctx, position: Optional[Vec2] = None, genome: Optional[Genome] = None, id: int = 0):
        self.ctx = ctx
        cfg = ctx.cfg
        self.id = id
        self.position = position if position is not None else random_vector(ctx.rng, cfg.W, cfg.H)
        self.velocity = Vec2()
        self.acceleration = Vec2()
        self.size = cfg.AGENT_SIZE
        self.energy = cfg.MAX_ENERGY / 2
        self.age = 0
        self.fitness = 0.0
        self.dead = False
        self.metabolism_multiplier = 1.0
        self.parent_ids: List[int] = []
        self.species = None
        self.death_cause: Optional[DeathCause] = None
        self.reset_counters()

        expected = cfg.genome_length
        if genome is not None and len(genome) != expected:
            log("agent", "WARN", reason="genome_size_mismatch", got=len(genome), expected=expected)
            genome = None
        self.genome = genome if genome is not None else Genome.random(expected, ctx.rng, cfg.INIT_MUT_RATE)
        self.brain: Optional[Brain] = Brain(self.genome.weights, cfg.N_INPUT, cfg.HIDDEN, cfg.N_OUTPUT)

    @property
    def species_id(self) -> Optional[int]:
        return self.species.id if self.species is not None else None

    @property
    def disposed(self) -> bool:
        return self.brain is None

    # ----- full update -----

    def update(self, foods: Sequence[Food], obstacles: Sequence[Obstacle] = (), movement_multiplier: float = 1.0):
        cfg = self.ctx.cfg
        self.age += 1
        # only an obstacle hit can leave energy at or below zero between updates
        drained = self.energy <= 0
        self.energy -= cfg.METABOLISM * self.metabolism_multiplier
        if self.energy <= 0:
            self.dead = True
            self.death_cause = DeathCause.COLLISION if drained else DeathCause.STARVATION
            return

        outputs = self.brain.predict(self.sense(foods, obstacles))
        self.apply_outputs(outputs)
        self.update_physics(movement_multiplier)
        self.check_food(foods)
        self.check_obstacles(obstacles)
        self.fitness = self.age + self.energy

    def sense(self, foods: Sequence[Food], obstacles: Sequence[Obstacle]) -> List[float]:
        cfg = self.ctx.cfg
        inputs = [
            self.position.x / cfg.W,
            self.position.y / cfg.H,
            self.velocity.magnitude() / cfg.MAX_SPEED,
            self.energy / cfg.MAX_ENERGY,
        ]

        nearest, best = None, float("inf")
        for food in foods:
            if food.is_consumed:
                continue
            d = self.position.distance_to(food.position)
            if d < best:
                nearest, best = food, d
        if nearest is not None:
            direction = (nearest.position - self.position).normalized()
            inputs += [direction.x, direction.y, best / cfg.diagonal, FOOD_CODE[nearest.type]]
        else:
            inputs += [0.0, 0.0, 1.0, 0.5]

        nearest, best = None, float("inf")
        for obstacle in obstacles:
            d = self.position.distance_to(obstacle.position)
            if d < best:
                nearest, best = obstacle, d
        if nearest is not None and best < cfg.OBSTACLE_RANGE:
            direction = (nearest.position - self.position).normalized()
            inputs += [direction.x, direction.y, best / cfg.OBSTACLE_RANGE]
        else:
            inputs += [0.0, 0.0, 1.0]

        inputs.append(float(self.ctx.rng.random()))
        return inputs

    def apply_outputs(self, outputs: Sequence[float]):
        """outputs: [thrust, turn, speed] each in [0, 1]."""
        cfg = self.ctx.cfg
        heading = Vec2(1.0, 0.0) if self.velocity.is_zero() else self.velocity.normalized()
        thrust = outputs[0] * cfg.MAX_FORCE
        turn = (outputs[1] * 2 - 1) * cfg.MAX_FORCE
        speed = outputs[2] * 2
        self.acceleration = (heading * thrust + heading.perpendicular() * turn) * speed

    # ----- physics-only update -----

    def update_physics(self, movement_multiplier: float = 1.0):
        cfg = self.ctx.cfg
        self.velocity = (self.velocity + self.acceleration).limit(cfg.MAX_SPEED * movement_multiplier)
        pos = self.position + self.velocity * movement_multiplier
        self.position = Vec2(wrap_coord(pos.x, cfg.W), wrap_coord(pos.y, cfg.H))

    # ----- interactions -----

    def check_obstacles(self, obstacles: Sequence[Obstacle]):
        cfg = self.ctx.cfg
        for obstacle in obstacles:
            d = self.position.distance_to(obstacle.position)
            reach = self.size + obstacle.size
            if d >= reach:
                continue
            away = (self.position - obstacle.position).normalized()
            self.position = self.position + away * ((reach - d) * 1.1)
            self.velocity = self.velocity - away * (2 * self.velocity.dot(away))
            self.energy -= cfg.COLLISION_PENALTY
            self.collisions += 1

    def check_food(self, foods: Sequence[Food]):
        cfg = self.ctx.cfg
        for food in foods:
            if food.is_consumed:
                continue
            # cheap squared-distance filter before the exact test
            broad = self.size + food.size + 10
            if self.position.distance_sq_to(food.position) >= broad * broad:
                continue
            if self.position.distance_to(food.position) >= self.size + food.size:
                continue
            self.energy += food.energy
            if self.energy < 1 and food.type is FoodType.POISON:
                self.energy = 1.0
            self.energy = min(self.energy, cfg.MAX_ENERGY)
            food.is_consumed = True
            self.food_eaten[food.type] += 1

    # ----- reproduction -----

    def can_reproduce(self) -> bool:
        return self.energy > self.ctx.cfg.REPRO_ENERGY

    def crossover_type(self) -> CrossoverType:
        cfg = self.ctx.cfg
        generation = self.ctx.generation
        if generation < cfg.UNIFORM_UNTIL_GEN:
            return CrossoverType.UNIFORM
        if generation < cfg.SINGLE_POINT_UNTIL_GEN:
            return CrossoverType.SINGLE_POINT
        return CrossoverType.MULTI_POINT

    def reproduce(self, partner: Optional["Agent"] = None) -> "Agent":
        """Spend half the energy (of both parents if sexual) on one mutated child."""
        cfg, rng = self.ctx.cfg, self.ctx.rng
        self.energy /= 2

        if partner is not None:
            partner.energy /= 2
            genome = crossover(self.genome, partner.genome, rng, self.crossover_type())
            genome.mutation_rate = (self.genome.mutation_rate + partner.genome.mutation_rate) / 2
        else:
            genome = self.genome.copy()
        genome = mutate_adaptive(genome, rng, cfg)

        offset = Vec2(*rng.uniform(-cfg.CHILD_OFFSET, cfg.CHILD_OFFSET, size=2))
        child = Agent(self.ctx, self.position + offset, genome)
        child.parent_ids = [self.id] if partner is None else [self.id, partner.id]
        return child

    def reset_counters(self):
        """Zero the per-generation food and collision counters."""
        self.food_eaten = {kind: 0 for kind in FoodType}
        self.collisions = 0

    def dispose(self):
        if self.brain is not None:
            self.brain.dispose()
            self.brain = None

    def __repr__(self):
        return f"Agent(id={self.id}, energy={self.energy:.1f}, age={self.age}, species={self.species_id})"
