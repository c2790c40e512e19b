from dataclasses import dataclass
from typing import Optional, Tuple

from .brain import weight_count


@dataclass
class CFG:
    # World
    W: float = 800.0
    H: float = 600.0
    SEED: int = 7

    # Timing
    TICK_RATE: int = 60                 # ticks per second of wall-clock time
    SIM_SPEED: float = 1.0              # wall-clock scale factor
    MAX_TICKS_PER_FRAME: Optional[int] = None  # None = drain the whole accumulator
    GEN_TICKS: int = 1000               # generation horizon

    # Population
    N0: int = 50                        # initial / target agents per generation
    N_FOOD: int = 100

    # Agent body
    AGENT_SIZE: float = 10.0
    MAX_SPEED: float = 2.0
    MAX_FORCE: float = 0.1
    MAX_ENERGY: float = 100.0
    METABOLISM: float = 0.1             # energy per full-update tick
    REPRO_ENERGY: float = 70.0
    COLLISION_PENALTY: float = 5.0
    OBSTACLE_RANGE: float = 150.0
    CHILD_OFFSET: float = 10.0

    # Network (ReLU hidden layers, sigmoid outputs)
    N_INPUT: int = 12
    HIDDEN: Tuple[int, ...] = (16, 12)
    N_OUTPUT: int = 3

    # Mutation
    MUT_RATE: float = 0.05              # operator-level mutate()
    MUT_AMOUNT: float = 0.1
    INIT_MUT_RATE: float = 0.05
    MUT_RATE_MIN: float = 0.001
    MUT_RATE_MAX: float = 0.3
    RATE_MUT_CHANCE: float = 0.1        # chance to perturb the rate itself
    RATE_MUT_SCALE: float = 0.5         # up to +-50% of the current rate
    WEIGHT_MUT_STD: float = 0.2

    # Selection / reproduction
    SURVIVOR_FRAC: float = 0.25
    SEXUAL_PROB: float = 0.7
    UNIFORM_UNTIL_GEN: int = 5
    SINGLE_POINT_UNTIL_GEN: int = 15

    # Speciation
    SPECIES_THRESHOLD: float = 4.0

    # Load-adaptive updates
    FULL_UPDATE_LIMIT: int = 20
    BATCH_SIZE: int = 10

    # Environment
    DAY_LENGTH: int = 500               # ticks per half cycle
    NIGHT_VISIBILITY: float = 0.3
    NIGHT_MOVEMENT: float = 0.7
    SUPER_FOOD_P: float = 0.1
    POISON_FOOD_P: float = 0.1
    OBSTACLE_SIZE: Tuple[float, float] = (20.0, 50.0)
    FOOD_PLACEMENT_TRIES: int = 8

    # Logging
    VERBOSE: bool = False

    @property
    def layer_sizes(self) -> Tuple[int, ...]:
        return (self.N_INPUT, *self.HIDDEN, self.N_OUTPUT)

    @property
    def genome_length(self) -> int:
        return weight_count(self.N_INPUT, self.HIDDEN, self.N_OUTPUT)

    @property
    def diagonal(self) -> float:
        return float((self.W ** 2 + self.H ** 2) ** 0.5)
