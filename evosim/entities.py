from dataclasses import dataclass, field
from enum import Enum

from .utils import Vec2


class FoodType(Enum):
    BASIC = "basic"
    SUPER = "super"
    POISON = "poison"


# energy delta, radius
FOOD_PROPS = {
    FoodType.BASIC: (20.0, 5.0),
    FoodType.SUPER: (50.0, 8.0),
    FoodType.POISON: (-30.0, 4.0),
}

# sensed type code
FOOD_CODE = {FoodType.BASIC: 0.5, FoodType.SUPER: 1.0, FoodType.POISON: 0.0}


@dataclass
class Food:
    position: Vec2
    type: FoodType = FoodType.BASIC
    is_consumed: bool = False
    energy: float = field(init=False)
    size: float = field(init=False)

    def __post_init__(self):
        self.energy, self.size = FOOD_PROPS[self.type]

    def update(self):
        pass


@dataclass(frozen=True)
class Obstacle:
    position: Vec2
    size: float = 30.0
