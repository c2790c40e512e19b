from dataclasses import dataclass
from enum import Enum, IntEnum

from .config import CFG
from .utils import Vec2


class ZoneType(Enum):
    NORMAL = "normal"
    HARSH = "harsh"       # higher metabolism cost
    FERTILE = "fertile"   # more food, cheaper living
    BARREN = "barren"     # less food


METABOLISM_MULT = {ZoneType.HARSH: 1.5, ZoneType.FERTILE: 0.8}
FOOD_SPAWN_MULT = {ZoneType.FERTILE: 2.0, ZoneType.BARREN: 0.3}


@dataclass(frozen=True)
class Zone:
    position: Vec2
    radius: float
    type: ZoneType

    def contains(self, point: Vec2) -> bool:
        return point.distance_sq_to(self.position) <= self.radius * self.radius

    @property
    def metabolism_multiplier(self) -> float:
        return METABOLISM_MULT.get(self.type, 1.0)

    @property
    def food_spawn_multiplier(self) -> float:
        return FOOD_SPAWN_MULT.get(self.type, 1.0)


def default_zones(cfg: CFG):
    W, H = cfg.W, cfg.H
    return [
        Zone(Vec2(W * 0.25, H * 0.25), W * 0.2, ZoneType.FERTILE),
        Zone(Vec2(W * 0.75, H * 0.75), W * 0.2, ZoneType.HARSH),
        Zone(Vec2(W * 0.75, H * 0.25), W * 0.15, ZoneType.BARREN),
    ]


def zone_at(zones, point: Vec2):
    """First zone containing point, or None."""
    for zone in zones:
        if zone.contains(point):
            return zone
    return None


class TimeOfDay(IntEnum):
    DAY = 0
    NIGHT = 1


class EnvironmentCycle:
    """Day/night cycle: DAY_LENGTH ticks of day followed by DAY_LENGTH of night."""

    def __init__(self, cfg: CFG):
        self.cfg = cfg
        self.total_ticks = 0

    def update(self):
        self.total_ticks += 1

    @property
    def day_length(self) -> int:
        return self.cfg.DAY_LENGTH

    def time_of_day(self) -> TimeOfDay:
        pos = self.total_ticks % (self.day_length * 2)
        return TimeOfDay.DAY if pos < self.day_length else TimeOfDay.NIGHT

    def day_night_ratio(self) -> float:
        """Rises 0 -> 1 through the day, falls back to 0 through the night."""
        pos = self.total_ticks % (self.day_length * 2)
        if pos < self.day_length:
            return pos / self.day_length
        return 1.0 - (pos - self.day_length) / self.day_length

    def visibility_multiplier(self) -> float:
        return 1.0 if self.time_of_day() is TimeOfDay.DAY else self.cfg.NIGHT_VISIBILITY

    def movement_multiplier(self) -> float:
        return 1.0 if self.time_of_day() is TimeOfDay.DAY else self.cfg.NIGHT_MOVEMENT

    def set_time_of_day(self, tod: TimeOfDay):
        """Jump to the midpoint of the requested phase."""
        if tod is TimeOfDay.DAY:
            self.total_ticks = self.day_length // 2
        else:
            self.total_ticks = int(self.day_length * 1.5)
