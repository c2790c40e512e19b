import math
from dataclasses import dataclass


@dataclass
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vec2":
        return Vec2(self.x / scalar, self.y / scalar)

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vec2":
        """Unit vector in the same direction; the zero vector stays zero."""
        mag = self.magnitude()
        if mag == 0:
            return Vec2(0.0, 0.0)
        return self / mag

    def limit(self, max_mag: float) -> "Vec2":
        if self.magnitude() > max_mag:
            return self.normalized() * max_mag
        return Vec2(self.x, self.y)

    def perpendicular(self) -> "Vec2":
        return Vec2(-self.y, self.x)

    def distance_to(self, other: "Vec2") -> float:
        return (self - other).magnitude()

    def distance_sq_to(self, other: "Vec2") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def to_dict(self) -> dict:
        return {"x": float(self.x), "y": float(self.y)}

    @classmethod
    def from_dict(cls, d: dict) -> "Vec2":
        return cls(float(d["x"]), float(d["y"]))


def clamp(v: float, lo: float, hi: float) -> float:
    return float(min(max(v, lo), hi))


def wrap_coord(v: float, L: float) -> float:
    """Toroidal wrap: below 0 lands on L, at or past L lands on 0."""
    if v < 0:
        return L
    if v >= L:
        return 0.0
    return v


def random_vector(rng, w: float, h: float) -> Vec2:
    return Vec2(float(rng.uniform(0, w)), float(rng.uniform(0, h)))


def log(tag, event: str, **fields) -> None:
    parts = " ".join(f"{k}={_fmt(v)}" for k, v in fields.items())
    print(f"[{tag}] {event} {parts}".rstrip())


def _fmt(v) -> str:
    if isinstance(v, float):
        return f"{v:.1f}"
    return str(v)
