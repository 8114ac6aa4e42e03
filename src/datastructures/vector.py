"""Two-dimensional vector value type."""
from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Vec2:
    """Immutable 2D vector.

    Parameters
    ----------
    x : float
        x-component (along increasing column index).
    y : float
        y-component (along increasing row index).
    """
    x: float = 0.0
    y: float = 0.0

    def add(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def sub(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def scale(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.sub(other)

    def __mul__(self, scalar):
        return self.scale(scalar)

    __rmul__ = __mul__

    def __iter__(self):
        yield self.x
        yield self.y
