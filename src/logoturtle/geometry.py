"""Angle units and plane geometry for turtle motion."""

import math
from dataclasses import dataclass

FULL_CIRCLE_DEGREES = 360.0


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0

    def __iter__(self):
        yield self.x
        yield self.y

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __abs__(self) -> float:
        return math.hypot(self.x, self.y)

    @classmethod
    def of(cls, value) -> "Point":
        """Coerce a Point or an (x, y) pair."""
        if isinstance(value, Point):
            return value
        x, y = value
        return cls(float(x), float(y))


def normalize_degrees(angle: float) -> float:
    """Reduce an angle into [0, 360)."""
    angle = angle % FULL_CIRCLE_DEGREES
    # -1e-15 % 360 rounds up to 360.0
    if angle >= FULL_CIRCLE_DEGREES:
        angle = 0.0
    return angle


def to_degrees(angle: float, fullcircle: float) -> float:
    """Convert from a user unit (``fullcircle`` units per turn) to degrees."""
    return angle * FULL_CIRCLE_DEGREES / fullcircle


def from_degrees(angle: float, fullcircle: float) -> float:
    return angle * fullcircle / FULL_CIRCLE_DEGREES


def step(heading: float, distance: float) -> Point:
    """Displacement for ``distance`` along ``heading`` degrees.

    Screen y grows downward, so the mathematical y component is subtracted.
    """
    theta = math.radians(heading)
    return Point(distance * math.cos(theta), -distance * math.sin(theta))


def distance(a: Point, b: Point) -> float:
    return abs(b - a)


def bearing(origin: Point, target: Point) -> float:
    """Heading in degrees that points from ``origin`` at ``target``."""
    dx = target.x - origin.x
    dy = origin.y - target.y
    if dx == 0 and dy == 0:
        return 0.0
    return normalize_degrees(math.degrees(math.atan2(dy, dx)))
