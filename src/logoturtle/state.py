"""Mutable turtle state shared by the motion engine and the pen manager."""

from dataclasses import dataclass, field
from enum import Enum

from .canvas import Handle
from .geometry import FULL_CIRCLE_DEGREES, Point


class AngleUnit(str, Enum):
    DEGREES = "degrees"
    RADIANS = "radians"


@dataclass
class TurtleState:
    position: Point = field(default_factory=Point)
    heading: float = 0.0  # degrees in [0, 360)
    angle_unit: AngleUnit = AngleUnit.DEGREES
    fullcircle: float = FULL_CIRCLE_DEGREES
    pen_down: bool = True
    pen_width: float = 1.0
    pen_color: str = "black"
    speed: float = 6
    stamps: dict[int, Handle] = field(default_factory=dict)
    last_stamp_id: int = 0
