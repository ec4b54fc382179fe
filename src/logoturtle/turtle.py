"""Turtle graphics command set."""

import asyncio
import inspect
import logging
import math

from .canvas import Canvas
from .config import Config
from .geometry import FULL_CIRCLE_DEGREES, Point, from_degrees, to_degrees
from .motion import MotionEngine
from .pen import PenManager
from .state import AngleUnit, TurtleState

logger = logging.getLogger(__name__)

SPEED_PRESETS = {
    "fastest": 0,
    "fast": 10,
    "normal": 6,
    "slow": 3,
    "slowest": 1,
}

# Every accepted command name -> the Turtle method implementing it
ALIASES = {
    "forward": "forward",
    "fd": "forward",
    "backward": "backward",
    "back": "backward",
    "bk": "backward",
    "right": "right",
    "rt": "right",
    "left": "left",
    "lt": "left",
    "goto": "goto",
    "setpos": "goto",
    "setposition": "goto",
    "set_position": "goto",
    "setx": "setx",
    "sety": "sety",
    "home": "home",
    "setheading": "setheading",
    "seth": "setheading",
    "circle": "circle",
    "speed": "speed",
    "pen_down": "pen_down",
    "pendown": "pen_down",
    "pd": "pen_down",
    "down": "pen_down",
    "pen_up": "pen_up",
    "penup": "pen_up",
    "pu": "pen_up",
    "up": "pen_up",
    "isdown": "isdown",
    "pensize": "pensize",
    "width": "pensize",
    "pencolor": "pencolor",
    "dot": "dot",
    "stamp": "stamp",
    "clearstamp": "clearstamp",
    "clearstamps": "clearstamps",
    "position": "position",
    "pos": "position",
    "xcor": "xcor",
    "ycor": "ycor",
    "heading": "heading",
    "towards": "towards",
    "distance": "distance",
    "degrees": "degrees",
    "radians": "radians",
}


def resolve(name: str) -> str:
    """Canonical method name for a command or alias."""
    try:
        return ALIASES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown command: {name}") from None


class Turtle:
    """A cursor on a canvas with Logo-style commands.

    Motion commands are coroutines that return once the canvas has finished
    animating them; by then ``position()`` and ``heading()`` already hold the
    final values. Pen, stamp and query commands are plain methods.
    """

    def __init__(self, canvas: Canvas, config: Config | None = None):
        self.config = config or Config()
        self.canvas = canvas
        self.state = TurtleState(
            pen_width=self.config.pen.width,
            pen_color=self.config.pen.color,
        )

        vertices = [tuple(v) for v in self.config.glyph.vertices]
        self.glyph = canvas.create_polygon(vertices, self.config.glyph.color)
        canvas.set_center(self.glyph, 0.0, 0.0)

        motion = self.config.motion
        self.motion = MotionEngine(
            canvas,
            self.state,
            self.glyph,
            duration_scale=motion.duration_scale,
            circle_step_degrees=motion.circle_step_degrees,
        )
        self.pen = PenManager(canvas, self.state, vertices, self.config.glyph.color)
        self.motion.set_speed(motion.speed)
        self._callback_tasks: set[asyncio.Task] = set()

    def __repr__(self):
        p = self.state.position
        return f"Turtle(x={p.x:.2f}, y={p.y:.2f}, heading={self.heading():.2f})"

    # Angle units

    def _to_degrees(self, angle: float) -> float:
        return to_degrees(angle, self.state.fullcircle)

    def degrees(self, fullcircle: float = FULL_CIRCLE_DEGREES):
        """Measure angles in degrees, or in ``fullcircle`` units per turn."""
        if fullcircle == 0:
            raise ValueError("fullcircle must be non-zero")
        self.state.angle_unit = AngleUnit.DEGREES
        self.state.fullcircle = fullcircle

    def radians(self):
        self.state.angle_unit = AngleUnit.RADIANS
        self.state.fullcircle = 2 * math.pi

    # Motion

    async def forward(self, distance: float):
        await self.motion.forward(distance)

    async def backward(self, distance: float):
        await self.motion.backward(distance)

    async def right(self, angle: float):
        await self.motion.turn(self._to_degrees(angle))

    async def left(self, angle: float):
        await self.right(-angle)

    async def goto(self, x: float, y: float):
        await self.motion.goto(x, y)

    async def setx(self, x: float):
        await self.motion.setx(x)

    async def sety(self, y: float):
        await self.motion.sety(y)

    async def home(self):
        """Move to the origin. Heading is left as it is."""
        await self.motion.home()

    async def setheading(self, angle: float):
        await self.motion.setheading(self._to_degrees(angle))

    async def circle(self, radius: float, extent: float | None = None, steps: int | None = None):
        """Draw a polygon approximating an arc.

        ``extent`` defaults to a full turn in the current angle unit; ``steps``
        defaults to one chord per 10 degrees of arc.
        """
        if extent is None:
            extent = self.state.fullcircle
        await self.motion.circle(radius, self._to_degrees(extent), steps)

    # Speed

    def get_speed(self) -> float:
        return self.state.speed

    def set_speed(self, value: float | str):
        if isinstance(value, str):
            try:
                value = SPEED_PRESETS[value.lower()]
            except KeyError:
                raise ValueError(
                    f"Unknown speed {value!r}, expected one of {', '.join(SPEED_PRESETS)}"
                ) from None
        self.motion.set_speed(value)

    def speed(self, value: float | str | None = None) -> float:
        if value is not None:
            self.set_speed(value)
        return self.get_speed()

    # Pen

    def pen_down(self):
        self.pen.pen_down()

    def pen_up(self):
        self.pen.pen_up()

    def isdown(self) -> bool:
        return self.pen.is_down()

    def get_pensize(self) -> float:
        return self.pen.width

    def set_pensize(self, width: float) -> float:
        return self.pen.set_width(width)

    def pensize(self, width: float | None = None) -> float:
        if width is not None:
            return self.set_pensize(width)
        return self.get_pensize()

    def pencolor(self, color: str | None = None) -> str:
        if color is not None:
            self.pen.set_color(color)
        return self.state.pen_color

    def dot(self, size: float | None = None, color: str | None = None):
        if size is None:
            width = self.pen.width
            size = max(width + 4, width * 2)
        self.pen.dot(size, color or self.config.pen.dot_color)

    def stamp(self) -> int:
        return self.pen.stamp()

    def clearstamp(self, stamp_id: int):
        self.pen.clear_stamp(stamp_id)

    def clearstamps(self, count: int | None = None) -> int:
        return self.pen.clear_stamps(count)

    # Queries

    def position(self) -> Point:
        return self.state.position

    def xcor(self) -> float:
        return self.state.position.x

    def ycor(self) -> float:
        return self.state.position.y

    def heading(self) -> float:
        return from_degrees(self.state.heading, self.state.fullcircle)

    def towards(self, x: float, y: float) -> float:
        """Bearing to ``(x, y)`` in degrees."""
        return self.motion.towards(Point(x, y))

    def distance(self, x: float, y: float) -> float:
        return self.motion.distance(Point(x, y))

    def distance_to(self, point) -> float:
        """Distance to a Point or an ``(x, y)`` pair."""
        return self.motion.distance(Point.of(point))

    def distance_to_turtle(self, other: "Turtle") -> float:
        if not isinstance(other, Turtle):
            raise TypeError(f"expected a Turtle, got {type(other).__name__}")
        return self.motion.distance(other.position())

    async def done(self):
        """Wait until every trail drawn so far has finished animating."""
        await self.motion.drain()

    # Pointer events

    def _pointer_handler(self, callback):
        def handler(px: float, py: float):
            width, height = self.canvas.viewport_size()
            logger.debug("pointer event at (%s, %s)", px, py)
            result = callback(px - width / 2, py - height / 2)
            if inspect.iscoroutine(result):
                try:
                    loop = asyncio.get_running_loop()
                except RuntimeError:
                    logger.warning("no running event loop, dropping %s", callback)
                    result.close()
                    return
                task = loop.create_task(result)
                self._callback_tasks.add(task)
                task.add_done_callback(self._callback_tasks.discard)

        return handler

    def onclick(self, callback):
        """Call ``callback(x, y)`` in turtle coordinates on pointer press."""
        self.canvas.on_pointer_down(self._pointer_handler(callback))

    def onrelease(self, callback):
        self.canvas.on_pointer_up(self._pointer_handler(callback))


for _alias, _name in ALIASES.items():
    if _alias != _name:
        setattr(Turtle, _alias, getattr(Turtle, _name))
del _alias, _name
