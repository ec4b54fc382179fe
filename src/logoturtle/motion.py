"""Position and heading, animated through the canvas."""

import asyncio
import logging
import math

from .canvas import Canvas, Handle, LineStyle
from .geometry import Point, bearing, distance, normalize_degrees, step
from .state import TurtleState

logger = logging.getLogger(__name__)

MIN_SPEED = 0.5
MAX_SPEED = 10


class MotionEngine:
    """Owns position and heading; every motion is one awaited transaction.

    All angles here are canonical degrees. State is committed only once the
    canvas reports the glyph animation finished, so readers never see an
    in-flight value. A lock keeps motions on one turtle from interleaving.
    """

    def __init__(
        self,
        canvas: Canvas,
        state: TurtleState,
        glyph: Handle,
        duration_scale: float = 3.0,
        circle_step_degrees: float = 10.0,
    ):
        self.canvas = canvas
        self.state = state
        self.glyph = glyph
        self.duration_scale = duration_scale
        self.circle_step_degrees = circle_step_degrees
        self._lock = asyncio.Lock()
        self._line_tasks: set[asyncio.Task] = set()

    # Speed and durations

    def set_speed(self, value: float):
        if MIN_SPEED <= value <= MAX_SPEED:
            self.state.speed = value
        else:
            logger.debug("speed %s out of range, using 0 (instant)", value)
            self.state.speed = 0

    def move_duration(self, target: Point) -> float:
        if self.state.speed <= 0:
            return 0.0
        return distance(self.state.position, target) / self.state.speed * self.duration_scale

    def rotate_duration(self, delta: float) -> float:
        if self.state.speed <= 0:
            return 0.0
        return abs(delta) / self.state.speed * self.duration_scale

    # Primitives (caller holds the lock)

    async def _move_to(self, target: Point):
        start = self.state.position
        duration = self.move_duration(target)
        logger.debug("move %s -> %s over %.1fms", tuple(start), tuple(target), duration)

        line = None
        if self.state.pen_down:
            style = LineStyle(self.state.pen_width, self.state.pen_color)
            line = self.canvas.create_line(start.x, start.y, start.x, start.y, style)
            task = asyncio.ensure_future(
                self.canvas.animate_line(line, duration, start.x, start.y, target.x, target.y)
            )
            self._line_tasks.add(task)
            task.add_done_callback(self._line_tasks.discard)

        try:
            await self.canvas.animate_center(self.glyph, duration, target.x, target.y)
        except asyncio.CancelledError:
            if line is not None:
                task.cancel()
                self.canvas.remove(line)
            raise
        self.state.position = target

    async def _forward(self, dist: float):
        await self._move_to(self.state.position + step(self.state.heading, dist))

    async def _turn(self, delta: float):
        duration = self.rotate_duration(delta)
        logger.debug("turn %.3f deg over %.1fms", delta, duration)
        # Canvas rotation is clockwise-positive, heading is counter-clockwise
        await self.canvas.animate_rotate(self.glyph, duration, -delta)
        self.state.heading = normalize_degrees(self.state.heading + delta)

    # Public motions

    async def forward(self, dist: float):
        async with self._lock:
            await self._forward(dist)

    async def backward(self, dist: float):
        await self.forward(-dist)

    async def move_to(self, x: float, y: float):
        async with self._lock:
            await self._move_to(Point(float(x), float(y)))

    async def goto(self, x: float, y: float):
        await self.move_to(x, y)

    async def setx(self, x: float):
        async with self._lock:
            await self._move_to(Point(float(x), self.state.position.y))

    async def sety(self, y: float):
        async with self._lock:
            await self._move_to(Point(self.state.position.x, float(y)))

    async def home(self):
        await self.move_to(0.0, 0.0)

    async def turn(self, delta: float):
        async with self._lock:
            await self._turn(delta)

    async def setheading(self, target: float):
        async with self._lock:
            # Plain difference, not the shortest way round: 350 -> 10 turns by -340
            await self._turn(target - self.state.heading)

    async def circle(self, radius: float, extent: float = 360.0, steps: int | None = None):
        """Approximate an arc of ``extent`` degrees with ``steps`` chords."""
        if steps is None:
            steps = math.ceil(abs(extent) / self.circle_step_degrees)
            if steps == 0:
                return
        elif steps < 1:
            raise ValueError(f"steps must be positive, got {steps}")

        step_angle = extent / steps
        chord = radius * math.sin(math.radians(step_angle))

        async with self._lock:
            for _ in range(steps):
                await self._forward(chord)
                await self._turn(step_angle)

    async def drain(self):
        """Wait for line animations still running after their moves completed."""
        if self._line_tasks:
            await asyncio.gather(*self._line_tasks, return_exceptions=True)

    # Queries

    def towards(self, target: Point) -> float:
        return bearing(self.state.position, target)

    def distance(self, target: Point) -> float:
        return distance(self.state.position, target)
