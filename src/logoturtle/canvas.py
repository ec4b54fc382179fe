"""Drawing surface interface and an in-memory implementation.

The turtle never touches pixels. It asks a Canvas to create, move, rotate and
remove shapes, and awaits the animation coroutines to learn when a motion has
finished. Coordinates handed to a Canvas are drawing-space units with the
origin at the centre of the viewport and y growing downward.
"""

import asyncio
import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

from .geometry import Point

Handle = int
PointerCallback = Callable[[float, float], object]


@dataclass(frozen=True)
class LineStyle:
    width: float = 1.0
    color: str = "black"


class Canvas(ABC):
    """Vector drawing surface consumed by the turtle."""

    @abstractmethod
    def create_line(self, x1: float, y1: float, x2: float, y2: float, style: LineStyle) -> Handle:
        ...

    @abstractmethod
    async def animate_line(
        self, handle: Handle, duration: float, x1: float, y1: float, x2: float, y2: float
    ) -> None:
        """Tween a line's endpoints to the given values over ``duration`` ms."""

    @abstractmethod
    def create_polygon(self, vertices: list[tuple[float, float]], color: str = "black") -> Handle:
        ...

    @abstractmethod
    def set_center(self, handle: Handle, x: float, y: float) -> None:
        ...

    @abstractmethod
    async def animate_center(self, handle: Handle, duration: float, x: float, y: float) -> None:
        ...

    @abstractmethod
    def rotate(self, handle: Handle, degrees: float) -> None:
        """Rotate a shape clockwise by ``degrees`` about its centre."""

    @abstractmethod
    async def animate_rotate(self, handle: Handle, duration: float, degrees: float) -> None:
        ...

    @abstractmethod
    def create_circle(self, x: float, y: float, radius: float, fill: str) -> Handle:
        ...

    @abstractmethod
    def remove(self, handle: Handle) -> None:
        ...

    @abstractmethod
    def viewport_size(self) -> tuple[int, int]:
        ...

    @abstractmethod
    def on_pointer_down(self, callback: PointerCallback) -> None:
        """Register ``callback(px, py)`` for presses in surface pixel coordinates."""

    @abstractmethod
    def on_pointer_up(self, callback: PointerCallback) -> None:
        ...


@dataclass
class Shape:
    kind: str  # line, polygon, circle
    points: list[tuple[float, float]]
    center: Point = field(default_factory=Point)
    rotation: float = 0.0
    color: str = "black"
    width: float = 1.0


@dataclass
class Operation:
    name: str
    handle: Handle | None
    duration: float = 0.0
    args: tuple = ()


def bbox_center(points: list[tuple[float, float]]) -> Point:
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return Point((min(xs) + max(xs)) / 2, (min(ys) + max(ys)) / 2)


class RecordingCanvas(Canvas):
    """Canvas that keeps shapes in memory and logs every request.

    With ``realtime=True`` animations sleep for their duration, otherwise they
    complete on the next event loop iteration.
    """

    def __init__(self, width: int = 800, height: int = 600, realtime: bool = False):
        self.width = width
        self.height = height
        self.realtime = realtime
        self.shapes: dict[Handle, Shape] = {}
        self.operations: list[Operation] = []
        self._handles = itertools.count(1)
        self._down_handlers: list[PointerCallback] = []
        self._up_handlers: list[PointerCallback] = []

    def _record(self, name: str, handle: Handle | None, duration: float = 0.0, *args):
        self.operations.append(Operation(name, handle, duration, args))

    async def _wait(self, duration: float):
        if self.realtime and duration > 0:
            await asyncio.sleep(duration / 1000)
        else:
            await asyncio.sleep(0)

    def _add(self, shape: Shape) -> Handle:
        handle = next(self._handles)
        self.shapes[handle] = shape
        return handle

    def create_line(self, x1, y1, x2, y2, style):
        handle = self._add(
            Shape("line", [(x1, y1), (x2, y2)], color=style.color, width=style.width)
        )
        self._record("create_line", handle, 0.0, x1, y1, x2, y2)
        return handle

    async def animate_line(self, handle, duration, x1, y1, x2, y2):
        self._record("animate_line", handle, duration, x1, y1, x2, y2)
        await self._wait(duration)
        if handle in self.shapes:
            self.shapes[handle].points = [(x1, y1), (x2, y2)]

    def create_polygon(self, vertices, color="black"):
        points = [(float(x), float(y)) for x, y in vertices]
        handle = self._add(Shape("polygon", points, center=bbox_center(points), color=color))
        self._record("create_polygon", handle, 0.0, tuple(points))
        return handle

    def set_center(self, handle, x, y):
        self.shapes[handle].center = Point(x, y)
        self._record("set_center", handle, 0.0, x, y)

    async def animate_center(self, handle, duration, x, y):
        self._record("animate_center", handle, duration, x, y)
        await self._wait(duration)
        self.shapes[handle].center = Point(x, y)

    def rotate(self, handle, degrees):
        self.shapes[handle].rotation += degrees
        self._record("rotate", handle, 0.0, degrees)

    async def animate_rotate(self, handle, duration, degrees):
        self._record("animate_rotate", handle, duration, degrees)
        await self._wait(duration)
        self.shapes[handle].rotation += degrees

    def create_circle(self, x, y, radius, fill):
        handle = self._add(Shape("circle", [(radius, radius)], center=Point(x, y), color=fill))
        self._record("create_circle", handle, 0.0, x, y, radius)
        return handle

    def remove(self, handle):
        del self.shapes[handle]
        self._record("remove", handle)

    def viewport_size(self):
        return self.width, self.height

    def on_pointer_down(self, callback):
        self._down_handlers.append(callback)

    def on_pointer_up(self, callback):
        self._up_handlers.append(callback)

    def press(self, px: float, py: float):
        """Deliver a raw pointer-down at surface pixel ``(px, py)``."""
        for callback in list(self._down_handlers):
            callback(px, py)

    def release(self, px: float, py: float):
        for callback in list(self._up_handlers):
            callback(px, py)

    def durations(self, *names: str) -> list[float]:
        """Durations of logged animations, optionally filtered by name."""
        return [
            op.duration
            for op in self.operations
            if op.name.startswith("animate_") and (not names or op.name in names)
        ]
