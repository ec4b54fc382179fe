"""Pen state, dots and the stamp registry."""

import logging

from .canvas import Canvas, Handle
from .state import TurtleState

logger = logging.getLogger(__name__)


class StampNotFoundError(LookupError):
    """Raised when clearing a stamp id that is not (or no longer) registered."""

    def __init__(self, stamp_id: int):
        super().__init__(f"No stamp with id {stamp_id}")
        self.stamp_id = stamp_id


class PenManager:
    """Pen up/down, width and colour, plus stamped copies of the glyph."""

    def __init__(
        self,
        canvas: Canvas,
        state: TurtleState,
        glyph_vertices: list[tuple[float, float]],
        glyph_color: str = "black",
    ):
        self.canvas = canvas
        self.state = state
        self.glyph_vertices = glyph_vertices
        self.glyph_color = glyph_color

    def pen_down(self):
        self.state.pen_down = True

    def pen_up(self):
        self.state.pen_down = False

    def is_down(self) -> bool:
        return self.state.pen_down

    @property
    def width(self) -> float:
        return self.state.pen_width

    def set_width(self, width: float) -> float:
        """Set the pen width; non-positive widths are ignored."""
        if width > 0:
            self.state.pen_width = width
        else:
            logger.debug("ignoring pen width %s", width)
        return self.state.pen_width

    def set_color(self, color: str):
        self.state.pen_color = color

    def dot(self, size: float, color: str) -> Handle:
        pos = self.state.position
        return self.canvas.create_circle(pos.x, pos.y, size / 2, color)

    def stamp(self) -> int:
        pos = self.state.position
        handle = self.canvas.create_polygon(self.glyph_vertices, self.glyph_color)
        self.canvas.set_center(handle, pos.x, pos.y)
        self.canvas.rotate(handle, -self.state.heading)

        self.state.last_stamp_id += 1
        stamp_id = self.state.last_stamp_id
        self.state.stamps[stamp_id] = handle
        logger.debug("stamp %d at %s", stamp_id, tuple(pos))
        return stamp_id

    def clear_stamp(self, stamp_id: int):
        try:
            handle = self.state.stamps.pop(stamp_id)
        except KeyError:
            raise StampNotFoundError(stamp_id) from None
        self.canvas.remove(handle)
        logger.debug("cleared stamp %d", stamp_id)

    def clear_stamps(self, count: int | None = None) -> int:
        """Clear all stamps, the oldest ``count``, or the newest ``-count``."""
        ids = sorted(self.state.stamps)
        if count is None:
            selected = ids
        elif count > 0:
            selected = ids[:count]
        elif count < 0:
            selected = ids[::-1][:-count]
        else:
            selected = []

        for stamp_id in selected:
            self.clear_stamp(stamp_id)
        return len(selected)
