"""Pillow-backed canvas that rasterizes the live shape table."""

import math
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw

from .canvas import RecordingCanvas, Shape, bbox_center


class RasterCanvas(RecordingCanvas):
    """RecordingCanvas that can render its current shapes to an image."""

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        background: str = "white",
        realtime: bool = False,
    ):
        super().__init__(width, height, realtime)
        self.background = background

    def _to_pixels(self, points: np.ndarray) -> list[tuple[float, float]]:
        shifted = points + np.array([self.width / 2, self.height / 2])
        return [(float(x), float(y)) for x, y in shifted]

    def _polygon_pixels(self, shape: Shape) -> list[tuple[float, float]]:
        local = np.array(shape.points, dtype=np.float64)
        local -= np.array(tuple(bbox_center(shape.points)))

        # Clockwise on a y-down surface
        theta = math.radians(shape.rotation)
        c, s = math.cos(theta), math.sin(theta)
        rot = np.array([[c, -s], [s, c]])

        placed = local @ rot.T + np.array([shape.center.x, shape.center.y])
        return self._to_pixels(placed)

    def render(self) -> Image.Image:
        image = Image.new("RGB", (self.width, self.height), self.background)
        draw = ImageDraw.Draw(image)

        for shape in self.shapes.values():
            if shape.kind == "line":
                draw.line(
                    self._to_pixels(np.array(shape.points, dtype=np.float64)),
                    fill=shape.color,
                    width=max(1, round(shape.width)),
                )
            elif shape.kind == "polygon":
                draw.polygon(self._polygon_pixels(shape), fill=shape.color)
            elif shape.kind == "circle":
                r = shape.points[0][0]
                [(cx, cy)] = self._to_pixels(np.array([tuple(shape.center)]))
                draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=shape.color)

        return image

    def save(self, path: str | Path):
        self.render().save(path)
