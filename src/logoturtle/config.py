"""Configuration management."""

import json
from pathlib import Path

from pydantic import BaseModel


class ViewportConfig(BaseModel):
    width: int = 800
    height: int = 600
    background: str = "white"


class PenConfig(BaseModel):
    width: float = 1.0
    color: str = "black"
    dot_color: str = "black"


class MotionConfig(BaseModel):
    speed: float = 6
    duration_scale: float = 3.0  # ms per unit of motion per speed step
    circle_step_degrees: float = 10.0


class GlyphConfig(BaseModel):
    vertices: list[tuple[float, float]] = [(0.0, 0.0), (0.0, 15.0), (15.0, 7.5)]
    color: str = "black"


class Config(BaseModel):
    viewport: ViewportConfig = ViewportConfig()
    pen: PenConfig = PenConfig()
    motion: MotionConfig = MotionConfig()
    glyph: GlyphConfig = GlyphConfig()

    @classmethod
    def load(cls, path: str | Path = "configs/turtle.json") -> "Config":
        with open(path) as f:
            return cls(**json.load(f))

    def save(self, path: str | Path = "configs/turtle.json"):
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=4)
