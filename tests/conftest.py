"""
Shared fixtures for the logoturtle test suite.

Canvases here complete animations on the next loop iteration, so motion
tests run without waiting on wall-clock time.
"""

import pytest

from logoturtle.canvas import RecordingCanvas
from logoturtle.config import Config
from logoturtle.turtle import Turtle


@pytest.fixture
def canvas():
    """800x600 in-memory canvas."""
    return RecordingCanvas(800, 600)


@pytest.fixture
def turtle(canvas):
    """Turtle at the origin, heading 0, pen down, speed 6."""
    return Turtle(canvas)


@pytest.fixture
def config():
    return Config()


def ops(canvas, name):
    """Logged operations with the given name."""
    return [op for op in canvas.operations if op.name == name]
