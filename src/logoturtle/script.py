"""Line-oriented command scripts for driving a turtle.

One command per line, ``name arg ...``. Blank lines and comments are skipped.
A comment fills the line or starts at a lone ``#`` word, so hex colours such
as ``#ff0000`` pass through as arguments. Numbers become ints or floats,
anything else is passed as a string (speed presets, colours).
"""

import inspect
import logging
import re
from dataclasses import dataclass

from .turtle import Turtle, resolve

logger = logging.getLogger(__name__)

_INT = re.compile(r"[-+]?\d+$")
# Whole-line comment, or "#" standing alone as a word; "#ff0000" stays an argument
_COMMENT = re.compile(r"^\s*#|\s#(?=\s|$)")


@dataclass
class Command:
    line: int
    name: str
    args: tuple


def _parse_arg(token: str):
    if _INT.match(token):
        return int(token)
    try:
        return float(token)
    except ValueError:
        return token


def parse(text: str) -> list[Command]:
    """Parse a script into commands with canonical names."""
    commands = []
    for i, line in enumerate(text.splitlines(), 1):
        line = _COMMENT.split(line, 1)[0].strip()
        if not line:
            continue

        name, *tokens = line.split()
        try:
            canonical = resolve(name)
        except ValueError as e:
            raise ValueError(f"L{i}: {e}") from None
        commands.append(Command(i, canonical, tuple(_parse_arg(t) for t in tokens)))
    return commands


async def execute(turtle: Turtle, commands: list[Command]) -> list:
    """Run commands in order, awaiting each animated one before the next."""
    results = []
    for cmd in commands:
        method = getattr(turtle, cmd.name)
        logger.debug("L%d: %s%s", cmd.line, cmd.name, cmd.args)
        try:
            result = method(*cmd.args)
            if inspect.isawaitable(result):
                result = await result
        except TypeError as e:
            raise ValueError(f"L{cmd.line}: bad arguments for {cmd.name}: {e}") from e
        if result is not None:
            results.append(result)
    await turtle.done()
    return results


async def run_script(turtle: Turtle, text: str) -> list:
    return await execute(turtle, parse(text))
