"""CLI for logoturtle."""

import asyncio
import logging
from pathlib import Path

import click


def _speed_arg(value: str) -> float | str:
    try:
        return float(value)
    except ValueError:
        return value


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log every canvas request")
def main(verbose: bool):
    """logoturtle - Logo-style turtle graphics."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("script", type=Path)
@click.option("--config", "-c", "config_path", type=Path, help="Config JSON")
@click.option("--speed", "-s", help="Speed 0-10 or a preset name")
@click.option("--preview", "-p", type=Path, help="Write the finished canvas as an image")
def run(script: Path, config_path: Path | None, speed: str | None, preview: Path | None):
    """Run a command script."""
    from .config import Config
    from .raster import RasterCanvas
    from .script import parse, execute
    from .turtle import Turtle

    config = Config.load(config_path) if config_path else Config()
    vp = config.viewport
    canvas = RasterCanvas(vp.width, vp.height, vp.background)
    turtle = Turtle(canvas, config)

    try:
        if speed is not None:
            turtle.set_speed(_speed_arg(speed))
        commands = parse(script.read_text())
        results = asyncio.run(execute(turtle, commands))
    except (ValueError, LookupError) as e:
        raise click.ClickException(str(e))

    for r in results:
        click.echo(f"  {r}")

    pos = turtle.position()
    click.echo(f"Position: ({pos.x:.2f}, {pos.y:.2f})  Heading: {turtle.heading():.2f}")

    if preview:
        canvas.save(preview)
        click.echo(f"Saved: {preview}")


@main.command()
def commands():
    """List commands and their aliases."""
    from .turtle import ALIASES

    names: dict[str, list[str]] = {}
    for alias, name in ALIASES.items():
        names.setdefault(name, [])
        if alias != name:
            names[name].append(alias)

    for name, aliases in names.items():
        suffix = f" ({', '.join(aliases)})" if aliases else ""
        click.echo(f"{name}{suffix}")


if __name__ == "__main__":
    main()
