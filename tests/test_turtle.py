"""Tests for the command surface: aliases, speed, queries and pointer events."""

import asyncio
import logging

import pytest

from logoturtle.canvas import RecordingCanvas
from logoturtle.geometry import Point
from logoturtle.turtle import ALIASES, SPEED_PRESETS, Turtle, resolve


class TestAliases:
    @pytest.mark.parametrize("alias,name", [
        ("fd", "forward"),
        ("bk", "backward"),
        ("back", "backward"),
        ("rt", "right"),
        ("lt", "left"),
        ("pd", "pen_down"),
        ("down", "pen_down"),
        ("pu", "pen_up"),
        ("up", "pen_up"),
        ("pos", "position"),
        ("seth", "setheading"),
        ("setpos", "goto"),
        ("set_position", "goto"),
        ("width", "pensize"),
    ])
    def test_alias_is_same_method(self, alias, name):
        assert getattr(Turtle, alias) is getattr(Turtle, name)

    def test_every_name_resolves_to_a_method(self):
        for alias, name in ALIASES.items():
            assert callable(getattr(Turtle, alias)), alias
            assert callable(getattr(Turtle, name)), name

    def test_resolve_is_case_insensitive(self):
        assert resolve("FD") == "forward"
        assert resolve("penDown") == "pen_down"

    def test_resolve_unknown(self):
        with pytest.raises(ValueError, match="Unknown command"):
            resolve("teleport")

    @pytest.mark.asyncio
    async def test_alias_call(self, turtle):
        await turtle.fd(10)
        await turtle.lt(90)
        await turtle.bk(5)
        assert tuple(turtle.pos()) == pytest.approx((10, -5))


class TestSpeed:
    def test_default(self, turtle):
        assert turtle.speed() == 6

    @pytest.mark.parametrize("name,value", list(SPEED_PRESETS.items()))
    def test_presets(self, turtle, name, value):
        assert turtle.speed(name) == value

    def test_preset_case_insensitive(self, turtle):
        turtle.set_speed("Slow")
        assert turtle.get_speed() == 3

    def test_unknown_preset(self, turtle):
        with pytest.raises(ValueError, match="Unknown speed"):
            turtle.speed("warp")
        assert turtle.speed() == 6

    @pytest.mark.parametrize("value,expected", [
        (0.5, 0.5),
        (10, 10),
        (0.4, 0),
        (11, 0),
        (-3, 0),
    ])
    def test_out_of_range_snaps_to_zero(self, turtle, value, expected):
        turtle.set_speed(value)
        assert turtle.get_speed() == expected

    def test_zero_sets_instant(self, turtle):
        assert turtle.speed(0) == 0


class TestQueries:
    @pytest.mark.asyncio
    async def test_xcor_ycor(self, turtle):
        await turtle.goto(3, -4)
        assert turtle.xcor() == 3
        assert turtle.ycor() == -4
        assert turtle.position() == Point(3, -4)

    @pytest.mark.asyncio
    async def test_distance_forms(self, turtle):
        await turtle.goto(1, 1)
        assert turtle.distance(4, 5) == pytest.approx(5)
        assert turtle.distance_to((4, 5)) == pytest.approx(5)
        assert turtle.distance_to(Point(4, 5)) == pytest.approx(5)

    @pytest.mark.asyncio
    async def test_distance_zero_only_at_position(self, turtle):
        await turtle.goto(7, 2)
        assert turtle.distance(7, 2) == 0
        assert turtle.distance(7, 2.001) > 0

    @pytest.mark.asyncio
    async def test_distance_to_turtle(self, canvas, turtle):
        other = Turtle(canvas)
        await other.goto(0, 30)
        await turtle.goto(40, 0)
        assert turtle.distance_to_turtle(other) == pytest.approx(50)
        assert other.distance_to_turtle(turtle) == pytest.approx(50)

    @pytest.mark.asyncio
    async def test_distance_to_turtle_reads_completed_position(self, canvas, turtle):
        other = Turtle(canvas)
        task = asyncio.create_task(other.goto(100, 0))
        await asyncio.sleep(0)
        assert turtle.distance_to_turtle(other) == 0
        await task
        assert turtle.distance_to_turtle(other) == pytest.approx(100)

    def test_distance_to_turtle_rejects_other_types(self, turtle):
        with pytest.raises(TypeError):
            turtle.distance_to_turtle((1, 2))

    @pytest.mark.asyncio
    async def test_towards_then_forward_reaches_point(self, turtle):
        await turtle.goto(-10, 15)
        target = (35, -20)
        await turtle.setheading(turtle.towards(*target))
        await turtle.forward(turtle.distance_to(target))
        assert tuple(turtle.position()) == pytest.approx(target)

    def test_towards_is_canonical_degrees(self, turtle):
        turtle.radians()
        assert turtle.towards(0, -10) == pytest.approx(90)

    def test_repr(self, turtle):
        assert repr(turtle) == "Turtle(x=0.00, y=0.00, heading=0.00)"


class TestConstruction:
    def test_glyph_created_at_origin(self, canvas, turtle):
        glyph = canvas.shapes[turtle.glyph]
        assert glyph.kind == "polygon"
        assert tuple(glyph.center) == (0, 0)

    def test_initial_state(self, turtle):
        assert tuple(turtle.position()) == (0, 0)
        assert turtle.heading() == 0
        assert turtle.isdown()
        assert turtle.speed() == 6
        assert turtle.state.stamps == {}

    def test_turtles_share_canvas_independently(self, canvas):
        a, b = Turtle(canvas), Turtle(canvas)
        assert a.glyph != b.glyph
        assert a.stamp() == 1
        assert b.stamp() == 1


class TestPointerEvents:
    def test_click_coordinates_centered(self, canvas, turtle):
        clicks = []
        turtle.onclick(lambda x, y: clicks.append((x, y)))
        canvas.press(500, 200)
        canvas.press(400, 300)
        assert clicks == [(100, -100), (0, 0)]

    def test_release(self, canvas, turtle):
        releases = []
        turtle.onrelease(lambda x, y: releases.append((x, y)))
        canvas.press(0, 0)
        canvas.release(0, 0)
        assert releases == [(-400, -300)]

    @pytest.mark.asyncio
    async def test_coroutine_callback_runs_as_task(self, canvas, turtle):
        async def go(x, y):
            await turtle.goto(x, y)

        turtle.onclick(go)
        canvas.press(450, 250)
        await asyncio.gather(*list(turtle._callback_tasks))
        assert tuple(turtle.position()) == (50, -50)

    def test_coroutine_callback_without_loop_is_dropped(self, canvas, turtle, caplog):
        calls = []

        async def go(x, y):
            calls.append((x, y))

        turtle.onclick(go)
        with caplog.at_level(logging.WARNING, logger="logoturtle.turtle"):
            canvas.press(450, 250)

        assert calls == []
        assert turtle._callback_tasks == set()
        assert "no running event loop" in caplog.text

    def test_uses_canvas_viewport(self):
        canvas = RecordingCanvas(200, 100)
        turtle = Turtle(canvas)
        clicks = []
        turtle.onclick(lambda x, y: clicks.append((x, y)))
        canvas.press(200, 100)
        assert clicks == [(100, 50)]
