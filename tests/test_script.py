# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

""" Unit tests for the drawing script tokenizer and interpreter. """

import math

import pytest

from termforge.canvas import Canvas
from termforge.core import error as tf_error
from termforge.core import types as tf
from termforge.core.interpreter import COMMANDS, run_script
from termforge.core.tokenizer import Token, parse_number, parse_paint_spec, tokenize

SQUARE = """
# a red square with a blue interior
paint red blue
rect 2 2 4 4   # top left, then size
"""


def test_tokenize() -> None:
    text = "# heading\n\nMoveTo 1 2 # note\nstroke #ff0000\n  fill #0f0   \n"
    assert tokenize(text) == [
        Token(3, "moveto", ["1", "2"]),
        Token(4, "stroke", ["#ff0000"]),
        Token(5, "fill", ["#0f0"]),
    ]


def test_parse_number() -> None:
    assert parse_number("2.0", 1, "x") == 2
    assert isinstance(parse_number("2.0", 1, "x"), int)
    assert parse_number("-1.25", 1, "x") == -1.25
    for bad in ["abc", "nan", "inf", "1,5"]:
        with pytest.raises(tf_error.ScriptError) as excinfo:
            parse_number(bad, 7, "lineto")
        assert excinfo.value.line == 7


def test_parse_paint_spec() -> None:
    assert parse_paint_spec(["red"], 1, "stroke") is tf.Color.RED
    assert parse_paint_spec(["#0000ff"], 1, "stroke") == tf.Color.BLUE

    linear = parse_paint_spec(["linear", "90", "0:red", "1:#0000ff"], 1, "fill")
    assert isinstance(linear, tf.LinearGradient)
    assert linear.angle == pytest.approx(math.pi / 2)
    assert [offset for offset, _ in linear.color_stops] == [0, 1]

    conic = parse_paint_spec(["conic", "0.5:white"], 1, "fill")
    assert isinstance(conic, tf.ConicGradient)
    assert conic.angle == 0

    radial = parse_paint_spec(["radial", "0:red", "1:black"], 1, "fill")
    assert isinstance(radial, tf.RadialGradient)


@pytest.mark.parametrize("args", [[], ["red", "blue"], ["linear"], ["linear", "0red"],
                                  ["radial", "0:mauvish"], ["taupe"], ["linear", "x", "0:red"]])
def test_parse_paint_spec_errors(args) -> None:
    with pytest.raises(tf_error.ScriptError):
        parse_paint_spec(args, 3, "fill")


def test_run_script_square() -> None:
    canvas = run_script(SQUARE)
    assert canvas.paint.stroke_color is tf.Color.RED
    assert canvas.paint.fill_color is tf.Color.BLUE
    (op,) = canvas.operations
    assert isinstance(op, tf.Subpath)
    assert op.path.is_closed
    assert op.path.paint is canvas.paint


def test_run_script_onto_existing_canvas() -> None:
    canvas = Canvas(start_point=(5, 5))
    assert run_script("lineto 9 5\nclose", canvas) is canvas
    assert canvas.is_closed


def test_path_commands() -> None:
    script = """
    moveto 1 1
    lineto 10 1
    quadto 15 1 15 6
    curveto 15 10 10 12 5 12
    arcto 1 12 1 8 2
    close
    """
    canvas = run_script(script)
    assert canvas.is_closed
    assert isinstance(canvas.operations[0], tf.MoveTo)
    assert all(isinstance(op, tf.LineTo) for op in canvas.operations[1:])


def test_shape_commands() -> None:
    script = """
    arc 10 10 5 0 90
    arcn 30 10 5 0 90
    ellipse 50 10 8 4 0 0 360
    ellipse 50 10 8 4 30 0 180 ccw
    rect 1 15 5 5
    roundrect 10 15 8 6 2
    roundrect 20 15 8 6 1 2 1 2
    clearrect 0 0 3 3
    """
    canvas = run_script(script)
    kinds = [type(op) for op in canvas.operations]
    assert kinds == [tf.Subpath] * 7 + [tf.MaskSubpath]
    assert canvas.operations[0].path.start_point == tf.Point(15, 10)
    assert canvas.operations[2].path.start_point == tf.Point(58, 10)


def test_begin_and_mask_blocks() -> None:
    script = """
    stroke green
    begin 4 4
      lineto 8 4
      lineto 8 8
      close
    end
    mask 1 1
      lineto 1 4
      lineto 4 4
      lineto 4 1
      close
    end
    lineto 20 20
    """
    canvas = run_script(script)
    sub, mask, line = canvas.operations
    assert isinstance(sub, tf.Subpath) and not isinstance(sub, tf.MaskSubpath)
    assert sub.path.start_point == tf.Point(4, 4)
    assert sub.path.paint.stroke_color is tf.Color.GREEN
    assert isinstance(mask, tf.MaskSubpath)
    assert mask.path.start_point == tf.Point(1, 1)
    assert mask.path.is_closed
    assert line.p == tf.Point(20, 20)


def test_translate_transform_reset() -> None:
    canvas = run_script("lineto 4 4\ntranslate 2 1\ntransform 1 0 0 1 1 1")
    assert canvas.current_point == tf.Point(7, 6)
    canvas = run_script("lineto 4 4\nreset 3 3\nlineto 5 3")
    assert canvas.start_point == tf.Point(3, 3)
    assert len(canvas.operations) == 1


def test_rotate() -> None:
    canvas = run_script("lineto 4 0\nrotate 90")
    assert canvas.start_point == tf.Point(0, 0)
    assert canvas.current_point == tf.Point(0, 4)
    # a quarter turn about the centre (5, 5)
    canvas = run_script("lineto 10 5\nrotate 90 5 5")
    assert canvas.start_point == tf.Point(10, 0)
    assert canvas.current_point == tf.Point(5, 10)


SCRIPT_ERRORS = [
    ("bogus 1 2", 1),
    ("moveto 1", 1),
    ("\nlineto 100 100", 2),
    ("lineto 4 4\nclose\nclose", 3),
    ("begin\nlineto 2 2", 1),
    ("end", 1),
    ("close now", 1),
    ("ellipse 10 10 2 2 0 0 90 sideways", 1),
    ("roundrect 1 1 5 5", 1),
    ("paint red", 1),
    ("rotate 90 5", 1),
    ("lineto 2 2\nrotate", 2),
    ("lineto 2 2\n\nmask 5 5\nlineto 6 6", 3),
]


@pytest.mark.parametrize("script, line", SCRIPT_ERRORS)
def test_script_errors(script, line) -> None:
    with pytest.raises(tf_error.ScriptError) as excinfo:
        run_script(script)
    assert excinfo.value.line == line
    assert f"line {line}:" in str(excinfo.value)


def test_engine_errors_are_chained() -> None:
    with pytest.raises(tf_error.ScriptError) as excinfo:
        run_script("lineto 100 100")
    assert isinstance(excinfo.value.__cause__, tf_error.OutOfBoundsError)
    assert excinfo.value.func_name == "lineto"


def test_every_command_is_registered() -> None:
    assert set(COMMANDS) == {
        "paint", "stroke", "fill", "moveto", "lineto", "quadto", "curveto", "arc", "arcn",
        "arcto", "ellipse", "rect", "roundrect", "clearrect", "translate", "transform", "rotate",
        "close", "reset", "begin", "mask", "end",
    }
