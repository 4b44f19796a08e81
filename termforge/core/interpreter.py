# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Drawing script interpreter.

Executes tokenized drawing scripts against a Canvas tree. Commands act on
the innermost open canvas; ``begin`` opens a subpath, ``mask`` opens a
detached canvas that is recorded as a mask when its ``end`` is reached.

Commands (angles in degrees):

    paint STROKE FILL              stroke COLOR|GRADIENT     fill COLOR|GRADIENT
    moveto X Y                     lineto X Y
    quadto CX CY X Y               curveto C1X C1Y C2X C2Y X Y
    arc CX CY R A0 A1              arcn CX CY R A0 A1
    arcto X1 Y1 X2 Y2 R            ellipse CX CY RX RY ROT A0 A1 [ccw]
    rect X Y W H                   roundrect X Y W H R [R [R [R]]]
    clearrect X Y W H              close
    translate DX DY                transform A B C D E F
    rotate A [CX CY]
    reset [X Y]                    begin [X Y] / mask [X Y] / end
"""

from __future__ import annotations

import logging
import math
from typing import Callable

from .. import canvas as tf_canvas
from . import error as tf_error
from . import types as tf
from .tokenizer import (
    Token, parse_color, parse_number, parse_numbers, parse_paint_spec, script_error, tokenize
)

logger = logging.getLogger(__name__)


class ScriptContext:
    """The canvas being built and the stack of open begin/mask blocks."""

    def __init__(self, root: tf_canvas.Canvas) -> None:
        self.root = root
        # (canvas, is_mask, opening line) for every open block, root first
        self.stack: list[tuple[tf_canvas.Canvas, bool, int]] = [(root, False, 0)]

    @property
    def current(self) -> tf_canvas.Canvas:
        return self.stack[-1][0]


def _no_args(token: Token) -> None:
    if token.args:
        script_error(f"{token.command}: takes no arguments", token.line, token.command)


def _optional_point(token: Token):
    if not token.args:
        return None
    x, y = parse_numbers(token.args, 2, token.line, token.command)
    return tf.Point(x, y)


def _paint(ctxt: ScriptContext, token: Token) -> None:
    if len(token.args) != 2:
        script_error("paint: expected a stroke color and a fill color", token.line, token.command)
    stroke = parse_color(token.args[0], token.line, token.command)
    fill = parse_color(token.args[1], token.line, token.command)
    ctxt.current.paint = tf.Paint(stroke, fill)


def _stroke(ctxt: ScriptContext, token: Token) -> None:
    color = parse_paint_spec(token.args, token.line, token.command)
    ctxt.current.paint = ctxt.current.paint.with_stroke(color)


def _fill(ctxt: ScriptContext, token: Token) -> None:
    color = parse_paint_spec(token.args, token.line, token.command)
    ctxt.current.paint = ctxt.current.paint.with_fill(color)


def _moveto(ctxt: ScriptContext, token: Token) -> None:
    x, y = parse_numbers(token.args, 2, token.line, token.command)
    ctxt.current.move_to(x, y)


def _lineto(ctxt: ScriptContext, token: Token) -> None:
    x, y = parse_numbers(token.args, 2, token.line, token.command)
    ctxt.current.line_to(x, y)


def _quadto(ctxt: ScriptContext, token: Token) -> None:
    cx, cy, x, y = parse_numbers(token.args, 4, token.line, token.command)
    ctxt.current.quadratic_curve_to((cx, cy), (x, y))


def _curveto(ctxt: ScriptContext, token: Token) -> None:
    c1x, c1y, c2x, c2y, x, y = parse_numbers(token.args, 6, token.line, token.command)
    ctxt.current.bezier_curve_to((c1x, c1y), (c2x, c2y), (x, y))


def _arc(anticlockwise: bool) -> Callable[[ScriptContext, Token], None]:
    def run(ctxt: ScriptContext, token: Token) -> None:
        cx, cy, r, a0, a1 = parse_numbers(token.args, 5, token.line, token.command)
        ctxt.current.arc((cx, cy), r, math.radians(a0), math.radians(a1), anticlockwise)
    return run


def _arcto(ctxt: ScriptContext, token: Token) -> None:
    x1, y1, x2, y2, r = parse_numbers(token.args, 5, token.line, token.command)
    ctxt.current.arc_to((x1, y1), (x2, y2), r)


def _ellipse(ctxt: ScriptContext, token: Token) -> None:
    args = token.args
    anticlockwise = False
    if len(args) == 8:
        if args[7].lower() not in ("ccw", "anticlockwise"):
            script_error(f"ellipse: expected 'ccw', got {args[7]!r}", token.line, token.command)
        anticlockwise = True
        args = args[:7]
    cx, cy, rx, ry, rot, a0, a1 = parse_numbers(args, 7, token.line, token.command)
    ctxt.current.ellipse((cx, cy), rx, ry, math.radians(rot),
                         math.radians(a0), math.radians(a1), anticlockwise)


def _rect(ctxt: ScriptContext, token: Token) -> None:
    x, y, w, h = parse_numbers(token.args, 4, token.line, token.command)
    ctxt.current.rect((x, y), (w, h))


def _roundrect(ctxt: ScriptContext, token: Token) -> None:
    if not 5 <= len(token.args) <= 8:
        script_error("roundrect: expected X Y W H and one to four radii", token.line, token.command)
    values = [parse_number(arg, token.line, token.command) for arg in token.args]
    x, y, w, h = values[:4]
    ctxt.current.round_rect((x, y), (w, h), values[4:])


def _clearrect(ctxt: ScriptContext, token: Token) -> None:
    x, y, w, h = parse_numbers(token.args, 4, token.line, token.command)
    ctxt.current.clear_rect((x, y), (w, h))


def _translate(ctxt: ScriptContext, token: Token) -> None:
    dx, dy = parse_numbers(token.args, 2, token.line, token.command)
    ctxt.current.translate(dx, dy)


def _transform(ctxt: ScriptContext, token: Token) -> None:
    values = parse_numbers(token.args, 6, token.line, token.command)
    ctxt.current.transform(tf.Matrix(*values))


def _rotate(ctxt: ScriptContext, token: Token) -> None:
    if len(token.args) not in (1, 3):
        script_error("rotate: expected an angle and an optional centre X Y",
                     token.line, token.command)
    values = parse_numbers(token.args, len(token.args), token.line, token.command)
    cx, cy = values[1:] or (0, 0)
    # about (cx, cy): move the centre to the origin, turn, move back
    matrix = (tf.Matrix.translation(-cx, -cy)
              .multiply(tf.Matrix.rotation(math.radians(values[0])))
              .multiply(tf.Matrix.translation(cx, cy)))
    ctxt.current.transform(matrix)


def _close(ctxt: ScriptContext, token: Token) -> None:
    _no_args(token)
    ctxt.current.close()


def _reset(ctxt: ScriptContext, token: Token) -> None:
    ctxt.current.reset(_optional_point(token))


def _begin(ctxt: ScriptContext, token: Token) -> None:
    start = _optional_point(token)
    if start is None:
        subpath = ctxt.current.begin_path()
    else:
        subpath = ctxt.current.subpath_at(start)
    ctxt.stack.append((subpath, False, token.line))


def _mask(ctxt: ScriptContext, token: Token) -> None:
    start = _optional_point(token)
    if start is None:
        start = ctxt.current.current_point.copy()
    if ctxt.current.is_closed:
        script_error("mask: the current path is closed", token.line, token.command)
    ctxt.stack.append((tf_canvas.Canvas(tf.Paint(), start), True, token.line))


def _end(ctxt: ScriptContext, token: Token) -> None:
    _no_args(token)
    if len(ctxt.stack) == 1:
        script_error("end: no open begin or mask block", token.line, token.command)
    child, is_mask, _ = ctxt.stack.pop()
    if is_mask:
        ctxt.current.clip(child)


# command name -> handler
COMMANDS: dict[str, Callable[[ScriptContext, Token], None]] = {
    "paint": _paint,
    "stroke": _stroke,
    "fill": _fill,
    "moveto": _moveto,
    "lineto": _lineto,
    "quadto": _quadto,
    "curveto": _curveto,
    "arc": _arc(False),
    "arcn": _arc(True),
    "arcto": _arcto,
    "ellipse": _ellipse,
    "rect": _rect,
    "roundrect": _roundrect,
    "clearrect": _clearrect,
    "translate": _translate,
    "transform": _transform,
    "rotate": _rotate,
    "close": _close,
    "reset": _reset,
    "begin": _begin,
    "mask": _mask,
    "end": _end,
}


def execute(ctxt: ScriptContext, token: Token) -> None:
    """Run one command, reporting engine errors as ScriptErrors on its line."""
    handler = COMMANDS.get(token.command)
    if handler is None:
        return script_error(f"unknown command {token.command!r}", token.line, token.command)

    logger.debug("line %d: %s %s", token.line, token.command, " ".join(token.args))
    try:
        handler(ctxt, token)
    except tf_error.ScriptError:
        raise
    except tf_error.TermForgeError as err:
        raise tf_error.ScriptError(str(err), token.command, token.line) from err


def run_script(text: str, canvas: tf_canvas.Canvas | None = None) -> tf_canvas.Canvas:
    """
    Execute a drawing script and return the canvas it built.

    Args:
        text: Script source
        canvas: Canvas to draw on, a new one with the default paint if None

    Raises:
        ScriptError: On a syntax error, an unknown command, an unterminated
            block, or any engine error raised by a command
    """
    if canvas is None:
        canvas = tf_canvas.Canvas(tf.Paint())
    ctxt = ScriptContext(canvas)

    tokens = tokenize(text)
    for token in tokens:
        execute(ctxt, token)

    if len(ctxt.stack) > 1:
        _, is_mask, opened = ctxt.stack[-1]
        kind = "mask" if is_mask else "begin"
        return script_error(f"{kind} block opened here is never ended", opened, kind)

    logger.debug("Script executed: %d commands", len(tokens))
    return canvas
