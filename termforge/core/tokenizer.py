# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Drawing script tokenizer.

A drawing script is line oriented: every non-blank line is a command word
followed by whitespace separated arguments. ``#`` starts a comment when it
begins a line or is followed by whitespace, so hex colors such as
``#ff8800`` are never mistaken for comments.

Value parsers turn argument tokens into numbers, colors and gradients and
report malformed input as a ScriptError carrying the line number.
"""

from __future__ import annotations

import math
import re
from typing import NamedTuple

from . import error as tf_error
from . import types as tf

# a '#' that starts a comment: line start or after whitespace, then whitespace or end
_COMMENT_RE = re.compile(r"(^|\s)#(\s|$)")

GRADIENT_KINDS = {
    "linear": tf.LinearGradient,
    "radial": tf.RadialGradient,
    "conic": tf.ConicGradient,
}


class Token(NamedTuple):
    line: int
    command: str
    args: list[str]


def _strip_comment(text: str) -> str:
    # no command starts with a color, so a leading # is always a comment
    if text.lstrip().startswith("#"):
        return ""
    match = _COMMENT_RE.search(text)
    if match:
        return text[:match.start()]
    return text


def tokenize(text: str) -> list[Token]:
    """Split a script into one token per command line; command words are lower-cased."""
    tokens = []
    for number, raw in enumerate(text.splitlines(), start=1):
        words = _strip_comment(raw).split()
        if not words:
            continue
        tokens.append(Token(number, words[0].lower(), words[1:]))
    return tokens


def script_error(message: str, line: int, command: str) -> None:
    raise tf_error.ScriptError(message, command, line)


def parse_number(token: str, line: int, command: str) -> float:
    try:
        value = float(token)
    except ValueError:
        return script_error(f"{command}: expected a number, got {token!r}", line, command)
    if math.isnan(value) or math.isinf(value):
        return script_error(f"{command}: expected a finite number, got {token!r}", line, command)
    return int(value) if value.is_integer() else value


def parse_numbers(args: list[str], count: int, line: int, command: str) -> list[float]:
    """Parse exactly ``count`` numeric arguments."""
    if len(args) != count:
        return script_error(f"{command}: expected {count} arguments, got {len(args)}", line, command)
    return [parse_number(arg, line, command) for arg in args]


def parse_color(token: str, line: int, command: str) -> tf.Color:
    """A color name (``red``, ``none``, ``default``...) or ``#rgb`` / ``#rrggbb``."""
    try:
        if token.startswith("#"):
            return tf.Color.from_hex(token)
        return tf.Color.named(token)
    except tf_error.InvalidArgumentError:
        return script_error(f"{command}: unknown color {token!r}", line, command)


def parse_paint_spec(args: list[str], line: int, command: str) -> tf.Color | tf.Gradient:
    """
    A solid color, or a gradient spec:

        linear|conic [angle] offset:color ...
        radial offset:color ...

    The angle is in degrees and offsets run from 0 to 1.
    """
    if not args:
        return script_error(f"{command}: expected a color", line, command)

    kind = args[0].lower()
    if kind not in GRADIENT_KINDS:
        if len(args) != 1:
            return script_error(f"{command}: expected a single color, got {' '.join(args)!r}",
                                line, command)
        return parse_color(args[0], line, command)

    rest = args[1:]
    if kind == "radial":
        gradient = tf.RadialGradient()
    else:
        angle = 0.0
        if rest and ":" not in rest[0]:
            angle = math.radians(parse_number(rest[0], line, command))
            rest = rest[1:]
        gradient = GRADIENT_KINDS[kind](angle)

    if not rest:
        return script_error(f"{command}: a {kind} gradient needs at least one offset:color stop",
                            line, command)
    for stop in rest:
        offset, sep, color = stop.partition(":")
        if not sep or not color:
            return script_error(f"{command}: malformed color stop {stop!r}", line, command)
        gradient.add_color_stop(parse_number(offset, line, command),
                                parse_color(color, line, command))
    return gradient
