# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
TermForge Types Paint Module

The paint provider consumed by the render pipeline. A Paint pairs a stroke
and a fill, each either a solid Color or a Gradient. Both expose the same two
methods the renderer relies on:

- ``to_escape_code(depth)`` - SGR parameters for the color (no leading ESC[)
- ``get_color_at(span_start, point, span_end)`` - the solid color to use at
  ``point`` for a stroke or fill spanning ``span_start`` to ``span_end``
"""

from __future__ import annotations

import math
from typing import Union

from .. import color_space
from .. import error as tf_error
from .geometry import round_half_up


def _channel(value: Union[int, float]) -> int:
    return round_half_up(min(max(value, 0), 255))


class Color:
    """An RGB color, channels clamped to 0-255."""

    __slots__ = ("r", "g", "b")

    NAMES = {}

    def __init__(self, r: Union[int, float], g: Union[int, float], b: Union[int, float]) -> None:
        self.r = _channel(r)
        self.g = _channel(g)
        self.b = _channel(b)

    @staticmethod
    def from_number(num: int) -> Color:
        return Color((num >> 16) & 0xFF, (num >> 8) & 0xFF, num & 0xFF)

    @staticmethod
    def from_hex(text: str) -> Color:
        """Parse ``#rrggbb`` or ``#rgb``."""
        digits = text[1:] if text.startswith("#") else text
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) != 6:
            return tf_error.e(tf_error.INVALIDARGUMENT, "from_hex", f"bad hex color {text!r}")
        try:
            return Color.from_number(int(digits, 16))
        except ValueError:
            return tf_error.e(tf_error.INVALIDARGUMENT, "from_hex", f"bad hex color {text!r}")

    @staticmethod
    def named(name: str) -> Color:
        try:
            return Color.NAMES[name.lower()]
        except KeyError:
            return tf_error.e(tf_error.INVALIDARGUMENT, "named", f"unknown color name {name!r}")

    def to_number(self) -> int:
        return (self.r << 16) + (self.g << 8) + self.b

    def to_escape_code(self, depth: int | None = None) -> str:
        return color_space.rgb_to_escape_code(self.r, self.g, self.b, depth)

    def get_color_at(self, span_start, point, span_end) -> Color:
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return type(self) is type(other) and (self.r, self.g, self.b) == (other.r, other.g, other.b)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.r, self.g, self.b))

    def __repr__(self) -> str:
        return f"Color({self.r}, {self.g}, {self.b})"


class _DefaultColor(Color):
    """The terminal's own default foreground."""

    __slots__ = ()

    def to_escape_code(self, depth: int | None = None) -> str:
        return "39m"

    def __repr__(self) -> str:
        return "Color.DEFAULT"


class _NoColor(Color):
    """Do not paint."""

    __slots__ = ()

    def to_escape_code(self, depth: int | None = None) -> str:
        return ""

    def __repr__(self) -> str:
        return "Color.NONE"


Color.BLACK = Color(0, 0, 0)
Color.RED = Color(255, 0, 0)
Color.GREEN = Color(0, 255, 0)
Color.BLUE = Color(0, 0, 255)
Color.WHITE = Color(255, 255, 255)
Color.YELLOW = Color(255, 255, 0)
Color.CYAN = Color(0, 255, 255)
Color.MAGENTA = Color(255, 0, 255)
Color.GRAY = Color(128, 128, 128)
Color.DEFAULT = _DefaultColor(229, 229, 229)
Color.NONE = _NoColor(0, 0, 0)

Color.NAMES = {
    "black": Color.BLACK,
    "red": Color.RED,
    "green": Color.GREEN,
    "blue": Color.BLUE,
    "white": Color.WHITE,
    "yellow": Color.YELLOW,
    "cyan": Color.CYAN,
    "magenta": Color.MAGENTA,
    "gray": Color.GRAY,
    "grey": Color.GRAY,
    "default": Color.DEFAULT,
    "none": Color.NONE,
}


class Gradient:
    """Base class for gradients; subclasses implement ``get_color_at``."""

    def __init__(self, angle: float = 0.0) -> None:
        self.angle = angle
        # (offset, color) pairs, kept sorted by offset
        self.color_stops: list[tuple[float, Color]] = []

    def add_color_stop(self, offset: float, color: Color) -> None:
        """Add a stop at ``offset`` (clamped to 0-1), replacing any stop already there."""
        if not isinstance(color, Color):
            tf_error.e(tf_error.INVALIDARGUMENT, "add_color_stop",
                       f"color stop must be a Color, got {color!r}")
        offset = min(max(float(offset), 0.0), 1.0)
        for i, (stop_offset, _) in enumerate(self.color_stops):
            if stop_offset == offset:
                self.color_stops[i] = (offset, color)
                return
        self.color_stops.append((offset, color))
        self.color_stops.sort(key=lambda stop: stop[0])

    def get_color_for(self, percent: float) -> Color:
        """Interpolate the stops at ``percent`` (clamped to 0-1)."""
        if math.isnan(percent):
            percent = 0.0
        percent = min(max(percent, 0.0), 1.0)
        stops = self.color_stops
        if not stops:
            return Color.BLACK
        if len(stops) == 1:
            return stops[0][1]

        # Stops before the first / after the last offset extend flat
        before = (0.0, stops[0][1])
        after = (1.0, stops[-1][1])
        for stop in stops:
            if stop[0] <= percent:
                before = stop
        for stop in reversed(stops):
            if stop[0] >= percent:
                after = stop

        if before[0] == after[0]:
            return before[1]

        t = (percent - before[0]) / (after[0] - before[0])
        c0, c1 = before[1], after[1]
        return Color(
            round_half_up(c0.r * (1 - t) + c1.r * t),
            round_half_up(c0.g * (1 - t) + c1.g * t),
            round_half_up(c0.b * (1 - t) + c1.b * t),
        )

    def get_color_at(self, span_start, point, span_end) -> Color:
        raise NotImplementedError("Use a LinearGradient, RadialGradient or ConicGradient")

    def to_escape_code(self, depth: int | None = None) -> str:
        # Solid fallback when a gradient is painted in Paint mode
        return self.get_color_for(0.0).to_escape_code(depth)


class LinearGradient(Gradient):
    """Colors progress along the direction ``angle`` (radians) over the span length."""

    def get_color_at(self, span_start, point, span_end) -> Color:
        distance = math.hypot(span_end.x - span_start.x, span_end.y - span_start.y)
        if distance == 0:
            return self.get_color_for(0.0)
        along = ((point.x - span_start.x) * math.cos(self.angle)
                 + (point.y - span_start.y) * math.sin(self.angle))
        return self.get_color_for(along / distance)


class RadialGradient(Gradient):
    """Colors progress outwards from the midpoint of the span."""

    def __init__(self) -> None:
        super().__init__(0.0)

    def get_color_at(self, span_start, point, span_end) -> Color:
        cx = (span_start.x + span_end.x) / 2
        cy = (span_start.y + span_end.y) / 2
        radius = math.hypot(span_end.x - span_start.x, span_end.y - span_start.y) / 2
        if radius == 0:
            return self.get_color_for(0.0)
        return self.get_color_for(math.hypot(point.x - cx, point.y - cy) / radius)


class ConicGradient(Gradient):
    """Colors sweep around the midpoint of the span, starting at ``angle``."""

    def get_color_at(self, span_start, point, span_end) -> Color:
        cx = (span_start.x + span_end.x) / 2
        cy = (span_start.y + span_end.y) / 2
        sweep = (math.atan2(point.y - cy, point.x - cx) - self.angle) % math.tau
        return self.get_color_for(sweep / math.tau)


class Paint:
    """A stroke and a fill. Anything that is not a Color or Gradient becomes ``Color.DEFAULT``."""

    def __init__(self, stroke_color: Color | Gradient | None = None,
                 fill_color: Color | Gradient | None = None) -> None:
        if not isinstance(stroke_color, (Color, Gradient)):
            stroke_color = Color.DEFAULT
        if not isinstance(fill_color, (Color, Gradient)):
            fill_color = Color.DEFAULT
        self.stroke_color = stroke_color
        self.fill_color = fill_color

    def with_stroke(self, stroke_color: Color | Gradient) -> Paint:
        return Paint(stroke_color, self.fill_color)

    def with_fill(self, fill_color: Color | Gradient) -> Paint:
        return Paint(self.stroke_color, fill_color)

    def __repr__(self) -> str:
        return f"Paint(stroke={self.stroke_color!r}, fill={self.fill_color!r})"
