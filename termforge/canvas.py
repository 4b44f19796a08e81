# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
TermForge Canvas

A Canvas records a path as an ordered list of operations and renders it
into the terminal with cursor-positioning and color escape sequences.
Shapes such as rectangles and arcs are recorded as child canvases
(subpaths), and erasing is done with mask subpaths rendered in Clear mode.

Example:
    canvas = Canvas(Paint(Color.RED, Color.BLUE))
    canvas.rect(Point(2, 2), Size(4, 4))
    canvas.draw()
"""

from __future__ import annotations

from typing import Any, TextIO

from .core import surface
from .core import types as tf
from .devices.common import ansi_renderer
from .operators import insideness
from .operators import matrix as matrix_ops
from .operators import path as path_ops
from .operators import path_query


class Canvas:
    """A recorded path bound to a paint and a start point."""

    def __init__(self, paint: tf.Paint | None = None, start_point: Any = None) -> None:
        # The paint is shared with subpaths, never copied
        self.paint = paint if paint is not None else tf.Paint()
        self.start_point = tf.Point.zero() if start_point is None else tf.Point.of(start_point)
        self.operations: list = []
        self._closed = False
        self._bounds: list[tf.Point] | None = None
        self._render_location = self.start_point

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<Canvas {state} start={self.start_point!r} operations={len(self.operations)}>"

    # -- state -------------------------------------------------------------

    @property
    def current_point(self) -> tf.Point:
        return path_query.currentpoint(self)

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def size(self) -> tf.Size:
        """The size of the output surface, queried live."""
        cols, lines = surface.get_size()
        return tf.Size(cols, lines)

    # -- rendering ---------------------------------------------------------

    def render(self, mode: int = tf.MODE_PAINT, do_not_clear: bool = False,
               print_output: bool = True, stream: TextIO | None = None,
               depth: int | None = None) -> str | None:
        """Render in ``mode``; write to ``stream`` (stdout by default) or return the text."""
        text = ansi_renderer.render_canvas(self, mode, do_not_clear, depth)
        if not print_output:
            return text
        ansi_renderer.write_output(text, stream)
        return None

    def draw(self, clear: bool = True, stream: TextIO | None = None) -> None:
        """Draw to the terminal, in Gradient mode when the paint holds a gradient."""
        mode = tf.MODE_PAINT
        if isinstance(self.paint.stroke_color, tf.Gradient) or isinstance(self.paint.fill_color, tf.Gradient):
            mode = tf.MODE_GRADIENT
        self.render(mode, not clear, True, stream)

    def clear(self) -> Canvas:
        """Erase the whole surface without discarding the recorded operations."""
        cols, lines = surface.get_size()
        return path_ops.clearrect(self, tf.Point.zero(), tf.Size(cols - 1, lines - 1))

    # -- path construction -------------------------------------------------

    def move_to(self, px: Any, y: Any = None) -> None:
        path_ops.moveto(self, px, y)

    def line_to(self, px: Any, y: Any = None) -> None:
        path_ops.lineto(self, px, y)

    def quadratic_curve_to(self, control: Any, end: Any) -> None:
        path_ops.quadcurveto(self, control, end)

    def bezier_curve_to(self, control1: Any, control2: Any, end: Any) -> None:
        path_ops.curveto(self, control1, control2, end)

    def close(self) -> None:
        path_ops.closepath(self)

    def begin_path(self, paint: tf.Paint | None = None) -> Canvas:
        return path_ops.beginpath(self, paint)

    def subpath_at(self, px: Any, y: Any = None, paint: tf.Paint | None = None) -> Canvas:
        return path_ops.subpath_at(self, px, y, paint)

    def rect(self, start: Any, size: Any) -> Canvas:
        return path_ops.rect(self, start, size)

    def round_rect(self, start: Any, size: Any, radii: Any) -> Canvas:
        return path_ops.roundrect(self, start, size, radii)

    def clear_rect(self, start: Any, size: Any) -> Canvas:
        return path_ops.clearrect(self, start, size)

    def clip(self, path: Canvas) -> None:
        path_ops.clip(self, path)

    def add_path(self, path: Canvas, matrix: tf.Matrix | None = None) -> None:
        path_ops.addpath(self, path, matrix)

    def arc(self, center: Any, radius: float, start_angle: float, end_angle: float,
            anticlockwise: bool = False) -> Canvas:
        return path_ops.arc(self, center, radius, start_angle, end_angle, anticlockwise)

    def arc_to(self, control1: Any, control2: Any, radius: float) -> None:
        path_ops.arcto(self, control1, control2, radius)

    def ellipse(self, center: Any, radius_x: float, radius_y: float, rotation: float,
                start_angle: float, end_angle: float, anticlockwise: bool = False) -> Canvas:
        return path_ops.ellipse(self, center, radius_x, radius_y, rotation,
                                start_angle, end_angle, anticlockwise)

    def reset(self, start: Any = None) -> None:
        path_ops.reset(self, start)

    # -- transforms --------------------------------------------------------

    def transform(self, matrix: tf.Matrix) -> None:
        matrix_ops.transform(self, matrix)

    def translate(self, dx: float, dy: float) -> None:
        matrix_ops.translate(self, dx, dy)

    # -- queries -----------------------------------------------------------

    def get_bounds(self) -> list[tf.Point]:
        return path_query.get_bounds(self)

    def is_point_in_path(self, px: Any, y: Any = None) -> bool:
        return insideness.infill(self, px, y)

    def is_point_in_stroke(self, px: Any, y: Any = None, start: Any = None, end: Any = None) -> bool:
        return insideness.instroke(self, px, y, start, end)
