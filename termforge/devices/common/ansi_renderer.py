# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Shared ANSI Rendering Module

This module walks a canvas tree and produces the escape stream used by every
output device (terminal, ans file, png snapshot).

Architecture:
- render_canvas() is the main entry point for device implementations
- Operations are rendered in recorded order; subpaths are rendered
  recursively into the same stream, masks forced into Clear mode
- The fill scan of a closed canvas always comes last, so the fill never
  overdraws that canvas's stroke

Modes:
- Paint: stroke and fill glyphs in their solid colors
- Clear: spaces in place of glyphs, after a style reset
- Gradient: one color escape per glyph, sampled from the paint
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from ...core import surface
from ...core import types as tf
from ...operators import insideness_algorithm as algo
from ...operators.line_algorithm import plot_line
from ...operators.path_query import get_bounds, path_extent

logger = logging.getLogger(__name__)


def _cursor(x: int, y: int) -> str:
    return f"{tf.ESC}{y};{x}H"


def render_canvas(canvas, mode: int = tf.MODE_PAINT, do_not_clear: bool = False,
                  depth: int | None = None) -> str:
    """
    Render a canvas tree into an escape stream.

    Args:
        canvas: Canvas to render
        mode: MODE_PAINT, MODE_CLEAR or MODE_GRADIENT
        do_not_clear: Keep the screen contents instead of emitting a full clear
        depth: Color depth for color escapes, None to use the detected depth

    Returns:
        The escape stream as text, without the final cursor repositioning
    """
    if mode not in tf.MODE_NAMES:
        raise ValueError(f"Unknown render mode {mode!r}")

    parts = [tf.CURSOR_HOME]
    if not do_not_clear:
        parts.append(tf.CLEAR_SCREEN)
    if mode == tf.MODE_CLEAR:
        parts.append(tf.STYLE_RESET)

    # Every render starts from the start point, so re-rendering is repeatable
    canvas._render_location = canvas.start_point

    for op in canvas.operations:
        if isinstance(op, tf.MoveTo):
            canvas._render_location = op.p
            parts.append(_cursor(op.p.x, op.p.y))
        elif isinstance(op, tf.LineTo):
            _render_line(canvas, op.p, mode, depth, parts)
        elif isinstance(op, tf.MaskSubpath):
            parts.append(render_canvas(op.path, tf.MODE_CLEAR, True, depth))
        elif isinstance(op, tf.Subpath):
            parts.append(render_canvas(op.path, mode, True, depth))

    if canvas._closed and canvas.paint.fill_color is not tf.Color.NONE:
        _render_fill(canvas, mode, depth, parts)

    return "".join(parts)


def _render_line(canvas, end, mode, depth, parts) -> None:
    start = canvas._render_location
    stroke = canvas.paint.stroke_color
    canvas._render_location = end

    if mode == tf.MODE_CLEAR:
        for x, y in plot_line(start.x, start.y, end.x, end.y):
            parts.append(f"{_cursor(x, y)}{tf.GLYPH_BLANK}")
        return

    # No stroke paint, nothing to draw but the cursor still moves
    if stroke is tf.Color.NONE:
        return

    if mode == tf.MODE_PAINT:
        parts.append(tf.ESC + stroke.to_escape_code(depth))
        for x, y in plot_line(start.x, start.y, end.x, end.y):
            parts.append(f"{_cursor(x, y)}{tf.GLYPH_FILLED}")
    else:
        for x, y in plot_line(start.x, start.y, end.x, end.y):
            color = stroke.get_color_at(start, tf.Point(x, y), end)
            parts.append(f"{_cursor(x, y)}{tf.ESC}{color.to_escape_code(depth)}{tf.GLYPH_FILLED}")


def _fill_cells(canvas):
    """Yield the cells inside the canvas polygon and not on its stroke, row by row."""
    vertices = get_bounds(canvas)
    extent = path_extent(vertices)
    if extent is None:
        return
    min_x, min_y, max_x, max_y = extent
    cols, lines = surface.get_size()
    on_stroke = algo.stroke_cells(canvas)

    # Cells outside the polygon extent are never inside it
    for y in range(max(min_y, 0), min(max_y, lines - 1) + 1):
        for x in range(max(min_x, 0), min(max_x, cols - 1) + 1):
            if (x, y) not in on_stroke and algo.point_in_polygon(vertices, x, y):
                yield x, y


def _render_fill(canvas, mode, depth, parts) -> None:
    fill = canvas.paint.fill_color
    count = 0

    if mode == tf.MODE_PAINT:
        parts.append(tf.ESC + fill.to_escape_code(depth))
        for x, y in _fill_cells(canvas):
            parts.append(f"{_cursor(x, y)}{tf.GLYPH_FILLED}")
            count += 1
    elif mode == tf.MODE_CLEAR:
        parts.append(tf.STYLE_RESET)
        for x, y in _fill_cells(canvas):
            parts.append(f"{_cursor(x, y)}{tf.GLYPH_BLANK}")
            count += 1
    else:
        # Gradient spans the polygon's extent
        extent = path_extent(get_bounds(canvas))
        if extent is None:
            return
        span_start = tf.Point(extent[0], extent[1])
        span_end = tf.Point(extent[2], extent[3])
        for x, y in _fill_cells(canvas):
            color = fill.get_color_at(span_start, tf.Point(x, y), span_end)
            parts.append(f"{_cursor(x, y)}{tf.ESC}{color.to_escape_code(depth)}{tf.GLYPH_FILLED}")
            count += 1

    logger.debug("Filled %d cells in %s mode", count, tf.MODE_NAMES[mode])


def write_output(text: str, stream: TextIO | None = None) -> None:
    """Write a rendered stream, then park the cursor in the bottom right corner."""
    if stream is None:
        stream = sys.stdout
    cols, lines = surface.get_size()
    stream.write(f"{text}{tf.ESC}{lines};{cols}H")
    stream.flush()
