# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Point-in-path and point-on-stroke algorithms.

The fill test runs a winding-number crossing loop over the simplified
polygon produced by ``path_query.get_bounds``. The stroke test replays the
same Bresenham walk the renderer uses, so a cell is on the stroke exactly
when the renderer would draw a glyph there.
"""

from ..core import types as tf
from .line_algorithm import plot_line, segment_contains
from .path_query import path_extent


def point_in_polygon(vertices, px, py):
    """Winding-number test of ``(px, py)`` against a closed polygon.

    The polygon is closed implicitly from its last vertex back to its first.
    Points outside the polygon's own coordinate extent are rejected before
    the crossing loop runs; an empty polygon contains nothing.

    Args:
        vertices: Sequence of points with ``x`` and ``y``.
        px, py: Lattice cell to test.

    Returns:
        True if the winding number at the point is non-zero.
    """
    extent = path_extent(vertices)
    if extent is None:
        return False
    min_x, min_y, max_x, max_y = extent
    if px < min_x or px > max_x or py < min_y or py > max_y:
        return False

    winding = 0
    prev = vertices[-1]
    for curr in vertices:
        if (curr.y > py) != (prev.y > py):
            # Sign of the cross product tells which side of the edge the point is on
            is_left = (prev.x - curr.x) * (py - curr.y) - (px - curr.x) * (prev.y - curr.y)
            if (is_left > 0) if curr.y > py else (is_left < 0):
                winding += 1 if curr.y > prev.y else -1
        prev = curr
    return winding != 0


def point_on_stroke(canvas, px, py):
    """Walk the canvas's own line segments, then its subpaths, for a stroke hit.

    The walk starts at the start point; **moveto** relocates it without
    drawing. Subpath children are searched recursively. Mask subpaths erase
    rather than stroke and are not part of the stroke.
    """
    current = canvas.start_point
    for op in canvas.operations:
        if isinstance(op, tf.MoveTo):
            current = op.p
        elif isinstance(op, tf.LineTo):
            if segment_contains(px, py, current.x, current.y, op.p.x, op.p.y):
                return True
            current = op.p
        elif isinstance(op, tf.MaskSubpath):
            continue
        elif isinstance(op, tf.Subpath):
            if point_on_stroke(op.path, px, py):
                return True
    return False


def stroke_cells(canvas, cells=None):
    """Collect every lattice cell on the canvas stroke into a set.

    Equivalent to calling ``point_on_stroke`` for every cell of the surface,
    used by the fill scan so the stroke is stepped once per render.
    """
    if cells is None:
        cells = set()
    current = canvas.start_point
    for op in canvas.operations:
        if isinstance(op, tf.MoveTo):
            current = op.p
        elif isinstance(op, tf.LineTo):
            cells.update(plot_line(current.x, current.y, op.p.x, op.p.y))
            current = op.p
        elif isinstance(op, tf.MaskSubpath):
            continue
        elif isinstance(op, tf.Subpath):
            stroke_cells(op.path, cells)
    return cells
