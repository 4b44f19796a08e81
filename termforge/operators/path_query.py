# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import math

from ..core import surface
from ..core import types as tf


def currentpoint(canvas):
    """
    canvas **currentpoint** point

    returns the current point of the canvas: the last point of the last recorded
    operation that carries points, or the start point when no such operation has
    been recorded yet. Subpath and mask operations carry no points, so recording
    one does not move the current point of the canvas that owns it.

    **See Also**: **lineto**, **moveto**, **beginpath**
    """
    for op in reversed(canvas.operations):
        points = op.points
        if points:
            return points[-1]
    return canvas.start_point


def _slope(x0, y0, x1, y1):
    dx = x1 - x0
    dy = y1 - y0
    if dx == 0:
        # a zero-length segment has no slope and never merges
        if dy == 0:
            return math.nan
        return math.copysign(math.inf, dy)
    return dy / dx


def get_bounds(canvas):
    """
    canvas **get_bounds** vertices

    returns the minimal polygon traced by the top-level operations of the canvas,
    as a list of points. The walk starts at the start point; a **moveto**
    relocates it and forgets the running slope. Each **lineto** whose slope
    matches the previous segment's slope replaces the last vertex instead of
    appending a new one, so collinear runs collapse into a single edge.
    Vertical segments have a slope of signed infinity.

    The result is cached on the canvas until the next recorded operation,
    **reset** or transform.

    **See Also**: **infill**, **path_extent**
    """
    if canvas._bounds is not None:
        return canvas._bounds

    bounds = []
    current = canvas.start_point
    current_slope = None
    for op in canvas.operations:
        if isinstance(op, tf.MoveTo):
            current = op.p
            current_slope = None
        elif isinstance(op, tf.LineTo):
            new_slope = _slope(current.x, current.y, op.p.x, op.p.y)
            if bounds and new_slope == current_slope:
                bounds[-1] = op.p
            else:
                bounds.append(op.p)
            current = op.p
            current_slope = new_slope

    canvas._bounds = bounds
    return bounds


def path_extent(vertices):
    """Return ``(min_x, min_y, max_x, max_y)`` of a vertex list, or ``None`` when it is empty."""
    if not vertices:
        return None
    xs = [p.x for p in vertices]
    ys = [p.y for p in vertices]
    return min(xs), min(ys), max(xs), max(ys)


def _flatten_quad_curve(p0, p1, p2):
    """
    Flatten a quadratic Bezier curve into lattice points.

    The curve is sampled at ``t = i / 10``; the sample at ``t = 0`` is the
    current point itself and is skipped. Coordinates are rounded half-up.

    Args:
        p0: Current point (start of the curve)
        p1: Control point
        p2: End point

    Returns:
        List of ``(x, y)`` tuples for ``i = 1..9``
    """
    nseg = tf.QUAD_SEGMENTS
    points = []
    for i in range(1, nseg):
        t = i / nseg
        a = (1 - t) ** 2
        b = 2 * t * (1 - t)
        c = t ** 2
        x = tf.round_half_up(a * p0.x + b * p1.x + c * p2.x)
        y = tf.round_half_up(a * p0.y + b * p1.y + c * p2.y)
        points.append((x, y))
    return points


def _cubic_segment_count():
    """Half the surface diagonal, in cells."""
    cols, lines = surface.get_size()
    return math.floor(math.sqrt(cols * cols + lines * lines) / 2)


def _flatten_cubic_bezier_curve(p0, p1, p2, p3):
    """
    Flatten a cubic Bezier curve into lattice points.

    The number of samples is proportional to the size of the output surface
    rather than to the length of the curve, so every curve is equally smooth
    at the current terminal resolution. Samples are taken at ``t = i / nseg``
    for ``i = 0..nseg-1`` and floored onto the lattice.

    Args:
        p0: Current point (start of the curve)
        p1, p2: Control points
        p3: End point

    Returns:
        List of ``(x, y)`` tuples
    """
    nseg = _cubic_segment_count()
    points = []
    for i in range(nseg):
        t = i / nseg
        a = (1 - t) ** 3
        b = 3 * t * (1 - t) ** 2
        c = 3 * t ** 2 * (1 - t)
        d = t ** 3
        x = math.floor(a * p0.x + b * p1.x + c * p2.x + d * p3.x)
        y = math.floor(a * p0.y + b * p1.y + c * p2.y + d * p3.y)
        points.append((x, y))
    return points
