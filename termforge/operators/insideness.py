# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
Insideness testing operators: infill, instroke.

These operators test whether a lattice cell lies inside the area that would
be filled, or on the line that would be stroked, without rendering anything.
"""

from ..core import error as tf_error
from ..core import types as tf
from . import insideness_algorithm as algo
from .line_algorithm import segment_contains
from .path_query import get_bounds


def _resolve_point(px, y):
    if isinstance(px, tf.Point) and y is None:
        return px
    try:
        return tf.Point.of(px, y)
    except tf_error.OutOfBoundsError:
        # Off-surface cells are never inside anything
        return None


def infill(canvas, px, y=None) -> bool:
    """
    canvas point **infill** bool

    tests whether the point lies inside the area enclosed by the canvas's
    top-level line segments, using the non-zero winding rule over the
    simplified polygon returned by **get_bounds**. Points outside the polygon's
    extent, or off the surface, are never inside.

    **Errors**: **invalidargument**
    **See Also**: **instroke**, **get_bounds**
    """
    point = _resolve_point(px, y)
    if point is None:
        return False
    return algo.point_in_polygon(get_bounds(canvas), point.x, point.y)


def instroke(canvas, px, y=None, start=None, end=None) -> bool:
    """
    canvas point **instroke** bool
    canvas point start end **instroke** bool

    tests whether the point lies on a stroked line. The first form walks the
    canvas's own line segments in recorded order and searches its subpaths
    recursively, stopping at the first hit. The second form tests membership
    in the cells stepped from start to end only.

    **Errors**: **invalidargument**
    **See Also**: **infill**
    """
    point = _resolve_point(px, y)
    if point is None:
        return False

    if (start is None) != (end is None):
        return tf_error.e(tf_error.INVALIDARGUMENT, instroke.__name__,
                          "start and end must be given together")
    if start is not None:
        start = tf.Point.of(start)
        end = tf.Point.of(end)
        return segment_contains(point.x, point.y, start.x, start.y, end.x, end.y)

    return algo.point_on_stroke(canvas, point.x, point.y)
