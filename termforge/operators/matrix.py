# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import math
from decimal import Decimal, getcontext
from numbers import Real
from typing import Tuple, Union

from ..core import error as tf_error
from ..core import surface
from ..core import types as tf

# Set high precision for decimal arithmetic
getcontext().prec = 50

_QUANTIZE_LIMIT = Decimal("1e30")


def _transform_point(
    transformation_matrix, x: Union[int, float], y: Union[int, float]
) -> Tuple[float, float]:
    # Use high-precision decimal arithmetic so lattice rounding is not
    # thrown off by binary floating-point artifacts (2.4999999 vs 2.5)
    x_dec = Decimal(str(x))
    y_dec = Decimal(str(y))
    a_dec = Decimal(str(transformation_matrix.a))
    b_dec = Decimal(str(transformation_matrix.b))
    c_dec = Decimal(str(transformation_matrix.c))
    d_dec = Decimal(str(transformation_matrix.d))
    e_dec = Decimal(str(transformation_matrix.e))
    f_dec = Decimal(str(transformation_matrix.f))

    xt_dec = a_dec * x_dec + c_dec * y_dec + e_dec
    yt_dec = b_dec * x_dec + d_dec * y_dec + f_dec

    # Far off the lattice; quantizing would exceed the context precision
    if abs(xt_dec) > _QUANTIZE_LIMIT or abs(yt_dec) > _QUANTIZE_LIMIT:
        return float(xt_dec), float(yt_dec)

    # Round to 10 decimal places to eliminate floating-point artifacts
    xt = float(xt_dec.quantize(Decimal('0.0000000001')))
    yt = float(yt_dec.quantize(Decimal('0.0000000001')))

    return xt, yt


def _collect_tree(canvas, points=None, canvases=None, seen=None):
    """Depth-first list of every distinct point owned by the tree, and every canvas in it."""
    if points is None:
        points, canvases, seen = [], [], set()
    canvases.append(canvas)

    def add(point):
        if id(point) not in seen:
            seen.add(id(point))
            points.append(point)

    for op in canvas.operations:
        if isinstance(op, tf.Subpath):
            _collect_tree(op.path, points, canvases, seen)
            continue
        for point in op.points:
            add(point)
    add(canvas.start_point)
    return points, canvases


def _rewrite_tree(canvas, mapper, func_name):
    """
    Move every point of the tree to ``mapper(x, y)``.

    New coordinates are computed and bounds checked for the whole tree before
    the first point is rewritten, so a failure leaves the tree untouched.
    """
    points, canvases = _collect_tree(canvas)

    new_coords = []
    for point in points:
        x, y = mapper(point.x, point.y)
        if not (math.isfinite(x) and math.isfinite(y)):
            return tf_error.e(
                tf_error.OUTOFBOUNDS, func_name,
                f"point {x}, {y} (from {point.x}, {point.y}) is out of bounds",
            )
        x = tf.round_half_up(x)
        y = tf.round_half_up(y)
        if not surface.in_bounds(x, y):
            return tf_error.e(
                tf_error.OUTOFBOUNDS, func_name,
                f"point {x}, {y} (from {point.x}, {point.y}) is out of bounds",
            )
        new_coords.append((x, y))

    for point, (x, y) in zip(points, new_coords):
        point.x = x
        point.y = y

    for owner in canvases:
        owner._bounds = None
        owner._render_location = owner.start_point


def _round_offset(value):
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _as_matrix(matrix, func_name):
    if isinstance(matrix, tf.Matrix):
        return matrix
    if isinstance(matrix, (list, tuple)) and len(matrix) == 6:
        return tf.Matrix(*matrix)
    return tf_error.e(tf_error.INVALIDARGUMENT, func_name,
                      f"expected a Matrix or six numbers, got {matrix!r}")


def transform(canvas, matrix):
    """
    canvas matrix **transform** -

    applies an affine matrix to every point of the canvas and, depth-first, of
    its subpaths and masks, including their start points. Each transformed
    point is rounded half-up onto the lattice and must stay on the surface.

    **Errors**: **outofbounds**, **invalidargument**
    **See Also**: **translate**, **addpath**
    """
    matrix = _as_matrix(matrix, transform.__name__)
    _rewrite_tree(canvas, lambda x, y: _transform_point(matrix, x, y), transform.__name__)


def translate(canvas, dx, dy):
    """
    canvas dx dy **translate** -

    moves every point of the canvas and of its subpaths and masks by (dx, dy).
    The offsets are rounded to whole cells first, halves away from zero, so
    translating by (dx, dy) and then by (-dx, -dy) restores every point exactly.

    **Errors**: **outofbounds**, **invalidargument**
    **See Also**: **transform**
    """
    for value in (dx, dy):
        if not isinstance(value, Real) or isinstance(value, bool):
            return tf_error.e(tf_error.INVALIDARGUMENT, translate.__name__,
                              f"offsets must be numbers, got {value!r}")
        if not math.isfinite(value):
            return tf_error.e(tf_error.INVALIDARGUMENT, translate.__name__,
                              f"offsets must be finite, got {value!r}")
    dx = _round_offset(dx)
    dy = _round_offset(dy)
    _rewrite_tree(canvas, lambda x, y: (x + dx, y + dy), translate.__name__)
