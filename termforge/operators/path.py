# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import math
from numbers import Real

from .. import canvas as tf_canvas
from ..core import error as tf_error
from ..core import types as tf
from . import matrix as matrix_ops
from .path_query import _flatten_cubic_bezier_curve, _flatten_quad_curve, currentpoint


def _apply_operation(canvas, op, func_name="apply_operation"):
    """
    Record ``op`` on ``canvas``.

    MoveTo, LineTo, Subpath and MaskSubpath are stored as they are and executed
    by the render walk. QuadCurveTo and CurveTo are flattened against the
    current point into a run of LineTo operations; only the run is stored,
    so re-rendering replays the same segments and containment only ever sees
    straight lines. Every point of the run is validated before anything is
    appended.
    """
    if canvas._closed:
        return tf_error.e(tf_error.CLOSEDPATH, func_name, "cannot append to a closed path")

    if isinstance(op, tf.QuadCurveTo):
        start = currentpoint(canvas)
        run = [tf.LineTo(tf.Point(x, y)) for x, y in _flatten_quad_curve(start, op.p1, op.p2)]
        canvas.operations.extend(run)
    elif isinstance(op, tf.CurveTo):
        start = currentpoint(canvas)
        run = [tf.LineTo(tf.Point(x, y))
               for x, y in _flatten_cubic_bezier_curve(start, op.p1, op.p2, op.p3)]
        canvas.operations.extend(run)
    else:
        canvas.operations.append(op)

    canvas._bounds = None


def _check_number(value, func_name, what):
    if not isinstance(value, Real) or isinstance(value, bool):
        return tf_error.e(tf_error.INVALIDARGUMENT, func_name, f"{what} must be a number, got {value!r}")
    if math.isnan(value) or math.isinf(value):
        return tf_error.e(tf_error.INVALIDARGUMENT, func_name, f"{what} must be finite, got {value!r}")
    return value


def _check_path(path, func_name):
    if not isinstance(path, tf_canvas.Canvas):
        return tf_error.e(tf_error.INVALIDARGUMENT, func_name, f"expected a Canvas, got {path!r}")
    return path


def _owns(tree, node):
    """True if ``node`` is ``tree`` or any canvas nested inside it."""
    if tree is node:
        return True
    return any(isinstance(op, tf.Subpath) and _owns(op.path, node) for op in tree.operations)


def lineto(canvas, px, y=None):
    """
    canvas point **lineto** -

    appends a straight line segment from the current point to the given point.
    The point becomes the new current point.

    **Errors**: **closedpath**, **outofbounds**, **invalidargument**
    **See Also**: **moveto**, **quadcurveto**, **curveto**, **closepath**
    """
    point = tf.Point.of(px, y)
    _apply_operation(canvas, tf.LineTo(point), lineto.__name__)


def moveto(canvas, px, y=None):
    """
    canvas point **moveto** -

    relocates the current point without drawing. Rendering repositions the
    cursor, and the bounds walk starts a fresh edge run at the new point.

    **Errors**: **closedpath**, **outofbounds**, **invalidargument**
    **See Also**: **lineto**, **subpath_at**
    """
    point = tf.Point.of(px, y)
    _apply_operation(canvas, tf.MoveTo(point), moveto.__name__)


def quadcurveto(canvas, control, end):
    """
    canvas control end **quadcurveto** -

    appends a quadratic Bezier curve from the current point, flattened into
    nine straight segments sampled at t = 0.1 .. 0.9.

    **Errors**: **closedpath**, **outofbounds**, **invalidargument**
    **See Also**: **curveto**, **lineto**
    """
    op = tf.QuadCurveTo(tf.Point.of(control), tf.Point.of(end))
    _apply_operation(canvas, op, quadcurveto.__name__)


def curveto(canvas, control1, control2, end):
    """
    canvas control1 control2 end **curveto** -

    appends a cubic Bezier curve from the current point, flattened into a
    number of straight segments equal to half the surface diagonal.

    **Errors**: **closedpath**, **outofbounds**, **invalidargument**
    **See Also**: **quadcurveto**, **lineto**
    """
    op = tf.CurveTo(tf.Point.of(control1), tf.Point.of(control2), tf.Point.of(end))
    _apply_operation(canvas, op, curveto.__name__)


def closepath(canvas):
    """
    canvas **closepath** -

    closes the canvas by appending a straight line back to its start point when
    the current point differs from it, then marks it closed. A closed canvas
    is filled when rendered and accepts no further operations.

    **Errors**: **closedpath**
    **See Also**: **lineto**, **reset**
    """
    if canvas._closed:
        return tf_error.e(tf_error.CLOSEDPATH, closepath.__name__, "path is already closed")

    if currentpoint(canvas) != canvas.start_point:
        _apply_operation(canvas, tf.LineTo(canvas.start_point.copy()), closepath.__name__)
    canvas._closed = True


def beginpath(canvas, paint=None):
    """
    canvas [paint] **beginpath** subpath

    creates a child canvas starting at the current point, records it as a
    subpath and returns it. The child shares the parent's paint unless one is
    given.

    **Errors**: **closedpath**
    **See Also**: **subpath_at**, **addpath**
    """
    start = currentpoint(canvas).copy()
    subpath = type(canvas)(paint if paint is not None else canvas.paint, start)
    _apply_operation(canvas, tf.Subpath(subpath), beginpath.__name__)
    return subpath


def subpath_at(canvas, px, y=None, paint=None):
    """
    canvas point [paint] **subpath_at** subpath

    creates a child canvas starting at the given point, records it as a
    subpath and returns it.

    **Errors**: **closedpath**, **outofbounds**, **invalidargument**
    **See Also**: **beginpath**
    """
    start = tf.Point.of(px, y)
    subpath = type(canvas)(paint if paint is not None else canvas.paint, start)
    _apply_operation(canvas, tf.Subpath(subpath), subpath_at.__name__)
    return subpath


def _rect_corners(start, size):
    # anticlockwise on screen: down the left edge first
    return [
        tf.Point(start.x, start.y + size.height),
        tf.Point(start.x + size.width, start.y + size.height),
        tf.Point(start.x + size.width, start.y),
    ]


def rect(canvas, start, size):
    """
    canvas start size **rect** subpath

    records a closed rectangular subpath with its top left corner at start.
    The outline runs down the left edge, along the bottom, up the right edge
    and back along the top.

    **Errors**: **closedpath**, **outofbounds**, **invalidargument**
    **See Also**: **roundrect**, **clearrect**
    """
    start = tf.Point.of(start)
    size = tf.Size.of(size)
    corners = _rect_corners(start, size)

    subpath = subpath_at(canvas, start)
    for corner in corners:
        lineto(subpath, corner)
    closepath(subpath)
    return subpath


def clearrect(canvas, start, size):
    """
    canvas start size **clearrect** mask

    records a rectangular mask that erases the lattice cells of the rectangle,
    its outline and interior, when rendered. The mask is not a subpath of the
    canvas and is never drawn in color.

    **Errors**: **closedpath**, **outofbounds**, **invalidargument**
    **See Also**: **clip**, **rect**
    """
    if canvas._closed:
        return tf_error.e(tf_error.CLOSEDPATH, clearrect.__name__, "cannot append to a closed path")
    start = tf.Point.of(start)
    size = tf.Size.of(size)
    corners = _rect_corners(start, size)

    mask = type(canvas)(tf.Paint(), start)
    for corner in corners:
        lineto(mask, corner)
    closepath(mask)
    _apply_operation(canvas, tf.MaskSubpath(mask), clearrect.__name__)
    return mask


def clip(canvas, path):
    """
    canvas path **clip** -

    records an existing canvas as a mask: it is rendered in Clear mode wherever
    it falls in the drawing order, erasing what was drawn before it.

    **Errors**: **closedpath**, **invalidargument**
    **See Also**: **clearrect**, **addpath**
    """
    _check_path(path, clip.__name__)
    if _owns(path, canvas):
        return tf_error.e(tf_error.INVALIDARGUMENT, clip.__name__, "a canvas cannot mask itself")
    _apply_operation(canvas, tf.MaskSubpath(path), clip.__name__)


def addpath(canvas, path, matrix=None):
    """
    canvas path [matrix] **addpath** -

    records an existing canvas as a subpath, optionally transforming all of
    its points by matrix first.

    **Errors**: **closedpath**, **outofbounds**, **invalidargument**
    **See Also**: **beginpath**, **transform**
    """
    _check_path(path, addpath.__name__)
    if _owns(path, canvas):
        return tf_error.e(tf_error.INVALIDARGUMENT, addpath.__name__, "a canvas cannot contain itself")
    if canvas._closed:
        return tf_error.e(tf_error.CLOSEDPATH, addpath.__name__, "cannot append to a closed path")
    if matrix is not None:
        matrix_ops.transform(path, matrix)
    _apply_operation(canvas, tf.Subpath(path), addpath.__name__)


def _parse_radii(radii, func_name):
    """Expand 1 to 4 corner radii into (top_left, top_right, bottom_right, bottom_left)."""
    if isinstance(radii, Real) and not isinstance(radii, bool):
        radii = [radii]
    if not isinstance(radii, (list, tuple)) or not 1 <= len(radii) <= 4:
        return tf_error.e(tf_error.INVALIDARGUMENT, func_name,
                          f"radii must be a number or a list of 1 to 4 numbers, got {radii!r}")
    for radius in radii:
        _check_number(radius, func_name, "radius")
        if radius < 0:
            return tf_error.e(tf_error.INVALIDARGUMENT, func_name, f"radius {radius} is negative")

    if len(radii) == 1:
        return radii[0], radii[0], radii[0], radii[0]
    if len(radii) == 2:
        return radii[0], radii[1], radii[0], radii[1]
    if len(radii) == 3:
        return radii[0], radii[1], radii[2], radii[1]
    return radii[0], radii[1], radii[2], radii[3]


def roundrect(canvas, start, size, radii):
    """
    canvas start size radii **roundrect** subpath

    records a closed rectangle with rounded corners as a subpath. radii is a
    single number or a list of one to four numbers:

        [all]
        [top-left and bottom-right, top-right and bottom-left]
        [top-left, top-right and bottom-left, bottom-right]
        [top-left, top-right, bottom-right, bottom-left]

    Radii that do not fit the rectangle are scaled down together until they
    do. Each corner is a quadratic curve whose control point is the corner of
    the rectangle.

    **Errors**: **closedpath**, **outofbounds**, **invalidargument**
    **See Also**: **rect**
    """
    start = tf.Point.of(start)
    size = tf.Size.of(size)
    tl, tr, br, bl = _parse_radii(radii, roundrect.__name__)

    x, y, w, h = start.x, start.y, size.width, size.height
    scale = 1.0
    for side, total in ((w, tl + tr), (w, bl + br), (h, tl + bl), (h, tr + br)):
        if total > side:
            scale = min(scale, side / total)
    tl, tr, br, bl = tl * scale, tr * scale, br * scale, bl * scale

    # (corner, end) pairs for each rounded corner, preceded by the straight edge
    edges = [
        (tf.Point(x + w - tr, y), tr, tf.Point(x + w, y), tf.Point(x + w, y + tr)),
        (tf.Point(x + w, y + h - br), br, tf.Point(x + w, y + h), tf.Point(x + w - br, y + h)),
        (tf.Point(x + bl, y + h), bl, tf.Point(x, y + h), tf.Point(x, y + h - bl)),
        (tf.Point(x, y + tl), tl, tf.Point(x, y), tf.Point(x + tl, y)),
    ]

    subpath = subpath_at(canvas, tf.Point(x + tl, y))
    for edge_end, radius, corner, corner_end in edges:
        lineto(subpath, edge_end)
        if radius > 0:
            quadcurveto(subpath, corner, corner_end)
    closepath(subpath)
    return subpath


def _normalize_sweep(start_angle, end_angle, anticlockwise):
    """Return the end angle adjusted so the sweep runs in the requested direction, capped at one turn."""
    if anticlockwise:
        if start_angle - end_angle >= math.tau:
            return start_angle - math.tau
        while end_angle > start_angle:
            end_angle -= math.tau
    else:
        if end_angle - start_angle >= math.tau:
            return start_angle + math.tau
        while end_angle < start_angle:
            end_angle += math.tau
    return end_angle


def _ellipse_points(cx, cy, radius_x, radius_y, rotation, start_angle, end_angle, anticlockwise):
    """
    Step around an ellipse one degree at a time and collect the lattice points.

    Consecutive samples that land on the same lattice cell are collapsed.
    The first point is the sample at start_angle and the last one is the
    sample at end_angle.
    """
    cos_r = math.cos(rotation)
    sin_r = math.sin(rotation)

    def lattice_point(angle):
        dx = radius_x * math.cos(angle)
        dy = radius_y * math.sin(angle)
        return tf.Point(cx + dx * cos_r - dy * sin_r, cy + dx * sin_r + dy * cos_r)

    end_angle = _normalize_sweep(start_angle, end_angle, anticlockwise)
    step = -tf.ARC_STEP if anticlockwise else tf.ARC_STEP
    # small epsilon so a sweep of exactly n degrees takes n steps
    steps = int(abs(end_angle - start_angle) / tf.ARC_STEP + 1e-9)

    points = [lattice_point(start_angle)]
    for i in range(1, steps + 1):
        point = lattice_point(start_angle + i * step)
        if point != points[-1]:
            points.append(point)
    last = lattice_point(end_angle)
    if last != points[-1]:
        points.append(last)
    return points


def _record_closed_run(canvas, points):
    subpath = subpath_at(canvas, points[0])
    for point in points[1:]:
        lineto(subpath, point)
    closepath(subpath)
    return subpath


def arc(canvas, center, radius, start_angle, end_angle, anticlockwise=False):
    """
    canvas center r angle1 angle2 [anticlockwise] **arc** subpath

    records a circular arc centred at center with radius r as a closed subpath.
    Angles are in radians, measured from the positive x axis towards positive
    y (downwards on screen). The arc is stepped one degree at a time, clockwise
    on screen unless anticlockwise is set, and a sweep of a full turn or more
    draws the whole circle. The center itself may lie off the surface but
    every point of the arc must lie on it.

    **Errors**: **closedpath**, **outofbounds**, **invalidargument**
    **See Also**: **ellipse**, **arcto**
    """
    cx, cy = tf.coordinates_of(center, None, arc.__name__)
    _check_number(radius, arc.__name__, "radius")
    _check_number(start_angle, arc.__name__, "start angle")
    _check_number(end_angle, arc.__name__, "end angle")
    if radius < 0:
        return tf_error.e(tf_error.INVALIDARGUMENT, arc.__name__, f"radius {radius} is negative")
    if canvas._closed:
        return tf_error.e(tf_error.CLOSEDPATH, arc.__name__, "cannot append to a closed path")

    points = _ellipse_points(cx, cy, radius, radius, 0.0, start_angle, end_angle, anticlockwise)
    return _record_closed_run(canvas, points)


def ellipse(canvas, center, radius_x, radius_y, rotation, start_angle, end_angle, anticlockwise=False):
    """
    canvas center rx ry rotation angle1 angle2 [anticlockwise] **ellipse** subpath

    records an elliptical arc as a closed subpath. The ellipse has radii rx and
    ry along its own axes, which are rotated by rotation radians about center.
    Stepping follows **arc**.

    **Errors**: **closedpath**, **outofbounds**, **invalidargument**
    **See Also**: **arc**
    """
    cx, cy = tf.coordinates_of(center, None, ellipse.__name__)
    for value, what in ((radius_x, "x radius"), (radius_y, "y radius"), (rotation, "rotation"),
                        (start_angle, "start angle"), (end_angle, "end angle")):
        _check_number(value, ellipse.__name__, what)
    if radius_x < 0 or radius_y < 0:
        return tf_error.e(tf_error.INVALIDARGUMENT, ellipse.__name__,
                          f"radii {radius_x}, {radius_y} must not be negative")
    if canvas._closed:
        return tf_error.e(tf_error.CLOSEDPATH, ellipse.__name__, "cannot append to a closed path")

    points = _ellipse_points(cx, cy, radius_x, radius_y, rotation, start_angle, end_angle, anticlockwise)
    return _record_closed_run(canvas, points)


def _tangent_arc(x0, y0, x1, y1, x2, y2, r):
    """
    The arc of radius r that turns the corner x0,y0 -> x1,y1 -> x2,y2.

    Returns ``(cx, cy, (xt1, yt1), (xt2, yt2), start_angle, end_angle)``, or
    None when a leg has no length or the legs run along one line.
    """
    len1 = math.hypot(x0 - x1, y0 - y1)
    len2 = math.hypot(x2 - x1, y2 - y1)
    if len1 < 1e-10 or len2 < 1e-10:
        return None

    # unit legs pointing away from the corner
    u1x, u1y = (x0 - x1) / len1, (y0 - y1) / len1
    u2x, u2y = (x2 - x1) / len2, (y2 - y1) / len2
    sin_t = u1x * u2y - u1y * u2x
    cos_t = u1x * u2x + u1y * u2y
    if abs(sin_t) < 1e-8:
        return None

    # r / tan(theta / 2), the corner-to-tangent distance along both legs
    reach = r * (1.0 + cos_t) / abs(sin_t)
    t1 = (x1 + u1x * reach, y1 + u1y * reach)
    t2 = (x1 + u2x * reach, y1 + u2y * reach)

    # centre lies r from the first tangent point, on the inside of the turn
    side = math.copysign(r, sin_t)
    cx = t1[0] - u1y * side
    cy = t1[1] + u1x * side

    return (cx, cy, t1, t2,
            math.atan2(t1[1] - cy, t1[0] - cx),
            math.atan2(t2[1] - cy, t2[0] - cx))


def arcto(canvas, control1, control2, radius):
    """
    canvas control1 control2 r **arcto** -

    appends an arc of radius r tangent to the line from the current point to
    control1 and to the line from control1 to control2, preceded by a straight
    line from the current point to the first tangent point. The arc is stepped
    one degree at a time along the short way round and ends on the second
    tangent point, which becomes the current point.

    When the points are collinear, or r is zero, a straight line to control1
    is appended instead.

    **Errors**: **closedpath**, **outofbounds**, **invalidargument**
    **See Also**: **arc**, **lineto**
    """
    p1 = tf.Point.of(control1)
    p2 = tf.Point.of(control2)
    _check_number(radius, arcto.__name__, "radius")
    if radius < 0:
        return tf_error.e(tf_error.INVALIDARGUMENT, arcto.__name__, f"radius {radius} is negative")
    if canvas._closed:
        return tf_error.e(tf_error.CLOSEDPATH, arcto.__name__, "cannot append to a closed path")

    p0 = currentpoint(canvas)
    result = None
    if radius > 0:
        result = _tangent_arc(p0.x, p0.y, p1.x, p1.y, p2.x, p2.y, radius)
    if result is None:
        lineto(canvas, p1)
        return

    cx, cy, first, second, start_angle, end_angle = result

    # The tangent arc always takes the short way round
    sweep = (end_angle - start_angle + math.pi) % math.tau - math.pi
    step = math.copysign(tf.ARC_STEP, sweep)
    steps = int(abs(sweep) / tf.ARC_STEP + 1e-9)

    points = [tf.Point(*first)]
    for i in range(1, steps + 1):
        angle = start_angle + i * step
        point = tf.Point(cx + radius * math.cos(angle), cy + radius * math.sin(angle))
        if point != points[-1]:
            points.append(point)
    last = tf.Point(*second)
    if last != points[-1]:
        points.append(last)

    # everything is validated, record the run
    if points[0] == p0:
        points = points[1:]
    for point in points:
        _apply_operation(canvas, tf.LineTo(point), arcto.__name__)


def reset(canvas, start=None):
    """
    canvas [start] **reset** -

    discards every recorded operation and reopens the canvas, optionally
    moving its start point. The cached bounds are dropped.

    **Errors**: **outofbounds**, **invalidargument**
    **See Also**: **closepath**
    """
    if start is not None:
        canvas.start_point = tf.Point.of(start)
    canvas.operations = []
    canvas._closed = False
    canvas._render_location = canvas.start_point
    canvas._bounds = None
