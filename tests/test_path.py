# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

""" Unit tests for recording paths and shapes on a canvas. """

import math

import pytest

from termforge.canvas import Canvas
from termforge.core import error as tf_error
from termforge.core import types as tf
from termforge.operators import path as path_ops


def _coords(canvas):
    return [tuple(op.p) for op in canvas.operations if isinstance(op, (tf.LineTo, tf.MoveTo))]


def test_new_canvas() -> None:
    canvas = Canvas()
    assert canvas.start_point == tf.Point(0, 0)
    assert canvas.current_point == tf.Point(0, 0)
    assert canvas.operations == []
    assert not canvas.is_closed
    assert canvas.paint.stroke_color is tf.Color.DEFAULT
    assert canvas.size == tf.Size(80, 24)


def test_line_to_moves_current_point() -> None:
    canvas = Canvas(start_point=(2, 2))
    canvas.line_to(5, 2)
    canvas.line_to((5, 7))
    assert canvas.current_point == tf.Point(5, 7)
    canvas.move_to(tf.Point(9, 9))
    assert canvas.current_point == tf.Point(9, 9)
    assert _coords(canvas) == [(5, 2), (5, 7), (9, 9)]


def test_close_returns_to_start() -> None:
    canvas = Canvas(start_point=(2, 2))
    canvas.line_to(8, 2)
    canvas.line_to(8, 6)
    canvas.close()
    assert canvas.is_closed
    assert _coords(canvas) == [(8, 2), (8, 6), (2, 2)]


def test_close_at_start_adds_nothing() -> None:
    canvas = Canvas(start_point=(2, 2))
    canvas.line_to(5, 2)
    canvas.line_to(2, 2)
    canvas.close()
    assert len(canvas.operations) == 2


def test_second_close_raises() -> None:
    canvas = Canvas()
    canvas.line_to(4, 4)
    canvas.close()
    with pytest.raises(tf_error.ClosedPathError):
        canvas.close()


@pytest.mark.parametrize("record", [
    lambda c: c.line_to(1, 1),
    lambda c: c.move_to(1, 1),
    lambda c: c.rect((1, 1), (2, 2)),
    lambda c: c.begin_path(),
    lambda c: c.clear_rect((1, 1), (2, 2)),
    lambda c: c.arc((10, 10), 3, 0, math.pi),
    lambda c: c.arc_to((10, 0), (10, 10), 2),
    lambda c: c.quadratic_curve_to((5, 5), (9, 0)),
])
def test_closed_canvas_rejects_operations(record) -> None:
    canvas = Canvas()
    canvas.line_to(4, 4)
    canvas.close()
    count = len(canvas.operations)
    with pytest.raises(tf_error.ClosedPathError):
        record(canvas)
    assert len(canvas.operations) == count


def test_out_of_bounds_leaves_path_unchanged() -> None:
    canvas = Canvas()
    canvas.line_to(3, 3)
    with pytest.raises(tf_error.OutOfBoundsError):
        canvas.line_to(80, 3)
    with pytest.raises(tf_error.InvalidArgumentError):
        canvas.line_to("3", 3)
    assert _coords(canvas) == [(3, 3)]


def test_curves_are_stored_as_line_runs() -> None:
    canvas = Canvas(start_point=(0, 0))
    canvas.quadratic_curve_to((5, 10), (10, 0))
    assert len(canvas.operations) == 9
    assert all(isinstance(op, tf.LineTo) for op in canvas.operations)
    assert canvas.current_point == tf.Point(9, 2)

    canvas.bezier_curve_to((9, 20), (60, 20), (60, 2))
    assert len(canvas.operations) == 9 + 41
    assert not any(isinstance(op, tf.EXPANSION_OPERATIONS) for op in canvas.operations)


def test_curve_out_of_bounds_records_nothing() -> None:
    canvas = Canvas(start_point=(0, 10))
    with pytest.raises(tf_error.OutOfBoundsError):
        canvas.bezier_curve_to((0, 0), (40, 0), (90, 10))
    with pytest.raises(tf_error.OutOfBoundsError):
        canvas.quadratic_curve_to((0, 30), (10, 10))
    assert canvas.operations == []
    canvas.quadratic_curve_to((0, 0), (10, 10))
    assert len(canvas.operations) == 9


def test_rect() -> None:
    canvas = Canvas()
    sub = canvas.rect((2, 2), (4, 4))
    assert isinstance(canvas.operations[0], tf.Subpath)
    assert canvas.operations[0].path is sub
    assert sub.is_closed
    assert sub.start_point == tf.Point(2, 2)
    assert _coords(sub) == [(2, 6), (6, 6), (6, 2), (2, 2)]
    # the subpath carries no points of its own
    assert canvas.current_point == tf.Point(0, 0)


def test_round_rect_with_zero_radius_is_a_rect() -> None:
    sub = Canvas().round_rect((2, 2), (4, 4), 0)
    assert sub.start_point == tf.Point(2, 2)
    assert _coords(sub) == [(6, 2), (6, 6), (2, 6), (2, 2)]


def test_round_rect() -> None:
    sub = Canvas().round_rect((1, 1), (10, 6), [2])
    assert sub.is_closed
    assert sub.start_point == tf.Point(3, 1)
    assert all(isinstance(op, tf.LineTo) for op in sub.operations)
    # four edges and four nine-segment corners, plus a closing line if needed
    assert len(sub.operations) >= 4 + 4 * 9
    coords = _coords(sub)
    assert coords[-1] == (3, 1)
    assert (11, 1) not in coords
    assert (9, 1) in coords and (11, 5) in coords


@pytest.mark.parametrize("radii, start", [([1, 3], (1, 0)), ([2, 1, 0], (2, 0)),
                                          ([0, 1, 2, 3], (0, 0)), ([10], (2, 0))])
def test_round_rect_radii(radii, start) -> None:
    sub = Canvas().round_rect((0, 0), (4, 4) if radii == [10] else (10, 10), radii)
    assert tuple(sub.start_point) == start


@pytest.mark.parametrize("radii", [[], [1, 2, 3, 4, 5], [-1], ["2"], "2", [math.nan]])
def test_round_rect_rejects_bad_radii(radii) -> None:
    canvas = Canvas()
    with pytest.raises(tf_error.InvalidArgumentError):
        canvas.round_rect((0, 0), (10, 10), radii)
    assert canvas.operations == []


def test_full_circle() -> None:
    sub = Canvas().arc((10, 10), 5, 0, 2 * math.pi)
    assert sub.is_closed
    assert sub.start_point == tf.Point(15, 10)
    for x, y in _coords(sub):
        assert abs(math.hypot(x - 10, y - 10) - 5) <= 1
    for cell in [(10, 15), (5, 10), (10, 5)]:
        assert cell in _coords(sub)


def test_arc_direction() -> None:
    clockwise = _coords(Canvas().arc((10, 10), 5, 0, math.pi / 2))
    assert clockwise[-2] == (10, 15)
    assert (10, 5) not in clockwise

    anticlockwise = _coords(Canvas().arc((10, 10), 5, 0, math.pi / 2, True))
    assert (10, 5) in anticlockwise
    assert (5, 10) in anticlockwise


def test_arc_center_may_be_off_surface() -> None:
    sub = Canvas().arc((-2, 10), 5, -0.5, 0.5)
    assert sub.start_point.x >= 0


def test_arc_rejects_bad_arguments() -> None:
    canvas = Canvas()
    with pytest.raises(tf_error.InvalidArgumentError):
        canvas.arc((10, 10), -1, 0, 1)
    with pytest.raises(tf_error.InvalidArgumentError):
        canvas.arc((10, 10), 2, "0", 1)
    with pytest.raises(tf_error.OutOfBoundsError):
        canvas.arc((10, 10), 30, 0, math.pi)
    assert canvas.operations == []


def test_ellipse() -> None:
    sub = Canvas().ellipse((20, 10), 8, 4, 0, 0, 2 * math.pi)
    coords = _coords(sub)
    assert sub.start_point == tf.Point(28, 10)
    for cell in [(20, 14), (12, 10), (20, 6)]:
        assert cell in coords

    rotated = Canvas().ellipse((20, 10), 8, 4, math.pi / 2, 0, 2 * math.pi)
    assert rotated.start_point == tf.Point(20, 18)
    assert (16, 10) in _coords(rotated)


def test_arc_to() -> None:
    canvas = Canvas(start_point=(2, 2))
    canvas.arc_to((10, 2), (10, 10), 3)
    coords = _coords(canvas)
    assert coords[0] == (7, 2)
    assert coords[-1] == (10, 5)
    assert canvas.current_point == tf.Point(10, 5)
    for x, y in coords[1:]:
        assert abs(math.hypot(x - 7, y - 5) - 3) <= 1


TANGENT_ARCS = [
    # right turn, left turn, and an obtuse corner
    ((2, 2, 10, 2, 10, 10, 3), (7, 5), (7, 2), (10, 5)),
    ((2, 10, 10, 10, 10, 2, 3), (7, 7), (7, 10), (10, 7)),
    ((0, 0, 4, 0, 8, 4, 2), (4 - 2 * math.tan(math.pi / 8), 2), None, None),
]


@pytest.mark.parametrize("corner, center, first, second", TANGENT_ARCS)
def test_tangent_arc_geometry(corner, center, first, second) -> None:
    cx, cy, t1, t2, start, end = path_ops._tangent_arc(*corner)
    assert (cx, cy) == pytest.approx(center)
    radius = corner[-1]
    assert math.hypot(t1[0] - cx, t1[1] - cy) == pytest.approx(radius)
    assert math.hypot(t2[0] - cx, t2[1] - cy) == pytest.approx(radius)
    assert math.atan2(t1[1] - cy, t1[0] - cx) == pytest.approx(start)
    assert math.atan2(t2[1] - cy, t2[0] - cx) == pytest.approx(end)
    if first is not None:
        assert t1 == pytest.approx(first)
        assert t2 == pytest.approx(second)


def test_tangent_arc_degenerate_corners() -> None:
    assert path_ops._tangent_arc(2, 2, 2, 2, 8, 8, 3) is None
    assert path_ops._tangent_arc(2, 2, 6, 2, 1, 2, 3) is None


@pytest.mark.parametrize("c2, radius", [((20, 2), 3), ((10, 10), 0)])
def test_arc_to_degenerates_to_a_line(c2, radius) -> None:
    canvas = Canvas(start_point=(2, 2))
    canvas.arc_to((10, 2), c2, radius)
    assert _coords(canvas) == [(10, 2)]


def test_begin_path_and_subpath_at() -> None:
    canvas = Canvas(tf.Paint(tf.Color.RED, tf.Color.BLUE))
    canvas.line_to(4, 4)
    sub = canvas.begin_path()
    assert sub.start_point == tf.Point(4, 4)
    assert sub.paint is canvas.paint
    sub.line_to(8, 4)
    assert canvas.current_point == tf.Point(4, 4)

    other = canvas.subpath_at(10, 10, paint=tf.Paint())
    assert other.start_point == tf.Point(10, 10)
    assert other.paint is not canvas.paint
    assert [type(op) for op in canvas.operations] == [tf.LineTo, tf.Subpath, tf.Subpath]


def test_clear_rect_records_a_mask() -> None:
    canvas = Canvas()
    canvas.line_to(3, 3)
    mask = canvas.clear_rect((1, 1), (3, 3))
    assert isinstance(canvas.operations[-1], tf.MaskSubpath)
    assert canvas.operations[-1].path is mask
    assert mask.is_closed
    assert canvas.current_point == tf.Point(3, 3)


def test_clear_covers_the_surface() -> None:
    canvas = Canvas()
    mask = canvas.clear()
    assert isinstance(canvas.operations[-1], tf.MaskSubpath)
    assert (79, 23) in _coords(mask)


def test_clip() -> None:
    canvas = Canvas()
    other = Canvas(start_point=(5, 5))
    other.line_to(9, 9)
    canvas.clip(other)
    assert isinstance(canvas.operations[-1], tf.MaskSubpath)
    with pytest.raises(tf_error.InvalidArgumentError):
        canvas.clip(canvas)
    with pytest.raises(tf_error.InvalidArgumentError):
        canvas.clip("not a canvas")


def test_add_path() -> None:
    canvas = Canvas()
    other = Canvas(start_point=(5, 5))
    other.line_to(9, 9)
    canvas.add_path(other, tf.Matrix.translation(1, 2))
    assert canvas.operations[-1].path is other
    assert other.start_point == tf.Point(6, 7)
    assert _coords(other) == [(10, 11)]

    sub = canvas.begin_path()
    with pytest.raises(tf_error.InvalidArgumentError):
        sub.add_path(canvas)


def test_reset() -> None:
    canvas = Canvas(start_point=(2, 2))
    canvas.line_to(5, 5)
    canvas.close()
    canvas.reset()
    assert canvas.operations == []
    assert not canvas.is_closed
    assert canvas.current_point == tf.Point(2, 2)
    canvas.reset((7, 7))
    assert canvas.start_point == tf.Point(7, 7)
    canvas.line_to(8, 8)
