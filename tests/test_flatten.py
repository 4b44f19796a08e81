# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

""" Unit tests for Bezier flattening onto the lattice. """

from termforge.core import surface
from termforge.core import types as tf
from termforge.operators.path_query import (
    _cubic_segment_count, _flatten_cubic_bezier_curve, _flatten_quad_curve
)


def _quad_sample(p0, p1, p2, t):
    a, b, c = (1 - t) ** 2, 2 * t * (1 - t), t ** 2
    return a * p0.x + b * p1.x + c * p2.x, a * p0.y + b * p1.y + c * p2.y


def test_quad_curve_samples() -> None:
    p0, p1, p2 = tf.Point(0, 0), tf.Point(5, 10), tf.Point(10, 0)
    points = _flatten_quad_curve(p0, p1, p2)
    assert len(points) == 9
    assert points[0] == (1, 2)
    assert points[-1] == (9, 2)
    # the end point is never reached by the samples
    assert (10, 0) not in points
    assert (0, 0) not in points


def test_quad_curve_first_point_is_near_the_curve() -> None:
    p0, p1, p2 = tf.Point(3, 20), tf.Point(40, 1), tf.Point(70, 18)
    x, y = _quad_sample(p0, p1, p2, 0.1)
    fx, fy = _flatten_quad_curve(p0, p1, p2)[0]
    assert abs(fx - x) <= 1 and abs(fy - y) <= 1


def test_flattening_is_deterministic() -> None:
    p = [tf.Point(1, 1), tf.Point(20, 22), tf.Point(50, 2), tf.Point(70, 20)]
    assert _flatten_quad_curve(*p[:3]) == _flatten_quad_curve(*p[:3])
    assert _flatten_cubic_bezier_curve(*p) == _flatten_cubic_bezier_curve(*p)


def test_cubic_segment_count_follows_surface() -> None:
    # sqrt(80^2 + 24^2) / 2 = 41.76
    assert _cubic_segment_count() == 41
    with surface.fixed_size(10, 10):
        assert _cubic_segment_count() == 7


def test_cubic_curve_samples() -> None:
    p0, p1, p2, p3 = tf.Point(0, 0), tf.Point(0, 20), tf.Point(60, 20), tf.Point(60, 0)
    points = _flatten_cubic_bezier_curve(p0, p1, p2, p3)
    assert len(points) == 41
    assert points[0] == (0, 0)
    assert (60, 0) not in points
    for x, y in points:
        assert 0 <= x <= 60 and 0 <= y <= 15
