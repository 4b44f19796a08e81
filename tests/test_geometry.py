# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

""" Unit tests for the lattice point, size and matrix value types. """

import math

import pytest

from termforge.core import error as tf_error
from termforge.core import surface
from termforge.core import types as tf


class _XY:
    def __init__(self, x, y):
        self.x = x
        self.y = y


def test_point_rounds_half_up() -> None:
    assert tuple(tf.Point(2.5, 3.4)) == (3, 3)
    assert tuple(tf.Point(0.49, 1.5)) == (0, 2)
    assert tuple(tf.Point(-0.4, 0)) == (0, 0)


@pytest.mark.parametrize("x, y", [(80, 0), (0, 24), (-1, 0), (0, -0.6), (500, 500)])
def test_point_outside_surface(x, y) -> None:
    with pytest.raises(tf_error.OutOfBoundsError):
        tf.Point(x, y)


NON_FINITE = [
    (math.inf, 0, tf_error.OutOfBoundsError),
    (0, -math.inf, tf_error.OutOfBoundsError),
    (math.nan, 0, tf_error.InvalidArgumentError),
    (1, float("nan"), tf_error.InvalidArgumentError),
]


@pytest.mark.parametrize("x, y, error", NON_FINITE)
def test_non_finite_coordinates(x, y, error) -> None:
    """ Infinities and NaNs raise engine errors, never a bare OverflowError. """
    with pytest.raises(error):
        tf.Point(x, y)
    with pytest.raises(error):
        tf.Size(x, y)
    with pytest.raises(error):
        tf.Point.of((x, y))


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_matrix_rejects_non_finite(value) -> None:
    with pytest.raises(tf_error.InvalidArgumentError):
        tf.Matrix(1, 0, 0, 1, value, 0)
    with pytest.raises(tf_error.InvalidArgumentError):
        tf.Matrix.scaling(value)


def test_point_follows_surface_size() -> None:
    with surface.fixed_size(100, 50):
        assert tuple(tf.Point(99, 49)) == (99, 49)
    with pytest.raises(tf_error.OutOfBoundsError):
        tf.Point(99, 49)


@pytest.mark.parametrize("arg", [(3, 4), [3, 4], tf.Size(3, 4), _XY(3, 4)])
def test_point_of_point_likes(arg) -> None:
    assert tuple(tf.Point.of(arg)) == (3, 4)
    assert tuple(tf.Point.of(3, 4)) == (3, 4)


def test_point_of_copies() -> None:
    p = tf.Point(1, 2)
    q = tf.Point.of(p)
    assert q == p
    assert q is not p
    q.x = 5
    assert p.x == 1


@pytest.mark.parametrize("px, y", [("a", None), (1, None), ((1, 2), 3), ((1, 2, 3), None),
                                   ((1, "b"), None), (True, 1)])
def test_point_of_rejects_malformed(px, y) -> None:
    with pytest.raises(tf_error.InvalidArgumentError):
        tf.Point.of(px, y)


def test_point_equality_and_helpers() -> None:
    p = tf.Point(4, 5)
    assert p.equals(4, 5)
    assert p.equals((4, 5))
    assert not p.equals(tf.Point(5, 4))
    assert tf.Point.in_bounds(79, 23)
    assert not tf.Point.in_bounds((80, 23))
    assert tf.Point.center() == tf.Point(40, 12)
    assert tf.Point.center_for(10, 4) == tf.Point(35, 10)
    assert tf.Point.zero() == tf.Point(0, 0)


def test_size_bounds() -> None:
    assert tuple(tf.Size(80, 24)) == (80, 24)
    assert tf.Size.of((2, 3)) == tf.Size(2, 3)
    with pytest.raises(tf_error.OutOfBoundsError):
        tf.Size(81, 1)
    with pytest.raises(tf_error.OutOfBoundsError):
        tf.Size(-1, 1)


def test_matrix() -> None:
    m = tf.Matrix.translation(1, 2).multiply(tf.Matrix.scaling(2))
    assert m == tf.Matrix(2, 0, 0, 2, 2, 4)
    assert tf.Matrix.identity().values() == (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)
    with pytest.raises(tf_error.InvalidArgumentError):
        tf.Matrix(1, 0, 0, "1", 0, 0)


def test_coordinates_of_skips_validation() -> None:
    assert tf.coordinates_of((100, -5)) == (100, -5)
    assert tf.coordinates_of(2.5, 3.5) == (2.5, 3.5)


def test_errors_carry_operation_name() -> None:
    with pytest.raises(tf_error.OutOfBoundsError) as excinfo:
        tf.Point(90, 0)
    assert excinfo.value.func_name == "Point"
    assert excinfo.value.code == tf_error.OUTOFBOUNDS
    assert "/outofbounds in --Point--" in str(excinfo.value)
