# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
TermForge Types Geometry Module

Plain geometric value types used by the path model: lattice points, sizes and
2D affine matrices. Points and sizes are validated against the output surface
when they are created; a coordinate outside the lattice is an error, never
silently clamped.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Callable, Union

from .. import error as tf_error
from .. import surface


def round_half_up(value: Union[int, float]) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _check_finite(func_name: str, *values: Union[int, float]) -> None:
    """NaN is a malformed argument; an infinite coordinate lies off every lattice."""
    for value in values:
        if math.isnan(value):
            tf_error.e(tf_error.INVALIDARGUMENT, func_name, f"{value!r} is not a number")
        if math.isinf(value):
            tf_error.e(tf_error.OUTOFBOUNDS, func_name, f"{value!r} is outside the surface")


def _parse_point_like(px: Any, y: Any, callback: Callable, func_name: str):
    """Resolve a point-like argument into two numbers and hand them to ``callback``.

    Accepted forms: two numbers, a Point, a Size, a two-item sequence, or any
    object with numeric ``x`` and ``y`` attributes.
    """
    if _is_number(px):
        if _is_number(y):
            return callback(px, y)
        return tf_error.e(
            tf_error.INVALIDARGUMENT, func_name,
            "if the first argument is a number, the second argument must be a number",
        )
    if y is not None:
        return tf_error.e(
            tf_error.INVALIDARGUMENT, func_name,
            "a second coordinate is only accepted after a numeric first argument",
        )
    if isinstance(px, Point):
        return callback(px.x, px.y)
    if isinstance(px, Size):
        return callback(px.width, px.height)
    if isinstance(px, (tuple, list)):
        if len(px) == 2 and _is_number(px[0]) and _is_number(px[1]):
            return callback(px[0], px[1])
        return tf_error.e(
            tf_error.INVALIDARGUMENT, func_name,
            f"expected a sequence of two numbers, got {px!r}",
        )
    if _is_number(getattr(px, "x", None)) and _is_number(getattr(px, "y", None)):
        return callback(px.x, px.y)
    return tf_error.e(
        tf_error.INVALIDARGUMENT, func_name,
        "expected a Point, Size, number pair, sequence, or object with x and y",
    )


class Point:
    """A lattice point on the output surface.

    Coordinates are rounded half-up to integers and must address a cell of
    the surface: ``0 <= x < columns`` and ``0 <= y < rows``.
    """

    __slots__ = ("x", "y")

    def __init__(self, x: Union[int, float], y: Union[int, float]) -> None:
        if not (_is_number(x) and _is_number(y)):
            tf_error.e(tf_error.INVALIDARGUMENT, "Point",
                       f"coordinates must be numbers, got ({x!r}, {y!r})")
        _check_finite("Point", x, y)
        rx = round_half_up(x)
        ry = round_half_up(y)
        if not surface.in_bounds(rx, ry):
            tf_error.e(tf_error.OUTOFBOUNDS, "Point",
                       f"point {rx}, {ry} is outside the {surface.columns()}x{surface.rows()} surface")
        self.x = rx
        self.y = ry

    def equals(self, px: Any, y: Any = None) -> bool:
        return _parse_point_like(px, y, lambda x, y: self.x == x and self.y == y, "equals")

    def copy(self) -> Point:
        new_point = object.__new__(Point)
        new_point.x = self.x
        new_point.y = self.y
        return new_point

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    __hash__ = None

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"

    @staticmethod
    def zero() -> Point:
        return Point(0, 0)

    @staticmethod
    def center() -> Point:
        """The point at the centre of the surface."""
        cols, lines = surface.get_size()
        return Point(cols / 2, lines / 2)

    @staticmethod
    def center_for(px: Any, y: Any = None) -> Point:
        """The top-left point that centres an object of the given size."""
        cols, lines = surface.get_size()
        return _parse_point_like(
            px, y,
            lambda width, height: Point(cols / 2 - width / 2, lines / 2 - height / 2),
            "center_for",
        )

    @staticmethod
    def in_bounds(px: Any, y: Any = None) -> bool:
        return _parse_point_like(px, y, surface.in_bounds, "in_bounds")

    @staticmethod
    def of(px: Any, y: Any = None) -> Point:
        """Create a new Point from any point-like argument."""
        if isinstance(px, Point) and y is None:
            return px.copy()
        return _parse_point_like(px, y, Point, "of")


class Size:
    """A width/height pair no larger than the output surface."""

    __slots__ = ("width", "height")

    def __init__(self, width: Union[int, float], height: Union[int, float]) -> None:
        if not (_is_number(width) and _is_number(height)):
            tf_error.e(tf_error.INVALIDARGUMENT, "Size",
                       f"dimensions must be numbers, got ({width!r}, {height!r})")
        _check_finite("Size", width, height)
        w = round_half_up(width)
        h = round_half_up(height)
        cols, lines = surface.get_size()
        if not (0 <= w <= cols and 0 <= h <= lines):
            tf_error.e(tf_error.OUTOFBOUNDS, "Size",
                       f"size {w}x{h} does not fit the {cols}x{lines} surface")
        self.width = w
        self.height = h

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Size):
            return NotImplemented
        return self.width == other.width and self.height == other.height

    __hash__ = None

    def __iter__(self):
        yield self.width
        yield self.height

    def __repr__(self) -> str:
        return f"Size({self.width}, {self.height})"

    @staticmethod
    def of(px: Any, y: Any = None) -> Size:
        if isinstance(px, Size) and y is None:
            return px
        return _parse_point_like(px, y, Size, "Size.of")


class Matrix:
    """A 2D affine matrix ``[a b c d e f]``.

    A point maps as ``x' = a*x + c*y + e`` and ``y' = b*x + d*y + f``.
    """

    __slots__ = ("a", "b", "c", "d", "e", "f")

    def __init__(self, a: float = 1.0, b: float = 0.0, c: float = 0.0,
                 d: float = 1.0, e: float = 0.0, f: float = 0.0) -> None:
        for value in (a, b, c, d, e, f):
            if not _is_number(value) or not math.isfinite(value):
                tf_error.e(tf_error.INVALIDARGUMENT, "Matrix",
                           f"matrix components must be finite numbers, got {value!r}")
        self.a = a
        self.b = b
        self.c = c
        self.d = d
        self.e = e
        self.f = f

    def values(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    def multiply(self, other: Matrix) -> Matrix:
        """Return ``self`` followed by ``other``."""
        a1, b1, c1, d1, e1, f1 = self.values()
        a2, b2, c2, d2, e2, f2 = other.values()
        return Matrix(
            a1 * a2 + b1 * c2,
            a1 * b2 + b1 * d2,
            c1 * a2 + d1 * c2,
            c1 * b2 + d1 * d2,
            e1 * a2 + f1 * c2 + e2,
            e1 * b2 + f1 * d2 + f2,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.values() == other.values()

    __hash__ = None

    def __repr__(self) -> str:
        return "Matrix(%g, %g, %g, %g, %g, %g)" % self.values()

    @staticmethod
    def identity() -> Matrix:
        return Matrix()

    @staticmethod
    def translation(tx: float, ty: float) -> Matrix:
        return Matrix(1.0, 0.0, 0.0, 1.0, tx, ty)

    @staticmethod
    def scaling(sx: float, sy: float | None = None) -> Matrix:
        if sy is None:
            sy = sx
        return Matrix(sx, 0.0, 0.0, sy, 0.0, 0.0)

    @staticmethod
    def rotation(angle: float) -> Matrix:
        """Rotation by ``angle`` radians about the origin."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Matrix(cos_a, sin_a, -sin_a, cos_a, 0.0, 0.0)


def coordinates_of(px: Any, y: Any = None, func_name: str = "coordinates_of") -> tuple[float, float]:
    """The raw coordinates of a point-like argument, neither rounded nor bounds checked."""
    return _parse_point_like(px, y, lambda x, y: (x, y), func_name)
