# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
TermForge Types Graphics Module

The path operation elements recorded by a Canvas. The set is closed:

- MoveTo, LineTo - carry one point, executed by the render walk
- QuadCurveTo, CurveTo - carry two and three points; they are expanded into
  LineTo runs against the current point when recorded and never stored
- Subpath, MaskSubpath - carry no points and own a child Canvas; a mask is
  rendered in Clear mode whatever the parent's mode is
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .geometry import Point

if TYPE_CHECKING:
    from ...canvas import Canvas


# Path Elements
class MoveTo(object):
    def __init__(self, p: Point) -> None:
        self.p = p

    @property
    def points(self) -> tuple[Point, ...]:
        return (self.p,)

    def __repr__(self) -> str:
        return f"MoveTo({self.p!r})"


class LineTo(object):
    def __init__(self, p: Point) -> None:
        self.p = p

    @property
    def points(self) -> tuple[Point, ...]:
        return (self.p,)

    def __repr__(self) -> str:
        return f"LineTo({self.p!r})"


class QuadCurveTo(object):
    def __init__(self, p1: Point, p2: Point) -> None:
        self.p1 = p1  # control point
        self.p2 = p2  # end point

    @property
    def points(self) -> tuple[Point, ...]:
        return (self.p1, self.p2)

    def __repr__(self) -> str:
        return f"QuadCurveTo({self.p1!r}, {self.p2!r})"


class CurveTo(object):
    def __init__(self, p1: Point, p2: Point, p3: Point) -> None:
        self.p1 = p1
        self.p2 = p2
        self.p3 = p3

    @property
    def points(self) -> tuple[Point, ...]:
        return (self.p1, self.p2, self.p3)

    def __repr__(self) -> str:
        return f"CurveTo({self.p1!r}, {self.p2!r}, {self.p3!r})"


class Subpath(object):
    def __init__(self, path: Canvas) -> None:
        self.path = path

    @property
    def points(self) -> tuple[Point, ...]:
        return ()

    def __repr__(self) -> str:
        return f"Subpath({len(self.path.operations)} operations)"


class MaskSubpath(Subpath):
    def __repr__(self) -> str:
        return f"MaskSubpath({len(self.path.operations)} operations)"


# Operations expanded at record time rather than stored
EXPANSION_OPERATIONS = (QuadCurveTo, CurveTo)
