# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Integer line stepping between two lattice points.

One Bresenham walk serves both consumers: the render pipeline emits a glyph
per stepped cell, and the stroke hit-test asks whether a cell appears in the
stepped sequence. Keeping a single implementation guarantees that a cell is
"on the stroke" exactly when the renderer draws it.
"""

from __future__ import annotations

from collections.abc import Iterator


def _step(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = (dx if dx > dy else -dy) / 2

    x, y = x0, y0
    while True:
        yield x, y
        if x == x1 and y == y1:
            break
        e2 = err
        if e2 > -dx:
            err -= dy
            x += sx
        if e2 < dy:
            err += dx
            y += sy


def plot_line(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    """Yield the lattice cells from ``(x0, y0)`` to ``(x1, y1)``, both inclusive.

    Each cell is produced exactly once and the sequence always ends on the
    endpoint. A zero-length segment yields the single cell.

    Ties in the error term depend on the stepping direction, so the walk is
    always taken from the lexicographically smaller endpoint and reversed
    when needed. Both directions therefore step the same set of cells.
    """
    if (x1, y1) < (x0, y0):
        yield from reversed(list(_step(x1, y1, x0, y0)))
    else:
        yield from _step(x0, y0, x1, y1)


def segment_contains(px: int, py: int, x0: int, y0: int, x1: int, y1: int) -> bool:
    """True if ``(px, py)`` is one of the cells stepped from ``(x0, y0)`` to ``(x1, y1)``."""
    # Cells outside the segment's box can never be stepped
    if not (min(x0, x1) <= px <= max(x0, x1) and min(y0, y1) <= py <= max(y0, y1)):
        return False
    for x, y in plot_line(x0, y0, x1, y1):
        if x == px and y == py:
            return True
    return False
