# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Output surface size provider.

The surface is the character-cell lattice that every point must fit in. Its
dimensions are queried live from the terminal on every access, so a resize
between two renders is picked up, unless a fixed size has been set (CLI
``--size``, off-screen devices, tests).
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Generator
from contextlib import contextmanager

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = 80
DEFAULT_ROWS = 24

_fixed_size: tuple[int, int] | None = None


def get_size() -> tuple[int, int]:
    """Return the current ``(columns, rows)`` of the output surface."""
    if _fixed_size is not None:
        return _fixed_size
    size = shutil.get_terminal_size(fallback=(DEFAULT_COLUMNS, DEFAULT_ROWS))
    columns, rows = size.columns, size.lines
    if columns <= 0 or rows <= 0:
        logger.warning("Terminal reported size %dx%d, using %dx%d",
                       columns, rows, DEFAULT_COLUMNS, DEFAULT_ROWS)
        return DEFAULT_COLUMNS, DEFAULT_ROWS
    return columns, rows


def columns() -> int:
    return get_size()[0]


def rows() -> int:
    return get_size()[1]


def set_fixed_size(size: tuple[int, int] | None) -> None:
    """Pin the surface to ``(columns, rows)``; ``None`` restores live queries."""
    global _fixed_size
    if size is not None:
        cols, lines = int(size[0]), int(size[1])
        if cols <= 0 or lines <= 0:
            raise ValueError(f"Surface size must be positive, got {cols}x{lines}")
        size = (cols, lines)
        logger.debug("Surface pinned to %dx%d", cols, lines)
    _fixed_size = size


@contextmanager
def fixed_size(cols: int, lines: int) -> Generator[None, None, None]:
    """Temporarily pin the surface size."""
    previous = _fixed_size
    set_fixed_size((cols, lines))
    try:
        yield
    finally:
        set_fixed_size(previous)


def in_bounds(x: int | float, y: int | float) -> bool:
    """True if the lattice point ``(x, y)`` is addressable on the surface."""
    cols, lines = get_size()
    return 0 <= x < cols and 0 <= y < lines
