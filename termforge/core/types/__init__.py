# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
TermForge Types Package - Public API

This package provides the unified types interface for TermForge. All value
types, path operation elements and constants are available through this
single namespace to support the standard import pattern:
`from ..core import types as tf`

**Internal Module Organization:**
- constants.py: render modes, color depths, glyphs and control sequences
- geometry.py: Point, Size and Matrix value types
- paint.py: Color, gradients and Paint
- graphics.py: path operation elements

**Usage:**
```python
from ..core import types as tf

canvas_paint = tf.Paint(tf.Color.RED, tf.Color.BLUE)
start = tf.Point(2, 2)
op = tf.LineTo(tf.Point(2, 6))
```
"""

# constants must load first, color_space imports them while this package initializes
from .constants import *
from .geometry import Matrix, Point, Size, coordinates_of, round_half_up
from .paint import (
    Color, ConicGradient, Gradient, LinearGradient, Paint, RadialGradient,
)
from .graphics import *
