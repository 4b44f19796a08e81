# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
TermForge Types Constants Module

Constants shared by the path model, the render pipeline and the devices:
render modes, color depth tiers, glyphs and the terminal control sequences
that make up the wire format.
"""

# Render modes
MODE_PAINT = 0
MODE_CLEAR = 1
MODE_GRADIENT = 2

MODE_NAMES = {
    MODE_PAINT: "Paint",
    MODE_CLEAR: "Clear",
    MODE_GRADIENT: "Gradient",
}

# Color depth tiers (bits per color)
DEPTH_MONOCHROME = 1
DEPTH_16 = 4
DEPTH_256 = 8
DEPTH_TRUECOLOR = 24

COLOR_DEPTHS = (DEPTH_MONOCHROME, DEPTH_16, DEPTH_256, DEPTH_TRUECOLOR)

# Glyphs
GLYPH_FILLED = "█"  # full block
GLYPH_BLANK = " "

# Terminal control sequences
ESC = "\x1b["
CURSOR_HOME = "\x1b[0;0H"
CLEAR_SCREEN = "\x1b[2J"
STYLE_RESET = "\x1b[0m"

# Quadratic curves are always flattened into this many segments
QUAD_SEGMENTS = 10

# Arc and ellipse generation step (radians)
ARC_STEP = 3.141592653589793 / 180

# the output directory
OUTPUT_DIRECTORY = "tf_output"
