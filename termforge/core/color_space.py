# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Terminal Color Space System

Converts RGB colors into SGR foreground sequences for the four terminal color
depth tiers, detects the depth supported by the running terminal, and maps
SGR parameters back to RGB for devices that replay the escape stream.

Depth tiers:
    1  - monochrome, black or white foreground
    4  - 16 colors, SGR 30-37
    8  - 256 colors, SGR 38;5;n (6x6x6 cube plus a 24-step gray ramp)
    24 - truecolor, SGR 38;2;r;g;b
"""

from __future__ import annotations

import logging
import os
import re
from typing import Mapping

from .types.constants import (
    COLOR_DEPTHS, DEPTH_16, DEPTH_256, DEPTH_MONOCHROME, DEPTH_TRUECOLOR
)

logger = logging.getLogger(__name__)

# Standard xterm palette for SGR 30-37
ANSI16_RGB = (
    (0, 0, 0),        # black
    (205, 0, 0),      # red
    (0, 205, 0),      # green
    (205, 205, 0),    # yellow
    (0, 0, 238),      # blue
    (205, 0, 205),    # magenta
    (0, 205, 205),    # cyan
    (229, 229, 229),  # white
)

_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)

DEFAULT_FOREGROUND_RGB = (229, 229, 229)

_color_depth: int | None = None


def _round(value: float) -> int:
    # Halves round up so the tier mapping matches terminal conventions
    return int(value + 0.5)


def rgb_to_ansi256(r: int, g: int, b: int) -> int:
    """Map an RGB color onto the xterm 256-color palette index."""
    if r == g and g == b:
        if r < 8:
            return 16
        if r > 248:
            return 231
        return _round(((r - 8) / 247) * 24) + 232

    return (16
            + 36 * _round(r / 255 * 5)
            + 6 * _round(g / 255 * 5)
            + _round(b / 255 * 5))


def rgb_to_ansi16(r: int, g: int, b: int) -> int:
    """Map an RGB color onto an SGR 30-37 foreground code."""
    return 30 + ((_round(b / 255) << 2)
                 | (_round(g / 255) << 1)
                 | _round(r / 255))


def rgb_to_escape_code(r: int, g: int, b: int, depth: int | None = None) -> str:
    """Encode an RGB color as the SGR parameters (without the leading ESC[)."""
    if depth is None:
        depth = get_color_depth()

    if depth == DEPTH_MONOCHROME:
        # Only black and white, pick whichever is closer
        gray = (r + g + b) / 3
        return "37m" if gray > 127 else "30m"
    elif depth == DEPTH_16:
        # 16-color codes go out in the 256-color form
        return f"38;5;{rgb_to_ansi16(r, g, b)}m"
    elif depth == DEPTH_256:
        return f"38;5;{rgb_to_ansi256(r, g, b)}m"
    # 24-bit, and any unknown depth
    return f"38;2;{r};{g};{b}m"


def ansi256_to_rgb(index: int) -> tuple[int, int, int]:
    """Inverse palette lookup for an xterm 256-color index."""
    if index < 0 or index > 255:
        raise ValueError(f"256-color index out of range: {index}")
    if index < 8:
        return ANSI16_RGB[index]
    if index < 16:
        # Bright variants
        r, g, b = ANSI16_RGB[index - 8]
        return (min(r + 50, 255), min(g + 50, 255), min(b + 50, 255))
    if index < 232:
        index -= 16
        return (_CUBE_LEVELS[index // 36],
                _CUBE_LEVELS[(index // 6) % 6],
                _CUBE_LEVELS[index % 6])
    level = 8 + (index - 232) * 10
    return (level, level, level)


def sgr_to_rgb(params: str) -> tuple[int, int, int] | None:
    """Decode SGR foreground parameters (e.g. ``"38;2;255;0;0"``) to RGB.

    Returns ``None`` for a reset (``"0"`` or empty), which devices treat as
    the default foreground.
    """
    parts = [p for p in params.split(";") if p != ""]
    if not parts or parts == ["0"]:
        return None
    codes = [int(p) for p in parts]
    if codes[0] == 38 and len(codes) >= 5 and codes[1] == 2:
        return (codes[2], codes[3], codes[4])
    if codes[0] == 38 and len(codes) >= 3 and codes[1] == 5:
        return ansi256_to_rgb(codes[2])
    if 30 <= codes[0] <= 37:
        return ANSI16_RGB[codes[0] - 30]
    if codes[0] == 39:
        return DEFAULT_FOREGROUND_RGB
    logger.debug("Ignoring unsupported SGR parameters %r", params)
    return None


_TERM_256_RE = re.compile(r"-256(color)?$", re.IGNORECASE)
_TERM_16_RE = re.compile(
    r"^(screen|xterm|vt100|vt220|rxvt|color|ansi|cygwin|linux|konsole|putty|tmux)",
    re.IGNORECASE,
)


def detect_color_depth(env: Mapping[str, str] | None = None) -> int:
    """Guess the color depth of the attached terminal from its environment."""
    if env is None:
        env = os.environ

    force = env.get("FORCE_COLOR")
    if force is not None:
        if force in ("", "1", "true"):
            return DEPTH_16
        if force == "2":
            return DEPTH_256
        if force == "3":
            return DEPTH_TRUECOLOR
        return DEPTH_MONOCHROME

    if env.get("NO_COLOR"):
        return DEPTH_MONOCHROME

    term = env.get("TERM", "")
    if term == "dumb":
        return DEPTH_MONOCHROME

    colorterm = env.get("COLORTERM", "").lower()
    if colorterm in ("truecolor", "24bit"):
        return DEPTH_TRUECOLOR

    if os.name == "nt" or env.get("TMUX"):
        return DEPTH_TRUECOLOR

    term_program = env.get("TERM_PROGRAM")
    if term_program == "iTerm.app":
        version = env.get("TERM_PROGRAM_VERSION", "0")
        major = version.split(".", 1)[0]
        return DEPTH_TRUECOLOR if major.isdigit() and int(major) >= 3 else DEPTH_256
    if term_program == "Apple_Terminal":
        return DEPTH_256

    if _TERM_256_RE.search(term):
        return DEPTH_256
    if _TERM_16_RE.match(term) or colorterm:
        return DEPTH_16
    return DEPTH_MONOCHROME


def get_color_depth() -> int:
    """The color depth used for encoding, detected once unless overridden."""
    global _color_depth
    if _color_depth is None:
        _color_depth = detect_color_depth()
        logger.debug("Detected terminal color depth: %d bits", _color_depth)
    return _color_depth


def set_color_depth(depth: int | None) -> None:
    """Override the color depth; ``None`` re-enables detection."""
    global _color_depth
    if depth is not None and depth not in COLOR_DEPTHS:
        raise ValueError(f"Unsupported color depth {depth}, expected one of {COLOR_DEPTHS}")
    _color_depth = depth
