# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
PNG Output Device

This device renders a canvas to a PNG snapshot of the terminal. The escape
stream produced by the shared renderer is replayed onto a Pillow image in
which every character cell is a CellWidth x CellHeight block of pixels, so
the image shows exactly what a terminal of the same size would.
"""

import logging
import os
import re
from collections.abc import Iterator

from PIL import Image, ImageDraw

from ...core import color_space
from ...core import surface
from ...core import types as tf
from ..common.ansi_renderer import render_canvas

logger = logging.getLogger(__name__)

# CSI sequence: parameters then a final letter
_CSI_RE = re.compile(r"\x1b\[([0-9;]*)([A-Za-z])")


def replay_escape_stream(text: str) -> Iterator[tuple[str, int, int, tuple[int, int, int] | None]]:
    """
    Interpret an escape stream the way a terminal would.

    Yields ``("clear", 0, 0, None)`` for a full-screen clear and
    ``("cell", x, y, rgb)`` for every printed character, where ``rgb`` is the
    current foreground for a filled glyph and ``None`` for a blank.
    """
    x = y = 0
    foreground = None
    pos = 0
    while pos < len(text):
        match = _CSI_RE.match(text, pos)
        if match:
            params, final = match.group(1), match.group(2)
            if final == "H":
                parts = params.split(";") if params else []
                y = int(parts[0]) if len(parts) > 0 and parts[0] else 0
                x = int(parts[1]) if len(parts) > 1 and parts[1] else 0
            elif final == "J":
                if params == "2":
                    yield "clear", 0, 0, None
            elif final == "m":
                foreground = color_space.sgr_to_rgb(params)
            else:
                logger.debug("Ignoring unsupported control sequence %r", match.group(0))
            pos = match.end()
            continue

        char = text[pos]
        if char == tf.GLYPH_FILLED:
            yield "cell", x, y, foreground or color_space.DEFAULT_FOREGROUND_RGB
        else:
            yield "cell", x, y, None
        x += 1
        pos += 1


def _parse_color(value, default: tuple[int, int, int]) -> tuple[int, int, int]:
    if isinstance(value, tf.Color):
        return value.r, value.g, value.b
    if isinstance(value, (tuple, list)) and len(value) == 3:
        return tuple(int(v) for v in value)
    return default


def render_image(canvas, pd: dict) -> Image.Image:
    """
    Render a canvas into a Pillow image.

    Args:
        canvas: Canvas to render
        pd: System parameters (RenderMode, NoClear, ColorDepth, CellWidth,
            CellHeight, Background)
    """
    text = render_canvas(canvas, pd["RenderMode"], pd["NoClear"], pd["ColorDepth"])

    cols, lines = surface.get_size()
    cell_w = int(pd.get("CellWidth", 8))
    cell_h = int(pd.get("CellHeight", 16))
    background = _parse_color(pd.get("Background"), (0, 0, 0))

    img = Image.new("RGB", (cols * cell_w, lines * cell_h), background)
    draw = ImageDraw.Draw(img)

    for kind, x, y, rgb in replay_escape_stream(text):
        if kind == "clear":
            draw.rectangle((0, 0, img.width - 1, img.height - 1), fill=background)
            continue
        if not (0 <= x < cols and 0 <= y < lines):
            continue
        left = x * cell_w
        top = y * cell_h
        draw.rectangle((left, top, left + cell_w - 1, top + cell_h - 1),
                       fill=rgb if rgb is not None else background)

    return img


def showpage(canvas, pd: dict) -> str:
    """
    Render a canvas to a PNG file.

    Args:
        canvas: Canvas to render
        pd: System parameters, as for ``render_image`` plus OutputDirectory
            and OutputBaseName

    Returns:
        Path of the written file
    """
    img = render_image(canvas, pd)

    output_dir = pd.get("OutputDirectory", tf.OUTPUT_DIRECTORY)
    base_name = pd.get("OutputBaseName") or "canvas"
    os.makedirs(output_dir, exist_ok=True)
    file_name = os.path.join(output_dir, f"{base_name}.png")

    img.save(file_name, "PNG")
    logger.info("Wrote %s (%dx%d)", file_name, img.width, img.height)
    return file_name
