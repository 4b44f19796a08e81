# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
ANS Output Device

This device saves the escape stream to a ``.ans`` file. Printing the file
with ``cat`` on a terminal of the same size reproduces the drawing.
"""

import logging
import os

from ...core import surface
from ...core import types as tf
from ..common.ansi_renderer import render_canvas

logger = logging.getLogger(__name__)


def showpage(canvas, pd: dict) -> str:
    """
    Render a canvas to an ANS file.

    Args:
        canvas: Canvas to render
        pd: System parameters (RenderMode, NoClear, ColorDepth,
            OutputDirectory, OutputBaseName)

    Returns:
        Path of the written file
    """
    text = render_canvas(canvas, pd["RenderMode"], pd["NoClear"], pd["ColorDepth"])
    cols, lines = surface.get_size()

    output_dir = pd.get("OutputDirectory", tf.OUTPUT_DIRECTORY)
    base_name = pd.get("OutputBaseName") or "canvas"
    os.makedirs(output_dir, exist_ok=True)
    file_name = os.path.join(output_dir, f"{base_name}.ans")

    with open(file_name, "w", encoding="utf-8", newline="") as f:
        f.write(f"{text}{tf.ESC}{lines};{cols}H")

    logger.info("Wrote %s", file_name)
    return file_name
