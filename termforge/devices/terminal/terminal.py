# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
Terminal Output Device

This device writes the escape stream straight to the attached terminal
(or any text stream), then parks the cursor in the bottom right corner.
"""

import sys

from ..common.ansi_renderer import render_canvas, write_output


def showpage(canvas, pd: dict) -> None:
    """
    Render a canvas to the terminal.

    Args:
        canvas: Canvas to render
        pd: System parameters (RenderMode, NoClear, ColorDepth, Stream)
    """
    text = render_canvas(canvas, pd["RenderMode"], pd["NoClear"], pd["ColorDepth"])
    write_output(text, pd.get("Stream") or sys.stdout)
