# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
TermForge system parameters.

Creates the defaults for a rendering run and applies them to the process-wide
collaborators (the surface size provider and the color depth).
"""

import logging
from typing import Any, Dict

from . import color_space
from . import surface
from . import types as tf

logger = logging.getLogger(__name__)


def init_system_params() -> Dict[str, Any]:
    """
    Initialize system parameters for a rendering run.

    Returns:
        Dict[str, Any]: System parameters dictionary containing:
            - Columns, Rows: Fixed surface size, None to query the terminal
            - ColorDepth: 1, 4, 8 or 24, None to detect it from the environment
            - RenderMode: MODE_PAINT, MODE_CLEAR or MODE_GRADIENT
            - NoClear: Keep the screen contents instead of clearing first
            - OutputDirectory: Where file devices write their output
            - OutputBaseName: File name, without extension, for file devices
            - CellWidth, CellHeight: Pixel size of one cell for the png device
            - Background: RGB background for the png device
            - Stream: Text stream for the terminal device, None for stdout
    """
    return {
        "Columns": None,
        "Rows": None,
        "ColorDepth": None,
        "RenderMode": tf.MODE_PAINT,
        "NoClear": False,
        "OutputDirectory": tf.OUTPUT_DIRECTORY,
        "OutputBaseName": "canvas",
        "CellWidth": 8,
        "CellHeight": 16,
        "Background": (0, 0, 0),
        "Stream": None,
    }


def apply_system_params(system_params: Dict[str, Any]) -> None:
    """Pin the surface size and color depth named by the parameters, if any."""
    columns = system_params.get("Columns")
    rows = system_params.get("Rows")
    if columns and rows:
        surface.set_fixed_size((columns, rows))
    else:
        surface.set_fixed_size(None)

    color_space.set_color_depth(system_params.get("ColorDepth"))
    logger.debug("Surface %dx%d, color depth %d",
                 surface.columns(), surface.rows(), color_space.get_color_depth())
