# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

""" Shared fixtures: every test runs on a fixed 80x24 truecolor surface. """

import pytest

from termforge.core import color_space, surface


@pytest.fixture(autouse=True)
def fixed_surface():
    surface.set_fixed_size((80, 24))
    color_space.set_color_depth(24)
    yield
    surface.set_fixed_size(None)
    color_space.set_color_depth(None)
