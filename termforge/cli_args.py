# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI argument parsing for TermForge.

Handles command-line argument definition, parsing, surface size
specifications, device inference and output file naming.
"""

from __future__ import annotations

import argparse
import os
import re
from importlib import metadata

# output file extension -> device that writes it
DEVICE_EXTENSIONS = {
    ".ans": "ans",
    ".png": "png",
}

RENDER_MODES = ("paint", "clear", "gradient")

_SIZE_RE = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")


def parse_size(spec: str) -> tuple[int, int]:
    """Parse a ``COLSxROWS`` surface size such as ``120x40``.

    Raises:
        ValueError: If the specification is malformed or not positive.
    """
    m = _SIZE_RE.match(spec)
    if not m:
        raise ValueError(f"Invalid size: '{spec}'")
    cols, rows = int(m.group(1)), int(m.group(2))
    if cols < 1 or rows < 1:
        raise ValueError(f"Size must be positive: '{spec}'")
    return cols, rows


def _size_type(spec: str) -> tuple[int, int]:
    try:
        return parse_size(spec)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"{e}, expected COLSxROWS (e.g. 80x24)")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def get_output_base_name(outputfile: str | None, inputfiles: list[str]) -> str:
    """
    Derive output base name from command-line arguments.

    Args:
        outputfile: The -o argument value (or None)
        inputfiles: List of input files (or empty list)

    Returns:
        Base name for output files (without extension)
    """
    if outputfile:
        base = os.path.basename(outputfile)
        return os.path.splitext(base)[0]
    elif inputfiles:
        first = inputfiles[0]
        if first == "-":
            return "stdin"
        base = os.path.basename(first)
        return os.path.splitext(base)[0]
    else:
        return "canvas"


def infer_device(outputfile: str | None) -> str:
    """The device implied by an output file's extension, ``terminal`` otherwise."""
    if outputfile:
        ext = os.path.splitext(outputfile)[1].lower()
        return DEVICE_EXTENSIONS.get(ext, "terminal")
    return "terminal"


def _get_version() -> str:
    """Read the TermForge version from the installed package metadata."""
    try:
        return metadata.version("termforge")
    except metadata.PackageNotFoundError:
        return "unknown"


def build_argument_parser(available_devices: list[str]) -> argparse.ArgumentParser:
    """
    Create and configure the TermForge argument parser.

    Args:
        available_devices: List of available output device names.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="termforge",
        description="TermForge - Terminal Vector Drawing Engine",
        epilog="If no input file is provided, the drawing script is read from stdin.",
    )

    parser.add_argument(
        "-V", "--version", action="version",
        version=f"TermForge {_get_version()}"
    )
    parser.add_argument("inputfiles", nargs="*",
                        help="Drawing scripts to render (each as a separate canvas, '-' for stdin)")
    parser.add_argument(
        "-o", "--output", dest="outputfile", help="Specify output filename"
    )
    parser.add_argument(
        "-d",
        "--device",
        choices=available_devices,
        help=f'Specify output device ({", ".join(available_devices)}); '
             f'inferred from the -o extension when omitted',
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--size", type=_size_type,
        help="Fix the surface size as COLSxROWS instead of querying the terminal"
    )
    parser.add_argument(
        "--color-depth", type=int, choices=[1, 4, 8, 24],
        help="Color depth in bits (default: detected from the environment)"
    )
    parser.add_argument(
        "--mode", choices=RENDER_MODES, default="paint",
        help="Render mode (default: paint)"
    )
    parser.add_argument(
        "--no-clear", action="store_true",
        help="Draw over the current screen contents instead of clearing first"
    )

    # Performance profiling options
    parser.add_argument(
        "--profile", action="store_true",
        help="Enable performance profiling (cprofile)"
    )
    parser.add_argument(
        "--profile-output",
        help="Specify output file for profiling results (default: auto-generated)"
    )
    parser.add_argument(
        "--output-dir", dest="output_dir", default="tf_output",
        help="Specify output directory (default: tf_output)"
    )
    parser.add_argument(
        "--cell-width", type=_positive_int,
        help="Pixel width of one character cell for the png device (default: 8)"
    )
    parser.add_argument(
        "--cell-height", type=_positive_int,
        help="Pixel height of one character cell for the png device (default: 16)"
    )

    return parser
