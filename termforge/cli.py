# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
TermForge command line entry point.

Runs each drawing script given on the command line into its own canvas and
hands the canvas to the selected output device.
"""

from __future__ import annotations

import importlib
import logging
import os
import sys

from .cli_args import build_argument_parser, get_output_base_name, infer_device
from .core import color_space
from .core import error as tf_error
from .core import surface
from .core import types as tf
from .core.context_init import apply_system_params, init_system_params
from .core.interpreter import run_script
from .utils import profiler as tf_profiler

logger = logging.getLogger(__name__)

AVAILABLE_DEVICES = ["terminal", "ans", "png"]

_MODES = {
    "paint": tf.MODE_PAINT,
    "clear": tf.MODE_CLEAR,
    "gradient": tf.MODE_GRADIENT,
}


def _load_device(device_name: str):
    return importlib.import_module(f"termforge.devices.{device_name}.{device_name}")


def _read_script(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _apply_args(system_params: dict, args) -> None:
    """Override the default system parameters with command-line flags."""
    if args.size:
        system_params["Columns"], system_params["Rows"] = args.size
    if args.color_depth:
        system_params["ColorDepth"] = args.color_depth
    system_params["RenderMode"] = _MODES[args.mode]
    system_params["NoClear"] = args.no_clear
    if args.cell_width:
        system_params["CellWidth"] = args.cell_width
    if args.cell_height:
        system_params["CellHeight"] = args.cell_height

    output_dir = os.path.dirname(args.outputfile) if args.outputfile else ""
    system_params["OutputDirectory"] = output_dir or args.output_dir


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the TermForge CLI.

    Returns:
        Exit code: 0 for success, 1 for error
    """
    parser = build_argument_parser(AVAILABLE_DEVICES)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    inputfiles = args.inputfiles or ["-"]
    if not args.inputfiles and sys.stdin.isatty():
        parser.print_usage()
        print("TermForge Error: no input file given and nothing piped to stdin.")
        return 1
    if inputfiles.count("-") > 1:
        print("TermForge Error: stdin ('-') can only be read once.")
        return 1

    device = args.device or infer_device(args.outputfile)

    # Performance profiling setup
    profile_output = args.profile_output
    if args.profile and not profile_output:
        profile_output = tf_profiler.generate_default_output_path("cprofile")

    system_params = init_system_params()
    _apply_args(system_params, args)
    apply_system_params(system_params)

    try:
        return _run_termforge(args, inputfiles, device, system_params, profile_output)
    finally:
        surface.set_fixed_size(None)
        color_space.set_color_depth(None)


def _run_termforge(args, inputfiles, device, system_params, profile_output) -> int:
    """Core TermForge execution logic, called from main() with cleanup wrapper."""
    perf_profiler = tf_profiler.initialize_profiler(
        backend_type="cprofile" if args.profile else "none",
        output_path=profile_output,
        enabled=args.profile
    )

    if args.profile:
        print("Performance profiling enabled (backend: cprofile)")
        if profile_output:
            print(f"Results will be saved to: {profile_output}")

    try:
        device_module = _load_device(device)
    except ImportError as e:
        print(f"TermForge Error: Failed to load output device '{device}': {e}")
        return 1

    # -o names the output only when there is a single job
    outputfile = args.outputfile if len(inputfiles) == 1 else None

    exit_code = 0
    for inputfile in inputfiles:
        system_params["OutputBaseName"] = get_output_base_name(outputfile, [inputfile])
        logger.debug("Job %s -> device %s", inputfile, device)
        try:
            text = _read_script(inputfile)
            with perf_profiler.profile_context(inputfile):
                canvas = run_script(text)
                result = device_module.showpage(canvas, system_params)
        except tf_error.TermForgeError as e:
            print(f"TermForge Error: {inputfile}: {e}")
            exit_code = 1
            continue
        except OSError as e:
            print(f"TermForge Error: {e}")
            exit_code = 1
            continue

        if result and args.verbose:
            print(f"Wrote {result}")

    # Generate profiling report
    if args.profile:
        print("\n" + "=" * 50)
        print("PERFORMANCE PROFILING REPORT")
        print("=" * 50)
        perf_profiler.save_results()
        perf_profiler.print_summary()
        print("\nTo analyze detailed results:")
        print(f"   python -m pstats {profile_output}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
