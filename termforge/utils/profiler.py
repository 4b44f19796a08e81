# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
TermForge Profiling System

Times drawing jobs (script execution plus device output) with a swappable
backend. The CLI opens one profiling context per input script, so the report
lists each job's wall time next to the cProfile statistics gathered across
all of them.

Usage:
    # Command line
    termforge --profile drawing.tf
    termforge --profile --profile-output=results.prof drawing.tf

    # In code
    perf = initialize_profiler("cprofile", "run.prof", enabled=True)
    with perf.profile_context("drawing.tf"):
        canvas = run_script(text)
        device.showpage(canvas, params)
    perf.save_results()
"""

from __future__ import annotations

import cProfile
import io
import os
import pstats
import time
from abc import ABC, abstractmethod
from collections.abc import Generator
from contextlib import contextmanager

# Modules whose functions make up the engine's hot paths
HOTSPOT_PATTERN = "render|operators|canvas|interpreter"


class ProfilerBackend(ABC):
    """Collects statistics between ``start_profiling`` and ``stop_profiling``."""

    def __init__(self, output_path: str | None = None) -> None:
        self.output_path = output_path
        self.enabled = True

    @abstractmethod
    def start_profiling(self) -> None:
        ...

    @abstractmethod
    def stop_profiling(self) -> None:
        ...

    @abstractmethod
    def generate_report(self) -> str:
        ...

    @abstractmethod
    def write_report(self, stream) -> None:
        """Write the detailed statistics to a text stream."""

    @abstractmethod
    def save_results(self) -> None:
        ...


class CProfileBackend(ProfilerBackend):
    """Deterministic profiling with cProfile; one profile accumulates every job."""

    def __init__(self, output_path: str | None = None) -> None:
        super().__init__(output_path)
        self.profiler = cProfile.Profile()
        self.has_data = False

    def start_profiling(self) -> None:
        self.profiler.enable()

    def stop_profiling(self) -> None:
        self.profiler.disable()
        self.has_data = True

    def stats(self, stream=None) -> pstats.Stats:
        return pstats.Stats(self.profiler, stream=stream)

    def generate_report(self) -> str:
        if not self.has_data:
            return "No profiling data available"
        buffer = io.StringIO()
        self.stats(buffer).sort_stats("cumulative").print_stats(30)
        return buffer.getvalue()

    def write_report(self, stream) -> None:
        stats = self.stats(stream)

        stream.write("Top 30 functions by cumulative time:\n")
        stats.sort_stats("cumulative").print_stats(30)

        stream.write("\nTop 20 functions by own time:\n")
        stats.sort_stats("tottime").print_stats(20)

        stream.write("\nEngine hot paths:\n")
        stats.sort_stats("cumulative").print_stats(HOTSPOT_PATTERN)

    def save_results(self) -> None:
        """Dump the binary stats for ``python -m pstats``."""
        if self.has_data and self.output_path:
            self.profiler.dump_stats(self.output_path)


class NoOpBackend(ProfilerBackend):
    """Stands in when profiling is off."""

    def __init__(self, output_path: str | None = None) -> None:
        super().__init__(output_path)
        self.enabled = False

    def start_profiling(self) -> None:
        pass

    def stop_profiling(self) -> None:
        pass

    def generate_report(self) -> str:
        return "Profiling disabled"

    def write_report(self, stream) -> None:
        pass

    def save_results(self) -> None:
        pass


def report_path_for(output_path: str) -> str:
    """``run.prof`` -> ``run_report.txt``."""
    return os.path.splitext(output_path)[0] + "_report.txt"


class TermForgeProfiler:
    """Owns the backend and the wall time of every profiled job."""

    BACKEND_TYPES = {
        "cprofile": CProfileBackend,
        "none": NoOpBackend,
    }

    def __init__(self,
                 backend_type: str = "none",
                 output_path: str | None = None,
                 enabled: bool = False) -> None:
        self.backend_type = backend_type
        self.output_path = output_path
        self.enabled = enabled
        self.job_times: list[tuple[str, float]] = []
        if enabled:
            backend_class = self.BACKEND_TYPES.get(backend_type, NoOpBackend)
        else:
            backend_class = NoOpBackend
        self.backend = backend_class(output_path)

    @contextmanager
    def profile_context(self, label: str = "canvas") -> Generator[TermForgeProfiler, None, None]:
        """Profile one job; its wall time is recorded under ``label``."""
        if not self.enabled:
            yield self
            return

        started = time.perf_counter()
        self.backend.start_profiling()
        try:
            yield self
        finally:
            self.backend.stop_profiling()
            self.job_times.append((label, time.perf_counter() - started))

    def generate_report(self) -> str:
        return self.backend.generate_report()

    def _format_job_times(self) -> str:
        lines = [f"{'job':<40} {'seconds':>10}"]
        for label, seconds in self.job_times:
            lines.append(f"{label:<40} {seconds:>10.4f}")
        total = sum(seconds for _, seconds in self.job_times)
        lines.append(f"{'total':<40} {total:>10.4f}")
        return "\n".join(lines) + "\n"

    def save_results(self) -> None:
        """Write ``<output>.prof`` and the text report next to it."""
        if not self.enabled or not self.output_path:
            return

        self.backend.save_results()
        with open(report_path_for(self.output_path), "w", encoding="utf-8") as f:
            f.write("TermForge Performance Profiling Report\n")
            f.write("=" * 50 + "\n\n")
            f.write(self._format_job_times())
            f.write("\n")
            self.backend.write_report(f)
        print(f"Profiling results saved to: {self.output_path}")

    def print_summary(self) -> None:
        if not self.enabled:
            print("Profiling was disabled")
            return

        print(f"\nBackend: {self.backend_type}")
        print(f"Output: {self.output_path or 'None'}")
        print(self._format_job_times(), end="")

        if isinstance(self.backend, CProfileBackend) and self.backend.has_data:
            stats = self.backend.stats()
            print(f"Function calls: {stats.total_calls:,} in {stats.total_tt:.3f} seconds")
            print("\nEngine hot paths:")
            stats.sort_stats("cumulative").print_stats(HOTSPOT_PATTERN, 5)


_global_profiler: TermForgeProfiler | None = None


def initialize_profiler(backend_type: str = "none",
                        output_path: str | None = None,
                        enabled: bool = False) -> TermForgeProfiler:
    """Replace the process-wide profiler."""
    global _global_profiler
    _global_profiler = TermForgeProfiler(backend_type, output_path, enabled)
    return _global_profiler


def get_profiler() -> TermForgeProfiler:
    """The process-wide profiler, a disabled one if none was initialized."""
    global _global_profiler
    if _global_profiler is None:
        _global_profiler = TermForgeProfiler()
    return _global_profiler


def generate_default_output_path(backend_type: str) -> str:
    """``termforge_profile_<timestamp>.prof`` in the working directory."""
    timestamp = time.strftime("%Y%m%d_%H%M%S")
    return f"termforge_profile_{backend_type}_{timestamp}.prof"
