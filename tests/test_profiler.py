# TermForge - A Terminal Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

""" Tests for the profiling backends. """

from termforge.canvas import Canvas
from termforge.utils import profiler as tf_profiler


def test_disabled_profiler_is_a_no_op() -> None:
    perf = tf_profiler.TermForgeProfiler(backend_type="cprofile", enabled=False)
    assert isinstance(perf.backend, tf_profiler.NoOpBackend)
    with perf.profile_context() as active:
        assert active is perf
    assert perf.generate_report() == "Profiling disabled"


def test_unknown_backend_falls_back() -> None:
    perf = tf_profiler.TermForgeProfiler(backend_type="sampling", enabled=True)
    assert isinstance(perf.backend, tf_profiler.NoOpBackend)


def test_cprofile_results(tmp_path, capsys) -> None:
    output = str(tmp_path / "run.prof")
    perf = tf_profiler.initialize_profiler("cprofile", output, enabled=True)
    assert tf_profiler.get_profiler() is perf
    assert perf.generate_report() == "No profiling data available"

    with perf.profile_context():
        canvas = Canvas()
        canvas.rect((1, 1), (10, 5))
        canvas.render(print_output=False)
    perf.save_results()

    assert (tmp_path / "run.prof").exists()
    report = (tmp_path / "run_report.txt").read_text()
    assert report.startswith("TermForge Performance Profiling Report")
    assert "render_canvas" in report
    assert [label for label, _ in perf.job_times] == ["canvas"]
    assert "Profiling results saved to" in capsys.readouterr().out


def test_default_output_path() -> None:
    path = tf_profiler.generate_default_output_path("cprofile")
    assert path.startswith("termforge_profile_")
    assert path.endswith(".prof")
