"""Tests for in-process render execution and sweeps."""

import numpy as np

from ascii_mandelbrot.computation import compute_grid
from ascii_mandelbrot.config import RunConfig
from ascii_mandelbrot.execution import compute_report, run_single_render, run_sweep


def test_report_contents():
    config = RunConfig(max_iters=100, width=20, height=10, chunk_size=3)
    report = compute_report(config)

    np.testing.assert_array_equal(
        report.grid, compute_grid(config.max_iters, config.region, config.width, config.height)
    )
    assert len(report.lines) == 10
    assert report.timing["total_chunks"] == 4
    assert [c["start_row"] for c in report.chunks] == [0, 3, 6, 9]
    assert report.chunks[-1]["end_row"] == 9
    assert 0.0 < report.in_set_fraction(config.max_iters) < 1.0

    copied = report.copy_chunks()
    copied[0]["chunk_id"] = 99
    assert report.chunks[0]["chunk_id"] == 0


def test_single_render_prints_only_art(capsys):
    config = RunConfig(max_iters=30, width=12, height=4)
    report = run_single_render(config)
    captured = capsys.readouterr()
    assert captured.out == "".join(line + "\n" for line in report.lines)
    assert captured.err == ""


def test_verbose_render_logs_to_stderr(capsys):
    run_single_render(RunConfig(max_iters=10, width=8, height=2), verbose=True)
    captured = capsys.readouterr()
    assert "[Run] Starting render" in captured.err
    assert "[Timing] Total:" in captured.err
    assert len(captured.out.splitlines()) == 2


def test_sweep_summary(capsys):
    configs = [RunConfig(max_iters=10, width=6, height=2), RunConfig(max_iters=20, width=4, height=3)]
    assert run_sweep(None, configs=configs) == 0
    captured = capsys.readouterr()
    assert "Successful: 2" in captured.err
    assert len(captured.out.splitlines()) == 5


def test_sweep_task_id_out_of_range(capsys):
    configs = [RunConfig(max_iters=10, width=6, height=2)]
    assert run_sweep(None, task_id=3, configs=configs) == 1
    assert "out of range" in capsys.readouterr().err


def test_sweep_without_configs(capsys):
    assert run_sweep(None, configs=[]) == 1
    assert "No configurations" in capsys.readouterr().err
