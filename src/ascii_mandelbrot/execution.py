"""Execution helpers for Mandelbrot CLI workflows."""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from .computation import allocate_grid, compute_chunk
from .config import RunConfig, load_sweep_configs
from .rendering import render_lines
from .report import RenderReport


def log(message: str) -> None:
    """Emit a status line on stderr, keeping stdout for the art."""
    print(message, file=sys.stderr, flush=True)


def _chunk_record(chunk_id: int, start: int, end: int, comp_time: float) -> Dict:
    """Create a uniform chunk metadata record."""
    return {
        "chunk_id": int(chunk_id),
        "start_row": int(start),
        "end_row": int(end - 1) if end > start else int(end),
        "comp_time": comp_time,
    }


def compute_report(config: RunConfig, verbose: bool = False) -> RenderReport:
    """Compute every chunk in order, assemble the grid and render it to lines."""
    start_time = time.perf_counter()
    grid = allocate_grid(config)
    chunk_records: List[Dict] = []
    comp_total = 0.0

    for chunk_id in range(config.total_chunks):
        comp_start = time.perf_counter()
        start, end, rows = compute_chunk(config, chunk_id)
        single_comp = time.perf_counter() - comp_start
        grid[start:end, :] = rows
        comp_total += single_comp
        chunk_records.append(_chunk_record(chunk_id, start, end, single_comp))
        if verbose:
            log(f"[Chunk {chunk_id}] rows {start}:{end} took {single_comp:.4f}s")

    render_start = time.perf_counter()
    lines = render_lines(grid)
    render_time = time.perf_counter() - render_start

    timing = {
        "wall_time": time.perf_counter() - start_time,
        "comp_total": comp_total,
        "render_time": render_time,
        "total_chunks": config.total_chunks,
    }
    return RenderReport(grid, lines, timing, chunk_records)


def run_single_render(
    config: RunConfig,
    suite_name: Optional[str] = None,
    *,
    track: bool = False,
    verbose: bool = False,
) -> RenderReport:
    """Compute a render, print it to stdout and optionally track it in MLflow."""
    if verbose:
        log(
            f"[Run] Starting render '{config.run_name}' "
            f"(max_iters={config.max_iters}, size={config.image_size}, chunks={config.total_chunks})"
        )

    report = compute_report(config, verbose=verbose)

    for line in report.lines:
        print(line)
    sys.stdout.flush()

    if track:
        from .logging import log_to_mlflow

        suite = suite_name or os.environ.get("MANDELBROT_SUITE") or "default"
        if os.environ.get("SKIP_MLFLOW"):
            log("[Run] SKIP_MLFLOW set - skipping MLflow logging.")
        else:
            log("[Run] Render finished, logging to MLflow...")
        log_to_mlflow(config, report, suite)

    if verbose:
        log(f"[Timing] Total: {report.timing['wall_time']:.4f}s")
        log(f"[Run] In-set fraction: {report.in_set_fraction(config.max_iters):.3f}")

    return report


def run_sweep(
    config_path: str | Path | None,
    task_id: Optional[int] = None,
    suite_name: Optional[str] = None,
    configs: Optional[list[RunConfig]] = None,
    descriptor: Optional[str] = None,
    *,
    track: bool = False,
) -> int:
    """Render a sweep defined in a YAML configuration file or a pre-loaded list."""
    if configs is None:
        if config_path is None:
            raise ValueError("config_path must be provided when configs is None")
        configs = load_sweep_configs(config_path)
        descriptor = descriptor or str(config_path)
    else:
        descriptor = descriptor or (str(config_path) if config_path else "sweep")

    if not configs:
        log("ERROR: No configurations found in sweep")
        return 1

    if task_id is not None:
        if task_id < 0 or task_id >= len(configs):
            log(f"ERROR: task-id {task_id} out of range [0, {len(configs) - 1}]")
            return 1
        config = configs[task_id]
        log(f"[Task {task_id}] Running: {config.run_name}")
        ok = _run_config(config, task_id, len(configs), show_progress=False, suite_name=suite_name, track=track)
        return 0 if ok else 1

    log("=" * 70)
    log(f"Running {len(configs)} configurations from {descriptor}")
    log("=" * 70)

    successes = 0
    failures: list[tuple[int, str]] = []

    for idx, cfg in enumerate(configs):
        if _run_config(cfg, idx, len(configs), suite_name=suite_name, track=track):
            successes += 1
        else:
            failures.append((idx, cfg.run_name))

    log("\n" + "=" * 70)
    log("Summary")
    log("=" * 70)
    log(f"Total:      {len(configs)}")
    log(f"Successful: {successes}")
    log(f"Failed:     {len(failures)}")

    if failures:
        log("\nFailed configurations:")
        for idx, name in failures:
            log(f"  [{idx}] {name}")
        return 1

    return 0


def _run_config(
    config: RunConfig,
    config_idx: int,
    total_configs: int,
    *,
    show_progress: bool = True,
    suite_name: Optional[str] = None,
    track: bool = False,
) -> bool:
    """Render a single sweep configuration, reporting failure instead of aborting the sweep."""
    if show_progress:
        log(f"\n[{config_idx + 1}/{total_configs}] {config.run_name}")
        log(
            "    max_iters=%s, size=%s, chunk_size=%s"
            % (config.max_iters, config.image_size, config.chunk_size)
        )

    try:
        report = run_single_render(config, suite_name, track=track)
    except Exception as exc:  # noqa: BLE001
        log(f"    ✗ FAILED: {exc!r}")
        return False

    if show_progress:
        in_set = np.count_nonzero(report.grid == config.max_iters)
        log(f"    ✓ Completed ({in_set} pixels in set)")
    return True
