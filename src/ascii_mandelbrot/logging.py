"""MLflow logging for Mandelbrot renders."""

from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Optional, Sequence

import mlflow
import pandas as pd
from matplotlib import pyplot as plt

from .config import RunConfig
from .report import RenderReport

EXPERIMENT_NAME = "ascii_mandelbrot"


def log_to_mlflow(
    config: RunConfig,
    report: RenderReport,
    suite_name: str = "default",
) -> Optional[str]:
    """Log a render to MLflow with the text art, a figure and chunk timings.

    If MLFLOW_RUN_ID is set in the environment, the existing run is continued.
    Otherwise a new run is created.

    Args:
        config: Run configuration
        report: Grid, rendered lines, timing stats and chunk table
        suite_name: Name of the sweep suite for tagging/filtering

    Returns:
        The MLflow run id, or None when logging is skipped.
    """
    if os.environ.get("SKIP_MLFLOW"):
        return None

    tracking_uri = _resolve_tracking_uri()
    if tracking_uri:
        mlflow.set_tracking_uri(tracking_uri)
    mlflow.set_experiment(EXPERIMENT_NAME)

    existing_run_id = os.environ.get("MLFLOW_RUN_ID")
    if existing_run_id:
        run_context = mlflow.start_run(run_id=existing_run_id)
    else:
        run_context = mlflow.start_run(run_name=config.run_name)

    with run_context as run:
        mlflow.set_tags({"node_name": os.uname().nodename, "suite": suite_name})

        chunk_records = report.copy_chunks()
        if chunk_records:
            mlflow.log_table(_records_to_table(chunk_records), "chunks.json")

        mlflow.log_params(config.to_dict())
        mlflow.log_metrics(_collect_metrics(config, report))

        mlflow.log_text("\n".join(report.lines) + "\n", "render/mandelbrot.txt")

        fig, ax = plt.subplots(figsize=(8, 8 * config.height / config.width))
        ax.imshow(report.grid, extent=(*config.xlim, config.ylim[1], config.ylim[0]))
        mlflow.log_figure(fig, "figures/mandelbrot.png")
        plt.close(fig)

        print(f"[MLflow] Logged run: {config.run_name} (suite: {suite_name})", file=sys.stderr)
        print(f"[MLflow] Run ID: {run.info.run_id}", file=sys.stderr)
        return run.info.run_id


def _collect_metrics(config: RunConfig, report: RenderReport) -> Dict[str, float]:
    timing = report.timing or {}
    return {
        "wall_time": float(timing.get("wall_time", 0.0)),
        "comp_total": float(timing.get("comp_total", 0.0)),
        "render_time": float(timing.get("render_time", 0.0)),
        "total_chunks": float(timing.get("total_chunks", 0)),
        "in_set_fraction": report.in_set_fraction(config.max_iters),
        "mean_escape": report.mean_escape(),
    }


def _records_to_table(chunk_records: Sequence[Dict[str, Any]]) -> Dict[str, List[Any]]:
    """Convert row-wise chunk records into MLflow table format."""
    frame = pd.DataFrame.from_records(chunk_records)
    return frame.to_dict(orient="list")


def _resolve_tracking_uri() -> Optional[str]:
    return os.environ.get("MLFLOW_TRACKING_URI")
