"""ASCII Mandelbrot - escape-time fractal rendered as character art."""

__version__ = "1.0.0"

# Core pipeline - lightweight, no MLflow import
from .computation import compute_chunk, compute_grid, mandelbrot_at_point, pixel_to_point
from .config import Region, RunConfig, default_run_config
from .rendering import GLYPH_TABLE, glyph_for, render, render_lines
from .report import RenderReport


# Conditional imports - only loaded when needed
def __getattr__(name):
    """Lazy loading of heavy modules."""
    if name == "log_to_mlflow":
        from .logging import log_to_mlflow

        return log_to_mlflow
    elif name == "load_sweep_configs":
        from .config import load_sweep_configs

        return load_sweep_configs
    elif name == "run_single_render":
        from .execution import run_single_render

        return run_single_render
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "GLYPH_TABLE",
    "Region",
    "RenderReport",
    "RunConfig",
    "compute_chunk",
    "compute_grid",
    "default_run_config",
    "glyph_for",
    "load_sweep_configs",
    "log_to_mlflow",
    "mandelbrot_at_point",
    "pixel_to_point",
    "render",
    "render_lines",
    "run_single_render",
]
