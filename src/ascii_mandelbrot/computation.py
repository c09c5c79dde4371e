from __future__ import annotations

from typing import Tuple

import numpy as np
from numba import njit

from .config import Region, RunConfig

__all__ = [
    "mandelbrot_at_point",
    "pixel_to_point",
    "allocate_grid",
    "compute_grid",
    "compute_chunk",
]


@njit
def mandelbrot_at_point(cx: float, cy: float, max_iters: int) -> int:
    """Return the iteration at which the orbit of ``c = cx + i*cy`` leaves radius 2.

    The magnitude is tested before each update, for ``max_iters + 1`` checks in
    total. Points that never escape return ``max_iters``.
    """
    zr = 0.0
    zi = 0.0
    for i in range(max_iters + 1):
        if zr * zr + zi * zi > 4.0:
            return i
        zr, zi = zr * zr - zi * zi + cx, 2.0 * zr * zi + cy
    return max_iters


@njit
def _pixel_to_point(
    img_x: int,
    img_y: int,
    x_min: float,
    x_max: float,
    y_min: float,
    y_max: float,
    width: int,
    height: int,
) -> Tuple[float, float]:
    x_percent = img_x / width
    y_percent = img_y / height
    cx = x_min + (x_max - x_min) * x_percent
    cy = y_min + (y_max - y_min) * y_percent
    return cx, cy


def pixel_to_point(img_x: int, img_y: int, region: Region, width: int, height: int) -> Tuple[float, float]:
    """Map a pixel to its sample point; the far corner of the region is never reached."""
    return _pixel_to_point(img_x, img_y, *map(float, region), width, height)


@njit
def _compute_rows(
    max_iters: int,
    x_min: float,
    x_max: float,
    y_min: float,
    y_max: float,
    width: int,
    height: int,
    start_row: int,
    end_row: int,
) -> np.ndarray:
    rows = np.zeros((end_row - start_row, width), dtype=np.int64)
    for local_y in range(end_row - start_row):
        img_y = start_row + local_y
        for img_x in range(width):
            cx, cy = _pixel_to_point(img_x, img_y, x_min, x_max, y_min, y_max, width, height)
            rows[local_y, img_x] = mandelbrot_at_point(cx, cy, max_iters)
    return rows


def allocate_grid(config: RunConfig) -> np.ndarray:
    return np.zeros((config.height, config.width), dtype=np.int64)


def compute_grid(max_iters: int, region: Region, width: int, height: int) -> np.ndarray:
    """Escape counts for every pixel, shape ``(height, width)``, rows top to bottom."""
    x_min, x_max, y_min, y_max = map(float, region)
    return _compute_rows(max_iters, x_min, x_max, y_min, y_max, width, height, 0, height)


def compute_chunk(config: RunConfig, chunk_id: int) -> Tuple[int, int, np.ndarray]:
    """Compute the block of rows belonging to ``chunk_id``."""
    start_row = chunk_id * config.chunk_size
    end_row = min(start_row + config.chunk_size, config.height)
    if start_row >= config.height:
        return start_row, start_row, np.zeros((0, config.width), dtype=np.int64)

    x_min, x_max, y_min, y_max = config.region
    rows = _compute_rows(
        config.max_iters,
        x_min,
        x_max,
        y_min,
        y_max,
        config.width,
        config.height,
        start_row,
        end_row,
    )
    return start_row, end_row, rows
