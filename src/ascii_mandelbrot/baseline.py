"""Baseline Mandelbrot implementation."""

from __future__ import annotations

from typing import List

from .config import Region


def compute_mandelbrot(max_iters: int, region: Region, width: int, height: int) -> List[List[int]]:
    """Compute escape counts for provided bounds using built-in complex numbers."""
    x_min, x_max, y_min, y_max = region
    rows = []

    for img_y in range(height):
        row = []
        for img_x in range(width):
            c = complex(
                x_min + (x_max - x_min) * (img_x / width),
                y_min + (y_max - y_min) * (img_y / height),
            )
            z = 0j
            escaped_at = max_iters
            for i in range(max_iters + 1):
                if abs(z) > 2.0:
                    escaped_at = i
                    break
                z = z * z + c
            row.append(escaped_at)
        rows.append(row)

    return rows
