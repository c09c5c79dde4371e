"""Glyph quantization and text output for escape grids."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

__all__ = ["GLYPH_TABLE", "glyph_for", "quantize", "render_lines", "render"]

# (low, high, glyph), inclusive; the last range is open-ended
GLYPH_TABLE: Tuple[Tuple[int, Optional[int], str], ...] = (
    (0, 2, " "),
    (3, 5, "."),
    (6, 10, "?"),
    (11, 30, "*"),
    (31, 100, "+"),
    (101, 200, "x"),
    (201, 400, "$"),
    (401, 700, "#"),
    (701, None, "%"),
)

_UPPER_BOUNDS = np.array([high for _, high, _ in GLYPH_TABLE if high is not None], dtype=np.int64)
_GLYPHS = np.array([glyph for _, _, glyph in GLYPH_TABLE])


def glyph_for(count: int) -> str:
    for _, high, glyph in GLYPH_TABLE:
        if high is None or count <= high:
            return glyph
    raise AssertionError("glyph table is not exhaustive")


def quantize(grid: np.ndarray | Sequence[Sequence[int]]) -> np.ndarray:
    """Map every escape count in ``grid`` to its glyph."""
    counts = np.asarray(grid, dtype=np.int64)
    return _GLYPHS[np.searchsorted(_UPPER_BOUNDS, counts, side="left")]


def render_lines(grid: np.ndarray | Sequence[Sequence[int]]) -> List[str]:
    """One string per grid row, one glyph per column."""
    if len(grid) == 0:
        return []
    return ["".join(row) for row in quantize(grid)]


def render(grid: np.ndarray | Sequence[Sequence[int]]) -> None:
    """Print the grid to standard output, one line per row."""
    for line in render_lines(grid):
        print(line)
