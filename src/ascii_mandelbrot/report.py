"""Structured results returned from a render."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np


@dataclass(frozen=True)
class RenderReport:
    """Container for outputs produced by ``run_single_render``."""

    grid: np.ndarray
    lines: List[str]
    timing: Dict[str, Any]
    chunks: Optional[List[Dict[str, Any]]]

    def copy_chunks(self) -> Optional[List[Dict[str, Any]]]:
        if self.chunks is None:
            return None
        return [record.copy() for record in self.chunks]

    def in_set_fraction(self, max_iters: int) -> float:
        """Fraction of pixels whose orbit never escaped."""
        if self.grid.size == 0:
            return 0.0
        return float(np.count_nonzero(self.grid == max_iters)) / self.grid.size

    def mean_escape(self) -> float:
        if self.grid.size == 0:
            return 0.0
        return float(self.grid.mean())
