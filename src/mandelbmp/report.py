"""Structured results returned from a render."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np


@dataclass(frozen=True)
class RenderReport:
    """Container for outputs produced by ``run_render``."""

    image: np.ndarray
    iterations: np.ndarray
    max_iter: int
    timing: Dict[str, float] = field(default_factory=dict)

    @property
    def inside_fraction(self) -> float:
        """Share of pixels that never escaped."""
        if self.iterations.size == 0:
            return 0.0
        return float(np.count_nonzero(self.iterations >= self.max_iter)) / self.iterations.size

    def escape_histogram(self) -> List[Dict[str, Any]]:
        counts = np.bincount(self.iterations.ravel(), minlength=self.max_iter + 1)
        return [
            {"iterations": int(n), "pixels": int(count)}
            for n, count in enumerate(counts)
            if count
        ]
