from __future__ import annotations

from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    def uniform(self) -> float:
        """Return an independent draw from [0, 1)."""
        ...


class NumpyRandom:
    """Default random source; unseeded unless a seed is given."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)

    def uniform(self) -> float:
        return float(self._rng.random())
