"""
Seedable random source used by the samplers.
"""
from __future__ import annotations
from typing import Optional

import numpy as np


class RandomState:
    """
    Thin wrapper around `np.random.RandomState` exposing the three draws the
    distribution handlers need: `uniform`, `randrange` and `gauss`.

    Two instances built with the same seed produce identical streams.
    """
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rs = np.random.RandomState(seed)

    def uniform(self, low: float, high: float) -> float:
        return float(self._rs.uniform(low, high))

    def randrange(self, low: int, high: int, step: int = 1) -> int:
        """Integer from `range(low, high, step)`, like `random.randrange`."""
        if step == 0:
            raise ValueError("randrange step must not be zero")
        n = (high - low + step - (1 if step > 0 else -1)) // step
        if n <= 0:
            raise ValueError(f"Empty range for randrange({low}, {high}, {step})")
        return int(low + step * self._rs.randint(0, n))

    def gauss(self, mu: float, sigma: float) -> float:
        return float(self._rs.normal(mu, sigma))
