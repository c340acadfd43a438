"""
A simple random search.
"""
from __future__ import annotations
from typing import Any

from .base import BaseSearch


class RandomSearch(BaseSearch):
    """
    Suggests configurations completely at random.

    Useful as a baseline, and it is what `BayesianSearch` falls back to before
    it has any observations.
    """

    def suggest(self, expr: Any, rng) -> Any:
        return self.sample(expr, rng)
