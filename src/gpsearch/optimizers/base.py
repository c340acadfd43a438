"""
Defines the base interface for all search algorithms.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any

from ..samplers import evaluate


class BaseSearch(ABC):
    """
    Abstract base class for search algorithms.

    Subclasses decide how the next configuration is chosen (`suggest`); the
    shared `sample` method draws a plain random configuration from the space.
    """

    def sample(self, expr: Any, rng) -> Any:
        """Draws one configuration from `expr` at random."""
        return evaluate(expr, rng)

    @abstractmethod
    def suggest(self, expr: Any, rng) -> Any:
        """
        Suggest the next configuration to evaluate.

        Args:
            expr: The search-space expression tree.
            rng: The random source used for every draw.

        Returns:
            A structured configuration drawn from `expr`.
        """
        pass
