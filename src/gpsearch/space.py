"""
Search-space expression tree.

A space is any nesting of dicts, lists and tuples whose leaves are either
literal values or `Distribution` nodes built with the helpers below, e.g.::

    space = {
        "lr": loguniform(-7, 0),
        "clf": choice([
            {"type": "svm", "C": uniform(0.1, 10)},
            {"type": "knn", "k": quniform(1, 20, 1)},
        ]),
    }
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, eq=False)
class Distribution:
    """A named distribution node: `kind` selects the handler, `params` feed it."""
    kind: str
    params: Dict[str, Any] = field(default_factory=dict)


def choice(options: List[Any]) -> Distribution:
    if not options:
        raise ValueError("choice requires at least one option")
    return Distribution("choice", {"options": list(options)})


def randint(upper: int, low: int = 0) -> Distribution:
    if upper <= low:
        raise ValueError(f"randint requires upper > low, got low={low}, upper={upper}")
    return Distribution("randint", {"low": int(low), "upper": int(upper)})


def uniform(low: float, high: float) -> Distribution:
    return Distribution("uniform", {"low": low, "high": high})


def quniform(low: float, high: float, q: float) -> Distribution:
    return Distribution("quniform", {"low": low, "high": high, "q": q})


def loguniform(low: float, high: float) -> Distribution:
    """`exp(uniform(low, high))`: bounds are given in log space."""
    return Distribution("loguniform", {"low": low, "high": high})


def qloguniform(low: float, high: float, q: float) -> Distribution:
    return Distribution("qloguniform", {"low": low, "high": high, "q": q})


def normal(mu: float, sigma: float) -> Distribution:
    return Distribution("normal", {"mu": mu, "sigma": sigma})


def qnormal(mu: float, sigma: float, q: float) -> Distribution:
    return Distribution("qnormal", {"mu": mu, "sigma": sigma, "q": q})


def lognormal(mu: float, sigma: float) -> Distribution:
    return Distribution("lognormal", {"mu": mu, "sigma": sigma})


def qlognormal(mu: float, sigma: float, q: float) -> Distribution:
    return Distribution("qlognormal", {"mu": mu, "sigma": sigma, "q": q})


class SearchSpace:
    """
    Defines a flat, named search space one parameter at a time.

    Each `add_*` method registers a distribution node under `name` and returns
    the space, so definitions can be chained. `expr` is the equivalent
    expression tree (an ordered dict), usable anywhere a nested space is.
    """
    def __init__(self):
        self.params: Dict[str, Any] = {}

    def add(self, name: str, node: Any) -> "SearchSpace":
        """Adds an arbitrary node (distribution, literal or nested structure)."""
        self.params[name] = node
        return self

    def add_uniform(self, name: str, low: float, high: float, q: Optional[float] = None) -> "SearchSpace":
        node = uniform(low, high) if q is None else quniform(low, high, q)
        return self.add(name, node)

    def add_loguniform(self, name: str, low: float, high: float, q: Optional[float] = None) -> "SearchSpace":
        node = loguniform(low, high) if q is None else qloguniform(low, high, q)
        return self.add(name, node)

    def add_normal(self, name: str, mu: float, sigma: float, q: Optional[float] = None) -> "SearchSpace":
        node = normal(mu, sigma) if q is None else qnormal(mu, sigma, q)
        return self.add(name, node)

    def add_lognormal(self, name: str, mu: float, sigma: float, q: Optional[float] = None) -> "SearchSpace":
        node = lognormal(mu, sigma) if q is None else qlognormal(mu, sigma, q)
        return self.add(name, node)

    def add_int(self, name: str, upper: int, low: int = 0) -> "SearchSpace":
        return self.add(name, randint(upper, low=low))

    def add_categorical(self, name: str, choices: List[Any]) -> "SearchSpace":
        return self.add(name, choice(choices))

    @property
    def expr(self) -> Dict[str, Any]:
        return dict(self.params)

    def sample(self, rng) -> Dict[str, Any]:
        """Draws one configuration from the space."""
        from .samplers import evaluate
        return evaluate(self.expr, rng)
