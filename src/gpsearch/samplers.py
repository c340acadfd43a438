"""
Space sampler: evaluates a search-space expression tree against a random source.

Every distribution kind is a pure function `(params, rng) -> value` registered
in `HANDLERS`. `choice` recurses into `evaluate` for the option it picks.
"""
from __future__ import annotations
from typing import Any, Callable, Dict

import numpy as np

from .space import Distribution

Handler = Callable[[Dict[str, Any], Any], Any]


def quantize(value: float, q: float) -> float:
    """Rounds `value` to the nearest multiple of `q` (ties go to the even multiple)."""
    return float(np.round(value / q) * q)


def _choice(params, rng):
    options = params["options"]
    idx = rng.randrange(0, len(options), 1)
    return evaluate(options[idx], rng)


def _randint(params, rng):
    return rng.randrange(params.get("low", 0), params["upper"], 1)


def _uniform(params, rng):
    return rng.uniform(params["low"], params["high"])


def _quniform(params, rng):
    return quantize(rng.uniform(params["low"], params["high"]), params["q"])


def _loguniform(params, rng):
    return float(np.exp(rng.uniform(params["low"], params["high"])))


def _qloguniform(params, rng):
    return quantize(np.exp(rng.uniform(params["low"], params["high"])), params["q"])


def _normal(params, rng):
    return rng.gauss(params["mu"], params["sigma"])


def _qnormal(params, rng):
    return quantize(rng.gauss(params["mu"], params["sigma"]), params["q"])


def _lognormal(params, rng):
    return float(np.exp(rng.gauss(params["mu"], params["sigma"])))


def _qlognormal(params, rng):
    return quantize(np.exp(rng.gauss(params["mu"], params["sigma"])), params["q"])


HANDLERS: Dict[str, Handler] = {
    "choice": _choice,
    "randint": _randint,
    "uniform": _uniform,
    "quniform": _quniform,
    "loguniform": _loguniform,
    "qloguniform": _qloguniform,
    "normal": _normal,
    "qnormal": _qnormal,
    "lognormal": _lognormal,
    "qlognormal": _qlognormal,
}


def register_handler(kind: str, handler: Handler) -> None:
    """Adds (or replaces) the handler used for distribution nodes of `kind`."""
    HANDLERS[kind] = handler


def evaluate(expr: Any, rng) -> Any:
    """
    Draws one concrete value from `expr`.

    Dicts keep their key order, lists and tuples keep their element order,
    distribution nodes are replaced by a draw and anything else is returned
    as-is.

    Raises:
        ValueError: If a node's kind has no registered handler.
    """
    if isinstance(expr, Distribution):
        handler = HANDLERS.get(expr.kind)
        if handler is None:
            raise ValueError(f"Unknown distribution kind: {expr.kind!r}")
        return handler(expr.params, rng)
    if isinstance(expr, dict):
        return {key: evaluate(value, rng) for key, value in expr.items()}
    if isinstance(expr, list):
        return [evaluate(item, rng) for item in expr]
    if isinstance(expr, tuple):
        return tuple(evaluate(item, rng) for item in expr)
    return expr
