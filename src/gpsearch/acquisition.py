"""
Acquisition functions. All of them assume minimization: lower objective values
are better and a higher acquisition score marks a more promising candidate.
"""
from __future__ import annotations
from typing import Callable, Dict

import numpy as np
from scipy.stats import norm


def expected_improvement(mu, sigma, y_best: float, epsilon: float = 1e-9) -> np.ndarray:
    """
    Expected reduction below `y_best` under a Gaussian posterior.

    Args:
        mu: Posterior means, one per candidate.
        sigma: Posterior standard deviations, parallel to `mu`.
        y_best: Best (lowest) objective value observed so far. `+inf` makes
            every score `+inf`.
        epsilon: Added to `sigma` to keep the division finite.

    Returns:
        np.ndarray of non-negative scores.
    """
    mu = np.asarray(mu, dtype=float)
    s = np.asarray(sigma, dtype=float) + epsilon
    with np.errstate(invalid="ignore"):
        z = (y_best - mu) / s
        ei = s * (z * norm.cdf(z) + norm.pdf(z))
    return np.maximum(ei, 0.0)


def probability_of_improvement(mu, sigma, y_best: float, epsilon: float = 1e-9) -> np.ndarray:
    mu = np.asarray(mu, dtype=float)
    s = np.asarray(sigma, dtype=float) + epsilon
    return norm.cdf((y_best - mu) / s)


def lower_confidence_bound(mu, sigma, y_best: float, kappa: float = 2.576) -> np.ndarray:
    """Negated LCB, so the argmax is the candidate with the lowest optimistic bound."""
    return -(np.asarray(mu, dtype=float) - kappa * np.asarray(sigma, dtype=float))


ACQUISITION_FUNCTIONS: Dict[str, Callable[..., np.ndarray]] = {
    "ei": expected_improvement,
    "pi": probability_of_improvement,
    "lcb": lower_confidence_bound,
}


def get_acquisition(name: str) -> Callable[..., np.ndarray]:
    try:
        return ACQUISITION_FUNCTIONS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown acquisition '{name}'. Available: {', '.join(sorted(ACQUISITION_FUNCTIONS))}") from None
