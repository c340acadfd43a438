"""
GP-based Bayesian search over structured search spaces.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

import numpy as np

from ..acquisition import get_acquisition
from ..configuration import SearchConfig
from ..encoding import ParameterEncoder
from ..surrogate import GaussianProcessSurrogate
from ..trials import Observation
from .base import BaseSearch

logger = logging.getLogger(__name__)


@dataclass
class CandidatePool:
    """Structured candidates and their flat vectors, index-aligned."""
    candidates: List[Any] = field(default_factory=list)
    vectors: List[np.ndarray] = field(default_factory=list)

    def __len__(self):
        return len(self.candidates)


class BayesianSearch(BaseSearch):
    """
    Gaussian Process surrogate + acquisition-driven candidate selection.

    Before the surrogate has been fit (no usable observations) every
    suggestion is a random draw. Afterwards each suggestion samples a pool of
    `config.n_candidates` configurations, scores them with the acquisition
    function and returns the best one in structured form.

    The surrogate is only refit by `update_surrogate_model`; suggestions made
    in between all share the same fit.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config or SearchConfig()
        self.surrogate = GaussianProcessSurrogate(
            noise=self.config.noise,
            length_scale=self.config.length_scale,
            variance_floor=self.config.variance_floor,
        )
        self.encoder = ParameterEncoder()
        self.observations: List[Observation] = []
        self._acquisition = get_acquisition(self.config.acquisition)

    def observe(self, observations: Iterable[Observation]) -> None:
        """Replaces the observation history."""
        self.observations = list(observations)

    def update_surrogate_model(self) -> None:
        """Refits the surrogate on every observation with a defined objective."""
        usable = [obs for obs in self.observations if obs.objective is not None]
        skipped = len(self.observations) - len(usable)
        if skipped:
            logger.debug("Skipping %d observations without loss or accuracy", skipped)
        X = [self.encoder.flatten(obs.params) for obs in usable]
        y = [obs.objective for obs in usable]
        self.surrogate.fit(X, y)

    def best_observed_value(self) -> float:
        """Lowest observed loss, or +inf when no observation reports one."""
        losses = [obs.loss for obs in self.observations if obs.loss is not None]
        return min(losses) if losses else math.inf

    def generate_candidates(self, expr: Any, rng, n_candidates: Optional[int] = None) -> CandidatePool:
        if n_candidates is None:
            n_candidates = self.config.n_candidates
        pool = CandidatePool()
        for _ in range(n_candidates):
            candidate = self.sample(expr, rng)
            pool.candidates.append(candidate)
            pool.vectors.append(self.encoder.flatten(candidate))
        return pool

    def score(self, vectors: List[np.ndarray]) -> np.ndarray:
        """Acquisition value for each flat vector (higher is more promising)."""
        mean, std = self.surrogate.predict(vectors)
        y_best = self.best_observed_value()
        if self.config.acquisition.lower() == "lcb":
            return self._acquisition(mean, std, y_best, kappa=self.config.kappa)
        return self._acquisition(mean, std, y_best, epsilon=self.config.epsilon)

    def propose(self, expr: Any, rng) -> Any:
        pool = self.generate_candidates(expr, rng)
        scores = self.score(pool.vectors)
        best_idx = int(np.argmax(scores))
        logger.debug("Proposing candidate %d/%d with %s=%.6g",
                     best_idx, len(pool), self.config.acquisition, scores[best_idx])
        return pool.candidates[best_idx]

    def suggest(self, expr: Any, rng) -> Any:
        if not self.observations or not self.surrogate.is_fitted:
            return self.sample(expr, rng)
        return self.propose(expr, rng)

    def add_pending(self, params: Any) -> None:
        """
        Records `params` with the surrogate's predicted mean as its loss and
        refits, so later proposals in the same batch see it as observed.
        """
        mean, _ = self.surrogate.predict([self.encoder.flatten(params)])
        self.observations.append(Observation(params=params, result={"loss": float(mean[0])}))
        self.update_surrogate_model()
