"""
Gaussian Process surrogate with a fixed squared-exponential kernel.

Length scale and noise are constants; nothing here is fit by marginal
likelihood. The kernel matrix is factorized with a Cholesky decomposition and
the model degrades to an identity factor when that factorization fails.
"""
from __future__ import annotations
import logging
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy.linalg import LinAlgError, cho_factor, cho_solve, solve_triangular
from sklearn.gaussian_process.kernels import RBF

logger = logging.getLogger(__name__)


def pad_vectors(vectors: Sequence[Sequence[float]], length: int) -> np.ndarray:
    """Stacks `vectors` into an (n, length) array, zero-padding short rows."""
    out = np.zeros((len(vectors), length), dtype=float)
    for i, vec in enumerate(vectors):
        vec = np.asarray(vec, dtype=float).ravel()
        out[i, :vec.size] = vec
    return out


def _max_length(vectors: Sequence[Sequence[float]]) -> int:
    return max((np.asarray(v).size for v in vectors), default=0)


def rbf_kernel(A: Sequence[Sequence[float]], B: Sequence[Sequence[float]], length_scale: float = 1.0) -> np.ndarray:
    """
    Squared-exponential covariance between every row of `A` and every row of `B`.

    `K[i, j] = exp(-0.5 * ||a_i - b_j||^2 / length_scale^2)`.

    Vectors of different lengths (heterogeneous samples from a `choice`) are
    zero-padded to the longest one before differencing. This keeps the
    kernel defined but says nothing meaningful about the padded coordinates.
    """
    m, n = len(A), len(B)
    if m == 0 or n == 0:
        return np.zeros((m, n), dtype=float)
    d = max(_max_length(A), _max_length(B), 1)
    kernel = RBF(length_scale=length_scale, length_scale_bounds="fixed")
    return kernel(pad_vectors(A, d), pad_vectors(B, d))


class GaussianProcessSurrogate:
    """
    Zero-mean GP regression on flat parameter vectors.

    Attributes:
        noise (float): Jitter added to the kernel matrix diagonal.
        length_scale (float): Fixed RBF bandwidth.
        variance_floor (float): Lower clamp on the posterior variance.
        X (list): Training vectors from the last successful `fit`.
        y (np.ndarray): Training targets.
        L (np.ndarray): Lower Cholesky factor of the regularized kernel matrix,
            or the identity when the model is degraded.
        alpha (np.ndarray): Solution of `K_reg @ alpha = y`.
        degraded (bool): True when the last fit fell back to the identity factor.
    """
    def __init__(self, noise: float = 1e-6, length_scale: float = 1.0, variance_floor: float = 1e-9):
        self.noise = float(noise)
        self.length_scale = float(length_scale)
        self.variance_floor = float(variance_floor)
        self.X: list = []
        self.y: np.ndarray = np.zeros(0)
        self.L: Optional[np.ndarray] = None
        self.alpha: Optional[np.ndarray] = None
        self.degraded = False

    @property
    def is_fitted(self) -> bool:
        return len(self.X) > 0

    def kernel(self, A, B) -> np.ndarray:
        return rbf_kernel(A, B, self.length_scale)

    @staticmethod
    def _try_cholesky(K: np.ndarray) -> Optional[np.ndarray]:
        """Returns the lower Cholesky factor of `K`, or None if `K` is not positive-definite."""
        try:
            c, _ = cho_factor(K, lower=True)
        except (LinAlgError, ValueError):
            return None
        return np.tril(c)

    def fit(self, X: Sequence[Sequence[float]], y: Sequence[float]) -> "GaussianProcessSurrogate":
        """
        Refits the model from scratch on `X` and `y`.

        Empty inputs leave the previous state untouched.
        """
        if len(X) == 0 or len(y) == 0:
            logger.debug("fit() called with empty data - keeping previous state")
            return self

        X = [np.asarray(x, dtype=float).ravel() for x in X]
        y = np.asarray(y, dtype=float).ravel()
        finite = np.isfinite(y)
        if not finite.all():
            logger.warning("Dropping %d observations with non-finite targets", int((~finite).sum()))
            X = [x for x, keep in zip(X, finite) if keep]
            y = y[finite]
            if len(X) == 0:
                return self
        K = self.kernel(X, X)
        K[np.diag_indices_from(K)] += self.noise

        L = self._try_cholesky(K)
        if L is None:
            logger.warning(
                "Cholesky decomposition failed for %d observations; falling back to identity factor", len(X))
            self.L = np.eye(len(X))
            self.alpha = y.copy()
            self.degraded = True
        else:
            self.L = L
            self.alpha = cho_solve((L, True), y)
            self.degraded = False

        self.X = X
        self.y = y
        logger.debug("Fitted GP on %d observations (degraded=%s)", len(X), self.degraded)
        return self

    def predict(self, X_new: Sequence[Sequence[float]]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Posterior mean and standard deviation at each query vector.

        A model that was never fit returns mean 0 and std 1 everywhere.
        """
        n = len(X_new)
        if not self.is_fitted:
            return np.zeros(n), np.ones(n)

        Ks = self.kernel(X_new, self.X)
        Kss = self.kernel(X_new, X_new)
        mean = Ks @ self.alpha
        v = solve_triangular(self.L, Ks.T, lower=True)
        var = np.diag(Kss) - np.sum(v * v, axis=0)
        std = np.sqrt(np.maximum(var, self.variance_floor))
        return mean, std
