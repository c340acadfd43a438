# gpsearch/__init__.py

import logging

__version__ = "1.0.0"

logger = logging.getLogger(__name__)
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    logger.addHandler(h)
logger.setLevel(logging.INFO)

from .configuration import SearchConfig, load_config
from .space import SearchSpace
from .surrogate import GaussianProcessSurrogate, rbf_kernel
from .acquisition import expected_improvement
from .encoding import ParameterEncoder
from .random_state import RandomState
from .trials import Domain, Observation, TrialRecord, Trials, TrialState
from .optimizers.bayesian import BayesianSearch
from .optimizers.random import RandomSearch
from .search import bayesian_search, random_search, sample

__all__ = [
    "SearchConfig",
    "load_config",
    "SearchSpace",
    "GaussianProcessSurrogate",
    "rbf_kernel",
    "expected_improvement",
    "ParameterEncoder",
    "RandomState",
    "Domain",
    "Observation",
    "TrialRecord",
    "Trials",
    "TrialState",
    "BayesianSearch",
    "RandomSearch",
    "bayesian_search",
    "random_search",
    "sample",
]
