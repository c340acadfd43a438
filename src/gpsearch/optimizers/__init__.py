from .base import BaseSearch
from .bayesian import BayesianSearch, CandidatePool
from .random import RandomSearch

__all__ = ["BaseSearch", "BayesianSearch", "CandidatePool", "RandomSearch"]
