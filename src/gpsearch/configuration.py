"""
Search configuration and YAML loading.
"""
from __future__ import annotations
import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

BATCH_MODES = ("fit_once", "kriging_believer")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SearchConfig:
    """Surrogate, acquisition and batching settings for a Bayesian search session."""
    noise: float = 1e-6
    length_scale: float = 1.0
    variance_floor: float = 1e-9
    epsilon: float = 1e-9
    n_candidates: int = 100
    acquisition: str = "ei"  # 'ei', 'pi' or 'lcb'
    kappa: float = 2.576
    # 'fit_once' reuses one surrogate fit for every proposal in a batch
    batch_mode: str = "fit_once"
    log_level: str = "INFO"

    def __post_init__(self):
        if self.noise < 0:
            raise ValueError(f"noise must be non-negative, got {self.noise}")
        if self.length_scale <= 0:
            raise ValueError(f"length_scale must be positive, got {self.length_scale}")
        if self.n_candidates < 1:
            raise ValueError(f"n_candidates must be at least 1, got {self.n_candidates}")
        if self.acquisition.lower() not in ("ei", "pi", "lcb"):
            raise ValueError(f"Unknown acquisition '{self.acquisition}'")
        if self.batch_mode not in BATCH_MODES:
            raise ValueError(f"batch_mode must be one of {BATCH_MODES}, got '{self.batch_mode}'")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log_level '{self.log_level}'")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SearchConfig":
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Optional[str] = None) -> SearchConfig:
    """
    Loads a `SearchConfig` from a YAML file.

    A missing path or file yields the defaults. The settings may sit at the
    top level of the document or under a `search` key.
    """
    if path is None:
        return SearchConfig()
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file '%s' not found, using defaults", path)
        return SearchConfig()
    if "search" in data:
        data = data["search"] or {}
    return SearchConfig.from_dict(data)


def apply_log_level(config: SearchConfig) -> None:
    """Sets the `gpsearch` package logger to `config.log_level`."""
    logging.getLogger("gpsearch").setLevel(config.log_level.upper())
