"""
Search drivers: turn new trial ids plus the trial history into new trials.
"""
from __future__ import annotations
import logging
from typing import Any, List, Optional, Sequence

from .configuration import SearchConfig, apply_log_level
from .optimizers.bayesian import BayesianSearch
from .optimizers.random import RandomSearch
from .random_state import RandomState
from .trials import Domain, TrialRecord, Trials

logger = logging.getLogger(__name__)


def sample(space: Any, rng: Optional[RandomState] = None, seed: Optional[int] = None) -> Any:
    """
    Draws a single configuration from `space`.

    A dict result with exactly one key is unwrapped to that key's value.
    """
    rng = rng or RandomState(seed)
    args = BayesianSearch().suggest(space, rng)
    if isinstance(args, dict) and len(args) == 1:
        return next(iter(args.values()))
    return args


def _new_trials(search, new_ids: Sequence[Any], domain: Domain, trials: Trials, rng, after_proposal=None) -> List[TrialRecord]:
    rval: List[TrialRecord] = []
    for new_id in new_ids:
        params = search.suggest(domain.expr, rng)
        rval.extend(trials.new_trial_docs([new_id], [domain.new_result()], [params]))
        if after_proposal is not None:
            after_proposal(params)
    return rval


def bayesian_search(new_ids: Sequence[Any], domain: Domain, trials: Trials, seed: Optional[int],
                    config: Optional[SearchConfig] = None) -> List[TrialRecord]:
    """
    Proposes one new trial per id using the GP surrogate.

    With `config.batch_mode == "fit_once"` the surrogate is fit once on the
    existing trials and every proposal in the batch comes from that fit. With
    `"kriging_believer"` each proposal is added back as a pending observation
    (loss = predicted mean) and the surrogate is refit before the next one.

    Returns:
        The new trial records, in the order of `new_ids`. They are not inserted
        into `trials`.
    """
    config = config or SearchConfig()
    apply_log_level(config)
    rng = RandomState(seed)
    bs = BayesianSearch(config)
    bs.observe(trials.observations())
    if bs.observations:
        bs.update_surrogate_model()
    logger.info("Proposing %d trials from %d observations (batch_mode=%s)",
                len(new_ids), len(bs.observations), config.batch_mode)

    after_proposal = None
    if config.batch_mode == "kriging_believer":
        def after_proposal(params):
            if bs.surrogate.is_fitted:
                bs.add_pending(params)

    return _new_trials(bs, new_ids, domain, trials, rng, after_proposal)


def random_search(new_ids: Sequence[Any], domain: Domain, trials: Trials, seed: Optional[int]) -> List[TrialRecord]:
    """Proposes one random trial per id."""
    return _new_trials(RandomSearch(), new_ids, domain, trials, RandomState(seed))
