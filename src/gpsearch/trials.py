"""
Trial history and trial creation.
"""
from __future__ import annotations
import copy
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

import pandas as pd


class TrialState(Enum):
    """
    Represents the state of a trial.
    """
    NEW = "NEW"
    RUNNING = "RUNNING"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"


def _finite_or_none(value: Any) -> Optional[float]:
    if value is None:
        return None
    value = float(value)
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class Observation:
    """An evaluated configuration as seen by the surrogate."""
    params: Any
    result: Dict[str, Any]

    @property
    def loss(self) -> Optional[float]:
        return _finite_or_none((self.result or {}).get("loss"))

    @property
    def objective(self) -> Optional[float]:
        """`loss` when reported, otherwise `accuracy`, otherwise None.

        NaN and infinite values count as not reported.
        """
        if self.loss is not None:
            return self.loss
        return _finite_or_none((self.result or {}).get("accuracy"))


@dataclass
class TrialRecord:
    """
    A single trial in a search.

    Attributes:
        tid: The unique identifier for the trial.
        args: The structured configuration being evaluated.
        result: The result dictionary; `loss` and/or `accuracy` once complete.
        state: The current state of the trial.
    """
    tid: Any
    args: Any
    result: Dict[str, Any] = field(default_factory=dict)
    state: TrialState = TrialState.NEW


def default_new_result() -> Dict[str, Any]:
    return {"status": TrialState.NEW.value}


@dataclass
class Domain:
    """The search-space expression plus a factory for placeholder results."""
    expr: Any
    new_result: Callable[[], Dict[str, Any]] = default_new_result


class Trials:
    """
    In-memory trial history.

    Search drivers read `trials` and create records with `new_trial_docs`;
    they never modify existing records.
    """
    def __init__(self, trials: Optional[Sequence[TrialRecord]] = None):
        self.trials: List[TrialRecord] = list(trials or [])

    def __len__(self):
        return len(self.trials)

    def new_trial_docs(self, tids: Sequence[Any], results: Sequence[Dict[str, Any]], params: Sequence[Any]) -> List[TrialRecord]:
        """Builds (but does not insert) one record per id."""
        if not len(tids) == len(results) == len(params):
            raise ValueError("tids, results and params must have the same length")
        return [TrialRecord(tid=tid, args=copy.deepcopy(args), result=dict(result))
                for tid, result, args in zip(tids, results, params)]

    def insert_trial_docs(self, docs: Sequence[TrialRecord]) -> None:
        self.trials.extend(docs)

    def record_result(self, tid: Any, result: Dict[str, Any], state: TrialState = TrialState.COMPLETE) -> TrialRecord:
        """Stores the result of a finished trial."""
        for trial in self.trials:
            if trial.tid == tid:
                trial.result = dict(result)
                trial.state = state
                return trial
        raise KeyError(f"Unknown trial id: {tid!r}")

    def observations(self) -> List[Observation]:
        return [Observation(params=t.args, result=t.result) for t in self.trials]

    def to_dataframe(self) -> pd.DataFrame:
        """Trial history as a DataFrame: one row per trial, result and top-level args as columns."""
        records = []
        for trial in self.trials:
            record = {"tid": trial.tid, "state": trial.state.value}
            if isinstance(trial.args, dict):
                record.update(trial.args)
            else:
                record["args"] = trial.args
            record.update(trial.result)
            records.append(record)
        return pd.DataFrame(records)
