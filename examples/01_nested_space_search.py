"""
Example 1: Searching a Nested Space
-----------------------------------

This example runs a GP-driven search over a space with a conditional branch:
the classifier is either an "svm" with a continuous C or a "knn" with an
integer k. The (synthetic) loss is lowest for an svm with C near 3.

Usage:
    python examples/01_nested_space_search.py [config.yaml]
"""

import sys

from gpsearch import Domain, Trials, bayesian_search, load_config
from gpsearch.space import choice, loguniform, quniform, uniform


def objective(args):
    """
    A cheap stand-in for a training run.

    Args:
        args (dict): A configuration drawn from the space.

    Returns:
        float: The loss for the given hyperparameters.
    """
    clf = args["clf"]
    if clf["type"] == "svm":
        loss = 0.1 * (clf["C"] - 3.0) ** 2
    else:
        loss = 0.5 + 0.01 * abs(clf["k"] - 7)
    return loss + 0.05 * abs(args["lr"] - 0.01)


def main():
    config = load_config(sys.argv[1] if len(sys.argv) > 1 else None)

    space = {
        "lr": loguniform(-7, 0),
        "clf": choice([
            {"type": "svm", "C": uniform(0.1, 10.0)},
            {"type": "knn", "k": quniform(1, 20, 1)},
        ]),
    }
    domain = Domain(space)
    trials = Trials()

    for tid in range(30):
        new = bayesian_search([tid], domain, trials, seed=tid, config=config)
        trials.insert_trial_docs(new)
        for trial in new:
            trials.record_result(trial.tid, {"loss": objective(trial.args)})

    df = trials.to_dataframe()
    best = df.loc[df["loss"].idxmin()]
    print(df[["tid", "loss"]].to_string(index=False))
    print(f"\nBest trial #{best['tid']} with loss {best['loss']:.6f}")
    print(f"  - Params: {trials.trials[int(best['tid'])].args}")


if __name__ == "__main__":
    main()
