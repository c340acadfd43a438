"""
Flattening of structured parameter samples into numeric vectors.
"""
from __future__ import annotations
import numbers
from typing import Any, Dict, Iterator, List

import numpy as np


class ParameterEncoder:
    """
    Turns nested dict/list/tuple samples into flat float vectors.

    Dict fields are visited in insertion order and sequences in index order.
    String leaves are categorical labels and get integer ids from `codebook`
    in first-seen order; an id never changes once assigned. Booleans encode as
    0/1 without consuming an id. Other numbers pass through unchanged.
    """
    def __init__(self):
        self.codebook: Dict[str, int] = {}
        self._labels: List[str] = []

    def encode_label(self, label: str) -> int:
        idx = self.codebook.get(label)
        if idx is None:
            idx = len(self._labels)
            self.codebook[label] = idx
            self._labels.append(label)
        return idx

    def decode_label(self, idx: int) -> str:
        return self._labels[idx]

    def encode_leaf(self, value: Any) -> float:
        if isinstance(value, str):
            return float(self.encode_label(value))
        if isinstance(value, (bool, np.bool_)):
            return 1.0 if value else 0.0
        if isinstance(value, numbers.Number):
            return float(value)
        raise TypeError(f"Cannot encode parameter value {value!r} of type {type(value).__name__}")

    def _leaves(self, structured: Any) -> Iterator[Any]:
        if isinstance(structured, dict):
            for value in structured.values():
                yield from self._leaves(value)
        elif isinstance(structured, (list, tuple)):
            for item in structured:
                yield from self._leaves(item)
        else:
            yield structured

    def flatten(self, structured: Any) -> np.ndarray:
        return np.array([self.encode_leaf(leaf) for leaf in self._leaves(structured)], dtype=float)

    def unflatten(self, template: Any, vector) -> Any:
        """
        Rebuilds a structured sample shaped like `template` from `vector`.

        The leaf types of `template` decide how each scalar is decoded: strings
        go through the inverse codebook, booleans and ints are rounded.

        Raises:
            ValueError: If `vector` does not hold exactly one value per leaf.
        """
        values = iter(np.asarray(vector, dtype=float).ravel().tolist())
        result = self._rebuild(template, values)
        if next(values, None) is not None:
            raise ValueError("Vector is longer than the template")
        return result

    def _rebuild(self, template: Any, values: Iterator[float]) -> Any:
        if isinstance(template, dict):
            return {key: self._rebuild(value, values) for key, value in template.items()}
        if isinstance(template, list):
            return [self._rebuild(item, values) for item in template]
        if isinstance(template, tuple):
            return tuple(self._rebuild(item, values) for item in template)
        try:
            raw = next(values)
        except StopIteration:
            raise ValueError("Vector is shorter than the template") from None
        if isinstance(template, str):
            return self.decode_label(int(round(raw)))
        if isinstance(template, (bool, np.bool_)):
            return bool(round(raw))
        if isinstance(template, numbers.Integral):
            return int(round(raw))
        return raw
