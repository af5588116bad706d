"""Decision rules stored on internal tree nodes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class Decision:
    """A boolean test on a single feature of a datapoint.

    Rows for which the test holds are routed to a node's ``true_child``, all
    others to its ``false_child``.
    """
    feature: int

    def evaluate(self, datapoint) -> bool:
        raise NotImplementedError

    def evaluate_column(self, values: np.ndarray) -> np.ndarray:
        """Vectorised :meth:`evaluate` over one column of feature values."""
        raise NotImplementedError

    def describe(self, feature_names=None) -> str:
        raise NotImplementedError

    def _feature_name(self, feature_names) -> str:
        if feature_names is not None and 0 <= self.feature < len(feature_names):
            return str(feature_names[self.feature])
        return f"x[{self.feature}]"

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class ThresholdDecision(Decision):
    """Numeric test ``datapoint[feature] <= threshold``."""
    threshold: float

    def evaluate(self, datapoint) -> bool:
        return float(datapoint[self.feature]) <= self.threshold

    def evaluate_column(self, values: np.ndarray) -> np.ndarray:
        return np.asarray(values, dtype=float) <= self.threshold

    def describe(self, feature_names=None) -> str:
        return f"{self._feature_name(feature_names)} <= {self.threshold!r}"


@dataclass(frozen=True)
class CategoryDecision(Decision):
    """Categorical test ``datapoint[feature] == category``."""
    category: Any

    def evaluate(self, datapoint) -> bool:
        return datapoint[self.feature] == self.category

    def evaluate_column(self, values: np.ndarray) -> np.ndarray:
        return np.array([v == self.category for v in values], dtype=bool)

    def describe(self, feature_names=None) -> str:
        category = str(self.category) if isinstance(self.category, str) else self.category
        return f"{self._feature_name(feature_names)} == {category!r}"
