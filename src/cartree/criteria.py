"""
cartree.criteria
================

Impurity measures and the splitting criteria built on them.

A splitting criterion is any callable with the signature
``criterion(parent_labels, true_labels, false_labels) -> float`` returning a
*gain*: larger values mean a better split.  ``true_labels`` and
``false_labels`` partition ``parent_labels``.  The three criteria shipped here
all compute the parent impurity minus the size‑weighted mean of the children's
impurities:

- :func:`gini_gain` (default for classification)
- :func:`information_gain`
- :func:`variance_gain` (default for regression)
"""
from __future__ import annotations

from typing import Callable

import numpy as np

SplittingCriterion = Callable[[np.ndarray, np.ndarray, np.ndarray], float]


# -----------------------------------------------------------------------------
# Impurities
# -----------------------------------------------------------------------------
def _proportions(labels: np.ndarray) -> np.ndarray:
    _, counts = np.unique(np.asarray(labels), return_counts=True)
    return counts / counts.sum()

def gini_impurity(labels) -> float:
    """Gini impurity ``1 - sum(p_c**2)`` of a label set (0.0 when empty)."""
    if len(labels) == 0:
        return 0.0
    p = _proportions(labels)
    return float(1.0 - np.sum(p * p))

def entropy(labels) -> float:
    """Shannon entropy in bits, ``-sum(p_c * log2(p_c))`` (0.0 when empty)."""
    if len(labels) == 0:
        return 0.0
    p = _proportions(labels)
    return float(-np.sum(p * np.log2(p)))

def variance(labels) -> float:
    """Population variance of numeric labels (0.0 when empty)."""
    if len(labels) == 0:
        return 0.0
    return float(np.var(np.asarray(labels, dtype=float)))


# -----------------------------------------------------------------------------
# Gains
# -----------------------------------------------------------------------------
def _weighted_gain(impurity, parent_labels, true_labels, false_labels) -> float:
    n = len(parent_labels)
    if n == 0:
        return 0.0
    children = (len(true_labels) * impurity(true_labels)
                + len(false_labels) * impurity(false_labels)) / n
    return impurity(parent_labels) - children

def gini_gain(parent_labels, true_labels, false_labels) -> float:
    """Reduction in Gini impurity achieved by a binary split."""
    return _weighted_gain(gini_impurity, parent_labels, true_labels, false_labels)

def information_gain(parent_labels, true_labels, false_labels) -> float:
    """Reduction in entropy achieved by a binary split."""
    return _weighted_gain(entropy, parent_labels, true_labels, false_labels)

def variance_gain(parent_labels, true_labels, false_labels) -> float:
    """Reduction in label variance achieved by a binary split."""
    return _weighted_gain(variance, parent_labels, true_labels, false_labels)
