# -*- coding: utf-8 -*-
"""
cartree.node
============

The :class:`Node` class owns the CART splitting algorithm.  Constructing a
node over a subset of training rows grows the complete subtree below it:
every node computes its own prediction, searches all features for the split
with the largest gain, and either becomes a leaf or partitions its rows
between a ``true_child`` and a ``false_child``.

Nodes never copy training data.  All of them share one reference to the
dataset and the label vector and differ only in the ``row_indices`` they
govern.  Growth is driven by an explicit work stack, so the depth of the tree
is not bounded by the interpreter's recursion limit.
"""

from __future__ import annotations

from collections import Counter, deque
from enum import Enum
from typing import Any, Iterator

import numpy as np

from .criteria import SplittingCriterion
from .decision import CategoryDecision, Decision, ThresholdDecision


class Task(Enum):
    """Learning task a tree is built for, fixed once per ``fit``."""
    CLASSIFICATION = "classification"
    REGRESSION = "regression"


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _majority_label(labels: np.ndarray) -> Any:
    # Counter keeps first-seen order, so ties go to the earliest label
    counts = Counter(labels.tolist())
    return max(counts, key=counts.get)

def _mean_label(labels: np.ndarray) -> float:
    return float(np.mean(labels.astype(float)))

def categorical_columns(dataset: np.ndarray) -> list[bool]:
    """Flag each column whose values are strings (judged from the first row)."""
    return [isinstance(dataset[0, j], str) for j in range(dataset.shape[1])]


# -----------------------------------------------------------------------------
# Node
# -----------------------------------------------------------------------------
class Node:
    """A node of a binary decision tree together with the subtree below it.

    Parameters
    ----------
    dataset : ndarray of shape (n_samples, n_features)
        Training data shared by the whole tree.  String-valued columns are
        treated as categorical, all others as numeric.
    labels : ndarray of shape (n_samples,)
        Training targets aligned with the rows of ``dataset``.
    row_indices : array-like of int
        Rows of ``dataset`` governed by this node.
    task : Task
        Whether predictions are majority classes or label means.
    splitting_criterion : callable
        ``criterion(parent_labels, true_labels, false_labels) -> gain``.
    depth : int, default=0
        Distance from the root.
    max_depth : int, default=-1
        Nodes at this depth are never split; ``-1`` means unlimited.

    Attributes
    ----------
    prediction : object
        Majority label or mean label over ``row_indices``.  Kept on internal
        nodes as well.
    decision : Decision or None
        Splitting rule; ``None`` exactly when the node is a leaf.
    gain : float or None
        Criterion value of ``decision``.
    true_child, false_child : Node or None
        Children receiving the rows for which ``decision`` holds / fails.
    """

    def __init__(self, dataset: np.ndarray, labels: np.ndarray, row_indices,
                 task: Task, splitting_criterion: SplittingCriterion,
                 depth: int = 0, max_depth: int = -1):
        categorical = categorical_columns(dataset)
        self._evaluate(dataset, labels, row_indices, task, splitting_criterion,
                       depth, max_depth, categorical)

        pending = [self]
        while pending:
            node = pending.pop()
            if node.is_leaf:
                continue
            true_indices, false_indices = node.partition()
            node.true_child = Node._unexpanded(
                dataset, labels, true_indices, task, splitting_criterion,
                node.depth + 1, max_depth, categorical)
            node.false_child = Node._unexpanded(
                dataset, labels, false_indices, task, splitting_criterion,
                node.depth + 1, max_depth, categorical)
            # false pushed first so the true branch is expanded first
            pending.append(node.false_child)
            pending.append(node.true_child)

    @classmethod
    def _unexpanded(cls, dataset, labels, row_indices, task, splitting_criterion,
                    depth, max_depth, categorical) -> "Node":
        node = cls.__new__(cls)
        node._evaluate(dataset, labels, row_indices, task, splitting_criterion,
                       depth, max_depth, categorical)
        return node

    def _evaluate(self, dataset, labels, row_indices, task, splitting_criterion,
                  depth, max_depth, categorical) -> None:
        self.dataset = dataset
        self.labels = labels
        self.row_indices = np.asarray(row_indices, dtype=int)
        self.task = task
        self.splitting_criterion = splitting_criterion
        self.depth = int(depth)
        self.true_child: Node | None = None
        self.false_child: Node | None = None

        node_labels = labels[self.row_indices]
        if task is Task.CLASSIFICATION:
            self.prediction = _majority_label(node_labels)
        else:
            self.prediction = _mean_label(node_labels)

        self.decision: Decision | None = None
        self.gain: float | None = None
        if self._is_pure(node_labels) or (max_depth != -1 and self.depth >= max_depth):
            return
        decision, gain = self._best_split(node_labels, categorical)
        if decision is not None and gain >= 0.0:
            self.decision, self.gain = decision, gain

    # ------------------------------------------------------------------
    # Splitting
    # ------------------------------------------------------------------
    @staticmethod
    def _is_pure(node_labels: np.ndarray) -> bool:
        return bool(np.all(node_labels == node_labels[0]))

    def _candidates(self, feature: int, values: np.ndarray, is_categorical: bool):
        if is_categorical:
            for category in dict.fromkeys(values.tolist()):
                yield CategoryDecision(feature, category)
        else:
            distinct = np.unique(values)
            for lo, hi in zip(distinct[:-1], distinct[1:]):
                yield ThresholdDecision(feature, float((lo + hi) / 2.0))

    def _best_split(self, node_labels: np.ndarray, categorical: list[bool]):
        """Return the ``(decision, gain)`` pair with maximal gain.

        Features are scanned in column order and, within a feature, categories
        in order of first appearance or thresholds in ascending order.  A
        strictly larger gain is required to replace the current best, so the
        earliest candidate wins ties.  Candidates leaving one side empty are
        skipped.  Returns ``(None, None)`` when no candidate exists.
        """
        best_decision, best_gain = None, None
        n = len(self.row_indices)
        for j in range(self.dataset.shape[1]):
            values = self.dataset[self.row_indices, j]
            if not categorical[j]:
                values = values.astype(float)
            for decision in self._candidates(j, values, categorical[j]):
                mask = decision.evaluate_column(values)
                n_true = int(mask.sum())
                if n_true == 0 or n_true == n:
                    continue
                gain = float(self.splitting_criterion(
                    node_labels, node_labels[mask], node_labels[~mask]))
                if best_gain is None or gain > best_gain:
                    best_decision, best_gain = decision, gain
        return best_decision, best_gain

    def partition(self) -> tuple[np.ndarray, np.ndarray]:
        """Split ``row_indices`` into the rows where ``decision`` holds / fails."""
        if self.decision is None:
            raise ValueError("partition: leaf nodes carry no decision")
        mask = self.decision.evaluate_column(
            self.dataset[self.row_indices, self.decision.feature])
        return self.row_indices[mask], self.row_indices[~mask]

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    @property
    def is_leaf(self) -> bool:
        return self.decision is None

    @property
    def n_samples(self) -> int:
        return len(self.row_indices)

    def iter_nodes(self) -> Iterator["Node"]:
        """Yield this node and all its descendants in breadth-first order."""
        queue = deque([self])
        while queue:
            node = queue.popleft()
            yield node
            if node.true_child is not None:
                queue.append(node.true_child)
            if node.false_child is not None:
                queue.append(node.false_child)

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------
    def predict(self, datapoint) -> Any:
        """Route one datapoint down the tree and return the leaf prediction."""
        node = self
        while not node.is_leaf:
            node = node.true_child if node.decision.evaluate(datapoint) else node.false_child
        return node.prediction

    def predict_many(self, rows) -> list:
        return [self.predict(row) for row in rows]

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"Node(depth={self.depth}, n_samples={self.n_samples}, prediction={self.prediction!r})"
        return f"Node(depth={self.depth}, n_samples={self.n_samples}, decision={self.decision})"
