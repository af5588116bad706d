# -*- coding: utf-8 -*-
"""
cartree.tree
============

scikit‑learn style wrappers around :class:`~cartree.node.Node`.

:class:`DecisionTreeClassifier` and :class:`DecisionTreeRegressor` hold the
root node and the ``max_depth`` setting.  ``fit`` validates its input in full
before touching the model, resolves the default splitting criterion for the
task and grows the tree; ``predict`` routes datapoints to leaves.  The module
also provides :func:`calc_depth`.
"""

from __future__ import annotations

import logging
import numbers
from collections import deque

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin, RegressorMixin

from .criteria import gini_gain, variance_gain
from .exceptions import ConfigError, EmptyModelError, ValidationError
from .export import print_tree, tree_to_string
from .node import Node, Task

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _check_max_depth(max_depth, owner: str, error=ConfigError) -> int:
    if isinstance(max_depth, bool) or not isinstance(max_depth, numbers.Integral):
        raise error(f"{owner}: max_depth must be an integer >= -1, got {max_depth!r}.")
    if max_depth < -1:
        raise error(f"{owner}: invalid max_depth={max_depth}. Set it to a value >= -1 "
                    "(-1 means unlimited depth).")
    return int(max_depth)

def _as_matrix(X, op: str) -> np.ndarray:
    """Convert ``X`` to an ndarray, keeping mixed numeric/string rows intact."""
    try:
        arr = np.asarray(X)
        # numpy coerces mixed rows to strings; keep the original objects instead
        if arr.dtype.kind in "US" and not isinstance(X, np.ndarray):
            arr = np.asarray(X, dtype=object)
    except ValueError as e:
        raise ValidationError(f"{op}: data must be rectangular ({e}).") from e
    return arr

def _label_kind(value) -> str:
    if isinstance(value, str):
        return "categorical"
    if isinstance(value, numbers.Number):
        return "numeric"
    return type(value).__name__

def _validate_fit_args(dataset, labels, max_depth: int, column_data: bool,
                       task: Task, op: str = "fit"):
    """Check training input and return ``(dataset, labels, label_kind)``.

    The dataset is returned row-major (transposed when ``column_data``).
    """
    y = labels.tolist() if isinstance(labels, np.ndarray) else list(labels)
    if len(y) == 0:
        raise ValidationError(f"{op}: cannot build tree from empty label set.")
    X = _as_matrix(dataset, op)
    if X.size == 0:
        raise ValidationError(f"{op}: cannot build tree from empty dataset.")
    _check_max_depth(max_depth, op, error=ValidationError)
    if X.ndim != 2:
        raise ValidationError(f"{op}: dataset must be 2-dimensional, got shape {X.shape}.")
    if np.ndim(labels) != 1:
        raise ValidationError(f"{op}: labels must be 1-dimensional, got shape {np.shape(labels)}.")
    if not column_data and X.shape[0] != len(y):
        raise ValidationError(
            f"{op}: dimension mismatch! Number of datapoints {X.shape[0]} != number of labels "
            f"{len(y)}. Maybe transposing your dataset matrix or setting column_data=True helps?")
    if column_data and X.shape[1] != len(y):
        raise ValidationError(
            f"{op}: dimension mismatch! Number of datapoints {X.shape[1]} != number of labels "
            f"{len(y)}. Maybe transposing your dataset matrix or setting column_data=False helps?")
    kinds = [_label_kind(v) for v in y]
    kind = kinds[0]
    if any(k != kind for k in kinds):
        raise ValidationError(f"{op}: encountered heterogeneous label types {sorted(set(kinds))}. "
                              "Please make sure all labels are of the same type.")
    if task is Task.REGRESSION and kind != "numeric":
        raise ValidationError(f"{op}: cannot train a regressor on {kind} labels.")

    if column_data:
        X = np.ascontiguousarray(X.T)
    if task is Task.REGRESSION:
        y_arr = np.asarray(y, dtype=float)
    elif kind == "categorical":
        y_arr = np.asarray(y, dtype=object)
    else:
        y_arr = np.asarray(y)
    return X, y_arr, kind

def _prepare_predict_input(X, n_features: int, op: str = "predict"):
    """Return ``(rows, single)`` where ``single`` marks a lone 1-D datapoint."""
    arr = _as_matrix(X, op)
    if arr.ndim == 1:
        if arr.shape[0] != n_features:
            raise ValidationError(f"{op}: datapoint has {arr.shape[0]} features, "
                                  f"model was fitted with {n_features}.")
        return arr, True
    if arr.ndim != 2:
        raise ValidationError(f"{op}: data must be 1- or 2-dimensional, got shape {arr.shape}.")
    if arr.shape[1] != n_features:
        raise ValidationError(f"{op}: data has {arr.shape[1]} features, "
                              f"model was fitted with {n_features}.")
    return arr, False

def calc_depth(tree) -> int:
    """Maximum depth of a fitted tree found by breadth-first traversal.

    Returns 0 for an unfitted tree or a tree that is a single leaf.
    """
    max_depth = 0
    if tree.root is None:
        return max_depth
    to_visit = deque([(tree.root, 0)])
    while to_visit:
        node, depth = to_visit.popleft()
        max_depth = max(max_depth, depth)
        if node.true_child is not None:
            to_visit.append((node.true_child, depth + 1))
        if node.false_child is not None:
            to_visit.append((node.false_child, depth + 1))
    return max_depth


# -----------------------------------------------------------------------------
# Estimators
# -----------------------------------------------------------------------------
class BaseDecisionTree(BaseEstimator):
    """Shared fit/predict logic of the classifier and the regressor.

    Parameters
    ----------
    max_depth : int, default=-1
        Maximum depth of the tree; ``-1`` means unlimited.  ``0`` yields a
        single leaf.
    verbose : int, default=0
        Log a summary of each fit at INFO level when positive.
    """

    _task: Task = Task.CLASSIFICATION

    def __init__(self, *, max_depth: int = -1, verbose: int = 0):
        self.max_depth = _check_max_depth(max_depth, type(self).__name__)
        self.verbose = int(verbose)
        self.root: Node | None = None

    def _default_criterion(self):
        raise NotImplementedError

    def fit(self, X, y, splitting_criterion=None, column_data: bool = False):
        """
        Grow the tree on ``X`` and ``y``.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Training data; transposed first when ``column_data=True``.  String
            columns are categorical, all others numeric.
        y : array-like of shape (n_samples,)
            Target labels of a single type.
        splitting_criterion : callable, optional
            ``criterion(parent_labels, true_labels, false_labels) -> gain``.
            Defaults to :func:`~cartree.criteria.gini_gain` for classification
            and :func:`~cartree.criteria.variance_gain` for regression.
        column_data : bool, default=False
            Whether datapoints are stored as the columns of ``X``.

        Returns
        -------
        self

        Raises
        ------
        ValidationError
            If the input fails any check.  The estimator is left unchanged.
        """
        op = f"{type(self).__name__}.fit"
        X, y, _ = _validate_fit_args(X, y, self.max_depth, column_data, self._task, op)
        if splitting_criterion is None:
            splitting_criterion = self._default_criterion()
        logger.debug("%s: %d samples, %d features, criterion=%s", op, X.shape[0],
                     X.shape[1], getattr(splitting_criterion, "__name__", splitting_criterion))

        root = Node(X, y, np.arange(X.shape[0]), self._task, splitting_criterion,
                    depth=0, max_depth=self.max_depth)
        self._set_fitted(root, X, y)
        if self.verbose > 0:
            logger.info("%s: grown tree with depth %d and %d leaves", op,
                        self.get_depth(), self.get_n_leaves())
        return self

    def _set_fitted(self, root: Node, X: np.ndarray, y: np.ndarray) -> None:
        self.root = root
        self.n_features_in_ = X.shape[1]

    def predict(self, X):
        """
        Predict labels for one datapoint or a batch of datapoints.

        Parameters
        ----------
        X : array-like of shape (n_features,) or (n_samples, n_features)

        Returns
        -------
        label or ndarray of shape (n_samples,)
            A single label for 1-D input, otherwise one label per row in input
            order.

        Raises
        ------
        EmptyModelError
            If the tree has not been fitted.
        """
        if self.root is None:
            raise EmptyModelError("predict: cannot predict from an empty tree. "
                                  "Maybe you forgot to fit your model?")
        rows, single = _prepare_predict_input(X, self.n_features_in_)
        if single:
            return self.root.predict(rows)
        return np.array(self.root.predict_many(rows))

    def get_depth(self) -> int:
        return calc_depth(self)

    def get_n_leaves(self) -> int:
        if self.root is None:
            return 0
        return sum(1 for node in self.root.iter_nodes() if node.is_leaf)

    def print_tree(self, file=None) -> None:
        """Print a boxed-branch rendering of the tree to ``file`` (stdout)."""
        print_tree(self, file=file)

    def __str__(self) -> str:
        return tree_to_string(self)


class DecisionTreeClassifier(ClassifierMixin, BaseDecisionTree):
    """
    CART decision tree classifier.

    Leaves predict the most frequent training label among their rows.  Splits
    maximise :func:`~cartree.criteria.gini_gain` unless another criterion is
    passed to :meth:`fit`.

    Attributes
    ----------
    root : Node or None
        Root of the fitted tree.
    classes_ : ndarray
        Sorted distinct training labels.
    n_features_in_ : int
        Number of features seen during ``fit``.

    Examples
    --------
    >>> clf = DecisionTreeClassifier().fit([[1.0], [2.0], [3.0], [10.0]], ["a", "a", "a", "b"])
    >>> clf.predict([10.0])
    'b'
    """

    _task = Task.CLASSIFICATION

    def _default_criterion(self):
        return gini_gain

    def _set_fitted(self, root, X, y) -> None:
        super()._set_fitted(root, X, y)
        self.classes_ = np.unique(y)


class DecisionTreeRegressor(RegressorMixin, BaseDecisionTree):
    """
    CART decision tree regressor.

    Leaves predict the mean training label among their rows.  Splits maximise
    :func:`~cartree.criteria.variance_gain` unless another criterion is passed
    to :meth:`fit`.  Categorical labels are rejected.
    """

    _task = Task.REGRESSION

    def _default_criterion(self):
        return variance_gain
