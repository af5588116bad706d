# -*- coding: utf-8 -*-
"""
cartree.forest
==============

Random forests built from independent :mod:`cartree.tree` estimators.

Each tree is fitted on a bootstrap sample of the rows restricted to a random
subset of the features.  Trees share nothing but the (read-only) training
arrays, so their order of construction does not matter.  Classification
forests predict by majority vote, regression forests by the mean of the tree
predictions.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections import Counter

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin, RegressorMixin
from sklearn.utils import check_random_state

from .exceptions import ConfigError, EmptyModelError, ValidationError
from .node import Task
from .tree import (DecisionTreeClassifier, DecisionTreeRegressor, _check_max_depth,
                   _prepare_predict_input, _validate_fit_args)

logger = logging.getLogger(__name__)


def _check_forest_params(n_trees, n_features_per_tree, owner: str, error=ConfigError) -> None:
    if isinstance(n_trees, bool) or not isinstance(n_trees, numbers.Integral) or n_trees < 1:
        raise error(f"{owner}: n_trees must be an integer >= 1, got {n_trees!r}.")
    if n_features_per_tree is None:
        return
    if (isinstance(n_features_per_tree, bool)
            or not isinstance(n_features_per_tree, numbers.Integral)
            or n_features_per_tree < 1):
        raise error(f"{owner}: n_features_per_tree must be None or an integer >= 1, "
                    f"got {n_features_per_tree!r}.")


class BaseRandomForest(BaseEstimator):
    """
    Bagged ensemble of decision trees.

    Parameters
    ----------
    n_trees : int, default=10
        Number of trees in the forest.
    n_features_per_tree : int or None, default=None
        Number of features each tree is trained on, drawn without replacement.
        ``None`` uses ``ceil(sqrt(n_features))`` for classification and
        ``ceil(n_features / 3)`` for regression.
    max_depth : int, default=-1
        Maximum depth of every tree; ``-1`` means unlimited.
    bootstrap : bool, default=True
        Draw each tree's rows with replacement.  When ``False`` every tree
        sees all rows and only the feature subsets differ.
    random_state : int, RandomState or None, default=None
        Seed for the row and feature sampling.
    verbose : int, default=0
        Log per-tree progress at INFO level when positive.

    Attributes
    ----------
    trees_ : list
        Fitted trees.
    feature_subsets_ : list[ndarray]
        Sorted column indices used by each tree.
    n_features_in_ : int
        Number of features seen during ``fit``.
    """

    _task: Task = Task.CLASSIFICATION
    _tree_class = DecisionTreeClassifier

    def __init__(self, *, n_trees: int = 10, n_features_per_tree: int | None = None,
                 max_depth: int = -1, bootstrap: bool = True, random_state=None,
                 verbose: int = 0):
        name = type(self).__name__
        _check_forest_params(n_trees, n_features_per_tree, name)
        self.n_trees = n_trees
        self.n_features_per_tree = n_features_per_tree
        self.max_depth = _check_max_depth(max_depth, name)
        self.bootstrap = bool(bootstrap)
        self.random_state = random_state
        self.verbose = int(verbose)

    def _default_n_features(self, n_features: int) -> int:
        raise NotImplementedError

    def fit(self, X, y, splitting_criterion=None, column_data: bool = False):
        """
        Fit ``n_trees`` trees on random row/feature views of ``X`` and ``y``.

        Accepts the same arguments as :meth:`DecisionTreeClassifier.fit`; the
        criterion is passed on to every tree.

        Raises
        ------
        ValidationError
            If the input fails validation, ``n_trees`` or
            ``n_features_per_tree`` is invalid, or ``n_features_per_tree``
            exceeds the number of features.  The forest is left unchanged.
        """
        op = f"{type(self).__name__}.fit"
        _check_forest_params(self.n_trees, self.n_features_per_tree, op, error=ValidationError)
        X, y, _ = _validate_fit_args(X, y, self.max_depth, column_data, self._task, op)
        n_samples, n_features = X.shape
        k = self.n_features_per_tree
        if k is None:
            k = self._default_n_features(n_features)
        elif k > n_features:
            raise ValidationError(f"{op}: n_features_per_tree={k} exceeds the "
                                  f"{n_features} available features.")
        k = int(k)

        rng = check_random_state(self.random_state)
        trees, subsets = [], []
        for i in range(self.n_trees):
            if self.bootstrap:
                rows = rng.randint(0, n_samples, size=n_samples)
            else:
                rows = np.arange(n_samples)
            features = np.sort(rng.choice(n_features, size=k, replace=False))
            tree = self._tree_class(max_depth=self.max_depth)
            tree.fit(X[np.ix_(rows, features)], y[rows], splitting_criterion=splitting_criterion)
            trees.append(tree)
            subsets.append(features)
            if self.verbose > 0:
                logger.info("%s: tree %d/%d on features %s, depth %d", op, i + 1,
                            self.n_trees, features.tolist(), tree.get_depth())

        logger.debug("%s: %d trees, %d of %d features each", op, self.n_trees, k, n_features)
        self.trees_, self.feature_subsets_ = trees, subsets
        self.n_features_in_ = n_features
        if self._task is Task.CLASSIFICATION:
            self.classes_ = np.unique(y)
        return self

    def _aggregate(self, votes: list):
        raise NotImplementedError

    def predict(self, X):
        """
        Predict with every tree and aggregate the results.

        Returns a single label for 1-D input, otherwise an ndarray with one
        prediction per row.

        Raises
        ------
        EmptyModelError
            If the forest has not been fitted.
        """
        if not getattr(self, "trees_", None):
            raise EmptyModelError("predict: cannot predict from an empty forest. "
                                  "Maybe you forgot to fit your model?")
        rows, single = _prepare_predict_input(X, self.n_features_in_)
        if single:
            rows = rows.reshape(1, -1)
        per_tree = [tree.predict(rows[:, features])
                    for tree, features in zip(self.trees_, self.feature_subsets_)]
        out = np.array([self._aggregate([p[i] for p in per_tree]) for i in range(rows.shape[0])])
        return out[0] if single else out


class RandomForestClassifier(ClassifierMixin, BaseRandomForest):
    """Random forest of :class:`DecisionTreeClassifier` voting by majority.

    Ties between classes go to the label predicted first in tree order.
    """

    _task = Task.CLASSIFICATION
    _tree_class = DecisionTreeClassifier

    def _default_n_features(self, n_features: int) -> int:
        return max(1, math.ceil(math.sqrt(n_features)))

    def _aggregate(self, votes: list):
        counts = Counter(votes)
        return max(counts, key=counts.get)


class RandomForestRegressor(RegressorMixin, BaseRandomForest):
    """Random forest of :class:`DecisionTreeRegressor` averaging predictions."""

    _task = Task.REGRESSION
    _tree_class = DecisionTreeRegressor

    def _default_n_features(self, n_features: int) -> int:
        return max(1, math.ceil(n_features / 3))

    def _aggregate(self, votes: list):
        return float(np.mean(votes))
