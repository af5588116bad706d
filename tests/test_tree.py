import logging

import numpy as np
import pytest
from sklearn.base import clone

from cartree import (ConfigError, DecisionTreeClassifier, DecisionTreeRegressor,
                     EmptyModelError, ValidationError, calc_accuracy, calc_depth,
                     information_gain)
from cartree.decision import ThresholdDecision


def _tiny_dataset():
    """Return the four-point dataset with one outlier class."""
    X = [[1.0], [2.0], [3.0], [10.0]]
    y = ["a", "a", "a", "b"]
    return X, y


def _mixed_dataset(seed=0, n=80):
    """Return a dataset with a numeric and a categorical feature."""
    rng = np.random.RandomState(seed)
    X = np.empty((n, 2), dtype=object)
    X[:, 0] = rng.rand(n) * 10
    X[:, 1] = rng.choice(["A", "B", "C"], size=n)
    y = np.array(["yes" if (x0 > 5) != (x1 == "C") else "no" for x0, x1 in X])
    return X, y


def test_classifier_fit_predict_scenario():
    X, y = _tiny_dataset()
    clf = DecisionTreeClassifier().fit(X, y)
    assert clf.root.decision == ThresholdDecision(0, 6.5)
    assert clf.predict([2.0]) == "a"
    assert clf.predict([10.0]) == "b"
    assert clf.predict([[2.0], [10.0], [7.0]]).tolist() == ["a", "b", "b"]
    assert clf.classes_.tolist() == ["a", "b"]
    assert clf.n_features_in_ == 1


def test_classifier_learns_training_set():
    X, y = _mixed_dataset()
    clf = DecisionTreeClassifier().fit(X, y)
    preds = clf.predict(X)
    assert preds.shape == y.shape
    assert calc_accuracy(y, preds) == 1.0
    assert clf.score(X, y) == 1.0


def test_custom_splitting_criterion():
    X, y = _tiny_dataset()
    clf = DecisionTreeClassifier().fit(X, y, splitting_criterion=information_gain)
    assert clf.root.decision == ThresholdDecision(0, 6.5)
    assert clf.root.splitting_criterion is information_gain


def test_column_data_is_transposed():
    clf = DecisionTreeClassifier().fit([[1.0, 2.0, 3.0, 10.0]], ["a", "a", "a", "b"],
                                       column_data=True)
    assert clf.root.decision == ThresholdDecision(0, 6.5)
    assert clf.predict([10.0]) == "b"


def test_regressor_single_split_scenario():
    X = [[1.0], [2.0], [3.0], [4.0]]
    y = [1.0, 2.0, 3.0, 100.0]
    reg = DecisionTreeRegressor(max_depth=1).fit(X, y)
    assert calc_depth(reg) == 1
    assert reg.get_n_leaves() == 2
    assert reg.root.true_child.prediction == pytest.approx(2.0)
    assert reg.root.false_child.prediction == pytest.approx(100.0)
    assert reg.predict(X).tolist() == pytest.approx([2.0, 2.0, 2.0, 100.0])


def test_identical_labels_give_single_leaf():
    clf = DecisionTreeClassifier(max_depth=-1).fit([[1.0], [2.0], [3.0]], ["z", "z", "z"])
    assert clf.root.is_leaf
    assert calc_depth(clf) == 0
    assert clf.predict([[100.0]]).tolist() == ["z"]


def test_single_row_dataset():
    reg = DecisionTreeRegressor().fit([[4.0, 2.0]], [7.5])
    assert reg.root.is_leaf
    assert reg.predict([0.0, 0.0]) == pytest.approx(7.5)


@pytest.mark.parametrize("max_depth", [0, 1, 2, 3])
def test_depth_is_bounded(max_depth):
    X, y = _mixed_dataset(seed=1)
    clf = DecisionTreeClassifier(max_depth=max_depth).fit(X, y)
    assert calc_depth(clf) <= max_depth
    assert clf.get_depth() == calc_depth(clf)


def test_refit_overwrites_root():
    X, y = _tiny_dataset()
    clf = DecisionTreeClassifier().fit(X, y)
    clf.fit([[1.0], [2.0]], ["q", "q"])
    assert clf.root.is_leaf
    assert clf.predict([10.0]) == "q"


def test_calc_depth_of_unfitted_tree_is_zero():
    assert calc_depth(DecisionTreeClassifier()) == 0
    assert DecisionTreeRegressor().get_n_leaves() == 0


def test_invalid_max_depth_at_construction():
    with pytest.raises(ConfigError):
        DecisionTreeClassifier(max_depth=-2)
    with pytest.raises(ConfigError):
        DecisionTreeRegressor(max_depth=1.5)


def test_invalid_max_depth_at_fit():
    X, y = _tiny_dataset()
    clf = DecisionTreeClassifier().set_params(max_depth=-3)
    with pytest.raises(ValidationError, match="max_depth"):
        clf.fit(X, y)


@pytest.mark.parametrize("X, y, match", [
    ([[1.0]], [], "empty label set"),
    ([], ["a"], "empty dataset"),
    ([[1.0], [2.0]], ["a"], "2 != number of labels 1"),
    ([[1.0], [2.0]], ["a", 1], "heterogeneous"),
    ([1.0, 2.0], ["a", "b"], "2-dimensional"),
])
def test_fit_validation_errors(X, y, match):
    with pytest.raises(ValidationError, match=match):
        DecisionTreeClassifier().fit(X, y)


def test_column_data_dimension_mismatch():
    with pytest.raises(ValidationError, match="column_data=False"):
        DecisionTreeClassifier().fit([[1.0, 2.0], [3.0, 4.0]], ["a", "b", "c"], column_data=True)


def test_regressor_rejects_categorical_labels():
    with pytest.raises(ValidationError, match="regressor"):
        DecisionTreeRegressor().fit([[1.0], [2.0]], ["a", "b"])


def test_failed_fit_leaves_model_untouched():
    X, y = _tiny_dataset()
    clf = DecisionTreeClassifier().fit(X, y)
    root = clf.root
    with pytest.raises(ValidationError):
        clf.fit(X, y[:2])
    assert clf.root is root


def test_validation_errors_are_value_errors():
    with pytest.raises(ValueError):
        DecisionTreeClassifier().fit([[1.0]], [])


def test_predict_before_fit_raises():
    with pytest.raises(EmptyModelError):
        DecisionTreeClassifier().predict([[1.0]])
    with pytest.raises(EmptyModelError):
        DecisionTreeRegressor().predict([1.0])


def test_predict_feature_count_mismatch():
    X, y = _tiny_dataset()
    clf = DecisionTreeClassifier().fit(X, y)
    with pytest.raises(ValidationError):
        clf.predict([[1.0, 2.0]])
    with pytest.raises(ValidationError):
        clf.predict([1.0, 2.0])


def test_sklearn_clone_and_params():
    clf = DecisionTreeClassifier(max_depth=3, verbose=1)
    params = clone(clf).get_params()
    assert params == {"max_depth": 3, "verbose": 1}


def test_verbose_fit_logs_summary(caplog):
    X, y = _tiny_dataset()
    with caplog.at_level(logging.INFO, logger="cartree"):
        DecisionTreeClassifier(verbose=1).fit(X, y)
    assert "depth 1 and 2 leaves" in caplog.text
