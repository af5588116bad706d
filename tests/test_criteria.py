import numpy as np
import pytest
from cartree.criteria import (entropy, gini_gain, gini_impurity, information_gain,
                              variance, variance_gain)


def test_impurities_on_balanced_labels():
    labels = np.array(["a", "a", "b", "b"], dtype=object)
    assert gini_impurity(labels) == pytest.approx(0.5)
    assert entropy(labels) == pytest.approx(1.0)


def test_pure_and_empty_sets_have_zero_impurity():
    assert gini_impurity(["a", "a", "a"]) == 0.0
    assert entropy(["a", "a", "a"]) == 0.0
    assert variance([3.0, 3.0]) == 0.0
    assert gini_impurity([]) == 0.0
    assert entropy([]) == 0.0
    assert variance([]) == 0.0


def test_variance_is_population_variance():
    assert variance([1.0, 2.0, 3.0, 4.0]) == pytest.approx(1.25)


def test_perfect_split_recovers_parent_impurity():
    parent = np.array(["a", "a", "b", "b"], dtype=object)
    t, f = parent[:2], parent[2:]
    assert gini_gain(parent, t, f) == pytest.approx(0.5)
    assert information_gain(parent, t, f) == pytest.approx(1.0)


def test_variance_gain_weights_children_by_size():
    parent = np.array([1.0, 2.0, 3.0, 4.0])
    # children variances 0.25 each, weighted mean 0.25
    assert variance_gain(parent, parent[:2], parent[2:]) == pytest.approx(1.0)


def test_uninformative_split_has_zero_gain():
    parent = np.array(["a", "b", "a", "b"], dtype=object)
    assert gini_gain(parent, parent[:2], parent[2:]) == pytest.approx(0.0)
    assert information_gain(parent, parent[:2], parent[2:]) == pytest.approx(0.0)
