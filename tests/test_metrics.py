import pytest
from cartree import ValidationError, calc_accuracy


def test_accuracy_counts_matching_positions():
    assert calc_accuracy(["a", "b", "c", "d"], ["a", "b", "x", "y"]) == 0.5


def test_accuracy_bounds():
    labels = [1.0, 2.0, 3.0]
    assert calc_accuracy(labels, labels) == 1.0
    assert calc_accuracy(labels, [0.0, 0.0, 0.0]) == 0.0
    assert calc_accuracy([], []) == 0.0


def test_accuracy_length_mismatch_raises():
    with pytest.raises(ValidationError):
        calc_accuracy(["a"], ["a", "b"])
