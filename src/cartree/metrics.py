"""Evaluation helpers."""
from __future__ import annotations

from .exceptions import ValidationError


def calc_accuracy(labels, predictions) -> float:
    """
    Fraction of positions where ``predictions`` equals ``labels``.

    Returns 0.0 for empty inputs.

    Raises
    ------
    ValidationError
        If the two sequences differ in length.
    """
    if len(labels) != len(predictions):
        raise ValidationError(f"calc_accuracy: length of labels ({len(labels)}) and "
                              f"predictions ({len(predictions)}) must be equal.")
    if len(labels) == 0:
        return 0.0
    correct = sum(1 for a, b in zip(labels, predictions) if a == b)
    return correct / len(labels)
