"""
cartree.exceptions
==================

Errors raised by the estimators in this package.

- :class:`ValidationError` -- malformed training or prediction input.
- :class:`EmptyModelError` -- prediction requested before ``fit``.
- :class:`ConfigError` -- invalid constructor parameters.

All of them derive from :class:`CartreeError`, so callers can catch every
package error at once, and from the matching built-in / scikit-learn class so
generic ``ValueError`` handlers keep working.
"""
from __future__ import annotations

from sklearn.exceptions import NotFittedError


class CartreeError(Exception):
    """Base class for all cartree errors."""


class ValidationError(CartreeError, ValueError):
    """Raised when ``fit``/``predict`` input fails a shape or type check.

    Detected eagerly before any tree construction, so a failed ``fit`` leaves
    the estimator untouched.
    """


class EmptyModelError(CartreeError, NotFittedError):
    """Raised when predicting from an estimator that has not been fitted."""


class ConfigError(CartreeError, ValueError):
    """Raised for invalid estimator parameters, e.g. ``max_depth < -1``."""
