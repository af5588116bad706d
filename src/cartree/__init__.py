# cartree/__init__.py
"""
cartree: CART decision trees and random forests in pure Python (scikit-learn style).

Exports:
    - DecisionTreeClassifier, DecisionTreeRegressor
    - RandomForestClassifier, RandomForestRegressor
    - gini_gain, information_gain, variance_gain
    - calc_accuracy, calc_depth
    - ValidationError, EmptyModelError, ConfigError
"""
from .criteria import gini_gain, information_gain, variance_gain
from .exceptions import CartreeError, ConfigError, EmptyModelError, ValidationError
from .forest import RandomForestClassifier, RandomForestRegressor
from .metrics import calc_accuracy
from .node import Node, Task
from .tree import DecisionTreeClassifier, DecisionTreeRegressor, calc_depth

__all__ = [
    "DecisionTreeClassifier", "DecisionTreeRegressor",
    "RandomForestClassifier", "RandomForestRegressor",
    "Node", "Task",
    "gini_gain", "information_gain", "variance_gain",
    "calc_accuracy", "calc_depth",
    "CartreeError", "ValidationError", "EmptyModelError", "ConfigError",
]
__version__ = "0.1.0"
