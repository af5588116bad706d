import numpy as np
from cartree import (DecisionTreeClassifier, DecisionTreeRegressor, RandomForestClassifier,
                     RandomForestRegressor)
from cartree.export import export_rules


def test_classifier_smoke():
    X = np.array([[1, 'A'], [2, 'A'], [3, 'B'], [4, 'B']], dtype=object)
    y = np.array([0, 0, 1, 1])
    clf = DecisionTreeClassifier(max_depth=2)
    clf.fit(X, y)
    _ = clf.predict(X)
    _ = export_rules(clf, feature_names=['num', 'cat'])


def test_regressor_smoke():
    X = np.array([[1.0, 'A'], [2.0, 'A'], [3.0, 'B'], [4.0, 'B']], dtype=object)
    y = np.array([1.0, 1.5, 2.0, 2.5])
    regr = DecisionTreeRegressor()
    regr.fit(X, y)
    _ = regr.predict(X)
    _ = str(regr)


def test_forest_smoke():
    X = np.array([[1.0, 'A'], [2.0, 'A'], [3.0, 'B'], [4.0, 'B']], dtype=object)
    RandomForestClassifier(n_trees=3, random_state=0).fit(X, np.array(['n', 'n', 'y', 'y'])).predict(X)
    RandomForestRegressor(n_trees=3, random_state=0).fit(X, np.array([1.0, 1.5, 2.0, 2.5])).predict(X)
