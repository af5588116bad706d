from time import perf_counter
from sklearn.datasets import load_iris
from sklearn.model_selection import train_test_split
from cartree import DecisionTreeClassifier, RandomForestClassifier, calc_accuracy
from cartree.export import export_graphviz

data = load_iris()
feats = list(data.feature_names)
y = data.target_names[data.target]
X_tr, X_te, y_tr, y_te = train_test_split(data.data, y, test_size=0.3, random_state=42)

clf = DecisionTreeClassifier(max_depth=4)
t0 = perf_counter(); clf.fit(X_tr, y_tr); print(f"fit: {perf_counter()-t0:.3f} s")
print(f"tree accuracy: {calc_accuracy(y_te, clf.predict(X_te)):.3f} (depth {clf.get_depth()})")
print(clf)

forest = RandomForestClassifier(n_trees=25, max_depth=4, random_state=42).fit(X_tr, y_tr)
print(f"forest accuracy: {calc_accuracy(y_te, forest.predict(X_te)):.3f}")

try:
    export_graphviz(clf, "iris_tree", feature_names=feats, format="dot")
except RuntimeError as e:
    print(f"Skipping Graphviz export: {e}")
