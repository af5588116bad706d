import numpy as np
from time import perf_counter
from sklearn.datasets import load_diabetes
from sklearn.model_selection import train_test_split
from cartree import DecisionTreeRegressor, RandomForestRegressor

data = load_diabetes()
X_tr, X_te, y_tr, y_te = train_test_split(data.data, data.target, test_size=0.3, random_state=42)

reg = DecisionTreeRegressor(max_depth=3)
t0 = perf_counter(); reg.fit(X_tr, y_tr); print(f"fit: {perf_counter()-t0:.3f} s")
print(f"tree R^2: {reg.score(X_te, y_te):.3f}")
reg.print_tree()

forest = RandomForestRegressor(n_trees=20, max_depth=5, random_state=42).fit(X_tr, y_tr)
print(f"forest R^2: {forest.score(X_te, y_te):.3f}")
print("first predictions:", np.round(forest.predict(X_te[:5]), 1))
