"""
Example 2 – Backward Elimination inside an sklearn Pipeline
===========================================================
Demonstrates:
  * Backward elimination on Iris (4 features, 3 classes)
  * Using the selector as a Pipeline step
  * Comparing forward and backward paths on the same data
"""

from sklearn.datasets import load_iris
from sklearn.model_selection import cross_val_score
from sklearn.neighbors import KNeighborsClassifier
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from nn_feature_select import NearestNeighborFeatureSelector, forward_selection, normalize
from nn_feature_select.plot import format_subset

# ---------------------------------------------------------------------------
# 1. Load data
# ---------------------------------------------------------------------------
X, y = load_iris(return_X_y=True)
print(f"Dataset: {X.shape[0]} samples, {X.shape[1]} features, 3 classes\n")

# ---------------------------------------------------------------------------
# 2. Selector inside a Pipeline
# ---------------------------------------------------------------------------
pipe = Pipeline([
    ("scaler",   StandardScaler()),
    ("selector", NearestNeighborFeatureSelector(direction="backward", verbose=1)),
    ("clf",      KNeighborsClassifier(n_neighbors=1)),
])
pipe.fit(X, y)

selector = pipe.named_steps["selector"]
print()
print(selector.summary())

scores = cross_val_score(pipe, X, y, cv=5)
print(f"\n5-fold CV accuracy (full pipeline): {scores.mean():.4f} ± {scores.std():.4f}")

# ---------------------------------------------------------------------------
# 3. Forward vs backward
# ---------------------------------------------------------------------------
X_norm = normalize(X, "zscore")
forward = forward_selection(X_norm, y)

print("\nStep  forward                 backward")
for step in range(len(forward.path)):
    fwd = forward.path[step]
    line = f"{step:>4}  {format_subset(fwd.subset):<10} {fwd.accuracy:5.1f}%"
    if step < len(selector.path_):
        bwd = selector.path_[step]
        line += f"       {format_subset(bwd.subset):<10} {bwd.accuracy:5.1f}%"
    print(line)
