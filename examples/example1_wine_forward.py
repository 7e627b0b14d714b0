"""
Example 1 – Wine (Forward Selection)
====================================
Runs greedy forward selection on the Wine dataset and compares the
leave-one-out accuracy of the selected subset against all 13 features.

Dataset : Wine (13 features, 3 classes, 178 samples)
Search  : forward selection, scored by leave-one-out 1-NN
"""

from sklearn.datasets import load_wine

from nn_feature_select import NearestNeighborFeatureSelector, loo_accuracy, normalize
from nn_feature_select.plot import plot_feature_space_2d, plot_search_path

# ---------------------------------------------------------------------------
# 1. Load and normalize data
# ---------------------------------------------------------------------------
X, y = load_wine(return_X_y=True)
feature_names = load_wine().feature_names
X = normalize(X, "zscore")

print(f"Dataset: {X.shape[0]} samples, {X.shape[1]} features, 3 classes")
print(f"LOO accuracy with all features: {loo_accuracy(X, y, range(X.shape[1])):.1f}%\n")

# ---------------------------------------------------------------------------
# 2. Run forward selection
# ---------------------------------------------------------------------------
selector = NearestNeighborFeatureSelector(direction="forward", verbose=1)
selector.fit(X, y)
print()
print(selector.summary())
print("Selected:", ", ".join(selector.get_feature_names_out(feature_names)))

# ---------------------------------------------------------------------------
# 3. Visualise
# ---------------------------------------------------------------------------
plot_search_path(
    selector.result_,
    title="Wine – forward selection path",
    save_path="example1_path.png",
)

first_two = selector.result_.path[2].subset
plot_feature_space_2d(
    X, y,
    feature_indices=first_two,
    feature_names=feature_names,
    title="Wine – first two features added",
    save_path="example1_feature_space.png",
)

print("\nPlots saved: example1_path.png, example1_feature_space.png")
