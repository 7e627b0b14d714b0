"""
Example 3 – Scoring Subsets Directly
====================================
Sometimes you just want the leave-one-out accuracy of a few subsets, or
the raw search trace, without the estimator wrapper.

This example shows the low-level API: ``loo_accuracy`` and ``run_search``.
"""

import numpy as np

from nn_feature_select import loo_accuracy, run_search
from nn_feature_select.plot import format_subset

# ---------------------------------------------------------------------------
# Synthetic dataset: 2 informative features + 2 noise features
# ---------------------------------------------------------------------------
rng = np.random.default_rng(0)
n   = 200

X = np.hstack([
    np.vstack([rng.normal([0, 0], 0.6, (n//2, 2)),
               rng.normal([2, 2], 0.6, (n//2, 2))]),   # informative
    rng.normal(0, 1, (n, 2)),                            # noise
])
y = np.array([0]*(n//2) + [1]*(n//2))

print("Features 1,2 = informative | 3,4 = noise\n")

# ---------------------------------------------------------------------------
# Score specific subsets
# ---------------------------------------------------------------------------
for subset in [(0, 1), (2, 3), (0, 2), (1, 3), (0, 1, 2, 3), ()]:
    score = loo_accuracy(X, y, subset)
    print(f"  LOO{format_subset(subset)} = {score:.1f}%")

# ---------------------------------------------------------------------------
# Stream the trace of a forward search
# ---------------------------------------------------------------------------
print("\nForward selection trace:")
result = run_search(
    X, y, "forward",
    callback=lambda e: print(f"  step {e.step}  {format_subset(e.subset):<10} {e.accuracy:.1f}%"),
)
print(f"\nBest subset {format_subset(result.best_subset)} at {result.best_accuracy:.1f}%")
if result.accuracy_decreased:
    print(f"(final subset only reached {result.final_accuracy:.1f}%)")
