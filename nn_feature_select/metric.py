"""
nn_feature_select.metric
========================
Euclidean distance, the 1-nearest-neighbor rule and leave-one-out accuracy,
all restricted to a feature subset.

For a subset S the leave-one-out accuracy is::

    LOO(S) = 100 * (1 / n) * Σ_i  1[ y[NN_S(i)] == y[i] ]

where NN_S(i) is the row closest to row i (i excluded) under Euclidean
distance on the columns in S.

Conventions
-----------
* Ties in distance go to the lowest row index, i.e. the first row met
  when scanning the training set in order.
* An empty subset gives a distance of 0 between any two rows, so every
  row is equidistant and the first candidate row is always the neighbor.
* A dataset with fewer than two rows has no leave-one-out neighbors;
  its accuracy is 0.
* ``loo_accuracy`` does not call ``classify`` row by row; it goes through
  ``nearest_neighbors``, which vectorizes the same rule (first-row argmin,
  held-out row excluded).  A change to the neighbor rule in one must be
  made in the other.
"""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np
from scipy.spatial.distance import cdist


__all__ = [
    "classify",
    "distance",
    "loo_accuracy",
    "loo_mistakes",
    "nearest_neighbors",
]


# ---------------------------------------------------------------------------
# Public functions
# ---------------------------------------------------------------------------

def distance(
    a: np.ndarray,
    b: np.ndarray,
    feature_indices: Iterable[int],
) -> float:
    """Euclidean distance between ``a`` and ``b`` over ``feature_indices``.

    Parameters
    ----------
    a, b : array-like, shape (n_features,)
        Feature vectors.
    feature_indices : iterable of int
        0-based columns to compare.  An empty subset yields ``0.0``.

    Returns
    -------
    float
        Non-negative distance.

    Examples
    --------
    >>> distance([0, 0, 9], [3, 4, 0], [0, 1])
    5.0
    """
    a_arr = np.asarray(a, dtype=float)
    b_arr = np.asarray(b, dtype=float)
    cols = _check_subset(feature_indices, min(a_arr.shape[-1], b_arr.shape[-1]))
    if not cols:
        return 0.0
    diff = a_arr[cols] - b_arr[cols]
    return float(np.sqrt(np.dot(diff, diff)))


def classify(
    X_train: np.ndarray,
    y_train: np.ndarray,
    x: np.ndarray,
    feature_indices: Iterable[int],
) -> Any:
    """Predict the label of ``x`` from its nearest training row.

    Parameters
    ----------
    X_train : array-like, shape (n_train, n_features)
    y_train : array-like, shape (n_train,)
    x : array-like, shape (n_features,)
        Query instance.
    feature_indices : iterable of int
        0-based columns used for the distance.

    Returns
    -------
    label or None
        Label of the closest training row (first one on ties), or ``None``
        when the training set is empty.
    """
    X_arr = np.asarray(X_train, dtype=float)
    y_arr = np.asarray(y_train)
    if len(X_arr) == 0:
        return None

    x_arr = np.asarray(x, dtype=float)
    cols = _check_subset(feature_indices, min(X_arr.shape[1], x_arr.shape[-1]))
    if cols:
        dists = cdist(x_arr[None, cols], X_arr[:, cols])[0]
    else:
        dists = np.zeros(len(X_arr))
    return y_arr[int(np.argmin(dists))]


def nearest_neighbors(
    X: np.ndarray,
    feature_indices: Iterable[int],
) -> np.ndarray:
    """Leave-one-out nearest neighbor of every row.

    Row ``i`` is matched against all rows except itself; duplicates of
    row ``i`` stored elsewhere are valid neighbors.

    Returns
    -------
    np.ndarray of int, shape (n_samples,)
        Index of each row's neighbor, ``-1`` where no other row exists.
    """
    X_arr = np.asarray(X, dtype=float)
    n = len(X_arr)
    if n < 2:
        return np.full(n, -1, dtype=int)

    cols = _check_subset(feature_indices, X_arr.shape[1])
    if cols:
        X_sub = X_arr[:, cols]
        dists = cdist(X_sub, X_sub)
    else:
        dists = np.zeros((n, n))
    np.fill_diagonal(dists, np.inf)
    return dists.argmin(axis=1)


def loo_accuracy(
    X: np.ndarray,
    y: np.ndarray,
    feature_indices: Iterable[int],
) -> float:
    """Leave-one-out accuracy (in percent) of 1-NN on a feature subset.

    Parameters
    ----------
    X : array-like, shape (n_samples, n_features)
    y : array-like, shape (n_samples,)
    feature_indices : iterable of int
        0-based columns forming the subset.

    Returns
    -------
    float
        Accuracy in [0, 100].

    Examples
    --------
    >>> X = [[0, 0], [0, 0], [10, 10]]
    >>> loo_accuracy(X, [1, 1, 2], [0, 1])
    66.66666666666667
    """
    mistakes = loo_mistakes(X, y, feature_indices)
    n = len(mistakes)
    if n == 0:
        return 0.0
    return 100.0 * (n - np.count_nonzero(mistakes)) / n


def loo_mistakes(
    X: np.ndarray,
    y: np.ndarray,
    feature_indices: Iterable[int],
) -> np.ndarray:
    """Boolean mask of rows that leave-one-out 1-NN gets wrong.

    A row with no possible neighbor (single-row dataset) has no
    prediction and counts as a mistake.
    """
    X_arr = np.asarray(X, dtype=float)
    y_arr = np.asarray(y)
    if len(X_arr) != len(y_arr):
        raise ValueError(
            f"X has {len(X_arr)} rows but y has {len(y_arr)} labels."
        )

    neighbors = nearest_neighbors(X_arr, feature_indices)
    wrong = np.ones(len(y_arr), dtype=bool)
    found = neighbors >= 0
    wrong[found] = y_arr[neighbors[found]] != y_arr[found]
    return wrong


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _check_subset(feature_indices: Iterable[int], n_features: int) -> list[int]:
    """Return the subset as a list, rejecting indices outside the vectors."""
    cols = [int(f) for f in feature_indices]
    bad = [f for f in cols if f < 0 or f >= n_features]
    if bad:
        raise ValueError(
            f"Feature indices {bad} are out of range for vectors with "
            f"{n_features} features."
        )
    return cols
