"""
Tests for nn_feature_select.metric
"""

import numpy as np
import pytest

from nn_feature_select import classify, distance, loo_accuracy
from nn_feature_select.metric import loo_mistakes, nearest_neighbors


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_twins():
    """Two identical label-1 rows and one distant label-2 row."""
    X = np.array([[0., 0.], [0., 0.], [10., 10.]])
    y = np.array([1, 1, 2])
    return X, y


def make_alternating():
    """Feature 0 always points to the wrong class, feature 1 to the right one."""
    X = np.array([[0., 0.], [1., 10.], [2., 0.], [3., 10.]])
    y = np.array([1, 2, 1, 2])
    return X, y


def brute_force_loo(X, y, subset):
    """Leave-one-out by literally removing each row and calling classify."""
    correct = 0
    for i in range(len(X)):
        X_train = np.delete(X, i, axis=0)
        y_train = np.delete(y, i)
        if classify(X_train, y_train, X[i], subset) == y[i]:
            correct += 1
    return 100.0 * correct / len(X)


# ---------------------------------------------------------------------------
# Tests: distance
# ---------------------------------------------------------------------------

class TestDistance:
    def test_pythagorean(self):
        assert distance([0, 0, 9], [3, 4, 0], [0, 1]) == pytest.approx(5.0)

    def test_ignores_unselected_columns(self):
        assert distance([1, 100], [1, -100], [0]) == 0.0

    def test_order_of_subset_irrelevant(self):
        a, b = [1., 2., 3.], [4., 0., 7.]
        assert distance(a, b, [0, 2]) == pytest.approx(distance(a, b, [2, 0]))

    def test_empty_subset_is_zero(self):
        assert distance([1., 2.], [5., 9.], []) == 0.0

    def test_non_negative(self):
        rng = np.random.default_rng(0)
        a, b = rng.normal(size=5), rng.normal(size=5)
        assert distance(a, b, range(5)) >= 0.0

    def test_index_out_of_range_raises(self):
        with pytest.raises(ValueError, match="out of range"):
            distance([1., 2.], [3., 4.], [0, 2])

    def test_negative_index_raises(self):
        with pytest.raises(ValueError, match="out of range"):
            distance([1., 2.], [3., 4.], [-1])


# ---------------------------------------------------------------------------
# Tests: classify
# ---------------------------------------------------------------------------

class TestClassify:
    def test_nearest_label(self):
        X = np.array([[0.], [5.], [10.]])
        y = np.array([1, 2, 3])
        assert classify(X, y, [6.], [0]) == 2

    def test_first_row_wins_ties(self):
        X = np.array([[-1.], [1.]])
        y = np.array([7, 8])
        assert classify(X, y, [0.], [0]) == 7

    def test_empty_subset_returns_first_label(self):
        X = np.array([[100.], [0.]])
        y = np.array([4, 5])
        assert classify(X, y, [0.], []) == 4

    def test_empty_training_set_returns_none(self):
        X = np.zeros((0, 2))
        y = np.zeros(0, dtype=int)
        assert classify(X, y, [1., 1.], [0, 1]) is None

    def test_subset_restricts_distance(self):
        X = np.array([[0., 100.], [3., 0.]])
        y = np.array([1, 2])
        assert classify(X, y, [0., 0.], [0]) == 1
        assert classify(X, y, [0., 0.], [1]) == 2


# ---------------------------------------------------------------------------
# Tests: loo_accuracy
# ---------------------------------------------------------------------------

class TestLooAccuracy:
    def test_twins(self):
        X, y = make_twins()
        # the label-2 row has no other label-2 row, its neighbor is a twin
        assert loo_accuracy(X, y, [0, 1]) == pytest.approx(200 / 3)
        assert loo_mistakes(X, y, [0, 1]).tolist() == [False, False, True]

    def test_alternating(self):
        X, y = make_alternating()
        assert loo_accuracy(X, y, [0]) == 0.0
        assert loo_accuracy(X, y, [0, 1]) == 100.0

    def test_empty_subset_uses_first_row(self):
        X = np.array([[0.], [1.], [2.], [3.]])
        y = np.array([1, 2, 1, 1])
        # rows 1..3 are matched to row 0, row 0 to row 1
        assert loo_accuracy(X, y, []) == 50.0

    def test_range_0_100(self):
        rng = np.random.default_rng(3)
        X = rng.normal(size=(40, 5))
        y = rng.integers(0, 3, size=40)
        for subset in [[0], [1, 2], [0, 1, 2, 3, 4], []]:
            assert 0.0 <= loo_accuracy(X, y, subset) <= 100.0

    def test_invariant_under_row_order(self):
        rng = np.random.default_rng(4)
        X = rng.normal(size=(30, 4))
        y = rng.integers(0, 2, size=30)
        perm = rng.permutation(30)
        assert loo_accuracy(X, y, [0, 2]) == pytest.approx(
            loo_accuracy(X[perm], y[perm], [0, 2])
        )

    def test_matches_brute_force_with_ties(self):
        rng = np.random.default_rng(5)
        X = rng.integers(0, 3, size=(25, 3)).astype(float)
        y = rng.integers(0, 2, size=25)
        for subset in [[0], [0, 1], [2, 1, 0]]:
            assert loo_accuracy(X, y, subset) == pytest.approx(
                brute_force_loo(X, y, subset)
            )

    def test_single_instance_is_zero(self):
        assert loo_accuracy(np.array([[1., 2.]]), np.array([1]), [0, 1]) == 0.0

    def test_empty_dataset_is_zero(self):
        assert loo_accuracy(np.zeros((0, 2)), np.zeros(0, dtype=int), [0]) == 0.0

    def test_feature_count_mismatch_raises(self):
        X, y = make_twins()
        with pytest.raises(ValueError, match="out of range"):
            loo_accuracy(X, y, [0, 2])

    def test_label_count_mismatch_raises(self):
        X, _ = make_twins()
        with pytest.raises(ValueError, match="labels"):
            loo_accuracy(X, [1, 2], [0])


# ---------------------------------------------------------------------------
# Tests: nearest_neighbors
# ---------------------------------------------------------------------------

class TestNearestNeighbors:
    def test_never_self(self):
        rng = np.random.default_rng(6)
        X = rng.normal(size=(20, 3))
        nn = nearest_neighbors(X, [0, 1, 2])
        assert (nn != np.arange(20)).all()

    def test_duplicate_rows_are_neighbors(self):
        X, _ = make_twins()
        assert nearest_neighbors(X, [0, 1]).tolist() == [1, 0, 0]

    def test_single_row_has_no_neighbor(self):
        assert nearest_neighbors(np.array([[1., 1.]]), [0]).tolist() == [-1]
