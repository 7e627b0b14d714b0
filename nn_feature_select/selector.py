"""
nn_feature_select.selector
==========================
Scikit-learn compatible estimator around the greedy 1-NN search.

The estimator follows the standard sklearn API:

    selector = NearestNeighborFeatureSelector(direction="backward")
    selector.fit(X_train, y_train)
    X_reduced = selector.transform(X_train)

It also supports ``set_output(transform="pandas")`` if pandas is installed.
"""

from __future__ import annotations

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from .metric import loo_mistakes
from .search import DIRECTIONS, SearchStep, TraceEntry, run_search


__all__ = ["NearestNeighborFeatureSelector"]


class NearestNeighborFeatureSelector(TransformerMixin, BaseEstimator):
    """Greedy stepwise feature selector scored by leave-one-out 1-NN.

    **Forward selection**
        Starting from no features, repeatedly add the feature that gives
        the highest leave-one-out accuracy until every feature is in.

    **Backward elimination**
        Starting from all features, repeatedly remove the feature whose
        removal gives the highest accuracy until one feature is left.

    The selected subset is the best one seen anywhere along the path.

    Parameters
    ----------
    direction : {"forward", "backward"}, default="forward"
        Search direction.
    n_jobs : int, default=1
        Parallel jobs used to score the candidates of one step.
        Pass ``-1`` to use all available cores.
    use_cache : bool, default=True
        Keep scores of evaluated subsets for the duration of ``fit``.
    verbose : int, default=0
        Verbosity level (0 = silent, 1 = per step, 2 = every candidate).

    Attributes
    ----------
    selected_features_ : tuple of int
        Sorted indices of the selected features.
    accuracy_ : float
        Leave-one-out accuracy (percent) of the selected subset.
    result_ : SearchResult
        Full search outcome.
    path_ : list of SearchStep
        Subset chosen at every step, starting point included.
    trace_ : list of TraceEntry
        Every subset evaluated during the search.
    accuracy_decreased_ : bool
        Whether the last step ended below ``accuracy_``.
    n_features_in_ : int
        Total number of features seen during fit.

    Examples
    --------
    >>> from sklearn.datasets import load_iris
    >>> from sklearn.preprocessing import StandardScaler
    >>> from nn_feature_select import NearestNeighborFeatureSelector
    >>>
    >>> X, y = load_iris(return_X_y=True)
    >>> X = StandardScaler().fit_transform(X)
    >>> selector = NearestNeighborFeatureSelector(direction="forward")
    >>> selector.fit(X, y)
    NearestNeighborFeatureSelector()
    >>> selector.selected_features_
    (...)
    """

    def __init__(
        self,
        direction: str = "forward",
        n_jobs: int = 1,
        use_cache: bool = True,
        verbose: int = 0,
    ):
        self.direction = direction
        self.n_jobs    = n_jobs
        self.use_cache = use_cache
        self.verbose   = verbose

    # ------------------------------------------------------------------
    # sklearn API
    # ------------------------------------------------------------------

    def fit(self, X: np.ndarray, y: np.ndarray) -> "NearestNeighborFeatureSelector":
        """Run the greedy search and store the best subset.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)
            Training data, already normalized.
        y : array-like, shape (n_samples,)
            Class labels.

        Returns
        -------
        self
        """
        X_arr = np.asarray(X, dtype=float)
        y_arr = np.asarray(y)
        self._validate_params(X_arr, y_arr)
        self.n_features_in_ = X_arr.shape[1]

        if self.verbose >= 1:
            print(
                f"[{type(self).__name__}] Running {self.direction} search "
                f"over {self.n_features_in_} features, "
                f"{len(X_arr)} samples ..."
            )

        self.result_ = run_search(
            X_arr, y_arr, self.direction,
            n_jobs=self.n_jobs,
            callback=self._report_candidate if self.verbose >= 2 else None,
            step_callback=self._report_step if self.verbose >= 1 else None,
            cache={} if self.use_cache else None,
        )

        self.selected_features_   = tuple(sorted(self.result_.best_subset))
        self.accuracy_            = self.result_.best_accuracy
        self.path_                = self.result_.path
        self.trace_               = self.result_.trace
        self.accuracy_decreased_  = self.result_.accuracy_decreased

        if self.verbose >= 1:
            if self.accuracy_decreased_:
                print(
                    f"[{type(self).__name__}] Warning: final accuracy "
                    f"{self.result_.final_accuracy:.2f}% is below the best "
                    f"{self.accuracy_:.2f}%"
                )
            print(
                f"[{type(self).__name__}] Done.  "
                f"Selected features: {self.selected_features_}  "
                f"LOO accuracy = {self.accuracy_:.2f}%"
            )

        return self

    def transform(self, X: np.ndarray) -> np.ndarray:
        """Project X onto the selected feature subset.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)

        Returns
        -------
        X_reduced : np.ndarray, shape (n_samples, n_selected)
        """
        check_is_fitted(self, "selected_features_")
        X_arr = np.asarray(X, dtype=float)
        return X_arr[:, list(self.selected_features_)]

    def get_support(self, indices: bool = False):
        """Return a mask or indices of the selected features.

        Parameters
        ----------
        indices : bool, default=False
            If ``True``, return indices; otherwise return a boolean mask.

        Returns
        -------
        mask : np.ndarray of bool, or np.ndarray of int
        """
        check_is_fitted(self, "selected_features_")
        mask = np.zeros(self.n_features_in_, dtype=bool)
        mask[list(self.selected_features_)] = True
        if indices:
            return np.where(mask)[0]
        return mask

    def get_feature_names_out(self, input_features=None):
        """Get feature names for the selected features.

        Parameters
        ----------
        input_features : array-like of str, optional
            Input feature names.  If ``None``, uses ``x0``, ``x1``, etc.

        Returns
        -------
        feature_names_out : np.ndarray of str
        """
        check_is_fitted(self, "selected_features_")
        if input_features is None:
            input_features = [f"x{i}" for i in range(self.n_features_in_)]
        return np.array([input_features[i] for i in self.selected_features_])

    def misclassified(self, X: np.ndarray, y: np.ndarray) -> np.ndarray:
        """Boolean mask of rows that leave-one-out gets wrong on the
        selected subset."""
        check_is_fitted(self, "selected_features_")
        return loo_mistakes(X, y, self.selected_features_)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate_params(self, X: np.ndarray, y: np.ndarray):
        if self.direction not in DIRECTIONS:
            raise ValueError(
                f"direction must be one of {DIRECTIONS}, got {self.direction!r}."
            )
        if X.ndim != 2 or X.shape[1] < 1:
            raise ValueError("X must be 2-D with at least one feature.")
        if len(X) < 2:
            raise ValueError(
                "Leave-one-out needs at least 2 samples, "
                f"got {len(X)}."
            )
        if len(X) != len(y):
            raise ValueError(
                f"X has {len(X)} samples but y has {len(y)}."
            )

    def _report_candidate(self, entry: TraceEntry):
        print(
            f"  step {entry.step}  features={entry.subset}  "
            f"LOO accuracy={entry.accuracy:.2f}%"
        )

    def _report_step(self, step: SearchStep):
        if step.feature is None:
            print(
                f"[{type(self).__name__}] Start: features={step.subset}  "
                f"LOO accuracy={step.accuracy:.2f}%"
            )
            return
        verb = "added" if self.direction == "forward" else "removed"
        print(
            f"[{type(self).__name__}] Step {step.step}: {verb} {step.feature}  "
            f"-> features={step.subset}  LOO accuracy={step.accuracy:.2f}%"
        )

    def summary(self) -> str:
        """Return a human-readable summary of the fitted selector."""
        check_is_fitted(self, "selected_features_")
        lines = [
            f"{type(self).__name__} – fit summary",
            f"  direction              : {self.direction}",
            f"  n_features_in          : {self.n_features_in_}",
            f"  subsets evaluated      : {len(self.trace_)}",
            f"  selected features      : {self.selected_features_}",
            f"  LOO accuracy           : {self.accuracy_:.2f}%",
            f"  final step accuracy    : {self.result_.final_accuracy:.2f}%",
        ]
        if self.accuracy_decreased_:
            lines.append("  (accuracy decreased after the best subset)")
        return "\n".join(lines)
