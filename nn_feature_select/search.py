"""
nn_feature_select.search
========================
Greedy stepwise search over feature subsets, scored by leave-one-out
1-NN accuracy.

Two directions are supported:

**Forward selection**
    Start from the empty subset and, ``n_features`` times, add the feature
    whose inclusion gives the highest accuracy.

**Backward elimination**
    Start from all features and, ``n_features - 1`` times, remove the
    feature whose removal gives the highest accuracy.

Each step always moves, even when every candidate is worse than the best
subset seen so far.  The answer is the best subset over the whole path,
which may differ from where the search ends up; ``accuracy_decreased``
flags that case.

Selection within a step uses strict ``>``, so on ties the first candidate
wins: the smallest feature index for forward selection, the first feature
in the current subset for backward elimination.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, NamedTuple, Optional, Sequence

import numpy as np
from joblib import Parallel, delayed

from .metric import loo_accuracy


__all__ = [
    "DIRECTIONS",
    "SearchResult",
    "SearchStep",
    "TraceEntry",
    "backward_elimination",
    "forward_selection",
    "run_search",
]

logger = logging.getLogger(__name__)

DIRECTIONS = ("forward", "backward")


class TraceEntry(NamedTuple):
    """One evaluated candidate subset."""
    step: int
    subset: tuple[int, ...]
    accuracy: float


class SearchStep(NamedTuple):
    """Subset chosen at the end of a step (step 0 is the starting point)."""
    step: int
    feature: Optional[int]
    subset: tuple[int, ...]
    accuracy: float


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a forward or backward search.

    Attributes
    ----------
    direction : str
        ``"forward"`` or ``"backward"``.
    best_subset : tuple of int
        Best subset seen over the whole path (0-based indices).
    best_accuracy : float
        Leave-one-out accuracy of ``best_subset``.
    path : list of SearchStep
        Starting point followed by the subset chosen at every step.
    trace : list of TraceEntry
        Every subset evaluated, in evaluation order.
    n_features : int
        Number of features in the dataset.
    n_evaluations : int
        Leave-one-out scores actually computed (cache hits excluded).
    """
    direction: str
    best_subset: tuple[int, ...]
    best_accuracy: float
    path: list[SearchStep] = field(default_factory=list)
    trace: list[TraceEntry] = field(default_factory=list)
    n_features: int = 0
    n_evaluations: int = 0

    @property
    def final_accuracy(self) -> float:
        return self.path[-1].accuracy

    @property
    def accuracy_decreased(self) -> bool:
        """True when the search ended below the best accuracy it saw."""
        return self.final_accuracy < self.best_accuracy


TraceCallback = Callable[[TraceEntry], None]
StepCallback = Callable[[SearchStep], None]


# ---------------------------------------------------------------------------
# Public functions
# ---------------------------------------------------------------------------

def forward_selection(X, y, **options) -> SearchResult:
    """Grow a subset one feature at a time from the empty set.

    Parameters
    ----------
    X : array-like, shape (n_samples, n_features)
    y : array-like, shape (n_samples,)
    **options
        ``n_jobs``, ``callback``, ``step_callback`` and ``cache``;
        see :func:`run_search`.

    Returns
    -------
    SearchResult
    """
    return run_search(X, y, "forward", **options)


def backward_elimination(X, y, **options) -> SearchResult:
    """Shrink the full feature set one feature at a time.

    See :func:`forward_selection` for parameters.
    """
    return run_search(X, y, "backward", **options)


def run_search(
    X,
    y,
    direction: str = "forward",
    *,
    n_jobs: int = 1,
    callback: TraceCallback | None = None,
    step_callback: StepCallback | None = None,
    cache: dict | None = None,
) -> SearchResult:
    """Run a greedy stepwise search in the given direction.

    Parameters
    ----------
    X : array-like, shape (n_samples, n_features)
    y : array-like, shape (n_samples,)
    direction : {"forward", "backward"}
    n_jobs : int, default=1
        Joblib workers used to score the candidates of one step.
        Selection is made in candidate order, so the result does not
        depend on which worker finishes first.
    callback : callable, optional
        Called with every :class:`TraceEntry` as soon as it is scored.
    step_callback : callable, optional
        Called with every :class:`SearchStep`, including step 0.
    cache : dict, optional
        Maps ``frozenset(subset)`` to accuracy.  Subsets found in it are
        not rescored and new scores are written back, so a dict shared
        between calls on the *same* dataset avoids repeated work.

    Returns
    -------
    SearchResult
    """
    if direction not in DIRECTIONS:
        raise ValueError(
            f"direction must be one of {DIRECTIONS}, got {direction!r}."
        )

    X_arr = np.asarray(X, dtype=float)
    y_arr = np.asarray(y)
    if X_arr.ndim != 2:
        raise ValueError(f"X must be 2-D, got shape {X_arr.shape}.")
    n_features = X_arr.shape[1]

    evaluator = _SubsetEvaluator(X_arr, y_arr, n_jobs, callback, cache)

    if direction == "forward":
        current: tuple[int, ...] = ()
        n_steps = n_features
    else:
        current = tuple(range(n_features))
        n_steps = max(n_features - 1, 0)

    start = SearchStep(0, None, current, evaluator.score([current], step=0)[0])
    path = [start]
    if step_callback is not None:
        step_callback(start)

    best_subset, best_accuracy = start.subset, start.accuracy

    for step in range(1, n_steps + 1):
        if direction == "forward":
            moves = [f for f in range(n_features) if f not in current]
            candidates = [current + (f,) for f in moves]
        else:
            moves = list(current)
            candidates = [tuple(g for g in current if g != f) for f in moves]

        scores = evaluator.score(candidates, step=step)

        chosen = 0
        for k in range(1, len(scores)):
            if scores[k] > scores[chosen]:
                chosen = k

        current = candidates[chosen]
        chosen_step = SearchStep(step, moves[chosen], current, scores[chosen])
        path.append(chosen_step)
        if step_callback is not None:
            step_callback(chosen_step)

        logger.debug(
            "Step %d: %s feature %d -> %s (%.2f%%)",
            step, "added" if direction == "forward" else "removed",
            moves[chosen], current, scores[chosen],
        )

        if chosen_step.accuracy > best_accuracy:
            best_subset, best_accuracy = current, chosen_step.accuracy

    result = SearchResult(
        direction=direction,
        best_subset=best_subset,
        best_accuracy=best_accuracy,
        path=path,
        trace=evaluator.trace,
        n_features=n_features,
        n_evaluations=evaluator.n_evaluations,
    )
    logger.info(
        "%s search finished after %d evaluations: best %s at %.2f%%",
        direction.capitalize(), evaluator.n_evaluations,
        best_subset, best_accuracy,
    )
    return result


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

class _SubsetEvaluator:
    """Scores candidate subsets, records the trace and fills the cache."""

    def __init__(self, X, y, n_jobs, callback, cache):
        self.X = X
        self.y = y
        self.n_jobs = n_jobs
        self.callback = callback
        self.cache = cache
        self.trace: list[TraceEntry] = []
        self.n_evaluations = 0

    def _cached(self, key: frozenset) -> bool:
        return self.cache is not None and key in self.cache

    def score(self, candidates: Sequence[tuple[int, ...]], step: int) -> list[float]:
        prefetched: dict[frozenset, float] = {}
        if self.n_jobs != 1 and len(candidates) > 1:
            todo = [c for c in candidates if not self._cached(frozenset(c))]
            results = Parallel(n_jobs=self.n_jobs)(
                delayed(loo_accuracy)(self.X, self.y, c) for c in todo
            )
            prefetched = {frozenset(c): acc for c, acc in zip(todo, results)}

        scores = []
        for cand in candidates:
            key = frozenset(cand)
            if self._cached(key):
                acc = self.cache[key]
            else:
                if key in prefetched:
                    acc = prefetched[key]
                else:
                    acc = loo_accuracy(self.X, self.y, cand)
                self.n_evaluations += 1
                if self.cache is not None:
                    self.cache[key] = acc
            scores.append(acc)

            entry = TraceEntry(step, cand, acc)
            self.trace.append(entry)
            if self.callback is not None:
                self.callback(entry)
        return scores
