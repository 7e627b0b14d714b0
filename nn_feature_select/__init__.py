"""
nn_feature_select
=================
Greedy stepwise feature selection for a 1-nearest-neighbor classifier,
scored by leave-one-out cross-validation.

Core idea
---------
**Leave-one-out scoring**
    For a candidate feature subset S, every instance is held out in turn
    and classified by its nearest neighbor among the remaining instances,
    using Euclidean distance on the columns in S.  The score is the
    percentage of instances classified correctly::

        LOO(S) = 100 * (number of correct predictions) / n

**Greedy search**
    Forward selection starts from no features and adds, at every step,
    the feature that gives the highest LOO(S).  Backward elimination starts
    from all features and removes, at every step, the feature whose removal
    gives the highest LOO(S).  The search always runs to completion, even
    through steps that lower accuracy, and reports the best subset seen
    anywhere along the way.

Public API
----------
NearestNeighborFeatureSelector  – sklearn-compatible estimator
forward_selection               – run forward selection on (X, y)
backward_elimination            – run backward elimination on (X, y)
run_search                      – either direction by name
loo_accuracy                    – score a single feature subset
load_dataset                    – read and normalize a dataset file
"""

from .dataset  import DatasetFormatError, load_dataset, normalize
from .metric   import classify, distance, loo_accuracy
from .search   import (
    SearchResult,
    SearchStep,
    TraceEntry,
    backward_elimination,
    forward_selection,
    run_search,
)
from .selector import NearestNeighborFeatureSelector

__all__ = [
    "DatasetFormatError",
    "NearestNeighborFeatureSelector",
    "SearchResult",
    "SearchStep",
    "TraceEntry",
    "backward_elimination",
    "classify",
    "distance",
    "forward_selection",
    "load_dataset",
    "loo_accuracy",
    "normalize",
    "run_search",
]

__version__ = "0.1.0"
