"""
nn_feature_select.dataset
=========================
Loading labeled feature vectors from whitespace-separated text files.

File format
-----------
One instance per line.  The first token is the class label, the remaining
tokens are real-valued features::

    2.0000000e+00   1.2340000e+00   -3.4000000e-01   ...
    1.0000000e+00   7.1200000e-01    2.2100000e+00   ...

Labels may be written as reals but must be integral.  Blank lines are
ignored.  Every line must carry the same number of features, and every
value must be finite (no ``nan`` or ``inf``).

Normalization
-------------
Features are rescaled once, over the whole file, before any search runs.
Leave-one-out therefore sees scaling statistics that include the held-out
instance.  This is a known leak; it is kept so that accuracies stay
comparable with results computed the same way.
"""

from __future__ import annotations

import logging
from os import PathLike
from typing import Callable

import numpy as np
from sklearn.preprocessing import MinMaxScaler, StandardScaler


__all__ = [
    "NORMALIZERS",
    "DatasetFormatError",
    "load_dataset",
    "normalize",
    "parse_lines",
]

logger = logging.getLogger(__name__)

NORMALIZERS: dict[str, Callable[[], object] | None] = {
    "zscore": StandardScaler,
    "minmax": MinMaxScaler,
    "none":   None,
}


class DatasetFormatError(ValueError):
    """Raised when a dataset file cannot be parsed into labeled vectors."""


def load_dataset(
    path: str | PathLike,
    normalization: str = "zscore",
) -> tuple[np.ndarray, np.ndarray]:
    """Read and normalize a dataset file.

    Parameters
    ----------
    path : str or path-like
        Text file in the format described in the module docstring.
    normalization : {"zscore", "minmax", "none"}, default="zscore"
        Strategy applied column-wise over the whole dataset.

    Returns
    -------
    X : np.ndarray, shape (n_samples, n_features)
        Normalized features (read-only).
    y : np.ndarray of int, shape (n_samples,)
        Class labels (read-only).
    """
    if normalization not in NORMALIZERS:
        raise ValueError(
            f"normalization must be one of {sorted(NORMALIZERS)}, "
            f"got {normalization!r}."
        )

    with open(path, "r", encoding="utf-8") as fh:
        try:
            X, y = parse_lines(fh)
        except UnicodeDecodeError as exc:
            raise DatasetFormatError(f"not a UTF-8 text file: {exc}") from exc

    logger.info(
        "Loaded %d instances with %d features from %s",
        X.shape[0], X.shape[1], path,
    )

    X = normalize(X, normalization)
    X.setflags(write=False)
    y.setflags(write=False)
    return X, y


def parse_lines(lines) -> tuple[np.ndarray, np.ndarray]:
    """Parse an iterable of text lines into ``(X, y)`` without normalizing."""
    rows: list[list[float]] = []
    labels: list[int] = []
    width = None

    for lineno, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens:
            continue
        try:
            values = [float(t) for t in tokens]
        except ValueError as exc:
            raise DatasetFormatError(f"line {lineno}: {exc}") from exc

        label, features = values[0], values[1:]
        if not features:
            raise DatasetFormatError(f"line {lineno}: no feature values")
        if not np.all(np.isfinite(values)):
            raise DatasetFormatError(f"line {lineno}: non-finite value")
        if not float(label).is_integer():
            raise DatasetFormatError(
                f"line {lineno}: class label {tokens[0]!r} is not an integer"
            )
        if width is None:
            width = len(features)
        elif len(features) != width:
            raise DatasetFormatError(
                f"line {lineno}: expected {width} features, "
                f"found {len(features)}"
            )

        labels.append(int(label))
        rows.append(features)

    if not rows:
        raise DatasetFormatError("dataset contains no instances")

    return np.array(rows, dtype=float), np.array(labels, dtype=int)


def normalize(X: np.ndarray, strategy: str = "zscore") -> np.ndarray:
    """Rescale every column of ``X`` with the named strategy.

    Constant columns are left at 0 by both scalers rather than producing
    NaNs.
    """
    try:
        factory = NORMALIZERS[strategy]
    except KeyError:
        raise ValueError(
            f"normalization must be one of {sorted(NORMALIZERS)}, "
            f"got {strategy!r}."
        ) from None

    X_arr = np.array(X, dtype=float)
    if factory is None:
        return X_arr

    logger.info("Normalizing %d features with %s", X_arr.shape[1], strategy)
    return factory().fit_transform(X_arr)
