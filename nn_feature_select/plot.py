"""
nn_feature_select.plot
======================
Visualization helpers for the greedy nearest-neighbor search.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from .metric import loo_mistakes
from .search import SearchResult


__all__ = ["format_subset", "plot_feature_space_2d", "plot_search_path"]


def format_subset(subset: Sequence[int]) -> str:
    """Render 0-based indices as a 1-based set, e.g. ``(0, 3) -> "{1,4}"``."""
    return "{" + ",".join(str(f + 1) for f in subset) + "}"


def plot_search_path(
    result: SearchResult,
    *,
    title: str | None = None,
    ax: Optional[plt.Axes] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Bar chart of the accuracy of the subset chosen at each step.

    The bar of the best subset overall is highlighted in red.

    Parameters
    ----------
    result : SearchResult
        Output of :func:`~nn_feature_select.run_search`.
    title : str, optional
        Plot title.  Defaults to the search direction.
    ax : matplotlib Axes, optional
    save_path : str, optional

    Returns
    -------
    matplotlib.figure.Figure
    """
    path   = result.path
    labels = [format_subset(s.subset) for s in path]
    scores = [s.accuracy for s in path]
    best_step = next(
        s.step for s in path if s.subset == result.best_subset
    )
    colors = ["#C44E52" if s.step == best_step else "#4C72B0" for s in path]

    if ax is None:
        fig, ax = plt.subplots(figsize=(max(8, len(path) * 0.55), 4))
    else:
        fig = ax.get_figure()

    bars = ax.bar(range(len(path)), scores, color=colors, edgecolor="white", linewidth=0.5)
    ax.set_xticks(range(len(path)))
    ax.set_xticklabels(labels, rotation=60, ha="right", fontsize=8)
    ax.set_xlabel("Feature subset at each step", fontsize=11)
    ax.set_ylabel("Leave-one-out accuracy (%)", fontsize=12)
    ax.set_title(title or f"{result.direction.capitalize()} search", fontsize=13)
    ax.set_ylim(0, 105)

    for bar, score in zip(bars, scores):
        ax.text(
            bar.get_x() + bar.get_width() / 2,
            bar.get_height() + 1,
            f"{score:.1f}",
            ha="center", va="bottom", fontsize=7,
        )

    patch = mpatches.Patch(
        color="#C44E52",
        label=f"Best: {format_subset(result.best_subset)} "
              f"({result.best_accuracy:.1f}%)",
    )
    ax.legend(handles=[patch], fontsize=9)

    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig


def plot_feature_space_2d(
    X: np.ndarray,
    y: np.ndarray,
    feature_indices: tuple[int, int],
    *,
    feature_names: Sequence[str] | None = None,
    title: str = "Feature space",
    ax: Optional[plt.Axes] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Scatter plot of two features with leave-one-out mistakes marked.

    Points whose nearest neighbor (on these two features) carries a
    different label are drawn as black crosses.

    Parameters
    ----------
    X : array-like, shape (n_samples, n_features)
    y : array-like, shape (n_samples,)
    feature_indices : (int, int)
        Pair of 0-based feature indices to plot.
    feature_names : sequence of str, optional
        Names for all features (for axis labels).
    title : str
    ax : matplotlib Axes, optional
    save_path : str, optional

    Returns
    -------
    matplotlib.figure.Figure
    """
    X_arr = np.asarray(X, dtype=float)
    y_arr = np.asarray(y)
    i, j  = feature_indices
    X_sub = X_arr[:, [i, j]]

    classes   = np.unique(y_arr)
    cmap      = plt.cm.tab10(np.linspace(0, 0.85, len(classes)))
    class_col = {cls: cmap[k] for k, cls in enumerate(classes)}

    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 6))
    else:
        fig = ax.get_figure()

    wrong = loo_mistakes(X_sub, y_arr, [0, 1])

    legend_handles = []
    for cls in classes:
        mask = (y_arr == cls) & ~wrong
        ax.scatter(
            X_sub[mask, 0], X_sub[mask, 1],
            c=[class_col[cls]], s=30, edgecolors="white",
            linewidths=0.4, label=f"Class {cls}",
            zorder=3,
        )
        legend_handles.append(
            mpatches.Patch(color=class_col[cls], label=f"Class {cls}")
        )

    if wrong.any():
        ax.scatter(
            X_sub[wrong, 0], X_sub[wrong, 1],
            c="black", s=35, marker="x", linewidths=1.2,
            label="Misclassified", zorder=4,
        )
        legend_handles.append(
            mpatches.Patch(color="black", label="Misclassified (LOO)")
        )

    if feature_names is not None:
        ax.set_xlabel(feature_names[i], fontsize=12)
        ax.set_ylabel(feature_names[j], fontsize=12)
    else:
        ax.set_xlabel(f"Feature {i + 1}", fontsize=12)
        ax.set_ylabel(f"Feature {j + 1}", fontsize=12)

    accuracy = 100.0 * (1 - wrong.mean()) if len(wrong) else 0.0
    ax.set_title(f"{title}\nLOO accuracy = {accuracy:.1f}%", fontsize=13)
    ax.legend(handles=legend_handles, fontsize=9, loc="best")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig
