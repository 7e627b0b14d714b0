"""
nn_feature_select.cli
=====================
Command-line front end: load a dataset, pick a search direction, and print
every evaluated subset followed by the best one found.

    $ nn-feature-select data/small_33.txt --algorithm 1

When the dataset path or algorithm is not given on the command line, the
user is prompted for it.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from .dataset import NORMALIZERS, DatasetFormatError, load_dataset
from .metric import loo_accuracy
from .plot import format_subset, plot_search_path
from .search import SearchStep, TraceEntry, run_search


__all__ = ["main", "parse_algorithm"]

logger = logging.getLogger(__name__)

ALGORITHMS = {
    "1": "forward",
    "2": "backward",
    "forward": "forward",
    "backward": "backward",
}

DEFAULT_NORMALIZATION = "zscore"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

MENU = (
    "Type the number of the algorithm you want to run.\n"
    "    1) Forward Selection\n"
    "    2) Backward Elimination\n"
)


def parse_algorithm(choice: str) -> str | None:
    """Map a menu choice (``"1"``, ``"backward"``, ...) to a direction."""
    return ALGORITHMS.get(choice.strip().lower())


def _n_jobs(value: str) -> int:
    n_jobs = int(value)
    if n_jobs == 0:
        raise argparse.ArgumentTypeError("must be a non-zero integer (-1 for all cores)")
    return n_jobs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nn-feature-select",
        description=(
            "Greedy feature selection for a nearest-neighbor classifier, "
            "scored by leave-one-out cross-validation."
        ),
    )
    parser.add_argument(
        "path", nargs="?",
        help="dataset file (prompted for when omitted)",
    )
    parser.add_argument(
        "-a", "--algorithm",
        help="1/forward or 2/backward (prompted for when omitted)",
    )
    parser.add_argument(
        "--normalization", choices=sorted(NORMALIZERS),
        default=DEFAULT_NORMALIZATION,
        help="feature scaling applied over the whole dataset "
             f"(default: {DEFAULT_NORMALIZATION})",
    )
    parser.add_argument(
        "--n-jobs", type=_n_jobs, default=1,
        help="parallel workers for scoring candidates (default: 1)",
    )
    parser.add_argument(
        "--plot", metavar="PNG",
        help="save a bar chart of the accuracy at each step",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="diagnostic logging level on stderr (default: WARNING)",
    )
    return parser


def configure_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))
    root.handlers = []
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(handler)


def main(argv=None, input_func=input) -> int:
    """Entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    print("Welcome to the nearest-neighbor feature selection search.")
    path = args.path or input_func("Type in the name of the file to test: ").strip()

    choice = args.algorithm
    if choice is None:
        choice = input_func(MENU)
    direction = parse_algorithm(choice)
    if direction is None:
        print("Invalid choice!")
        logger.error("Unknown algorithm %r; no search performed", choice)
        return 0

    try:
        X, y = load_dataset(path, normalization=args.normalization)
    except FileNotFoundError:
        logger.error("Dataset file not found: %s", path)
        return 2
    except (OSError, DatasetFormatError) as exc:
        logger.error("Cannot read %s: %s", path, exc)
        return 2

    n_samples, n_features = X.shape
    print(
        f"\nThis dataset has {n_features} features (not including the class "
        f"attribute), with {n_samples} instances."
    )

    cache: dict = {}
    all_features = tuple(range(n_features))
    all_accuracy = loo_accuracy(X, y, all_features)
    cache[frozenset(all_features)] = all_accuracy
    print(
        f"\nRunning nearest neighbor with all {n_features} features, using "
        f"\"leaving-one-out\" evaluation, I get an accuracy of "
        f"{all_accuracy:.1f}%"
    )
    print("\nBeginning search.\n")

    started = time.perf_counter()
    result = run_search(
        X, y, direction,
        n_jobs=args.n_jobs,
        callback=_print_candidate,
        step_callback=_print_step,
        cache=cache,
    )
    elapsed = time.perf_counter() - started

    if result.accuracy_decreased:
        print("(Warning, Accuracy has decreased!)")
    print(
        f"Finished search!! The best feature subset is "
        f"{format_subset(result.best_subset)}, which has an accuracy of "
        f"{result.best_accuracy:.1f}%"
    )
    print(
        f"Search took {elapsed:.2f} s over {result.n_evaluations} "
        f"leave-one-out evaluations."
    )

    if args.plot:
        plot_search_path(result, save_path=args.plot)
        logger.info("Saved accuracy plot to %s", args.plot)

    return 0


def _print_candidate(entry: TraceEntry) -> None:
    if entry.step == 0:
        return
    print(
        f"    Using feature(s) {format_subset(entry.subset)} "
        f"accuracy is {entry.accuracy:.1f}%"
    )


def _print_step(step: SearchStep) -> None:
    if step.step == 0:
        if not step.subset:
            print(
                f"Using no features, I get an accuracy of "
                f"{step.accuracy:.1f}%\n"
            )
        return
    print(
        f"\nFeature set {format_subset(step.subset)} was best, "
        f"accuracy is {step.accuracy:.1f}%\n"
    )
