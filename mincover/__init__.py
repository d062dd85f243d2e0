"""
Exact minimum set cover.

This package provides the components for finding a smallest sub-family of
subsets whose union is the universe 1..N: a validated instance type, the
preprocessing reductions (dominance elimination and necessity detection),
and a branch-and-bound search that always returns a true minimum.
"""

from mincover.core import (
    CoverageState,
    SearchAbortedError,
    SetFamily,
    UncoverableInstanceError,
    covers_universe,
)
from mincover.preprocessing import (
    PreprocessedFamily,
    fewest_occurrences,
    preprocess,
    remove_dominated_subsets,
)
from mincover.solvers.backtracking import (
    Backtracker,
    SearchContext,
    SetCoverResult,
    find_minimum_cover,
)
from mincover.solvers.bruteforce import (
    minimum_cover_size_bruteforce,
    minimum_covers_bruteforce,
)
from mincover.solvers.config import ExactCoverConfig
from mincover.benchmark_data import (
    BenchmarkSpec,
    generate_random_instance,
    make_benchmark_family,
)
from mincover.reporting import format_report
from mincover.utils import (
    load_from_json,
    load_test_vector,
    save_test_vector,
    save_to_json,
)

__all__ = [
    "SetFamily",
    "CoverageState",
    "covers_universe",
    "UncoverableInstanceError",
    "SearchAbortedError",
    "PreprocessedFamily",
    "preprocess",
    "remove_dominated_subsets",
    "fewest_occurrences",
    "ExactCoverConfig",
    "Backtracker",
    "SearchContext",
    "SetCoverResult",
    "find_minimum_cover",
    "minimum_covers_bruteforce",
    "minimum_cover_size_bruteforce",
    "BenchmarkSpec",
    "generate_random_instance",
    "make_benchmark_family",
    "format_report",
    "load_test_vector",
    "save_test_vector",
    "load_from_json",
    "save_to_json",
]
