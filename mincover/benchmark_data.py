"""
Random and deterministic set-cover instances.

In this module, generators are provided for:
  - random instances that are guaranteed to admit a cover, and
  - small, reproducible benchmark families for regression and smoke tests.

All randomness goes through `numpy.random.default_rng` with an explicit seed
so that instances are stable across runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from mincover.core import SetFamily


@dataclass(frozen=True)
class BenchmarkSpec:
    """
    Specification of a benchmark instance.
    """

    name: str
    num_to_cover: int
    num_subsets: int
    seed: int


def max_subset_size(num_to_cover: int, num_subsets: int) -> int:
    """
    Cap on random subset sizes.

    The cap keeps random instances from being solved trivially by a handful
    of very large subsets.
    """
    n = int(num_to_cover)
    m = int(num_subsets)
    if m >= n:
        return min(n, (m // n + 1) * (m // n + 1))
    return min(n, (n // m + 1) * 2)


def generate_random_instance(
    num_to_cover: int,
    num_subsets: int,
    *,
    seed: Optional[int] = None,
) -> SetFamily:
    """
    Generate a random family over 1..N that admits a cover.

    Each subset receives a uniformly random size below `max_subset_size` and
    distinct random elements. Every element no subset drew is then appended
    to a random subset. Subsets left empty are dropped.

    Args:
        num_to_cover: Size N of the universe.
        num_subsets: Number of subsets drawn.
        seed: Seed for `numpy.random.default_rng`.

    Returns:
        A coverable `SetFamily` with at most ``num_subsets`` subsets.

    Raises:
        ValueError: If either count is not positive.
    """
    n = int(num_to_cover)
    m = int(num_subsets)
    if n <= 0:
        raise ValueError("num_to_cover must be positive")
    if m <= 0:
        raise ValueError("num_subsets must be positive")

    rng = np.random.default_rng(seed)
    cap = max_subset_size(n, m)
    universe = np.arange(1, n + 1, dtype=np.int64)

    subsets: List[List[int]] = []
    drawn = np.zeros(n + 1, dtype=bool)
    for _ in range(m):
        size = int(rng.integers(0, cap))
        picked = rng.choice(universe, size=size, replace=False)
        drawn[picked] = True
        subsets.append([int(x) for x in picked])

    for x in np.flatnonzero(~drawn[1:]) + 1:
        subsets[int(rng.integers(0, m))].append(int(x))

    return SetFamily(n, [s for s in subsets if s])


def benchmark_specs() -> Sequence[BenchmarkSpec]:
    """
    Benchmark specifications are returned.
    """
    return (
        BenchmarkSpec(name="R1_tiny_8x10", num_to_cover=8, num_subsets=10, seed=21_001),
        BenchmarkSpec(name="R2_small_12x14", num_to_cover=12, num_subsets=14, seed=21_002),
        BenchmarkSpec(name="R3_medium_20x30", num_to_cover=20, num_subsets=30, seed=21_003),
        BenchmarkSpec(name="R4_medium_hard_31x15", num_to_cover=31, num_subsets=15, seed=21_004),
    )


def make_benchmark_family(spec: BenchmarkSpec) -> SetFamily:
    """
    Create a deterministic benchmark family according to a specification.
    """
    return generate_random_instance(
        int(spec.num_to_cover), int(spec.num_subsets), seed=int(spec.seed)
    )


def benchmark_family_r1() -> SetFamily:
    """
    Return the tiny sanity benchmark (universe of 8, 10 subsets).
    """
    return make_benchmark_family(benchmark_specs()[0])


def benchmark_family_r2() -> SetFamily:
    """
    Return the small benchmark (universe of 12, 14 subsets).
    """
    return make_benchmark_family(benchmark_specs()[1])


def benchmark_family_r3() -> SetFamily:
    """
    Return the medium benchmark (universe of 20, 30 subsets).
    """
    return make_benchmark_family(benchmark_specs()[2])
