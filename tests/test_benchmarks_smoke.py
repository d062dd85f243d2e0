"""
Smoke tests for random instances and benchmark fixtures.

This test file is intended to ensure that benchmark families can be constructed
and solved quickly in CI without asserting specific performance numbers.
"""

from __future__ import annotations

from mincover.benchmark_data import (
    benchmark_family_r1,
    benchmark_family_r2,
    benchmark_family_r3,
    benchmark_specs,
    generate_random_instance,
    make_benchmark_family,
    max_subset_size,
)
from mincover.core import covers_universe
from mincover.solvers.backtracking import find_minimum_cover
from mincover.solvers.bruteforce import minimum_cover_size_bruteforce


def test_max_subset_size_caps() -> None:
    assert max_subset_size(10, 30) == 10
    assert max_subset_size(20, 30) == 4
    assert max_subset_size(10, 5) == 6
    assert max_subset_size(3, 3) == 3


def test_random_instances_are_coverable_and_reproducible() -> None:
    for seed in range(10):
        f = generate_random_instance(12, 14, seed=seed)
        assert f.uncovered_elements() == ()
        assert 1 <= len(f) <= 14
        assert f == generate_random_instance(12, 14, seed=seed)


def test_benchmark_specs_build() -> None:
    for spec in benchmark_specs():
        f = make_benchmark_family(spec)
        assert f.num_to_cover == spec.num_to_cover
        assert f.uncovered_elements() == ()


def test_small_benchmarks_match_bruteforce() -> None:
    for f in (benchmark_family_r1(), benchmark_family_r2()):
        res = find_minimum_cover(f)
        assert res.status == "optimal"
        assert res.optimal_size == minimum_cover_size_bruteforce(f)


def test_r3_is_solved() -> None:
    f = benchmark_family_r3()
    res = find_minimum_cover(f)
    assert res.status == "optimal"
    assert covers_universe(f, res.selected)
    assert res.nodes_visited > 0
