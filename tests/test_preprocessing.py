"""
Unit tests for dominance elimination and necessity detection.
"""

from __future__ import annotations

import numpy as np

from mincover.benchmark_data import generate_random_instance
from mincover.core import SetFamily
from mincover.preprocessing import fewest_occurrences, preprocess, remove_dominated_subsets
from mincover.solvers.backtracking import find_minimum_cover
from mincover.solvers.bruteforce import minimum_covers_bruteforce
from mincover.solvers.config import ExactCoverConfig


def _random_families(count: int, seed: int):
    rng = np.random.default_rng(int(seed))
    for _ in range(count):
        n = int(rng.integers(3, 10))
        m = int(rng.integers(3, 13))
        yield generate_random_instance(n, m, seed=int(rng.integers(0, 1_000_000)))


def test_singletons_inside_a_full_subset_are_removed() -> None:
    f = SetFamily(4, [[1], [2], [3], [4], [1, 2, 3, 4]])
    reduced, kept = remove_dominated_subsets(f)
    assert kept == (4,)
    assert reduced.subsets == ((1, 2, 3, 4),)


def test_identical_subsets_keep_the_last_copy() -> None:
    f = SetFamily(2, [[1, 2], [2, 1], [1]])
    reduced, kept = remove_dominated_subsets(f)
    assert kept == (1,)
    assert reduced.subsets == ((2, 1),)


def test_fewest_occurrences_keys() -> None:
    f = SetFamily(4, [[1, 2], [2, 3], [3, 4]])
    assert fewest_occurrences(f).tolist() == [0, 1, 0]


def test_preprocess_orders_by_key_and_flags_necessary() -> None:
    f = SetFamily(4, [[1, 2], [2, 3], [3, 4]])
    p = preprocess(f)
    assert p.family.subsets == ((1, 2), (3, 4), (2, 3))
    assert p.necessary.tolist() == [True, True, False]
    assert p.occurrence_keys.tolist() == [0, 0, 1]
    assert p.original_indices == (0, 2, 1)
    assert p.removed_indices == ()
    assert p.n_necessary == 2


def test_preprocess_without_reorder_keeps_given_order() -> None:
    f = SetFamily(4, [[1, 2], [2, 3], [3, 4]])
    p = preprocess(f, reorder=False)
    assert p.family.subsets == f.subsets
    assert p.necessary.tolist() == [True, False, True]


def test_preprocess_is_idempotent() -> None:
    for f in _random_families(25, seed=7):
        once = preprocess(f)
        twice = preprocess(once.family)
        assert twice.family.subsets == once.family.subsets
        assert twice.necessary.tolist() == once.necessary.tolist()
        assert twice.removed_indices == ()
        assert twice.original_indices == tuple(range(len(once.family)))


def test_necessary_subsets_are_in_every_minimum_cover() -> None:
    for f in _random_families(25, seed=11):
        p = preprocess(f)
        covers = minimum_covers_bruteforce(p.family)
        assert covers
        for i in np.flatnonzero(p.necessary):
            assert all(int(i) in cover for cover in covers)


def test_dominance_elimination_preserves_optimal_size() -> None:
    for f in _random_families(25, seed=13):
        with_pre = find_minimum_cover(f, ExactCoverConfig(preprocess=True))
        without_pre = find_minimum_cover(f, ExactCoverConfig(preprocess=False))
        assert with_pre.optimal_size == without_pre.optimal_size
