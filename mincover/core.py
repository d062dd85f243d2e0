"""
Core set-cover data structures.

This module provides the fundamental classes for minimum set cover search:
SetFamily for storing a validated universe and subset family, CoverageState
for tracking which universe elements are covered, and the error types used to
surface instances that cannot produce an optimal answer.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np


class UncoverableInstanceError(ValueError):
    """
    Raised when some universe element appears in no subset.
    """


class SearchAbortedError(RuntimeError):
    """
    Raised when a search was interrupted before it could prove optimality.
    """


class SetFamily:
    """
    A universe ``1..N`` together with a family of subsets of it.

    Subsets are identified by their position in the family. Each subset is
    stored as a tuple in the order it was given.

    Attributes:
        num_to_cover: Size N of the universe.
        subsets: Tuple of subsets, each a tuple of distinct integers in 1..N.
    """

    def __init__(
        self, num_to_cover: int, subsets: Iterable[Sequence[int]]
    ) -> None:
        """
        Initialize a set family.

        Args:
            num_to_cover: The largest integer to cover (the universe is 1..N).
            subsets: Iterable of non-empty, duplicate-free integer sequences.

        Raises:
            ValueError: If N is not positive, or a subset is empty, holds
                duplicates, or holds an element outside 1..N.
        """
        n = int(num_to_cover)
        if n < 1:
            raise ValueError("num_to_cover must be at least 1")

        stored: List[Tuple[int, ...]] = []
        for i, subset in enumerate(subsets):
            items = tuple(int(x) for x in subset)
            if not items:
                raise ValueError(f"Subset {i} must contain at least one element")
            if len(set(items)) != len(items):
                raise ValueError(f"Subset {i} has duplicate elements")
            for x in items:
                if x < 1 or x > n:
                    raise ValueError(
                        f"Subset {i} holds element {x} outside 1..{n}"
                    )
            stored.append(items)

        self.num_to_cover: int = n
        self.subsets: Tuple[Tuple[int, ...], ...] = tuple(stored)

    def __len__(self) -> int:
        return len(self.subsets)

    def __repr__(self) -> str:
        return (
            f"SetFamily(num_to_cover={self.num_to_cover}, "
            f"n_subsets={len(self.subsets)})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SetFamily):
            return NotImplemented
        return (
            self.num_to_cover == other.num_to_cover
            and self.subsets == other.subsets
        )

    def incidence(self) -> np.ndarray:
        """
        Boolean incidence matrix of shape (n_subsets, N + 1).

        Column 0 is padding and is always false.
        """
        inc = np.zeros((len(self.subsets), self.num_to_cover + 1), dtype=bool)
        for i, subset in enumerate(self.subsets):
            inc[i, list(subset)] = True
        return inc

    def element_counts(self) -> np.ndarray:
        """
        Number of subsets containing each element, indexed 0..N.
        """
        return self.incidence().sum(axis=0, dtype=np.int64)

    def uncovered_elements(self) -> Tuple[int, ...]:
        """
        Elements of the universe that appear in no subset.
        """
        counts = self.element_counts()
        return tuple(int(x) for x in np.flatnonzero(counts[1:] == 0) + 1)


def covers_universe(family: SetFamily, selected: Iterable[int]) -> bool:
    """
    Check whether the selected subsets cover the whole universe.

    Args:
        family: The set family the indices refer to.
        selected: Subset indices into ``family.subsets``.

    Returns:
        ``True`` if the union of the selected subsets equals 1..N.
    """
    covered = np.zeros(family.num_to_cover + 1, dtype=bool)
    for i in selected:
        covered[list(family.subsets[int(i)])] = True
    return bool(covered[1:].all())


class CoverageState:
    """
    Coverage of the universe by the subsets chosen on the current search path.

    The ``covered`` array is 1-indexed (entry 0 is unused) and ``count`` always
    equals the number of true entries in it.
    """

    def __init__(self, num_to_cover: int) -> None:
        self.num_to_cover = int(num_to_cover)
        self.covered = np.zeros(self.num_to_cover + 1, dtype=bool)
        self.count = 0

    def is_complete(self) -> bool:
        return self.count == self.num_to_cover

    def has_uncovered(self, subset: Sequence[int]) -> bool:
        """
        Whether the subset contains at least one element not yet covered.
        """
        for x in subset:
            if not self.covered[x]:
                return True
        return False

    def cover(self, subset: Sequence[int]) -> np.ndarray:
        """
        Mark the elements of a subset covered.

        Returns:
            The undo log: the elements that were newly covered by this call.
        """
        items = np.asarray(subset, dtype=np.int64)
        fresh = items[~self.covered[items]]
        self.covered[fresh] = True
        self.count += int(fresh.size)
        return fresh

    def uncover(self, log: np.ndarray) -> None:
        """
        Revert a previous ``cover`` call given its undo log.
        """
        self.covered[log] = False
        self.count -= int(log.size)

    def snapshot(self) -> Tuple[np.ndarray, int]:
        return self.covered.copy(), int(self.count)

    def restore(self, snapshot: Tuple[np.ndarray, int]) -> None:
        covered, count = snapshot
        self.covered[:] = covered
        self.count = int(count)
