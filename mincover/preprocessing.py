"""
Preliminary pruning of a set family before exhaustive search.

In this module, two reductions are provided:
  - dominance elimination: a subset wholly contained in another subset of
    equal or greater size is never needed in a minimum cover and is removed;
  - necessity detection: a subset holding an element that no other subset
    holds must appear in every cover.

The "fewest occurrences" key computed for necessity detection doubles as the
search ordering: subsets whose rarest element is shared with few others are
placed first.

Note: when two subsets are identical, the dominance pass removes the earlier
copy and keeps the last one. The survivor therefore depends on input order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from mincover.core import SetFamily

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreprocessedFamily:
    """
    A search-ready family together with its necessity flags.

    Attributes:
        family: Surviving subsets in search order.
        necessary: Boolean flags parallel to ``family.subsets``.
        occurrence_keys: Fewest-occurrence key of each surviving subset.
        original_indices: Index in the input family of each surviving subset.
        removed_indices: Input indices of the subsets removed as dominated.
    """

    family: SetFamily
    necessary: np.ndarray
    occurrence_keys: np.ndarray
    original_indices: Tuple[int, ...]
    removed_indices: Tuple[int, ...]

    @property
    def n_necessary(self) -> int:
        return int(np.count_nonzero(self.necessary))


def remove_dominated_subsets(family: SetFamily) -> Tuple[SetFamily, Tuple[int, ...]]:
    """
    Remove every subset contained in another subset still in the family.

    Subsets are examined in order. Each one is compared against all other
    subsets that have not been removed so far, including those not yet
    examined, so a pair of identical subsets loses its earlier member.

    Args:
        family: Input set family.

    Returns:
        A tuple ``(reduced_family, kept_indices)`` where ``kept_indices`` maps
        each surviving subset to its index in ``family``.
    """
    inc = family.incidence()
    sizes = inc.sum(axis=1)
    alive: List[int] = list(range(len(family)))

    pos = 0
    while pos < len(alive):
        a = alive[pos]
        others = np.asarray([b for b in alive if b != a], dtype=np.int64)
        dominated = False
        if others.size:
            big_enough = sizes[others] >= sizes[a]
            # A is inside B exactly when B has every element A has.
            contains = (inc[others] | ~inc[a]).all(axis=1)
            dominated = bool((big_enough & contains).any())
        if dominated:
            del alive[pos]
        else:
            pos += 1

    reduced = SetFamily(family.num_to_cover, [family.subsets[i] for i in alive])
    logger.debug(
        "Dominance elimination removed %d of %d subsets",
        len(family) - len(alive),
        len(family),
    )
    return reduced, tuple(alive)


def fewest_occurrences(family: SetFamily) -> np.ndarray:
    """
    Compute the fewest-occurrence key of every subset.

    For subset i, the key is the minimum over its elements of the number of
    other subsets that also contain the element. A key of zero means the
    subset holds an element found nowhere else.
    """
    n = len(family)
    counts = family.element_counts()
    keys = np.full((n,), n, dtype=np.int64)
    for i, subset in enumerate(family.subsets):
        # The subset itself is among the counted holders of each element.
        others = counts[list(subset)] - 1
        keys[i] = min(int(keys[i]), int(others.min()))
    return keys


def preprocess(
    family: SetFamily,
    *,
    remove_dominated: bool = True,
    reorder: bool = True,
) -> PreprocessedFamily:
    """
    Produce a search-ready family.

    Args:
        family: Input set family.
        remove_dominated: Whether dominated subsets are removed.
        reorder: Whether subsets are sorted ascending by fewest-occurrence key.

    Returns:
        A `PreprocessedFamily`. Applying `preprocess` again to its ``family``
        yields the same subsets and flags.
    """
    if remove_dominated:
        reduced, kept = remove_dominated_subsets(family)
    else:
        reduced, kept = family, tuple(range(len(family)))

    keys = fewest_occurrences(reduced)
    order = list(range(len(reduced)))
    if reorder:
        order = sorted(order, key=lambda i: int(keys[i]))

    ordered = SetFamily(reduced.num_to_cover, [reduced.subsets[i] for i in order])
    ordered_keys = np.asarray([keys[i] for i in order], dtype=np.int64)
    necessary = ordered_keys == 0

    kept_set = set(kept)
    removed = tuple(i for i in range(len(family)) if i not in kept_set)
    result = PreprocessedFamily(
        family=ordered,
        necessary=necessary,
        occurrence_keys=ordered_keys,
        original_indices=tuple(int(kept[i]) for i in order),
        removed_indices=removed,
    )
    logger.debug(
        "Preprocessing kept %d subsets, %d flagged necessary",
        len(ordered),
        result.n_necessary,
    )
    return result
