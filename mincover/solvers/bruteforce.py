"""
Brute-force reference enumeration of minimum set covers.

Selections are enumerated by increasing size, so the first size with any
cover is the minimum. Intended as a slow oracle for small families.
"""

from __future__ import annotations

import warnings
from itertools import combinations
from typing import List, Optional, Tuple

from mincover.core import SetFamily, covers_universe

BRUTEFORCE_SUBSET_LIMIT = 20


def minimum_covers_bruteforce(family: SetFamily) -> List[Tuple[int, ...]]:
    """
    Return every minimum cover as a tuple of subset indices.

    An empty list is returned when the family has no cover.
    """
    n = len(family)
    if n > BRUTEFORCE_SUBSET_LIMIT:
        warnings.warn(
            f"Brute-force enumeration over {n} subsets explores up to 2**{n} "
            f"selections; families of at most {BRUTEFORCE_SUBSET_LIMIT} subsets "
            "are recommended.",
            UserWarning,
            stacklevel=2,
        )
    for size in range(1, n + 1):
        found = [
            combo for combo in combinations(range(n), size)
            if covers_universe(family, combo)
        ]
        if found:
            return found
    return []


def minimum_cover_size_bruteforce(family: SetFamily) -> Optional[int]:
    covers = minimum_covers_bruteforce(family)
    if not covers:
        return None
    return len(covers[0])
