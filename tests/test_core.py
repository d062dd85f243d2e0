"""
Unit tests for set families and coverage tracking.
"""

from __future__ import annotations

import numpy as np
import pytest

from mincover.core import CoverageState, SetFamily, covers_universe


class TestSetFamily:
    def test_subsets_are_stored_in_order(self) -> None:
        f = SetFamily(3, [[2, 1], [3]])
        assert f.subsets == ((2, 1), (3,))
        assert len(f) == 2

    @pytest.mark.parametrize(
        "n, subsets",
        [
            (0, [[1]]),
            (3, [[]]),
            (3, [[1, 1]]),
            (3, [[4]]),
            (3, [[0, 1]]),
        ],
    )
    def test_invalid_input_is_rejected(self, n, subsets) -> None:
        with pytest.raises(ValueError):
            SetFamily(n, subsets)

    def test_incidence_is_one_indexed(self) -> None:
        f = SetFamily(3, [[1, 3], [2]])
        inc = f.incidence()
        assert inc.shape == (2, 4)
        assert not inc[:, 0].any()
        assert inc[0].tolist() == [False, True, False, True]

    def test_uncovered_elements(self) -> None:
        f = SetFamily(5, [[1, 2], [2, 4]])
        assert f.uncovered_elements() == (3, 5)
        assert SetFamily(2, [[1], [2]]).uncovered_elements() == ()

    def test_covers_universe(self) -> None:
        f = SetFamily(4, [[1, 2], [3], [3, 4]])
        assert covers_universe(f, [0, 2]) is True
        assert covers_universe(f, [0, 1]) is False


class TestCoverageState:
    def test_cover_counts_only_new_elements(self) -> None:
        cs = CoverageState(5)
        log1 = cs.cover((1, 2))
        assert cs.count == 2
        log2 = cs.cover((2, 3))
        assert log2.tolist() == [3]
        assert cs.count == 3
        assert cs.count == int(np.count_nonzero(cs.covered))
        assert log1.tolist() == [1, 2]

    def test_uncover_reverts_exactly_the_log(self) -> None:
        cs = CoverageState(5)
        cs.cover((1, 2))
        log = cs.cover((2, 3))
        cs.uncover(log)
        assert cs.count == 2
        assert bool(cs.covered[2]) is True
        assert bool(cs.covered[3]) is False

    def test_has_uncovered(self) -> None:
        cs = CoverageState(4)
        cs.cover((1, 2))
        assert cs.has_uncovered((1, 2)) is False
        assert cs.has_uncovered((1, 4)) is True

    def test_snapshot_restore(self) -> None:
        cs = CoverageState(3)
        cs.cover((1,))
        snap = cs.snapshot()
        cs.cover((2, 3))
        assert cs.is_complete() is True
        cs.restore(snap)
        assert cs.count == 1
        assert cs.is_complete() is False
        assert cs.covered.tolist() == [False, True, False, False]
