"""
Exact minimum set cover by branch and bound (backtracking).

In this module, a depth-first search over include/exclude decisions for each
subset is provided. The search state lives in an explicit `SearchContext`
which is threaded through every node; coverage is updated incrementally on
each move and reverted on backtrack.

Branches are generated with three pruning rules:
  - bound: a partial selection already as large as the incumbent is cut;
  - forced inclusion: a subset flagged necessary is only ever included;
  - forced exclusion: a subset adding no new coverage is only ever excluded.
None of the rules can discard an optimal cover, so the search is exact.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from mincover.core import (
    CoverageState,
    SearchAbortedError,
    SetFamily,
    UncoverableInstanceError,
)
from mincover.preprocessing import PreprocessedFamily, preprocess
from mincover.solvers.config import ExactCoverConfig

logger = logging.getLogger(__name__)

# Frames kept free below the interpreter recursion limit for "auto" traversal.
_RECURSION_HEADROOM = 200


@dataclass(frozen=True)
class SetCoverResult:
    """
    Result of an exact minimum set cover search.

    ``optimal_size`` is only set when ``status`` is "optimal". Selected subsets
    are identified by their index in the family passed to the solver.
    """

    optimal_size: Optional[int]
    selected: Tuple[int, ...]
    subsets: Tuple[Tuple[int, ...], ...]
    status: str
    is_complete: bool
    diagnostics: Dict[str, Any]
    runtime_s: float

    @property
    def nodes_visited(self) -> int:
        return int(self.diagnostics.get("nodes_visited", 0))

    def require_optimal(self) -> "SetCoverResult":
        """
        Return this result if it is a proven optimum.

        Raises:
            UncoverableInstanceError: If no cover exists.
            SearchAbortedError: If the search was interrupted.
        """
        if self.status == "uncoverable":
            raise UncoverableInstanceError(
                "No set cover exists: some element appears in no subset"
            )
        if self.status == "aborted":
            raise SearchAbortedError(
                "Search aborted before optimality was proven "
                f"after {self.nodes_visited} nodes"
            )
        return self


@dataclass
class SearchContext:
    """
    Mutable state of one search run.

    Attributes:
        coverage: Universe coverage by the subsets included on the current path.
        solution: Include/exclude decision per subset on the current path.
        n_selected: Number of subsets included on the current path.
        opt: Size of the best cover found so far (``len(solution) + 1`` until
            a cover is found).
        best_solution: Decisions of the best cover found so far.
    """

    coverage: CoverageState
    solution: np.ndarray
    opt: int
    n_selected: int = 0
    best_solution: Optional[np.ndarray] = None

    deadline: Optional[float] = None
    max_nodes: Optional[int] = None
    aborted: bool = False

    nodes_visited: int = 0
    bound_pruned: int = 0
    forced_inclusions: int = 0
    forced_exclusions: int = 0
    max_depth: int = 0

    @property
    def sentinel(self) -> int:
        return int(self.solution.shape[0]) + 1

    @property
    def found_cover(self) -> bool:
        return self.opt < self.sentinel


@dataclass
class _Frame:
    k: int
    candidates: Tuple[bool, ...]
    next_idx: int = 0
    log: Optional[np.ndarray] = None
    saved: Optional[Tuple[np.ndarray, int]] = None


class Backtracker:
    """
    Depth-first branch and bound over a preprocessed family.

    Decision variable ``k`` runs from -1 (virtual root) to ``n_subsets - 1``.
    A node at ``k`` has decided subsets ``0..k``.
    """

    def __init__(
        self, prepared: PreprocessedFamily, config: Optional[ExactCoverConfig] = None
    ) -> None:
        self.config = config if config is not None else ExactCoverConfig()
        self.config.validate()
        self.family = prepared.family
        self.subsets = prepared.family.subsets
        self.necessary = np.asarray(prepared.necessary, dtype=bool)
        if self.necessary.shape != (len(self.subsets),):
            raise ValueError("necessary flags must have one entry per subset")

    def new_context(self, *, t0: Optional[float] = None) -> SearchContext:
        n = len(self.subsets)
        start = perf_counter() if t0 is None else float(t0)
        deadline = None
        if self.config.time_limit_s is not None:
            deadline = start + float(self.config.time_limit_s)
        return SearchContext(
            coverage=CoverageState(self.family.num_to_cover),
            solution=np.zeros((n,), dtype=bool),
            opt=n + 1,
            deadline=deadline,
            max_nodes=self.config.max_nodes,
        )

    def is_solution(self, ctx: SearchContext) -> bool:
        return ctx.coverage.is_complete()

    def process_solution(self, ctx: SearchContext, k: int) -> None:
        # Ties keep the incumbent: the first cover found at a size wins.
        if ctx.n_selected < ctx.opt:
            best = ctx.solution.copy()
            best[k + 1 :] = False
            ctx.best_solution = best
            ctx.opt = int(ctx.n_selected)

    def candidates(self, ctx: SearchContext, k: int) -> Tuple[bool, ...]:
        """
        Candidate decisions for subset ``k``, with pruning applied.
        """
        if self.config.bound == "incumbent" and ctx.n_selected >= ctx.opt:
            ctx.bound_pruned += 1
            return ()
        if self.necessary[k]:
            ctx.forced_inclusions += 1
            return (True,)
        if ctx.coverage.has_uncovered(self.subsets[k]):
            return (True, False)
        if not self.config.forced_exclusion:
            return (True, False)
        ctx.forced_exclusions += 1
        return (False,)

    def make_move(self, ctx: SearchContext, k: int) -> Optional[np.ndarray]:
        """
        Apply the decision stored for subset ``k``; returns the undo log.
        """
        if not ctx.solution[k]:
            return None
        log = ctx.coverage.cover(self.subsets[k])
        ctx.n_selected += 1
        return log

    def unmake_move(
        self,
        ctx: SearchContext,
        k: int,
        log: Optional[np.ndarray],
        saved: Optional[Tuple[np.ndarray, int]] = None,
    ) -> None:
        """
        Revert the decision stored for subset ``k``.

        With snapshot undo, ``saved`` is the coverage captured on entry to the
        node that made the move; otherwise the undo log is replayed.
        """
        if not ctx.solution[k]:
            return
        if saved is not None:
            ctx.coverage.restore(saved)
        else:
            ctx.coverage.uncover(log)
        ctx.n_selected -= 1

    def _save(self, ctx: SearchContext) -> Optional[Tuple[np.ndarray, int]]:
        if self.config.undo == "snapshot":
            return ctx.coverage.snapshot()
        return None

    def _interrupted(self, ctx: SearchContext) -> bool:
        if ctx.aborted:
            return True
        if ctx.max_nodes is not None and ctx.nodes_visited > int(ctx.max_nodes):
            ctx.aborted = True
        elif ctx.deadline is not None and perf_counter() >= ctx.deadline:
            ctx.aborted = True
        return ctx.aborted

    def _enter(self, ctx: SearchContext, k: int) -> Tuple[bool, ...]:
        """
        Node entry: the call is counted, then checked for interruption, then
        for a cover, before branching.

        Returns the candidates for subset ``k + 1``; empty when the node is a
        leaf, a cover, pruned, or the search was interrupted.
        """
        ctx.nodes_visited += 1
        if self._interrupted(ctx):
            return ()
        if k + 1 > ctx.max_depth:
            ctx.max_depth = k + 1

        if self.is_solution(ctx):
            self.process_solution(ctx, k)
            return ()
        if k + 1 < len(self.subsets):
            return self.candidates(ctx, k + 1)
        return ()

    def backtrack(self, ctx: SearchContext, k: int) -> None:
        """
        Recursive traversal from the node at ``k``.
        """
        cands = self._enter(ctx, k)
        if not cands:
            return
        saved = self._save(ctx)
        j = k + 1
        for value in cands:
            ctx.solution[j] = value
            log = self.make_move(ctx, j)
            self.backtrack(ctx, j)
            self.unmake_move(ctx, j, log, saved)
            if ctx.aborted:
                break
        ctx.solution[j] = False

    def backtrack_iterative(self, ctx: SearchContext) -> None:
        """
        Traversal with an explicit stack, visiting nodes in the same order as
        `backtrack`.
        """
        cands = self._enter(ctx, -1)
        if not cands:
            return
        stack: List[_Frame] = [_Frame(k=-1, candidates=cands, saved=self._save(ctx))]
        while stack:
            frame = stack[-1]
            j = frame.k + 1
            if frame.next_idx > 0:
                # Returning from the child created by the previous candidate.
                self.unmake_move(ctx, j, frame.log, frame.saved)
            if frame.next_idx >= len(frame.candidates) or ctx.aborted:
                ctx.solution[j] = False
                stack.pop()
                continue

            ctx.solution[j] = frame.candidates[frame.next_idx]
            frame.log = self.make_move(ctx, j)
            frame.next_idx += 1
            child = self._enter(ctx, j)
            if child:
                stack.append(_Frame(k=j, candidates=child, saved=self._save(ctx)))

    def _use_recursion(self) -> bool:
        mode = str(self.config.traversal)
        if mode == "recursive":
            return True
        if mode == "iterative":
            return False
        return len(self.subsets) + _RECURSION_HEADROOM < sys.getrecursionlimit()

    def search(self, *, t0: Optional[float] = None) -> SearchContext:
        """
        Run the search from the virtual root and return its final context.
        """
        ctx = self.new_context(t0=t0)
        if self._use_recursion():
            self.backtrack(ctx, -1)
        else:
            self.backtrack_iterative(ctx)
        return ctx


def find_minimum_cover(
    family: SetFamily,
    config: Optional[ExactCoverConfig] = None,
) -> SetCoverResult:
    """
    Find a minimum set cover exactly.

    Args:
        family: Validated instance. Coverability is not required up front; an
            uncoverable family is reported with status "uncoverable".
        config: Solver configuration (defaults to `ExactCoverConfig()`).

    Returns:
        A `SetCoverResult`. Call `SetCoverResult.require_optimal` to turn
        "uncoverable" and "aborted" outcomes into exceptions.
    """
    cfg = config if config is not None else ExactCoverConfig()
    cfg.validate()
    t0 = perf_counter()

    prepared = preprocess(
        family,
        remove_dominated=bool(cfg.preprocess),
        reorder=str(cfg.ordering) == "fewest_occurrences",
    )
    backtracker = Backtracker(prepared, cfg)
    logger.debug(
        "Searching %d subsets over universe of size %d",
        len(prepared.family),
        family.num_to_cover,
    )
    ctx = backtracker.search(t0=t0)

    selected: Tuple[int, ...] = ()
    optimal_size: Optional[int] = None
    if ctx.aborted:
        status = "aborted"
        logger.warning("Search aborted after %d nodes", ctx.nodes_visited)
    elif not ctx.found_cover:
        # The bound never moved off its sentinel: no terminal state was reached.
        status = "uncoverable"
    else:
        status = "optimal"
        optimal_size = int(ctx.opt)
        assert ctx.best_solution is not None
        selected = tuple(
            sorted(
                prepared.original_indices[i]
                for i in np.flatnonzero(ctx.best_solution)
            )
        )

    runtime_s = float(perf_counter() - t0)
    diagnostics: Dict[str, Any] = {
        "nodes_visited": int(ctx.nodes_visited),
        "bound_pruned": int(ctx.bound_pruned),
        "forced_inclusions": int(ctx.forced_inclusions),
        "forced_exclusions": int(ctx.forced_exclusions),
        "max_depth": int(ctx.max_depth),
        "removed_subsets": len(prepared.removed_indices),
        "necessary_subsets": prepared.n_necessary,
        "searched_subsets": len(prepared.family),
        "incumbent_size": int(ctx.opt) if ctx.found_cover else None,
        "ordering": str(cfg.ordering),
        "bound": str(cfg.bound),
        "undo": str(cfg.undo),
    }
    logger.info(
        "Set cover search finished: status=%s size=%s nodes=%d",
        status,
        optimal_size,
        ctx.nodes_visited,
    )
    return SetCoverResult(
        optimal_size=optimal_size,
        selected=selected,
        subsets=tuple(family.subsets[i] for i in selected),
        status=str(status),
        is_complete=status != "aborted",
        diagnostics=diagnostics,
        runtime_s=float(runtime_s),
    )
