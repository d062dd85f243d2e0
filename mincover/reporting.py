"""
Console reporting for set-cover search results.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from mincover.solvers.backtracking import SetCoverResult


def format_subset(subset: Sequence[int]) -> str:
    return "[" + ", ".join(str(x) for x in subset) + "]"


def format_report(result: SetCoverResult, *, elapsed_s: Optional[float] = None) -> str:
    """
    Render a human-readable report of a search result.

    Args:
        result: Result returned by `find_minimum_cover`.
        elapsed_s: Wall-clock time to report; defaults to ``result.runtime_s``.

    Returns:
        A multi-line report. Non-optimal outcomes are stated explicitly and no
        cover size is printed for them.
    """
    seconds = float(result.runtime_s if elapsed_s is None else elapsed_s)
    lines: List[str] = []
    if result.status == "optimal":
        lines.append(f"Minimum Number of Subsets: {result.optimal_size}")
        lines.append(
            "Minimum Set Cover: " + " ".join(format_subset(s) for s in result.subsets)
        )
    elif result.status == "uncoverable":
        lines.append("No set cover exists: some element appears in no subset")
    else:
        lines.append("Search aborted before a minimum set cover was proven")
        incumbent = result.diagnostics.get("incumbent_size")
        if incumbent is not None:
            lines.append(f"Best cover found before aborting: {incumbent} subsets")
    lines.append("")
    lines.append(f"Number of Seconds Elapsed: {seconds:.3f}")
    lines.append(f"Number of Backtrack Calls: {result.nodes_visited}")
    return "\n".join(lines)
