"""
Configuration objects for the exact set-cover solver.

In this module, configuration dataclasses are provided as a stable, typed
surface for the user-selectable parts of the search.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class ExactCoverConfig:
    """
    Configuration for exact minimum set cover search.
    """

    preprocess: bool = True
    ordering: Literal["fewest_occurrences", "given"] = "fewest_occurrences"
    bound: Literal["incumbent", "none"] = "incumbent"
    forced_exclusion: bool = True

    undo: Literal["log", "snapshot"] = "log"
    traversal: Literal["auto", "recursive", "iterative"] = "auto"

    time_limit_s: Optional[float] = None
    max_nodes: Optional[int] = None

    def validate(self) -> None:
        """
        Configuration validation is performed.
        """
        if str(self.ordering) not in {"fewest_occurrences", "given"}:
            raise ValueError("ordering must be 'fewest_occurrences' or 'given'")
        if str(self.bound) not in {"incumbent", "none"}:
            raise ValueError("bound must be 'incumbent' or 'none'")
        if str(self.undo) not in {"log", "snapshot"}:
            raise ValueError("undo must be 'log' or 'snapshot'")
        if str(self.traversal) not in {"auto", "recursive", "iterative"}:
            raise ValueError("traversal must be 'auto', 'recursive', or 'iterative'")
        if self.time_limit_s is not None and float(self.time_limit_s) <= 0.0:
            raise ValueError("time_limit_s must be positive when provided")
        if self.max_nodes is not None and int(self.max_nodes) <= 0:
            raise ValueError("max_nodes must be positive when provided")
