"""
Command-line interface for exact minimum set cover.

Solves an instance read from a test-vector or JSON file, or a random instance
generated from a universe size and subset count. Random-instance parameters
that are not given on the command line are prompted for.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import List, Optional, TextIO

from mincover.benchmark_data import generate_random_instance
from mincover.core import SearchAbortedError, SetFamily, UncoverableInstanceError
from mincover.reporting import format_report, format_subset
from mincover.solvers.backtracking import find_minimum_cover
from mincover.solvers.config import ExactCoverConfig
from mincover.utils import load_from_json, load_test_vector

logger = logging.getLogger(__name__)


def prompt_positive_int(
    message: str,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """
    Prompt until a positive integer is entered.

    Raises:
        EOFError: If input ends before a valid value was read.
    """
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    while True:
        stdout.write(message)
        stdout.flush()
        line = stdin.readline()
        if not line:
            raise EOFError("Input ended before a positive integer was entered")
        try:
            value = int(line.strip())
        except ValueError:
            value = 0
        if value > 0:
            return value
        stdout.write("\nYour input must be a positive integer\n\n")


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Configure and return the argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="mincover",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="Log search progress"
    )
    verbosity.add_argument(
        "-q", "--quiet", action="store_true", help="Only log errors"
    )

    search = argparse.ArgumentParser(add_help=False)
    search_group = search.add_argument_group("search options")
    search_group.add_argument(
        "--time-limit",
        type=float,
        default=None,
        help="Abort the search after this many seconds",
    )
    search_group.add_argument(
        "--max-nodes",
        type=int,
        default=None,
        help="Abort the search after this many backtrack calls",
    )
    search_group.add_argument(
        "--no-preprocess",
        action="store_true",
        help="Skip dominated-subset elimination",
    )
    search_group.add_argument(
        "--ordering",
        choices=["fewest_occurrences", "given"],
        default="fewest_occurrences",
        help="Order in which subsets are decided (default: fewest_occurrences)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", parents=[search], help="Solve an instance file")
    solve.add_argument("path", type=Path, help="Test-vector or JSON instance file")
    solve.add_argument(
        "--json",
        action="store_true",
        help="Read the instance as JSON instead of the test-vector format",
    )

    rand = sub.add_parser(
        "random", parents=[search], help="Solve a randomly generated instance"
    )
    rand.add_argument("--num-to-cover", type=int, default=None)
    rand.add_argument("--num-subsets", type=int, default=None)
    rand.add_argument("--seed", type=int, default=None)
    rand.add_argument(
        "--show-instance",
        action="store_true",
        help="Print the generated subsets before solving",
    )
    return parser


def _config_from_args(args: argparse.Namespace) -> ExactCoverConfig:
    return ExactCoverConfig(
        preprocess=not bool(args.no_preprocess),
        ordering=args.ordering,
        time_limit_s=args.time_limit,
        max_nodes=args.max_nodes,
    )


def _random_family(args: argparse.Namespace, stdout: TextIO) -> SetFamily:
    num_to_cover = args.num_to_cover
    if num_to_cover is None:
        num_to_cover = prompt_positive_int(
            "Choose the number of integers to be covered (must be greater than 0): ",
            stdout=stdout,
        )
    num_subsets = args.num_subsets
    if num_subsets is None:
        num_subsets = prompt_positive_int(
            "Choose the number of subsets to be generated (must be greater than 0): ",
            stdout=stdout,
        )
    family = generate_random_instance(num_to_cover, num_subsets, seed=args.seed)
    if args.show_instance:
        for subset in family.subsets:
            stdout.write(format_subset(subset) + "\n")
        stdout.write("\n")
    return family


def main(argv: Optional[List[str]] = None, *, stdout: Optional[TextIO] = None) -> int:
    """
    Entry point; returns the process exit status.
    """
    stdout = sys.stdout if stdout is None else stdout
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = _config_from_args(args)
        config.validate()
        if args.command == "solve":
            loader = load_from_json if args.json else load_test_vector
            family = loader(str(args.path))
        else:
            family = _random_family(args, stdout)
    except (ValueError, OSError, EOFError) as e:
        logger.error("%s", e)
        return 2

    t0 = perf_counter()
    result = find_minimum_cover(family, config)
    elapsed = perf_counter() - t0
    stdout.write(format_report(result, elapsed_s=elapsed) + "\n")

    try:
        result.require_optimal()
    except (UncoverableInstanceError, SearchAbortedError) as e:
        logger.error("%s", e)
        return 1
    return 0
