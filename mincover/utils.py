"""
Utility functions for set-cover instance import and export.

This module provides functions to load and save set families in the plain-text
test-vector format and in JSON for interoperability with other tools.
"""

from __future__ import annotations

import json
from typing import List

from mincover.core import SetFamily


def load_test_vector(path: str) -> SetFamily:
    """
    Load a set family from a test-vector text file.

    Args:
        path: Path to the file. Expected format:
            line 1: N (the largest integer to cover)
            line 2: number of subsets
            then one line per subset of space-separated integers

    Returns:
        The validated `SetFamily`.

    Raises:
        FileNotFoundError: If the file is not found.
        ValueError: If the file is malformed or describes an invalid family.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except FileNotFoundError:
        raise FileNotFoundError(f"Test vector file not found: {path}")

    if len(lines) < 2:
        raise ValueError(f"Invalid test vector {path}: header lines are missing")
    try:
        num_to_cover = int(lines[0].strip())
        n_subsets = int(lines[1].strip())
    except ValueError as e:
        raise ValueError(f"Invalid test vector header in {path}: {e}")
    if n_subsets < 0:
        raise ValueError(f"Invalid test vector {path}: negative subset count")

    body = lines[2 : 2 + n_subsets]
    if len(body) != n_subsets:
        raise ValueError(
            f"Invalid test vector {path}: expected {n_subsets} subset lines, "
            f"found {len(body)}"
        )

    subsets: List[List[int]] = []
    for line_no, line in enumerate(body, start=3):
        try:
            subsets.append([int(tok) for tok in line.strip().split(" ") if tok])
        except ValueError as e:
            raise ValueError(f"Invalid element on line {line_no} of {path}: {e}")

    return SetFamily(num_to_cover, subsets)


def save_test_vector(family: SetFamily, path: str) -> None:
    """
    Save a set family in the test-vector text format.

    Args:
        family: Family to save.
        path: Destination path.

    Raises:
        IOError: If the file cannot be written.
    """
    with open(path, "w", encoding="utf-8") as f:
        f.write(f"{family.num_to_cover}\n")
        f.write(f"{len(family.subsets)}\n")
        for subset in family.subsets:
            f.write(" ".join(str(x) for x in subset) + "\n")


def load_from_json(path: str) -> SetFamily:
    """
    Load a set family from a JSON file.

    Args:
        path: Path to JSON file. Expected format:
            {
                "num_to_cover": 4,
                "subsets": [[1, 2], [3, 4], ...]
            }

    Returns:
        The validated `SetFamily`.

    Raises:
        FileNotFoundError: If JSON file is not found.
        ValueError: If JSON format is invalid.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"JSON file not found: {path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format: {e}")

    if not isinstance(data, dict):
        raise ValueError("JSON top level must be an object")
    if "num_to_cover" not in data:
        raise ValueError("JSON missing 'num_to_cover' key")
    if "subsets" not in data:
        raise ValueError("JSON missing 'subsets' key")

    return SetFamily(int(data["num_to_cover"]), data["subsets"])


def save_to_json(family: SetFamily, path: str) -> None:
    """
    Save a set family to a JSON file.

    Args:
        family: Family to save.
        path: Path to save JSON file.

    Raises:
        IOError: If file cannot be written.
    """
    data = {
        "num_to_cover": family.num_to_cover,
        "subsets": [list(s) for s in family.subsets],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
