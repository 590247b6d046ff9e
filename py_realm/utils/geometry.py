"""
Distance helpers.

All distances in the realm are Euclidean distances truncated to an integer,
both for single pairs and for bulk ordering of many towns.
"""

import math
from typing import Sequence, Tuple

import numpy as np


def truncated_distance(dx: int, dy: int) -> int:
    """Length of the vector (dx, dy), truncated to an integer."""
    return int(math.sqrt(dx * dx + dy * dy))


def distance_between(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    """Truncated straight-line distance between two coordinates."""
    return truncated_distance(a[0] - b[0], a[1] - b[1])


def distances_to(
    coords: Sequence[Tuple[int, int]], origin: Tuple[int, int] = (0, 0)
) -> np.ndarray:
    """
    Vectorised truncated distances from every coordinate to ``origin``.

    Args:
        coords: Sequence of (x, y) integer pairs
        origin: Point to measure from

    Returns:
        int64 array with one distance per coordinate
    """
    if len(coords) == 0:
        return np.zeros(0, dtype=np.int64)

    points = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
    offsets = points - np.asarray(origin, dtype=np.float64)
    return np.sqrt((offsets**2).sum(axis=1)).astype(np.int64)
