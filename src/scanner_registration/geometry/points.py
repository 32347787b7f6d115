"""
Integer point arithmetic.

Beacons and scanner positions are integer triples. Manhattan distance is the
rotation and translation invariant used to compare scanners whose relative
pose is still unknown.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np


@dataclass(frozen=True)
class Point:
    """Immutable integer point (x, y, z); equality and hashing by value."""

    x: int
    y: int
    z: int

    @classmethod
    def from_iterable(cls, values: Iterable[int]) -> "Point":
        """Create a point from exactly three integers.

        Raises:
            ValueError: If `values` does not hold exactly three items
        """
        coords = tuple(int(v) for v in values)
        if len(coords) != 3:
            raise ValueError(f"Expected 3 coordinates, got {len(coords)}")
        return cls(*coords)

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y, -self.z)

    def distance(self, other: "Point") -> int:
        """Manhattan distance to `other`."""
        return abs(self.x - other.x) + abs(self.y - other.y) + abs(self.z - other.z)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.z}"


ORIGIN = Point(0, 0, 0)


def points_to_array(points: Iterable[Point]) -> np.ndarray:
    """Stack points into an (n, 3) int64 array."""
    rows = [p.as_tuple() for p in points]
    if not rows:
        return np.empty((0, 3), dtype=np.int64)
    return np.asarray(rows, dtype=np.int64)


def array_to_points(array: np.ndarray) -> List[Point]:
    """Convert an (n, 3) integer array back into points."""
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError(f"Expected Nx3 array, got shape {array.shape}")
    return [Point(int(x), int(y), int(z)) for x, y, z in array.tolist()]


def max_pairwise_distance(points: Iterable[Point]) -> int:
    """
    Largest Manhattan distance between any two of the given points.

    Returns 0 when fewer than two points are given.
    """
    arr = points_to_array(points)
    if len(arr) < 2:
        return 0
    diffs = np.abs(arr[:, None, :] - arr[None, :, :]).sum(axis=-1)
    return int(diffs.max())
