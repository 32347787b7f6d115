"""
Distance Index

Fingerprints a beacon set by the Manhattan distances between its beacons.
Those distances survive any axis-aligned rotation and any translation, so two
scanners can be compared for overlap before their relative pose is known.
"""

from __future__ import annotations

from itertools import combinations
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

import numpy as np

from ..geometry.points import Point, points_to_array
from ..geometry.scanner import Scanner


def build_distance_index(points: Iterable[Point]) -> Dict[int, Tuple[Point, ...]]:
    """
    Map every pairwise Manhattan distance to the points of the pairs at that distance.

    All C(n, 2) unordered pairs are visited, so a point shows up under each
    distance it takes part in (and twice under a key when two of its pairs
    share it).

    Args:
        points: Beacon set

    Returns:
        Dict of distance -> tuple of points
    """
    buckets: Dict[int, List[Point]] = {}
    for a, b in combinations(points, 2):
        bucket = buckets.setdefault(a.distance(b), [])
        bucket.append(a)
        bucket.append(b)
    return {distance: tuple(members) for distance, members in buckets.items()}


class IndexedScanner:
    """
    A beacon set together with its distance index.

    The index is built once in the constructor and never invalidated; the
    beacon set is frozen.
    """

    def __init__(self, beacons: Iterable[Point], label: str = ""):
        self.beacons: FrozenSet[Point] = frozenset(beacons)
        self.distances: Dict[int, Tuple[Point, ...]] = build_distance_index(sorted(
            self.beacons, key=Point.as_tuple
        ))
        self.label = label
        self._keys: FrozenSet[int] = frozenset(self.distances)
        self._array: Optional[np.ndarray] = None

    @classmethod
    def from_scanner(cls, scanner: Scanner) -> "IndexedScanner":
        return cls(scanner.beacons, label=scanner.label)

    @property
    def distance_keys(self) -> FrozenSet[int]:
        return self._keys

    def shared_distances(self, other: "IndexedScanner") -> FrozenSet[int]:
        """Distances that occur in both scanners."""
        return self._keys & other._keys

    def as_array(self) -> np.ndarray:
        """Beacons as an (n, 3) int64 array, in a fixed (sorted) order."""
        if self._array is None:
            self._array = points_to_array(sorted(self.beacons, key=Point.as_tuple))
        return self._array

    def __len__(self) -> int:
        return len(self.beacons)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexedScanner):
            return NotImplemented
        return self.beacons == other.beacons

    def __hash__(self) -> int:
        return hash(self.beacons)

    def __repr__(self) -> str:
        return (
            f"IndexedScanner(label={self.label!r}, beacons={len(self.beacons)}, "
            f"distances={len(self.distances)})"
        )
