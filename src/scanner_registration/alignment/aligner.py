"""
Scanner Aligner

Finds the rotation and translation that place a candidate scanner on top of a
scanner whose beacons are already in the global frame.

The search for one (candidate, known) pair:
1. Intersect the two distance indexes; fewer than C(min_overlap, 2) shared
   distances means the scanners cannot share `min_overlap` beacons.
2. For each of the 24 rotations, every pairing of a known point with a rotated
   candidate point listed under the same shared distance votes for the
   translation `known - rotated`.
3. Translations are verified against the whole candidate beacon set; the first
   one that lands `min_overlap` beacons on known beacons is accepted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, FrozenSet, List, Optional, Union

import numpy as np

from ..geometry.points import ORIGIN, Point, array_to_points, points_to_array
from ..geometry.rotations import ROTATIONS, RotationMatrix
from ..geometry.scanner import Scanner
from ..utils.logging import setup_logger
from .distance_index import IndexedScanner

if TYPE_CHECKING:
    from .global_map import GlobalMap

logger = setup_logger(__name__)

DEFAULT_MIN_OVERLAP = 12


@dataclass(frozen=True)
class Placement:
    """
    Resolved pose of one scanner.

    Attributes:
        position: Scanner position in the global frame
        rotation: Rotation taking the scanner's local frame to the global frame
        beacons: The scanner's beacons expressed in the global frame
        anchor: Position of the known scanner the match was found against
        label: Label of the placed scanner
    """

    position: Point
    rotation: RotationMatrix
    beacons: FrozenSet[Point]
    anchor: Point = ORIGIN
    label: str = ""

    def to_global(self, point: Point) -> Point:
        return self.rotation.apply(point) + self.position

    def to_local(self, point: Point) -> Point:
        return self.rotation.inverse().apply(point - self.position)


@dataclass
class ScannerAligner:
    """
    Overlap search between a candidate scanner and the global map.

    Args:
        min_overlap: Number of beacons two scanners must share to be aligned.
    """

    min_overlap: int = DEFAULT_MIN_OVERLAP

    def __post_init__(self):
        if self.min_overlap < 2:
            raise ValueError(f"min_overlap must be at least 2, got {self.min_overlap}")

    @property
    def distance_threshold(self) -> int:
        """Shared distances required before a rotation search is attempted."""
        return math.comb(self.min_overlap, 2)

    def try_align(
        self,
        candidate: Union[Scanner, IndexedScanner],
        known: "GlobalMap",
    ) -> Optional[Placement]:
        """
        Try to place `candidate` against any scanner already in `known`.

        Known scanners are visited in insertion order and the first valid
        placement wins. `known` is only read.

        Returns:
            The placement, or None when no known scanner overlaps the candidate.
        """
        indexed = _as_indexed(candidate)
        for anchor, known_scanner in known.scanners():
            placement = self._search(indexed, known_scanner, anchor)
            if placement is not None:
                return placement
        return None

    def align_pair(
        self,
        candidate: Union[Scanner, IndexedScanner],
        known_scanner: IndexedScanner,
        anchor: Point = ORIGIN,
    ) -> Optional[Placement]:
        """
        Try to place `candidate` against a single scanner given in the global frame.

        Args:
            candidate: Scanner in its own local frame
            known_scanner: Scanner whose beacons are already global
            anchor: Position of `known_scanner`, recorded on the placement
        """
        return self._search(_as_indexed(candidate), known_scanner, anchor)

    # ------------------------ Internals ------------------------
    def _search(
        self,
        candidate: IndexedScanner,
        known_scanner: IndexedScanner,
        anchor: Point,
    ) -> Optional[Placement]:
        shared = candidate.shared_distances(known_scanner)
        if len(shared) < self.distance_threshold:
            return None

        logger.debug(
            "Scanner %r shares %d distances with scanner at %s; searching rotations.",
            candidate.label,
            len(shared),
            anchor,
        )

        ordered = sorted(shared)
        known_groups = [points_to_array(known_scanner.distances[d]) for d in ordered]
        candidate_groups = [points_to_array(candidate.distances[d]) for d in ordered]
        known_beacons = {p.as_tuple() for p in known_scanner.beacons}
        full = candidate.as_array()

        for rotation in ROTATIONS:
            matrix = rotation.as_array()
            rotated_full = full @ matrix.T
            for translation in self._vote_translations(known_groups, candidate_groups, matrix):
                moved = rotated_full + translation
                hits = sum(1 for row in moved.tolist() if tuple(row) in known_beacons)
                if hits < self.min_overlap:
                    continue
                position = Point.from_iterable(translation.tolist())
                logger.debug(
                    "Placed scanner %r at %s with rotation %s (%d shared beacons).",
                    candidate.label,
                    position,
                    rotation,
                    hits,
                )
                return Placement(
                    position=position,
                    rotation=rotation,
                    beacons=frozenset(array_to_points(moved)),
                    anchor=anchor,
                    label=candidate.label,
                )
        return None

    def _vote_translations(
        self,
        known_groups: List[np.ndarray],
        candidate_groups: List[np.ndarray],
        matrix: np.ndarray,
    ) -> np.ndarray:
        """
        Candidate translations for one rotation, most voted first.

        Every beacon of a true overlap casts at least one vote for the true
        translation, so translations with fewer than `min_overlap` votes are dropped.
        """
        votes = []
        for known_pts, candidate_pts in zip(known_groups, candidate_groups):
            rotated = candidate_pts @ matrix.T
            votes.append((known_pts[:, None, :] - rotated[None, :, :]).reshape(-1, 3))
        translations, counts = np.unique(np.concatenate(votes, axis=0), axis=0, return_counts=True)
        order = np.argsort(-counts, kind="stable")
        order = order[counts[order] >= self.min_overlap]
        return translations[order]


def _as_indexed(candidate: Union[Scanner, IndexedScanner]) -> IndexedScanner:
    if isinstance(candidate, IndexedScanner):
        return candidate
    return IndexedScanner.from_scanner(candidate)


def try_align(
    candidate: Union[Scanner, IndexedScanner],
    known: "GlobalMap",
    min_overlap: int = DEFAULT_MIN_OVERLAP,
) -> Optional[Placement]:
    """Place `candidate` against `known` with a default-configured aligner."""
    return ScannerAligner(min_overlap=min_overlap).try_align(candidate, known)
