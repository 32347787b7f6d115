"""
Global Map

Accumulates aligned scanners in the frame of the first scanner and drives the
merge loop that places every remaining scanner.

Each merge pass tries all pending scanners against a snapshot of the map and
commits the successful placements only after the whole pass has run. A pass
that places nothing while scanners are still pending ends the loop with an
AlignmentError.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from ..acceleration.parallel_executor import AlignmentParallelExecutor
from ..geometry.points import ORIGIN, Point, max_pairwise_distance
from ..geometry.rotations import IDENTITY, RotationMatrix
from ..geometry.scanner import Scanner
from ..utils.logging import setup_logger
from .aligner import Placement, ScannerAligner
from .distance_index import IndexedScanner

logger = setup_logger(__name__)


class AlignmentError(RuntimeError):
    """
    Raised when scanners cannot all be placed in the global frame.

    Attributes:
        passes: Number of merge passes that ran before giving up
        pending: Labels of the scanners left unplaced
    """

    def __init__(self, message: str, *, passes: int = 0, pending: Iterable[str] = ()):
        super().__init__(message)
        self.passes = passes
        self.pending = tuple(pending)


class GlobalMap:
    """
    Scanners placed in the global frame, keyed by their resolved position.

    Every stored beacon set is already rotated and translated into the global
    frame, and an entry never changes once inserted.
    """

    def __init__(self):
        self._scanners: Dict[Point, IndexedScanner] = {}
        self._orientations: Dict[Point, RotationMatrix] = {}
        self.passes = 0

    @classmethod
    def anchored(cls, scanner: Union[Scanner, IndexedScanner]) -> "GlobalMap":
        """Map holding only `scanner`, at the origin with identity orientation."""
        global_map = cls()
        global_map.insert(Placement(
            position=ORIGIN,
            rotation=IDENTITY,
            beacons=frozenset(scanner.beacons),
            anchor=ORIGIN,
            label=scanner.label,
        ))
        return global_map

    @classmethod
    def build(
        cls,
        scanners: Sequence[Scanner],
        aligner: Optional[ScannerAligner] = None,
        executor: Optional[AlignmentParallelExecutor] = None,
    ) -> "GlobalMap":
        """
        Place every scanner in the frame of the first one.

        Args:
            scanners: Raw scanner reports; the first one defines the global frame
            aligner: Overlap search to use (default: ScannerAligner())
            executor: If given, the pending scanners of each pass are tried in
                worker processes

        Returns:
            GlobalMap holding all scanners

        Raises:
            ValueError: If no scanners are given
            AlignmentError: If a pass places no scanner while some are pending
        """
        if not scanners:
            raise ValueError("At least one scanner is required to build a global map")

        aligner = aligner or ScannerAligner()
        indexed = [IndexedScanner.from_scanner(s) for s in scanners]

        global_map = cls.anchored(indexed[0])
        pending = indexed[1:]
        logger.info(
            "Building global map from %d scanners (min overlap %d).",
            len(indexed),
            aligner.min_overlap,
        )

        while pending:
            global_map.passes += 1
            snapshot = global_map.snapshot()
            placements = _run_pass(pending, snapshot, aligner, executor)

            still_pending: List[IndexedScanner] = []
            placed = 0
            for candidate, placement in zip(pending, placements):
                if placement is None:
                    still_pending.append(candidate)
                    continue
                global_map.insert(placement)
                placed += 1

            logger.info(
                "Pass %d: placed %d scanners, %d pending, %d known.",
                global_map.passes,
                placed,
                len(still_pending),
                len(global_map),
            )

            if placed == 0:
                labels = [c.label for c in still_pending]
                logger.error(
                    "No alignment possible for %d scanners after %d passes: %s",
                    len(still_pending),
                    global_map.passes,
                    ", ".join(label or "<unlabeled>" for label in labels),
                )
                raise AlignmentError(
                    f"No alignment possible for {len(still_pending)} of {len(indexed)} scanners",
                    passes=global_map.passes,
                    pending=labels,
                )
            pending = still_pending

        return global_map

    def insert(self, placement: Placement) -> bool:
        """
        Add a placed scanner.

        Returns:
            True if the map grew, False if the same scanner was already present

        Raises:
            AlignmentError: If a different beacon set already occupies the position
        """
        existing = self._scanners.get(placement.position)
        if existing is not None:
            if existing.beacons == placement.beacons:
                return False
            raise AlignmentError(
                f"Conflicting scanners resolved to the same position {placement.position}"
            )
        self._scanners[placement.position] = IndexedScanner(placement.beacons, label=placement.label)
        self._orientations[placement.position] = placement.rotation
        return True

    def snapshot(self) -> "GlobalMap":
        """Copy of the map that is unaffected by later inserts."""
        copy = GlobalMap()
        copy._scanners = dict(self._scanners)
        copy._orientations = dict(self._orientations)
        copy.passes = self.passes
        return copy

    # ------------------------ Queries ------------------------
    def scanners(self) -> List[Tuple[Point, IndexedScanner]]:
        """(position, scanner) pairs in insertion order."""
        return list(self._scanners.items())

    def beacons(self) -> FrozenSet[Point]:
        """Union of all placed beacons; a beacon seen by several scanners counts once."""
        return frozenset().union(*(s.beacons for s in self._scanners.values()))

    def positions(self) -> FrozenSet[Point]:
        return frozenset(self._scanners)

    def orientation(self, position: Point) -> RotationMatrix:
        return self._orientations[position]

    def max_scanner_distance(self) -> int:
        """Largest Manhattan distance between two placed scanners."""
        return max_pairwise_distance(self._scanners)

    def __len__(self) -> int:
        return len(self._scanners)

    def __contains__(self, position: object) -> bool:
        return position in self._scanners

    def __repr__(self) -> str:
        return f"GlobalMap(scanners={len(self._scanners)}, passes={self.passes})"


def _run_pass(
    pending: List[IndexedScanner],
    snapshot: GlobalMap,
    aligner: ScannerAligner,
    executor: Optional[AlignmentParallelExecutor],
) -> List[Optional[Placement]]:
    if executor is None:
        return [aligner.try_align(candidate, snapshot) for candidate in pending]
    return executor.align_pending(pending, known=snapshot, min_overlap=aligner.min_overlap)
