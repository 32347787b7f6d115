"""Raw scanner reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

from .points import Point


@dataclass(frozen=True)
class Scanner:
    """
    Beacons reported by one scanner, in that scanner's own frame.

    Duplicated beacons collapse. The label is informational (it usually
    comes from the report header) and does not take part in equality.
    """

    beacons: FrozenSet[Point]
    label: str = field(default="", compare=False)

    @classmethod
    def from_points(cls, points: Iterable[Point], label: str = "") -> "Scanner":
        return cls(beacons=frozenset(points), label=label)

    def __len__(self) -> int:
        return len(self.beacons)
