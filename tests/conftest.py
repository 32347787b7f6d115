"""
Shared fixtures: the reference five-scanner report and synthetic surveys
with known scanner poses.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List

import numpy as np
import pytest

# Ensure src is importable
sys.path.append(str(Path(__file__).parent.parent / "src"))

from scanner_registration.geometry import IDENTITY, ORIGIN, ROTATIONS, Point, Scanner
from scanner_registration.preprocessing import ScanReportLoader

SAMPLE_DATA = Path(__file__).parent / "sample_data"
REFERENCE_REPORT = SAMPLE_DATA / "reference_scans.txt"


@dataclass
class SyntheticSurvey:
    scanners: List[Scanner]
    beacons: FrozenSet[Point]
    positions: FrozenSet[Point]


def make_synthetic_survey(
    seed: int,
    n_scanners: int = 4,
    shared: int = 15,
    unique: int = 8,
) -> SyntheticSurvey:
    """
    Chain of scanners where scanner k shares `shared` beacons with scanner k-1.

    Scanner 0 sits at the origin with identity orientation, so its frame is the
    global frame; every other scanner gets a random rotation and position.
    """
    rng = np.random.default_rng(seed)
    used = set()

    def draw(count):
        points = []
        while len(points) < count:
            p = Point(*(int(v) for v in rng.integers(-1000, 1001, size=3)))
            if p not in used:
                used.add(p)
                points.append(p)
        return points

    links = [draw(shared) for _ in range(n_scanners - 1)]
    own = [draw(unique) for _ in range(n_scanners)]

    scanners = []
    positions = {ORIGIN}
    for k in range(n_scanners):
        world = list(own[k])
        if k > 0:
            world += links[k - 1]
        if k < n_scanners - 1:
            world += links[k]

        if k == 0:
            rotation, position = IDENTITY, ORIGIN
        else:
            rotation = ROTATIONS[int(rng.integers(len(ROTATIONS)))]
            position = Point(*(int(v) for v in rng.integers(-2000, 2001, size=3)))
            positions.add(position)

        inverse = rotation.inverse()
        local = [inverse.apply(w - position) for w in world]
        scanners.append(Scanner.from_points(local, label=f"scanner {k}"))

    beacons = frozenset(p for group in links + own for p in group)
    return SyntheticSurvey(scanners=scanners, beacons=beacons, positions=frozenset(positions))


@pytest.fixture
def reference_report() -> Path:
    return REFERENCE_REPORT


@pytest.fixture
def reference_scanners() -> List[Scanner]:
    return ScanReportLoader().load(str(REFERENCE_REPORT))


@pytest.fixture
def synthetic_survey() -> SyntheticSurvey:
    return make_synthetic_survey(seed=7)
