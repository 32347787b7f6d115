"""
Registration pipeline

Glue between configuration, the merge loop and reporting: builds the global
map for a list of scanners and reports the fused beacon count and the largest
distance between two scanners.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..acceleration.parallel_executor import AlignmentParallelExecutor
from ..alignment.aligner import ScannerAligner
from ..alignment.global_map import GlobalMap
from ..geometry.scanner import Scanner
from ..preprocessing.loader import ScanReportLoader
from ..utils.config import AppConfig
from ..utils.logging import setup_logger

logger = setup_logger(__name__)


@dataclass
class RegistrationResult:
    global_map: GlobalMap
    beacon_count: int
    max_scanner_distance: int
    passes: int


def run_registration(scanners: List[Scanner], cfg: Optional[AppConfig] = None) -> RegistrationResult:
    """
    Register scanners into one global frame.

    Args:
        scanners: Scanner reports; the first defines the global frame
        cfg: Application config (defaults when None)

    Returns:
        RegistrationResult

    Raises:
        AlignmentError: If some scanner cannot be placed
    """
    cfg = cfg or AppConfig()
    aligner = ScannerAligner(min_overlap=cfg.alignment.min_overlap)
    executor = None
    if cfg.parallel.enabled:
        executor = AlignmentParallelExecutor(n_workers=cfg.parallel.n_workers)

    global_map = GlobalMap.build(scanners, aligner=aligner, executor=executor)
    result = RegistrationResult(
        global_map=global_map,
        beacon_count=len(global_map.beacons()),
        max_scanner_distance=global_map.max_scanner_distance(),
        passes=global_map.passes,
    )
    logger.info(
        f"Registered {len(global_map)} scanners in {result.passes} passes: "
        f"{result.beacon_count} beacons, max scanner distance {result.max_scanner_distance}"
    )
    return result


def run_registration_from_file(path: str | Path, cfg: Optional[AppConfig] = None) -> RegistrationResult:
    """Load a scan report and register it."""
    scanners = ScanReportLoader().load(str(path))
    return run_registration(scanners, cfg)
