"""
Scanner Alignment Module

This module places scanners reporting in unknown frames into one global
frame: distance fingerprints, the rotation/translation search and the merge
loop that grows the global map.
"""

from .distance_index import IndexedScanner, build_distance_index
from .aligner import Placement, ScannerAligner, try_align
from .global_map import AlignmentError, GlobalMap

__all__ = [
    "IndexedScanner",
    "build_distance_index",
    "Placement",
    "ScannerAligner",
    "try_align",
    "AlignmentError",
    "GlobalMap",
]
