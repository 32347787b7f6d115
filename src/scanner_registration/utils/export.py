"""
Export utilities for registration results.

Writes the fused global map as a JSON document: scanner poses, per-scanner
beacon counts and the fused beacon list.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict

from ..geometry.points import Point
from .logging import setup_logger

if TYPE_CHECKING:
    from ..alignment.global_map import GlobalMap

logger = setup_logger(__name__)


def global_map_to_dict(global_map: "GlobalMap") -> Dict[str, Any]:
    """JSON-serialisable summary of a global map."""
    scanners = []
    for position, scanner in global_map.scanners():
        rotation = global_map.orientation(position)
        scanners.append({
            "label": scanner.label,
            "position": list(position.as_tuple()),
            "orientation": [str(row) for row in rotation.rows],
            "beacon_count": len(scanner),
        })

    beacons = sorted(global_map.beacons(), key=Point.as_tuple)
    return {
        "scanner_count": len(global_map),
        "beacon_count": len(beacons),
        "max_scanner_distance": global_map.max_scanner_distance(),
        "scanners": scanners,
        "beacons": [list(b.as_tuple()) for b in beacons],
    }


def export_global_map(global_map: "GlobalMap", output_path: str | Path) -> Path:
    """
    Write a global map to a JSON file.

    Args:
        global_map: Map to export
        output_path: Destination file; parent directories are created

    Returns:
        Path of the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    document = global_map_to_dict(global_map)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)

    logger.info(
        f"Exported global map ({document['scanner_count']} scanners, "
        f"{document['beacon_count']} beacons) to {output_path}"
    )
    return output_path
