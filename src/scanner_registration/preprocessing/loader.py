"""
Scan Report Loader

This module parses scanner reports: blocks introduced by a header line such as
``--- scanner 0 ---``, each followed by one ``x,y,z`` beacon per line. Blank
lines separate blocks.
"""

from pathlib import Path
from typing import List, Optional

from ..geometry.points import Point
from ..geometry.scanner import Scanner
from ..utils.logging import setup_logger

logger = setup_logger(__name__)

HEADER_PREFIX = "---"


class ScanFormatError(ValueError):
    """Raised when a scan report line cannot be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


def _header_label(line: str) -> str:
    return line.strip().strip("-").strip()


def _parse_beacon(line: str, line_number: int) -> Point:
    fields = line.split(",")
    if len(fields) != 3:
        raise ScanFormatError(
            f"expected 3 comma-separated integers, got {len(fields)} fields: {line!r}",
            line_number,
        )
    try:
        return Point(*(int(field.strip()) for field in fields))
    except ValueError as e:
        raise ScanFormatError(f"invalid integer in {line!r}", line_number) from e


def parse_scan_report(text: str) -> List[Scanner]:
    """
    Parse a scan report into scanners, in report order.

    Args:
        text: Report contents

    Returns:
        List of Scanner objects (duplicated beacon lines collapse)

    Raises:
        ScanFormatError: If a beacon line is malformed or precedes any header
    """
    blocks: List[tuple] = []
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        if line.startswith(HEADER_PREFIX):
            blocks.append((_header_label(line), []))
            continue
        if not blocks:
            raise ScanFormatError("beacon listed before any scanner header", line_number)
        blocks[-1][1].append(_parse_beacon(line, line_number))

    return [Scanner.from_points(points, label=label) for label, points in blocks]


class ScanReportLoader:
    """
    A class for loading scanner reports from text files.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def load(self, file_path: str) -> List[Scanner]:
        """
        Load a scan report.

        Args:
            file_path: Path to the report

        Returns:
            List of Scanner objects

        Raises:
            FileNotFoundError: If the file does not exist
            ScanFormatError: If the report is malformed
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        logger.info(f"Loading scan report from {file_path}")
        scanners = parse_scan_report(file_path.read_text(encoding=self.encoding))
        beacon_total = sum(len(s) for s in scanners)
        logger.info(f"Loaded {len(scanners)} scanners with {beacon_total} beacon reports")
        return scanners
