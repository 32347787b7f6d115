"""
Preprocessing Module

Parsing of scanner reports into Scanner objects.
"""

from .loader import ScanFormatError, ScanReportLoader, parse_scan_report

__all__ = [
    "ScanFormatError",
    "ScanReportLoader",
    "parse_scan_report",
]
