"""
Tests for scan report parsing.
"""

import pytest

from scanner_registration.geometry import Point
from scanner_registration.preprocessing import ScanFormatError, ScanReportLoader, parse_scan_report


def test_load_reference_report(reference_report):
    scanners = ScanReportLoader().load(str(reference_report))

    assert [s.label for s in scanners] == [f"scanner {i}" for i in range(5)]
    assert [len(s) for s in scanners] == [25, 25, 26, 25, 26]
    assert Point(404, -588, -901) in scanners[0].beacons
    assert Point(30, -46, -14) in scanners[4].beacons


def test_missing_file_raises():
    with pytest.raises(FileNotFoundError):
        ScanReportLoader().load("does/not/exist.txt")


def test_parse_blocks_and_blank_lines():
    text = "--- scanner 0 ---\n1,2,3\n-4,5,-6\n\n--- scanner 1 ---\n\n7,8,9\n"
    scanners = parse_scan_report(text)
    assert len(scanners) == 2
    assert scanners[0].beacons == {Point(1, 2, 3), Point(-4, 5, -6)}
    assert scanners[1].beacons == {Point(7, 8, 9)}


def test_scanner_without_beacons():
    scanners = parse_scan_report("--- scanner 0 ---\n--- scanner 1 ---\n1,1,1\n")
    assert len(scanners) == 2
    assert len(scanners[0]) == 0


def test_duplicate_beacons_collapse():
    scanners = parse_scan_report("--- scanner 0 ---\n1,2,3\n1,2,3\n 1, 2, 3 \n")
    assert len(scanners[0]) == 1


def test_empty_report():
    assert parse_scan_report("") == []


@pytest.mark.parametrize(
    "text, line_number",
    [
        ("1,2,3\n", 1),
        ("--- scanner 0 ---\n1,2\n", 2),
        ("--- scanner 0 ---\n1,2,3\n1,2,3,4\n", 3),
        ("--- scanner 0 ---\n\n1,x,3\n", 3),
        ("--- scanner 0 ---\n1.5,2,3\n", 2),
    ],
)
def test_malformed_lines_report_line_number(text, line_number):
    with pytest.raises(ScanFormatError) as excinfo:
        parse_scan_report(text)
    assert excinfo.value.line_number == line_number
    assert f"line {line_number}" in str(excinfo.value)


def test_scan_format_error_is_value_error():
    assert issubclass(ScanFormatError, ValueError)
