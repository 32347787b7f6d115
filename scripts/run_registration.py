"""
Register a scan report into one global map.

Prints the number of distinct beacons and the largest Manhattan distance
between two scanners.
"""

import sys
import argparse
import logging
from pathlib import Path

# Add the src to the path to import modules
sys.path.append(str(Path(__file__).parent.parent / "src"))

from scanner_registration.alignment import AlignmentError
from scanner_registration.pipeline import run_registration_from_file
from scanner_registration.preprocessing import ScanFormatError
from scanner_registration.utils.config import load_config, AppConfig
from scanner_registration.utils.export import export_global_map
from scanner_registration.utils.logging import setup_logger, set_package_level


def main() -> int:
    """
    Main function to run the registration workflow.
    """
    parser = argparse.ArgumentParser(description="Scanner Registration Workflow")
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="Scan report to register (overrides paths.input_file)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file (defaults to config/default.yaml)",
    )
    parser.add_argument(
        "--export",
        type=str,
        default=None,
        help="Write the fused map as JSON to this path (overrides paths.export_file)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Try pending scanners in this many worker processes (enables parallel passes)",
    )
    args = parser.parse_args()

    cfg: AppConfig = load_config(args.config)
    if args.input:
        cfg.paths.input_file = args.input
    if args.export:
        cfg.paths.export_file = args.export
    if args.workers is not None:
        cfg.parallel.enabled = args.workers > 1
        cfg.parallel.n_workers = args.workers

    log_level = getattr(logging, cfg.logging.level.upper(), logging.INFO)
    logger = setup_logger(__name__, level=log_level, log_file=cfg.logging.file)
    set_package_level(log_level, cfg.logging.file)

    if not cfg.paths.input_file:
        logger.error("No scan report given (use --input or paths.input_file)")
        return 2

    try:
        result = run_registration_from_file(cfg.paths.input_file, cfg)
    except (FileNotFoundError, ScanFormatError) as e:
        logger.error(f"Could not read scan report: {e}")
        return 2
    except AlignmentError as e:
        logger.error(f"Registration failed after {e.passes} passes: {e}")
        return 1

    if cfg.paths.export_file:
        export_global_map(result.global_map, cfg.paths.export_file)

    print(f"Beacons: {result.beacon_count}")
    print(f"Max scanner distance: {result.max_scanner_distance}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
