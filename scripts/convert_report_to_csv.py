#!/usr/bin/env python3
"""
Convert reports to CSV, one line per report entry.

Usage:
    python scripts/convert_report_to_csv.py <json report or dir> <output dir>
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from election_timeseries.batch import json_files, process_files  # noqa: E402
from election_timeseries.report import read_report, write_csv  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Convert reports to CSV")
    parser.add_argument("report", help="JSON report file, or directory of reports")
    parser.add_argument("output_dir", help="Directory to write CSV files to")

    args = parser.parse_args()

    try:
        inputs = json_files(args.report)
    except FileNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    process_files(
        inputs,
        lambda path: write_csv(read_report(path), output_dir / f"{path.stem}.csv"),
    )


if __name__ == "__main__":
    main()
