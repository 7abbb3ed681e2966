#!/usr/bin/env python3
"""
Sort the entries of one or more reports, descending by a sort criterion.

Output files are named "sorted-<report name>-<criterion>.json".

Usage:
    python scripts/sort_report.py <json report or dir> <output dir> <sort criterion>
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from election_timeseries.batch import json_files, process_files  # noqa: E402
from election_timeseries.report import (  # noqa: E402
    SortCriteria,
    read_report,
    write_report,
)

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Sort report entries")
    parser.add_argument("report", help="JSON report file, or directory of reports")
    parser.add_argument("output_dir", help="Directory to write sorted reports to")
    parser.add_argument(
        "criterion",
        help=f"Sort criterion, one of: {', '.join(str(c) for c in SortCriteria)}",
    )

    args = parser.parse_args()

    try:
        criterion = SortCriteria.from_name(args.criterion)
        inputs = json_files(args.report)
    except (ValueError, FileNotFoundError) as e:
        logger.error(str(e))
        sys.exit(1)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    def sort_file(path: Path):
        report = read_report(path)
        sorted_report = report.sort_by_desc(criterion.sort_function)
        write_report(sorted_report, output_dir / f"sorted-{path.stem}-{criterion}.json")

    process_files(inputs, sort_file)


if __name__ == "__main__":
    main()
