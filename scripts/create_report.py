#!/usr/bin/env python3
"""
Create a JSON report of the vote dump time series of a state.

The report is more informative than the input JSON: vote totals per candidate
are shown, as well as deltas compared to the preceding vote dump.

Usage:
    python scripts/create_report.py <json data set of a state> \
        [<candidate 1> <candidate 2>]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from election_timeseries.data import BIDEN, TRUMP, Candidate  # noqa: E402
from election_timeseries.data.loader import load_time_series  # noqa: E402
from election_timeseries.report import TimeSeriesReport, write_report  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def parse_candidates(args):
    """The two candidates from the command line, defaulting to Trump and Biden."""
    if args.candidates and len(args.candidates) != 2:
        logger.error("Either no candidates or exactly 2 candidates must be given")
        sys.exit(2)
    if args.candidates:
        return Candidate(args.candidates[0]), Candidate(args.candidates[1])
    return TRUMP, BIDEN


def main():
    parser = argparse.ArgumentParser(description="Create a report from vote dumps")
    parser.add_argument("json_file", help="Path to the JSON data set of a state")
    parser.add_argument(
        "candidates",
        nargs="*",
        help="Candidate 1 and candidate 2 (default: trumpd bidenj)",
    )
    parser.add_argument(
        "--output", help="Write the report to this file instead of stdout"
    )

    args = parser.parse_args()
    candidate1, candidate2 = parse_candidates(args)

    json_path = Path(args.json_file)
    if not json_path.is_file():
        logger.error(f"JSON file not found: {json_path}")
        sys.exit(1)

    try:
        series = load_time_series(json_path)
        report = TimeSeriesReport.from_time_series(series, candidate1, candidate2)
    except ValueError as e:
        logger.error(f"Could not create report: {e}")
        sys.exit(1)

    if args.output:
        write_report(report, args.output)
    else:
        print(json.dumps(report.to_dict(), indent=2))


if __name__ == "__main__":
    main()
