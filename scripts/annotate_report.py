#!/usr/bin/env python3
"""
Create annotated reports, marking entries with suspicious values and runs of
entries with the same delta vote share.

Output files are named "annotated-<report name>.json". Before writing, the
annotated report is checked to strip back to the input report.

Usage:
    python scripts/annotate_report.py <json report or dir> <output dir>
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from election_timeseries.batch import json_files, process_files  # noqa: E402
from election_timeseries.report import (  # noqa: E402
    AnnotatedTimeSeriesReport,
    TimeSeriesReport,
    read_report,
)
from election_timeseries.report.report import write_json  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def annotate(report: TimeSeriesReport) -> dict:
    """
    Annotate a report and return the JSON object to write.

    Raises:
        ValueError: If the annotated JSON does not parse back to the report
    """
    annotated = AnnotatedTimeSeriesReport.from_report(report)
    annotated_json = annotated.to_dict()

    if TimeSeriesReport.from_dict(annotated_json) != report.rounded():
        raise ValueError("Annotated report does not strip back to the input report")
    return annotated_json


def main():
    parser = argparse.ArgumentParser(description="Annotate reports with anomalies")
    parser.add_argument("report", help="JSON report file, or directory of reports")
    parser.add_argument("output_dir", help="Directory to write annotated reports to")

    args = parser.parse_args()

    try:
        inputs = json_files(args.report)
    except FileNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    def annotate_file(path: Path):
        output_file = output_dir / f"annotated-{path.name}"
        write_json(annotate(read_report(path)), output_file)
        logger.info(f"Wrote annotated report to: {output_file}")

    process_files(inputs, annotate_file)


if __name__ == "__main__":
    main()
