#!/usr/bin/env python3
"""
Rewrite JSON files with an indentation of 2, keeping their file names.

Numbers are written as floats, so a number with more significant digits than a
float holds is rounded to the nearest float, with a warning in the log.

Usage:
    python scripts/prettify_json.py <json file or dir> <output dir>
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from election_timeseries.batch import json_files, process_files  # noqa: E402
from election_timeseries.data.loader import read_json  # noqa: E402
from election_timeseries.report.report import write_json  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Prettify JSON files")
    parser.add_argument("json", help="JSON file, or directory of JSON files")
    parser.add_argument("output_dir", help="Directory to write prettified files to")

    args = parser.parse_args()

    try:
        inputs = json_files(args.json)
    except FileNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)

    input_path = Path(args.json)
    input_dir = input_path if input_path.is_dir() else input_path.parent
    output_dir = Path(args.output_dir)
    if output_dir.resolve() == input_dir.resolve():
        logger.error("Output directory must differ from the input directory")
        sys.exit(1)
    output_dir.mkdir(parents=True, exist_ok=True)

    process_files(
        inputs, lambda path: write_json(read_json(path), output_dir / path.name)
    )


if __name__ == "__main__":
    main()
