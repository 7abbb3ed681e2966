"""
Conversion of reports to CSV, one line per report entry.
"""

import logging
from pathlib import Path
from typing import List, Union

import pandas as pd

from .report import TimeSeriesReport, round_for_presentation

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = [
    "original_index",
    "timestamp",
    "delta_seconds",
    "total_votes",
    "delta_votes",
]
CANDIDATE_COLUMNS = ["vote_share", "total_votes", "delta_votes", "delta_vote_share"]


def csv_columns(report: TimeSeriesReport) -> List[str]:
    """Header of the CSV: the entry columns, then 4 columns per candidate."""
    columns = list(ENTRY_COLUMNS)
    for candidate in (report.candidate1, report.candidate2, report.third_party):
        columns.extend(f"{column} {candidate}" for column in CANDIDATE_COLUMNS)
    return columns


def report_to_dataframe(report: TimeSeriesReport) -> pd.DataFrame:
    """
    Flatten a report into a DataFrame, in report order.

    Decimal values are rounded to 3 places and kept as strings, so no binary
    floating point creeps in. Timestamps are ISO-8601 strings.

    Args:
        report: Non-empty report

    Returns:
        DataFrame with the columns of csv_columns(report)
    """
    if not len(report):
        raise ValueError("Empty report not allowed")

    rows = []
    for entry in report.entries:
        row = [
            entry.original_index,
            entry.timestamp.isoformat(),
            entry.delta_seconds,
            entry.total_votes,
            entry.delta_votes,
        ]
        for data in entry.candidate_data:
            row.extend(
                str(round_for_presentation(value))
                for value in (
                    data.vote_share,
                    data.total_votes,
                    data.delta_votes,
                    data.delta_vote_share,
                )
            )
        rows.append(row)

    return pd.DataFrame(rows, columns=csv_columns(report))


def write_csv(report: TimeSeriesReport, path: Union[str, Path]):
    df = report_to_dataframe(report)
    df.to_csv(path, index=False)
    logger.info(f"Wrote {len(df)} CSV lines to: {path}")
