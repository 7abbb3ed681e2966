from .annotated import AnnotatedTimeSeriesReport, DeltaVoteShareRun
from .export import report_to_dataframe, write_csv
from .report import (
    CandidateData,
    ReportEntry,
    TimeSeriesReport,
    read_report,
    write_report,
)
from .sorting import SortCriteria

__all__ = [
    "CandidateData",
    "ReportEntry",
    "TimeSeriesReport",
    "AnnotatedTimeSeriesReport",
    "DeltaVoteShareRun",
    "SortCriteria",
    "read_report",
    "write_report",
    "report_to_dataframe",
    "write_csv",
]
