"""
Loading of vote dump time series from JSON.

The expected layout is the one of the 2020 U.S. election result feeds:

    {"data": {"races": [{"timeseries": [
        {"vote_shares": {"trumpd": 0.5, "bidenj": 0.48},
         "votes": 1234, "timestamp": "2020-11-04T01:02:03Z", ...},
        ...
    ]}]}}

Numbers are parsed as Decimal, never as float.
"""

import json
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Union

from dateutil.parser import isoparse

from ..exceptions import ParseError
from .snapshot import VotingSnapshot, to_decimal
from .time_series import VotingTimeSeries

logger = logging.getLogger(__name__)

VOTE_SHARES_KEY = "vote_shares"
VOTES_KEY = "votes"
TIMESTAMP_KEY = "timestamp"


def read_json(path: Union[str, Path]) -> Any:
    """Read a JSON file, parsing floats as Decimal."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f, parse_float=Decimal)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON in {path}: {e}") from e


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO-8601 zoned date-time such as "2020-11-04T01:02:03Z".

    Raises:
        ParseError: If the value is not a string, not ISO-8601, or has no zone
    """
    if not isinstance(value, str):
        raise ParseError(f"Timestamp is not a string: {value!r}")
    try:
        timestamp = isoparse(value)
    except ValueError as e:
        raise ParseError(f"Invalid timestamp {value!r}: {e}") from e
    if timestamp.tzinfo is None:
        raise ParseError(f"Timestamp without zone offset: {value!r}")
    return timestamp


def parse_decimal(value: Any, what: str) -> Decimal:
    if isinstance(value, bool):
        raise ParseError(f"{what} is not a number: {value!r}")
    try:
        return to_decimal(value)
    except (TypeError, InvalidOperation) as e:
        raise ParseError(f"{what} is not a number: {value!r}") from e


def parse_integer(value: Any, what: str) -> int:
    number = parse_decimal(value, what)
    if number != number.to_integral_value():
        raise ParseError(f"{what} is not an integer: {value!r}")
    return int(number)


def snapshot_from_json(obj: Any) -> VotingSnapshot:
    """Convert one vote dump JSON object into a VotingSnapshot."""
    if not isinstance(obj, dict):
        raise ParseError(f"Vote dump is not a JSON object: {obj!r}")

    for key in (VOTE_SHARES_KEY, VOTES_KEY, TIMESTAMP_KEY):
        if key not in obj:
            raise ParseError(f"Vote dump misses key '{key}'")

    raw_shares = obj[VOTE_SHARES_KEY]
    if not isinstance(raw_shares, dict):
        raise ParseError(f"'{VOTE_SHARES_KEY}' is not a JSON object")

    vote_shares = {
        name: parse_decimal(share, f"Vote share of {name}")
        for name, share in raw_shares.items()
    }
    other_data = {
        key: str(value)
        for key, value in obj.items()
        if key not in (VOTE_SHARES_KEY, VOTES_KEY, TIMESTAMP_KEY)
    }

    return VotingSnapshot.create(
        vote_shares,
        parse_integer(obj[VOTES_KEY], "Total votes"),
        parse_timestamp(obj[TIMESTAMP_KEY]),
        other_data,
    )


def time_series_from_json(data: Any) -> VotingTimeSeries:
    """
    Build a time series from the parsed JSON of a state's vote dumps.

    Accepts either the full document (data/races/0/timeseries) or the
    time series array itself.
    """
    if isinstance(data, dict):
        try:
            raw_series = data["data"]["races"][0]["timeseries"]
        except (KeyError, IndexError, TypeError) as e:
            raise ParseError(f"Missing data/races/0/timeseries: {e}") from e
    else:
        raw_series = data

    if not isinstance(raw_series, list):
        raise ParseError("Time series is not a JSON array")

    snapshots: List[VotingSnapshot] = [snapshot_from_json(obj) for obj in raw_series]
    return VotingTimeSeries.from_snapshots(snapshots)


def load_time_series(path: Union[str, Path]) -> VotingTimeSeries:
    """
    Load a state's vote dump time series from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        VotingTimeSeries indexed by input position
    """
    logger.info(f"Loading time series from: {path}")

    series = time_series_from_json(read_json(path))

    logger.info(
        f"Loaded {len(series)} vote dumps "
        f"({len(series.non_empty_snapshots())} non-empty)"
    )
    return series


def snapshot_to_json(snapshot: VotingSnapshot) -> Dict[str, Any]:
    """Inverse of snapshot_from_json, with shares written as JSON numbers."""
    obj: Dict[str, Any] = {
        VOTE_SHARES_KEY: {
            str(candidate): float(share)
            for candidate, share in snapshot.vote_shares.items()
        },
        VOTES_KEY: snapshot.total_votes,
        TIMESTAMP_KEY: snapshot.timestamp.isoformat(),
    }
    obj.update(snapshot.other_data)
    return obj
