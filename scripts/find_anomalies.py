#!/usr/bin/env python3
"""
Find vote anomalies in the vote dump time series of a state.

Prints the vote dump pairs in which votes disappeared, the totals of the lost
votes heuristic, and the totals of the vote swap heuristic for both bias
directions.

Usage:
    python scripts/find_anomalies.py <json data set of a state> \
        [<candidate 1> <candidate 2>]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from create_report import parse_candidates  # noqa: E402

from election_timeseries.analysis import (  # noqa: E402
    FindFraud,
    LostVotes,
    find_disappeared_vote_pairs,
    net_votes_switched,
    total_vote_loss,
    total_vote_swaps,
)
from election_timeseries.data.loader import load_time_series  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def print_vote_swaps(swaps, candidate1, candidate2):
    print(f"{candidate1} lost: {swaps.total_votes_lost_candidate1}")
    print(f"{candidate1} lost to {candidate2}: {swaps.candidate1_to_candidate2}")
    print(f"{candidate1} lost to third: {swaps.candidate1_to_third}")

    print(f"{candidate2} lost: {swaps.total_votes_lost_candidate2}")
    print(f"{candidate2} lost to {candidate1}: {swaps.candidate2_to_candidate1}")
    print(f"{candidate2} lost to third: {swaps.candidate2_to_third}")

    print(f"Third lost: {swaps.total_votes_lost_third_party}")
    print(f"Third lost to {candidate1}: {swaps.third_to_candidate1}")
    print(f"Third lost to {candidate2}: {swaps.third_to_candidate2}")

    net = net_votes_switched(swaps, candidate1, candidate2)
    print(
        f"Net votes switched from {net.profiting_least} to {net.profiting_most}: "
        f"{net.net_votes}"
    )
    print(f"Total votes lost: {swaps.total_votes_lost}")


def main():
    parser = argparse.ArgumentParser(description="Find anomalies in vote dumps")
    parser.add_argument("json_file", help="Path to the JSON data set of a state")
    parser.add_argument(
        "candidates",
        nargs="*",
        help="Candidate 1 and candidate 2 (default: trumpd bidenj)",
    )

    args = parser.parse_args()
    candidate1, candidate2 = parse_candidates(args)

    try:
        series = load_time_series(args.json_file)
        series.validate(candidate1, candidate2)
    except (ValueError, OSError) as e:
        logger.error(f"Could not load time series: {e}")
        sys.exit(1)

    # The heuristics compare each vote dump with the one before it in time
    if not series.is_in_chronological_order():
        logger.error("Time series is not in chronological order")
        sys.exit(1)

    print(f"Number of (possibly empty) vote dumps in the time series: {len(series)}")
    print(
        f"Number of non-empty vote dumps in the time series: "
        f"{len(series.non_empty_snapshots())}"
    )

    pairs = find_disappeared_vote_pairs(series)
    print(
        f"\nVotes disappeared for candidate(s) and/or in total, whether switched or "
        f"lost ({len(pairs)} vote dump pairs):"
    )
    for snapshot1, snapshot2 in pairs:
        print(
            f"Vote dumps {snapshot1.index} and {snapshot2.index} "
            f"(at {snapshot1.timestamp} and {snapshot2.timestamp})"
        )
        for candidate in (candidate1, candidate2):
            before = snapshot1.total_votes_of(candidate)
            after = snapshot2.total_votes_of(candidate)
            print(
                f"\tDelta {candidate} votes: {after - before}"
                f"  (from {before} to {after})"
            )
        print(
            f"\tDelta total votes: {snapshot2.total_votes - snapshot1.total_votes}"
            f"  (from {snapshot1.total_votes} to {snapshot2.total_votes})"
        )

    vote_loss = total_vote_loss(series, LostVotes(candidate1, candidate2))
    print("\nVote loss:")
    print(f"Total votes lost {candidate1}: {vote_loss.candidate1_vote_loss}")
    print(f"Total votes lost {candidate2}: {vote_loss.candidate2_vote_loss}")
    print(f"Total votes lost third: {vote_loss.third_party_vote_loss}")
    print(f"Total votes lost: {vote_loss.total_votes_lost}")

    find_fraud = FindFraud(candidate1, candidate2)
    for variant in (
        find_fraud.having_bias_against_candidate2(),
        find_fraud.having_bias_against_candidate1(),
    ):
        biased_against = candidate1 if variant.biased_against_candidate1 else candidate2
        print(f"\nVote swaps (third party losses go to {biased_against} first):")
        print_vote_swaps(total_vote_swaps(series, variant), candidate1, candidate2)

    print("\nReady")


if __name__ == "__main__":
    main()
