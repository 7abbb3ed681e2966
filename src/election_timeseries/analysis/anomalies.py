"""
Anomaly queries over a whole time series.

Folds the pairwise heuristics over all subsequent non-empty snapshot pairs,
and finds the pairs in which votes disappeared.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from functools import reduce
from typing import List

from ..data.candidate import Candidate
from ..data.time_series import SnapshotPair, VotingTimeSeries
from .find_fraud import FindFraud, VoteSwapData
from .lost_votes import LostVotes, VoteLossData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetVotesSwitched:
    """Net outcome of the vote swaps between the two main candidates."""

    profiting_most: Candidate
    profiting_least: Candidate
    net_votes: Decimal


def find_disappeared_vote_pairs(series: VotingTimeSeries) -> List[SnapshotPair]:
    """
    Find subsequent non-empty snapshot pairs in which votes disappeared,
    whether switched or lost.

    A pair qualifies if the total votes went down, or the (rounded) votes of
    any candidate of the earlier snapshot went down.
    """
    pairs = []
    for snapshot1, snapshot2 in series.non_empty_snapshot_pairs():
        if snapshot1.total_votes > snapshot2.total_votes or any(
            snapshot1.total_votes_of(candidate) > snapshot2.total_votes_of(candidate)
            for candidate in snapshot1.vote_shares
        ):
            pairs.append((snapshot1, snapshot2))

    logger.info(f"Found {len(pairs)} snapshot pairs with disappeared votes")
    return pairs


def total_vote_loss(series: VotingTimeSeries, lost_votes: LostVotes) -> VoteLossData:
    """Sum of the lost votes heuristic over all non-empty snapshot pairs."""
    return reduce(
        lambda acc, pair: acc.plus(lost_votes(*pair)),
        series.non_empty_snapshot_pairs(),
        VoteLossData.empty(),
    )


def total_vote_swaps(series: VotingTimeSeries, find_fraud: FindFraud) -> VoteSwapData:
    """Sum of the vote swap heuristic over all non-empty snapshot pairs."""
    return reduce(
        lambda acc, pair: acc.plus(find_fraud(*pair)),
        series.non_empty_snapshot_pairs(),
        VoteSwapData.empty(),
    )


def net_votes_switched(
    swap_data: VoteSwapData, candidate1: Candidate, candidate2: Candidate
) -> NetVotesSwitched:
    """
    Determine which candidate profited most from the swaps between the two
    main candidates, and by how many votes on balance.
    """
    if swap_data.candidate2_to_candidate1 > swap_data.candidate1_to_candidate2:
        return NetVotesSwitched(
            candidate1,
            candidate2,
            swap_data.candidate2_to_candidate1 - swap_data.candidate1_to_candidate2,
        )
    return NetVotesSwitched(
        candidate2,
        candidate1,
        swap_data.candidate1_to_candidate2 - swap_data.candidate2_to_candidate1,
    )
