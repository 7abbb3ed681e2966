"""
Anomaly analysis of voting time series.

- LostVotes: pairs of snapshots in which both main candidates lost votes
- FindFraud: apportionment of lost votes to the entities that gained votes
"""

from .anomalies import (
    find_disappeared_vote_pairs,
    net_votes_switched,
    total_vote_loss,
    total_vote_swaps,
)
from .find_fraud import FindFraud, VoteSwapData
from .lost_votes import LostVotes, VoteLossData

__all__ = [
    "LostVotes",
    "VoteLossData",
    "FindFraud",
    "VoteSwapData",
    "find_disappeared_vote_pairs",
    "total_vote_loss",
    "total_vote_swaps",
    "net_votes_switched",
]
