from decimal import Decimal
from enum import Enum
from typing import Callable, Dict

from .report import ReportEntry

SortFunction = Callable[[ReportEntry], Decimal]


class SortCriteria(Enum):
    """Named metrics for TimeSeriesReport.sort_by_desc."""

    MaxDeltaVotes = "MaxDeltaVotes"
    MaxDeltaVotesCandidate1 = "MaxDeltaVotesCandidate1"
    MaxDeltaVotesCandidate2 = "MaxDeltaVotesCandidate2"
    MaxDeltaVotesThirdParty = "MaxDeltaVotesThirdParty"
    # Difference between the delta votes of the 2 main candidates, ignoring 3rd party
    MaxDiffDeltaVotes = "MaxDiffDeltaVotes"

    def __str__(self) -> str:
        return self.value

    @property
    def sort_function(self) -> SortFunction:
        return _SORT_FUNCTIONS[self]

    @classmethod
    def from_name(cls, name: str) -> "SortCriteria":
        try:
            return cls(name)
        except ValueError:
            known = ", ".join(c.value for c in cls)
            raise ValueError(
                f"Unknown sort criteria: {name} (known: {known})"
            ) from None


_SORT_FUNCTIONS: Dict[SortCriteria, SortFunction] = {
    SortCriteria.MaxDeltaVotes: lambda e: Decimal(e.delta_votes),
    SortCriteria.MaxDeltaVotesCandidate1: lambda e: e.delta_votes_candidate1,
    SortCriteria.MaxDeltaVotesCandidate2: lambda e: e.delta_votes_candidate2,
    SortCriteria.MaxDeltaVotesThirdParty: lambda e: e.delta_votes_third_party,
    SortCriteria.MaxDiffDeltaVotes: lambda e: abs(
        e.delta_votes_candidate1 - e.delta_votes_candidate2
    ),
}
