from dataclasses import dataclass


@dataclass(frozen=True)
class Candidate:
    """Candidate key as used in the vote dumps, such as "trumpd"."""

    name: str

    def __str__(self) -> str:
        return self.name


# Synthetic bucket for all candidates other than the two tracked ones
THIRD_PARTY = Candidate("other")

TRUMP = Candidate("trumpd")
BIDEN = Candidate("bidenj")
