"""
Data models and state representations.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List

from config import INITIAL_PILE_SIZE, PILE_NAMES


class RollFace(IntEnum):
    """The six equally likely die faces. Colour faces share their pile's index."""
    RED = 0
    GREEN = 1
    BLUE = 2
    YELLOW = 3
    BASKET = 4
    BIRD = 5


class Outcome(Enum):
    WON = "won"
    LOST = "lost"


@dataclass
class GameState:
    """State for a single playthrough."""
    guard_position: int                     # bird distance to the orchard
    resource_piles: List[int] = field(
        default_factory=lambda: [INITIAL_PILE_SIZE] * len(PILE_NAMES)
    )                                       # apples left: [red, green, blue, yellow]

    def clone(self) -> "GameState":
        return GameState(
            guard_position=self.guard_position,
            resource_piles=self.resource_piles[:],
        )


@dataclass(frozen=True)
class TrialTally:
    """Won/lost counts for a batch of trials; `+` merges two batches."""
    won: int = 0
    lost: int = 0

    @property
    def trials(self) -> int:
        return self.won + self.lost

    def record(self, outcome: Outcome) -> "TrialTally":
        if outcome is Outcome.WON:
            return TrialTally(self.won + 1, self.lost)
        return TrialTally(self.won, self.lost + 1)

    def __add__(self, other: "TrialTally") -> "TrialTally":
        return TrialTally(self.won + other.won, self.lost + other.lost)


@dataclass(frozen=True)
class WinRateEstimate:
    """Result of one estimator run for a given starting bird position."""
    guard_position: int
    won: int
    lost: int
    win_rate_percent: float

    @property
    def trials(self) -> int:
        return self.won + self.lost
