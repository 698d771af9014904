"""
Core game logic and state initialization.
"""

from typing import List, Optional

from config import MAX_GUARD_POSITION
from models import GameState, Outcome, RollFace


def new_game(initial_guard_position: int) -> GameState:
    """Fresh state: bird at `initial_guard_position`, every orchard full.

    A starting position of 0 is accepted and is already lost.
    """
    if not 0 <= initial_guard_position <= MAX_GUARD_POSITION:
        raise ValueError(
            f"guard position must be in [0, {MAX_GUARD_POSITION}], got {initial_guard_position}"
        )
    return GameState(guard_position=initial_guard_position)


def basket_target(piles: List[int]) -> int:
    """
    Index of the pile the basket face harvests from.

    Policy: always pick from the fullest orchard, first one on ties. This is
    an assumed strategy, not a rule printed in the game.
    """
    best = 0
    for i in range(1, len(piles)):
        if piles[i] > piles[best]:
            best = i
    return best


def check_outcome(state: GameState) -> Optional[Outcome]:
    """Terminal check. Loss is checked first."""
    if state.guard_position == 0:
        return Outcome.LOST
    if sum(state.resource_piles) == 0:
        return Outcome.WON
    return None


def apply_roll(state: GameState, roll: RollFace) -> Optional[Outcome]:
    """
    Apply one die roll to `state` in place:
      - Colour face: take one apple from that orchard.
      - Basket: take one apple from the fullest orchard.
      - Bird: move the bird one step closer.
    All decrements stop at zero. `roll` may be a RollFace or its int value.
    Returns the terminal outcome, or None if the game continues.
    """
    piles = state.resource_piles

    if roll == RollFace.BIRD:
        state.guard_position = max(state.guard_position - 1, 0)
    else:
        i = basket_target(piles) if roll == RollFace.BASKET else roll
        piles[i] = max(piles[i] - 1, 0)

    return check_outcome(state)


def max_rolls(state: GameState) -> int:
    """Upper bound on the state-changing rolls left before `state` reaches an outcome.

    A colour roll on an empty orchard changes nothing and does not count, so
    the raw roll count has no fixed bound (it is finite with probability one).
    """
    return state.guard_position + sum(state.resource_piles)
