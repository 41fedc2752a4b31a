"""Mental state derived from recent placements."""

from typing import Sequence

from src.season_engine.models import Placement, Queen
from src.season_engine.randomness import RandomSource

PRESSURED = "Pressured"
DETERMINED = "Determined"
CONFIDENT = "Confident"
NERVOUS = "Nervous"

PRESSURE_STATES = (PRESSURED, DETERMINED, CONFIDENT, NERVOUS)

_LOW_PLACEMENTS = {Placement.LOW, Placement.BTM2}
_HIGH_PLACEMENTS = {Placement.WIN, Placement.HIGH}

RECENT_WINDOW = 2


def pressure_state(
    queen: Queen,
    placement_history: Sequence[Placement],
    rng: RandomSource,
) -> str:
    """Pressure state for this episode from the last two placements.

    Only consumes a draw when the history gives no signal.
    """
    recent = set(placement_history[-RECENT_WINDOW:])
    recent_low = bool(recent & _LOW_PLACEMENTS)
    recent_high = bool(recent & _HIGH_PLACEMENTS)

    if recent_low and queen.conflict_resilience < 6:
        return PRESSURED
    if recent_low and queen.conflict_resilience >= 8:
        return DETERMINED
    if recent_high:
        return CONFIDENT
    return CONFIDENT if rng.random() > 0.5 else NERVOUS
