"""Placement assignment from ranked combined scores."""

from typing import Dict, List, Mapping, Sequence, Tuple

from src.season_engine.models import Placement
from src.season_engine.season_rules import InvariantViolation

MIN_RANKED = 3  # one winner plus the at-risk pair


def rank_queens(scores: Mapping[str, float], order: Sequence[str]) -> List[Tuple[str, float]]:
    """Sort queens by score, highest first.

    Ties keep the relative order of ``order`` (the remaining-queen list).
    """
    return sorted(
        ((qid, scores[qid]) for qid in order),
        key=lambda item: item[1],
        reverse=True,
    )


def placement_slots(remaining_count: int) -> Tuple[int, bool]:
    """Number of HIGH placements and whether a LOW is handed out.

    ===========  ======  =====
    remaining    HIGHs   LOW
    ===========  ======  =====
    >= 8         2       yes
    7            2       no
    6            1       yes
    5            0       yes
    4            0       no
    ===========  ======  =====
    """
    if remaining_count >= 8:
        return 2, True
    if remaining_count == 7:
        return 2, False
    if remaining_count == 6:
        return 1, True
    if remaining_count == 5:
        return 0, True
    return 0, False


def assign_placements(
    ranked: Sequence[Tuple[str, float]],
    remaining_count: int,
) -> Dict[str, Placement]:
    """Map each ranked queen to exactly one placement.

    Always exactly one WIN and exactly two BTM2.

    Raises:
        InvariantViolation: If fewer than three queens are ranked.
    """
    n = len(ranked)
    if n < MIN_RANKED:
        raise InvariantViolation(
            f"Need at least {MIN_RANKED} ranked queens to assign placements, got {n}"
        )

    high_count, has_low = placement_slots(remaining_count)
    # Never let HIGH/LOW overlap the winner or the bottom two.
    high_count = min(high_count, max(n - 3, 0))
    has_low = has_low and n - 3 > high_count

    placements: Dict[str, Placement] = {}
    for rank, (qid, _) in enumerate(ranked):
        from_bottom = n - rank  # 1 for the last-placed queen
        if rank == 0:
            placements[qid] = Placement.WIN
        elif from_bottom <= 2:
            placements[qid] = Placement.BTM2
        elif rank <= high_count:
            placements[qid] = Placement.HIGH
        elif has_low and from_bottom == 3:
            placements[qid] = Placement.LOW
        else:
            placements[qid] = Placement.SAFE

    return placements


def queens_with(placements: Mapping[str, Placement], placement: Placement) -> List[str]:
    return [qid for qid, p in placements.items() if p is placement]
