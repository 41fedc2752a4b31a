"""Head-to-head lip sync resolution."""

import logging
from typing import Mapping, Optional

from src.season_engine.models import LipSyncResult, Queen
from src.season_engine.randomness import RandomSource
from src.season_engine.scoring import lip_sync_score, production_bias

logger = logging.getLogger(__name__)


def run_lip_sync(
    queen_a: Queen,
    queen_b: Queen,
    rng: RandomSource,
    bottom_counts: Optional[Mapping[str, int]] = None,
    win_counts: Optional[Mapping[str, int]] = None,
    morale: Optional[Mapping[str, float]] = None,
    finale: bool = False,
    with_bias: bool = True,
    song: Optional[str] = None,
) -> LipSyncResult:
    """Resolve a lip sync between two queens.

    Each queen's clamped lip sync score gets the production bias from her
    full track record added (``with_bias=False`` gives a clean contest).
    Finale lip syncs add an extra reward per win. The higher total wins;
    on an exact tie ``queen_b`` wins.
    """
    bottom_counts = bottom_counts or {}
    win_counts = win_counts or {}
    morale = morale or {}

    performances = {}
    totals = {}
    for queen in (queen_a, queen_b):
        qid = queen.queen_id
        bottoms = bottom_counts.get(qid, 0)
        performance = lip_sync_score(queen, bottoms, morale.get(qid, 0.0), rng)
        performances[qid] = performance
        total = performance
        if with_bias:
            total += production_bias(win_counts.get(qid, 0), bottoms, finale=finale)
        totals[qid] = total

    if totals[queen_a.queen_id] > totals[queen_b.queen_id]:
        winner, loser = queen_a, queen_b
    else:
        winner, loser = queen_b, queen_a

    logger.debug(
        "Lip sync %s (%.2f) vs %s (%.2f): %s wins",
        queen_a.name, totals[queen_a.queen_id],
        queen_b.name, totals[queen_b.queen_id],
        winner.name,
    )

    return LipSyncResult(
        winner_id=winner.queen_id,
        loser_id=loser.queen_id,
        scores=totals,
        performances=performances,
        song=song,
    )
