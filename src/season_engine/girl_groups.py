"""Team selection for the Girl Groups challenge."""

import logging
from typing import Dict, List, Sequence

from src.season_engine.config import NEGATIVE_RELATIONSHIPS, POSITIVE_RELATIONSHIPS
from src.season_engine.models import Queen
from src.season_engine.randomness import RandomSource
from src.season_engine.relationships import RelationshipGraph
from src.season_engine.season_rules import InvariantViolation

logger = logging.getLogger(__name__)

GROUP_NAMES = ("Group 1", "Group 2")
CAPTAIN_JITTER = 2.0


def pick_score(captain: Queen, candidate: Queen, relationships: RelationshipGraph) -> float:
    """How much a captain wants ``candidate`` on her team."""
    score = 0.0
    edge = relationships.edges_from(captain.queen_id).get(candidate.queen_id)
    if edge is not None:
        if edge.type in POSITIVE_RELATIONSHIPS:
            score += edge.strength * 2
        elif edge.type in NEGATIVE_RELATIONSHIPS:
            score -= edge.strength * 2

    score += 10 - abs(captain.congeniality - candidate.congeniality)
    score += 10 - abs(captain.loyalty - candidate.loyalty)

    score += candidate.vocal_musicality * 0.5
    score += candidate.lip_sync_prowess * 0.5
    score += candidate.star_power * 0.3
    return score


def form_groups(
    queens: Sequence[Queen],
    relationships: RelationshipGraph,
    rng: RandomSource,
) -> Dict[str, List[str]]:
    """Split the cast into two groups led by captains who pick in turn.

    Captains are the two best by star power + conflict resilience, with a
    little jitter. Returns group name -> queen ids, captain first.
    """
    if len(queens) < 2:
        raise InvariantViolation("Girl Groups needs at least two queens")

    leadership = {
        q.queen_id: q.star_power + q.conflict_resilience + rng.uniform(-CAPTAIN_JITTER, CAPTAIN_JITTER)
        for q in queens
    }
    ordered = sorted(queens, key=lambda q: leadership[q.queen_id], reverse=True)
    captains = ordered[:2]
    pool = ordered[2:]

    groups = {name: [captain.queen_id] for name, captain in zip(GROUP_NAMES, captains)}
    turn = 0
    while pool:
        captain = captains[turn]
        best = max(pool, key=lambda q: pick_score(captain, q, relationships))
        groups[GROUP_NAMES[turn]].append(best.queen_id)
        pool.remove(best)
        turn = 1 - turn

    logger.debug("Girl Groups captains: %s", ", ".join(c.name for c in captains))
    return groups
