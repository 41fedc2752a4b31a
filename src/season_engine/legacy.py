"""Legacy format: the top two lip sync for the power to eliminate.

The lip sync winner picks one of the bottom two to send home using
:func:`elimination_choice_score`; the loser's hypothetical pick is computed
the same way and only feeds the relationship fallout.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence, Tuple

from src.season_engine.config import (
    COMPETITOR_STRENGTH_WEIGHTS,
    COMPETITOR_WEIGHT,
    NEGATIVE_RELATIONSHIPS,
    PERFORMANCE_WEIGHT,
    POSITIVE_RELATIONSHIPS,
    RELATIONSHIP_BIAS_WEIGHT,
    STRATEGIC_CONGENIALITY_BELOW,
    STRATEGIC_RESILIENCE_ABOVE,
)
from src.season_engine.lip_sync import run_lip_sync
from src.season_engine.models import LipSyncResult, Queen
from src.season_engine.randomness import RandomSource
from src.season_engine.relationships import RelationshipGraph
from src.season_engine.season_rules import InvariantViolation

logger = logging.getLogger(__name__)

RELATIONSHIP_BASED = "relationship-based"
TRACK_RECORD_BASED = "track-record-based"


@dataclass(frozen=True)
class LegacyOutcome:
    """Result of a legacy lip sync and the elimination choice that follows."""

    lip_sync: LipSyncResult
    eliminated_id: str
    saved_id: str
    loser_choice_id: str
    choice_scores: Dict[str, float]  # candidate id -> winner's elimination score
    basis: str

    @property
    def winner_id(self) -> str:
        return self.lip_sync.winner_id

    @property
    def loser_id(self) -> str:
        return self.lip_sync.loser_id

    @property
    def lipstick_choices(self) -> Dict[str, str]:
        return {self.winner_id: self.eliminated_id, self.loser_id: self.loser_choice_id}


def is_strategic(queen: Queen) -> bool:
    """Cut-throat players: low congeniality, high conflict resilience."""
    return (
        queen.congeniality < STRATEGIC_CONGENIALITY_BELOW
        and queen.conflict_resilience > STRATEGIC_RESILIENCE_ABOVE
    )


def competitor_strength(queen: Queen) -> float:
    return queen.weighted_sum(COMPETITOR_STRENGTH_WEIGHTS)


def elimination_choice_score(
    chooser: Queen,
    candidate: Queen,
    candidate_challenge_score: float,
    relationships: RelationshipGraph,
) -> float:
    """How strongly ``chooser`` wants ``candidate`` gone. Higher goes home.

    Formula::

        7 * (10 - challenge_score)
        + 5 * competitor_strength                        (strategic choosers)
        - strength * 10 * loyalty / 10                   (alliance, friendship)
        + strength * 10 * (10 - congeniality) / 10       (rivalry, conflict)
    """
    score = PERFORMANCE_WEIGHT * (10 - candidate_challenge_score)

    if is_strategic(chooser):
        score += COMPETITOR_WEIGHT * competitor_strength(candidate)

    edge = relationships.get(chooser.queen_id, candidate.queen_id)
    if relationships.has_edge(chooser.queen_id, candidate.queen_id):
        if edge.type in POSITIVE_RELATIONSHIPS:
            score -= edge.strength * RELATIONSHIP_BIAS_WEIGHT * (chooser.loyalty / 10)
        elif edge.type in NEGATIVE_RELATIONSHIPS:
            score += (
                edge.strength
                * RELATIONSHIP_BIAS_WEIGHT
                * ((10 - chooser.congeniality) / 10)
            )

    return score


def choose_elimination(
    chooser: Queen,
    candidates: Sequence[Queen],
    challenge_scores: Mapping[str, float],
    relationships: RelationshipGraph,
) -> Tuple[Queen, Dict[str, float]]:
    """Pick which of the two candidates ``chooser`` eliminates.

    Exact ties go to the first candidate.

    Raises:
        InvariantViolation: Unless there are exactly two candidates, both
            distinct from the chooser.
    """
    if len(candidates) != 2:
        raise InvariantViolation(
            f"Elimination choice needs exactly 2 candidates, got {len(candidates)}"
        )
    if any(c.queen_id == chooser.queen_id for c in candidates):
        raise InvariantViolation(f"{chooser.name} cannot choose to eliminate herself")

    scores = {
        c.queen_id: elimination_choice_score(
            chooser, c, challenge_scores[c.queen_id], relationships
        )
        for c in candidates
    }
    first, second = candidates
    chosen = first if scores[first.queen_id] >= scores[second.queen_id] else second
    return chosen, scores


def elimination_basis(
    relationships: RelationshipGraph, chooser_id: str, eliminated_id: str, saved_id: str
) -> str:
    """Whether the pick looks driven by relationships or by performance."""
    against = relationships.edges_from(chooser_id).get(eliminated_id)
    towards = relationships.edges_from(chooser_id).get(saved_id)
    if against is not None and against.type in NEGATIVE_RELATIONSHIPS:
        return RELATIONSHIP_BASED
    if towards is not None and towards.type in POSITIVE_RELATIONSHIPS:
        return RELATIONSHIP_BASED
    return TRACK_RECORD_BASED


def resolve_legacy(
    top2: Sequence[Queen],
    bottom2: Sequence[Queen],
    challenge_scores: Mapping[str, float],
    relationships: RelationshipGraph,
    rng: RandomSource,
    song: Optional[str] = None,
) -> LegacyOutcome:
    """Run the top-two lip sync and the winner's elimination choice.

    The lip sync is clean: no bottom history, morale or production bias.
    The relationship graph is read, not updated.
    """
    if len(top2) != 2 or len(bottom2) != 2:
        raise InvariantViolation(
            f"Legacy elimination needs a top 2 and a bottom 2 "
            f"(got {len(top2)} and {len(bottom2)})"
        )

    result = run_lip_sync(top2[0], top2[1], rng, with_bias=False, song=song)
    by_id = {q.queen_id: q for q in list(top2) + list(bottom2)}
    winner = by_id[result.winner_id]
    loser = by_id[result.loser_id]

    eliminated, choice_scores = choose_elimination(
        winner, bottom2, challenge_scores, relationships
    )
    loser_choice, _ = choose_elimination(loser, bottom2, challenge_scores, relationships)
    saved = bottom2[1] if eliminated.queen_id == bottom2[0].queen_id else bottom2[0]

    basis = elimination_basis(
        relationships, winner.queen_id, eliminated.queen_id, saved.queen_id
    )
    logger.info(
        "%s wins the lip sync for her legacy and eliminates %s (%s)",
        winner.name, eliminated.name, basis,
    )

    return LegacyOutcome(
        lip_sync=result,
        eliminated_id=eliminated.queen_id,
        saved_id=saved.queen_id,
        loser_choice_id=loser_choice.queen_id,
        choice_scores=choice_scores,
        basis=basis,
    )
