"""Directed relationship graph between queens.

Two distinct update policies live here and are intentionally not merged:

* :meth:`RelationshipGraph.drift` - ambient social drift each episode. New
  edges are written symmetrically with the same type and strength.
* :meth:`RelationshipGraph.update` / :meth:`update_after_legacy` - the
  consequences of a legacy elimination choice. Directional deltas, with the
  reciprocal edge moved by half the delta.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from src.season_engine.config import EDGE_REFRESH_AGE, STRENGTH_MAX, STRENGTH_MIN
from src.season_engine.models import Queen
from src.season_engine.randomness import RandomSource

logger = logging.getLogger(__name__)

ALLIANCE = "alliance"
FRIENDSHIP = "friendship"
NEUTRAL = "neutral"
RIVALRY = "rivalry"
CONFLICT = "conflict"

RELATIONSHIP_TYPES = (ALLIANCE, FRIENDSHIP, NEUTRAL, RIVALRY, CONFLICT)


def clamp_strength(value: float) -> float:
    return max(STRENGTH_MIN, min(STRENGTH_MAX, value))


def type_for_strength(strength: float) -> str:
    """Relationship type implied by strength alone."""
    if strength >= 8:
        return ALLIANCE
    if strength >= 6:
        return FRIENDSHIP
    if strength <= 2:
        return CONFLICT
    if strength <= 4:
        return RIVALRY
    return NEUTRAL


@dataclass
class RelationshipEvent:
    episode_number: int
    description: str
    change: float

    def to_dict(self) -> Dict:
        return {
            "episode_number": self.episode_number,
            "description": self.description,
            "change": self.change,
        }


@dataclass
class RelationshipEdge:
    """How ``source`` feels about ``target``."""

    type: str = NEUTRAL
    strength: float = STRENGTH_MIN
    formed: int = 0  # episode the edge was last formed or changed by an episode event
    events: List[RelationshipEvent] = field(default_factory=list)

    def to_dict(self) -> Dict:
        data = {"type": self.type, "strength": self.strength, "formed": self.formed}
        if self.events:
            data["events"] = [e.to_dict() for e in self.events]
        return data


class RelationshipGraph:
    """Edges keyed ``edges[source_id][target_id]``. Edges are never deleted."""

    def __init__(self, edges: Optional[Dict[str, Dict[str, RelationshipEdge]]] = None):
        self.edges: Dict[str, Dict[str, RelationshipEdge]] = edges or {}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def seeded(cls, queens: Iterable[Queen], rng: RandomSource) -> "RelationshipGraph":
        """Random starting edges for every ordered pair of queens.

        Strength leans on the source's congeniality. Friendship is checked
        before rivalry and wins when both fire.
        """
        queens = list(queens)
        graph = cls()
        for source in queens:
            graph.edges[source.queen_id] = {}
            for target in queens:
                if source.queen_id == target.queen_id:
                    continue
                strength = clamp_strength(
                    math.floor(rng.random() * 3 + source.congeniality / 4)
                )
                friendly = rng.random() < (
                    0.1 * (source.congeniality / 10) * (target.congeniality / 10)
                )
                hostile = rng.random() < (
                    0.05
                    * ((10 - source.congeniality) / 10)
                    * ((10 - target.congeniality) / 10)
                )
                if friendly:
                    rel_type = FRIENDSHIP
                elif hostile:
                    rel_type = RIVALRY
                else:
                    rel_type = NEUTRAL
                graph.edges[source.queen_id][target.queen_id] = RelationshipEdge(
                    type=rel_type, strength=strength
                )
        return graph

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, source_id: str, target_id: str) -> RelationshipEdge:
        """Edge from source to target, or a neutral strength-1 default."""
        edge = self.edges.get(source_id, {}).get(target_id)
        if edge is None:
            return RelationshipEdge()
        return edge

    def has_edge(self, source_id: str, target_id: str) -> bool:
        return target_id in self.edges.get(source_id, {})

    def edges_from(self, source_id: str) -> Dict[str, RelationshipEdge]:
        return self.edges.get(source_id, {})

    def to_dict(self) -> Dict[str, Dict[str, Dict]]:
        return {
            source: {target: edge.to_dict() for target, edge in targets.items()}
            for source, targets in self.edges.items()
        }

    # ------------------------------------------------------------------
    # Legacy-format consequences
    # ------------------------------------------------------------------

    def update(
        self,
        source_id: str,
        target_id: str,
        change: float,
        new_type: Optional[str] = None,
        episode_number: Optional[int] = None,
        description: Optional[str] = None,
    ) -> RelationshipEdge:
        """Shift source->target by ``change`` and target->source by half.

        Without ``new_type`` the type is re-derived from the new strength.
        The reciprocal edge is always re-derived.
        """
        edge = self._apply(source_id, target_id, change, new_type, episode_number, description)
        self._apply(target_id, source_id, change / 2, None, episode_number, description)
        return edge

    def _apply(
        self,
        source_id: str,
        target_id: str,
        change: float,
        new_type: Optional[str],
        episode_number: Optional[int],
        description: Optional[str],
    ) -> RelationshipEdge:
        edge = self.edges.setdefault(source_id, {}).setdefault(target_id, RelationshipEdge())
        edge.strength = clamp_strength(edge.strength + change)
        edge.type = new_type or type_for_strength(edge.strength)
        if episode_number is not None:
            # drift leaves the edge alone until it is old again
            edge.formed = episode_number
        if episode_number is not None and description:
            edge.events.append(RelationshipEvent(episode_number, description, change))
        logger.debug(
            "Relationship %s -> %s: %+.2f => %s (%.2f)",
            source_id, target_id, change, edge.type, edge.strength,
        )
        return edge

    def update_after_legacy(
        self,
        winner: Queen,
        loser: Queen,
        eliminated: Queen,
        saved: Queen,
        loser_choice: Queen,
        episode_number: int,
    ) -> None:
        """Apply the fallout of a legacy elimination choice."""
        self.update(
            winner.queen_id,
            saved.queen_id,
            15 + winner.congeniality / 2,
            FRIENDSHIP,
            episode_number,
            f"{winner.name} saved {saved.name} from elimination",
        )
        self.update(
            winner.queen_id,
            eliminated.queen_id,
            -10 - (10 - winner.congeniality) / 2,
            None,
            episode_number,
            f"{winner.name} eliminated {eliminated.name}",
        )

        loser_grudge = (10 - loser.congeniality) / 10
        if loser_choice.queen_id != eliminated.queen_id:
            self.update(
                loser.queen_id,
                saved.queen_id,
                -8 * loser_grudge,
                None,
                episode_number,
                f"{loser.name} would have eliminated {saved.name} instead",
            )
            if loser.congeniality < 6:
                self.update(
                    loser.queen_id,
                    winner.queen_id,
                    -5 * loser_grudge,
                    None,
                    episode_number,
                    f"{loser.name} disagreed with {winner.name}'s elimination choice",
                )
            if loser.conflict_resilience > 7:
                self.update(
                    loser.queen_id,
                    loser_choice.queen_id,
                    -6,
                    None,
                    episode_number,
                    f"{loser.name} would have eliminated {loser_choice.name}",
                )
        else:
            self.update(
                loser.queen_id,
                winner.queen_id,
                5,
                None,
                episode_number,
                f"{loser.name} agreed with {winner.name}'s elimination choice",
            )

    # ------------------------------------------------------------------
    # Ambient drift
    # ------------------------------------------------------------------

    def drift(
        self,
        queens: List[Queen],
        episode_number: int,
        rng: RandomSource,
    ) -> List[Tuple[str, str, str]]:
        """Give each remaining queen a chance to form or refresh one edge.

        Returns:
            ``(source_id, target_id, type)`` for every edge formed.
        """
        formed: List[Tuple[str, str, str]] = []
        by_id = {q.queen_id: q for q in queens}

        for queen in queens:
            outgoing = self.edges.setdefault(queen.queen_id, {})
            chance = 0.3 + 0.1 * episode_number - 0.05 * len(outgoing)
            if rng.random() >= chance:
                continue

            targets = [
                qid
                for qid in by_id
                if qid != queen.queen_id
                and (
                    qid not in outgoing
                    or episode_number - outgoing[qid].formed > EDGE_REFRESH_AGE
                )
            ]
            if not targets:
                continue

            target = by_id[rng.choice(targets)]
            rel_type, strength = self._drift_edge(queen, target, rng)
            self._form(queen.queen_id, target.queen_id, rel_type, strength, episode_number)
            self._form(target.queen_id, queen.queen_id, rel_type, strength, episode_number)
            formed.append((queen.queen_id, target.queen_id, rel_type))

        if formed:
            logger.debug("Episode %d: %d relationships formed", episode_number, len(formed))
        return formed

    @staticmethod
    def _drift_edge(queen: Queen, target: Queen, rng: RandomSource) -> Tuple[str, float]:
        loyalty_diff = abs(queen.loyalty - target.loyalty)
        congeniality_diff = abs(queen.congeniality - target.congeniality)

        if loyalty_diff < 3 and congeniality_diff < 3 and rng.random() < 0.7:
            rel_type = ALLIANCE
        elif (loyalty_diff > 5 or congeniality_diff > 5) and rng.random() < 0.6:
            rel_type = RIVALRY if rng.random() < 0.5 else CONFLICT
        elif rng.random() < 0.3:
            rel_type = FRIENDSHIP
        else:
            rel_type = NEUTRAL

        strength = math.floor(
            5
            + (2 if rel_type == ALLIANCE else 0)
            + (10 - min(loyalty_diff + congeniality_diff, 10)) * 0.3
            + rng.random() * 3
        )
        return rel_type, clamp_strength(strength)

    def _form(
        self, source_id: str, target_id: str, rel_type: str, strength: float, episode_number: int
    ) -> None:
        previous = self.edges.setdefault(source_id, {}).get(target_id)
        events = previous.events if previous else []
        self.edges[source_id][target_id] = RelationshipEdge(
            type=rel_type, strength=strength, formed=episode_number, events=events
        )
