"""Season state data models - everything carried from one episode to the next."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set
import uuid

from src.season_engine.config import DEFAULT_SEASON_FORMAT, MORALE_MAX, MORALE_MIN
from src.season_engine.models import EpisodeRecord, Placement, Queen, Song
from src.season_engine.randomness import RandomSource
from src.season_engine.relationships import RelationshipGraph


@dataclass
class SeasonConfig:
    """Season settings."""

    season_format: str = DEFAULT_SEASON_FORMAT  # "regular" or "legacy"
    narrative: bool = True  # ambient relationship drift each episode
    seed: Optional[int] = None


@dataclass
class SeasonState:
    """Complete season state - single source of truth between episodes."""

    season_id: str
    config: SeasonConfig
    queens: Dict[str, Queen]
    songs: List[Song]
    remaining: List[str]
    relationships: RelationshipGraph
    episode_number: int = 1
    used_challenges: Set[str] = field(default_factory=set)
    used_songs: Set[str] = field(default_factory=set)
    bottom_counts: Dict[str, int] = field(default_factory=dict)
    win_counts: Dict[str, int] = field(default_factory=dict)
    morale: Dict[str, float] = field(default_factory=dict)
    placement_history: Dict[str, List[Placement]] = field(default_factory=dict)
    episodes: List[EpisodeRecord] = field(default_factory=list)
    is_complete: bool = False
    winner_id: Optional[str] = None
    # stream that seeded the graph; controllers continue it
    rng: Optional[RandomSource] = field(default=None, repr=False, compare=False)

    @classmethod
    def create_new(
        cls,
        queens: Sequence[Queen],
        songs: Sequence[Song],
        rng: RandomSource,
        config: Optional[SeasonConfig] = None,
        relationships: Optional[RelationshipGraph] = None,
    ) -> "SeasonState":
        """Factory method to start a season.

        Without a supplied graph the relationships are seeded from the cast.
        The random source is kept on the state so later steps continue its
        stream rather than replaying the seeding draws.
        """
        ids = [q.queen_id for q in queens]
        if len(set(ids)) != len(ids):
            raise ValueError("queen_id values must be unique")

        if relationships is None:
            relationships = RelationshipGraph.seeded(queens, rng)

        return cls(
            season_id=str(uuid.uuid4()),
            config=config or SeasonConfig(),
            queens={q.queen_id: q for q in queens},
            songs=list(songs),
            remaining=ids,
            relationships=relationships,
            bottom_counts={qid: 0 for qid in ids},
            win_counts={qid: 0 for qid in ids},
            morale={qid: 0.0 for qid in ids},
            placement_history={qid: [] for qid in ids},
            rng=rng,
        )

    def get_queen(self, queen_id: str) -> Queen:
        return self.queens[queen_id]

    def remaining_queens(self) -> List[Queen]:
        return [self.queens[qid] for qid in self.remaining]

    def bottom_count(self, queen_id: str) -> int:
        return self.bottom_counts.get(queen_id, 0)

    def win_count(self, queen_id: str) -> int:
        return self.win_counts.get(queen_id, 0)

    def morale_of(self, queen_id: str) -> float:
        return self.morale.get(queen_id, 0.0)

    def history(self, queen_id: str) -> List[Placement]:
        return self.placement_history.get(queen_id, [])

    def adjust_morale(self, queen_id: str, change: float) -> float:
        """Shift morale, clamped to [MORALE_MIN, MORALE_MAX]."""
        value = max(MORALE_MIN, min(MORALE_MAX, self.morale_of(queen_id) + change))
        self.morale[queen_id] = value
        return value

    def add_bottom(self, queen_id: str):
        self.bottom_counts[queen_id] = self.bottom_count(queen_id) + 1

    def add_win(self, queen_id: str):
        self.win_counts[queen_id] = self.win_count(queen_id) + 1

    def record_placements(self, placements: Dict[str, Placement]):
        for qid, placement in placements.items():
            self.placement_history.setdefault(qid, []).append(placement)

    def eliminate(self, queen_id: str):
        self.remaining.remove(queen_id)

    def advance_episode(self, record: EpisodeRecord):
        self.episodes.append(record)
        self.episode_number += 1
