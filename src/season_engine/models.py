"""Data models for the season engine.

Queens and songs are read-only inputs supplied by the cast pipeline. Every
cross-reference inside the engine uses ``queen_id``; ``name`` is display
text only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


ATTRIBUTES = (
    # Charisma
    "congeniality",
    "loyalty",
    # Uniqueness
    "novelty",
    "conceptual_depth",
    # Nerve
    "risk_tolerance",
    "conflict_resilience",
    # Talent
    "design_vision",
    "comedy_chops",
    "lip_sync_prowess",
    "runway_presence",
    "acting_ability",
    "vocal_musicality",
    # General
    "versatility",
    "adaptability",
    "star_power",
)


class Placement(str, Enum):
    """Per-episode outcome for one queen."""

    WIN = "WIN"
    HIGH = "HIGH"
    SAFE = "SAFE"
    LOW = "LOW"
    BTM2 = "BTM2"
    TOP2 = "TOP2"
    ELIM = "ELIM"
    WINNER = "WINNER"
    THIRD = "3RD"
    FOURTH = "4TH"


@dataclass(frozen=True)
class Queen:
    """A competitor and her fixed attribute vector (nominally 1-10)."""

    queen_id: str
    name: str
    congeniality: float = 5.0
    loyalty: float = 5.0
    novelty: float = 5.0
    conceptual_depth: float = 5.0
    risk_tolerance: float = 5.0
    conflict_resilience: float = 5.0
    design_vision: float = 5.0
    comedy_chops: float = 5.0
    lip_sync_prowess: float = 5.0
    runway_presence: float = 5.0
    acting_ability: float = 5.0
    vocal_musicality: float = 5.0
    versatility: float = 5.0
    adaptability: float = 5.0
    star_power: float = 5.0
    image_url: Optional[str] = None

    def weighted_sum(self, weights: Dict[str, float]) -> float:
        """Sum of ``attribute * weight`` over the given weight table."""
        return sum(getattr(self, attr) * w for attr, w in weights.items())

    def attributes(self) -> Dict[str, float]:
        return {attr: getattr(self, attr) for attr in ATTRIBUTES}

    def to_dict(self) -> Dict:
        data = {"queen_id": self.queen_id, "name": self.name}
        data.update(self.attributes())
        if self.image_url is not None:
            data["image_url"] = self.image_url
        return data


@dataclass(frozen=True)
class Song:
    """A lip sync song."""

    song_id: str
    title: str
    artist: str
    genre: str = ""
    album_image: Optional[str] = None
    preview_url: Optional[str] = None
    spotify_uri: Optional[str] = None

    @property
    def descriptor(self) -> str:
        return f"{self.title} by {self.artist}"

    def to_dict(self) -> Dict:
        return {
            "song_id": self.song_id,
            "title": self.title,
            "artist": self.artist,
            "genre": self.genre,
            "album_image": self.album_image,
            "preview_url": self.preview_url,
            "spotify_uri": self.spotify_uri,
        }


@dataclass(frozen=True)
class LipSyncResult:
    """Outcome of one head-to-head lip sync."""

    winner_id: str
    loser_id: str
    scores: Dict[str, float]  # queen_id -> total including production bias
    performances: Dict[str, float] = field(default_factory=dict)  # clamped lip sync scores
    song: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "winner": self.winner_id,
            "loser": self.loser_id,
            "scores": dict(self.scores),
            "performances": dict(self.performances),
            "song": self.song,
        }


@dataclass(frozen=True)
class EpisodeRecord:
    """Everything that happened in one episode (or the finale)."""

    episode_number: int
    challenge: str
    challenge_scores: Dict[str, float]
    runway_scores: Dict[str, float]
    winner: str
    high: List[str]
    low: Optional[str]
    bottom2: List[str]
    lip_sync_song: str
    lip_sync_song_id: Optional[str]
    eliminated: Optional[str]  # None for the finale
    remaining: List[str]
    risk_taking: Dict[str, float]
    pressure_state: Dict[str, str]
    placements: Dict[str, Placement]
    lip_sync_scores: Dict[str, float] = field(default_factory=dict)  # finale: semifinal performances
    season_format: str = "regular"
    groups: Optional[Dict[str, List[str]]] = None
    # Legacy format only
    top2: Optional[List[str]] = None
    lipstick_choices: Optional[Dict[str, str]] = None
    loser_would_have_chosen: Optional[str] = None
    elimination_basis: Optional[str] = None
    relationships: Optional[Dict] = None
    # Finale only
    finale_lip_syncs: Optional[List[LipSyncResult]] = None

    @property
    def is_finale(self) -> bool:
        return self.finale_lip_syncs is not None

    def to_dict(self) -> Dict:
        """JSON-compatible representation, keyed by queen id."""
        data = {
            "episode_number": self.episode_number,
            "challenge": self.challenge,
            "challenge_scores": dict(self.challenge_scores),
            "runway_scores": dict(self.runway_scores),
            "winner": self.winner,
            "high": list(self.high),
            "low": self.low,
            "bottom2": list(self.bottom2),
            "lip_sync_song": self.lip_sync_song,
            "lip_sync_song_id": self.lip_sync_song_id,
            "eliminated": self.eliminated,
            "remaining": list(self.remaining),
            "season_format": self.season_format,
            "details": {
                "challenge_scores": dict(self.challenge_scores),
                "runway_scores": dict(self.runway_scores),
                "risk_taking": dict(self.risk_taking),
                "pressure_state": dict(self.pressure_state),
                "placements": {
                    qid: placement.value for qid, placement in self.placements.items()
                },
                "lip_sync_scores": dict(self.lip_sync_scores),
            },
        }
        if self.groups is not None:
            data["groups"] = {g: list(members) for g, members in self.groups.items()}
        if self.top2 is not None:
            data["top2"] = list(self.top2)
            data["lipstick_choices"] = dict(self.lipstick_choices or {})
            data["loser_would_have_chosen"] = self.loser_would_have_chosen
            data["elimination_basis"] = self.elimination_basis
        if self.relationships is not None:
            data["relationships"] = self.relationships
        if self.finale_lip_syncs is not None:
            data["finale_lip_syncs"] = [ls.to_dict() for ls in self.finale_lip_syncs]
        return data


@dataclass(frozen=True)
class FinaleResult:
    """Crowned winner and the ranked top four."""

    winner_id: str
    rankings: List[Tuple[str, Placement]]  # 1st to 4th
    episode: EpisodeRecord

    def to_dict(self) -> Dict:
        return {
            "winner": self.winner_id,
            "rankings": [
                {"rank": rank, "queen_id": qid, "placement": placement.value}
                for rank, (qid, placement) in enumerate(self.rankings, start=1)
            ],
            "episode": self.episode.to_dict(),
        }


@dataclass(frozen=True)
class SeasonResult:
    """Outcome of a full season run."""

    winner_id: str
    episodes: List[EpisodeRecord]
    final_four: List[str]  # ranked 1st to 4th
    placements: Dict[str, Placement]  # finale placements

    def to_dict(self) -> Dict:
        return {
            "winner": self.winner_id,
            "final_four": list(self.final_four),
            "placements": {qid: p.value for qid, p in self.placements.items()},
            "episodes": [ep.to_dict() for ep in self.episodes],
        }
