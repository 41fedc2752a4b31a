from src.season_engine.models import (
    EpisodeRecord,
    FinaleResult,
    LipSyncResult,
    Placement,
    Queen,
    SeasonResult,
    Song,
)
from src.season_engine.randomness import FixedRandomSource, RandomSource, ScriptedRandomSource
from src.season_engine.relationships import RelationshipGraph
from src.season_engine.season_controller import SeasonController
from src.season_engine.season_initializer import SeasonInitializer
from src.season_engine.season_rules import (
    InvariantViolation,
    PreconditionError,
    SeasonRules,
    SimulationError,
)
from src.season_engine.season_state import SeasonConfig, SeasonState
from src.season_engine.track_record import build_track_record, placement_counts

__all__ = [
    "EpisodeRecord",
    "FinaleResult",
    "FixedRandomSource",
    "InvariantViolation",
    "LipSyncResult",
    "Placement",
    "PreconditionError",
    "Queen",
    "RandomSource",
    "RelationshipGraph",
    "ScriptedRandomSource",
    "SeasonConfig",
    "SeasonController",
    "SeasonInitializer",
    "SeasonResult",
    "SeasonRules",
    "SeasonState",
    "SimulationError",
    "Song",
    "build_track_record",
    "placement_counts",
]
