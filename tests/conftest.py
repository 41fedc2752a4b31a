"""Shared fixtures for the season simulator test suite."""

import pytest

from src.cast_pipeline.cleaning import CastCleaner
from src.cast_pipeline.ingestion import CastIngester
from src.cast_pipeline.transformation import CastTransformer
from src.season_engine.models import Queen, Song
from src.season_engine.randomness import FixedRandomSource, RandomSource
from src.season_engine.relationships import RelationshipGraph


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture
def rng():
    return RandomSource(seed=1234)


@pytest.fixture
def midpoint_rng():
    """Every draw returns 0.5."""
    return FixedRandomSource(0.5)


@pytest.fixture
def cast():
    """Eight average queens, q1..q8."""
    return [Queen(queen_id=f"q{i}", name=f"Queen {i}") for i in range(1, 9)]


@pytest.fixture
def songs():
    return [
        Song(song_id=f"s{i}", title=f"Song {i}", artist=f"Artist {i}", genre="Pop")
        for i in range(1, 7)
    ]


@pytest.fixture
def empty_graph():
    return RelationshipGraph()


# ------------------------------------------------------------------
# Cast pipeline
# ------------------------------------------------------------------

@pytest.fixture
def ingester():
    return CastIngester()


@pytest.fixture
def cleaner():
    return CastCleaner()


@pytest.fixture
def transformer():
    return CastTransformer()
