from src.cast_pipeline.cleaning import CastCleaner
from src.cast_pipeline.generators import (
    generate_random_cast,
    generate_random_queen,
    generate_sample_songs,
)
from src.cast_pipeline.ingestion import CastIngester, CastIngestionError
from src.cast_pipeline.pipeline import load_cast
from src.cast_pipeline.transformation import CastTransformer

__all__ = [
    "CastCleaner",
    "CastIngester",
    "CastIngestionError",
    "CastTransformer",
    "generate_random_cast",
    "generate_random_queen",
    "generate_sample_songs",
    "load_cast",
]
