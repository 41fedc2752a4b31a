"""Cast and song file ingestion.

Reads queens and songs from CSV or JSON into raw pandas DataFrames. JSON
files may hold a bare list of records or an object wrapping the list under
``"queens"`` / ``"songs"`` (the shape the web cast builder exports).
"""

import json
import logging
from pathlib import Path

import pandas as pd

from src.cast_pipeline.config import SUPPORTED_SUFFIXES

logger = logging.getLogger(__name__)


class CastIngestionError(Exception):
    """Raised when a cast or song file cannot be read."""


class CastIngester:
    """Reads cast and song files into DataFrames.

    Values are left untouched; header normalization and type coercion are
    :class:`~src.cast_pipeline.cleaning.CastCleaner`'s job.
    """

    def _resolve_path(self, path) -> Path:
        filepath = Path(path)
        if not filepath.exists():
            raise FileNotFoundError(f"Expected file not found: {filepath}")
        if filepath.suffix.lower() not in SUPPORTED_SUFFIXES:
            raise CastIngestionError(
                f"Unsupported file type '{filepath.suffix}' for {filepath.name}. "
                f"Use one of: {', '.join(sorted(SUPPORTED_SUFFIXES))}"
            )
        return filepath

    # ------------------------------------------------------------------
    # Queens
    # ------------------------------------------------------------------
    def read_queens(self, path) -> pd.DataFrame:
        """Read a cast file. One row per queen."""
        filepath = self._resolve_path(path)
        logger.info("Reading cast: %s", filepath.name)
        df = self._read(filepath, wrapper_key="queens")
        logger.info("Loaded %d cast rows", len(df))
        return df

    # ------------------------------------------------------------------
    # Songs
    # ------------------------------------------------------------------
    def read_songs(self, path) -> pd.DataFrame:
        """Read a song list. One row per song."""
        filepath = self._resolve_path(path)
        logger.info("Reading songs: %s", filepath.name)
        df = self._read(filepath, wrapper_key="songs")
        logger.info("Loaded %d song rows", len(df))
        return df

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _read(self, filepath: Path, wrapper_key: str) -> pd.DataFrame:
        try:
            if filepath.suffix.lower() == ".csv":
                return pd.read_csv(filepath, quotechar='"', skipinitialspace=True)
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, pd.errors.ParserError) as e:
            raise CastIngestionError(f"Failed to read {filepath.name}: {e}") from e

        if isinstance(data, dict):
            if wrapper_key not in data:
                raise CastIngestionError(
                    f"{filepath.name} has no '{wrapper_key}' list"
                )
            data = data[wrapper_key]
        if not isinstance(data, list):
            raise CastIngestionError(
                f"{filepath.name} must contain a list of {wrapper_key}"
            )
        return pd.DataFrame.from_records(data)

    def read_all(self, cast_path, songs_path) -> dict[str, pd.DataFrame]:
        """Read both files.

        Returns:
            dict with keys: 'queens', 'songs'

        Raises:
            CastIngestionError: if either file cannot be read.
        """
        try:
            return {
                "queens": self.read_queens(cast_path),
                "songs": self.read_songs(songs_path),
            }
        except CastIngestionError:
            raise
        except Exception as e:
            raise CastIngestionError(f"Failed to read cast files: {e}") from e
