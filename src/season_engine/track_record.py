"""Season track record as a pandas table.

One row per queen, one column per episode. A queen's elimination episode
shows ELIM and every later column is blank. The finale column holds
WINNER/TOP2/3RD/4TH.
"""

import logging
from typing import Dict, List

import pandas as pd

from src.season_engine.models import Placement
from src.season_engine.season_state import SeasonState

logger = logging.getLogger(__name__)

PLACEMENT_ORDER = [p.value for p in Placement]


def ordinal(n: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _column_name(record) -> str:
    return record.challenge if record.is_finale else f"Ep. {record.episode_number}"


def build_track_record(state: SeasonState) -> pd.DataFrame:
    """Build the track record table for everything played so far.

    Rows are sorted finalists first (by finale placement), then eliminated
    queens with the latest elimination first. Queens still competing sit
    between the two groups, in cast order.

    Returns:
        DataFrame indexed by queen_id with a ``Queen`` name column, one
        column per episode and a ``Rank`` column (ordinal strings, blank
        while a queen is still competing).
    """
    columns = [_column_name(ep) for ep in state.episodes]
    rows: List[Dict] = []
    sort_keys = {}

    for position, (qid, queen) in enumerate(state.queens.items()):
        row = {"queen_id": qid, "Queen": queen.name}
        eliminated_at = None
        finale_rank = None
        rank = ""

        for column, episode in zip(columns, state.episodes):
            if eliminated_at is not None:
                row[column] = ""
                continue
            if episode.is_finale:
                finale_ids = list(episode.remaining)
                if qid in finale_ids:
                    finale_rank = finale_ids.index(qid) + 1
                    row[column] = episode.placements[qid].value
                    rank = ordinal(finale_rank)
                else:
                    row[column] = ""
                continue
            if episode.eliminated == qid:
                row[column] = Placement.ELIM.value
                eliminated_at = episode.episode_number
                rank = ordinal(len(episode.remaining) + 1)
            elif qid in episode.placements:
                row[column] = episode.placements[qid].value
            else:
                row[column] = ""

        row["Rank"] = rank
        rows.append(row)

        if finale_rank is not None:
            sort_keys[qid] = (0, finale_rank, position)
        elif eliminated_at is None:
            sort_keys[qid] = (1, 0, position)
        else:
            sort_keys[qid] = (2, -eliminated_at, position)

    df = pd.DataFrame(rows, columns=["queen_id", "Queen"] + columns + ["Rank"])
    sort_cols = ["_group", "_order", "_position"]
    for i, col in enumerate(sort_cols):
        df[col] = df["queen_id"].map(lambda qid: sort_keys[qid][i])
    df = df.sort_values(sort_cols, kind="stable").drop(columns=sort_cols)
    df = df.set_index("queen_id")

    logger.debug("Built track record: %d queens x %d episodes", len(df), len(columns))
    return df


def placement_counts(track_record: pd.DataFrame) -> pd.DataFrame:
    """Count each placement per queen.

    Returns:
        DataFrame indexed like ``track_record`` with one integer column per
        placement label, in :class:`Placement` order.
    """
    episode_cols = [c for c in track_record.columns if c not in ("Queen", "Rank")]
    if not episode_cols:
        return pd.DataFrame(0, index=track_record.index, columns=PLACEMENT_ORDER)

    melted = track_record[episode_cols].stack()
    melted = melted[melted != ""]
    if melted.empty:
        return pd.DataFrame(0, index=track_record.index, columns=PLACEMENT_ORDER)

    counts = (
        melted.groupby(level=0)
        .value_counts()
        .unstack(fill_value=0)
        .reindex(index=track_record.index, columns=PLACEMENT_ORDER, fill_value=0)
        .fillna(0)
        .astype(int)
    )
    return counts
