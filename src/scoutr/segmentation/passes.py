"""Consecutive-pass sequencing for a single match.

Keeps only ``Pass`` events and numbers the maximal runs of passes made
by the same team. Unlike possessions, nothing but the team label of
consecutive passes is considered.
"""

from __future__ import annotations

import polars as pl

from scoutr.exceptions import SegmentationError
from scoutr.schemas import PASS_EVENT, require_columns
from scoutr.segmentation.common import run_length_encode, select_match_events


def sequence_passes(
    events: pl.DataFrame,
    event_col: str = "event_name",
    team_col: str = "team_id",
    match_id: str | None = None,
) -> pl.DataFrame:
    """Encode consecutive passing sequences for a single match.

    Args:
        events: Ordered event rows for one match.
        event_col: Column holding the event classification.
        team_col: Column holding the acting team label.
        match_id: If given, restrict *events* to this match first.

    Returns:
        Only the pass rows of *events*, in order, with ``pass_id``
        (1-based ordinal of the same-team run) and ``pass_seq``
        (1-based position within the run). Empty when the match has
        no passes.

    Raises:
        SchemaError: If a required column is missing.
        SegmentationError: If there are no events to sequence.
    """
    events = select_match_events(events, event_col, team_col, match_id)
    passes = events.filter(pl.col(event_col) == PASS_EVENT)

    pass_ids, pass_seqs = run_length_encode(passes.get_column(team_col).to_list())

    return passes.with_columns(
        pl.Series("pass_id", pass_ids, dtype=pl.Int64),
        pl.Series("pass_seq", pass_seqs, dtype=pl.Int64),
    )


def sequence_passes_by_match(
    events: pl.DataFrame,
    event_col: str = "event_name",
    team_col: str = "team_id",
) -> pl.DataFrame:
    """Encode pass sequences match by match and concatenate the results.

    Raises:
        SchemaError: If a required column is missing.
        SegmentationError: If *events* is empty.
    """
    require_columns(events, ["match_id", event_col, team_col])
    if events.is_empty():
        msg = "Cannot sequence passes from an empty event frame"
        raise SegmentationError(msg)

    return pl.concat(
        [
            sequence_passes(match, event_col, team_col)
            for match in events.partition_by("match_id", maintain_order=True)
        ]
    )
