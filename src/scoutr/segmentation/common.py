"""Helpers shared by the possession and pass sequencers."""

from __future__ import annotations

from itertools import groupby
from typing import TYPE_CHECKING

import polars as pl

from scoutr.exceptions import SegmentationError
from scoutr.schemas import require_columns

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable


def run_length_encode(labels: Iterable[Hashable]) -> tuple[list[int], list[int]]:
    """Number the maximal runs of equal consecutive labels.

    Args:
        labels: Labels in stream order.

    Returns:
        ``(run_ids, positions)`` where ``run_ids[i]`` is the 1-based
        ordinal of the run containing element ``i`` and ``positions[i]``
        its 1-based position inside that run.
    """
    run_ids: list[int] = []
    positions: list[int] = []
    for run_id, (_, group) in enumerate(groupby(labels), start=1):
        for position, _ in enumerate(group, start=1):
            run_ids.append(run_id)
            positions.append(position)
    return run_ids, positions


def select_match_events(
    events: pl.DataFrame,
    event_col: str,
    team_col: str,
    match_id: str | None = None,
) -> pl.DataFrame:
    """Validate columns, optionally keep one match, and reject empty input.

    Raises:
        SchemaError: If a required column is missing.
        SegmentationError: If no events remain.
    """
    required = [event_col, team_col]
    if match_id is not None:
        required.append("match_id")
    require_columns(events, required)

    if match_id is not None:
        events = events.filter(pl.col("match_id") == match_id)

    if events.is_empty():
        suffix = f" for match {match_id!r}" if match_id is not None else ""
        msg = f"Cannot sequence an empty event frame{suffix}"
        raise SegmentationError(msg)

    return events
