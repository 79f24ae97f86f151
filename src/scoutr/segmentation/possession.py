"""Possession sequencing for a single match's event stream.

Walks the events once, in input order, and assigns each one a
``possession_id``. Passes keep the possession while the same team keeps
passing. Duels and other on-ball contests are attributed by looking at
the surrounding passes. Runs of stoppages (fouls, free kicks, shots,
...) split possessions, with the first stoppage of a run kept in the
possession it interrupts.

Input must already be ordered by period and time; nothing is re-sorted.
"""

from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from typing import TYPE_CHECKING

import polars as pl

from scoutr.exceptions import SegmentationError
from scoutr.schemas import (
    BARRIER_EVENTS,
    CONTINUATION_EVENTS,
    PASS_EVENT,
    require_columns,
)
from scoutr.segmentation.common import run_length_encode, select_match_events

if TYPE_CHECKING:
    from collections.abc import Hashable

logger = logging.getLogger(__name__)

FREE_KICK_EVENT: str = BARRIER_EVENTS[1]


# ------------------------------------------------------------------
# Neighbour lookups
# ------------------------------------------------------------------


def _previous_pass(passes: list[int], i: int) -> int | None:
    """Index of the nearest pass strictly before *i*, if any."""
    k = bisect_left(passes, i)
    return passes[k - 1] if k > 0 else None


def _next_pass(passes: list[int], i: int) -> int | None:
    """Index of the nearest pass strictly after *i*, if any."""
    k = bisect_right(passes, i)
    return passes[k] if k < len(passes) else None


# ------------------------------------------------------------------
# Classification rules
# ------------------------------------------------------------------


def _continuation_keeps_possession(
    i: int,
    names: list[str],
    teams: list[Hashable],
    passes: list[int],
) -> bool:
    """Decide whether a duel-like event stays in the current possession.

    The event is compared against its bracketing passes. When a pass
    precedes it, both brackets resolve to that pass. With no earlier
    pass the event brackets itself and the next pass, or itself alone
    when no pass follows either.
    """
    prev = _previous_pass(passes, i)
    if prev is not None:
        previous_pass = prev
        next_pass = prev
    else:
        previous_pass = i
        nxt = _next_pass(passes, i)
        next_pass = i if nxt is None else nxt

    if teams[previous_pass] == teams[next_pass]:
        return True

    next_is_continuation = i + 1 < len(names) and names[i + 1] in CONTINUATION_EVENTS
    return next_is_continuation or teams[i] == teams[previous_pass]


def _pass_keeps_possession(
    i: int,
    names: list[str],
    teams: list[Hashable],
    passes: list[int],
) -> bool:
    """Decide whether a pass stays in the current possession.

    A pass taken by the team awarded the preceding free kick stays, as
    does any pass by the team that made the previous pass. The first
    pass of the stream is compared against itself.
    """
    if names[i - 1] == FREE_KICK_EVENT and teams[i] == teams[i - 1]:
        return True

    prev = _previous_pass(passes, i)
    previous_pass = i if prev is None else prev
    return teams[i] == teams[previous_pass]


def assign_possession_ids(names: list[str], teams: list[Hashable]) -> list[int]:
    """Classify an ordered event stream into possession ids.

    Args:
        names: Event classification per row.
        teams: Acting team label per row.

    Returns:
        One possession id per row, starting at 1 and non-decreasing.
    """
    if not names:
        return []

    passes = [k for k, name in enumerate(names) if name == PASS_EVENT]
    possession_id = 1
    ids = [possession_id]

    for i in range(1, len(names)):
        name = names[i]
        if name in CONTINUATION_EVENTS:
            keep = _continuation_keeps_possession(i, names, teams, passes)
        elif name in BARRIER_EVENTS:
            keep = names[i - 1] not in BARRIER_EVENTS
        elif name == PASS_EVENT:
            keep = _pass_keeps_possession(i, names, teams, passes)
        else:
            keep = True

        if not keep:
            possession_id += 1
        ids.append(possession_id)

    return ids


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------


def sequence_possessions(
    events: pl.DataFrame,
    event_col: str = "event_name",
    team_col: str = "team_id",
    match_id: str | None = None,
) -> pl.DataFrame:
    """Encode possession sequences for a single match.

    Args:
        events: Ordered event rows for one match.
        event_col: Column holding the event classification.
        team_col: Column holding the acting team label.
        match_id: If given, restrict *events* to this match first.

    Returns:
        *events* with ``possession_id`` (possession within the match)
        and ``possession_seq`` (1-based running count within the
        possession) columns, order preserved.

    Raises:
        SchemaError: If a required column is missing.
        SegmentationError: If there are no events to sequence.
    """
    events = select_match_events(events, event_col, team_col, match_id)

    names = events.get_column(event_col).to_list()
    teams = events.get_column(team_col).to_list()
    ids = assign_possession_ids(names, teams)
    _, seqs = run_length_encode(ids)

    logger.debug("Encoded %d possessions over %d events", ids[-1], len(ids))

    return events.with_columns(
        pl.Series("possession_id", ids, dtype=pl.Int64),
        pl.Series("possession_seq", seqs, dtype=pl.Int64),
    )


def sequence_possessions_by_match(
    events: pl.DataFrame,
    event_col: str = "event_name",
    team_col: str = "team_id",
) -> pl.DataFrame:
    """Encode possessions match by match and concatenate the results.

    Matches appear in order of first appearance and possession ids
    restart at 1 for each match.

    Raises:
        SchemaError: If a required column is missing.
        SegmentationError: If *events* is empty.
    """
    require_columns(events, ["match_id", event_col, team_col])
    if events.is_empty():
        msg = "Cannot sequence possessions from an empty event frame"
        raise SegmentationError(msg)

    return pl.concat(
        [
            sequence_possessions(match, event_col, team_col)
            for match in events.partition_by("match_id", maintain_order=True)
        ]
    )

