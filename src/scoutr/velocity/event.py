"""Event-level velocities from consecutive events within a possession.

The duration of an event is the time until the next event of the same
possession. Directional velocities divide the event's displacement by
that duration; the last event of every possession has no duration and
therefore no velocity.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import polars as pl

from scoutr.config import selected_velocity_columns
from scoutr.schemas import require_columns

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

GROUP_KEYS: tuple[str, ...] = ("match_id", "match_period", "possession_id")


def _velocity_expressions(
    start_loc: Sequence[str],
    end_loc: Sequence[str],
) -> dict[str, pl.Expr]:
    """Map every velocity column name to its polars expression."""
    dx = pl.col(end_loc[0]) - pl.col(start_loc[0])
    dy = pl.col(end_loc[1]) - pl.col(start_loc[1])
    duration = pl.col("duration")

    return {
        "east_velocity": (dx / duration).clip(lower_bound=0.0),
        "west_velocity": (-dx / duration).clip(lower_bound=0.0),
        "north_velocity": (dy / duration).clip(lower_bound=0.0),
        "south_velocity": (-dy / duration).clip(lower_bound=0.0),
        "east_west_velocity": dx.abs() / duration,
        "north_south_velocity": dy.abs() / duration,
        "speed": (dx.pow(2) + dy.pow(2)).sqrt() / duration,
    }


def compute_event_velocity(
    events: pl.DataFrame,
    start_loc: Sequence[str] = ("start_x", "start_y"),
    end_loc: Sequence[str] = ("end_x", "end_y"),
    direction: str | Sequence[str] | None = "all",
) -> pl.DataFrame:
    """Compute velocities for each event.

    Events are grouped by match, period and possession; within each
    group the original row order is the time order.

    Args:
        events: Possession-encoded events. Must contain ``match_id``,
            ``match_period``, ``possession_id``, ``event_sec`` and the
            location columns.
        start_loc: ``(x, y)`` columns of the event origin.
        end_loc: ``(x, y)`` columns of the event destination.
        direction: ``"all"`` for all six directional velocities and
            ``speed``; ``None`` for ``speed`` only; or a subset of
            ``("east", "west", "north", "south", "east_west",
            "north_south")``.

    Returns:
        *events* with a ``duration`` column followed by the selected
        velocity columns. Zero durations yield nulls, not infinities.

    Raises:
        SchemaError: If any required column is missing.
        ValueError: If *direction* names an unknown direction.
    """
    required = (*GROUP_KEYS, "event_sec", *start_loc, *end_loc)
    require_columns(events, required)

    if direction is not None and not isinstance(direction, str):
        direction = tuple(direction)
    columns = selected_velocity_columns(direction)
    expressions = _velocity_expressions(start_loc, end_loc)

    result = events.with_columns(
        (pl.col("event_sec").shift(-1) - pl.col("event_sec"))
        .over(list(GROUP_KEYS))
        .alias("duration")
    ).with_columns(expressions[c].alias(c) for c in columns)

    # 0/0 is NaN and x/0 is +/-inf; neither is a velocity.
    result = result.with_columns(
        pl.when(pl.col(c).is_infinite() | pl.col(c).is_nan())
        .then(None)
        .otherwise(pl.col(c))
        .alias(c)
        for c in columns
    ).with_columns(pl.col(c).abs() for c in columns if c.endswith("_velocity"))

    logger.debug(
        "Computed %s for %d events", ", ".join(columns), result.height
    )
    return result
