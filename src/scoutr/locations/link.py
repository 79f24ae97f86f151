"""Linking of event start and end locations into line geometries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import polars as pl
from shapely.geometry import LineString

from scoutr.schemas import require_columns

if TYPE_CHECKING:
    from collections.abc import Sequence


def event_lines(
    events: pl.DataFrame,
    start_loc: Sequence[str] = ("start_x", "start_y"),
    end_loc: Sequence[str] = ("end_x", "end_y"),
) -> list[LineString]:
    """Build one start-to-end :class:`LineString` per event row.

    Raises:
        SchemaError: If any location column is missing.
    """
    cols = [start_loc[0], start_loc[1], end_loc[0], end_loc[1]]
    require_columns(events, cols)
    return [
        LineString([(sx, sy), (ex, ey)])
        for sx, sy, ex, ey in events.select(cols).iter_rows()
    ]


def link_locations(
    events: pl.DataFrame,
    start_loc: Sequence[str] = ("start_x", "start_y"),
    end_loc: Sequence[str] = ("end_x", "end_y"),
    geometry_col: str = "geometry",
) -> pl.DataFrame:
    """Attach a line geometry linking each event's start and end.

    Args:
        events: Event rows with start and end coordinate columns.
        start_loc: ``(x, y)`` columns of the event origin.
        end_loc: ``(x, y)`` columns of the event destination.
        geometry_col: Name of the geometry column to add.

    Returns:
        *events* with an object column of shapely line strings.

    Raises:
        SchemaError: If any location column is missing.
    """
    lines = event_lines(events, start_loc, end_loc)
    return events.with_columns(pl.Series(geometry_col, lines, dtype=pl.Object))
