"""Summaries of event velocities over a polygon grid covering the pitch.

Every event path (start-to-end line) contributes its velocity to each
grid cell it intersects. Each cell's collected values are then reduced
with one of the summary functions in :data:`SUMMARY_FUNCTIONS`.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

import numpy as np
import polars as pl
import shapely
from shapely.strtree import STRtree

from scoutr.config import GridConfig
from scoutr.exceptions import GridError
from scoutr.locations.link import event_lines
from scoutr.schemas import VELOCITY_COLUMNS, require_columns
from scoutr.velocity.grid import make_grid

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from shapely.geometry import Polygon
    from shapely.geometry.base import BaseGeometry

logger = logging.getLogger(__name__)


def _iqr(values: np.ndarray) -> float:
    q75, q25 = np.percentile(values, [75, 25])
    return float(q75 - q25)


SUMMARY_FUNCTIONS: dict[str, Callable[[np.ndarray], float]] = {
    "mean": np.mean,
    "median": np.median,
    "sd": lambda values: float(np.std(values, ddof=1)),
    "iqr": _iqr,
    "min": np.min,
    "max": np.max,
}

# Fewest values for which a summary is defined.
_MIN_VALUES: dict[str, int] = {"sd": 2}


def summarise(
    values: Sequence[float],
    summary: str,
    na_rm: bool = True,
) -> float | None:
    """Reduce one cell's values to a single number.

    Args:
        values: Velocities collected for the cell; NaN marks missing.
        summary: Key of :data:`SUMMARY_FUNCTIONS`.
        na_rm: Drop NaN values first. When ``False``, any NaN makes
            the result missing.

    Returns:
        The summary, or ``None`` when it is undefined (no values,
        missing values kept, or too few values for *summary*).

    Raises:
        ValueError: If *summary* is not a supported summary name.
    """
    reducer = _get_reducer(summary)
    arr = np.asarray(values, dtype=float)
    missing = np.isnan(arr)
    if missing.any():
        if not na_rm:
            return None
        arr = arr[~missing]
    if arr.size < _MIN_VALUES.get(summary, 1):
        return None
    return float(reducer(arr))


def _get_reducer(summary: str) -> Callable[[np.ndarray], float]:
    try:
        return SUMMARY_FUNCTIONS[summary]
    except KeyError:
        msg = (
            f"Unknown summary function {summary!r}. "
            f"Must be one of {sorted(SUMMARY_FUNCTIONS)}."
        )
        raise ValueError(msg) from None


def _log_grid_preview(
    cells: list[Polygon],
    bounds: tuple[float, float, float, float],
    config: GridConfig,
) -> None:
    logger.info(
        "Grid preview: %d %s cells of size %g over (%.2f, %.2f)-(%.2f, %.2f)",
        len(cells),
        config.shape,
        config.size,
        *bounds,
    )
    for cell_id, cell in enumerate(cells, start=1):
        cx, cy = cell.centroid.coords[0]
        logger.debug("  cell %d centred at (%.2f, %.2f)", cell_id, cx, cy)


def compute_polygon_velocity(
    events: pl.DataFrame,
    metric: str,
    config: GridConfig | None = None,
    *,
    match_id: str | None = None,
    geometry_col: str = "geometry",
) -> pl.DataFrame:
    """Summarise event velocities within a grid of polygons.

    The grid covers the bounding box of the event paths. Cells that no
    event path intersects get a null summary.

    Args:
        events: Events with a velocity column from
            :func:`~scoutr.velocity.event.compute_event_velocity`,
            and either a geometry column from
            :func:`~scoutr.locations.link.link_locations` or the default
            start/end location columns.
        metric: Velocity column to summarise, one of
            :data:`~scoutr.schemas.VELOCITY_COLUMNS`.
        config: Grid shape, cell size, summary function and options.
            Defaults to ``GridConfig()``.
        match_id: If given, restrict *events* to this match first.
        geometry_col: Column holding the event path geometries.

    Returns:
        One row per grid cell with ``cell_id`` (1-based), ``geometry``
        (shapely polygon) and ``<summary>_<metric>`` columns.

    Raises:
        ValueError: If *metric* or the summary function is unknown.
        SchemaError: If a required column is missing.
        GridError: If there are no events to build a grid over.
    """
    config = GridConfig() if config is None else config
    _get_reducer(config.summary)
    if metric not in VELOCITY_COLUMNS:
        msg = f"metric must be one of {VELOCITY_COLUMNS}, got {metric!r}"
        raise ValueError(msg)

    require_columns(events, [metric] if match_id is None else [metric, "match_id"])
    if match_id is not None:
        events = events.filter(pl.col("match_id") == match_id)

    if events.is_empty():
        msg = "Cannot build a velocity grid without events"
        raise GridError(msg)

    if geometry_col in events.columns:
        paths: list[BaseGeometry] = events.get_column(geometry_col).to_list()
    else:
        paths = list(event_lines(events))

    xmin, ymin, xmax, ymax = (float(b) for b in shapely.total_bounds(paths))
    bounds = (xmin, ymin, xmax, ymax)
    cells = make_grid(bounds, config.size, config.shape)
    if config.preview:
        _log_grid_preview(cells, bounds, config)

    path_idx, cell_idx = STRtree(cells).query(paths, predicate="intersects")

    values = events.get_column(metric).to_list()
    buckets: dict[int, list[float]] = defaultdict(list)
    for p, c in zip(path_idx.tolist(), cell_idx.tolist()):
        value = values[p]
        buckets[c].append(np.nan if value is None else float(value))

    summaries = [
        summarise(buckets[c], config.summary, config.na_rm) if c in buckets else None
        for c in range(len(cells))
    ]

    logger.info(
        "Summarised %s over %d %s cells (%d with events)",
        metric,
        len(cells),
        config.shape,
        len(buckets),
    )

    return pl.DataFrame(
        [
            pl.Series("cell_id", list(range(1, len(cells) + 1)), dtype=pl.Int64),
            pl.Series("geometry", cells, dtype=pl.Object),
            pl.Series(f"{config.summary}_{metric}", summaries, dtype=pl.Float64),
        ]
    )
