"""End-to-end event velocity pipeline.

Wires the coordinate transform, possession and pass sequencing, event
velocities, geometry linking and polygon-grid aggregation together,
producing the tidy tables an analyst works from.

Public API
----------
.. function:: run_match_pipeline

    Process the events of a single match.

.. function:: run_pipeline

    Process a multi-match event frame match by match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import polars as pl
from tqdm import tqdm

from scoutr.config import PipelineConfig
from scoutr.exceptions import SegmentationError
from scoutr.locations import link_locations, transform_locations
from scoutr.schemas import PitchFrame, require_columns
from scoutr.segmentation import sequence_passes, sequence_possessions
from scoutr.velocity import compute_event_velocity, compute_polygon_velocity

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Outputs of a pipeline run.

    Attributes:
        events: Transformed events with possession ids, durations,
            velocities and a ``geometry`` column, plus pitch metadata.
        passes: Pass events with ``pass_id`` and ``pass_seq``.
        grid: One row per grid cell with the summarised metric.
    """

    events: PitchFrame
    passes: pl.DataFrame
    grid: pl.DataFrame


def _sequence_match(
    events: pl.DataFrame,
    config: PipelineConfig,
) -> tuple[pl.DataFrame, pl.DataFrame]:
    """Possessions with velocities, and pass sequences, for one match."""
    event_col = config.possession.event_column
    team_col = config.possession.team_column

    possessions = sequence_possessions(events, event_col, team_col)
    passes = sequence_passes(events, event_col, team_col)
    velocities = compute_event_velocity(
        possessions,
        start_loc=config.velocity.start_loc,
        end_loc=config.velocity.end_loc,
        direction=config.velocity.direction,
    )
    return velocities, passes


def _transform(
    events: pl.DataFrame | PitchFrame,
    config: PipelineConfig,
) -> PitchFrame:
    return transform_locations(
        events,
        x=config.pitch.x_columns,
        y=config.pitch.y_columns,
        dimensions=config.pitch.dimensions,
        units=config.pitch.units,
    )


def _finish(
    frame: PitchFrame,
    velocities: pl.DataFrame,
    passes: pl.DataFrame,
    config: PipelineConfig,
) -> PipelineResult:
    linked = link_locations(
        velocities,
        start_loc=config.velocity.start_loc,
        end_loc=config.velocity.end_loc,
    )
    grid = compute_polygon_velocity(linked, config.metric, config.grid)
    return PipelineResult(events=frame.with_data(linked), passes=passes, grid=grid)


def run_match_pipeline(
    events: pl.DataFrame | PitchFrame,
    config: PipelineConfig | None = None,
) -> PipelineResult:
    """Run every processing step on the events of a single match.

    Args:
        events: Ordered events of one match, as raw percentage data or
            an already transformed :class:`~scoutr.schemas.PitchFrame`.
        config: Pipeline configuration. Defaults to ``PipelineConfig()``.

    Returns:
        The processed events, pass sequences and velocity grid.

    Raises:
        SchemaError: If a required column is missing.
        SegmentationError: If *events* is empty.
    """
    config = PipelineConfig() if config is None else config
    frame = _transform(events, config)
    velocities, passes = _sequence_match(frame.data, config)
    return _finish(frame, velocities, passes, config)


def run_pipeline(
    events: pl.DataFrame | PitchFrame,
    config: PipelineConfig | None = None,
) -> PipelineResult:
    """Run the pipeline over a frame that may hold several matches.

    Sequencing and velocities are computed per match, so possession
    and pass ids restart at 1 for each match. The velocity grid covers
    the events of all matches together.

    Args:
        events: Events ordered within each match.
        config: Pipeline configuration. Defaults to ``PipelineConfig()``.

    Returns:
        The processed events, pass sequences and velocity grid.

    Raises:
        SchemaError: If a required column is missing.
        SegmentationError: If *events* is empty.
    """
    config = PipelineConfig() if config is None else config
    frame = _transform(events, config)
    require_columns(frame.data, ["match_id"])
    if frame.data.is_empty():
        msg = "Cannot run the pipeline on an empty event frame"
        raise SegmentationError(msg)

    matches = frame.data.partition_by("match_id", maintain_order=True)
    velocity_frames: list[pl.DataFrame] = []
    pass_frames: list[pl.DataFrame] = []

    for match in tqdm(matches, desc="Processing matches", unit="match"):
        velocities, passes = _sequence_match(match, config)
        velocity_frames.append(velocities)
        pass_frames.append(passes)
        logger.debug(
            "Match %s: %d events, %d possessions, %d passes",
            match.get_column("match_id")[0],
            velocities.height,
            velocities.get_column("possession_id").max(),
            passes.height,
        )

    result = _finish(
        frame,
        pl.concat(velocity_frames),
        pl.concat(pass_frames),
        config,
    )

    logger.info(
        "Processed %d matches: %d events, %d passes, %d grid cells",
        len(matches),
        result.events.data.height,
        result.passes.height,
        result.grid.height,
    )
    return result
