"""Rescaling of event coordinates between pitch scales.

Provider coordinates are percentages of the pitch. The first transform
rescales them from ``(100, 100)`` to the target dimensions and records
the scale on the returned :class:`~scoutr.schemas.PitchFrame`. Later
transforms rescale relative to the recorded scale, so a frame can be
moved to meters and back to percent without loss.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import polars as pl

from scoutr.schemas import PitchDimensions, PitchFrame, require_columns

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def transform_locations(
    events: pl.DataFrame | PitchFrame,
    x: Sequence[str] = ("start_x", "end_x"),
    y: Sequence[str] = ("start_y", "end_y"),
    dimensions: tuple[float, float] = (105.0, 70.0),
    units: str = "meters",
) -> PitchFrame:
    """Rescale x and y coordinate columns to new pitch dimensions.

    A bare DataFrame (or a frame without metadata) is treated as
    percentage data of scale ``(100, 100)``. A frame that already
    carries metadata is rescaled by the ratio of the target dimensions
    to the recorded ones.

    Args:
        events: Event rows, optionally wrapped with pitch metadata.
        x: Columns holding x-coordinates.
        y: Columns holding y-coordinates.
        dimensions: Target ``(width, height)``; width scales x.
        units: Unit label for the target dimensions. Use
            ``"percent"`` with ``(100, 100)``.

    Returns:
        A new frame with rescaled coordinates and updated metadata.

    Raises:
        SchemaError: If any listed coordinate column is missing.
        ValueError: If *dimensions* are not positive.
    """
    frame = events if isinstance(events, PitchFrame) else PitchFrame(events)
    target = PitchDimensions(width=dimensions[0], height=dimensions[1], units=units)

    require_columns(frame.data, [*x, *y])

    if frame.pitch is None:
        current = PitchDimensions.percent()
        action = "added"
    else:
        current = frame.pitch
        action = "modified"

    data = frame.data.with_columns(
        *((pl.col(c) / current.width) * target.width for c in x),
        *((pl.col(c) / current.height) * target.height for c in y),
    )

    logger.info("Attributes %s: 'units', 'pitch_dimensions'", action)
    logger.info(
        "Pitch dimensions: (%g X %g) %s", target.width, target.height, target.units
    )

    return PitchFrame(data=data, pitch=target)
