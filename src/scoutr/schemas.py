"""Data schemas for soccer event logs.

Defines the canonical event record, the polars schema used for event
frames, and the pitch metadata that travels alongside transformed
coordinates. Every schema is a frozen, slotted dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

import polars as pl

from scoutr.exceptions import SchemaError

if TYPE_CHECKING:
    from collections.abc import Sequence

# ------------------------------------------------------------------
# Event vocabulary
# ------------------------------------------------------------------

PASS_EVENT: str = "Pass"

CONTINUATION_EVENTS: tuple[str, ...] = ("Duel", "Others on the ball")

BARRIER_EVENTS: tuple[str, ...] = (
    "Foul",
    "Free Kick",
    "Interruption",
    "Offside",
    "Shot",
    "Save attempt",
)

EVENT_NAMES: frozenset[str] = frozenset(
    {
        PASS_EVENT,
        *CONTINUATION_EVENTS,
        *BARRIER_EVENTS,
        "Goalkeeper leaving line",
    }
)

# ------------------------------------------------------------------
# Frame schema
# ------------------------------------------------------------------

EVENT_SCHEMA: dict[str, pl.DataType] = {
    "event_id": pl.Utf8(),
    "match_id": pl.Utf8(),
    "match_period": pl.Utf8(),
    "event_sec": pl.Float64(),
    "event_name": pl.Utf8(),
    "sub_event_name": pl.Utf8(),
    "team_id": pl.Utf8(),
    "player_id": pl.Utf8(),
    "start_x": pl.Float64(),
    "start_y": pl.Float64(),
    "end_x": pl.Float64(),
    "end_y": pl.Float64(),
    "tags": pl.List(pl.Int64()),
}

EVENT_COLUMNS: tuple[str, ...] = tuple(EVENT_SCHEMA)

# ------------------------------------------------------------------
# Derived columns
# ------------------------------------------------------------------

DIRECTIONS: tuple[str, ...] = (
    "east",
    "west",
    "north",
    "south",
    "east_west",
    "north_south",
)

VELOCITY_COLUMNS: tuple[str, ...] = (
    *(f"{d}_velocity" for d in DIRECTIONS),
    "speed",
)

GRID_SHAPES: frozenset[str] = frozenset({"square", "hexagon"})


@dataclass(frozen=True, slots=True)
class Event:
    """A single on-ball action from a match event log.

    Coordinates are percentages of the pitch (0-100) until the event
    frame is passed through
    :func:`~scoutr.locations.transform.transform_locations`.

    Attributes:
        match_id: Identifier of the match this event belongs to.
        match_period: Period label (e.g. ``"1H"``, ``"2H"``).
        event_sec: Seconds elapsed since the start of the period.
        event_name: Event classification (e.g. ``"Pass"``, ``"Duel"``).
        team_id: Identifier of the acting team.
        start_x: Origin x-coordinate.
        start_y: Origin y-coordinate.
        end_x: Destination x-coordinate.
        end_y: Destination y-coordinate.
        event_id: Provider identifier of the event, if known.
        sub_event_name: Finer event classification, if known.
        player_id: Identifier of the acting player, if known.
        tags: Opaque provider tag codes.
    """

    match_id: str
    match_period: str
    event_sec: float
    event_name: str
    team_id: str
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    event_id: str | None = None
    sub_event_name: str | None = None
    player_id: str | None = None
    tags: tuple[int, ...] = field(default=())


def events_to_frame(events: Sequence[Event]) -> pl.DataFrame:
    """Materialise event records into a polars DataFrame.

    Row order follows *events*; no sorting is applied.

    Args:
        events: Event records, typically for a single match.

    Returns:
        DataFrame with exactly the columns of :data:`EVENT_SCHEMA`.
    """
    rows = [
        {
            "event_id": e.event_id,
            "match_id": e.match_id,
            "match_period": e.match_period,
            "event_sec": e.event_sec,
            "event_name": e.event_name,
            "sub_event_name": e.sub_event_name,
            "team_id": e.team_id,
            "player_id": e.player_id,
            "start_x": e.start_x,
            "start_y": e.start_y,
            "end_x": e.end_x,
            "end_y": e.end_y,
            "tags": list(e.tags),
        }
        for e in events
    ]
    return pl.DataFrame(rows, schema=EVENT_SCHEMA)


def require_columns(df: pl.DataFrame, required: Sequence[str]) -> None:
    """Raise :class:`~scoutr.exceptions.SchemaError` for absent columns."""
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise SchemaError(missing, tuple(required))


# ------------------------------------------------------------------
# Pitch metadata
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PitchDimensions:
    """Scale of the coordinates held by an event frame.

    Attributes:
        width: Pitch extent along x (goal line to goal line).
        height: Pitch extent along y (touchline to touchline).
        units: Unit label (``"meters"``, ``"yards"``, ``"percent"``).
    """

    width: float
    height: float
    units: str

    def __post_init__(self) -> None:
        """Reject non-positive dimensions."""
        if self.width <= 0 or self.height <= 0:
            msg = (
                f"Pitch dimensions must be positive, "
                f"got ({self.width}, {self.height})"
            )
            raise ValueError(msg)

    @classmethod
    def percent(cls) -> PitchDimensions:
        """Return the provider's native percentage scale."""
        return cls(width=100.0, height=100.0, units="percent")

    @property
    def dimensions(self) -> tuple[float, float]:
        """``(width, height)`` pair."""
        return (self.width, self.height)


@dataclass(frozen=True, slots=True)
class PitchFrame:
    """An event frame together with the scale of its coordinates.

    ``pitch`` is ``None`` for raw percentage data that has never been
    transformed.

    Attributes:
        data: Event rows.
        pitch: Coordinate scale metadata, or ``None`` if not yet set.
    """

    data: pl.DataFrame
    pitch: PitchDimensions | None = None

    @property
    def units(self) -> str | None:
        """Unit label, or ``None`` when metadata is not set."""
        return None if self.pitch is None else self.pitch.units

    @property
    def pitch_dimensions(self) -> tuple[float, float] | None:
        """``(width, height)``, or ``None`` when metadata is not set."""
        return None if self.pitch is None else self.pitch.dimensions

    def with_data(self, data: pl.DataFrame) -> PitchFrame:
        """Return a copy wrapping *data* with the same pitch metadata."""
        return replace(self, data=data)
