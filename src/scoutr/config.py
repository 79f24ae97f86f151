"""Configuration dataclasses for scoutr.

All configuration containers are frozen (immutable) and slotted. Each
dataclass provides sensible defaults so that a zero-argument
``PipelineConfig()`` is always valid.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from scoutr.schemas import DIRECTIONS, GRID_SHAPES, VELOCITY_COLUMNS


def _validate_direction(direction: str | tuple[str, ...] | None) -> None:
    """Raise ValueError for direction selections that name no velocity."""
    if direction is None:
        return
    if isinstance(direction, str):
        direction = (direction,)
    if "all" in direction:
        return
    unknown = [d for d in direction if d not in DIRECTIONS]
    if unknown:
        msg = (
            f"direction must be 'all', None, or a subset of {DIRECTIONS}, "
            f"got unknown {unknown}"
        )
        raise ValueError(msg)


def selected_velocity_columns(
    direction: str | tuple[str, ...] | list[str] | None,
) -> tuple[str, ...]:
    """Return the velocity columns a direction selection produces.

    Args:
        direction: ``"all"``, ``None`` (speed only), or direction names.

    Returns:
        Column names in canonical order.

    Raises:
        ValueError: If *direction* names an unknown direction.
    """
    if direction is None:
        return ("speed",)
    names = (direction,) if isinstance(direction, str) else tuple(direction)
    if "all" in names:
        return VELOCITY_COLUMNS
    _validate_direction(names)
    wanted = {f"{d}_velocity" for d in names}
    return tuple(c for c in VELOCITY_COLUMNS if c in wanted)


@dataclass(frozen=True, slots=True)
class PitchConfig:
    """Configuration for coordinate transforms.

    Attributes:
        dimensions: Target ``(width, height)`` of the pitch.
        units: Unit label recorded with the transformed coordinates.
        x_columns: Columns holding x-coordinates.
        y_columns: Columns holding y-coordinates.
    """

    dimensions: tuple[float, float] = (105.0, 70.0)
    units: str = "meters"
    x_columns: tuple[str, ...] = ("start_x", "end_x")
    y_columns: tuple[str, ...] = ("start_y", "end_y")

    def __post_init__(self) -> None:
        """Validate that both pitch dimensions are positive."""
        if len(self.dimensions) != 2 or min(self.dimensions) <= 0:
            msg = f"dimensions must be two positive numbers, got {self.dimensions}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PossessionConfig:
    """Column names used by possession and pass sequencing.

    Attributes:
        event_column: Column holding the event classification.
        team_column: Column holding the acting team label.
    """

    event_column: str = "event_name"
    team_column: str = "team_id"


@dataclass(frozen=True, slots=True)
class VelocityConfig:
    """Configuration for event velocity computation.

    Attributes:
        direction: ``"all"`` for every velocity plus speed, ``None``
            for speed only, or a tuple of direction names.
        start_loc: ``(x, y)`` columns of the event origin.
        end_loc: ``(x, y)`` columns of the event destination.
    """

    direction: str | tuple[str, ...] | None = "all"
    start_loc: tuple[str, str] = ("start_x", "start_y")
    end_loc: tuple[str, str] = ("end_x", "end_y")

    def __post_init__(self) -> None:
        """Validate the direction selection."""
        _validate_direction(self.direction)

    @property
    def columns(self) -> tuple[str, ...]:
        """Velocity columns produced by this configuration."""
        return selected_velocity_columns(self.direction)


@dataclass(frozen=True, slots=True)
class GridConfig:
    """Configuration for polygon-grid velocity aggregation.

    Attributes:
        shape: Cell shape (``"square"`` or ``"hexagon"``).
        size: Cell size; side length for squares, distance between
            opposite edges for hexagons.
        summary: Name of the summary function applied per cell.
        na_rm: Whether missing values are dropped before summarising.
        preview: Whether to log a description of the grid.
    """

    shape: str = "square"
    size: float = 5.0
    summary: str = "median"
    na_rm: bool = True
    preview: bool = False

    def __post_init__(self) -> None:
        """Validate grid shape and size."""
        if self.shape not in GRID_SHAPES:
            msg = f"shape must be one of {sorted(GRID_SHAPES)}, got {self.shape!r}"
            raise ValueError(msg)
        if self.size <= 0:
            msg = f"size must be positive, got {self.size}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Master configuration for the end-to-end velocity pipeline.

    Attributes:
        metric: Velocity column aggregated over the polygon grid.
        pitch: Coordinate transform configuration.
        possession: Sequencing configuration.
        velocity: Velocity computation configuration.
        grid: Polygon-grid aggregation configuration.

    Raises:
        ValueError: If *metric* is unknown or not produced by the
            velocity configuration.
    """

    metric: str = "speed"
    pitch: PitchConfig = field(default_factory=PitchConfig)
    possession: PossessionConfig = field(default_factory=PossessionConfig)
    velocity: VelocityConfig = field(default_factory=VelocityConfig)
    grid: GridConfig = field(default_factory=GridConfig)

    def __post_init__(self) -> None:
        """Validate configuration invariants after initialization."""
        if self.metric not in VELOCITY_COLUMNS:
            msg = f"metric must be one of {VELOCITY_COLUMNS}, got {self.metric!r}"
            raise ValueError(msg)

        if self.metric not in self.velocity.columns:
            msg = (
                f"metric {self.metric!r} is not computed by "
                f"velocity.direction={self.velocity.direction!r}"
            )
            raise ValueError(msg)
