"""Polygon grids tiling a rectangular pitch extent.

Square grids are anchored at the lower-left corner of the extent and
cover it with ``ceil(width / size) * ceil(height / size)`` cells.
Hexagon grids use pointy-topped cells whose ``size`` is the distance
between opposite edges; only hexagons touching the extent are kept.
Cells are ordered row by row from the bottom, x increasing within a row.
"""

from __future__ import annotations

import math

from shapely.geometry import Polygon, box

from scoutr.exceptions import GridError
from scoutr.schemas import GRID_SHAPES

_SQRT3: float = math.sqrt(3.0)


def _axis_count(extent: float, size: float) -> int:
    """Number of cells of *size* needed to cover *extent* (at least one)."""
    return max(1, math.ceil(extent / size))


def _square_grid(
    bounds: tuple[float, float, float, float], size: float
) -> list[Polygon]:
    xmin, ymin, xmax, ymax = bounds
    nx = _axis_count(xmax - xmin, size)
    ny = _axis_count(ymax - ymin, size)
    return [
        box(
            xmin + i * size,
            ymin + j * size,
            xmin + (i + 1) * size,
            ymin + (j + 1) * size,
        )
        for j in range(ny)
        for i in range(nx)
    ]


def _hexagon(cx: float, cy: float, radius: float) -> Polygon:
    """Pointy-topped hexagon with circumradius *radius*."""
    return Polygon(
        [
            (
                cx + radius * math.cos(math.radians(30 + 60 * k)),
                cy + radius * math.sin(math.radians(30 + 60 * k)),
            )
            for k in range(6)
        ]
    )


def _hexagon_grid(
    bounds: tuple[float, float, float, float], size: float
) -> list[Polygon]:
    xmin, ymin, xmax, ymax = bounds
    radius = size / _SQRT3
    row_step = size * _SQRT3 / 2.0
    extent = box(xmin, ymin, xmax, ymax)

    cells: list[Polygon] = []
    row = 0
    while ymin + row * row_step - radius <= ymax:
        cy = ymin + row * row_step
        offset = size / 2.0 if row % 2 else 0.0
        col = -1
        while xmin + col * size + offset - size / 2.0 <= xmax:
            cell = _hexagon(xmin + col * size + offset, cy, radius)
            if cell.intersects(extent):
                cells.append(cell)
            col += 1
        row += 1
    return cells


def make_grid(
    bounds: tuple[float, float, float, float],
    size: float,
    shape: str = "square",
) -> list[Polygon]:
    """Tile the rectangle *bounds* with polygons.

    Args:
        bounds: ``(xmin, ymin, xmax, ymax)`` of the area to cover.
        size: Cell size; side length for squares, distance between
            opposite edges for hexagons.
        shape: ``"square"`` or ``"hexagon"``.

    Returns:
        Non-overlapping cells covering *bounds*, in deterministic order.

    Raises:
        GridError: If *shape* is unknown, *size* is not positive, or
            *bounds* are not finite and ordered.
    """
    if shape not in GRID_SHAPES:
        msg = f"shape must be one of {sorted(GRID_SHAPES)}, got {shape!r}"
        raise GridError(msg)
    if not size > 0:
        msg = f"Grid cell size must be positive, got {size}"
        raise GridError(msg)

    xmin, ymin, xmax, ymax = (float(b) for b in bounds)
    finite = all(math.isfinite(b) for b in (xmin, ymin, xmax, ymax))
    if not finite or xmin > xmax or ymin > ymax:
        msg = f"Cannot build a grid over bounds {bounds}"
        raise GridError(msg)

    if shape == "square":
        return _square_grid((xmin, ymin, xmax, ymax), size)
    return _hexagon_grid((xmin, ymin, xmax, ymax), size)
