"""Tests for polygon grid construction."""

from __future__ import annotations

import math

import pytest
import shapely
from shapely.geometry import Point, box

from scoutr.exceptions import GridError
from scoutr.velocity.grid import make_grid

_PITCH = (0.0, 0.0, 105.0, 70.0)


class TestSquareGrid:
    """Square cells anchored at the lower-left corner."""

    @pytest.mark.parametrize(("size", "expected"), [(5.0, 294), (10.0, 77), (200.0, 1)])
    def test_cell_count(self, size: float, expected: int) -> None:
        assert len(make_grid(_PITCH, size)) == expected

    def test_cell_order(self) -> None:
        cells = make_grid(_PITCH, 10.0)
        assert cells[0].equals(box(0, 0, 10, 10))
        assert cells[1].equals(box(10, 0, 20, 10))
        assert cells[11].equals(box(0, 10, 10, 20))
        assert cells[-1].equals(box(100, 60, 110, 70))

    def test_covers_extent(self) -> None:
        cells = make_grid(_PITCH, 7.0)
        assert shapely.unary_union(cells).covers(box(*_PITCH))

    def test_offset_extent(self) -> None:
        cells = make_grid((20.0, 30.0, 40.0, 35.0), 5.0)
        assert len(cells) == 4
        assert cells[0].bounds == (20.0, 30.0, 25.0, 35.0)

    def test_degenerate_extent(self) -> None:
        cells = make_grid((10.0, 10.0, 10.0, 10.0), 5.0)
        assert len(cells) == 1
        assert cells[0].covers(Point(10.0, 10.0))


class TestHexagonGrid:
    """Pointy-topped hexagons touching the extent."""

    def test_equal_areas(self) -> None:
        cells = make_grid(_PITCH, 10.0, shape="hexagon")
        expected = math.sqrt(3.0) / 2.0 * 10.0**2
        assert all(cell.area == pytest.approx(expected) for cell in cells)

    def test_covers_extent(self) -> None:
        cells = make_grid(_PITCH, 10.0, shape="hexagon")
        uncovered = box(*_PITCH).difference(shapely.unary_union(cells))
        assert uncovered.area == pytest.approx(0.0, abs=1e-6)

    def test_no_overlap(self) -> None:
        cells = make_grid(_PITCH, 10.0, shape="hexagon")
        union = shapely.unary_union(cells)
        assert sum(cell.area for cell in cells) == pytest.approx(union.area)

    def test_every_cell_touches_extent(self) -> None:
        extent = box(*_PITCH)
        cells = make_grid(_PITCH, 10.0, shape="hexagon")
        assert all(cell.intersects(extent) for cell in cells)

    def test_six_vertices(self) -> None:
        cell = make_grid(_PITCH, 10.0, shape="hexagon")[0]
        assert len(cell.exterior.coords) == 7

    def test_deterministic(self) -> None:
        first = make_grid(_PITCH, 6.0, shape="hexagon")
        second = make_grid(_PITCH, 6.0, shape="hexagon")
        assert all(a.equals(b) for a, b in zip(first, second, strict=True))

    def test_degenerate_extent(self) -> None:
        cells = make_grid((10.0, 10.0, 10.0, 10.0), 5.0, shape="hexagon")
        assert len(cells) == 1
        assert cells[0].covers(Point(10.0, 10.0))


class TestGridErrors:
    """Invalid grid requests raise GridError."""

    def test_unknown_shape(self) -> None:
        with pytest.raises(GridError, match="shape"):
            make_grid(_PITCH, 5.0, shape="triangle")

    @pytest.mark.parametrize("size", [0.0, -2.0, math.nan])
    def test_bad_size(self, size: float) -> None:
        with pytest.raises(GridError, match="positive"):
            make_grid(_PITCH, size)

    @pytest.mark.parametrize(
        "bounds",
        [
            (0.0, 0.0, math.nan, 70.0),
            (0.0, 0.0, math.inf, 70.0),
            (50.0, 0.0, 10.0, 70.0),
        ],
    )
    def test_bad_bounds(self, bounds: tuple[float, float, float, float]) -> None:
        with pytest.raises(GridError, match="bounds"):
            make_grid(bounds, 5.0)
