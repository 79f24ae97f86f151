"""Tests for the end-to-end velocity pipeline."""

from __future__ import annotations

import polars as pl
import pytest

from scoutr.config import GridConfig, PipelineConfig, VelocityConfig
from scoutr.exceptions import SchemaError, SegmentationError
from scoutr.locations import transform_locations
from scoutr.pipeline import run_match_pipeline, run_pipeline


@pytest.fixture()
def two_matches(three_pass_events: pl.DataFrame) -> pl.DataFrame:
    return pl.concat(
        [
            three_pass_events,
            three_pass_events.with_columns(pl.lit("m2").alias("match_id")),
        ]
    )


class TestRunMatchPipeline:
    """A single match flows through every step."""

    def test_events_enriched(self, three_pass_events: pl.DataFrame) -> None:
        result = run_match_pipeline(three_pass_events)
        events = result.events.data
        assert result.events.units == "meters"
        assert events.get_column("possession_id").to_list() == [1, 1, 2]
        assert {"duration", "speed", "east_velocity", "geometry"} <= set(
            events.columns
        )

    def test_coordinates_transformed(self, three_pass_events: pl.DataFrame) -> None:
        result = run_match_pipeline(three_pass_events)
        assert result.events.data.get_column("start_x")[0] == pytest.approx(52.5)

    def test_speed_in_meters(self, three_pass_events: pl.DataFrame) -> None:
        result = run_match_pipeline(three_pass_events)
        speeds = result.events.data.get_column("speed").to_list()
        assert speeds[0] == pytest.approx(10.5 / 2.0)
        assert speeds[1:] == [None, None]

    def test_passes(self, three_pass_events: pl.DataFrame) -> None:
        result = run_match_pipeline(three_pass_events)
        assert result.passes.get_column("pass_id").to_list() == [1, 1, 2]
        assert result.passes.get_column("pass_seq").to_list() == [1, 2, 1]

    def test_grid_summarises_metric(self, three_pass_events: pl.DataFrame) -> None:
        result = run_match_pipeline(three_pass_events)
        assert result.grid.columns == ["cell_id", "geometry", "median_speed"]
        values = result.grid.get_column("median_speed").drop_nulls().to_list()
        assert values
        assert all(v == pytest.approx(5.25) for v in values)

    def test_configured_metric(self, three_pass_events: pl.DataFrame) -> None:
        config = PipelineConfig(
            metric="east_velocity",
            velocity=VelocityConfig(direction=("east", "west")),
            grid=GridConfig(shape="hexagon", size=8.0, summary="max"),
        )
        result = run_match_pipeline(three_pass_events, config)
        assert "max_east_velocity" in result.grid.columns
        assert "speed" not in result.events.data.columns

    def test_pre_transformed_input(self, three_pass_events: pl.DataFrame) -> None:
        frame = transform_locations(three_pass_events)
        result = run_match_pipeline(frame)
        assert result.events.data.get_column("start_x")[0] == pytest.approx(52.5)


class TestRunPipeline:
    """Several matches are sequenced independently."""

    def test_ids_restart_per_match(self, two_matches: pl.DataFrame) -> None:
        result = run_pipeline(two_matches)
        events = result.events.data
        assert events.get_column("match_id").to_list() == ["m1"] * 3 + ["m2"] * 3
        assert events.get_column("possession_id").to_list() == [1, 1, 2, 1, 1, 2]
        assert result.passes.get_column("pass_id").to_list() == [1, 1, 2, 1, 1, 2]

    def test_durations_do_not_cross_matches(self, two_matches: pl.DataFrame) -> None:
        result = run_pipeline(two_matches)
        durations = result.events.data.get_column("duration").to_list()
        assert durations == [2.0, None, None, 2.0, None, None]

    def test_single_grid(self, two_matches: pl.DataFrame) -> None:
        single = run_match_pipeline(two_matches.filter(pl.col("match_id") == "m1"))
        combined = run_pipeline(two_matches)
        assert combined.grid.height == single.grid.height

    def test_empty_frame(self, three_pass_events: pl.DataFrame) -> None:
        with pytest.raises(SegmentationError):
            run_pipeline(three_pass_events.clear())

    def test_missing_match_id(self, three_pass_events: pl.DataFrame) -> None:
        with pytest.raises(SchemaError, match="match_id"):
            run_pipeline(three_pass_events.drop("match_id"))
