"""Compute possession velocities and a pitch velocity grid for all matches.

Reads a flat event table (one row per event, columns as in
``scoutr.schemas.EVENT_SCHEMA``) from Parquet, runs the full velocity
pipeline with a hexagon median-speed grid, and writes the processed events, pass
sequences and velocity grid as Parquet files. Grid geometries are
written as WKT.

Usage::

    python scripts/run_velocity_grid.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import polars as pl

# ---------------------------------------------------------------------------
# Ensure the src package is importable when running as a standalone script.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT / "src"))

from scoutr.config import GridConfig, PipelineConfig  # noqa: E402
from scoutr.exceptions import ScoutrError  # noqa: E402
from scoutr.pipeline import run_pipeline  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

EVENTS_FILE = _PROJECT_ROOT / "data" / "events.parquet"
OUTPUT_DIR = _PROJECT_ROOT / "data" / "output"


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _geometry_to_wkt(df: pl.DataFrame) -> pl.DataFrame:
    """Replace the object ``geometry`` column with its WKT text.

    Args:
        df: Frame holding shapely geometries in ``geometry``.

    Returns:
        Frame with a ``geometry`` string column, writable to Parquet.
    """
    wkt = [geom.wkt for geom in df.get_column("geometry").to_list()]
    return df.with_columns(pl.Series("geometry", wkt, dtype=pl.Utf8))


def _log_grid_summary(grid: pl.DataFrame, value_col: str) -> None:
    """Log the distribution of the summarised metric over the grid.

    Args:
        grid: Output of the polygon aggregation step.
        value_col: Name of the summarised column.
    """
    values = grid.get_column(value_col).drop_nulls()
    sep = "=" * 72
    logger.info(sep)
    logger.info("VELOCITY GRID SUMMARY")
    logger.info(sep)
    logger.info("Cells            : %d", grid.height)
    logger.info("Cells with data  : %d", values.len())
    if values.len():
        logger.info(
            "%-16s : min=%.2f  median=%.2f  max=%.2f",
            value_col,
            values.min(),
            values.median(),
            values.max(),
        )


# ------------------------------------------------------------------
# Main
# ------------------------------------------------------------------


def main() -> None:
    """Run the velocity pipeline on the event table and write outputs."""
    if not EVENTS_FILE.exists():
        logger.error("No event table found at %s", EVENTS_FILE)
        return

    config = PipelineConfig(
        metric="speed",
        grid=GridConfig(shape="hexagon", size=6.0, summary="median"),
    )

    events = pl.read_parquet(EVENTS_FILE)
    logger.info("Loaded %d events from %s", events.height, EVENTS_FILE)

    try:
        result = run_pipeline(events, config)
    except ScoutrError:
        logger.exception("Velocity pipeline failed")
        return

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    _geometry_to_wkt(result.events.data).write_parquet(OUTPUT_DIR / "events.parquet")
    result.passes.write_parquet(OUTPUT_DIR / "passes.parquet")
    _geometry_to_wkt(result.grid).write_parquet(OUTPUT_DIR / "velocity_grid.parquet")

    logger.info(
        "Pitch dimensions: %s %s",
        result.events.pitch_dimensions,
        result.events.units,
    )
    _log_grid_summary(result.grid, f"{config.grid.summary}_{config.metric}")
    logger.info("Outputs written to %s", OUTPUT_DIR)


if __name__ == "__main__":
    main()
