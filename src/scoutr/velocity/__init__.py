"""Event velocities and their spatial summaries over the pitch."""

from scoutr.velocity.event import GROUP_KEYS, compute_event_velocity
from scoutr.velocity.grid import make_grid
from scoutr.velocity.polygon import (
    SUMMARY_FUNCTIONS,
    compute_polygon_velocity,
    summarise,
)

__all__ = [
    "GROUP_KEYS",
    "SUMMARY_FUNCTIONS",
    "compute_event_velocity",
    "compute_polygon_velocity",
    "make_grid",
    "summarise",
]
