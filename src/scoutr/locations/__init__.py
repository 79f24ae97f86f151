"""Coordinate transforms and geometry linking for event locations."""

from scoutr.locations.link import event_lines, link_locations
from scoutr.locations.transform import transform_locations

__all__ = ["event_lines", "link_locations", "transform_locations"]
