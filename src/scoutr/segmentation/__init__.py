"""Segmentation utilities for scoutr.

Provides possession-based and consecutive-pass sequencing of ordered
match events.
"""

from scoutr.segmentation.common import run_length_encode
from scoutr.segmentation.passes import sequence_passes, sequence_passes_by_match
from scoutr.segmentation.possession import (
    FREE_KICK_EVENT,
    assign_possession_ids,
    sequence_possessions,
    sequence_possessions_by_match,
)

__all__ = [
    "FREE_KICK_EVENT",
    "assign_possession_ids",
    "run_length_encode",
    "sequence_passes",
    "sequence_passes_by_match",
    "sequence_possessions",
    "sequence_possessions_by_match",
]
