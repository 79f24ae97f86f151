"""Custom exceptions for scoutr.

All exceptions inherit from :class:`ScoutrError` so callers can catch
the full family with a single ``except ScoutrError`` clause.
"""

from __future__ import annotations


class ScoutrError(Exception):
    """Base exception for all scoutr errors."""


class SchemaError(ScoutrError):
    """Raised when an event frame lacks columns an operation requires.

    Attributes:
        missing: Names of the required columns that were not found.
    """

    def __init__(
        self,
        missing: tuple[str, ...] | list[str],
        required: tuple[str, ...] | list[str] = (),
    ) -> None:
        self.missing = tuple(missing)
        msg = f"Missing required column(s) in data: {', '.join(self.missing)}"
        if required:
            msg += f" (required: {', '.join(required)})"
        super().__init__(msg)


class SegmentationError(ScoutrError):
    """Raised when possession or pass sequencing cannot be performed."""


class GridError(ScoutrError):
    """Raised when a polygon grid cannot be built over the pitch."""
