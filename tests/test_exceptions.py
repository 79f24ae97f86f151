"""Tests for scoutr.exceptions custom exception hierarchy.

Verifies inheritance relationships, instantiation, and that all
exceptions propagate messages correctly.
"""

from __future__ import annotations

import pytest

from scoutr.exceptions import (
    GridError,
    SchemaError,
    ScoutrError,
    SegmentationError,
)

_SUBCLASSES = [GridError, SegmentationError]


class TestHierarchy:
    """Every scoutr exception derives from ScoutrError."""

    @pytest.mark.parametrize("cls", [*_SUBCLASSES, SchemaError])
    def test_subclass_of_base(self, cls: type) -> None:
        assert issubclass(cls, ScoutrError)

    def test_base_is_exception(self) -> None:
        assert issubclass(ScoutrError, Exception)

    @pytest.mark.parametrize("cls", _SUBCLASSES)
    def test_caught_as_base(self, cls: type[ScoutrError]) -> None:
        with pytest.raises(ScoutrError, match="boom"):
            raise cls("boom")


class TestSchemaError:
    """SchemaError names the missing columns."""

    def test_missing_attribute(self) -> None:
        err = SchemaError(["event_sec", "possession_id"])
        assert err.missing == ("event_sec", "possession_id")

    def test_message_lists_missing(self) -> None:
        err = SchemaError(["event_sec"], ("match_id", "event_sec"))
        assert "event_sec" in str(err)
        assert "required: match_id, event_sec" in str(err)
