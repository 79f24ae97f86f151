"""Shared test fixtures for scoutr.

Provides reusable fixtures used across multiple test modules:

* :func:`three_pass_events` -- two passes by team A then one by team B.
* :func:`possession_frame` -- a two-possession frame with known
  displacements, ready for velocity computation.
* :func:`random_match_frame` -- 200 random events of one match drawn
  from the full event vocabulary, for partition properties.
"""

from __future__ import annotations

import numpy as np
import polars as pl
import pytest

from scoutr.schemas import EVENT_NAMES, Event, events_to_frame

_VOCABULARY: tuple[str, ...] = tuple(sorted(EVENT_NAMES))


@pytest.fixture()
def three_pass_events() -> pl.DataFrame:
    """``[(A, Pass, 0s), (A, Pass, 2s), (B, Pass, 5s)]`` in one match."""
    return events_to_frame(
        [
            Event("m1", "1H", 0.0, "Pass", "A", 50.0, 50.0, 60.0, 50.0),
            Event("m1", "1H", 2.0, "Pass", "A", 60.0, 50.0, 70.0, 40.0),
            Event("m1", "1H", 5.0, "Pass", "B", 30.0, 60.0, 20.0, 60.0),
        ]
    )


@pytest.fixture()
def possession_frame() -> pl.DataFrame:
    """Two possessions of three and two events with simple displacements.

    Possession 1: (0,0)->(3,4) at 0s, (10,10)->(4,2) at 2s, last at 4s.
    Possession 2: (20,20)->(20,20) at 6s, last at 9s.
    """
    return pl.DataFrame(
        {
            "match_id": ["m1"] * 5,
            "match_period": ["1H"] * 5,
            "possession_id": [1, 1, 1, 2, 2],
            "event_sec": [0.0, 2.0, 4.0, 6.0, 9.0],
            "start_x": [0.0, 10.0, 4.0, 20.0, 20.0],
            "start_y": [0.0, 10.0, 2.0, 20.0, 20.0],
            "end_x": [3.0, 4.0, 6.0, 20.0, 25.0],
            "end_y": [4.0, 2.0, 2.0, 20.0, 20.0],
        }
    )


@pytest.fixture()
def random_match_frame() -> pl.DataFrame:
    """200 random events of one match, ordered by time."""
    rng = np.random.default_rng(seed=7)
    n = 200
    names = rng.choice(_VOCABULARY, size=n).tolist()
    teams = rng.choice(["A", "B"], size=n).tolist()
    coords = rng.uniform(0.0, 100.0, size=(n, 4))
    seconds = np.cumsum(rng.uniform(0.0, 4.0, size=n))
    return events_to_frame(
        [
            Event(
                match_id="m1",
                match_period="1H",
                event_sec=float(seconds[i]),
                event_name=names[i],
                team_id=teams[i],
                start_x=float(coords[i, 0]),
                start_y=float(coords[i, 1]),
                end_x=float(coords[i, 2]),
                end_y=float(coords[i, 3]),
            )
            for i in range(n)
        ]
    )
