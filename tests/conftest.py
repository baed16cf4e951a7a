"""
Shared fixtures for Park Master tests
Isolated data directories, deterministic ids and timestamps
"""

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from parkmaster.storage.record_store import RecordStore


class StepClock:
    """Clock returning strictly increasing ISO-8601 timestamps"""

    def __init__(self, start=None, step=timedelta(minutes=5)):
        self.current = start or datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> str:
        value = self.current
        self.current += self.step
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def counter_ids():
    """Id factory yielding "1", "2", "3", ..."""
    counter = itertools.count(1)
    return lambda: str(next(counter))


@pytest.fixture
def store(tmp_path):
    return RecordStore(tmp_path / "data")


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def id_factory():
    return counter_ids()
