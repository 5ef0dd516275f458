"""Shared pytest helpers for rtlmon tests."""

import json

from rtlmon.reading import Reading


def make_line(**fields) -> bytes:
    """Build one decoder output line from keyword fields."""
    return (json.dumps(fields) + "\n").encode()


def make_reading(model: str = "X", id: int | None = 1,
                 ts: int | None = 1700000000000, **values) -> Reading:
    """Build a timestamped Reading for store and rendering tests."""
    return Reading(model=model, id=id, ingestion_time=ts, **values)


class FakeClock:
    """Test double for time.time: returns fixed, advancing seconds."""

    def __init__(self, start: float = 1700000000.0, step: float = 1.0):
        """Initialize with a start time and per-call increment."""
        self._now = start
        self._step = step

    def __call__(self) -> float:
        """Return the current fake time, then advance it."""
        now = self._now
        self._now += self._step
        return now


class FailingStream:
    """Test double: yields canned lines, then raises OSError."""

    def __init__(self, lines: list[bytes]):
        """Initialize with the lines to yield before failing."""
        self._lines = list(lines)

    def __iter__(self):
        """Yield each line, then fail like a broken pipe."""
        yield from self._lines
        raise OSError("read failed")
