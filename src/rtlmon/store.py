"""In-memory last-value store for sensor readings.

Keeps the newest Reading per DeviceKey for the lifetime of the
process.  The ingest thread is the only writer; HTTP request threads
read through ``snapshot()``.  Readings are immutable, so replacing a
dict entry is the whole write and readers see either the old or the
new Reading for a device, never a mix of the two.
"""

import threading
from contextlib import contextmanager
from typing import Iterator

from rtlmon.reading import DeviceKey, Reading


class _ReadWriteLock:
    """Many readers or one writer.

    A waiting writer blocks new readers so a steady stream of scrapes
    cannot starve ingestion.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            while self._writing or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class ReadingStore:
    """Thread-safe map of DeviceKey to the latest Reading.

    Example:
        >>> store = ReadingStore()
        >>> store.upsert(Reading(model="X", id=1, temperature_c=20.0))
        DeviceKey(model='X', id=1)
        >>> len(store)
        1
    """

    def __init__(self):
        """Create an empty store."""
        self._readings: dict[DeviceKey, Reading] = {}
        self._lock = _ReadWriteLock()

    def upsert(self, reading: Reading) -> DeviceKey:
        """Store *reading*, replacing any earlier reading for its device.

        Returns the DeviceKey the reading was stored under.
        """
        key = reading.key
        with self._lock.write():
            self._readings[key] = reading
        return key

    def snapshot(self) -> list[Reading]:
        """Return the current readings as a point-in-time list.

        Order is unspecified.
        """
        with self._lock.read():
            return list(self._readings.values())

    def get(self, key: DeviceKey) -> Reading | None:
        """Return the latest reading for *key*, or None if never seen."""
        with self._lock.read():
            return self._readings.get(key)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._readings)
