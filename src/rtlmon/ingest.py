"""Ingest loop: decoder output lines into the reading store.

Reads the decoder's stdout one line at a time, parses each line,
stamps it with the local wall-clock time and upserts it.  Bad lines
are logged and skipped.  The loop ends when the stream is closed or
fails.
"""

import dataclasses
import logging
import threading
import time

from rtlmon.reading import parse_reading

log = logging.getLogger(__name__)


def run_ingest(stream, store, clock=time.time) -> int:
    """Consume *stream* until EOF and store every valid reading.

    Args:
        stream: Iterable of raw lines (bytes or str), typically the
            decoder's stdout.
        store: Object with ``upsert(reading)``.
        clock: Returns seconds since the epoch; readings are stamped
            with ``int(clock() * 1000)``.

    Returns:
        int: Number of readings stored.
    """
    count = 0
    try:
        for raw in stream:
            line = raw.strip()
            if not line:
                continue
            try:
                reading = parse_reading(line)
            except ValueError as exc:
                log.warning("could not parse %r: %s", line, exc)
                continue
            reading = dataclasses.replace(
                reading, ingestion_time=int(clock() * 1000),
            )
            store.upsert(reading)
            count += 1
            log.debug("stored %s", reading)
    except OSError as exc:
        log.error("decoder output error: %s", exc)

    log.info("decoder output closed after %d readings", count)
    return count


def start_ingest(stream, store) -> threading.Thread:
    """Run ``run_ingest`` on a daemon thread and return the thread."""
    thread = threading.Thread(
        target=run_ingest, args=(stream, store), name="ingest", daemon=True,
    )
    thread.start()
    return thread
