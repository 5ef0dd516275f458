"""rtlmon daemon -- rtl_433 readings as Prometheus metrics.

Starts the decoder, feeds its output into the reading store on a
background thread, and serves ``/metrics`` over HTTP until SIGINT or
SIGTERM.  If the decoder dies the daemon keeps running and serves the
last readings it received.
"""

import argparse
import logging
import signal
import sys
import threading

from werkzeug.serving import make_server

from rtlmon.app import create_app
from rtlmon.config import default_config, load_config
from rtlmon.decoder import Decoder
from rtlmon.ingest import start_ingest
from rtlmon.paths import DEFAULT_CONFIG_NAME, resolve_config
from rtlmon.store import ReadingStore

log = logging.getLogger(__name__)

_shutdown = threading.Event()


def _on_signal(signum: int, frame) -> None:
    """Set the module-level shutdown event on SIGINT/SIGTERM."""
    _shutdown.set()


def find_config(name: str | None) -> dict:
    """Load config *name*, or the default config file if *name* is None.

    With no name, ``rtlmon.toml`` is looked up in the usual places and
    the built-in defaults apply if it is not found.  An explicitly named
    file must exist.
    """
    if name is not None:
        return load_config(resolve_config(name))
    try:
        path = resolve_config(DEFAULT_CONFIG_NAME)
    except FileNotFoundError:
        log.info("no %s found, using defaults", DEFAULT_CONFIG_NAME)
        return default_config()
    log.info("using config %s", path)
    return load_config(path)


def run_server(server, shutdown: threading.Event) -> None:
    """Serve HTTP on a background thread until *shutdown* is set.

    *server* is anything with ``serve_forever()`` and ``shutdown()``,
    normally a werkzeug server from ``make_server``.
    """
    thread = threading.Thread(
        target=server.serve_forever, name="http", daemon=True,
    )
    thread.start()

    while not shutdown.is_set():
        # Timeout so signals are handled promptly on the main thread
        shutdown.wait(0.5)

    server.shutdown()
    thread.join()


def main() -> None:
    """CLI entry point -- parse args, start decoder, serve metrics."""
    _shutdown.clear()

    parser = argparse.ArgumentParser(
        description="export rtl_433 sensor readings as Prometheus metrics",
    )
    parser.add_argument(
        "config", nargs="?",
        help="TOML config file (default: rtlmon.toml in . or /etc/rtlmon)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging",
    )
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=level,
    )

    cfg = find_config(args.config)

    store = ReadingStore()
    decoder = Decoder(cfg["decoder_command"], cfg["decoder_args"])
    try:
        decoder.start()
    except OSError as exc:
        log.error("cannot start decoder %s: %s", cfg["decoder_command"], exc)
        sys.exit(1)

    start_ingest(decoder.stdout, store)

    signal.signal(signal.SIGINT, _on_signal)
    signal.signal(signal.SIGTERM, _on_signal)

    try:
        server = make_server(cfg["host"], cfg["port"], create_app(store),
                             threaded=True)
        log.info("listening on http://%s:%d/metrics",
                 cfg["host"], cfg["port"])
        run_server(server, _shutdown)
    finally:
        decoder.terminate()
        log.info("shutting down")


if __name__ == "__main__":
    main()
