"""Supervisor for the external rtl_433 decoder process.

Launches the decoder in JSON-lines mode with stdout piped, and runs a
watcher thread that logs the exit status when the process dies.  The
decoder is not restarted: once it exits the ingest loop drains what
is left on the pipe and stops, and the HTTP endpoint keeps serving the
last readings it saw.

Example:
    >>> decoder = Decoder("rtl_433", ["-f", "868M"]).start()
    >>> for line in decoder.stdout:
    ...     print(line)
"""

import logging
import subprocess
import threading

log = logging.getLogger(__name__)

# Appended to every invocation: one JSON object per line on stdout.
JSON_OUTPUT_ARGS = ("-F", "json")


class Decoder:
    """Handle on one decoder subprocess.

    Args:
        command: Decoder executable, looked up on ``PATH``.
        args: Extra arguments placed before the JSON output flags.
    """

    def __init__(self, command: str, args: list[str] | None = None):
        """Build the argv; nothing is launched until ``start()``."""
        self.argv = [command, *(args or []), *JSON_OUTPUT_ARGS]
        self.exit_status: int | None = None
        self.exited = threading.Event()
        self._proc: subprocess.Popen | None = None

    def start(self) -> "Decoder":
        """Launch the decoder and its exit watcher.

        stderr is inherited so decoder diagnostics reach the console.

        Raises:
            OSError: If the executable cannot be started.
        """
        log.info("starting decoder: %s", " ".join(self.argv))
        self._proc = subprocess.Popen(self.argv, stdout=subprocess.PIPE)
        watcher = threading.Thread(
            target=self._watch, name="decoder-watch", daemon=True,
        )
        watcher.start()
        return self

    def _watch(self) -> None:
        """Wait for the process to exit and log its status."""
        status = self._proc.wait()
        self.exit_status = status
        log.warning("decoder pid %d exited with status %d",
                    self._proc.pid, status)
        self.exited.set()

    @property
    def stdout(self):
        """Binary stream of decoder output lines."""
        if self._proc is None:
            raise RuntimeError("decoder not started")
        return self._proc.stdout

    @property
    def pid(self) -> int | None:
        """Process id, or None before ``start()``."""
        return self._proc.pid if self._proc is not None else None

    def terminate(self, timeout_s: float = 5.0) -> None:
        """Stop the decoder, killing it if it ignores SIGTERM."""
        if self._proc is None or self._proc.poll() is not None:
            return
        self._proc.terminate()
        try:
            self._proc.wait(timeout_s)
        except subprocess.TimeoutExpired:
            log.warning("decoder did not exit after %.1fs, killing",
                        timeout_s)
            self._proc.kill()
            self._proc.wait()

    def __enter__(self) -> "Decoder":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.terminate()
