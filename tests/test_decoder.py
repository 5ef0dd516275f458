"""Tests for rtlmon.decoder.

These launch short-lived Python subprocesses in place of rtl_433.
"""

import logging
import sys

import pytest

from rtlmon.decoder import Decoder

ECHO_ARGS = "import sys; print(' '.join(sys.argv[1:]), flush=True)"


class TestDecoder:
    """Tests for the Decoder class."""

    def test_argv_appends_json_flags(self):
        """The JSON output flags follow the configured args."""
        decoder = Decoder("rtl_433", ["-f", "868M"])
        assert decoder.argv == ["rtl_433", "-f", "868M", "-F", "json"]

    def test_argv_without_args(self):
        """No extra args gives just the JSON flags."""
        assert Decoder("rtl_433").argv == ["rtl_433", "-F", "json"]

    def test_stdout_before_start(self):
        """stdout is unavailable until start()."""
        decoder = Decoder("rtl_433")
        assert decoder.pid is None
        with pytest.raises(RuntimeError):
            decoder.stdout

    def test_reads_output(self):
        """Output lines arrive on stdout as bytes."""
        decoder = Decoder(sys.executable, ["-c", ECHO_ARGS]).start()
        lines = list(decoder.stdout)
        assert lines == [b"-F json\n"]
        assert decoder.exited.wait(5)
        assert decoder.exit_status == 0

    def test_logs_exit_status(self, caplog):
        """The watcher logs a non-zero exit and records it."""
        with caplog.at_level(logging.WARNING, logger="rtlmon.decoder"):
            decoder = Decoder(
                sys.executable, ["-c", "import sys; sys.exit(3)"],
            ).start()
            assert decoder.exited.wait(5)
        assert decoder.exit_status == 3
        assert "exited with status 3" in caplog.text

    def test_launch_failure(self):
        """A missing executable raises OSError from start()."""
        decoder = Decoder("/nonexistent/rtl_433")
        with pytest.raises(OSError):
            decoder.start()

    def test_terminate(self):
        """terminate() stops a long-running decoder."""
        decoder = Decoder(
            sys.executable, ["-c", "import time; time.sleep(60)"],
        ).start()
        decoder.terminate(timeout_s=5)
        assert decoder.exited.wait(5)
        assert decoder.exit_status != 0

    def test_terminate_before_start(self):
        """terminate() on a decoder never started is a no-op."""
        Decoder("rtl_433").terminate()

    def test_context_manager(self):
        """The with block starts and stops the decoder."""
        with Decoder(sys.executable,
                     ["-c", "import time; time.sleep(60)"]) as decoder:
            assert decoder.pid is not None
        assert decoder.exited.wait(5)
