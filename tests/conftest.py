"""Shared fixtures for sinklog tests"""

import pytest

from sinklog import Level
from sinklog.writers.base_writer import Writer


class RecordingWriter(Writer):
    """Writer which keeps persisted lines in memory."""

    def __init__(self, level=Level.TRACE, formatter=None, fail_open=False, fail_persist=False):
        super().__init__(level, formatter)
        self.lines = []
        self.levels = []
        self.backend_opens = 0
        self.backend_closes = 0
        self.fail_open = fail_open
        self.fail_persist = fail_persist

    def _open_backend(self):
        if self.fail_open:
            raise OSError("backend unavailable")
        self.backend_opens += 1

    def _close_backend(self):
        self.backend_closes += 1

    def _persist_line(self, text, level):
        if self.fail_persist:
            raise OSError("disk full")
        self.lines.append(text)
        self.levels.append(level)


@pytest.fixture
def make_writer():
    """Factory for in-memory writers."""
    return RecordingWriter
