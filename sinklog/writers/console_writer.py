"""Console writers with optional ANSI colors"""

import sys
from typing import Optional, TextIO

from sinklog.core.log_level import Level, LevelSpec
from sinklog.formatters.prefix_formatter import PrefixFormatter
from sinklog.writers.base_writer import Writer, default_prefix_formatter


class ConsoleWriter(Writer):
    """Write log lines to a console stream with optional colors."""

    def __init__(
        self,
        level: LevelSpec = Level.INFO,
        stream: Optional[TextIO] = None,
        colored: bool = False,
        formatter: Optional[PrefixFormatter] = None
    ):
        """
        Initialize console writer.

        Args:
            level: Level threshold, LevelMask, or raw mask bits
            stream: Output stream (default: sys.stdout at write time)
            colored: Use ANSI color codes
            formatter: Prefix formatter (default: logger name and level)
        """
        super().__init__(level, formatter or default_prefix_formatter())
        self.colored = colored
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _persist_line(self, text: str, level: Level) -> None:
        """Write one line to the stream."""
        if self.colored:
            text = f"{level.color_code}{text}{level.reset_code}"
        stream = self.stream
        stream.write(text + "\n")
        stream.flush()

    def flush(self) -> None:
        """Flush stream."""
        with self._lock:
            self.stream.flush()


class StdOutWriter(ConsoleWriter):
    """Write log lines to standard output."""

    def __init__(
        self,
        level: LevelSpec = Level.INFO,
        colored: bool = False,
        formatter: Optional[PrefixFormatter] = None
    ):
        super().__init__(level, colored=colored, formatter=formatter)


class StdErrWriter(ConsoleWriter):
    """Write log lines to standard error."""

    def __init__(
        self,
        level: LevelSpec = Level.ERROR,
        colored: bool = False,
        formatter: Optional[PrefixFormatter] = None
    ):
        super().__init__(level, colored=colored, formatter=formatter)

    @property
    def stream(self) -> TextIO:
        return sys.stderr
