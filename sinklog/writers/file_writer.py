"""File writer"""

from pathlib import Path
from typing import Optional, TextIO, Union

from sinklog.core.log_level import Level, LevelSpec
from sinklog.formatters.prefix_formatter import PrefixFormatter
from sinklog.writers.base_writer import Writer, default_prefix_formatter


class FileWriter(Writer):
    """
    Write log lines to a file.

    The file is opened when the first logger opens the writer and closed
    when the last one closes it.
    """

    def __init__(
        self,
        level: LevelSpec,
        filepath: Union[str, Path],
        buffered: bool = True,
        mode: str = "a",
        encoding: str = "utf-8",
        formatter: Optional[PrefixFormatter] = None
    ):
        """
        Initialize file writer.

        Args:
            level: Level threshold, LevelMask, or raw mask bits
            filepath: Path to log file
            buffered: If False, flush after every line
            mode: File open mode (default: 'a' for append)
            encoding: File encoding (default: 'utf-8')
            formatter: Prefix formatter (default: logger name and level)
        """
        super().__init__(level, formatter or default_prefix_formatter())
        self.filepath = Path(filepath)
        self.buffered = buffered
        self.mode = mode
        self.encoding = encoding
        self._file: Optional[TextIO] = None

    def _open_backend(self) -> None:
        """Open log file."""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.filepath, self.mode, encoding=self.encoding)

    def _close_backend(self) -> None:
        """Close file."""
        if self._file:
            try:
                self._file.close()
            finally:
                self._file = None

    def _persist_line(self, text: str, level: Level) -> None:
        """Write one line to the file."""
        if self._file:
            self._file.write(text + "\n")
            if not self.buffered:
                self._file.flush()

    def flush(self) -> None:
        """Flush file buffer."""
        with self._lock:
            if self._file:
                self._file.flush()

    def __repr__(self) -> str:
        """String representation."""
        return f"FileWriter(path='{self.filepath}', buffered={self.buffered})"
