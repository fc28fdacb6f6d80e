"""
Main Logger class - Synchronous fan-out logger

A logger filters entries on two attributes before handing them to its
writers:

1. Level: the entry's level must match the logger's LevelMask.
2. Category: if the entry has a category and the logger's category list
   is not empty, the category must be in that list.

Accepted entries are formatted once and offered to every registered
writer in registration order; each writer applies its own level mask.
A writer which fails is reported on stderr and skipped.
"""

from __future__ import annotations

import os
import sys
import threading
import traceback
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, TYPE_CHECKING

from sinklog.core.errors import FatalLogError, WriterStateError
from sinklog.core.log_entry import LogEntry
from sinklog.core.log_level import Level, LevelMask, LevelSpec, to_level_mask
from sinklog.formatters.base_formatter import format_message

if TYPE_CHECKING:
    from sinklog.writers.base_writer import Writer


BYTES_PER_DUMP_LINE = 16
NO_FATAL_MESSAGE = "Fatal log entry created with no messages"

_LIBRARY_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def hex_dump_lines(buffer: bytes) -> List[str]:
    """
    Render bytes as hex dump lines, 16 bytes per line.

    Each line is a 6-digit hex offset, a colon, then one " XX" group per
    byte: "000010: 10 11 12 13".

    Raises:
        TypeError: If buffer does not support the buffer protocol
    """
    data = memoryview(buffer).tobytes()
    lines = []
    for offset in range(0, len(data), BYTES_PER_DUMP_LINE):
        chunk = data[offset:offset + BYTES_PER_DUMP_LINE]
        lines.append(f"{offset:06X}:" + "".join(f" {b:02X}" for b in chunk))
    return lines


def _stack_lines(frames: Iterable[traceback.FrameSummary]) -> List[str]:
    return [f"at {fs.name} ({fs.filename}:{fs.lineno})" for fs in frames]


class Logger:
    """
    Client-facing logger.

    Thread Safety:
        The writer list and the category list may be changed while other
        threads are logging; dispatch iterates over a snapshot taken under
        the logger lock.
    """

    DEFAULT_LEVEL = Level.ERROR

    def __init__(self, name: str, level: LevelSpec = DEFAULT_LEVEL):
        """
        Initialize logger.

        Args:
            name: Logger name, immutable after construction
            level: Level threshold, LevelMask (copied), or raw mask bits
        """
        self._name = name
        self._level_mask = to_level_mask(level)
        self._categories: Dict[str, None] = {}
        self._writers: List["Writer"] = []
        self._lock = threading.Lock()

    @classmethod
    def from_logger(cls, name: str, source: "Logger") -> "Logger":
        """
        Create a logger which inherits the settings of another one.

        The level mask is copied by value, categories are copied, and
        every writer of the source is registered (and opened) for the new
        logger.
        """
        logger = cls(name, source.level_mask)
        for category in source.categories:
            logger.add_category(category)
        for writer in source.writers:
            logger.add_writer(writer)
        return logger

    @property
    def name(self) -> str:
        return self._name

    @property
    def level_mask(self) -> LevelMask:
        """The logger's mask; may be modified in place."""
        return self._level_mask

    def set_level(self, level: Level) -> "Logger":
        """Accept `level` and every level of higher priority."""
        self._level_mask = LevelMask.from_level(level)
        return self

    def set_level_mask(self, level_mask: LevelSpec) -> "Logger":
        self._level_mask = to_level_mask(level_mask)
        return self

    # Categories

    @property
    def categories(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._categories)

    def add_category(self, category: str) -> "Logger":
        """
        Accept entries with this (case-sensitive) category.

        Entries without a category always pass the category filter.
        """
        with self._lock:
            self._categories[category] = None
        return self

    def remove_category(self, category: str) -> "Logger":
        with self._lock:
            self._categories.pop(category, None)
        return self

    def clear_categories(self) -> "Logger":
        with self._lock:
            self._categories.clear()
        return self

    # Writers

    @property
    def writers(self) -> Tuple["Writer", ...]:
        with self._lock:
            return tuple(self._writers)

    def add_writer(self, writer: "Writer") -> "Logger":
        """
        Register a writer and open it for this logger.

        A writer may be registered with several loggers.

        Raises:
            WriterStateError: If the writer is already registered here
            WriterOpenError: If the writer's backend could not be acquired;
                             the writer stays registered but drops writes
        """
        with self._lock:
            if writer in self._writers:
                raise WriterStateError(f"Writer {writer!r} is already registered with '{self._name}'")
            self._writers.append(writer)
        writer.open(self)
        return self

    def remove_writer(self, writer: "Writer") -> "Logger":
        """
        Unregister a writer, closing it for this logger.

        Raises:
            ValueError: If the writer is not registered here
        """
        with self._lock:
            self._writers.remove(writer)
        try:
            writer.close(self)
        except WriterStateError:
            pass  # Already closed through close()
        return self

    def open(self) -> "Logger":
        """
        Re-open every registered writer, reversing close().

        Raises:
            WriterStateError: If a writer is still open for this logger
            WriterOpenError: If a writer's backend could not be acquired
        """
        for writer in self.writers:
            writer.open(self)
        return self

    def close(self) -> "Logger":
        """
        Close every registered writer for this logger.

        Failures of individual writers are ignored so that every writer
        gets closed.
        """
        for writer in self.writers:
            try:
                writer.close(self)
            except (OSError, WriterStateError):
                pass  # Best effort - keep closing the remaining writers
        return self

    def __enter__(self) -> "Logger":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    # Filtering and dispatch

    def is_enabled_for(self, level: Level, category: Optional[str] = None) -> bool:
        """Check both logger gates for an entry."""
        if not self._level_mask.matches(level):
            return False
        if category is None:
            return True
        with self._lock:
            return not self._categories or category in self._categories

    def log(self, level: Level, message: Any, *args: Any, category: Optional[str] = None) -> "Logger":
        """
        Log a message.

        Args:
            level: Level of the entry
            message: Message, or str.format() pattern when args are given
            *args: Positional arguments for the pattern, formatted only
                   when the entry passes the logger's filters
            category: Optional category of the entry

        Raises:
            FatalLogError: Always, after dispatch, for Level.FATAL
        """
        level = Level(level)
        text = None
        if self.is_enabled_for(level, category):
            text = format_message(message, args)
            entry = LogEntry(level=level, logger_name=self._name, category=category)
            self._fan_out(lambda writer: writer.write(self, level, category, text, entry=entry))

        if level is Level.FATAL:
            raise FatalLogError(text if text is not None else format_message(message, args))
        return self

    def write_lines(self, level: Level, messages: Iterable[Any], category: Optional[str] = None) -> "Logger":
        """
        Log a multi-line entry; every line gets the same prefix.

        Raises:
            FatalLogError: Always, after dispatch, for Level.FATAL
        """
        level = Level(level)
        lines = [format_message(m) for m in messages]
        if self.is_enabled_for(level, category):
            entry = LogEntry(level=level, logger_name=self._name, category=category)
            self._fan_out(lambda writer: writer.write_multiple(self, level, category, lines, entry=entry))

        if level is Level.FATAL:
            raise FatalLogError(lines[0] if lines else NO_FATAL_MESSAGE)
        return self

    def _fan_out(self, deliver: Callable[["Writer"], None]) -> None:
        # A failing writer must not keep the entry from the remaining ones
        for writer in self.writers:
            try:
                deliver(writer)
            except Exception as e:
                print(f"Writer error in {writer!r}: {e}", file=sys.stderr)

    def trace(self, message: Any, *args: Any, category: Optional[str] = None) -> "Logger":
        """Log trace message."""
        return self.log(Level.TRACE, message, *args, category=category)

    def debug(self, message: Any, *args: Any, category: Optional[str] = None) -> "Logger":
        """Log debug message."""
        return self.log(Level.DEBUG, message, *args, category=category)

    def info(self, message: Any, *args: Any, category: Optional[str] = None) -> "Logger":
        """Log info message."""
        return self.log(Level.INFO, message, *args, category=category)

    def warning(self, message: Any, *args: Any, category: Optional[str] = None) -> "Logger":
        """Log warning message."""
        return self.log(Level.WARNING, message, *args, category=category)

    def error(self, message: Any, *args: Any, category: Optional[str] = None) -> "Logger":
        """Log error message."""
        return self.log(Level.ERROR, message, *args, category=category)

    def fatal(self, message: Any, *args: Any, category: Optional[str] = None) -> "Logger":
        """
        Log fatal message.

        The entry is offered to the writers, then FatalLogError is raised;
        this method never returns normally.
        """
        return self.log(Level.FATAL, message, *args, category=category)

    # Exceptions and buffers

    def catching(self, exc: BaseException, category: Optional[str] = None) -> "Logger":
        """Log an exception which has been caught, with its traceback."""
        return self._log_exception("Catching", exc, category)

    def throwing(self, exc: BaseException, category: Optional[str] = None) -> "Logger":
        """Log an exception which is about to be raised, with its stack."""
        return self._log_exception("Throwing", exc, category)

    def _log_exception(self, verb: str, exc: BaseException, category: Optional[str]) -> "Logger":
        if not self.is_enabled_for(Level.ERROR, category):
            return self

        description = "".join(traceback.format_exception_only(type(exc), exc)).strip()
        self.log(Level.ERROR, "{} {}", verb, description, category=category)

        if exc.__traceback__ is not None:
            frames = traceback.extract_tb(exc.__traceback__)
        else:
            # Not raised yet: report where it is being thrown from
            frames = [
                fs for fs in traceback.extract_stack()
                if not self._is_library_file(fs.filename)
            ]
        return self.write_lines(Level.ERROR, _stack_lines(frames), category=category)

    @staticmethod
    def _is_library_file(filename: str) -> bool:
        return os.path.abspath(filename).startswith(_LIBRARY_ROOT + os.sep)

    def write_buffer(
        self,
        level: Level,
        buffer: bytes,
        caption: Optional[str] = None,
        category: Optional[str] = None
    ) -> "Logger":
        """
        Log a byte buffer as a hex dump.

        Args:
            level: Level of the entry
            buffer: Bytes to dump, 16 per line
            caption: Optional first line, emitted verbatim
            category: Optional category of the entry

        Raises:
            TypeError: If buffer is not bytes-like
        """
        level = Level(level)
        buffer = memoryview(buffer)
        if level is not Level.FATAL and not self.is_enabled_for(level, category):
            return self

        lines = hex_dump_lines(buffer)
        if caption is not None:
            lines.insert(0, caption)
        return self.write_lines(level, lines, category=category)

    def __repr__(self) -> str:
        """String representation."""
        return f"Logger(name='{self._name}', mask={self._level_mask!r})"
