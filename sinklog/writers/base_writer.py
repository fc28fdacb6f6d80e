"""
Base writer interface

A writer owns its own level mask and prefix configuration, formats the
entries offered to it, and persists the resulting lines to a backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import sys
import threading
from typing import TYPE_CHECKING, Any, Iterable, Optional, Set

from sinklog.core.errors import WriterOpenError, WriterStateError
from sinklog.core.log_entry import LogEntry
from sinklog.core.log_level import Level, LevelMask, LevelSpec, to_level_mask
from sinklog.core.prefix import PrefixEntity, WidthSpecifier
from sinklog.formatters.base_formatter import format_message
from sinklog.formatters.prefix_formatter import PrefixFormatter

if TYPE_CHECKING:
    from sinklog.core.logger import Logger


class Writer(ABC):
    """
    Abstract base class for log writers.

    Lifecycle is reference counted by holder: every logger which opens
    the writer must close it again, and backend resources are released
    when the last holder closes. Writes arriving while no logger holds
    the writer open are dropped.

    Thread Safety:
        Every public operation holds the writer lock, so lines from
        different threads are never interleaved and the holder set stays
        consistent.
    """

    CLOSING_MESSAGE = "Closing log"

    def __init__(self, level: LevelSpec = Level.INFO, formatter: Optional[PrefixFormatter] = None):
        """
        Initialize writer.

        Args:
            level: Level threshold, LevelMask, or raw mask bits
            formatter: Prefix formatter (default: no prefix, space delimiter)
        """
        self._level_mask = to_level_mask(level)
        self.formatter = formatter or PrefixFormatter()
        self._holders: Set["Logger"] = set()
        self._disabled = False
        self._lock = threading.RLock()

    @property
    def level_mask(self) -> LevelMask:
        """The writer's own mask; may be modified in place."""
        return self._level_mask

    @level_mask.setter
    def level_mask(self, value: LevelSpec) -> None:
        with self._lock:
            self._level_mask = to_level_mask(value)

    @property
    def is_open(self) -> bool:
        return bool(self._holders)

    @property
    def holder_count(self) -> int:
        return len(self._holders)

    @property
    def disabled(self) -> bool:
        """True when backend acquisition failed; writes are dropped."""
        return self._disabled

    def add_prefix_entity(
        self,
        entity: PrefixEntity,
        width_spec: WidthSpecifier = WidthSpecifier.NONE,
        width: int = 0
    ) -> "Writer":
        """
        Append an entity to the prefix of every line.

        Args:
            entity: The entity to be included in the prefix
            width_spec: How the width of the entity is constrained
            width: The width limit for the entity

        Returns:
            Self for method chaining
        """
        with self._lock:
            self.formatter.add(entity, width_spec, width)
        return self

    def clear_prefix_entities(self) -> "Writer":
        """Remove all prefix entities, e.g. to replace a writer's defaults."""
        with self._lock:
            self.formatter.clear()
        return self

    def set_prefix_delimiter(self, delimiters: str) -> "Writer":
        """
        Set the prefix delimiter(s).

        A single character is placed between entities ("app:INFO");
        a pair is placed around each entity ("[app][INFO]").
        """
        with self._lock:
            self.formatter.set_delimiters(delimiters)
        return self

    def open(self, logger: "Logger") -> None:
        """
        Register a logger as a holder of this writer.

        The first holder acquires the backend resources.

        Raises:
            WriterStateError: If logger already holds this writer open
            WriterOpenError: If the backend could not be acquired; the
                             writer stays registered but drops all writes
        """
        with self._lock:
            if logger in self._holders:
                raise WriterStateError(
                    f"{type(self).__name__} is already open for logger '{logger.name}'"
                )

            first = not self._holders
            self._holders.add(logger)
            if first:
                try:
                    self._open_backend()
                    self._disabled = False
                except OSError as e:
                    self._disabled = True
                    print(f"Cannot open {self!r}: {e}", file=sys.stderr)
                    raise WriterOpenError(f"Cannot open {self!r}: {e}") from e

    def close(self, logger: "Logger") -> None:
        """
        Deregister a logger as a holder of this writer.

        A closing line is written on behalf of the logger while the
        writer is still open. The last holder releases the backend.

        Raises:
            WriterStateError: If logger never opened this writer
        """
        with self._lock:
            if logger not in self._holders:
                raise WriterStateError(
                    f"{type(self).__name__} was not opened by logger '{logger.name}'"
                )

            try:
                self.write(logger, Level.INFO, None, self.CLOSING_MESSAGE)
            finally:
                self._holders.discard(logger)
                if not self._holders:
                    try:
                        self._close_backend()
                    finally:
                        self._disabled = False

    def write(
        self,
        logger: "Logger",
        level: Level,
        category: Optional[str],
        message: Any,
        *args: Any,
        entry: Optional[LogEntry] = None
    ) -> None:
        """
        Present a log entry to the writer.

        Args:
            logger: The logger dispatching the entry
            level: Level of the entry
            category: Category of the entry, or None
            message: Message, or str.format() pattern when args are given
            *args: Positional arguments for the pattern
            entry: Entry context shared by all writers of one dispatch
        """
        if not self._level_mask.matches(level):
            return
        with self._lock:
            if not self._accepting():
                return
            prefix = self.formatter.format(entry or self._make_entry(logger, level, category))
            self._persist_line(self._compose(prefix, format_message(message, args)), level)

    def write_multiple(
        self,
        logger: "Logger",
        level: Level,
        category: Optional[str],
        messages: Iterable[Any],
        entry: Optional[LogEntry] = None
    ) -> None:
        """
        Present a multi-line entry; every line carries the same prefix.

        Used for payloads such as stack traces and buffer dumps.
        """
        if not self._level_mask.matches(level):
            return
        with self._lock:
            if not self._accepting():
                return
            prefix = self.formatter.format(entry or self._make_entry(logger, level, category))
            for message in messages:
                self._persist_line(self._compose(prefix, format_message(message)), level)

    def flush(self) -> None:
        """Flush buffered output. The default action is to do nothing."""

    def _accepting(self) -> bool:
        return bool(self._holders) and not self._disabled

    @staticmethod
    def _make_entry(logger: "Logger", level: Level, category: Optional[str]) -> LogEntry:
        return LogEntry(level=level, logger_name=logger.name, category=category)

    @staticmethod
    def _compose(prefix: str, message: str) -> str:
        return f"{prefix} {message}"

    def _open_backend(self) -> None:
        """Acquire backend resources. The default action is to do nothing."""

    def _close_backend(self) -> None:
        """Release backend resources. The default action is to do nothing."""

    @abstractmethod
    def _persist_line(self, text: str, level: Level) -> None:
        """
        Persist one complete line to the backend.

        Args:
            text: Line text without a trailing newline
            level: Level of the entry, for backends which style by level
        """
        pass

    def __repr__(self) -> str:
        """String representation."""
        return f"{type(self).__name__}(mask={self._level_mask!r})"


def default_prefix_formatter() -> PrefixFormatter:
    """Prefix of the bundled writers: "<logger name>:<level padded to 5>"."""
    return (PrefixFormatter(":")
        .add(PrefixEntity.LOGGER_NAME)
        .add(PrefixEntity.LEVEL, WidthSpecifier.FIXED, 5))
