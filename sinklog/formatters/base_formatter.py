"""
Base formatter interface and message rendering
"""

from abc import ABC, abstractmethod
from typing import Any

from sinklog.core.log_entry import LogEntry


def _printable(value: Any, render=repr) -> str:
    try:
        return render(value)
    except Exception:
        return f"<unprintable {type(value).__name__} object>"


def format_message(message: Any, args: tuple = ()) -> str:
    """
    Render a message with positional str.format() arguments.

    Formatting problems never raise; they produce a visibly broken line
    instead.

    Args:
        message: Message, or format string when args are given
        args: Positional arguments for the format string

    Returns:
        Rendered message
    """
    try:
        text = str(message)
        return text.format(*args) if args else text
    except Exception as e:
        return (f"[FORMAT ERROR: {_printable(e)}] "
                f"{_printable(message, str)} {_printable(args)}")


class BaseFormatter(ABC):
    """
    Abstract base class for log formatters.

    Formatters convert LogEntry objects into the prefix of a log line.
    """

    @abstractmethod
    def format(self, entry: LogEntry) -> str:
        """
        Format a log entry into a string.

        Args:
            entry: The log entry to format

        Returns:
            Formatted string representation of the log entry
        """
        pass

    def __call__(self, entry: LogEntry) -> str:
        """Allow formatters to be callable."""
        return self.format(entry)
