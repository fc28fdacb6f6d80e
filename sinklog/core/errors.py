"""
Exception types raised by sinklog

Logging calls raise only for writer lifecycle misuse and for FATAL entries.
"""


class SinkLogError(Exception):
    """Base class for all sinklog errors."""


class WriterStateError(SinkLogError, RuntimeError):
    """
    A writer was opened twice by the same logger, or closed by a logger
    which never opened it.
    """


class WriterOpenError(SinkLogError, OSError):
    """Backend resources of a writer could not be acquired."""


class FatalLogError(SinkLogError, RuntimeError):
    """
    Raised after a FATAL entry has been offered to every writer.

    Attributes:
        message: The formatted message of the fatal entry
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
