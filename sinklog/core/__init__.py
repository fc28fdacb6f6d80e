"""
Core module for sinklog

This module contains the fundamental classes:
- Logger: Client-facing entry point
- LoggerBuilder: Builder pattern for logger construction
- LoggerConfig: Configuration management
- LogEntry: Per-entry context handed to writers
- Level / LevelMask: Severity enumeration and acceptance bitset
- PrefixEntity / WidthSpecifier / PrefixSpec: Prefix field descriptors
"""

from sinklog.core.errors import (
    SinkLogError,
    WriterStateError,
    WriterOpenError,
    FatalLogError,
)
from sinklog.core.log_level import Level, LevelMask
from sinklog.core.log_entry import LogEntry
from sinklog.core.prefix import PrefixEntity, WidthSpecifier, PrefixSpec
from sinklog.core.logger import Logger
from sinklog.core.logger_builder import LoggerBuilder
from sinklog.core.logger_config import LoggerConfig

__all__ = [
    "Logger",
    "LoggerBuilder",
    "LoggerConfig",
    "Level",
    "LevelMask",
    "LogEntry",
    "PrefixEntity",
    "WidthSpecifier",
    "PrefixSpec",
    "SinkLogError",
    "WriterStateError",
    "WriterOpenError",
    "FatalLogError",
]
