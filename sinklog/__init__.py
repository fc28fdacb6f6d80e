"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

Python SinkLog - A synchronous, mask-filtered logging facility
with per-writer prefix composition
"""

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

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

# Import submodules (not all classes by default)
from sinklog import formatters
from sinklog import writers

__all__ = [
    "Logger",
    "LoggerBuilder",
    "LoggerConfig",
    "LogEntry",
    "Level",
    "LevelMask",
    "PrefixEntity",
    "WidthSpecifier",
    "PrefixSpec",
    "SinkLogError",
    "WriterStateError",
    "WriterOpenError",
    "FatalLogError",
    "formatters",
    "writers",
]
