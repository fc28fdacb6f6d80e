"""
Logger configuration management
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from sinklog.core.log_level import Level


def _coerce_level(value: Union[Level, str, int]) -> Level:
    if isinstance(value, str):
        return Level.from_string(value)
    return Level(value)


@dataclass
class LoggerConfig:
    """
    Logger configuration.

    Describes a logger and the bundled writers which LoggerBuilder
    registers with it. Level fields accept Level values or level names.
    """

    # Basic settings
    name: str = "logger"
    level: Level = Level.ERROR
    categories: List[str] = field(default_factory=list)

    # Console settings (standard output)
    console_output: bool = True
    console_level: Level = Level.INFO
    colored_output: bool = False

    # Error stream settings (standard error)
    error_output: bool = False
    error_level: Level = Level.ERROR

    # File settings
    log_file: Optional[Path] = None
    file_level: Level = Level.INFO
    file_buffered: bool = True
    file_encoding: str = "utf-8"

    # Format settings
    prefix_delimiter: str = ":"
    include_timestamp: bool = False
    timestamp_format: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.name:
            raise ValueError("name cannot be empty")
        if not self.prefix_delimiter:
            raise ValueError("prefix_delimiter cannot be empty")

        self.level = _coerce_level(self.level)
        self.console_level = _coerce_level(self.console_level)
        self.error_level = _coerce_level(self.error_level)
        self.file_level = _coerce_level(self.file_level)

        # Convert log_file to Path if it's a string
        if isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)

    @classmethod
    def default(cls) -> "LoggerConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def debug_config(cls) -> "LoggerConfig":
        """Create configuration for debugging."""
        return cls(
            level=Level.TRACE,
            console_output=True,
            console_level=Level.TRACE,
            colored_output=True,
        )

    @classmethod
    def production_config(cls, log_file: Union[str, Path, None] = None) -> "LoggerConfig":
        """Create configuration for production."""
        return cls(
            level=Level.WARNING,
            console_output=False,
            error_output=True,
            log_file=log_file,
            file_level=Level.WARNING,
            file_buffered=False,
        )
