"""Logger builder pattern"""

from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Union

from sinklog.core.errors import WriterOpenError
from sinklog.core.logger import Logger
from sinklog.core.logger_config import LoggerConfig
from sinklog.core.log_level import Level, LevelMask
from sinklog.core.prefix import PrefixEntity, WidthSpecifier
from sinklog.formatters.prefix_formatter import PrefixFormatter
from sinklog.writers.base_writer import Writer
from sinklog.writers.console_writer import StdErrWriter, StdOutWriter
from sinklog.writers.file_writer import FileWriter


class LoggerBuilder:
    """Builder pattern for logger construction."""

    def __init__(self, config: Optional[LoggerConfig] = None):
        if config is None:
            config = LoggerConfig(console_output=False)
        else:
            config = replace(config, categories=list(config.categories))
        self._config = config
        self._level_mask: Optional[LevelMask] = None
        self._custom_writers: List[Writer] = []

    @classmethod
    def from_config(cls, config: LoggerConfig) -> "LoggerBuilder":
        """Start from an existing configuration."""
        return cls(config)

    def with_name(self, name: str) -> "LoggerBuilder":
        """Set logger name."""
        self._config.name = name
        return self

    def with_level(self, level: Level) -> "LoggerBuilder":
        """Accept the given level and every level of higher priority."""
        self._config.level = level
        self._level_mask = None
        return self

    def with_level_mask(self, level_mask: Union[LevelMask, int]) -> "LoggerBuilder":
        """Use an explicit level mask instead of a threshold."""
        self._level_mask = LevelMask(int(level_mask))
        return self

    def with_category(self, category: str) -> "LoggerBuilder":
        """Add an accepted category."""
        self._config.categories.append(category)
        return self

    def with_console(self, level: Level = Level.INFO, colored: bool = False) -> "LoggerBuilder":
        """Enable standard output."""
        self._config.console_output = True
        self._config.console_level = level
        self._config.colored_output = colored
        return self

    def with_stderr(self, level: Level = Level.ERROR) -> "LoggerBuilder":
        """Enable standard error output."""
        self._config.error_output = True
        self._config.error_level = level
        return self

    def with_file(
        self,
        filepath: Union[str, Path],
        level: Level = Level.INFO,
        buffered: bool = True
    ) -> "LoggerBuilder":
        """Enable file output."""
        self._config.log_file = Path(filepath)
        self._config.file_level = level
        self._config.file_buffered = buffered
        return self

    def with_prefix_delimiter(self, delimiters: str) -> "LoggerBuilder":
        """
        Override the prefix delimiter of the bundled writers.

        Args:
            delimiters: One character between entities, or a pair
                        placed around each entity

        Returns:
            Self for method chaining

        Example:
            logger = (LoggerBuilder()
                .with_console()
                .with_prefix_delimiter("[]")
                .build())
        """
        if not delimiters:
            raise ValueError("prefix_delimiter cannot be empty")
        self._config.prefix_delimiter = delimiters
        return self

    def with_timestamp(self, timestamp_format: Optional[str] = None) -> "LoggerBuilder":
        """
        Start the prefix of the bundled writers with the date and time.

        Args:
            timestamp_format: strftime format (default: ISO-8601)
        """
        self._config.include_timestamp = True
        self._config.timestamp_format = timestamp_format
        return self

    def add_writer(self, writer: Writer) -> "LoggerBuilder":
        """
        Add a custom writer.

        Args:
            writer: Writer instance

        Returns:
            Self for method chaining
        """
        self._custom_writers.append(writer)
        return self

    def build(self) -> Logger:
        """
        Build and return configured logger.

        Writers are registered in order: console, standard error, file,
        then custom writers.

        Raises:
            WriterOpenError: If a writer cannot be opened; writers opened
                             so far are closed and no logger is returned
        """
        config = self._config
        # Re-run validation for values changed through with_* methods
        config.__post_init__()

        level = self._level_mask if self._level_mask is not None else config.level
        logger = Logger(config.name, level)
        for category in config.categories:
            logger.add_category(category)

        try:
            for writer in self._bundled_writers(config) + self._custom_writers:
                logger.add_writer(writer)
        except WriterOpenError:
            # Release the writers opened so far
            logger.close()
            raise

        return logger

    @staticmethod
    def _make_formatter(config: LoggerConfig) -> PrefixFormatter:
        formatter = PrefixFormatter(config.prefix_delimiter, config.timestamp_format)
        if config.include_timestamp:
            formatter.add(PrefixEntity.DATE_AND_TIME)
        formatter.add(PrefixEntity.LOGGER_NAME)
        formatter.add(PrefixEntity.LEVEL, WidthSpecifier.FIXED, 5)
        return formatter

    def _bundled_writers(self, config: LoggerConfig) -> List[Writer]:
        writers: List[Writer] = []
        if config.console_output:
            writers.append(StdOutWriter(
                config.console_level,
                colored=config.colored_output,
                formatter=self._make_formatter(config),
            ))
        if config.error_output:
            writers.append(StdErrWriter(
                config.error_level,
                colored=config.colored_output,
                formatter=self._make_formatter(config),
            ))
        if config.log_file:
            writers.append(FileWriter(
                config.file_level,
                config.log_file,
                buffered=config.file_buffered,
                encoding=config.file_encoding,
                formatter=self._make_formatter(config),
            ))
        return writers
