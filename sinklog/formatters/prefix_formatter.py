"""
Prefix formatter

Composes the contextual header of a log line from an ordered list of
prefix specs.
"""

from typing import List, Optional, Tuple

from sinklog.core.log_entry import LogEntry
from sinklog.core.prefix import (
    CallerInfo,
    PrefixEntity,
    PrefixSpec,
    WidthSpecifier,
    find_caller,
)
from sinklog.formatters.base_formatter import BaseFormatter


class PrefixFormatter(BaseFormatter):
    """
    Format the prefix of a log line.

    Each configured entity is resolved, sized according to its width
    policy, and delimited. With a single delimiter character the
    delimiter goes between entities; with two characters the first is
    placed before and the second after every entity.
    """

    DEFAULT_DELIMITERS = " "

    def __init__(self, delimiters: str = DEFAULT_DELIMITERS, timestamp_format: Optional[str] = None):
        """
        Initialize prefix formatter.

        Args:
            delimiters: One delimiter character, or an opening/closing pair
            timestamp_format: strftime format for DATE_AND_TIME
                              (default: ISO-8601 local time)

        Example:
            # "app:INFO " style prefix
            formatter = PrefixFormatter(":")
            formatter.add(PrefixEntity.LOGGER_NAME)
            formatter.add(PrefixEntity.LEVEL, WidthSpecifier.FIXED, 5)

            # "[app][INFO ]" style prefix
            formatter.set_delimiters("[]")
        """
        self._specs: List[PrefixSpec] = []
        self._delimiters = ""
        self.set_delimiters(delimiters)
        self.timestamp_format = timestamp_format

    @property
    def specs(self) -> Tuple[PrefixSpec, ...]:
        return tuple(self._specs)

    @property
    def delimiters(self) -> str:
        return self._delimiters

    @property
    def needs_caller(self) -> bool:
        """True when any configured entity is resolved from the calling frame."""
        return any(spec.entity.is_source for spec in self._specs)

    def add(
        self,
        entity: PrefixEntity,
        width_spec: WidthSpecifier = WidthSpecifier.NONE,
        width: int = 0
    ) -> "PrefixFormatter":
        """Append an entity; insertion order is emission order."""
        self._specs.append(PrefixSpec(entity, width_spec, width))
        return self

    def clear(self) -> "PrefixFormatter":
        self._specs.clear()
        return self

    def set_delimiters(self, delimiters: str) -> "PrefixFormatter":
        """
        Set the delimiter character(s).

        Args:
            delimiters: One character placed between entities, or two
                        characters placed around each entity. Characters
                        beyond the second are ignored.

        Raises:
            ValueError: If delimiters is empty
        """
        if not delimiters:
            raise ValueError("At least one delimiter character is required")
        self._delimiters = delimiters[:2]
        return self

    def format(self, entry: LogEntry, caller: Optional[CallerInfo] = None) -> str:
        """
        Compose the prefix for a log entry.

        Args:
            entry: Log entry to format
            caller: Calling location; located on demand when omitted and
                    a SOURCE_* entity is configured

        Returns:
            Prefix string, empty when no entities are configured
        """
        if not self._specs:
            return ""

        if caller is None and self.needs_caller:
            caller = find_caller()

        surround = len(self._delimiters) > 1
        parts = []
        for spec in self._specs:
            text = spec.apply(self._resolve(spec.entity, entry, caller))
            if surround:
                text = f"{self._delimiters[0]}{text}{self._delimiters[1]}"
            parts.append(text)

        return ("" if surround else self._delimiters).join(parts)

    def _resolve(self, entity: PrefixEntity, entry: LogEntry, caller: Optional[CallerInfo]) -> str:
        """Resolve an entity to text; unresolvable entities yield ""."""
        if entity is PrefixEntity.LEVEL:
            return str(entry.level)
        if entity is PrefixEntity.LOGGER_NAME:
            return entry.logger_name or ""
        if entity is PrefixEntity.CATEGORY:
            return entry.category or ""
        if entity is PrefixEntity.DATE_AND_TIME:
            if self.timestamp_format:
                return entry.timestamp.strftime(self.timestamp_format)
            return entry.timestamp.isoformat()

        if caller is None:
            return ""
        if entity is PrefixEntity.SOURCE_PACKAGE:
            return caller.package
        if entity is PrefixEntity.SOURCE_CLASS:
            return caller.class_name
        if entity is PrefixEntity.SOURCE_METHOD:
            return caller.method
        if entity is PrefixEntity.SOURCE_FILE_NAME:
            return caller.file_name
        if entity is PrefixEntity.SOURCE_LINE_NUMBER:
            return str(caller.line_number)
        return ""

    def __repr__(self) -> str:
        """String representation."""
        names = [spec.entity.name for spec in self._specs]
        return f"PrefixFormatter(entities={names}, delimiters={self._delimiters!r})"
