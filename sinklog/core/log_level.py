"""
Log level enumeration and level mask

Higher priority levels have lower values. The value of each level is
also the position of its bit within a LevelMask.
"""

from enum import IntEnum
from typing import Dict, Union


class Level(IntEnum):
    """
    Log level enumeration.

    Ordered from highest priority (FATAL) to lowest priority (TRACE).
    """

    FATAL = 0       # Unrecoverable, aborts the current unit of work
    ERROR = 1       # Error conditions
    WARNING = 2     # Warning messages
    INFO = 3        # Informational messages
    DEBUG = 4       # Debug information
    TRACE = 5       # Most verbose, detailed tracing

    def __str__(self) -> str:
        """Display token of the level."""
        return LEVEL_TOKENS[self]

    @property
    def ordinal(self) -> int:
        """Position of this level, 0 being the highest priority."""
        return int(self)

    @property
    def token(self) -> str:
        return LEVEL_TOKENS[self]

    @property
    def bit(self) -> int:
        """Mask bit which corresponds to this level."""
        return 1 << self.ordinal

    @property
    def priority_bits(self) -> int:
        """Mask bits for this level and every level of higher priority."""
        return (self.bit << 1) - 1

    @classmethod
    def from_string(cls, level_str: str) -> "Level":
        """
        Convert string to Level.

        Args:
            level_str: Level name or display token (case-insensitive)

        Returns:
            Level enum value

        Raises:
            ValueError: If level_str is not valid
        """
        key = level_str.strip().upper()
        if key in cls.__members__:
            return cls[key]
        if key in LEVEL_FROM_TOKEN:
            return LEVEL_FROM_TOKEN[key]
        raise ValueError(f"Invalid log level: {level_str}")

    @property
    def color_code(self) -> str:
        """
        Get ANSI color code for this level.

        Returns:
            ANSI escape sequence
        """
        colors = {
            Level.TRACE: "\033[37m",     # White
            Level.DEBUG: "\033[36m",     # Cyan
            Level.INFO: "\033[32m",      # Green
            Level.WARNING: "\033[33m",   # Yellow
            Level.ERROR: "\033[31m",     # Red
            Level.FATAL: "\033[35m",     # Magenta
        }
        return colors.get(self, "\033[0m")

    @property
    def reset_code(self) -> str:
        """ANSI reset code."""
        return "\033[0m"


# Mapping from log level to display tokens
LEVEL_TOKENS: Dict[Level, str] = {
    Level.FATAL: "FATAL",
    Level.ERROR: "ERROR",
    Level.WARNING: "WARN",
    Level.INFO: "INFO",
    Level.DEBUG: "DEBUG",
    Level.TRACE: "TRACE",
}

# Reverse mapping
LEVEL_FROM_TOKEN: Dict[str, Level] = {v: k for k, v in LEVEL_TOKENS.items()}


class LevelMask:
    """
    Set of bits, each of which corresponds to a Level.

    The highest priority level occupies bit 0. Mutators return the mask
    itself so calls can be chained.
    """

    ALL = 0x7FFFFFFF
    NONE = 0x0
    FATAL = Level.FATAL.bit
    ERROR = Level.ERROR.bit
    WARNING = Level.WARNING.bit
    INFO = Level.INFO.bit
    DEBUG = Level.DEBUG.bit
    TRACE = Level.TRACE.bit

    __slots__ = ("_bits",)

    def __init__(self, bits: int = NONE):
        self._bits = int(bits)

    @classmethod
    def from_level(cls, level: Level) -> "LevelMask":
        """
        Create a mask accepting the given level and every level of higher
        priority. Level.ERROR yields bits for both ERROR and FATAL.
        """
        return cls(Level(level).priority_bits)

    @property
    def bits(self) -> int:
        return self._bits

    def clear(self) -> "LevelMask":
        self._bits = self.NONE
        return self

    def clear_bit(self, level: Level) -> "LevelMask":
        return self.clear_bits(Level(level).bit)

    def clear_bits(self, bits: int) -> "LevelMask":
        self._bits &= ~bits
        return self

    def set(self, bits: int) -> "LevelMask":
        self._bits = int(bits)
        return self

    def set_bit(self, level: Level) -> "LevelMask":
        return self.set_bits(Level(level).bit)

    def set_bits(self, bits: int) -> "LevelMask":
        self._bits |= bits
        return self

    def matches(self, level: Level) -> bool:
        """Check whether the bit corresponding to level is set."""
        return (Level(level).bit & self._bits) != 0

    def copy(self) -> "LevelMask":
        return LevelMask(self._bits)

    def __int__(self) -> int:
        return self._bits

    def __eq__(self, other) -> bool:
        if isinstance(other, LevelMask):
            return self._bits == other._bits
        return NotImplemented

    def __repr__(self) -> str:
        """String representation."""
        names = [str(level) for level in Level if self.matches(level)]
        return f"LevelMask(0x{self._bits:X}, levels={names})"


LevelSpec = Union[Level, LevelMask, int]


def to_level_mask(value: LevelSpec) -> LevelMask:
    """
    Coerce a level specification into a new LevelMask.

    Args:
        value: Level threshold, LevelMask (copied), or raw mask bits

    Returns:
        Independent LevelMask instance

    Raises:
        TypeError: If value is none of the accepted kinds
    """
    if isinstance(value, Level):
        return LevelMask.from_level(value)
    if isinstance(value, LevelMask):
        return value.copy()
    if isinstance(value, int) and not isinstance(value, bool):
        return LevelMask(value)
    raise TypeError(f"Cannot build a LevelMask from {value!r}")
