"""
Log entry data structure

Context handed by a Logger to each of its writers for one accepted entry.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any
import threading

from sinklog.core.log_level import Level


@dataclass
class LogEntry:
    """
    Log entry data structure.

    The message itself travels separately; the entry carries everything
    a writer needs to compose the prefix of the line.
    """

    level: Level
    logger_name: str = ""
    category: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    thread_name: str = field(default_factory=lambda: threading.current_thread().name)

    def __post_init__(self):
        """Validate log entry after initialization."""
        if not isinstance(self.level, Level):
            raise TypeError("level must be Level enum")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert log entry to dictionary.

        Returns:
            Dictionary representation
        """
        return {
            "level": self.level.name,
            "logger_name": self.logger_name,
            "category": self.category,
            "timestamp": self.timestamp.isoformat(),
            "thread_name": self.thread_name,
        }

