"""
Log formatters module

Provides the prefix composition engine used by writers.
"""

from sinklog.formatters.base_formatter import BaseFormatter, format_message
from sinklog.formatters.prefix_formatter import PrefixFormatter

__all__ = [
    "BaseFormatter",
    "format_message",
    "PrefixFormatter",
]
