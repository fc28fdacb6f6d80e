"""
Prefix entity descriptors and caller resolution

A writer composes the prefix of each line from an ordered list of
PrefixSpec objects. SOURCE_* entities need the first call frame outside
of this package, located by find_caller().
"""

from dataclasses import dataclass
from enum import Enum
import os
import sys
from types import FrameType
from typing import Optional


class PrefixEntity(Enum):
    """Contextual datum which may appear in the prefix of a log line."""

    LEVEL = "level"                         # Level of the entry
    LOGGER_NAME = "logger_name"             # Name of the dispatching logger
    CATEGORY = "category"                   # Category of the entry, if any
    DATE_AND_TIME = "date_and_time"         # Time the entry was created
    SOURCE_PACKAGE = "source_package"       # Package of the calling module
    SOURCE_CLASS = "source_class"           # Class of the calling code
    SOURCE_METHOD = "source_method"         # Function of the calling code
    SOURCE_FILE_NAME = "source_file_name"   # Source file of the calling code
    SOURCE_LINE_NUMBER = "source_line_number"

    @property
    def is_source(self) -> bool:
        """True for entities resolved from the calling frame."""
        return self.name.startswith("SOURCE_")


class WidthSpecifier(Enum):
    """How (and if) the rendered width of a prefix entity is constrained."""

    NONE = "none"           # No limit on the width
    FIXED = "fixed"         # Always exactly `width` columns
    MAXIMUM = "maximum"     # Never more than `width` columns
    MINIMUM = "minimum"     # At least `width` columns, padded with spaces


@dataclass(frozen=True)
class PrefixSpec:
    """One prefix entity together with its width policy."""

    entity: PrefixEntity
    width_spec: WidthSpecifier = WidthSpecifier.NONE
    width: int = 0

    def __post_init__(self):
        """Validate the prefix spec after initialization."""
        if not isinstance(self.entity, PrefixEntity):
            raise TypeError("entity must be PrefixEntity enum")
        if not isinstance(self.width_spec, WidthSpecifier):
            raise TypeError("width_spec must be WidthSpecifier enum")
        if self.width < 0:
            raise ValueError("width cannot be negative")

    def apply(self, text: str) -> str:
        """
        Apply the width policy to resolved entity text.

        Args:
            text: Resolved text of the entity

        Returns:
            Text padded and/or truncated according to the policy
        """
        if self.width_spec is WidthSpecifier.FIXED:
            return text[:self.width].ljust(self.width)
        if self.width_spec is WidthSpecifier.MAXIMUM:
            return text[:self.width]
        if self.width_spec is WidthSpecifier.MINIMUM:
            return text.ljust(self.width)
        return text


@dataclass(frozen=True)
class CallerInfo:
    """Location of the client code which posted a log entry."""

    package: str = ""
    class_name: str = ""
    method: str = ""
    file_name: str = ""
    line_number: int = 0


LIBRARY_NAMESPACE = __name__.split(".")[0]


def _is_library_frame(frame: FrameType) -> bool:
    module = frame.f_globals.get("__name__", "")
    return module == LIBRARY_NAMESPACE or module.startswith(LIBRARY_NAMESPACE + ".")


def _class_name(frame: FrameType) -> str:
    code = frame.f_code
    qualname = getattr(code, "co_qualname", None)
    if qualname is not None:
        # "Outer.run.<locals>.Inner.method" -> "Inner", "run.<locals>.helper" -> ""
        parts = qualname.split(".")
        if len(parts) > 1 and parts[-2] != "<locals>":
            return parts[-2]
        return ""

    # Interpreters without co_qualname: fall back on the bound instance
    if "self" in frame.f_locals:
        return type(frame.f_locals["self"]).__name__
    cls = frame.f_locals.get("cls")
    if isinstance(cls, type):
        return cls.__name__
    return ""


def find_caller() -> CallerInfo:
    """
    Locate the innermost call frame outside of this package.

    Returns:
        CallerInfo for that frame, or an empty CallerInfo when every
        frame on the stack belongs to this package
    """
    frame: Optional[FrameType] = sys._getframe(0)
    while frame is not None and _is_library_frame(frame):
        frame = frame.f_back

    if frame is None:
        return CallerInfo()

    code = frame.f_code
    module = frame.f_globals.get("__name__", "")
    return CallerInfo(
        package=module.rpartition(".")[0],
        class_name=_class_name(frame),
        method=code.co_name,
        file_name=os.path.basename(code.co_filename),
        line_number=frame.f_lineno,
    )
