"""Writers module - Log output handlers"""

from sinklog.writers.base_writer import Writer
from sinklog.writers.console_writer import ConsoleWriter, StdOutWriter, StdErrWriter
from sinklog.writers.file_writer import FileWriter

__all__ = ["Writer", "ConsoleWriter", "StdOutWriter", "StdErrWriter", "FileWriter"]
