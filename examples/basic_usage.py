#!/usr/bin/env python3
"""Basic usage example"""

from sinklog import Level, LoggerBuilder, PrefixEntity
from sinklog.writers import StdErrWriter


def main():
    # Errors go to stderr with the calling location in the prefix
    err = StdErrWriter(Level.ERROR)
    err.clear_prefix_entities()
    err.set_prefix_delimiter("[]")
    err.add_prefix_entity(PrefixEntity.DATE_AND_TIME)
    err.add_prefix_entity(PrefixEntity.SOURCE_PACKAGE)
    err.add_prefix_entity(PrefixEntity.SOURCE_METHOD)
    err.add_prefix_entity(PrefixEntity.SOURCE_LINE_NUMBER)

    # Create logger with builder pattern
    logger = (LoggerBuilder()
        .with_name("example")
        .with_level(Level.TRACE)
        .with_console(Level.INFO, colored=True)
        .with_file("logs/example.log", level=Level.DEBUG)
        .add_writer(err)
        .build())

    with logger:
        logger.trace("This is trace")
        logger.debug("This is debug")
        logger.info("Application started")
        logger.warning("Disk usage at {}%", 91, category="disk")
        logger.error("This is error")
        logger.write_buffer(Level.INFO, b"All the world is a stage", caption="Payload:")

        try:
            {}["missing"]
        except KeyError as e:
            logger.catching(e)


if __name__ == "__main__":
    main()
