"""Tests for writer lifecycle, gating and backends"""

import io
import re
import threading

import pytest

from sinklog import Level, LevelMask, Logger, PrefixEntity, WriterOpenError, WriterStateError
from sinklog.writers import ConsoleWriter, FileWriter, StdErrWriter, StdOutWriter, Writer


class SlowStreamWriter(Writer):
    """Writer persisting one character at a time to expose interleaving."""

    def __init__(self, level=Level.TRACE):
        super().__init__(level)
        self.buffer = []

    def _persist_line(self, text, level):
        for ch in text + "\n":
            self.buffer.append(ch)


class TestWriterLifecycle:
    """Test holder-counted open/close."""

    def test_open_acquires_backend_once(self, make_writer):
        writer = make_writer()
        first, second = Logger("first"), Logger("second")

        writer.open(first)
        writer.open(second)

        assert writer.backend_opens == 1
        assert writer.holder_count == 2
        assert writer.is_open

    def test_shared_writer_released_after_last_close(self, make_writer):
        writer = make_writer()
        first = Logger("first").add_writer(writer)
        second = Logger("second").add_writer(writer)

        first.close()
        assert writer.is_open
        assert writer.backend_closes == 0

        second.close()
        assert not writer.is_open
        assert writer.backend_closes == 1

    def test_double_open_rejected(self, make_writer):
        writer = make_writer()
        logger = Logger("dup")
        writer.open(logger)

        with pytest.raises(WriterStateError):
            writer.open(logger)
        assert writer.holder_count == 1

    def test_close_without_open_rejected(self, make_writer):
        writer = make_writer()
        with pytest.raises(WriterStateError):
            writer.close(Logger("stranger"))

    def test_reopen_after_close(self, make_writer):
        writer = make_writer()
        logger = Logger("cycle").add_writer(writer)

        logger.close()
        logger.open()

        assert writer.is_open
        assert writer.backend_opens == 2

    def test_close_emits_closing_line(self, make_writer):
        writer = make_writer(Level.INFO)
        writer.add_prefix_entity(PrefixEntity.LOGGER_NAME)
        logger = Logger("svc").add_writer(writer)

        logger.close()

        assert writer.lines == ["svc Closing log"]

    def test_closing_line_respects_writer_mask(self, make_writer):
        writer = make_writer(Level.ERROR)
        Logger("svc").add_writer(writer).close()
        assert writer.lines == []

    def test_writes_dropped_when_not_open(self, make_writer):
        writer = make_writer()
        writer.write(Logger("loose"), Level.ERROR, None, "dropped")
        assert writer.lines == []

    def test_backend_failure_disables_writer(self, make_writer, capsys):
        writer = make_writer(fail_open=True)
        logger = Logger("broken", Level.TRACE)

        with pytest.raises(WriterOpenError):
            logger.add_writer(writer)

        assert writer.disabled
        assert writer in logger.writers
        assert "Cannot open" in capsys.readouterr().err

        # Logging through a disabled writer is silently dropped
        logger.error("still fine")
        assert writer.lines == []

        logger.close()
        assert not writer.is_open
        assert not writer.disabled

    def test_close_releases_when_closing_line_fails(self, make_writer):
        writer = make_writer(fail_persist=True)
        logger = Logger("svc").add_writer(writer)

        logger.close()

        assert not writer.is_open
        assert writer.backend_closes == 1

    def test_writer_open_error_is_os_error(self, make_writer):
        writer = make_writer(fail_open=True)
        with pytest.raises(OSError):
            writer.open(Logger("broken"))


class TestWriterOutput:
    """Test gating and line composition."""

    def test_own_mask_gates_writes(self, make_writer):
        writer = make_writer(Level.WARNING)
        logger = Logger("gate", Level.TRACE).add_writer(writer)

        logger.info("skipped")
        logger.warning("kept")

        assert writer.lines == [" kept"]

    def test_mask_mutable_in_place(self, make_writer):
        writer = make_writer(LevelMask.NONE)
        logger = Logger("gate", Level.TRACE).add_writer(writer)

        logger.debug("before")
        writer.level_mask.set_bit(Level.DEBUG)
        logger.debug("after")

        assert writer.lines == [" after"]

    def test_prefix_and_message_separated_by_space(self, make_writer):
        writer = make_writer()
        writer.set_prefix_delimiter(":")
        writer.add_prefix_entity(PrefixEntity.LOGGER_NAME)
        writer.add_prefix_entity(PrefixEntity.LEVEL)
        logger = Logger("app", Level.TRACE).add_writer(writer)

        logger.debug("value={}", 7)

        assert writer.lines == ["app:DEBUG value=7"]

    def test_empty_prefix_keeps_separator(self, make_writer):
        writer = make_writer()
        logger = Logger("bare", Level.TRACE).add_writer(writer)

        logger.info("hello")

        assert writer.formatter.specs == ()
        assert writer.lines == [" hello"]

    def test_direct_write_formats_arguments(self, make_writer):
        writer = make_writer()
        logger = Logger("direct")
        writer.open(logger)

        writer.write(logger, Level.INFO, None, "{} + {} = {}", 1, 2, 3)

        assert writer.lines == [" 1 + 2 = 3"]

    def test_bad_format_does_not_raise(self, make_writer):
        writer = make_writer()
        logger = Logger("direct")
        writer.open(logger)

        writer.write(logger, Level.INFO, None, "{} and {}", "only one")

        assert writer.lines[0].startswith(" [FORMAT ERROR:")
        assert "only one" in writer.lines[0]

    def test_write_multiple_shares_prefix(self, make_writer):
        writer = make_writer()
        writer.set_prefix_delimiter("[]")
        writer.add_prefix_entity(PrefixEntity.LEVEL)
        logger = Logger("multi")
        writer.open(logger)

        writer.write_multiple(logger, Level.ERROR, None, ["one", "two", "three"])

        assert writer.lines == ["[ERROR] one", "[ERROR] two", "[ERROR] three"]

    def test_write_multiple_renders_unprintable(self, make_writer):
        class NoStr:
            def __str__(self):
                raise RuntimeError("broken")

        writer = make_writer()
        logger = Logger("multi")
        writer.open(logger)

        writer.write_multiple(logger, Level.ERROR, None, ["fine", NoStr()])

        assert writer.lines[0] == " fine"
        assert writer.lines[1].startswith(" [FORMAT ERROR: RuntimeError('broken')]")

    def test_write_multiple_gated(self, make_writer):
        writer = make_writer(Level.ERROR)
        logger = Logger("multi")
        writer.open(logger)

        writer.write_multiple(logger, Level.INFO, None, ["one", "two"])

        assert writer.lines == []

    def test_concurrent_lines_not_interleaved(self):
        writer = SlowStreamWriter()
        logger = Logger("mt", Level.TRACE).add_writer(writer)
        threads_count, per_thread = 8, 200

        def emit(index):
            for n in range(per_thread):
                logger.info("thread-{}-line-{}-payload", index, n)

        threads = [threading.Thread(target=emit, args=(i,)) for i in range(threads_count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        lines = "".join(writer.buffer).splitlines()
        assert len(lines) == threads_count * per_thread
        pattern = re.compile(r"^ thread-\d+-line-\d+-payload$")
        assert all(pattern.match(line) for line in lines)


class TestConsoleWriter:
    """Test console backends."""

    def test_default_prefix(self):
        stream = io.StringIO()
        writer = ConsoleWriter(Level.INFO, stream=stream)
        logger = Logger("console", Level.TRACE).add_writer(writer)

        logger.info("hello")
        logger.warning("careful")
        logger.debug("hidden")

        assert stream.getvalue().splitlines() == [
            "console:INFO  hello",
            "console:WARN  careful",
        ]

    def test_colored(self):
        stream = io.StringIO()
        writer = ConsoleWriter(Level.ERROR, stream=stream, colored=True)
        Logger("console").add_writer(writer).error("boom")

        assert stream.getvalue() == "\033[31mconsole:ERROR boom\033[0m\n"

    def test_stream_not_closed(self):
        stream = io.StringIO()
        writer = ConsoleWriter(Level.INFO, stream=stream)
        Logger("console").add_writer(writer).close()

        assert not stream.closed
        assert stream.getvalue() == "console:INFO  Closing log\n"

    def test_stdout_and_stderr(self, capsys):
        logger = (Logger("std", Level.TRACE)
            .add_writer(StdOutWriter(Level.INFO))
            .add_writer(StdErrWriter(Level.ERROR)))

        logger.info("to out")
        logger.error("to both")

        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["std:INFO  to out", "std:ERROR to both"]
        assert captured.err.splitlines() == ["std:ERROR to both"]


class TestFileWriter:
    """Test file backend."""

    def test_creates_file_on_open(self, tmp_path):
        path = tmp_path / "logs" / "app.log"
        writer = FileWriter(Level.INFO, path, buffered=False)
        assert not path.exists()

        logger = Logger("file", Level.TRACE).add_writer(writer)
        assert path.exists()

        logger.info("first")
        assert path.read_text(encoding="utf-8") == "file:INFO  first\n"

        logger.close()
        assert path.read_text(encoding="utf-8").splitlines() == [
            "file:INFO  first",
            "file:INFO  Closing log",
        ]

    def test_buffered_flushes_on_close(self, tmp_path):
        path = tmp_path / "buffered.log"
        writer = FileWriter(Level.INFO, path, buffered=True)
        logger = Logger("file", Level.TRACE).add_writer(writer)

        logger.warning("pending")
        writer.flush()
        assert "pending" in path.read_text(encoding="utf-8")

        logger.close()
        assert writer._file is None

    def test_shared_between_loggers(self, tmp_path):
        path = tmp_path / "shared.log"
        writer = FileWriter(Level.INFO, path, buffered=False)
        first = Logger("first", Level.INFO).add_writer(writer)
        second = Logger("second", Level.INFO).add_writer(writer)

        first.close()
        second.info("still open")
        second.close()

        assert path.read_text(encoding="utf-8").splitlines() == [
            "first:INFO  Closing log",
            "second:INFO  still open",
            "second:INFO  Closing log",
        ]

    def test_unopenable_path(self, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        writer = FileWriter(Level.INFO, blocker / "app.log")
        logger = Logger("file", Level.TRACE)

        with pytest.raises(WriterOpenError):
            logger.add_writer(writer)

        assert writer.disabled
        logger.info("dropped")
        logger.close()
        assert "Cannot open" in capsys.readouterr().err
