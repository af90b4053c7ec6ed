"""Tests for batch orchestration.

This module tests the select → load → process → write flow, including the
abort-on-first-error policy, overwrite semantics, and the per-file
processing context.
"""

import logging
from pathlib import Path

import pytest

from pipeprocess.core.exceptions import (
    DestinationWriteError,
    SelectionError,
    SourceReadError,
    StreamClosedError,
)
from pipeprocess.core.output import BufferingOutputter
from pipeprocess.core.pipeline import (
    BatchReport,
    ProcessingContext,
    files,
    load_source,
    process_file,
)
from pipeprocess.core.selection import FileTask
from pipeprocess.core.stream import line


def upper_lines(line_func, whole_func):
    line_func(lambda data, output: output(data.upper()))


class TestProcessingContext:
    """Test per-file line/whole functions sharing one buffer."""

    def test_line_and_whole_share_buffer(self) -> None:
        context = ProcessingContext("a\nb")
        context.line(lambda data, out: out(data))
        context.whole(lambda data, out: out(data.replace("\n", "+")))

        assert context.output.buffer == ["a", "b", "a+b"]

    def test_repeated_calls_accumulate(self) -> None:
        context = ProcessingContext("x")
        context.line(lambda data, out: out(data))
        context.line(lambda data, out: out(data * 2))
        assert context.output.getvalue() == "x\nxx"


class TestBufferingOutputter:
    """Test joining and flushing of buffered output."""

    def test_joined_with_lf(self) -> None:
        output = BufferingOutputter()
        output("a")
        output("b\r")
        assert output.getvalue() == "a\nb\r"

    def test_empty_buffer_writes_empty_file(self, tmp_path: Path) -> None:
        target = tmp_path / "empty.txt"
        BufferingOutputter().flush_to(target)
        assert target.read_bytes() == b""

    def test_unwritable_destination(self, tmp_path: Path) -> None:
        target = tmp_path / "missing" / "out.txt"
        output = BufferingOutputter()
        output("x")
        with pytest.raises(DestinationWriteError) as exc_info:
            output.flush_to(target)
        assert exc_info.value.context["output_path"] == str(target)


class TestLoadSource:
    """Test UTF-8 source loading."""

    def test_keeps_crlf(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"a\r\nb")
        assert load_source(path) == "a\r\nb"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SourceReadError) as exc_info:
            load_source(tmp_path / "missing.txt")
        assert exc_info.value.context["file_path"] == str(tmp_path / "missing.txt")

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_bytes(b"\xff\xfe\x00")
        with pytest.raises(SourceReadError) as exc_info:
            load_source(path)
        assert exc_info.value.context["reason"] == "invalid UTF-8"


class TestProcessFile:
    """Test single-file processing."""

    def test_processor_called_once(self, tmp_path: Path) -> None:
        source = tmp_path / "in.txt"
        source.write_text("a\nb")
        calls = []

        def processor(line_func, whole_func):
            calls.append((line_func, whole_func))

        process_file(FileTask(source, tmp_path / "out.txt"), processor)

        assert len(calls) == 1
        assert (tmp_path / "out.txt").read_text() == ""

    def test_crlf_source_written_with_lf(self, tmp_path: Path) -> None:
        source = tmp_path / "in.txt"
        source.write_bytes(b"one\r\ntwo\r\n")

        process_file(FileTask(source, tmp_path / "out.txt"), upper_lines)

        assert (tmp_path / "out.txt").read_bytes() == b"ONE\nTWO\n"


class TestFiles:
    """Test the batch entry point."""

    def test_uppercase_end_to_end(self, make_tree, tmp_path: Path) -> None:
        src = make_tree({"in.js": "foo\nbar"})
        out = tmp_path / "out"

        report = files(src, out, [".js"], [], upper_lines)

        assert report.succeeded
        assert (out / "in.js").read_text(encoding="utf-8") == "FOO\nBAR"
        assert report.written == [out / "in.js"]

    def test_selection_rules_applied(self, make_tree, tmp_path: Path) -> None:
        src = make_tree({"x.js": "x", "x.test.js": "t", "y.txt": "y"})
        out = tmp_path / "out"

        files(src, out, [".js"], [".test.js"], upper_lines)

        assert sorted(p.name for p in out.iterdir()) == ["x.js"]

    def test_idempotent(self, make_tree, tmp_path: Path) -> None:
        src = make_tree({"a.txt": "one\ntwo\n", "b.txt": "three"})
        out = tmp_path / "out"

        files(src, out, [".txt"], [], upper_lines)
        first = {p.name: p.read_bytes() for p in out.iterdir()}
        files(src, out, [".txt"], [], upper_lines)
        second = {p.name: p.read_bytes() for p in out.iterdir()}

        assert first == second
        assert first["a.txt"] == b"ONE\nTWO\n"

    def test_existing_destination_overwritten(self, make_tree, tmp_path: Path) -> None:
        src = make_tree({"a.txt": "new"})
        out = tmp_path / "out"
        out.mkdir()
        (out / "a.txt").write_text("old content that is longer")

        files(src, out, [".txt"], [], upper_lines)

        assert (out / "a.txt").read_text() == "NEW"

    def test_abort_on_first_read_error(self, make_tree, tmp_path: Path, caplog) -> None:
        """The first file is persisted, the third is never processed."""
        src = make_tree({"a.txt": "first", "b.txt": b"\xff\xfe\x00", "c.txt": "third"})
        out = tmp_path / "out"
        seen: list[str] = []

        def processor(line_func, whole_func):
            whole_func(lambda data, output: (seen.append(data), output(data)))

        with caplog.at_level(logging.ERROR, logger="pipeprocess"):
            report = files(src, out, [".txt"], [], processor)

        assert (out / "a.txt").read_text() == "first"
        assert not (out / "b.txt").exists()
        assert not (out / "c.txt").exists()
        assert seen == ["first"]
        assert isinstance(report.error, SourceReadError)
        assert [t.source.name for t in report.skipped] == ["b.txt", "c.txt"]
        assert "Batch aborted" in caplog.text

    def test_directive_error_aborts_batch(self, make_tree, tmp_path: Path) -> None:
        src = make_tree({"a.txt": "ok", "b.txt": "boom", "c.txt": "ok"})
        out = tmp_path / "out"

        def processor(line_func, whole_func):
            def directive(data, output):
                if data == "boom":
                    raise RuntimeError("directive failed")
                output(data)

            line_func(directive)

        report = files(src, out, [".txt"], [], processor)

        assert isinstance(report.error, RuntimeError)
        assert sorted(p.name for p in out.iterdir()) == ["a.txt"]

    def test_missing_source_directory(self, tmp_path: Path, caplog) -> None:
        with caplog.at_level(logging.ERROR, logger="pipeprocess"):
            report = files(tmp_path / "missing", tmp_path / "out", [".txt"], [], upper_lines)

        assert isinstance(report.error, SelectionError)
        assert report.tasks == []
        assert not (tmp_path / "out").exists()
        assert "Cannot list source directory" in caplog.text

    def test_no_matches_still_creates_output_dir(self, make_tree, tmp_path: Path) -> None:
        src = make_tree({"a.md": ""})
        out = tmp_path / "out"

        report = files(src, out, [".txt"], [], upper_lines)

        assert report.succeeded
        assert out.is_dir()
        assert list(out.iterdir()) == []

    def test_closes_given_stream(self, make_tree, make_stream, tmp_path: Path) -> None:
        stream = make_stream("data")
        files(make_tree({}), tmp_path / "out", [".txt"], [], upper_lines, stream=stream)
        assert stream.closed

    def test_stream_mode_unavailable_afterwards(self, make_tree, isolated_stdin, tmp_path: Path) -> None:
        files(make_tree({}), tmp_path / "out", [".txt"], [], upper_lines)

        assert isolated_stdin.closed
        with pytest.raises(StreamClosedError):
            line(lambda data, output: output(data))

    def test_processor_may_do_nothing(self, make_tree, tmp_path: Path) -> None:
        src = make_tree({"a.txt": "content"})
        out = tmp_path / "out"

        files(src, out, [".txt"], [], lambda line_func, whole_func: None)

        assert (out / "a.txt").read_bytes() == b""


class TestBatchReport:
    """Test the batch report helpers."""

    def test_empty_report_succeeds(self) -> None:
        report = BatchReport()
        assert report.succeeded
        assert report.skipped == []

    def test_skipped_excludes_written(self, tmp_path: Path) -> None:
        first = FileTask(tmp_path / "a", tmp_path / "out" / "a")
        second = FileTask(tmp_path / "b", tmp_path / "out" / "b")
        report = BatchReport(tasks=[first, second], written=[first.destination])
        assert report.skipped == [second]
