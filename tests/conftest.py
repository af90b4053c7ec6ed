"""Shared test fixtures and Hypothesis strategies for pipeprocess tests."""

import io
import logging
from collections.abc import Callable
from pathlib import Path

import pytest
from hypothesis import strategies as st
from hypothesis.strategies import composite

import pipeprocess.core.stream as stream_module
from pipeprocess.core.stream import InputStream


@composite
def text_with_newlines(draw: st.DrawFn) -> str:
    """Generate text mixing LF, CRLF, lone CR and plain segments.

    Example:
        >>> from hypothesis import given
        >>> @given(text_with_newlines())
        ... def test_something(text):
        ...     assert isinstance(text, str)
    """
    segments = draw(
        st.lists(
            st.text(
                alphabet=st.characters(
                    whitelist_categories=("Lu", "Ll", "Nd", "Zs"),
                    whitelist_characters=".,;:-_",
                ),
                max_size=12,
            ),
            max_size=10,
        )
    )
    separators = draw(
        st.lists(
            st.sampled_from(["\n", "\r\n", "\r", ""]),
            min_size=len(segments),
            max_size=len(segments),
        )
    )
    return "".join(segment + sep for segment, sep in zip(segments, separators))


@pytest.fixture(autouse=True)
def isolated_stdin(monkeypatch: pytest.MonkeyPatch) -> InputStream:
    """Replace the process-wide stdin stream with an empty one per test.

    Batch runs close the process-wide stream; swapping it keeps tests
    independent of each other and of the real standard input.
    """
    stream = InputStream(io.BytesIO(b""))
    monkeypatch.setattr(stream_module, "STDIN", stream)
    return stream


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo logging configuration done by CLI commands."""
    yield
    logger = logging.getLogger("pipeprocess")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_stream() -> Callable[..., InputStream]:
    """Build an InputStream over in-memory bytes or text."""

    def _make(data: bytes | str, chunk_size: int = 64 * 1024) -> InputStream:
        if isinstance(data, str):
            data = data.encode("utf-8")
        return InputStream(io.BytesIO(data), chunk_size=chunk_size)

    return _make


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, bytes | str]], Path]:
    """Create a source directory populated with the given files.

    Values of type bytes are written verbatim; str values are written as
    UTF-8 without newline translation.
    """

    def _make(contents: dict[str, bytes | str], name: str = "src") -> Path:
        src = tmp_path / name
        src.mkdir()
        for filename, data in contents.items():
            path = src / filename
            if isinstance(data, bytes):
                path.write_bytes(data)
            else:
                path.write_bytes(data.encode("utf-8"))
        return src

    return _make


def collect() -> tuple[list[str], Callable[[str], None]]:
    """Return a list and an outputter appending to it."""
    emitted: list[str] = []
    return emitted, emitted.append
