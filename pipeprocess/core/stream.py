"""Standard input handling and the streaming entry points.

Piped-in data is read chunk by chunk from a binary stream (standard input by
default) and decoded as UTF-8. Every chunk is handed to each handler attached
to the stream. The `line` and `whole` entry points only attach a handler that
runs a directive over every chunk; `run` then reads the stream once and feeds
every chunk to all attached handlers:

- line: the directive is called once per line of each chunk
- whole: the directive is called once per chunk

A chunk is whatever a single read returns, so a "whole" directive sees each
chunk as an independent unit rather than the complete stream. Invalid UTF-8
bytes are replaced with U+FFFD rather than dropped.

The process-wide stream `STDIN` is created at import time. Batch runs close it
before touching the filesystem; closing is one-way, and later attempts to use
stream mode raise StreamClosedError.
"""

import codecs
import logging
import sys
from collections.abc import Callable, Iterator
from enum import Enum
from typing import BinaryIO

from pipeprocess.core.exceptions import StreamClosedError
from pipeprocess.core.output import ImmediateOutputter
from pipeprocess.core.protocols import Directive, Outputter
from pipeprocess.core.splitting import ProcessingMode, apply_directive

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

ChunkHandler = Callable[[str], None]


class StreamState(Enum):
    """Lifecycle state of an InputStream."""

    OPEN = "open"
    CLOSED = "closed"


class InputStream:
    """Chunked UTF-8 reader over a binary input stream.

    Attributes:
        chunk_size: Maximum number of bytes requested per read
        encoding: Text encoding used to decode chunks
        state: OPEN until close() is called, then CLOSED

    Example:
        >>> import io
        >>> stream = InputStream(io.BytesIO(b"a\\nb"))
        >>> stream.attach(print)
        >>> stream.pump()
        a
        b
    """

    def __init__(
        self,
        source: BinaryIO | None = None,
        chunk_size: int = CHUNK_SIZE,
        encoding: str = "utf-8",
    ):
        """Initialize the stream.

        Args:
            source: Binary stream to read from. When omitted, the buffer of
                    `sys.stdin` is looked up at read time.
            chunk_size: Maximum number of bytes requested per read
            encoding: Text encoding used to decode chunks
        """
        self._source = source
        self.chunk_size = chunk_size
        self.encoding = encoding
        self.state = StreamState.OPEN
        self._handlers: list[ChunkHandler] = []

    @property
    def closed(self) -> bool:
        return self.state is StreamState.CLOSED

    @property
    def handlers(self) -> tuple[ChunkHandler, ...]:
        return tuple(self._handlers)

    def _ensure_open(self) -> None:
        if self.closed:
            raise StreamClosedError(
                "Input stream is closed; stream mode is unavailable after a batch run",
                state=self.state.value,
            )

    def _binary_source(self) -> BinaryIO | None:
        if self._source is not None:
            return self._source
        if sys.stdin is None:
            return None
        return sys.stdin.buffer

    def attach(self, handler: ChunkHandler) -> None:
        """Attach a handler that receives every decoded chunk.

        Raises:
            StreamClosedError: If the stream has been closed
        """
        self._ensure_open()
        self._handlers.append(handler)

    def chunks(self) -> Iterator[str]:
        """Yield decoded chunks until end of input.

        Bytes that are not valid in the stream encoding are replaced with
        U+FFFD; the rest of the chunk is kept. A read failure is logged and
        ends iteration.

        Raises:
            StreamClosedError: If the stream has been closed
        """
        self._ensure_open()
        source = self._binary_source()
        if source is None:
            logger.debug("No standard input available")
            return

        read = getattr(source, "read1", None) or source.read
        decoder = codecs.getincrementaldecoder(self.encoding)(errors="replace")

        while not self.closed:
            try:
                raw = read(self.chunk_size)
            except OSError as e:
                # A failed read leaves the source position unknown, so reading
                # stops here. Handlers stay attached.
                logger.error("Error reading input stream: %s", e)
                return

            final = not raw
            text = decoder.decode(raw, final=final)
            if text:
                yield text
            if final:
                return

    def pump(self) -> None:
        """Read the stream to the end, dispatching each chunk to the handlers.

        Handlers are called in attachment order. Exceptions raised by a
        handler propagate to the caller.

        Raises:
            StreamClosedError: If the stream has been closed
        """
        logger.debug("Pumping input stream to %d handler(s)", len(self._handlers))
        for chunk in self.chunks():
            for handler in list(self._handlers):
                handler(chunk)

    def close(self) -> None:
        """Close the stream and detach all handlers.

        The underlying binary stream is left open; only this handle stops
        reading from it.
        """
        if not self.closed:
            logger.debug("Closing input stream")
        self.state = StreamState.CLOSED
        self._handlers.clear()


STDIN = InputStream()


def get_stdin() -> InputStream:
    """Return the process-wide standard input stream."""
    return STDIN


def _register(
    mode: ProcessingMode,
    directive: Directive,
    stream: InputStream | None,
    output: Outputter | None,
) -> None:
    stream = stream if stream is not None else STDIN
    output = output if output is not None else ImmediateOutputter()
    stream.attach(lambda chunk: apply_directive(mode, chunk, directive, output))


def line(
    directive: Directive,
    stream: InputStream | None = None,
    output: Outputter | None = None,
) -> None:
    """Register a directive to run over every line of piped-in data.

    Each chunk read from the stream is split on LF/CRLF and the directive is
    called once per resulting line. A chunk ending in a newline yields a
    trailing empty line. Nothing is read until `run` is called.

    Args:
        directive: Function called as directive(line, output)
        stream: Input stream to attach to (defaults to STDIN)
        output: Outputter handed to the directive (defaults to printing)

    Raises:
        StreamClosedError: If the stream has already been closed

    Example:
        >>> line(lambda data, output: output(data.upper()))
        >>> run()
    """
    _register(ProcessingMode.LINE, directive, stream, output)


def whole(
    directive: Directive,
    stream: InputStream | None = None,
    output: Outputter | None = None,
) -> None:
    """Register a directive to run over every chunk of piped-in data.

    Args:
        directive: Function called as directive(chunk, output)
        stream: Input stream to attach to (defaults to STDIN)
        output: Outputter handed to the directive (defaults to printing)

    Raises:
        StreamClosedError: If the stream has already been closed
    """
    _register(ProcessingMode.WHOLE, directive, stream, output)


def run(stream: InputStream | None = None) -> None:
    """Read piped-in data to the end, feeding every registered directive.

    Every directive registered with `line` or `whole` sees every chunk, in
    registration order.

    Args:
        stream: Input stream to read (defaults to STDIN)

    Raises:
        StreamClosedError: If the stream has already been closed
    """
    stream = stream if stream is not None else STDIN
    stream.pump()
