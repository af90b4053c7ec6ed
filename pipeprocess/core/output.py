"""Outputters handed to directives.

This module provides:
- ImmediateOutputter: Prints every emission straight to the console (stdin path)
- BufferingOutputter: Collects emissions into an OutputBuffer (file path)
"""

import sys
from pathlib import Path
from typing import TextIO

from pipeprocess.core.exceptions import DestinationWriteError


class ImmediateOutputter:
    """Outputter that writes each emission to a text stream as one line.

    The stream defaults to whatever `sys.stdout` is at call time, so output
    follows redirection done after construction.

    Example:
        >>> output = ImmediateOutputter()
        >>> output("hello")
        hello
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def __call__(self, data: str) -> None:
        print(data, file=self.stream if self.stream is not None else sys.stdout)


class BufferingOutputter:
    """Outputter that accumulates emissions for one file.

    Emissions are kept in order and joined with LF separators when the
    buffer is flushed, regardless of the line endings of the source.

    Attributes:
        buffer: Emitted strings in emission order
    """

    separator = "\n"

    def __init__(self) -> None:
        self.buffer: list[str] = []

    def __call__(self, data: str) -> None:
        self.buffer.append(data)

    def getvalue(self) -> str:
        """Return the buffered emissions joined with LF separators."""
        return self.separator.join(self.buffer)

    def flush_to(self, path: Path) -> None:
        """Write the joined buffer as the complete contents of a file.

        The text is written in a single write call, encoded as UTF-8, without
        newline translation. An existing file is overwritten.

        Args:
            path: Destination file path

        Raises:
            DestinationWriteError: If the file cannot be opened or written
        """
        content = self.getvalue()
        try:
            with open(path, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
        except OSError as e:
            raise DestinationWriteError(
                f"Cannot write output file: {e}",
                output_path=str(path),
                reason=e.strerror or type(e).__name__,
            ) from e
