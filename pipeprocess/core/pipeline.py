"""Batch orchestration for the select → load → process → write flow.

This module implements the multi-file path of the library:

1. Close the standard input stream (stream mode is over once a batch starts)
2. Select the matching files of the source directory
3. Create the output directory if needed
4. For each selected file, in order:
   a. Load the file as UTF-8 text
   b. Call the processor once with the file's line/whole functions
   c. Write the buffered output to the destination file

The batch stops at the first failure. Files written before the failure stay
written and the remaining files are skipped. The failure is logged and
recorded in the returned BatchReport instead of being raised.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from pipeprocess.core.exceptions import SourceReadError
from pipeprocess.core.output import BufferingOutputter
from pipeprocess.core.protocols import Directive, Processor
from pipeprocess.core.selection import FileTask, ensure_output_dir, select_files
from pipeprocess.core.splitting import ProcessingMode, apply_directive
from pipeprocess.core.stream import InputStream, get_stdin

logger = logging.getLogger(__name__)


class ProcessingContext:
    """Per-file processing state handed to a processor.

    Holds one file's text and the output buffer shared by every directive
    run against it.

    Attributes:
        text: The file's decoded contents
        output: Buffering outputter collecting every emission for the file
    """

    def __init__(self, text: str, output: BufferingOutputter | None = None):
        self.text = text
        self.output = output if output is not None else BufferingOutputter()

    def apply(self, mode: ProcessingMode, directive: Directive) -> None:
        """Run a directive over the file's text in the given mode."""
        apply_directive(mode, self.text, directive, self.output)

    def line(self, directive: Directive) -> None:
        """Run a directive once per line of the file."""
        self.apply(ProcessingMode.LINE, directive)

    def whole(self, directive: Directive) -> None:
        """Run a directive once with the file's full text."""
        self.apply(ProcessingMode.WHOLE, directive)


@dataclass
class BatchReport:
    """Outcome of a batch run.

    Attributes:
        tasks: Files selected for processing, in processing order
        written: Destination paths written, in order
        error: The exception that aborted the batch, or None on success
    """

    tasks: list[FileTask] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def skipped(self) -> list[FileTask]:
        """Selected tasks that were not written."""
        done = set(self.written)
        return [task for task in self.tasks if task.destination not in done]


def load_source(path: Path) -> str:
    """Read a source file as UTF-8 text.

    Raises:
        SourceReadError: If the file cannot be read or is not valid UTF-8
    """
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
    except OSError as e:
        raise SourceReadError(
            f"Cannot read source file: {e}",
            file_path=str(path),
            reason=e.strerror or type(e).__name__,
        ) from e
    except UnicodeDecodeError as e:
        raise SourceReadError(
            f"Source file is not valid UTF-8: {e}",
            file_path=str(path),
            reason="invalid UTF-8",
        ) from e


def process_file(task: FileTask, processor: Processor) -> None:
    """Load, process and save one file.

    Args:
        task: Source and destination of the file
        processor: Called once as processor(line, whole)

    Raises:
        SourceReadError: If the source cannot be loaded
        DestinationWriteError: If the destination cannot be written
        Exception: Anything raised by the processor or its directives,
                   unwrapped
    """
    context = ProcessingContext(load_source(task.source))
    processor(context.line, context.whole)
    context.output.flush_to(task.destination)


def files(
    src_dir: str | Path,
    out_dir: str | Path,
    ext_whitelist: Sequence[str],
    ext_blacklist: Sequence[str],
    processor: Processor,
    stream: InputStream | None = None,
) -> BatchReport:
    """Process every matching file of a directory into an output directory.

    A file is processed when its name ends with a whitelist suffix and with
    no blacklist suffix. Each output file has the same name as its source.

    The input stream (STDIN by default) is closed first, so stream mode
    cannot be used afterwards in the same process.

    Args:
        src_dir: Directory containing the files to process
        out_dir: Directory to write processed files to
        ext_whitelist: Suffixes selecting files for processing
        ext_blacklist: Suffixes excluding files from processing
        processor: Called once per file as processor(line, whole)
        stream: Input stream to close (defaults to STDIN)

    Returns:
        BatchReport describing what was selected, what was written, and the
        error that stopped the batch, if any

    Example:
        >>> def processor(line, whole):
        ...     line(lambda data, output: output(data.upper()))
        >>> report = files("src", "out", [".js"], [".test.js"], processor)
        >>> report.succeeded
        True
    """
    (stream if stream is not None else get_stdin()).close()

    src_dir = Path(src_dir)
    out_dir = Path(out_dir)
    report = BatchReport()

    try:
        report.tasks = select_files(src_dir, out_dir, ext_whitelist, ext_blacklist)
        ensure_output_dir(out_dir)

        for task in report.tasks:
            logger.debug("Processing %s -> %s", task.source, task.destination)
            process_file(task, processor)
            report.written.append(task.destination)

    except Exception as e:
        logger.error("Batch aborted: %s", e, exc_info=True)
        report.error = e
    else:
        logger.info("Processed %d file(s) from %s", len(report.written), src_dir)

    return report
