"""Line and whole-text processing of piped-in data and directory batches.

Data can either be piped in or loaded from files:

- line(directive): register directive(line, output) for every line of stdin
- whole(directive): register directive(chunk, output) for every chunk of stdin
- run(): read stdin to the end, feeding every registered directive
- files(src_dir, out_dir, whitelist, blacklist, processor): run a processor
  over every matching file of a directory and save the results

Example:
    >>> import pipeprocess
    >>> pipeprocess.line(lambda data, output: output(data.upper()))
    >>> pipeprocess.run()
"""

from pipeprocess.core.exceptions import (
    DestinationWriteError,
    PipeProcessError,
    SelectionError,
    SourceReadError,
    StreamClosedError,
)
from pipeprocess.core.output import BufferingOutputter, ImmediateOutputter
from pipeprocess.core.pipeline import (
    BatchReport,
    ProcessingContext,
    files,
    load_source,
    process_file,
)
from pipeprocess.core.selection import (
    FileTask,
    is_selected,
    matches_extension,
    select_files,
)
from pipeprocess.core.splitting import (
    NEWLINE_PATTERN,
    ProcessingMode,
    apply_directive,
    split_lines,
)
from pipeprocess.core.stream import (
    STDIN,
    InputStream,
    StreamState,
    get_stdin,
    line,
    run,
    whole,
)

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "line",
    "whole",
    "run",
    "files",
    # Processing
    "BatchReport",
    "FileTask",
    "ProcessingContext",
    "ProcessingMode",
    "NEWLINE_PATTERN",
    "apply_directive",
    "split_lines",
    "load_source",
    "process_file",
    "select_files",
    "is_selected",
    "matches_extension",
    # Streams and outputters
    "STDIN",
    "get_stdin",
    "InputStream",
    "StreamState",
    "BufferingOutputter",
    "ImmediateOutputter",
    # Exceptions
    "PipeProcessError",
    "StreamClosedError",
    "SelectionError",
    "SourceReadError",
    "DestinationWriteError",
]
