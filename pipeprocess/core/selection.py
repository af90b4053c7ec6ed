"""File selection for batch runs.

A directory entry is selected when its name ends with at least one suffix in
the whitelist and with none of the suffixes in the blacklist. Matching is a
plain string suffix test, so a whitelist entry of ".js" also matches
"foo.test.js" unless ".test.js" is blacklisted.

Only regular files one level below the source directory are considered.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from pipeprocess.core.exceptions import SelectionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileTask:
    """One source file and the destination its output is written to.

    Attributes:
        source: Path of the file to read
        destination: Path of the file to write
    """

    source: Path
    destination: Path


def matches_extension(name: str, extensions: Iterable[str]) -> bool:
    """Return True if name ends with any of the given suffixes.

    Example:
        >>> matches_extension("foo.test.js", [".js"])
        True
        >>> matches_extension("foo.txt", [])
        False
    """
    return any(name.endswith(ext) for ext in extensions)


def is_selected(name: str, whitelist: Sequence[str], blacklist: Sequence[str]) -> bool:
    """Return True if name matches the whitelist and not the blacklist."""
    return matches_extension(name, whitelist) and not matches_extension(name, blacklist)


def select_files(
    src_dir: Path,
    out_dir: Path,
    whitelist: Sequence[str],
    blacklist: Sequence[str],
) -> list[FileTask]:
    """List the files of src_dir selected for processing.

    Entries are returned in name order. Subdirectories and other non-regular
    entries are skipped even when their names match the whitelist.

    Args:
        src_dir: Directory to list (not recursed into)
        out_dir: Directory destinations are placed in
        whitelist: Suffixes a name must end with (at least one)
        blacklist: Suffixes that exclude a name

    Returns:
        One FileTask per selected entry, destination named after the source

    Raises:
        SelectionError: If src_dir cannot be listed

    Example:
        >>> tasks = select_files(Path("src"), Path("out"), [".js"], [".test.js"])
        >>> [t.source.name for t in tasks]
        ['x.js']
    """
    src_dir = Path(src_dir)
    out_dir = Path(out_dir)

    try:
        entries = sorted(src_dir.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise SelectionError(
            f"Cannot list source directory: {e}",
            directory=str(src_dir),
            operation="list",
            reason=e.strerror or type(e).__name__,
        ) from e

    tasks: list[FileTask] = []
    for entry in entries:
        if not is_selected(entry.name, whitelist, blacklist):
            continue
        if not entry.is_file():
            logger.debug("Skipping non-regular entry %s", entry)
            continue
        tasks.append(FileTask(source=entry, destination=out_dir / entry.name))

    logger.debug("Selected %d of %d entries in %s", len(tasks), len(entries), src_dir)
    return tasks


def ensure_output_dir(out_dir: Path) -> None:
    """Create out_dir if it does not exist.

    Only the last path component is created; missing parents are an error.

    Raises:
        SelectionError: If the directory cannot be created
    """
    out_dir = Path(out_dir)
    if out_dir.is_dir():
        return

    try:
        out_dir.mkdir()
    except OSError as e:
        raise SelectionError(
            f"Cannot create output directory: {e}",
            directory=str(out_dir),
            operation="create",
            reason=e.strerror or type(e).__name__,
        ) from e
