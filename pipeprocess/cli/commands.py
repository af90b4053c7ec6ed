"""CLI command implementations.

This module implements the CLI commands for the pipeprocess tool:
- line: Apply directives to every line of standard input
- whole: Apply directives to every chunk of standard input
- files: Apply directives to every matching file of a directory

Each command is implemented as a function that returns an exit code,
enabling both direct invocation and subprocess-based testing.
"""

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

from cyclopts import Parameter

from pipeprocess.cli.config import ConfigError, load_config, merge_config, validate_config
from pipeprocess.cli.exit_codes import ExitCode, exit_code_for
from pipeprocess.cli.output import configure_logging, handle_error, print_batch_summary
from pipeprocess.cli.registry import RegisteredDirective, chain_directives, get_directive
from pipeprocess.core.pipeline import files as run_batch
from pipeprocess.core.protocols import ModeFunction
from pipeprocess.core.splitting import ProcessingMode
from pipeprocess.core.stream import line as stream_line
from pipeprocess.core.stream import run as run_stream
from pipeprocess.core.stream import whole as stream_whole

LogLevel = Annotated[str, Parameter(help="Log level (debug, info, warning, error)")]
LogFile = Annotated[Path | None, Parameter(help="Log file path")]
Verbose = Annotated[bool, Parameter(help="Show detailed error information")]


def resolve_directives(names: Sequence[str]) -> list[RegisteredDirective]:
    """Look up directive names in the registry.

    Raises:
        KeyError: If any name is not registered
        ValueError: If no names are given
    """
    if not names:
        raise ValueError("At least one directive is required")
    return [get_directive(name) for name in names]


def resolve_mode(mode: str | None, directives: Sequence[RegisteredDirective]) -> ProcessingMode:
    """Pick the processing mode for a batch run.

    An explicit mode wins. Otherwise all directives must be registered for
    the same mode, and that mode is used.

    Raises:
        ValueError: If mode is unknown, or omitted while the directives
                   disagree on their mode
    """
    if mode is not None:
        try:
            return ProcessingMode(mode)
        except ValueError:
            valid = ", ".join(m.value for m in ProcessingMode)
            raise ValueError(f"Unknown mode '{mode}'. Available: {valid}") from None

    modes = {d.mode for d in directives}
    if len(modes) != 1:
        raise ValueError(
            "Directives mix line and whole modes; pass --mode to choose one"
        )
    return modes.pop()


def _run_stream(
    mode: ProcessingMode,
    names: Sequence[str],
    verbose: bool,
    log_level: str,
    log_file: Path | None,
) -> int:
    try:
        configure_logging(log_level, log_file)
        directive = chain_directives([d.function for d in resolve_directives(names)])
    except (KeyError, ValueError) as e:
        print(f"Error: {e.args[0] if isinstance(e, KeyError) else e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    try:
        if mode is ProcessingMode.LINE:
            stream_line(directive)
        else:
            stream_whole(directive)
        run_stream()
    except Exception as e:
        handle_error(e, verbose=verbose)
        return exit_code_for(e)

    return ExitCode.SUCCESS


def line(
    *directives: Annotated[str, Parameter(help="Directive to apply, in order")],
    verbose: Verbose = False,
    log_level: LogLevel = "warning",
    log_file: LogFile = None,
) -> int:
    """Apply directives to every line of standard input.

    Each line is passed through the directives in order, the output of one
    feeding the next, and the results are printed one per line.

    Args:
        directives: Names of registered directives
        verbose: Show stack traces for errors
        log_level: Logging level (debug, info, warning, error)
        log_file: Path to log file (optional)

    Returns:
        Exit code (0 for success, non-zero for errors)

    Example:
        $ printf 'foo\\nbar' | pipeprocess line strip upper
        FOO
        BAR
    """
    return _run_stream(ProcessingMode.LINE, directives, verbose, log_level, log_file)


def whole(
    *directives: Annotated[str, Parameter(help="Directive to apply, in order")],
    verbose: Verbose = False,
    log_level: LogLevel = "warning",
    log_file: LogFile = None,
) -> int:
    """Apply directives to every chunk of standard input.

    Large inputs may arrive in several chunks; each chunk is processed on
    its own.

    Args:
        directives: Names of registered directives
        verbose: Show stack traces for errors
        log_level: Logging level (debug, info, warning, error)
        log_file: Path to log file (optional)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    return _run_stream(ProcessingMode.WHOLE, directives, verbose, log_level, log_file)


def files(
    src_dir: Annotated[Path | None, Parameter(help="Source directory")] = None,
    out_dir: Annotated[Path | None, Parameter(help="Output directory")] = None,
    include: Annotated[list[str] | None, Parameter(help="Suffix selecting files (repeatable)")] = None,
    exclude: Annotated[list[str] | None, Parameter(help="Suffix excluding files (repeatable)")] = None,
    directive: Annotated[list[str] | None, Parameter(help="Directive to apply (repeatable)")] = None,
    mode: Annotated[str | None, Parameter(help="Processing mode (line, whole)")] = None,
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
    quiet: Annotated[bool, Parameter(help="Suppress the summary")] = False,
    verbose: Verbose = False,
    log_level: LogLevel = "warning",
    log_file: LogFile = None,
) -> int:
    """Process every matching file of a directory.

    Files whose names end with an --include suffix and with no --exclude
    suffix are run through the directives and written under the same name
    to the output directory. Processing stops at the first failing file;
    files written before it are kept.

    Args:
        src_dir: Directory containing the files to process
        out_dir: Directory to write processed files to
        include: Suffixes selecting files
        exclude: Suffixes excluding files
        directive: Names of registered directives, applied in order
        mode: "line" or "whole" (defaults to the directives' own mode)
        config: Path to configuration file (optional)
        quiet: Suppress the batch summary
        verbose: Show stack traces for errors
        log_level: Logging level (debug, info, warning, error)
        log_file: Path to log file (optional)

    Returns:
        Exit code (0 if every selected file was written, non-zero otherwise)

    Example:
        $ pipeprocess files src out --include .js --exclude .test.js --directive upper
    """
    try:
        configure_logging(log_level, log_file)

        cfg: dict[str, Any] = {}
        if config:
            cfg = load_config(config)

        cfg = merge_config(
            cfg,
            src_dir=src_dir,
            out_dir=out_dir,
            include=include,
            exclude=exclude,
            directives=directive,
            mode=mode,
        )

        errors = validate_config(cfg, required=("src_dir", "out_dir", "include", "directives"))
        if errors:
            for error in errors:
                print(f"Error: {error}", file=sys.stderr)
            return ExitCode.CONFIG_ERROR

        registered = resolve_directives(cfg["directives"])
        processing_mode = resolve_mode(cfg.get("mode"), registered)
        chained = chain_directives([d.function for d in registered])

    except ConfigError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.CONFIG_ERROR
    except (KeyError, ValueError) as e:
        print(f"Error: {e.args[0] if isinstance(e, KeyError) else e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    def processor(line_func: ModeFunction, whole_func: ModeFunction) -> None:
        if processing_mode is ProcessingMode.LINE:
            line_func(chained)
        else:
            whole_func(chained)

    report = run_batch(
        Path(cfg["src_dir"]),
        Path(cfg["out_dir"]),
        cfg["include"],
        cfg.get("exclude", []),
        processor,
    )

    if not quiet:
        print_batch_summary(report)

    if report.error is not None:
        if verbose:
            handle_error(report.error, verbose=True)
        return exit_code_for(report.error)

    return ExitCode.SUCCESS
