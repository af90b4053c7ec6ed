"""Directive registry for the command-line interface.

Directives are registered by name together with the processing mode they are
written for, so the CLI can look them up from command arguments and
configuration files.

The registry supports:
- Registration of directive functions under a name and mode
- Retrieval of registered directives by name
- Listing available directives by name
- Chaining several directives into one
"""

from collections.abc import Sequence
from dataclasses import dataclass

from pipeprocess import directives
from pipeprocess.core.protocols import Directive, Outputter
from pipeprocess.core.splitting import ProcessingMode


@dataclass(frozen=True)
class RegisteredDirective:
    """A directive known to the CLI.

    Attributes:
        name: Name used on the command line and in config files
        function: The directive itself
        mode: Mode the directive is written for
    """

    name: str
    function: Directive
    mode: ProcessingMode


DIRECTIVES: dict[str, RegisteredDirective] = {}


def register_directive(
    name: str,
    function: Directive,
    mode: ProcessingMode = ProcessingMode.LINE,
) -> None:
    """Register a directive implementation.

    Registering an existing name replaces the previous directive.

    Args:
        name: Name to register the directive under (e.g., "upper")
        function: Directive called as function(data, output)
        mode: Mode the directive is written for

    Example:
        >>> from pipeprocess.cli.registry import register_directive
        >>>
        >>> def shout(data, output):
        ...     output(data.upper() + "!")
        >>>
        >>> register_directive("shout", shout)
    """
    DIRECTIVES[name] = RegisteredDirective(name=name, function=function, mode=mode)


def get_directive(name: str) -> RegisteredDirective:
    """Get a registered directive by name.

    Raises:
        KeyError: If the name is not registered, with message listing
                 available directives
    """
    if name not in DIRECTIVES:
        available = ", ".join(list_directives()) or "none"
        raise KeyError(f"Unknown directive '{name}'. Available: {available}")
    return DIRECTIVES[name]


def list_directives() -> dict[str, RegisteredDirective]:
    """Return registered directives sorted by name."""
    return dict(sorted(DIRECTIVES.items()))


def chain_directives(functions: Sequence[Directive]) -> Directive:
    """Combine directives so that each one's output feeds the next.

    Every string emitted by the first directive is passed to the second, and
    so on; strings emitted by the last directive go to the real outputter.
    A single directive is returned unchanged.

    Raises:
        ValueError: If no directives are given
    """
    if not functions:
        raise ValueError("At least one directive is required")
    if len(functions) == 1:
        return functions[0]

    def chained(data: str, output: Outputter) -> None:
        def feed(index: int, value: str) -> None:
            if index == len(functions):
                output(value)
                return
            functions[index](value, lambda emitted: feed(index + 1, emitted))

        feed(0, data)

    return chained


def register_builtin_directives() -> None:
    """Register the directives shipped in pipeprocess.directives."""
    for name, function in (
        ("identity", directives.identity),
        ("upper", directives.upper),
        ("lower", directives.lower),
        ("strip", directives.strip),
        ("title", directives.title),
        ("reverse", directives.reverse),
    ):
        register_directive(name, function, ProcessingMode.LINE)

    for name, function in (
        ("sort-lines", directives.sort_lines),
        ("dedent", directives.dedent),
        ("squeeze-blank", directives.squeeze_blank),
    ):
        register_directive(name, function, ProcessingMode.WHOLE)


register_builtin_directives()
