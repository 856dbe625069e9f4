"""
Process-wide logging configuration.

Library modules only create loggers (``_logging.getLogger(__name__)``);
entry points call :func:`configure_logging` once to attach a handler.
"""

import logging as _logging
import sys as _sys
import typing as _typing

import rich.console as _rich_console
import rich.logging as _rich_logging

_CONFIGURED_MARKER = "_spawner_handler"


def configure_logging(
    level: str | int = "INFO",
    *,
    rich: bool = True,
    stream: _typing.TextIO | None = None,
) -> _logging.Handler:
    """
    Attach a single handler to the root logger.

    Logs go to stderr so they never mix with protocol traffic on stdout
    (the stdio transport owns stdout). Calling this again replaces the
    handler installed by the previous call.

    Args:
        level: Log level name or number.
        rich: Use rich formatting (colour, aligned columns).
        stream: Output stream (default: stderr).

    Returns:
        The installed handler.
    """
    target = stream if stream is not None else _sys.stderr
    root = _logging.getLogger()

    for existing in list(root.handlers):
        if getattr(existing, _CONFIGURED_MARKER, False):
            root.removeHandler(existing)

    handler: _logging.Handler
    if rich:
        console = _rich_console.Console(file=target, stderr=target is _sys.stderr)
        handler = _rich_logging.RichHandler(
            console=console,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(_logging.Formatter("%(message)s", datefmt="[%X]"))
    else:
        handler = _logging.StreamHandler(target)
        handler.setFormatter(
            _logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )

    setattr(handler, _CONFIGURED_MARKER, True)
    root.addHandler(handler)
    root.setLevel(level if isinstance(level, int) else level.upper())
    return handler
