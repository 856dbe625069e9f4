"""
Stdio transport (newline-delimited JSON).

One message per line on stdin, one response per line on stdout. Nothing
else may be written to stdout; logs go to stderr.
"""

from __future__ import annotations

import asyncio as _asyncio
import logging as _logging
import sys as _sys
import typing as _typing

if _typing.TYPE_CHECKING:
    import spawner.mcp.server as _server

_logger = _logging.getLogger(__name__)


async def serve_stdio(
    server: _server.McpServer,
    stdin: _typing.TextIO | None = None,
    stdout: _typing.TextIO | None = None,
) -> int:
    """
    Serve until stdin closes.

    Args:
        server: Dispatcher handling messages.
        stdin: Input stream (default: sys.stdin).
        stdout: Output stream (default: sys.stdout).

    Returns:
        Number of lines handled.
    """
    reader = stdin or _sys.stdin
    writer = stdout or _sys.stdout
    loop = _asyncio.get_running_loop()
    handled = 0

    _logger.info("MCP stdio transport ready")
    while True:
        line = await loop.run_in_executor(None, reader.readline)
        if not line:
            break
        line = line.strip()
        if not line:
            continue

        handled += 1
        response = await server.handle_text(line)
        if response is not None:
            writer.write(response + "\n")
            writer.flush()

    _logger.info("stdin closed after %d messages", handled)
    return handled


def run_stdio(server: _server.McpServer) -> None:
    """Blocking entry point for the stdio transport."""
    try:
        _asyncio.run(serve_stdio(server))
    except KeyboardInterrupt:
        _logger.info("Interrupted")
    finally:
        server.close()
