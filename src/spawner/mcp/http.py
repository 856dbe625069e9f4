"""
Streamable HTTP transport.

Stateless: each POST to ``/mcp`` carries one message or batch and gets a
JSON response. Server-initiated streams are not offered, so GET and
DELETE on the endpoint answer 405.
"""

from __future__ import annotations

import contextlib as _contextlib
import json as _json
import logging as _logging
import typing as _typing

import fastapi as _fastapi
import fastapi.middleware.cors as _fastapi_cors
import fastapi.responses as _fastapi_responses

import spawner.constants as constants
import spawner.mcp.protocol as protocol
import spawner.mcp.server as mcp_server

_logger = _logging.getLogger(__name__)

MCP_PATH = "/mcp"
SESSION_HEADER = "mcp-session-id"


def create_app(
    server: mcp_server.McpServer,
    *,
    cors_origins: _typing.Sequence[str] = ("*",),
) -> _fastapi.FastAPI:
    """
    Create the FastAPI application serving ``server``.

    Args:
        server: Dispatcher handling decoded messages.
        cors_origins: Allowed browser origins.
    """

    @_contextlib.asynccontextmanager
    async def lifespan(app: _fastapi.FastAPI) -> _typing.AsyncIterator[None]:
        _logger.info("MCP HTTP transport ready at %s", MCP_PATH)
        yield
        _logger.info("MCP HTTP transport stopping")
        server.close()

    app = _fastapi.FastAPI(
        title="Spawner Skills MCP Server",
        description="Specialist skills served over the Model Context Protocol",
        version=server.version,
        lifespan=lifespan,
    )

    app.add_middleware(
        _fastapi_cors.CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[SESSION_HEADER],
    )

    @app.post(MCP_PATH)
    async def mcp_post(request: _fastapi.Request) -> _fastapi.Response:
        body = await request.body()
        try:
            message = _json.loads(body)
        except ValueError as e:
            _logger.warning("Parse error on %s: %s", MCP_PATH, e)
            return _fastapi_responses.JSONResponse(
                protocol.jsonrpc_error(None, protocol.PARSE_ERROR, f"Parse error: {e}"),
                status_code=400,
            )

        response = await server.handle(message, session_id=request.headers.get(SESSION_HEADER))
        if response is None:
            return _fastapi.Response(status_code=202)
        return _fastapi_responses.JSONResponse(response)

    @app.api_route(MCP_PATH, methods=["GET", "DELETE", "PUT", "PATCH"])
    async def mcp_not_allowed() -> _fastapi.Response:
        return _fastapi_responses.JSONResponse(
            protocol.jsonrpc_error(None, -32000, "Method not allowed."),
            status_code=405,
            headers={"Allow": "POST"},
        )

    @app.get("/health")
    async def health() -> dict[str, _typing.Any]:
        return {
            "status": "ok",
            "server": constants.SERVER_NAME,
            "version": server.version,
            "skills": len(server.context.catalog),
        }

    return app
