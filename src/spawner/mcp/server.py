"""
MCP request dispatcher.

Transport-independent: the HTTP and stdio transports hand decoded JSON
to :meth:`McpServer.handle` and write back whatever it returns.
"""

from __future__ import annotations

import json as _json
import logging as _logging
import typing as _typing

import spawner.constants as constants
import spawner.mcp.prompts as prompts
import spawner.mcp.protocol as protocol
import spawner.mcp.resources as resources
import spawner.tools.registry as tool_registry

if _typing.TYPE_CHECKING:
    import spawner.config as _config
    import spawner.logging as _spawner_logging
    import spawner.tools.context as _context

_logger = _logging.getLogger(__name__)

Params = dict[str, _typing.Any]

Handler = _typing.Callable[
    [Params, _typing.Any],
    _typing.Awaitable[_typing.Any],
]


def _server_version() -> str:
    import spawner

    return spawner.__version__


class McpServer:
    """
    Stateless MCP server.

    Handles single requests, notifications and batches. Every request is
    answered independently; no session state is kept between calls.
    """

    def __init__(
        self,
        tool_context: _context.ToolContext,
        *,
        registry: tool_registry.ToolRegistry | None = None,
        call_logger: _spawner_logging.ToolCallLogger | None = None,
        version: str | None = None,
    ) -> None:
        """
        Initialize the server.

        Args:
            tool_context: Services backing the tools and prompts.
            registry: Tool registry (built from the context if None).
            call_logger: Optional JSONL tool-call log.
            version: Reported server version (package version if None).
        """
        self._context = tool_context
        if registry is None:
            registry = tool_registry.build_registry(tool_context, call_logger=call_logger)
        self._registry = registry
        self._call_logger = call_logger
        self._version = version or _server_version()
        self._prompts = prompts.PromptRenderer(tool_context)
        self._resources = resources.ResourceProvider(
            self._registry, self._prompts, tool_context.catalog, version=self._version
        )
        self._handlers: dict[str, Handler] = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
            "prompts/list": self._prompts_list,
            "prompts/get": self._prompts_get,
            "resources/list": self._resources_list,
            "resources/read": self._resources_read,
        }

    @classmethod
    def from_settings(cls, settings: _config.Settings, *, transport: str) -> McpServer:
        """Build a server (and its tool-call log, if enabled) from settings."""
        import spawner.logging as spawner_logging
        import spawner.tools.context as context

        call_logger = None
        if settings.logging.tool_calls:
            call_logger = spawner_logging.ToolCallLogger(
                log_dir=settings.logging.dir,
                server_name=constants.SERVER_NAME,
                server_version=_server_version(),
                transport=transport,
            )
        return cls(context.ToolContext.from_settings(settings), call_logger=call_logger)

    @property
    def context(self) -> _context.ToolContext:
        return self._context

    @property
    def registry(self) -> tool_registry.ToolRegistry:
        return self._registry

    @property
    def version(self) -> str:
        return self._version

    def close(self) -> None:
        """Flush and close the tool-call log."""
        if self._call_logger is not None:
            self._call_logger.close()

    # Dispatch

    async def handle(self, message: _typing.Any, *, session_id: str | None = None) -> _typing.Any:
        """
        Handle one decoded JSON-RPC message or batch.

        Returns:
            A response object, a list of responses for a batch, or None when
            nothing should be sent (notifications, all-notification batches).
        """
        if isinstance(message, list):
            if not message:
                return protocol.jsonrpc_error(None, protocol.INVALID_REQUEST, "Empty batch")
            responses = []
            for item in message:
                response = await self._handle_one(item, session_id)
                if response is not None:
                    responses.append(response)
            return responses or None
        return await self._handle_one(message, session_id)

    async def handle_text(self, text: str, *, session_id: str | None = None) -> str | None:
        """Handle raw JSON text; returns the encoded response or None."""
        try:
            message = _json.loads(text)
        except ValueError as e:
            _logger.warning("Parse error: %s", e)
            if self._call_logger is not None:
                self._call_logger.log_error(str(e), context="parse")
            response: _typing.Any = protocol.jsonrpc_error(
                None, protocol.PARSE_ERROR, f"Parse error: {e}"
            )
        else:
            response = await self.handle(message, session_id=session_id)
        if response is None:
            return None
        return _json.dumps(response, ensure_ascii=False)

    async def _handle_one(
        self,
        message: _typing.Any,
        session_id: str | None,
    ) -> dict[str, _typing.Any] | None:
        if not isinstance(message, dict) or not isinstance(message.get("method"), str):
            req_id = message.get("id") if isinstance(message, dict) else None
            return protocol.jsonrpc_error(req_id, protocol.INVALID_REQUEST, "Invalid Request")

        method = message["method"]
        params = message.get("params") or {}
        notification = protocol.is_notification(message)
        req_id = message.get("id")

        if notification:
            _logger.debug("Notification %s", method)
            return None

        _logger.debug("<- %s (id=%s)", method, req_id)
        handler = self._handlers.get(method)
        if handler is None:
            return protocol.jsonrpc_error(
                req_id, protocol.METHOD_NOT_FOUND, f"Method not found: {method}"
            )
        if not isinstance(params, dict):
            return protocol.jsonrpc_error(
                req_id, protocol.INVALID_PARAMS, "params must be an object"
            )

        try:
            result = await handler(params, session_id)
        except protocol.JsonRpcError as e:
            return protocol.jsonrpc_error(req_id, e.code, e.message)
        except Exception as e:
            _logger.exception("Handler for %s failed", method)
            if self._call_logger is not None:
                self._call_logger.log_error(str(e), context=method)
            return protocol.jsonrpc_error(req_id, protocol.INTERNAL_ERROR, f"Internal error: {e}")
        return protocol.jsonrpc_result(req_id, result)

    # Methods

    async def _initialize(self, params: Params, session_id: _typing.Any) -> _typing.Any:
        requested = params.get("protocolVersion")
        version = (
            requested
            if requested in constants.SUPPORTED_PROTOCOL_VERSIONS
            else constants.PROTOCOL_VERSION
        )
        client = params.get("clientInfo") or {}
        _logger.info(
            "Client %s %s initialized (protocol %s)",
            client.get("name", "unknown"),
            client.get("version", ""),
            version,
        )
        return {
            "protocolVersion": version,
            "capabilities": {
                "tools": {"listChanged": False},
                "prompts": {"listChanged": False},
                "resources": {"listChanged": False},
            },
            "serverInfo": {"name": constants.SERVER_NAME, "version": self._version},
        }

    async def _ping(self, params: Params, session_id: _typing.Any) -> _typing.Any:
        return {}

    async def _tools_list(self, params: Params, session_id: _typing.Any) -> _typing.Any:
        return {"tools": self._registry.to_mcp_format()}

    async def _tools_call(self, params: Params, session_id: _typing.Any) -> _typing.Any:
        name = params.get("name")
        if not isinstance(name, str):
            raise protocol.JsonRpcError(protocol.INVALID_PARAMS, "Tool name is required")
        tool = self._registry.get(name)
        if tool is None:
            raise protocol.JsonRpcError(protocol.INVALID_PARAMS, f"Tool {name} not found")

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        problems = tool.check_input(arguments)
        if problems:
            raise protocol.JsonRpcError(
                protocol.INVALID_PARAMS,
                f"Invalid arguments for tool {name}: {'; '.join(problems)}",
            )

        result = await self._registry.call(name, arguments, session_id=session_id)
        return result.to_mcp_format()

    async def _prompts_list(self, params: Params, session_id: _typing.Any) -> _typing.Any:
        return {"prompts": self._prompts.list_prompts()}

    async def _prompts_get(self, params: Params, session_id: _typing.Any) -> _typing.Any:
        name = params.get("name")
        if not isinstance(name, str):
            raise protocol.JsonRpcError(protocol.INVALID_PARAMS, "Prompt name is required")
        arguments = params.get("arguments")
        if arguments is not None and not isinstance(arguments, dict):
            raise protocol.JsonRpcError(protocol.INVALID_PARAMS, "arguments must be an object")
        return self._prompts.get_prompt(name, arguments)

    async def _resources_list(self, params: Params, session_id: _typing.Any) -> _typing.Any:
        return {"resources": self._resources.list_resources()}

    async def _resources_read(self, params: Params, session_id: _typing.Any) -> _typing.Any:
        uri = params.get("uri")
        if not isinstance(uri, str):
            raise protocol.JsonRpcError(protocol.INVALID_PARAMS, "Resource uri is required")
        return self._resources.read(uri)
