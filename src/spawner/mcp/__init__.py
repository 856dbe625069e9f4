"""
Model Context Protocol server for Spawner.

- server: JSON-RPC dispatcher for MCP methods
- prompts, resources: prompt templates and readable resources
- http: stateless streamable HTTP transport (FastAPI)
- stdio: newline-delimited JSON over stdin/stdout
"""

from spawner.mcp.protocol import JsonRpcError, jsonrpc_error, jsonrpc_result
from spawner.mcp.server import McpServer

__all__ = [
    "JsonRpcError",
    "McpServer",
    "jsonrpc_error",
    "jsonrpc_result",
]
