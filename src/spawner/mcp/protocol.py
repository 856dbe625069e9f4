"""
JSON-RPC 2.0 message helpers.
"""

from __future__ import annotations

import typing as _typing

JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class JsonRpcError(Exception):
    """Raised by method handlers to answer with a JSON-RPC error."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


def jsonrpc_result(req_id: _typing.Any, result: _typing.Any) -> dict[str, _typing.Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": req_id, "result": result}


def jsonrpc_error(req_id: _typing.Any, code: int, message: str) -> dict[str, _typing.Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": req_id,
        "error": {"code": code, "message": message},
    }


def is_notification(message: _typing.Any) -> bool:
    """A request without an id expects no response."""
    return isinstance(message, dict) and "method" in message and "id" not in message
