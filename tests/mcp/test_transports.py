"""Tests for the HTTP and stdio transports."""

import io as _io
import json as _json

import fastapi.testclient as _fastapi_testclient
import pytest as _pytest

import spawner.mcp.http as mcp_http
import spawner.mcp.server as mcp_server
import spawner.mcp.stdio as mcp_stdio

INITIALIZE = {
    "jsonrpc": "2.0",
    "id": 1,
    "method": "initialize",
    "params": {"protocolVersion": "2025-03-26", "clientInfo": {"name": "test"}},
}


@_pytest.fixture
def client(server: mcp_server.McpServer) -> _fastapi_testclient.TestClient:
    return _fastapi_testclient.TestClient(mcp_http.create_app(server))


class TestHttpTransport:
    """Tests for the FastAPI app."""

    def test_initialize(self, client: _fastapi_testclient.TestClient) -> None:
        response = client.post("/mcp", json=INITIALIZE)
        assert response.status_code == 200
        assert response.json()["result"]["serverInfo"]["name"] == "spawner-skills"

    def test_tools_call(self, client: _fastapi_testclient.TestClient) -> None:
        response = client.post(
            "/mcp",
            json={
                "jsonrpc": "2.0",
                "id": 2,
                "method": "tools/call",
                "params": {"name": "find_expert_skill", "arguments": {"query": "rag"}},
            },
            headers={"mcp-session-id": "session-1"},
        )
        text = response.json()["result"]["content"][0]["text"]
        assert [s["id"] for s in _json.loads(text)] == ["llamaindex-rag"]

    def test_notification_is_accepted(self, client: _fastapi_testclient.TestClient) -> None:
        response = client.post(
            "/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"}
        )
        assert response.status_code == 202
        assert response.content == b""

    def test_batch(self, client: _fastapi_testclient.TestClient) -> None:
        response = client.post(
            "/mcp",
            json=[
                {"jsonrpc": "2.0", "id": 1, "method": "ping"},
                {"jsonrpc": "2.0", "id": 2, "method": "ping"},
            ],
        )
        assert [r["id"] for r in response.json()] == [1, 2]

    def test_parse_error(self, client: _fastapi_testclient.TestClient) -> None:
        response = client.post(
            "/mcp", content=b"{nope", headers={"content-type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == -32700

    @_pytest.mark.parametrize("method", ["GET", "DELETE"])
    def test_other_verbs_not_allowed(
        self, client: _fastapi_testclient.TestClient, method: str
    ) -> None:
        response = client.request(method, "/mcp")
        assert response.status_code == 405
        assert response.headers["allow"] == "POST"
        assert response.json()["error"] == {"code": -32000, "message": "Method not allowed."}

    def test_health(self, client: _fastapi_testclient.TestClient) -> None:
        response = client.get("/health")
        assert response.json() == {
            "status": "ok",
            "server": "spawner-skills",
            "version": "0.1.0",
            "skills": 5,
        }

    def test_cors_preflight(self, client: _fastapi_testclient.TestClient) -> None:
        response = client.options(
            "/mcp",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] in ("*", "https://example.com")


class TestStdioTransport:
    """Tests for newline-delimited JSON over streams."""

    @_pytest.mark.asyncio
    async def test_round_trip(self, server: mcp_server.McpServer) -> None:
        lines = [
            _json.dumps(INITIALIZE),
            _json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}),
            "",
            _json.dumps({"jsonrpc": "2.0", "id": 2, "method": "tools/list"}),
        ]
        stdin = _io.StringIO("\n".join(lines) + "\n")
        stdout = _io.StringIO()

        handled = await mcp_stdio.serve_stdio(server, stdin=stdin, stdout=stdout)

        assert handled == 3
        responses = [_json.loads(line) for line in stdout.getvalue().splitlines()]
        assert [r["id"] for r in responses] == [1, 2]
        assert len(responses[1]["result"]["tools"]) == 8

    @_pytest.mark.asyncio
    async def test_parse_error_keeps_serving(self, server: mcp_server.McpServer) -> None:
        stdin = _io.StringIO('garbage\n{"jsonrpc": "2.0", "id": 5, "method": "ping"}\n')
        stdout = _io.StringIO()

        await mcp_stdio.serve_stdio(server, stdin=stdin, stdout=stdout)

        responses = [_json.loads(line) for line in stdout.getvalue().splitlines()]
        assert responses[0]["error"]["code"] == -32700
        assert responses[1] == {"jsonrpc": "2.0", "id": 5, "result": {}}
