"""Tests for the HTTP transport."""

import pytest
from starlette.testclient import TestClient

from mcp_git.protocol.dispatcher import McpDispatcher
from mcp_git.protocol.errors import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND
from mcp_git.transport.http import HttpServer


@pytest.fixture
def client(dispatcher: McpDispatcher) -> TestClient:
    return TestClient(HttpServer(dispatcher).app)


class TestInfoRoutes:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}

    def test_usage(self, client: TestClient) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        assert "MCP Git Server" in resp.text
        assert "POST /mcp" in resp.text

    def test_get_mcp_not_allowed(self, client: TestClient) -> None:
        assert client.get("/mcp").status_code == 405

    def test_unknown_route(self, client: TestClient) -> None:
        assert client.get("/nope").status_code == 404


class TestMcpEndpoint:
    def test_initialize(self, client: TestClient) -> None:
        resp = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}})
        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] == 1
        assert body["error"] is None
        assert body["result"]["protocolVersion"] == "2024-11-05"

    def test_tools_list(self, client: TestClient) -> None:
        body = client.post("/mcp", json={"jsonrpc": "2.0", "id": 2, "method": "tools/list"}).json()
        assert len(body["result"]["tools"]) == 8

    def test_tools_call(self, client: TestClient) -> None:
        body = client.post(
            "/mcp",
            json={
                "jsonrpc": "2.0",
                "id": "abc",
                "method": "tools/call",
                "params": {"name": "git_log", "arguments": {"max_count": 2}},
            },
        ).json()
        assert body["id"] == "abc"
        assert body["result"] == {"content": [{"type": "text", "text": "log output"}], "isError": False}

    def test_protocol_errors_use_status_200(self, client: TestClient) -> None:
        unknown_method = client.post("/mcp", json={"jsonrpc": "2.0", "id": 5, "method": "invalid/method"})
        unknown_tool = client.post(
            "/mcp",
            json={"jsonrpc": "2.0", "id": 6, "method": "tools/call", "params": {"name": "unknown_tool"}},
        )
        assert unknown_method.status_code == 200
        assert unknown_method.json()["error"]["code"] == METHOD_NOT_FOUND
        assert unknown_tool.status_code == 200
        assert unknown_tool.json()["error"]["code"] == INVALID_PARAMS
        assert unknown_tool.json()["result"] is None

    @pytest.mark.parametrize("payload", [b"{broken", b"", b'{"id": 1}', b"[]"])
    def test_undecodable_body(self, client: TestClient, payload: bytes) -> None:
        resp = client.post("/mcp", content=payload, headers={"Content-Type": "application/json"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] is None
        assert body["result"] is None
        assert body["error"]["code"] == INTERNAL_ERROR
        assert body["error"]["message"].startswith("Internal error: ")


class TestCors:
    def test_preflight(self, client: TestClient) -> None:
        resp = client.options(
            "/mcp",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"
        assert "POST" in resp.headers["access-control-allow-methods"]

    def test_simple_request_headers(self, client: TestClient) -> None:
        resp = client.get("/health", headers={"Origin": "http://example.com"})
        assert resp.headers["access-control-allow-origin"] == "*"
