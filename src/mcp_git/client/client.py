"""MCPClient — connects to an MCP server and invokes its tools.

Implements the ``initialize`` handshake, tool discovery (``tools/list``)
and execution (``tools/call``) over an :class:`MCPTransport`.
"""

from __future__ import annotations

from typing import Any

import httpx

from mcp_git import __version__
from mcp_git.client.errors import RpcError, TransportError
from mcp_git.client.transport import HttpTransport, MCPTransport, StdioTransport
from mcp_git.protocol.dispatcher import PROTOCOL_VERSION
from mcp_git.protocol.models import JsonRpcRequest, JsonRpcResponse, Tool, ToolCallResult


class MCPClient:
    """Async context manager that talks to an MCP server.

    Usage::

        async with MCPClient(HttpTransport("http://localhost:8080")) as client:
            tools = await client.list_tools()
            result = await client.call_tool("git_log", {"max_count": 5})
    """

    def __init__(self, transport: MCPTransport) -> None:
        self._transport = transport
        self._connected = False
        self._next_id = 1
        self.server_info: dict[str, Any] = {}

    @classmethod
    def for_server(cls, server: str, transport: str = "stdio") -> MCPClient:
        """Build a client for a stdio *command* or an HTTP base *url*."""
        if transport == "stdio":
            return cls(StdioTransport(command=server))
        if transport == "http":
            return cls(HttpTransport(server))
        msg = f"Unknown transport: {transport}"
        raise ValueError(msg)

    async def __aenter__(self) -> MCPClient:
        await self.connect()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    async def connect(self) -> None:
        """Connect the transport and perform the initialize handshake."""
        try:
            await self._transport.connect()
        except Exception as exc:
            raise TransportError(str(exc)) from exc
        self._connected = True
        response = await self._send_request(
            "initialize",
            params={
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": {"name": "mcp-git-client", "version": __version__},
            },
        )
        result = _expect_result(response)
        self.server_info = dict(result.get("serverInfo", {}))

    async def close(self) -> None:
        if self._connected:
            await self._transport.close()
            self._connected = False

    async def list_tools(self) -> list[Tool]:
        """Send ``tools/list`` and parse the returned definitions."""
        response = await self._send_request("tools/list")
        result = _expect_result(response)
        return [Tool.model_validate(raw) for raw in result.get("tools", [])]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> ToolCallResult:
        """Send ``tools/call``; domain failures come back with ``is_error`` set."""
        response = await self._send_request(
            "tools/call",
            params={"name": name, "arguments": arguments or {}},
        )
        return ToolCallResult.model_validate(_expect_result(response))

    async def _send_request(
        self,
        method: str,
        params: dict[str, Any] | None = None,
    ) -> JsonRpcResponse:
        if not self._connected:
            msg = "Client not connected"
            raise RuntimeError(msg)

        request_id = self._next_id
        self._next_id += 1

        request = JsonRpcRequest(id=request_id, method=method, params=params or {})
        try:
            await self._transport.send(request.model_dump())
            raw = await self._transport.receive()
        except (OSError, RuntimeError, ValueError, httpx.HTTPError) as exc:
            raise TransportError(str(exc)) from exc
        return JsonRpcResponse.model_validate(raw)


def _expect_result(response: JsonRpcResponse) -> dict[str, Any]:
    if response.error is not None:
        raise RpcError(response.error.code, response.error.message)
    if not isinstance(response.result, dict):
        return {}
    return response.result
