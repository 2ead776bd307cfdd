"""MCP client — talk to a running mcp-git-server over stdio or HTTP."""

from mcp_git.client.client import MCPClient
from mcp_git.client.errors import ClientError, RpcError, TransportError
from mcp_git.client.transport import HttpTransport, MCPTransport, StdioTransport

__all__ = [
    "ClientError",
    "HttpTransport",
    "MCPClient",
    "MCPTransport",
    "RpcError",
    "StdioTransport",
    "TransportError",
]
