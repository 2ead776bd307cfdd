"""Protocol layer — MCP JSON-RPC models, tool registry and dispatcher."""

from mcp_git.protocol.dispatcher import PROTOCOL_VERSION, SERVER_NAME, McpDispatcher
from mcp_git.protocol.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    InvalidParamsError,
    MethodNotFoundError,
    ProtocolError,
    UnknownToolError,
)
from mcp_git.protocol.models import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    TextContent,
    Tool,
    ToolCallResult,
)
from mcp_git.protocol.registry import GIT_TOOLS, ToolRegistry, default_registry

__all__ = [
    "GIT_TOOLS",
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "PROTOCOL_VERSION",
    "SERVER_NAME",
    "InvalidParamsError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "McpDispatcher",
    "MethodNotFoundError",
    "ProtocolError",
    "TextContent",
    "Tool",
    "ToolCallResult",
    "ToolRegistry",
    "UnknownToolError",
    "default_registry",
]
