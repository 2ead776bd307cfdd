"""McpDispatcher — routes JSON-RPC requests to MCP method and tool handlers.

The dispatcher is stateless between calls: the registry and handler table
are fixed at construction, and each :meth:`McpDispatcher.handle` call owns
its request and response.  Concurrent calls are safe.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

from mcp_git import __version__
from mcp_git.protocol import envelope
from mcp_git.protocol.errors import (
    INTERNAL_ERROR,
    InvalidParamsError,
    MethodNotFoundError,
    ProtocolError,
    UnknownToolError,
)
from mcp_git.protocol.handlers import TOOL_HANDLERS, ToolHandler
from mcp_git.protocol.models import (
    Capabilities,
    InitializeResult,
    ServerInfo,
    ToolListResult,
    ToolsCapability,
    to_wire,
)
from mcp_git.protocol.registry import ToolRegistry, default_registry
from mcp_git.utils.telemetry import (
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_METHOD,
    ATTR_TOOL_IS_ERROR,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from mcp_git.protocol.models import JsonRpcRequest, JsonRpcResponse
    from mcp_git.repository.operations import RepositoryOperations

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "mcp-git-server"

MethodHandler = Callable[["JsonRpcRequest"], Awaitable[Any]]


class McpDispatcher:
    """Single entry point for every MCP request, independent of transport.

    Usage::

        dispatcher = McpDispatcher(GitOperations(GitConfig(working_dir=".")))
        response = await dispatcher.handle(request)

    Protocol failures (unknown method, malformed ``tools/call`` envelope,
    unknown tool, unexpected exceptions) become envelope ``error`` values.
    Failures of a routed tool call (missing required argument, failed git
    command) are returned as ``result`` values with ``isError: true``.
    """

    def __init__(
        self,
        operations: RepositoryOperations,
        *,
        registry: ToolRegistry | None = None,
        handlers: Mapping[str, ToolHandler] | None = None,
        server_name: str = SERVER_NAME,
        server_version: str = __version__,
    ) -> None:
        self._operations = operations
        self._registry = registry if registry is not None else default_registry()
        self._handlers = dict(handlers if handlers is not None else TOOL_HANDLERS)

        unhandled = [name for name in self._registry.names() if name not in self._handlers]
        if unhandled:
            msg = f"No handler registered for tool(s): {', '.join(unhandled)}"
            raise ValueError(msg)

        self._initialize_result = InitializeResult(
            protocol_version=PROTOCOL_VERSION,
            capabilities=Capabilities(tools=ToolsCapability(list_changed=False)),
            server_info=ServerInfo(name=server_name, version=server_version),
        )
        self._methods: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
        }

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def handle(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Answer *request*; never raises."""
        with _tracer.start_as_current_span("mcp.handle") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            try:
                method = self._methods.get(request.method)
                if method is None:
                    raise MethodNotFoundError(request.method)
                result = await method(request)
            except ProtocolError as exc:
                logger.info("Request %r failed: %s", request.id, exc.message)
                span.set_attribute(ATTR_RPC_ERROR_CODE, exc.code)
                return envelope.failure(request.id, exc.code, exc.message)
            except Exception as exc:
                logger.exception("Internal error handling %s", request.method)
                span.set_attribute(ATTR_RPC_ERROR_CODE, INTERNAL_ERROR)
                return envelope.failure(request.id, INTERNAL_ERROR, f"Internal error: {exc}")
            return envelope.success(request.id, result)

    # ---- methods ----

    async def _initialize(self, request: JsonRpcRequest) -> dict[str, Any]:
        return to_wire(self._initialize_result)

    async def _tools_list(self, request: JsonRpcRequest) -> dict[str, Any]:
        return to_wire(ToolListResult(tools=self._registry.list()))

    async def _tools_call(self, request: JsonRpcRequest) -> dict[str, Any]:
        params = request.params
        if params is None:
            raise InvalidParamsError("Missing params")

        name = params.get("name")
        if not isinstance(name, str):
            raise InvalidParamsError("Missing tool name")

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        elif not isinstance(arguments, dict):
            raise InvalidParamsError("Invalid arguments: expected an object")

        if name not in self._registry:
            raise UnknownToolError(name)

        handler = self._handlers[name]
        with _tracer.start_as_current_span("mcp.tools.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            result = await handler(arguments, self._operations)
            span.set_attribute(ATTR_TOOL_IS_ERROR, result.is_error)

        if result.is_error:
            logger.info("Tool %s reported an error: %s", name, result.text)
        return to_wire(result)
