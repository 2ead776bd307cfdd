"""HTTP transport — one JSON-RPC request per ``POST /mcp``.

Protocol errors travel inside the JSON-RPC envelope, so ``/mcp`` always
answers with HTTP 200.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

from mcp_git.protocol import envelope
from mcp_git.protocol.errors import INTERNAL_ERROR
from mcp_git.protocol.models import JsonRpcRequest
from mcp_git.transport.stdio import describe_validation_error
from mcp_git.utils.telemetry import ATTR_TRANSPORT, get_tracer

if TYPE_CHECKING:
    from starlette.requests import Request

    from mcp_git.protocol.dispatcher import McpDispatcher
    from mcp_git.protocol.models import JsonRpcResponse

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

USAGE = """\
MCP Git Server (HTTP)
====================

POST /mcp        - MCP JSON-RPC endpoint
GET  /health     - Health check

Send JSON-RPC 2.0 requests to /mcp endpoint.

Example:
POST /mcp
{"jsonrpc":"2.0","id":1,"method":"initialize","params":{}}
"""


class HttpServer:
    """Starlette application exposing an :class:`McpDispatcher` over HTTP.

    Example:
        server = HttpServer(dispatcher, host="127.0.0.1", port=8080)
        server.run()  # Blocks, serving HTTP
    """

    def __init__(self, dispatcher: McpDispatcher, host: str = "0.0.0.0", port: int = 8080) -> None:
        self.dispatcher = dispatcher
        self.host = host
        self.port = port
        self.app = self._create_app()

    def _create_app(self) -> Starlette:
        routes = [
            Route("/", endpoint=self._usage, methods=["GET"]),
            Route("/health", endpoint=self._health, methods=["GET"]),
            Route("/mcp", endpoint=self._mcp, methods=["POST"]),
        ]
        middleware = [
            Middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["Content-Type", "Authorization"],
            ),
        ]
        return Starlette(routes=routes, middleware=middleware)

    async def _usage(self, request: Request) -> PlainTextResponse:
        return PlainTextResponse(USAGE)

    async def _health(self, request: Request) -> JSONResponse:
        return JSONResponse({"status": "healthy"})

    async def _mcp(self, request: Request) -> JSONResponse:
        with _tracer.start_as_current_span("mcp.http.request") as span:
            span.set_attribute(ATTR_TRANSPORT, "http")
            response = await self._handle_body(await request.body())
        return JSONResponse(response.model_dump(mode="json"))

    async def _handle_body(self, body: bytes) -> JsonRpcResponse:
        try:
            rpc_request = JsonRpcRequest.model_validate_json(body)
        except ValidationError as exc:
            detail = describe_validation_error(exc)
            logger.error("Error processing MCP request: %s", detail)
            return envelope.failure(None, INTERNAL_ERROR, f"Internal error: {detail}")

        logger.info("Received MCP request: method=%s, id=%r", rpc_request.method, rpc_request.id)
        response = await self.dispatcher.handle(rpc_request)
        if response.error is not None:
            logger.error("MCP error: %s", response.error.message)
        return response

    def run(self, log_level: str = "info") -> None:
        """Run the HTTP server (blocks)."""
        import uvicorn

        logger.info("Starting HTTP server on %s:%s", self.host, self.port)
        uvicorn.run(self.app, host=self.host, port=self.port, log_level=log_level)
