"""StdioServer — newline-delimited JSON-RPC over stdin/stdout.

One request per input line, one response per output line, strictly in
order.  Diagnostics go through :mod:`logging` (stderr) so stdout carries
protocol traffic only.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import IO, TYPE_CHECKING, Any, TextIO

from pydantic import ValidationError

from mcp_git.protocol import envelope
from mcp_git.protocol.errors import PARSE_ERROR
from mcp_git.protocol.models import JsonRpcRequest
from mcp_git.utils.telemetry import ATTR_TRANSPORT, get_tracer

if TYPE_CHECKING:
    from mcp_git.protocol.dispatcher import McpDispatcher
    from mcp_git.protocol.models import JsonRpcResponse

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


def describe_validation_error(exc: ValidationError) -> str:
    """First error of *exc* as a one-line message."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first['msg']}" if location else first["msg"]


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


class StdioServer:
    """Drives an :class:`McpDispatcher` from a line-oriented input stream.

    Input is read as bytes (the binary buffer of a text stream when it has
    one) and decoded line by line, so invalid UTF-8 only spoils its own line.
    """

    def __init__(
        self,
        dispatcher: McpDispatcher,
        *,
        stdin: IO[Any] | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        source = stdin or sys.stdin
        self._stdin = getattr(source, "buffer", source)
        self._stdout = stdout or sys.stdout

    async def serve(self) -> None:
        """Process lines until end of input."""
        logger.info("MCP git server listening on stdio")
        while True:
            raw = await asyncio.to_thread(self._stdin.readline)
            if not raw:
                break
            line = _decode(raw).strip()
            if not line:
                continue

            logger.debug("Received: %s", line)
            reply = await self.handle_line(line)
            self._stdout.write(reply + "\n")
            self._stdout.flush()
            logger.debug("Sent: %s", reply)
        logger.info("stdin closed, stopping")

    async def handle_line(self, line: str) -> str:
        """Decode one request line, dispatch it, and encode the response."""
        with _tracer.start_as_current_span("mcp.stdio.request") as span:
            span.set_attribute(ATTR_TRANSPORT, "stdio")
            response = await self._dispatch(line)
        return response.model_dump_json()

    async def _dispatch(self, line: str) -> JsonRpcResponse:
        try:
            request = JsonRpcRequest.model_validate_json(line)
        except ValidationError as exc:
            detail = describe_validation_error(exc)
            logger.warning("Could not parse request: %s", detail)
            return envelope.failure(None, PARSE_ERROR, f"Parse error: {detail}")
        return await self._dispatcher.handle(request)
