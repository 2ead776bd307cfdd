"""Wiring — build the dispatcher and start a transport from a :class:`ServerConfig`."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from mcp_git.protocol.dispatcher import McpDispatcher
from mcp_git.repository.git import GitOperations

if TYPE_CHECKING:
    from mcp_git.config import ServerConfig

logger = logging.getLogger(__name__)


def build_dispatcher(config: ServerConfig) -> McpDispatcher:
    """Create a dispatcher backed by git in ``config.working_dir``."""
    return McpDispatcher(GitOperations(config.git_config()))


def run_stdio(config: ServerConfig) -> None:
    """Serve MCP over stdin/stdout until end of input."""
    from mcp_git.transport.stdio import StdioServer

    logger.info("MCP Git Server starting (STDIO mode), working directory: %s", config.working_dir)
    server = StdioServer(build_dispatcher(config))
    asyncio.run(server.serve())


def run_http(config: ServerConfig) -> None:
    """Serve MCP over HTTP (blocks)."""
    from mcp_git.transport.http import HttpServer

    logger.info("MCP Git Server starting (HTTP mode), working directory: %s", config.working_dir)
    server = HttpServer(build_dispatcher(config), host=config.host, port=config.port)
    server.run(log_level=config.log_level.lower())
