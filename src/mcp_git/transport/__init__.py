"""Transports — stdio and HTTP front ends for the dispatcher."""

from mcp_git.transport.http import HttpServer
from mcp_git.transport.stdio import StdioServer

__all__ = [
    "HttpServer",
    "StdioServer",
]
