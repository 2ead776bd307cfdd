"""mcp-git-server — git operations exposed as Model Context Protocol tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "1.0.0"

if TYPE_CHECKING:
    from mcp_git.protocol.dispatcher import McpDispatcher as McpDispatcher
    from mcp_git.repository.git import GitOperations as GitOperations

_LAZY_EXPORTS = {
    "McpDispatcher": "mcp_git.protocol.dispatcher",
    "GitOperations": "mcp_git.repository.git",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'mcp_git' has no attribute {name!r}")
