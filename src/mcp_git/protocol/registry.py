"""ToolRegistry — the static catalog of git tools and their argument schemas.

The catalog is declared once as configuration data and never rebuilt per
request.  Lookups hand out copies so callers cannot mutate it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from mcp_git.protocol.models import Tool


def _prop(json_type: str, description: str, **extra: Any) -> dict[str, Any]:
    return {"type": json_type, **extra, "description": description}


def _schema(properties: dict[str, Any], required: Iterable[str] = ()) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    required = list(required)
    if required:
        schema["required"] = required
    return schema


GIT_TOOLS: tuple[Tool, ...] = (
    Tool(
        name="git_status",
        description="Show the working tree status",
        input_schema=_schema({}),
    ),
    Tool(
        name="git_diff",
        description="Show changes between commits, commit and working tree, etc",
        input_schema=_schema({
            "file_path": _prop("string", "Optional: specific file to show diff for"),
            "staged": _prop("boolean", "Show staged changes (default: false)"),
        }),
    ),
    Tool(
        name="git_commit",
        description="Record changes to the repository",
        input_schema=_schema(
            {
                "message": _prop("string", "Commit message"),
                "add_all": _prop("boolean", "Stage all changes before committing (default: false)"),
            },
            required=["message"],
        ),
    ),
    Tool(
        name="git_log",
        description="Show commit logs",
        input_schema=_schema({
            "max_count": _prop("number", "Limit the number of commits (default: 10)"),
            "oneline": _prop("boolean", "Show each commit on a single line (default: true)"),
        }),
    ),
    Tool(
        name="git_branch",
        description="List, create, or delete branches",
        input_schema=_schema({
            "action": _prop(
                "string",
                "Action to perform (default: list)",
                enum=["list", "create", "delete"],
            ),
            "branch_name": _prop("string", "Branch name (required for create/delete)"),
        }),
    ),
    Tool(
        name="git_checkout",
        description="Switch branches or restore working tree files",
        input_schema=_schema(
            {
                "target": _prop("string", "Branch name or file path"),
                "create_new": _prop("boolean", "Create new branch (default: false)"),
            },
            required=["target"],
        ),
    ),
    Tool(
        name="git_add",
        description="Add file contents to the staging area",
        input_schema=_schema(
            {"files": _prop("string", "Files to add (e.g., '.', '*.py', 'file.txt')")},
            required=["files"],
        ),
    ),
    Tool(
        name="git_push",
        description="Update remote refs along with associated objects",
        input_schema=_schema({
            "remote": _prop("string", "Remote repository name (default: origin)"),
            "branch": _prop("string", "Branch name to push"),
            "set_upstream": _prop("boolean", "Set upstream tracking branch (default: false)"),
            "force": _prop("boolean", "Force push (default: false)"),
        }),
    ),
)


class ToolRegistry:
    """Immutable, ordered, name-keyed collection of :class:`Tool` definitions.

    Usage::

        registry = ToolRegistry(GIT_TOOLS)
        registry.list()            # every tool, in declaration order
        registry.get("git_diff")   # a single tool, or None
    """

    def __init__(self, tools: Iterable[Tool]) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            if tool.name in self._tools:
                msg = f"Duplicate tool name: {tool.name}"
                raise ValueError(msg)
            self._tools[tool.name] = tool

    def list(self) -> list[Tool]:
        """Return copies of every tool, in declaration order."""
        return [tool.model_copy(deep=True) for tool in self._tools.values()]

    def get(self, name: str) -> Tool | None:
        tool = self._tools.get(name)
        return tool.model_copy(deep=True) if tool is not None else None

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._tools)


def default_registry() -> ToolRegistry:
    """The git tool catalog served by ``mcp-git-server``."""
    return ToolRegistry(GIT_TOOLS)
