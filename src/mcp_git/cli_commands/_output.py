"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from mcp_git.protocol.models import Tool, ToolCallResult

console = Console()
# stdio mode owns stdout; anything not protocol traffic goes here.
err_console = Console(stderr=True)


def print_tools_table(tools: list[Tool], *, as_json: bool = False) -> None:
    """Pretty-print tool definitions as a table."""
    if as_json:
        console.print_json(json.dumps([t.model_dump(by_alias=True) for t in tools]))
        return

    table = Table(title="Available Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Arguments")

    for tool in tools:
        table.add_row(tool.name, _truncate(tool.description), _describe_arguments(tool))

    console.print(table)


def print_tool_result(result: ToolCallResult) -> None:
    """Print the text of a tool call, flagged red when it reports an error."""
    if result.is_error:
        console.print("[red]Tool reported an error:[/red]")
    console.print(result.text, markup=False, highlight=False)


def _describe_arguments(tool: Tool) -> str:
    properties = tool.input_schema.get("properties", {})
    required = set(tool.input_schema.get("required", []))
    parts = [f"{name}*" if name in required else name for name in properties]
    return ", ".join(parts) or "-"


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
