"""``mcp-git-server tools`` — inspect and invoke tools on a running server."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import TYPE_CHECKING, Any

import click

from mcp_git.cli_commands._output import console, print_tool_result, print_tools_table

if TYPE_CHECKING:
    from mcp_git.protocol.models import Tool, ToolCallResult

_TRANSPORT_OPTION = click.option(
    "--transport",
    "-t",
    type=click.Choice(["stdio", "http"]),
    default="stdio",
    help="How to reach SERVER: a command to spawn (stdio) or a base URL (http).",
)


def parse_arguments(pairs: tuple[str, ...]) -> dict[str, Any]:
    """Turn ``key=value`` pairs into tool arguments.

    Values are read as JSON when possible (``5``, ``true``), otherwise kept
    as plain strings.
    """
    arguments: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            msg = f"Expected key=value, got {pair!r}"
            raise click.BadParameter(msg, param_hint="--arg")
        try:
            arguments[key] = json.loads(raw)
        except json.JSONDecodeError:
            arguments[key] = raw
    return arguments


@click.group()
def tools() -> None:
    """Discover and invoke git tools."""


@tools.command("list")
@click.argument("server", required=False)
@_TRANSPORT_OPTION
@click.option("--json", "as_json", is_flag=True, help="Print raw tool definitions.")
def list_tools(server: str | None, transport: str, as_json: bool) -> None:
    """List tools served by SERVER, or the built-in catalog if omitted.

    SERVER is the command (for stdio) or base URL (for http) of the MCP server.
    """
    if server is None:
        from mcp_git.protocol.registry import default_registry

        print_tools_table(default_registry().list(), as_json=as_json)
        return

    from mcp_git.client.client import MCPClient

    async def _list() -> list[Tool]:
        async with MCPClient.for_server(server, transport) as client:
            return await client.list_tools()

    try:
        discovered = asyncio.run(_list())
    except Exception as exc:
        console.print(f"[red]Discovery error:[/red] {exc}")
        sys.exit(1)

    if not discovered:
        console.print("[yellow]No tools discovered.[/yellow]")
        return

    print_tools_table(discovered, as_json=as_json)


@tools.command("call")
@click.argument("server")
@click.argument("name")
@click.option("--arg", "-a", "pairs", multiple=True, metavar="KEY=VALUE", help="Tool argument (repeatable).")
@_TRANSPORT_OPTION
def call_tool(server: str, name: str, pairs: tuple[str, ...], transport: str) -> None:
    """Invoke tool NAME on SERVER and print its output."""
    from mcp_git.client.client import MCPClient

    arguments = parse_arguments(pairs)

    async def _call() -> ToolCallResult:
        async with MCPClient.for_server(server, transport) as client:
            return await client.call_tool(name, arguments)

    try:
        result = asyncio.run(_call())
    except Exception as exc:
        console.print(f"[red]Call error:[/red] {exc}")
        sys.exit(1)

    print_tool_result(result)
    if result.is_error:
        sys.exit(1)
