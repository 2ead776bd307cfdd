"""mcp-git-server CLI entrypoint."""

from __future__ import annotations

import click

from mcp_git import __version__


@click.group()
@click.version_option(version=__version__, prog_name="mcp-git-server")
def main() -> None:
    """MCP Git Server — git operations as Model Context Protocol tools."""


# Register subcommands
from mcp_git.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
