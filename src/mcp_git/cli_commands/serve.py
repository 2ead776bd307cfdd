"""``mcp-git-server stdio`` / ``mcp-git-server http`` — run the server."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click
from pydantic import ValidationError

from mcp_git.cli_commands._output import err_console

if TYPE_CHECKING:
    from mcp_git.config import ServerConfig


_SERVER_OPTIONS = (
    click.option(
        "--working-dir",
        "-C",
        type=click.Path(exists=True, file_okay=False),
        default=None,
        help="Repository working tree (env: GIT_WORKING_DIR, default: '.').",
    ),
    click.option(
        "--log-level",
        type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
        default=None,
        help="Logging level (env: MCP_LOG_LEVEL, default: info).",
    ),
    click.option(
        "--git-timeout",
        type=float,
        default=None,
        help="Per-command git timeout in seconds (env: GIT_COMMAND_TIMEOUT).",
    ),
    click.option("--telemetry", is_flag=True, help="Export OpenTelemetry spans to stderr."),
)


def _server_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Apply the options shared by every transport."""
    for option in reversed(_SERVER_OPTIONS):
        func = option(func)
    return func


def _load_config(telemetry: bool, **overrides: Any) -> ServerConfig:
    """Merge environment settings with CLI overrides, then set up logging."""
    from mcp_git.config import ServerConfig
    from mcp_git.utils.log import configure_logging

    try:
        base = ServerConfig.from_env()
        values = {**base.model_dump(), **{k: v for k, v in overrides.items() if v is not None}}
        config = ServerConfig.model_validate(values)
    except ValidationError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(2)

    configure_logging(config.log_level)
    if telemetry:
        from mcp_git.utils.telemetry import configure_telemetry

        configure_telemetry()
    return config


@click.command()
@_server_options
def stdio(working_dir: str | None, log_level: str | None, git_timeout: float | None, telemetry: bool) -> None:
    """Serve MCP over stdin/stdout (one JSON-RPC message per line)."""
    from mcp_git.server import run_stdio

    config = _load_config(
        telemetry,
        working_dir=working_dir,
        log_level=log_level,
        git_timeout=git_timeout,
    )
    try:
        run_stdio(config)
    except KeyboardInterrupt:
        pass


@click.command()
@_server_options
@click.option("--host", default=None, help="Bind address (env: MCP_HOST, default: 0.0.0.0).")
@click.option("--port", "-p", type=int, default=None, help="Port (env: MCP_PORT, default: 8080).")
def http(
    working_dir: str | None,
    log_level: str | None,
    git_timeout: float | None,
    telemetry: bool,
    host: str | None,
    port: int | None,
) -> None:
    """Serve MCP over HTTP (POST /mcp, GET /health, GET /)."""
    from mcp_git.server import run_http

    config = _load_config(
        telemetry,
        working_dir=working_dir,
        log_level=log_level,
        git_timeout=git_timeout,
        host=host,
        port=port,
    )
    run_http(config)
