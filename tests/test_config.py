"""Tests for ServerConfig and the server wiring."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from mcp_git.config import ServerConfig
from mcp_git.protocol.dispatcher import McpDispatcher
from mcp_git.repository.git import GitOperations
from mcp_git.server import build_dispatcher, run_http, run_stdio


class TestFromEnv:
    def test_defaults(self) -> None:
        config = ServerConfig.from_env({})
        assert config.working_dir == "."
        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.log_level == "info"
        assert config.git_timeout is None

    def test_reads_variables(self) -> None:
        config = ServerConfig.from_env({
            "GIT_WORKING_DIR": "/srv/repo",
            "MCP_HOST": "127.0.0.1",
            "MCP_PORT": "9090",
            "MCP_LOG_LEVEL": "debug",
            "GIT_COMMAND_TIMEOUT": "30",
        })
        assert config.working_dir == "/srv/repo"
        assert config.host == "127.0.0.1"
        assert config.port == 9090
        assert config.log_level == "debug"
        assert config.git_timeout == 30.0

    def test_blank_values_ignored(self) -> None:
        config = ServerConfig.from_env({"GIT_WORKING_DIR": "  ", "MCP_PORT": ""})
        assert config.working_dir == "."
        assert config.port == 8080

    def test_unrelated_variables_ignored(self) -> None:
        assert ServerConfig.from_env({"PATH": "/bin"}) == ServerConfig()

    @pytest.mark.parametrize(
        "environ",
        [{"MCP_PORT": "http"}, {"MCP_PORT": "70000"}, {"GIT_COMMAND_TIMEOUT": "0"}],
    )
    def test_invalid_values(self, environ: dict[str, str]) -> None:
        with pytest.raises(ValidationError):
            ServerConfig.from_env(environ)

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GIT_WORKING_DIR", "/from/os")
        assert ServerConfig.from_env().working_dir == "/from/os"


class TestGitConfig:
    def test_carries_working_dir_and_timeout(self) -> None:
        git = ServerConfig(working_dir="/repo", git_timeout=12.5).git_config()
        assert git.working_dir == "/repo"
        assert git.timeout == 12.5
        assert git.executable == "git"


class TestWiring:
    def test_build_dispatcher(self) -> None:
        dispatcher = build_dispatcher(ServerConfig(working_dir="/repo"))
        assert isinstance(dispatcher, McpDispatcher)
        assert len(dispatcher.registry) == 8

    def test_build_dispatcher_uses_git(self) -> None:
        with patch("mcp_git.server.McpDispatcher") as dispatcher_cls:
            build_dispatcher(ServerConfig(working_dir="/repo"))
        ops = dispatcher_cls.call_args[0][0]
        assert isinstance(ops, GitOperations)
        assert ops.config.working_dir == "/repo"

    def test_run_stdio(self) -> None:
        with patch("mcp_git.transport.stdio.StdioServer") as server_cls:
            server_cls.return_value.serve = MagicMock(return_value=_done())
            run_stdio(ServerConfig())
        server_cls.assert_called_once()

    def test_run_http(self) -> None:
        with patch("mcp_git.transport.http.HttpServer") as server_cls:
            run_http(ServerConfig(host="127.0.0.1", port=9000, log_level="DEBUG"))
        _, kwargs = server_cls.call_args
        assert (kwargs["host"], kwargs["port"]) == ("127.0.0.1", 9000)
        server_cls.return_value.run.assert_called_once_with(log_level="debug")


async def _done() -> None:
    return None
