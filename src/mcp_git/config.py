"""Server configuration — working tree, bind address and logging."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

from mcp_git.repository.models import GitConfig

ENV_WORKING_DIR = "GIT_WORKING_DIR"
ENV_HOST = "MCP_HOST"
ENV_PORT = "MCP_PORT"
ENV_LOG_LEVEL = "MCP_LOG_LEVEL"
ENV_GIT_TIMEOUT = "GIT_COMMAND_TIMEOUT"


class ServerConfig(BaseModel):
    """Settings shared by the stdio and HTTP entry points.

    Values come from the environment (see :meth:`from_env`) and can be
    overridden by CLI options.
    """

    working_dir: str = Field(default=".", description="Working tree git commands run in.")
    host: str = Field(default="0.0.0.0", description="HTTP bind address.")
    port: int = Field(default=8080, ge=0, le=65535, description="HTTP port.")
    log_level: str = Field(default="info", description="Logging level name.")
    git_timeout: float | None = Field(default=None, gt=0, description="Per-command git timeout in seconds.")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build a config from environment variables, ignoring unset or blank ones."""
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for field, key in (
            ("working_dir", ENV_WORKING_DIR),
            ("host", ENV_HOST),
            ("port", ENV_PORT),
            ("log_level", ENV_LOG_LEVEL),
            ("git_timeout", ENV_GIT_TIMEOUT),
        ):
            raw = env.get(key, "").strip()
            if raw:
                values[field] = raw
        return cls.model_validate(values)

    def git_config(self) -> GitConfig:
        return GitConfig(working_dir=self.working_dir, timeout=self.git_timeout)
