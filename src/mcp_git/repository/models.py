"""Data models for the repository operations subsystem."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OperationResult(BaseModel):
    """Outcome of one repository operation: success with text, or failure with a reason."""

    model_config = ConfigDict(frozen=True)

    success: bool = Field(..., description="Whether the operation completed.")
    output: str = Field(default="", description="Captured output on success.")
    reason: str = Field(default="", description="Failure explanation.")

    @classmethod
    def ok(cls, output: str = "") -> OperationResult:
        return cls(success=True, output=output)

    @classmethod
    def fail(cls, reason: str) -> OperationResult:
        return cls(success=False, reason=reason)


class GitConfig(BaseModel):
    """Configuration for :class:`~mcp_git.repository.git.GitOperations`."""

    working_dir: str = Field(default=".", description="Working tree the commands run in.")
    executable: str = Field(default="git", description="git binary to invoke.")
    timeout: float | None = Field(default=None, description="Per-command timeout in seconds; None disables it.")
    default_remote: str = Field(default="origin", description="Remote used when only a branch is pushed.")
    env: dict[str, str] = Field(default_factory=dict, description="Extra environment variables for git.")
