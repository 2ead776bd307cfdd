"""Repository operations — the git commands behind each tool."""

from mcp_git.repository.git import GitOperations
from mcp_git.repository.models import GitConfig, OperationResult
from mcp_git.repository.operations import RepositoryOperations

__all__ = [
    "GitConfig",
    "GitOperations",
    "OperationResult",
    "RepositoryOperations",
]
