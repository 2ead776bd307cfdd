"""RepositoryOperations protocol — the interface the dispatcher drives."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mcp_git.repository.models import OperationResult


@runtime_checkable
class RepositoryOperations(Protocol):
    """Executes version-control operations against one working tree.

    Every method returns an :class:`OperationResult`; implementations
    report command failures there instead of raising.  Calls may block for
    as long as the underlying command runs.
    """

    async def status(self) -> OperationResult: ...

    async def diff(self, file_path: str | None = None, staged: bool = False) -> OperationResult: ...

    async def commit(self, message: str, add_all: bool = False) -> OperationResult: ...

    async def log(self, max_count: int = 10, oneline: bool = True) -> OperationResult: ...

    async def branch(self, action: str = "list", branch_name: str | None = None) -> OperationResult: ...

    async def checkout(self, target: str, create_new: bool = False) -> OperationResult: ...

    async def add(self, files: str) -> OperationResult: ...

    async def push(
        self,
        remote: str | None = None,
        branch: str | None = None,
        set_upstream: bool = False,
        force: bool = False,
    ) -> OperationResult: ...
