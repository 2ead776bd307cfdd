"""Tool handlers — argument extraction and adapter calls for each git tool.

Every handler has the signature ``(arguments, operations) -> ToolCallResult``
and is looked up by tool name in :data:`TOOL_HANDLERS`.

A missing or wrong-typed *required* argument is a domain failure: the
handler returns an ``isError`` result and the adapter is never called.
Wrong-typed *optional* arguments fall back to their default.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from mcp_git.protocol.models import ToolCallResult

if TYPE_CHECKING:
    from mcp_git.repository.models import OperationResult
    from mcp_git.repository.operations import RepositoryOperations

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Mapping[str, Any], "RepositoryOperations"], Awaitable[ToolCallResult]]

_UNKNOWN_ERROR = "Unknown error"

# ---------------------------------------------------------------------------
# Argument coercion
# ---------------------------------------------------------------------------


def string_arg(arguments: Mapping[str, Any], key: str) -> str | None:
    value = arguments.get(key)
    return value if isinstance(value, str) else None


def bool_arg(arguments: Mapping[str, Any], key: str, default: bool) -> bool:
    value = arguments.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value in ("true", "false"):
        return value == "true"
    return default


def int_arg(arguments: Mapping[str, Any], key: str, default: int) -> int:
    value = arguments.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return default
    return default


# ---------------------------------------------------------------------------
# Result folding
# ---------------------------------------------------------------------------


async def _run(
    operation: Callable[..., Awaitable[OperationResult]],
    *args: Any,
    empty: str | None = None,
) -> ToolCallResult:
    """Call *operation* and turn its outcome into a :class:`ToolCallResult`.

    Exceptions from the adapter are reported as domain failures, never
    propagated.  *empty* replaces a blank success output.
    """
    try:
        outcome = await operation(*args)
    except Exception as exc:
        logger.exception("Repository operation %s raised", getattr(operation, "__name__", operation))
        return ToolCallResult.from_text(str(exc) or _UNKNOWN_ERROR, is_error=True)

    if not outcome.success:
        return ToolCallResult.from_text(outcome.reason or _UNKNOWN_ERROR, is_error=True)
    if not outcome.output and empty is not None:
        return ToolCallResult.from_text(empty)
    return ToolCallResult.from_text(outcome.output)


def _missing(message: str) -> ToolCallResult:
    return ToolCallResult.from_text(message, is_error=True)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def git_status(arguments: Mapping[str, Any], ops: RepositoryOperations) -> ToolCallResult:
    return await _run(ops.status)


async def git_diff(arguments: Mapping[str, Any], ops: RepositoryOperations) -> ToolCallResult:
    file_path = string_arg(arguments, "file_path")
    staged = bool_arg(arguments, "staged", False)
    return await _run(ops.diff, file_path, staged, empty="No changes")


async def git_commit(arguments: Mapping[str, Any], ops: RepositoryOperations) -> ToolCallResult:
    message = string_arg(arguments, "message")
    if message is None:
        return _missing("Missing commit message")
    add_all = bool_arg(arguments, "add_all", False)
    return await _run(ops.commit, message, add_all)


async def git_log(arguments: Mapping[str, Any], ops: RepositoryOperations) -> ToolCallResult:
    max_count = int_arg(arguments, "max_count", 10)
    oneline = bool_arg(arguments, "oneline", True)
    return await _run(ops.log, max_count, oneline)


async def git_branch(arguments: Mapping[str, Any], ops: RepositoryOperations) -> ToolCallResult:
    action = string_arg(arguments, "action") or "list"
    branch_name = string_arg(arguments, "branch_name")
    return await _run(ops.branch, action, branch_name)


async def git_checkout(arguments: Mapping[str, Any], ops: RepositoryOperations) -> ToolCallResult:
    target = string_arg(arguments, "target")
    if target is None:
        return _missing("Missing target")
    create_new = bool_arg(arguments, "create_new", False)
    return await _run(ops.checkout, target, create_new)


async def git_add(arguments: Mapping[str, Any], ops: RepositoryOperations) -> ToolCallResult:
    files = string_arg(arguments, "files")
    if files is None:
        return _missing("Missing files parameter")
    return await _run(ops.add, files, empty="Files added successfully")


async def git_push(arguments: Mapping[str, Any], ops: RepositoryOperations) -> ToolCallResult:
    remote = string_arg(arguments, "remote")
    branch = string_arg(arguments, "branch")
    set_upstream = bool_arg(arguments, "set_upstream", False)
    force = bool_arg(arguments, "force", False)
    return await _run(ops.push, remote, branch, set_upstream, force, empty="Pushed successfully")


TOOL_HANDLERS: Mapping[str, ToolHandler] = MappingProxyType({
    "git_status": git_status,
    "git_diff": git_diff,
    "git_commit": git_commit,
    "git_log": git_log,
    "git_branch": git_branch,
    "git_checkout": git_checkout,
    "git_add": git_add,
    "git_push": git_push,
})
