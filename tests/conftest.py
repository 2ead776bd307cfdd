"""Shared fixtures: a mocked repository adapter and a dispatcher around it."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from mcp_git.protocol.dispatcher import McpDispatcher
from mcp_git.repository.git import GitOperations
from mcp_git.repository.models import OperationResult

_OPERATIONS = ("status", "diff", "commit", "log", "branch", "checkout", "add", "push")


def _make_operations(**outcomes: OperationResult) -> AsyncMock:
    ops = AsyncMock(spec=GitOperations)
    for name in _OPERATIONS:
        getattr(ops, name).return_value = outcomes.get(name, OperationResult.ok(f"{name} output"))
    return ops


@pytest.fixture
def make_operations() -> Callable[..., AsyncMock]:
    """Factory for adapter mocks; each method succeeds with ``"<name> output"`` unless overridden."""
    return _make_operations


@pytest.fixture
def operations() -> AsyncMock:
    return _make_operations()


@pytest.fixture
def dispatcher(operations: AsyncMock) -> McpDispatcher:
    return McpDispatcher(operations)
