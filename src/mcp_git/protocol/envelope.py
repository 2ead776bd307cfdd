"""Envelope builders — the only place :class:`JsonRpcResponse` values are made."""

from __future__ import annotations

from typing import Any

from mcp_git.protocol.models import JsonRpcError, JsonRpcResponse


def success(request_id: Any, result: Any) -> JsonRpcResponse:
    """Wrap *result* in a response echoing *request_id*."""
    return JsonRpcResponse(id=request_id, result=result)


def failure(request_id: Any, code: int, message: str, data: Any = None) -> JsonRpcResponse:
    """Build an error response echoing *request_id* (``None`` if unknown)."""
    return JsonRpcResponse(
        id=request_id,
        error=JsonRpcError(code=code, message=message, data=data),
    )
