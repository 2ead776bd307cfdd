"""MCP models — JSON-RPC 2.0 messages, tool definitions and call results.

Implements the message format used by the Model Context Protocol for
the ``initialize`` handshake, tool discovery (``tools/list``) and
execution (``tools/call``).  Field names that are camelCase on the wire
are declared with aliases; serialize with :func:`to_wire`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

JSONRPC_VERSION = "2.0"

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    ``id`` is an opaque correlation value (any JSON scalar or ``null``) and
    is echoed back verbatim.  Unknown fields are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    method: str
    params: dict[str, Any] | None = None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: Any = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _result_xor_error(self) -> JsonRpcResponse:
        if self.result is not None and self.error is not None:
            msg = "A JSON-RPC response cannot carry both 'result' and 'error'"
            raise ValueError(msg)
        return self


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Tool(_WireModel):
    """A tool definition as returned by ``tools/list``."""

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


class TextContent(_WireModel):
    type: str = "text"
    text: str


class ToolCallResult(_WireModel):
    """Outcome of a ``tools/call`` invocation.

    ``is_error`` marks a domain failure (the operation ran, or could not
    start, and reported a problem), as opposed to a protocol failure which
    is carried in the envelope's ``error`` field instead.
    """

    content: list[TextContent]
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def from_text(cls, text: str, *, is_error: bool = False) -> ToolCallResult:
        return cls(content=[TextContent(text=text)], is_error=is_error)

    @property
    def text(self) -> str:
        """Concatenated text of all content blocks."""
        return "\n".join(block.text for block in self.content)


class ToolListResult(_WireModel):
    tools: list[Tool]


class ToolsCapability(_WireModel):
    list_changed: bool = Field(default=False, alias="listChanged")


class Capabilities(_WireModel):
    tools: ToolsCapability | None = None


class ServerInfo(_WireModel):
    name: str
    version: str


class InitializeResult(_WireModel):
    """Payload of the ``initialize`` response."""

    protocol_version: str = Field(alias="protocolVersion")
    capabilities: Capabilities
    server_info: ServerInfo = Field(alias="serverInfo")


def to_wire(model: BaseModel) -> dict[str, Any]:
    """Dump *model* as a JSON-compatible dict using wire (alias) names.

    Default-valued and ``None`` fields are kept so every optional field is
    present in the output.
    """
    return model.model_dump(mode="json", by_alias=True)
