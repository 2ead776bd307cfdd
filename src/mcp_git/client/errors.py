"""Error types raised by :class:`~mcp_git.client.client.MCPClient`."""


class ClientError(Exception):
    """Base error for all client-side failures."""


class TransportError(ClientError):
    """Failed to reach or talk to the server."""


class RpcError(ClientError):
    """The server answered with a JSON-RPC ``error`` envelope."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"JSON-RPC error {code}: {message}")
