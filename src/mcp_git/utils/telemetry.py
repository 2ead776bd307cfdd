"""Tracing for the dispatcher and transports.

Modules take a tracer from :func:`get_tracer` and open spans around each
JSON-RPC request and tool call.  Until :func:`configure_telemetry` installs
an SDK provider those spans are the API's no-op spans.

The SDK and the OTLP exporter ship in the ``otel`` extra.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from opentelemetry import trace

# Span attribute keys.
ATTR_RPC_METHOD = "mcp.rpc.method"
ATTR_RPC_ERROR_CODE = "mcp.rpc.error_code"
ATTR_TRANSPORT = "mcp.transport"
ATTR_TOOL_NAME = "mcp.tool.name"
ATTR_TOOL_IS_ERROR = "mcp.tool.is_error"

_INSTRUMENTATION_NAME = "mcp_git"
_EXTRA_HINT = "Install it with: pip install mcp-git-server[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Tracer for *name*, falling back to the package instrumentation name."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "mcp-git-server",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider for the server process.

    Console export writes span JSON to stderr; stdout belongs to the stdio
    transport.  *otlp_endpoint* adds a batching OTLP/gRPC exporter.

    Raises ImportError when the SDK (or, with *otlp_endpoint*, the OTLP
    exporter) is not installed.
    """
    sdk = _load_sdk()
    provider = sdk.TracerProvider(resource=sdk.Resource.create({"service.name": service_name}))

    if export_to_console:
        provider.add_span_processor(sdk.SimpleSpanProcessor(_console_exporter()))
    if otlp_endpoint:
        provider.add_span_processor(sdk.BatchSpanProcessor(_otlp_exporter(otlp_endpoint)))

    trace.set_tracer_provider(provider)


def _load_sdk() -> SimpleNamespace:
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = f"opentelemetry-sdk is required for tracing. {_EXTRA_HINT}"
        raise ImportError(msg) from exc
    return SimpleNamespace(
        Resource=Resource,
        TracerProvider=TracerProvider,
        BatchSpanProcessor=BatchSpanProcessor,
        SimpleSpanProcessor=SimpleSpanProcessor,
    )


def _console_exporter() -> Any:
    import sys

    from opentelemetry.sdk.trace.export import ConsoleSpanExporter  # pyright: ignore[reportMissingImports]

    return ConsoleSpanExporter(out=sys.stderr)


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        msg = f"opentelemetry-exporter-otlp is required for OTLP export. {_EXTRA_HINT}"
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)
