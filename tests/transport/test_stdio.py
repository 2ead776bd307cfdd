"""Tests for the stdio transport."""

import io
import json
from unittest.mock import AsyncMock

from mcp_git.protocol.dispatcher import McpDispatcher
from mcp_git.protocol.errors import PARSE_ERROR
from mcp_git.transport.stdio import StdioServer


def _serve_lines(dispatcher: McpDispatcher, *lines: str) -> tuple[StdioServer, io.StringIO, io.StringIO]:
    stdin = io.StringIO("".join(lines))
    stdout = io.StringIO()
    return StdioServer(dispatcher, stdin=stdin, stdout=stdout), stdin, stdout


def _responses(stdout: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stdout.getvalue().splitlines()]


class TestHandleLine:
    async def test_initialize(self, dispatcher: McpDispatcher) -> None:
        reply = json.loads(await StdioServer(dispatcher).handle_line(
            '{"jsonrpc":"2.0","id":1,"method":"initialize","params":{}}'
        ))
        assert reply["id"] == 1
        assert reply["error"] is None
        assert reply["result"]["serverInfo"]["name"] == "mcp-git-server"

    async def test_reply_is_single_line(self, dispatcher: McpDispatcher) -> None:
        reply = await StdioServer(dispatcher).handle_line('{"jsonrpc":"2.0","id":2,"method":"tools/list"}')
        assert "\n" not in reply

    async def test_invalid_json_is_parse_error(self, dispatcher: McpDispatcher) -> None:
        reply = json.loads(await StdioServer(dispatcher).handle_line("{not json"))
        assert reply["id"] is None
        assert reply["result"] is None
        assert reply["error"]["code"] == PARSE_ERROR
        assert reply["error"]["message"].startswith("Parse error: ")

    async def test_missing_method_is_parse_error(self, dispatcher: McpDispatcher) -> None:
        reply = json.loads(await StdioServer(dispatcher).handle_line('{"jsonrpc":"2.0","id":4}'))
        assert reply["id"] is None
        assert reply["error"]["code"] == PARSE_ERROR
        assert "method" in reply["error"]["message"]

    async def test_non_object_is_parse_error(self, dispatcher: McpDispatcher) -> None:
        reply = json.loads(await StdioServer(dispatcher).handle_line("[1, 2, 3]"))
        assert reply["error"]["code"] == PARSE_ERROR

    async def test_decode_failure_skips_dispatcher(self) -> None:
        dispatcher = AsyncMock(spec=McpDispatcher)
        await StdioServer(dispatcher).handle_line("garbage")
        dispatcher.handle.assert_not_awaited()


class TestServe:
    async def test_one_response_per_request_in_order(self, dispatcher: McpDispatcher) -> None:
        server, _, stdout = _serve_lines(
            dispatcher,
            '{"jsonrpc":"2.0","id":1,"method":"initialize","params":{}}\n',
            '{"jsonrpc":"2.0","id":"two","method":"tools/list"}\n',
            '{"jsonrpc":"2.0","id":3,"method":"tools/call","params":{"name":"git_status","arguments":{}}}\n',
        )
        await server.serve()

        replies = _responses(stdout)
        assert [r["id"] for r in replies] == [1, "two", 3]
        assert len(replies[1]["result"]["tools"]) == 8
        assert replies[2]["result"]["content"][0]["text"] == "status output"

    async def test_blank_lines_skipped(self, dispatcher: McpDispatcher) -> None:
        server, _, stdout = _serve_lines(
            dispatcher,
            "\n",
            "   \n",
            '{"jsonrpc":"2.0","id":1,"method":"tools/list"}\n',
            "\t\n",
        )
        await server.serve()
        assert len(_responses(stdout)) == 1

    async def test_parse_error_does_not_stop_loop(self, dispatcher: McpDispatcher) -> None:
        server, _, stdout = _serve_lines(
            dispatcher,
            "this is not json\n",
            '{"jsonrpc":"2.0","id":9,"method":"invalid/method"}\n',
        )
        await server.serve()

        first, second = _responses(stdout)
        assert first["id"] is None
        assert first["error"]["code"] == -32700
        assert second["id"] == 9
        assert second["error"]["code"] == -32601

    async def test_last_line_without_newline(self, dispatcher: McpDispatcher) -> None:
        server, _, stdout = _serve_lines(dispatcher, '{"jsonrpc":"2.0","id":1,"method":"initialize"}')
        await server.serve()
        assert stdout.getvalue().endswith("\n")
        assert _responses(stdout)[0]["id"] == 1

    async def test_empty_input(self, dispatcher: McpDispatcher) -> None:
        server, _, stdout = _serve_lines(dispatcher)
        await server.serve()
        assert stdout.getvalue() == ""

    async def test_notification_still_answered(self, dispatcher: McpDispatcher) -> None:
        server, _, stdout = _serve_lines(dispatcher, '{"jsonrpc":"2.0","method":"tools/list"}\n')
        await server.serve()
        (reply,) = _responses(stdout)
        assert reply["id"] is None
        assert reply["result"] is not None


class TestUndecodableInput:
    _INPUT = b'\xff\xfe garbage\n{"jsonrpc":"2.0","id":2,"method":"initialize"}\n'

    async def _serve(self, dispatcher: McpDispatcher, stdin: object) -> list[dict]:
        stdout = io.StringIO()
        await StdioServer(dispatcher, stdin=stdin, stdout=stdout).serve()  # type: ignore[arg-type]
        return _responses(stdout)

    async def test_binary_stream(self, dispatcher: McpDispatcher) -> None:
        first, second = await self._serve(dispatcher, io.BytesIO(self._INPUT))
        assert first["id"] is None
        assert first["error"]["code"] == PARSE_ERROR
        assert second["id"] == 2
        assert second["result"]["protocolVersion"] == "2024-11-05"

    async def test_strict_text_stream_reads_its_buffer(self, dispatcher: McpDispatcher) -> None:
        stdin = io.TextIOWrapper(io.BytesIO(self._INPUT), encoding="utf-8", errors="strict")
        first, second = await self._serve(dispatcher, stdin)
        assert first["error"]["code"] == PARSE_ERROR
        assert second["id"] == 2

    async def test_invalid_bytes_inside_string_are_replaced(self, dispatcher: McpDispatcher) -> None:
        line = b'{"jsonrpc":"2.0","id":"\xffx","method":"tools/list"}\n'
        (reply,) = await self._serve(dispatcher, io.BytesIO(line))
        assert reply["id"] == "\ufffdx"
        assert reply["error"] is None
