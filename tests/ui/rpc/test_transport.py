"""Tests for the JSON-RPC stdio transport."""

from __future__ import annotations

import asyncio
import io
import json
from typing import Any
from unittest.mock import patch

import pytest

from safe_unix.core.errors import MalformedRequestError
from safe_unix.ui.rpc.transport import (
    JsonRpcRequest,
    JsonRpcResponse,
    StdioTransport,
    decode_message,
)


class TestDecodeMessage:
    """Tests for decode_message."""

    def test_request_with_all_fields(self) -> None:
        request = decode_message(
            '{"jsonrpc": "2.0", "id": 7, "method": "tools/call", '
            '"params": {"name": "safe_ls"}}'
        )

        assert request == JsonRpcRequest(
            method="tools/call",
            id=7,
            params={"name": "safe_ls"},
            jsonrpc="2.0",
        )

    def test_missing_id_is_a_notification(self) -> None:
        request = decode_message('{"jsonrpc": "2.0", "method": "notifications/x"}')

        assert request.is_notification
        assert request.id is None

    def test_null_id_is_still_a_request(self) -> None:
        request = decode_message('{"jsonrpc": "2.0", "id": null, "method": "ping"}')

        assert not request.is_notification
        assert request.id is None

    def test_string_id(self) -> None:
        assert decode_message('{"id": "abc-123", "method": "ping"}').id == "abc-123"

    @pytest.mark.parametrize("raw_id", ["true", "[1]", "{}", "1.5"])
    def test_unusable_id_becomes_null(self, raw_id: str) -> None:
        request = decode_message(f'{{"id": {raw_id}, "method": "ping"}}')

        assert request.id is None
        assert not request.is_notification

    def test_non_object_params_are_dropped(self) -> None:
        assert decode_message('{"id": 1, "method": "m", "params": [1]}').params is None

    def test_parse_error(self) -> None:
        with pytest.raises(MalformedRequestError) as exc_info:
            decode_message("not valid json")

        assert exc_info.value.code == -32700

    def test_deep_nesting_is_parse_error(self) -> None:
        with pytest.raises(MalformedRequestError) as exc_info:
            decode_message("[" * 100000)

        assert exc_info.value.code == -32700

    @pytest.mark.parametrize("line", ["[]", "42", '"text"', "null"])
    def test_non_object_is_invalid_request(self, line: str) -> None:
        with pytest.raises(MalformedRequestError) as exc_info:
            decode_message(line)

        assert exc_info.value.code == -32600


class TestJsonRpcResponse:
    """Tests for JsonRpcResponse dataclass."""

    def test_response_is_frozen(self) -> None:
        response = JsonRpcResponse(id=1, result={})

        with pytest.raises(AttributeError):
            response.id = 2  # type: ignore[misc]

    def test_list_result(self) -> None:
        assert JsonRpcResponse(id=1, result=["safe_ls"]).result == ["safe_ls"]


class TestStdioTransport:
    """Tests for StdioTransport class."""

    def _read(self, data: str) -> JsonRpcRequest:
        mock_stdin = io.StringIO(data)

        async def run_test() -> JsonRpcRequest:
            transport = StdioTransport()
            with patch("sys.stdin", mock_stdin):
                return await transport.read_message()

        return asyncio.run(run_test())

    def _write(self, response: JsonRpcResponse) -> dict[str, Any]:
        mock_stdout = io.StringIO()

        async def run_test() -> None:
            transport = StdioTransport()
            with patch("sys.stdout", mock_stdout):
                await transport.write_response(response)

        asyncio.run(run_test())
        output = mock_stdout.getvalue()
        assert output.endswith("\n")
        assert output.count("\n") == 1
        return json.loads(output)

    def test_read_message_parses_valid_json_rpc(self) -> None:
        input_data = {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}}

        result = self._read(json.dumps(input_data) + "\n")

        assert result == JsonRpcRequest(method="initialize", id=1, params={})

    def test_read_message_raises_on_deep_nesting(self) -> None:
        with pytest.raises(MalformedRequestError):
            self._read("[" * 100000 + "\n")

    def test_read_message_skips_blank_lines(self) -> None:
        result = self._read('\n   \n{"id": 3, "method": "tools/list"}\n')

        assert result.method == "tools/list"
        assert result.id == 3

    def test_read_message_raises_eof_on_empty_input(self) -> None:
        with pytest.raises(EOFError, match="stdin closed"):
            self._read("")

    def test_read_message_raises_on_invalid_json(self) -> None:
        with pytest.raises(MalformedRequestError):
            self._read("not valid json\n")

    def test_write_response_formats_result(self) -> None:
        parsed = self._write(JsonRpcResponse(id=1, result=["safe_ls", "safe_pwd"]))

        assert parsed == {"jsonrpc": "2.0", "id": 1, "result": ["safe_ls", "safe_pwd"]}

    def test_write_response_formats_error(self) -> None:
        parsed = self._write(
            JsonRpcResponse(id=None, error={"code": -32700, "message": "Parse error"})
        )

        assert parsed == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32700, "message": "Parse error"},
        }

    def test_write_response_escapes_newlines(self) -> None:
        parsed = self._write(JsonRpcResponse(id=1, result={"stdout": "a\nb\n"}))

        assert parsed["result"]["stdout"] == "a\nb\n"
