"""JSON-RPC transport over stdin/stdout for the gateway server."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import json
import sys
from typing import Any

from loguru import logger

from safe_unix.core.errors import MalformedRequestError

PARSE_ERROR = -32700
INVALID_REQUEST = -32600


@dataclass(frozen=True)
class JsonRpcRequest:
    """JSON-RPC 2.0 request message.

    Requests include an `id` and expect a response. Messages without an
    `id` member are notifications and are never answered.
    """

    method: str
    id: int | str | None = None
    params: dict[str, Any] | None = None
    jsonrpc: str = field(default="2.0")
    is_notification: bool = False


@dataclass(frozen=True)
class JsonRpcResponse:
    """JSON-RPC 2.0 response message.

    Sent in reply to a request with matching `id`. `result` may be any
    JSON value, including a list.
    """

    id: int | str | None
    result: Any = None
    error: dict[str, Any] | None = None
    jsonrpc: str = field(default="2.0")


def decode_message(line: str) -> JsonRpcRequest:
    """Decode one protocol line into a request.

    Raises:
        MalformedRequestError: The line is not JSON, or not a JSON object
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise MalformedRequestError(f"Parse error: {e.msg}", PARSE_ERROR) from e
    except (ValueError, RecursionError) as e:
        # Nesting deeper than the interpreter stack, or numbers too long
        raise MalformedRequestError(f"Parse error: {e}", PARSE_ERROR) from e
    if not isinstance(data, dict):
        raise MalformedRequestError(
            "Invalid Request: expected a JSON object", INVALID_REQUEST
        )
    request_id = data.get("id")
    if not isinstance(request_id, (int, str)) or isinstance(request_id, bool):
        request_id = None
    params = data.get("params")
    return JsonRpcRequest(
        method=str(data.get("method", "")),
        id=request_id,
        params=params if isinstance(params, dict) else None,
        jsonrpc=str(data.get("jsonrpc", "2.0")),
        is_notification="id" not in data,
    )


class StdioTransport:
    """Bidirectional JSON-RPC transport via stdin/stdout.

    Each message is a single line of JSON. Blank lines are skipped.
    Uses run_in_executor for blocking stdin reads to avoid
    complications with async pipe setup on all platforms.

    Writes are serialized with a lock so that responses from concurrently
    running requests never interleave on stdout.
    """

    def __init__(self) -> None:
        self._write_lock = asyncio.Lock()

    async def read_message(self) -> JsonRpcRequest:
        """Read next JSON-RPC request from stdin.

        Raises EOFError if stdin is closed, or MalformedRequestError if the
        line is not a JSON object.
        """
        loop = asyncio.get_running_loop()
        while True:
            line: str = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                logger.debug("stdin closed (empty read)")
                raise EOFError("stdin closed")
            if line.strip():
                break
        logger.debug("RECV: {}", line.strip()[:500])
        request = decode_message(line)
        logger.info("← Request: method={} id={}", request.method, request.id)
        return request

    async def write_response(self, response: JsonRpcResponse) -> None:
        """Write JSON-RPC response to stdout.

        Serializes the response as JSON and writes it as a single
        line to stdout, followed by flush.
        """
        payload: dict[str, Any] = {
            "jsonrpc": response.jsonrpc,
            "id": response.id,
        }
        if response.error is not None:
            payload["error"] = response.error
        else:
            payload["result"] = response.result
        line = json.dumps(payload) + "\n"
        logger.info("→ Response: id={} error={}", response.id, response.error)
        logger.debug("SEND: {}", line.strip()[:500])
        async with self._write_lock:
            sys.stdout.write(line)
            sys.stdout.flush()
