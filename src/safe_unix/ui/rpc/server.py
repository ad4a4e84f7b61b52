"""Gateway server: JSON-RPC over stdin/stdout in front of the policy engine.

Reads one request per line, runs each as its own task under a concurrency
bound, and writes exactly one response per request. Notifications are
never answered.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Any

from dotenv import load_dotenv
from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} [{level}] {name}: {message}"


def configure_logging(level: str = "INFO") -> None:
    """Send all logs to stderr. Stdout carries protocol messages only."""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)


configure_logging()

# These imports must be after loguru configuration to capture import-time logs
from safe_unix.core.config import (  # noqa: E402
    GatewayConfig,
    load_gateway_config_from_env,
)
from safe_unix.core.dispatcher import OperationDispatcher  # noqa: E402
from safe_unix.core.errors import (  # noqa: E402
    ErrorKind,
    GatewayError,
    MalformedRequestError,
)
from safe_unix.core.executor import CommandExecutor, Executor  # noqa: E402
from safe_unix.ui.rpc.handlers import (  # noqa: E402
    ToolCallHandler,
    handle_initialize,
    handle_ping,
    handle_tools_list,
)
from safe_unix.ui.rpc.logger import GatewayServerLogger  # noqa: E402
from safe_unix.ui.rpc.router import RequestRouter  # noqa: E402
from safe_unix.ui.rpc.transport import (  # noqa: E402
    PARSE_ERROR,
    JsonRpcRequest,
    JsonRpcResponse,
    StdioTransport,
)

INTERNAL_ERROR = -32603
CANCEL_METHOD = "notifications/cancelled"

# JSON-RPC error code per failure kind
ERROR_CODES: dict[ErrorKind, int] = {
    ErrorKind.EXECUTION_FAILURE: -32000,
    ErrorKind.POLICY_VIOLATION: -32001,
    ErrorKind.UNKNOWN_OPERATION: -32002,
    ErrorKind.LAUNCH_FAILURE: -32003,
    ErrorKind.TIMEOUT: -32004,
}

# Module-level logger for main() function
_module_logger = GatewayServerLogger()


def error_object(error: GatewayError) -> dict[str, Any]:
    """Build the JSON-RPC error member for a classified failure."""
    if isinstance(error, MalformedRequestError):
        code = error.code
    else:
        code = ERROR_CODES[error.kind]
    return {"code": code, "message": error.message, "data": error.to_data()}


class GatewayServer:
    """Policy-enforcing gateway for read-only Unix inspection commands.

    Example:
        server = GatewayServer(load_gateway_config_from_env())
        await server.run()

    The server handles these JSON-RPC methods:
    - initialize: Server identity and the operation catalogue
    - tools/list: Names of all operations
    - tools/call: Validate and run one operation
    - notifications/cancelled: Abort an in-flight request
    Any other request is acknowledged with ``{"ok": true}``.
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        executor: Executor | None = None,
    ) -> None:
        """Initialize the gateway server.

        Args:
            config: Runtime settings. Defaults to GatewayConfig().
            executor: Process runner. Defaults to a CommandExecutor built
                from `config`.
        """
        self._config = config or GatewayConfig()

        if executor is None:
            executor = CommandExecutor(
                timeout_seconds=self._config.timeout_seconds,
                workdir=self._config.workdir,
            )
        self._dispatcher = OperationDispatcher(executor)

        # Initialize transport layer
        self._transport = StdioTransport()

        self._tool_call_handler = ToolCallHandler(self._dispatcher)

        # Unregistered methods get the liveness acknowledgement
        self._router = RequestRouter(fallback=handle_ping)
        self._register_handlers()

        self._semaphore = asyncio.Semaphore(self._config.max_concurrency)
        self._in_flight: dict[int | str, asyncio.Task[None]] = {}
        self._pending: set[asyncio.Task[None]] = set()

        self._logger = GatewayServerLogger()

    def _register_handlers(self) -> None:
        """Register all protocol handlers with the router."""
        self._router.register("initialize", handle_initialize)
        self._router.register("tools/list", handle_tools_list)
        self._router.register("tools/call", self._tool_call_handler.handle_call)

    async def run(self) -> None:
        """Run the main event loop.

        Reads JSON-RPC messages from stdin until it is closed, then waits
        for requests that are still running so every one gets its reply.
        """
        self._logger.event_loop_starting()
        while True:
            try:
                request = await self._transport.read_message()
            except EOFError:
                self._logger.stdin_closed()
                break
            except MalformedRequestError as e:
                self._logger.malformed_message(e)
                await self._transport.write_response(
                    JsonRpcResponse(id=None, error=error_object(e))
                )
                continue
            except Exception as e:
                self._logger.unreadable_message(e)
                await self._transport.write_response(
                    JsonRpcResponse(
                        id=None,
                        error={"code": PARSE_ERROR, "message": f"Parse error: {e}"},
                    )
                )
                continue

            if request.is_notification:
                await self._handle_notification(request)
                continue

            self._start(request)

        if self._pending:
            self._logger.draining(len(self._pending))
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _start(self, request: JsonRpcRequest) -> None:
        task = asyncio.create_task(self._serve(request))
        self._pending.add(task)
        if request.id is not None:
            self._in_flight[request.id] = task

        def _forget(done: asyncio.Task[None]) -> None:
            self._pending.discard(done)
            if request.id is not None and self._in_flight.get(request.id) is done:
                del self._in_flight[request.id]

        task.add_done_callback(_forget)

    async def _serve(self, request: JsonRpcRequest) -> None:
        async with self._semaphore:
            response = await self.handle_request(request)
        await self._transport.write_response(response)

    async def handle_request(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Dispatch one request and build its response. Never raises."""
        try:
            params = request.params or {}
            self._logger.request_dispatching(request.method, request.id)
            result = await self._router.dispatch(request.method, params)
            self._logger.request_completed(request.method, request.id)
            return JsonRpcResponse(id=request.id, result=result)
        except GatewayError as e:
            self._logger.request_refused(request.method, request.id, e)
            return JsonRpcResponse(id=request.id, error=error_object(e))
        except Exception as e:
            self._logger.handler_error(request.method, e)
            return JsonRpcResponse(
                id=request.id,
                error={"code": INTERNAL_ERROR, "message": f"Internal error: {e}"},
            )

    async def _handle_notification(self, request: JsonRpcRequest) -> None:
        if request.method != CANCEL_METHOD:
            self._logger.notification_ignored(request.method)
            return

        request_id = (request.params or {}).get("requestId")
        task = None
        if isinstance(request_id, (int, str)):
            task = self._in_flight.get(request_id)
        if task is None:
            self._logger.cancel_unknown(request_id)
            return

        task.cancel()
        # The executor kills and reaps the child while the task unwinds
        await asyncio.wait({task})
        self._logger.request_cancelled(request_id)


async def main(config: GatewayConfig | None = None) -> None:
    """Entry point for the safe-unix serve command."""
    load_dotenv()
    if config is None:
        config = load_gateway_config_from_env()
    configure_logging(config.log_level)

    _module_logger.server_starting()
    _module_logger.config_loaded(
        config.timeout_seconds, config.max_concurrency, config.workdir
    )
    server = GatewayServer(config)
    _module_logger.server_initialized()
    await server.run()
    _module_logger.server_stopped()


def run() -> None:
    """Synchronous entry point for script invocation."""
    asyncio.run(main())
