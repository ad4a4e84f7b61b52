"""Route JSON-RPC requests to handlers."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

# Handler type: async function that takes params dict and returns a JSON value
Handler = Callable[[dict[str, Any]], Awaitable[Any]]


class MethodNotFoundError(Exception):
    """Raised when a method is not registered and no fallback is set."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class RequestRouter:
    """Route JSON-RPC methods to handlers.

    Maps method names (e.g., 'initialize', 'tools/call') to async handler
    functions. Handlers receive the params dict and return a JSON value.
    Methods without a handler go to the fallback, if one is set.

    Example:
        router = RequestRouter(fallback=handle_ping)
        router.register("tools/list", handle_tools_list)
        names = await router.dispatch("tools/list", {})
        ack = await router.dispatch("anything/else", {})
    """

    def __init__(self, fallback: Handler | None = None) -> None:
        self._handlers: dict[str, Handler] = {}
        self._fallback = fallback

    def register(self, method: str, handler: Handler) -> None:
        """Register handler for a JSON-RPC method.

        Args:
            method: The method name (e.g., 'initialize', 'tools/call')
            handler: Async function that takes params and returns a result
        """
        self._handlers[method] = handler

    async def dispatch(self, method: str, params: dict[str, Any]) -> Any:
        """Dispatch request to registered handler.

        Args:
            method: The method name to dispatch to
            params: The params dict from the JSON-RPC request

        Returns:
            The result from the handler

        Raises:
            MethodNotFoundError: If no handler matches and there is no fallback
        """
        handler = self._handlers.get(method, self._fallback)
        if handler is None:
            raise MethodNotFoundError(method)
        return await handler(params)
