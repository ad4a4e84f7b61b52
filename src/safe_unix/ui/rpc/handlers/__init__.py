"""JSON-RPC method handlers for the gateway server."""

from safe_unix.ui.rpc.handlers.initialize import handle_initialize
from safe_unix.ui.rpc.handlers.ping import handle_ping
from safe_unix.ui.rpc.handlers.tools import ToolCallHandler, handle_tools_list

__all__ = [
    "handle_initialize",
    "handle_ping",
    "ToolCallHandler",
    "handle_tools_list",
]
