"""Initialize handler for the gateway protocol.

Handles the 'initialize' JSON-RPC method, the first message exchanged
with a client. The reply announces the server identity and the complete
operation catalogue.
"""

from __future__ import annotations

from typing import Any

from safe_unix import SERVER_NAME, __version__
from safe_unix.policy.catalogue import CATALOGUE, Operation

# Protocol revision this server speaks
PROTOCOL_VERSION = "2024-11-05"


def describe_operations() -> list[dict[str, str]]:
    """Name and description of every operation, in catalogue order."""
    return [
        {"name": operation.value, "description": CATALOGUE[operation].description}
        for operation in Operation
    ]


async def handle_initialize(params: dict[str, Any]) -> dict[str, Any]:
    """Handle the 'initialize' request.

    Args:
        params: Request parameters. Client info and capabilities are
            accepted but do not change the reply.

    Returns:
        Response dict containing:
            - protocolVersion: The protocol revision this server speaks
            - serverInfo: Server name and version
            - capabilities.tools: Every operation with its description
    """
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "serverInfo": {
            "name": SERVER_NAME,
            "version": __version__,
        },
        "capabilities": {
            "tools": describe_operations(),
        },
    }
