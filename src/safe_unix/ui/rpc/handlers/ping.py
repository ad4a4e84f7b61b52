"""Liveness acknowledgement for probes and unrecognised methods."""

from __future__ import annotations

from typing import Any


async def handle_ping(params: dict[str, Any]) -> dict[str, Any]:
    """Answer any request whose method has no dedicated handler."""
    return {"ok": True}
