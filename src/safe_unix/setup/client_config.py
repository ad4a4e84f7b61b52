"""Register the gateway in an MCP client's JSON config.

The client config holds an ``mcpServers`` object keyed by server name. This
module adds (or replaces) the gateway's entry and finds other servers that
look like unrestricted shell or filesystem access so the caller can offer
to remove them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import json
from pathlib import Path
import re
from typing import Any

from loguru import logger

DEFAULT_CONFIG_PATH = Path.home() / ".crush.json"
SERVERS_KEY = "mcpServers"
GATEWAY_KEY = "safe-unix"
GATEWAY_DESCRIPTION = "Safe read-only Unix tools (no destructive operations)"

UNSAFE_PATTERN = re.compile(
    r"unix|shell|bash|command|exec|filesystem|file-system", re.IGNORECASE
)


class SetupError(Exception):
    """Raised when the client config cannot be read, parsed or written."""


@dataclass(frozen=True)
class UnsafeServer:
    """A configured server that appears to expose shell or file access."""

    name: str
    command: str


def load_config(path: Path) -> dict[str, Any] | None:
    """Read the client config, or return None if the file does not exist.

    Raises:
        SetupError: The file is unreadable, not JSON, or not a JSON object
    """
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SetupError(f"Error reading config {path}: {e}") from e
    if not isinstance(data, dict):
        raise SetupError(f"Config {path} must contain a JSON object")
    servers = data.get(SERVERS_KEY)
    if servers is not None and not isinstance(servers, dict):
        raise SetupError(f"'{SERVERS_KEY}' in {path} must be a JSON object")
    return data


def detect_unsafe_servers(servers: Mapping[str, Any]) -> list[UnsafeServer]:
    """Find entries whose name, command or description matches UNSAFE_PATTERN.

    The gateway's own entry is never reported.
    """
    found: list[UnsafeServer] = []
    for name, entry in servers.items():
        if name == GATEWAY_KEY:
            continue
        entry = entry if isinstance(entry, dict) else {}
        command = str(entry.get("command") or "")
        description = str(entry.get("description") or "")
        if any(UNSAFE_PATTERN.search(text) for text in (name, command, description)):
            found.append(UnsafeServer(name=name, command=command))
    return found


def gateway_entry() -> dict[str, Any]:
    """Config entry that launches the gateway over stdio."""
    return {
        "command": "safe-unix",
        "args": ["serve"],
        "transport": "stdio",
        "description": GATEWAY_DESCRIPTION,
    }


def apply_setup(
    config: Mapping[str, Any], remove: Iterable[str] = ()
) -> dict[str, Any]:
    """Return a copy of `config` with the gateway registered.

    Servers named in `remove` are dropped. Other top-level keys and other
    servers are left as they are.
    """
    updated = dict(config)
    servers = dict(updated.get(SERVERS_KEY) or {})
    for name in remove:
        servers.pop(name, None)
    servers[GATEWAY_KEY] = gateway_entry()
    updated[SERVERS_KEY] = servers
    return updated


def has_gateway(config: Mapping[str, Any]) -> bool:
    return GATEWAY_KEY in (config.get(SERVERS_KEY) or {})


def write_config(path: Path, config: Mapping[str, Any]) -> None:
    """Write `config` as indented JSON with a trailing newline.

    Raises:
        SetupError: The file cannot be written
    """
    content = json.dumps(config, indent=2) + "\n"
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise SetupError(f"Error writing config {path}: {e}") from e
    logger.bind(path=str(path)).info("Wrote client config to {}", path)
