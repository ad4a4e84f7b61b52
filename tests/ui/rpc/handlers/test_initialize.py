"""Tests for the initialize handler."""

from __future__ import annotations

import asyncio

from safe_unix import SERVER_NAME, __version__
from safe_unix.policy import operation_names
from safe_unix.ui.rpc.handlers.initialize import (
    PROTOCOL_VERSION,
    describe_operations,
    handle_initialize,
)


class TestHandleInitialize:
    """Tests for handle_initialize."""

    def test_returns_server_info(self) -> None:
        result = asyncio.run(handle_initialize({}))

        assert result["protocolVersion"] == PROTOCOL_VERSION
        assert result["serverInfo"] == {"name": SERVER_NAME, "version": __version__}

    def test_announces_every_operation(self) -> None:
        result = asyncio.run(handle_initialize({"protocolVersion": "2024-11-05"}))

        tools = result["capabilities"]["tools"]
        assert [tool["name"] for tool in tools] == operation_names()
        assert all(tool["description"] for tool in tools)

    def test_client_params_do_not_change_reply(self) -> None:
        plain = asyncio.run(handle_initialize({}))
        with_client = asyncio.run(
            handle_initialize({"clientInfo": {"name": "crush"}, "capabilities": {}})
        )

        assert plain == with_client


class TestDescribeOperations:
    """Tests for describe_operations."""

    def test_git_description_lists_subcommands(self) -> None:
        git = next(tool for tool in describe_operations() if tool["name"] == "safe_git")

        assert "status" in git["description"]
