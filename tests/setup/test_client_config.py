"""Tests for client config editing."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from safe_unix.setup.client_config import (
    GATEWAY_KEY,
    SetupError,
    apply_setup,
    detect_unsafe_servers,
    gateway_entry,
    has_gateway,
    load_config,
    write_config,
)


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_config(tmp_path / "absent.json") is None

    def test_reads_object(self, tmp_path: Path) -> None:
        path = tmp_path / "crush.json"
        path.write_text('{"mcpServers": {"a": {"command": "a"}}}')

        assert load_config(path) == {"mcpServers": {"a": {"command": "a"}}}

    @pytest.mark.parametrize(
        "content", ["{not json", "[1, 2]", '{"mcpServers": []}']
    )
    def test_invalid_content(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "crush.json"
        path.write_text(content)

        with pytest.raises(SetupError):
            load_config(path)


class TestDetectUnsafeServers:
    """Tests for detect_unsafe_servers."""

    def test_matches_name_command_or_description(self) -> None:
        servers = {
            "shell": {"command": "mcp-shell"},
            "runner": {"command": "npx", "description": "Execute anything"},
            "fs": {"command": "mcp-FileSystem-server"},
            "weather": {"command": "weather-mcp", "description": "Forecasts"},
            GATEWAY_KEY: gateway_entry(),
        }

        found = detect_unsafe_servers(servers)

        assert [server.name for server in found] == ["shell", "runner", "fs"]
        assert found[0].command == "mcp-shell"

    def test_tolerates_non_object_entries(self) -> None:
        found = detect_unsafe_servers({"bash-tools": "oops", "ok": None})

        assert [server.name for server in found] == ["bash-tools"]
        assert found[0].command == ""


class TestApplySetup:
    """Tests for apply_setup."""

    def test_adds_entry_to_empty_config(self) -> None:
        updated = apply_setup({})

        assert updated == {"mcpServers": {GATEWAY_KEY: gateway_entry()}}

    def test_replaces_entry_and_removes_named_servers(self) -> None:
        config = {
            "theme": "dark",
            "mcpServers": {
                GATEWAY_KEY: {"command": "old"},
                "shell": {"command": "sh-mcp"},
                "weather": {"command": "weather-mcp"},
            },
        }

        updated = apply_setup(config, remove=["shell"])

        assert updated["theme"] == "dark"
        assert updated["mcpServers"] == {
            GATEWAY_KEY: gateway_entry(),
            "weather": {"command": "weather-mcp"},
        }
        assert "shell" in config["mcpServers"]

    def test_has_gateway(self) -> None:
        assert not has_gateway({})
        assert has_gateway(apply_setup({}))


class TestWriteConfig:
    """Tests for write_config."""

    def test_writes_indented_json_with_newline(self, tmp_path: Path) -> None:
        path = tmp_path / "crush.json"

        write_config(path, {"mcpServers": {}})

        content = path.read_text()
        assert content == '{\n  "mcpServers": {}\n}\n'
        assert json.loads(content) == {"mcpServers": {}}

    def test_unwritable_path(self, tmp_path: Path) -> None:
        with pytest.raises(SetupError):
            write_config(tmp_path / "missing-dir" / "crush.json", {})
