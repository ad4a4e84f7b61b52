"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import pytest

from safe_unix.core.executor import ExecutionResult


class RecordingExecutor:
    """Executor double that records every invocation and never spawns."""

    def __init__(self, result: ExecutionResult | None = None) -> None:
        self.result = result or ExecutionResult(exit_status=0, stdout="", stderr="")
        self.calls: list[tuple[str, list[str], dict[str, str]]] = []

    async def execute(
        self,
        command: str,
        args: Sequence[str],
        *,
        environment: Mapping[str, str] | None = None,
    ) -> ExecutionResult:
        self.calls.append((command, list(args), dict(environment or {})))
        return self.result


@pytest.fixture
def recording_executor() -> RecordingExecutor:
    """An executor that succeeds with empty output and records calls."""
    return RecordingExecutor()
