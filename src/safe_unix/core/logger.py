"""Logging for the dispatch engine, kept apart from policy logic."""

from __future__ import annotations

from collections.abc import Sequence

import loguru
from loguru import logger


class DispatcherLogger:
    """Handles all logging for OperationDispatcher."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        self._logger = logger_instance

    def dispatching(self, operation: str, args: Sequence[str]) -> None:
        """Log an incoming dispatch at debug level."""
        self._logger.bind(operation=operation, args=list(args)).debug(
            "Dispatching {} with {} argument(s)", operation, len(args)
        )

    def unknown_operation(self, operation: str) -> None:
        """Log a request for an operation outside the catalogue."""
        self._logger.bind(operation=operation).warning(
            "Unknown operation: {}", operation
        )

    def policy_violation(self, operation: str, token: str, message: str) -> None:
        """Log a refused argument vector."""
        self._logger.bind(operation=operation, token=token).warning(
            "Policy violation for {}: {}", operation, message
        )

    def invoking(self, operation: str, command: str, args: Sequence[str]) -> None:
        """Log the exact vector handed to the executor."""
        self._logger.bind(operation=operation, command=command).info(
            "Invoking {} for {}: {!r}", command, operation, list(args)
        )

    def execution_failed(self, operation: str, exit_status: int) -> None:
        """Log a non-zero exit."""
        self._logger.bind(operation=operation, exit_status=exit_status).info(
            "{} exited with status {}", operation, exit_status
        )

    def completed(self, operation: str, stdout_len: int) -> None:
        """Log a successful invocation."""
        self._logger.bind(operation=operation, stdout_len=stdout_len).info(
            "{} completed, {} chars of output", operation, stdout_len
        )


class ExecutorLogger:
    """Handles all logging for CommandExecutor."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        self._logger = logger_instance

    def spawned(self, command: str, pid: int) -> None:
        """Log child process creation."""
        self._logger.bind(command=command, pid=pid).debug(
            "Spawned {} (pid={})", command, pid
        )

    def launch_failed(self, command: str, error: OSError) -> None:
        """Log a failure to start the executable."""
        self._logger.bind(command=command).warning(
            "Failed to launch {}: {}", command, error
        )

    def timed_out(self, command: str, timeout_seconds: float) -> None:
        """Log a child killed for exceeding its time budget."""
        self._logger.bind(command=command).warning(
            "{} timed out after {}s, killing", command, timeout_seconds
        )

    def reaped(self, command: str, pid: int, returncode: int | None) -> None:
        """Log a child killed and reaped on an abnormal exit path."""
        self._logger.bind(command=command, pid=pid).debug(
            "Reaped {} (pid={}, returncode={})", command, pid, returncode
        )
