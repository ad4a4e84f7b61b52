"""Logging for gateway server components.

Kept apart from the run loop so the loop reads as protocol handling only.
"""

from __future__ import annotations

import loguru
from loguru import logger

from safe_unix.core.errors import GatewayError


class GatewayServerLogger:
    """Handles all logging for GatewayServer."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        self._logger = logger_instance

    def server_starting(self) -> None:
        """Log server startup."""
        self._logger.info("=== Safe Unix Gateway Starting ===")

    def config_loaded(
        self, timeout_seconds: float, max_concurrency: int, workdir: str | None
    ) -> None:
        """Log effective configuration."""
        self._logger.bind(
            timeout_seconds=timeout_seconds,
            max_concurrency=max_concurrency,
            workdir=workdir,
        ).info(
            "Config: timeout={}s max_concurrency={} workdir={}",
            timeout_seconds,
            max_concurrency,
            workdir or "<inherited>",
        )

    def server_initialized(self) -> None:
        """Log server initialized."""
        self._logger.info("Server initialized, starting run loop...")

    def server_stopped(self) -> None:
        """Log server stopped."""
        self._logger.info("=== Safe Unix Gateway Stopped ===")

    def event_loop_starting(self) -> None:
        """Log event loop start."""
        self._logger.info("Gateway server starting event loop")

    def request_dispatching(self, method: str, request_id: int | str | None) -> None:
        """Log request dispatch."""
        self._logger.bind(method=method, request_id=request_id).info(
            "Dispatching {} (id={})", method, request_id
        )

    def request_completed(self, method: str, request_id: int | str | None) -> None:
        """Log request completion."""
        self._logger.bind(method=method, request_id=request_id).info(
            "Handler completed for {} (id={})", method, request_id
        )

    def request_refused(
        self, method: str, request_id: int | str | None, error: GatewayError
    ) -> None:
        """Log a classified failure. These are expected, so no traceback."""
        self._logger.bind(
            method=method, request_id=request_id, kind=error.kind.value
        ).warning(
            "{} (id={}) failed [{}]: {}", method, request_id, error.kind.value, error
        )

    def handler_error(self, method: str, error: Exception) -> None:
        """Log unexpected handler error with traceback."""
        self._logger.bind(method=method).exception(
            "Handler error for {}: {}", method, error
        )

    def malformed_message(self, error: GatewayError) -> None:
        """Log an undecodable protocol line."""
        self._logger.warning("Malformed message: {}", error)

    def unreadable_message(self, error: Exception) -> None:
        """Log an unexpected failure while reading a message, with traceback."""
        self._logger.exception("Unreadable message: {}", error)

    def request_cancelled(self, request_id: int | str) -> None:
        """Log cancellation of an in-flight request."""
        self._logger.bind(request_id=request_id).info(
            "Cancelled request id={}", request_id
        )

    def cancel_unknown(self, request_id: object) -> None:
        """Log a cancellation that matched nothing in flight."""
        self._logger.bind(request_id=request_id).debug(
            "No in-flight request with id={}, ignoring cancel", request_id
        )

    def notification_ignored(self, method: str) -> None:
        """Log a notification with no effect."""
        self._logger.bind(method=method).debug("Ignoring notification {}", method)

    def stdin_closed(self) -> None:
        """Log stdin closure."""
        self._logger.info("stdin closed, shutting down")

    def draining(self, pending: int) -> None:
        """Log wait for requests still running at shutdown."""
        self._logger.bind(pending=pending).info(
            "Waiting for {} in-flight request(s)", pending
        )
