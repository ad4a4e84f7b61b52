"""Classified failures raised by the dispatch engine.

Every failure that reaches the caller is one of these. The server turns them
into JSON-RPC error objects; none of them terminate the process.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure classification visible to the caller."""

    UNKNOWN_OPERATION = "unknown_operation"
    POLICY_VIOLATION = "policy_violation"
    LAUNCH_FAILURE = "launch_failure"
    EXECUTION_FAILURE = "execution_failure"
    TIMEOUT = "timeout"
    MALFORMED_REQUEST = "malformed_request"


class GatewayError(Exception):
    """Base class for classified gateway failures."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_data(self) -> dict[str, Any]:
        """Structured detail attached to the JSON-RPC error object."""
        return {"kind": self.kind.value}


class UnknownOperationError(GatewayError):
    """Raised when an operation name is not in the catalogue."""

    kind = ErrorKind.UNKNOWN_OPERATION

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"unknown tool: {operation}")


class PolicyViolationError(GatewayError):
    """Raised when an argument vector fails validation.

    `token` names the offending argument so the caller can correct the
    request. It is empty when the violation is the absence of something
    (a missing listing flag, a missing sub-command).
    """

    kind = ErrorKind.POLICY_VIOLATION

    def __init__(self, message: str, token: str = "") -> None:
        self.token = token
        super().__init__(message)

    def to_data(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "token": self.token}


class LaunchFailureError(GatewayError):
    """Raised when the underlying executable cannot be started."""

    kind = ErrorKind.LAUNCH_FAILURE

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        super().__init__(f"failed to launch {command}: {reason}")


class ExecutionFailureError(GatewayError):
    """Raised when the underlying command ran and exited non-zero."""

    kind = ErrorKind.EXECUTION_FAILURE

    def __init__(self, exit_status: int, stderr: str, stdout: str = "") -> None:
        self.exit_status = exit_status
        self.stderr = stderr
        self.stdout = stdout
        super().__init__(stderr or f"exit {exit_status}")

    def to_data(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "exitStatus": self.exit_status,
            "stdout": self.stdout,
        }


class ExecutionTimeoutError(GatewayError):
    """Raised when the underlying command outlives its time budget."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, command: str, timeout_seconds: float) -> None:
        self.command = command
        self.timeout_seconds = timeout_seconds
        super().__init__(f"{command} timed out after {timeout_seconds:g}s")


class MalformedRequestError(GatewayError):
    """Raised when a protocol message cannot be decoded or has bad params.

    `code` is the JSON-RPC error code to answer with (-32700 parse error,
    -32600 invalid request, -32602 invalid params).
    """

    kind = ErrorKind.MALFORMED_REQUEST

    def __init__(self, message: str, code: int = -32600) -> None:
        self.code = code
        super().__init__(message)
