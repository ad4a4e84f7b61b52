"""Resolve an operation, enforce its policy, then run it."""

from __future__ import annotations

from collections.abc import Sequence

from safe_unix.core.errors import (
    ExecutionFailureError,
    PolicyViolationError,
    UnknownOperationError,
)
from safe_unix.core.executor import ExecutionResult, Executor
from safe_unix.core.logger import DispatcherLogger
from safe_unix.policy.catalogue import lookup


class OperationDispatcher:
    """Single entry point from the transport into the policy engine.

    Holds no per-request state, so one instance can serve concurrent
    requests. The executor is only reached after the policy accepted the
    whole argument vector.

    Example:
        dispatcher = OperationDispatcher(CommandExecutor())
        result = await dispatcher.dispatch("safe_ls", ["-l"])
    """

    def __init__(
        self, executor: Executor, logger: DispatcherLogger | None = None
    ) -> None:
        self._executor = executor
        self._logger = logger or DispatcherLogger()

    async def dispatch(self, operation: str, args: Sequence[str]) -> ExecutionResult:
        """Run `operation` with `args` if its policy allows it.

        Args:
            operation: Wire name of the operation (e.g. 'safe_ls')
            args: Caller-supplied argument vector, order preserved

        Returns:
            The ExecutionResult of a zero exit

        Raises:
            UnknownOperationError: `operation` is not in the catalogue
            PolicyViolationError: The vector was refused; nothing was run
            LaunchFailureError: The executable could not be started
            ExecutionTimeoutError: The command outlived its time budget
            ExecutionFailureError: The command exited non-zero
        """
        self._logger.dispatching(operation, args)
        try:
            _, descriptor = lookup(operation)
        except UnknownOperationError:
            self._logger.unknown_operation(operation)
            raise

        try:
            _reject_nul_bytes(args)
            descriptor.validate(args)
        except PolicyViolationError as e:
            self._logger.policy_violation(operation, e.token, e.message)
            raise

        command, argv = descriptor.resolve(args)
        self._logger.invoking(operation, command, argv)
        result = await self._executor.execute(
            command, argv, environment=descriptor.environment or None
        )

        if not result.succeeded:
            self._logger.execution_failed(operation, result.exit_status)
            raise ExecutionFailureError(
                result.exit_status, result.stderr, stdout=result.stdout
            )

        self._logger.completed(operation, len(result.stdout))
        return result


def _reject_nul_bytes(args: Sequence[str]) -> None:
    for token in args:
        if "\x00" in token:
            raise PolicyViolationError(
                f"argument contains a NUL byte: {token!r}", token
            )
