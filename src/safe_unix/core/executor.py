"""Run one external program with a literal argument vector.

No policy lives here. The executor never goes through a shell: the
argument vector reaches the child exactly as given.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager, suppress
from dataclasses import dataclass
import os
from typing import Protocol

from safe_unix.core.errors import ExecutionTimeoutError, LaunchFailureError
from safe_unix.core.logger import ExecutorLogger


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Outcome of a single invocation. Produced once, never cached."""

    exit_status: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0


class Executor(Protocol):
    """Anything that can run a command vector and report its outcome."""

    async def execute(
        self,
        command: str,
        args: Sequence[str],
        *,
        environment: Mapping[str, str] | None = None,
    ) -> ExecutionResult:
        ...


class CommandExecutor:
    """Spawn a child per call, drain both pipes, and always reap it.

    Example:
        executor = CommandExecutor(timeout_seconds=10)
        result = await executor.execute("ls", ["-l", "/tmp"])
    """

    def __init__(
        self,
        *,
        timeout_seconds: float | None = 30.0,
        workdir: str | None = None,
        logger: ExecutorLogger | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._workdir = workdir
        self._logger = logger or ExecutorLogger()

    async def execute(
        self,
        command: str,
        args: Sequence[str],
        *,
        environment: Mapping[str, str] | None = None,
    ) -> ExecutionResult:
        """Run `command` with `args` and wait for it to exit.

        Raises:
            LaunchFailureError: The executable is missing or cannot be started
            ExecutionTimeoutError: The child outlived the configured bound
        """
        async with self._spawn(command, args, environment) as process:
            try:
                stdout, stderr = await asyncio.wait_for(
                    process.communicate(), timeout=self._timeout_seconds
                )
            except asyncio.TimeoutError:
                self._logger.timed_out(command, self._timeout_seconds or 0)
                raise ExecutionTimeoutError(
                    command, self._timeout_seconds or 0
                ) from None
            return ExecutionResult(
                exit_status=process.returncode if process.returncode is not None else -1,
                stdout=stdout.decode("utf-8", errors="replace"),
                stderr=stderr.decode("utf-8", errors="replace"),
            )

    @asynccontextmanager
    async def _spawn(
        self,
        command: str,
        args: Sequence[str],
        environment: Mapping[str, str] | None,
    ) -> AsyncIterator[asyncio.subprocess.Process]:
        """Start the child and guarantee it is killed and reaped on exit."""
        env = {**os.environ, **environment} if environment else None
        try:
            process = await asyncio.create_subprocess_exec(
                command,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._workdir,
                env=env,
            )
        except OSError as e:
            self._logger.launch_failed(command, e)
            raise LaunchFailureError(command, e.strerror or str(e)) from e
        except ValueError as e:
            # Embedded NUL bytes in the vector.
            raise LaunchFailureError(command, str(e)) from e

        self._logger.spawned(command, process.pid)
        try:
            yield process
        finally:
            if process.returncode is None:
                with suppress(ProcessLookupError):
                    process.kill()
                await process.wait()
                self._logger.reaped(command, process.pid, process.returncode)
