"""Handlers for the 'tools/list' and 'tools/call' methods."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, StrictStr, ValidationError

from safe_unix.core.dispatcher import OperationDispatcher
from safe_unix.core.errors import MalformedRequestError
from safe_unix.policy.catalogue import operation_names

INVALID_PARAMS = -32602


class ToolArguments(BaseModel):
    """Arguments object of a 'tools/call' request."""

    args: list[StrictStr] = Field(default_factory=list)


class ToolCallParams(BaseModel):
    """Params of a 'tools/call' request."""

    name: StrictStr
    arguments: ToolArguments | None = None

    @property
    def args(self) -> list[str]:
        return list(self.arguments.args) if self.arguments else []


async def handle_tools_list(params: dict[str, Any]) -> list[str]:
    """Return the wire name of every operation, in catalogue order."""
    return operation_names()


class ToolCallHandler:
    """Validate 'tools/call' params and hand them to the dispatcher.

    The dispatcher's classified errors propagate unchanged; the server
    turns them into JSON-RPC error objects.
    """

    def __init__(self, dispatcher: OperationDispatcher) -> None:
        self._dispatcher = dispatcher

    async def handle_call(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle 'tools/call'.

        Args:
            params: ``{"name": <operation>, "arguments": {"args": [...]}}``

        Returns:
            ``{"stdout", "stderr", "exitStatus"}`` of a successful run

        Raises:
            MalformedRequestError: Params do not have the expected shape
        """
        try:
            call = ToolCallParams.model_validate(params)
        except ValidationError as e:
            raise MalformedRequestError(
                f"Invalid params: {_summarize(e)}", INVALID_PARAMS
            ) from e

        result = await self._dispatcher.dispatch(call.name, call.args)
        return {
            "stdout": result.stdout,
            "stderr": result.stderr,
            "exitStatus": result.exit_status,
        }


def _summarize(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)
