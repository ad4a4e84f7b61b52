from __future__ import annotations

from dataclasses import dataclass
import os

LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"})


@dataclass(frozen=True, slots=True)
class GatewayConfig:
    """Gateway configuration loaded once at process startup."""

    timeout_seconds: float = 30.0
    max_concurrency: int = 1
    log_level: str = "INFO"
    workdir: str | None = None


def _parse_float(name: str, default: str) -> float:
    raw = os.environ.get(name, default).strip()
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero")
    return value


def _parse_int(name: str, default: str) -> int:
    raw = os.environ.get(name, default).strip()
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ValueError(f"{name} must be at least 1")
    return value


def load_gateway_config_from_env() -> GatewayConfig:
    """Load gateway config from env and validate startup requirements."""
    timeout_seconds = _parse_float("SAFE_UNIX_TIMEOUT_SECONDS", "30")
    max_concurrency = _parse_int("SAFE_UNIX_MAX_CONCURRENCY", "1")

    log_level = os.environ.get("SAFE_UNIX_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            "SAFE_UNIX_LOG_LEVEL must be one of: " + ", ".join(sorted(LOG_LEVELS))
        )

    workdir = os.environ.get("SAFE_UNIX_WORKDIR", "").strip() or None
    if workdir is not None and not os.path.isdir(workdir):
        raise ValueError(f"SAFE_UNIX_WORKDIR is not a directory: {workdir}")

    return GatewayConfig(
        timeout_seconds=timeout_seconds,
        max_concurrency=max_concurrency,
        log_level=log_level,
        workdir=workdir,
    )
